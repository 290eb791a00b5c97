"""E-mail delivery of reports, filters and status colours."""

from __future__ import annotations

import fnmatch
import smtplib
import ssl
from dataclasses import dataclass
from email.message import EmailMessage
from enum import Enum

from policyreporter.helpers import contains
from policyreporter.reports import STATUS_ERROR, STATUS_FAIL, STATUS_PASS, STATUS_WARN

PASS_COLOR = "#198754"
WARN_COLOR = "#fd7e14"
FAIL_COLOR = "#dc3545"
ERROR_COLOR = "#b02a37"
DEFAULT_COLOR = "#cccccc"


class Encryption(Enum):
    NONE = "none"
    SSL_TLS = "ssl/tls"
    STARTTLS = "starttls"


def encryption_from_string(enc: str) -> Encryption:
    """Map a configuration value to an Encryption, defaulting to NONE."""
    lowered = enc.lower()
    if lowered == "ssl/tls":
        return Encryption.SSL_TLS
    if lowered == "starttls":
        return Encryption.STARTTLS
    return Encryption.NONE


@dataclass
class SMTPServer:
    """Connection settings of an SMTP server."""

    host: str
    port: int = 25
    username: str = ""
    password: str | None = None
    encryption: Encryption = Encryption.NONE
    timeout: float = 10.0


@dataclass
class Report:
    """A rendered report ready to be sent."""

    title: str = ""
    message: str = ""
    format: str = ""
    cluster_name: str = ""


@dataclass
class Client:
    """Sends reports through an SMTP server."""

    sender: str
    server: SMTPServer | None

    def _connect(self) -> smtplib.SMTP:
        server = self.server
        if server is None:
            raise ValueError("no SMTP server configured")
        if server.encryption is Encryption.SSL_TLS:
            conn: smtplib.SMTP = smtplib.SMTP_SSL(
                server.host,
                server.port,
                timeout=server.timeout,
                context=ssl.create_default_context(),
            )
        else:
            conn = smtplib.SMTP(server.host, server.port, timeout=server.timeout)
            if server.encryption is Encryption.STARTTLS:
                conn.starttls(context=ssl.create_default_context())
        if server.username:
            conn.login(server.username, server.password or "")
        return conn

    def _build_message(self, report: Report, to: list[str]) -> EmailMessage:
        if not self.sender:
            raise ValueError("missing sender address")
        if not to:
            raise ValueError("missing recipient addresses")
        msg = EmailMessage()
        msg["From"] = f"Policy Reporter <{self.sender}>"
        msg["To"] = ", ".join(to)
        msg["Subject"] = report.title
        subtype = "html" if report.format.lower() in ("html", "") else "plain"
        msg.set_content(report.message, subtype=subtype)
        return msg

    def send(self, report: Report, to: list[str]) -> None:
        """Send the report to all given recipients."""
        to = list(to)
        msg = self._build_message(report, to)
        conn = self._connect()
        try:
            conn.send_message(msg, from_addr=self.sender, to_addrs=to)
        finally:
            conn.quit()


@dataclass(frozen=True)
class Filter:
    """Include and exclude rules for namespaces and sources."""

    namespace_include: tuple[str, ...] = ()
    namespace_exclude: tuple[str, ...] = ()
    source_include: tuple[str, ...] = ()
    source_exclude: tuple[str, ...] = ()

    def validate_source(self, source: str) -> bool:
        if self.source_include:
            return contains(source, self.source_include)
        if self.source_exclude:
            return not contains(source, self.source_exclude)
        return True

    def validate_namespace(self, namespace: str) -> bool:
        if not namespace:
            return True
        if self.namespace_include:
            return any(fnmatch.fnmatchcase(namespace, p) for p in self.namespace_include)
        if self.namespace_exclude:
            return not any(fnmatch.fnmatchcase(namespace, p) for p in self.namespace_exclude)
        return True


def color_from_status(status: str) -> str:
    """Return the display colour for a result status."""
    return {
        STATUS_PASS: PASS_COLOR,
        STATUS_WARN: WARN_COLOR,
        STATUS_FAIL: FAIL_COLOR,
        STATUS_ERROR: ERROR_COLOR,
    }.get(status, DEFAULT_COLOR)