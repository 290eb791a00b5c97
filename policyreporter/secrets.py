"""Reading target credentials from named secrets."""

from __future__ import annotations

import random
import time
from collections.abc import Callable, Mapping
from dataclasses import dataclass, fields
from typing import Union

SecretData = Mapping[str, Union[bytes, str]]

# Fields whose stored key ends in an upper-case "ID" rather than "Id".
_UPPER_ID_FIELDS = frozenset({"access_key_id", "account_id"})


class SecretNotFoundError(LookupError):
    """The requested secret does not exist."""


class RetryableError(Exception):
    """A transient failure such as a timeout or an unavailable service."""


def _stored_name(field_name: str) -> str:
    """Key under which a field is stored in the secret data."""
    first, *rest = field_name.split("_")
    name = first + "".join(part.capitalize() for part in rest)
    if field_name in _UPPER_ID_FIELDS:
        name = name[:-2] + "ID"
    return name


@dataclass
class Values:
    """Credential values read from a secret."""

    host: str = ""
    webhook: str = ""
    channel: str = ""
    username: str = ""
    password: str = ""
    access_key_id: str = ""
    secret_access_key: str = ""
    account_id: str = ""
    kms_key_id: str = ""
    token: str = ""
    credentials: str = ""
    database: str = ""
    dsn: str = ""

    @classmethod
    def from_data(cls, data: SecretData) -> Values:
        """Build values from raw secret data, ignoring unknown keys."""
        found = {}
        for f in fields(cls):
            stored = _stored_name(f.name)
            if stored in data:
                raw = data[stored]
                found[f.name] = raw.decode() if isinstance(raw, bytes) else str(raw)
        return cls(**found)


class SecretClient:
    """Fetches secrets by name, retrying transient failures.

    The store is either a mapping of secret names to their data or a
    callable that returns the data for a name. A missing secret raises
    SecretNotFoundError, which is never retried; any other failure is
    retried up to ``attempts`` times in total.
    """

    def __init__(
        self,
        store: Mapping[str, SecretData] | Callable[[str], SecretData],
        attempts: int = 5,
        delay: float = 0.01,
        jitter: float = 0.1,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if attempts < 1:
            raise ValueError("attempts must be at least 1")
        self._store = store
        self._attempts = attempts
        self._delay = delay
        self._jitter = jitter
        self._sleep = sleep

    def _fetch(self, name: str) -> SecretData:
        if callable(self._store):
            return self._store(name)
        try:
            return self._store[name]
        except KeyError:
            raise SecretNotFoundError(f'secret "{name}" not found') from None

    def get(self, name: str) -> Values:
        """Return the values of the named secret."""
        for attempt in range(1, self._attempts + 1):
            try:
                data = self._fetch(name)
            except SecretNotFoundError:
                raise
            except Exception:
                if attempt == self._attempts:
                    raise
                wait = self._delay
                if self._jitter > 0:
                    wait += self._delay * random.uniform(0, self._jitter)
                self._sleep(wait)
            else:
                return Values.from_data(data)
        raise AssertionError("unreachable")