"""Summary e-mails: result counts per source, cluster and namespace."""

from __future__ import annotations

import os
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from datetime import datetime
from typing import Union

import jinja2

from policyreporter.mail import Filter, Report
from policyreporter.reports import PolicyReport, Summary

ReportSource = Union[Callable[[], Iterable[PolicyReport]], Iterable[PolicyReport]]

TEMPLATE_NAME = "summary.html"


@dataclass
class ScopeSummary:
    """Accumulated counts of results per status within one scope."""

    skip: int = 0
    pass_: int = 0
    warn: int = 0
    fail: int = 0
    error: int = 0

    def add(self, summary: Summary) -> None:
        self.skip += summary.skip
        self.pass_ += summary.pass_
        self.warn += summary.warn
        self.fail += summary.fail
        self.error += summary.error


@dataclass
class Source:
    """Summaries of all reports that share one source."""

    name: str
    cluster_reports: bool = False
    cluster_scope_summary: ScopeSummary = field(default_factory=ScopeSummary)
    namespace_scope_summary: dict[str, ScopeSummary] = field(default_factory=dict)

    def add_cluster_summary(self, summary: Summary) -> None:
        """Add the counts of a cluster scoped report."""
        self.cluster_scope_summary.add(summary)

    def add_namespaced_summary(self, ns: str, summary: Summary) -> None:
        """Add the counts of a report in namespace ns."""
        self.namespace_scope_summary.setdefault(ns, ScopeSummary()).add(summary)


def _list_reports(reports: ReportSource) -> list[PolicyReport]:
    return list(reports() if callable(reports) else reports)


@dataclass
class Generator:
    """Collects summaries per source from a set of policy reports.

    ``reports`` is either an iterable of reports or a callable returning
    one; errors raised while listing propagate to the caller.
    """

    reports: ReportSource
    filter: Filter
    cluster_reports: bool = False

    def generate_data(self) -> list[Source]:
        reports = _list_reports(self.reports)
        sources: dict[str, Source] = {}

        def source_for(name: str) -> Source:
            if name not in sources:
                sources[name] = Source(name, self.cluster_reports)
            return sources[name]

        if self.cluster_reports:
            for report in reports:
                if not report.is_cluster_scoped or not report.results:
                    continue
                name = report.source
                if not self.filter.validate_source(name):
                    continue
                source_for(name).add_cluster_summary(report.summary)

        for report in reports:
            if report.is_cluster_scoped or not report.results:
                continue
            if not self.filter.validate_namespace(report.namespace):
                continue
            name = report.source
            if not self.filter.validate_source(name):
                continue
            source_for(name).add_namespaced_summary(report.namespace, report.summary)

        return list(sources.values())


def filter_sources(sources: Iterable[Source], filter: Filter, cluster_reports: bool) -> list[Source]:
    """Apply filter to already generated sources, dropping empty ones."""
    filtered = []
    for source in sources:
        if not filter.validate_source(source.name):
            continue
        new_source = Source(source.name, cluster_reports)
        if cluster_reports:
            new_source.cluster_scope_summary = source.cluster_scope_summary
        new_source.namespace_scope_summary = {
            ns: summary
            for ns, summary in source.namespace_scope_summary.items()
            if filter.validate_namespace(ns)
        }
        if not cluster_reports and not new_source.namespace_scope_summary:
            continue
        filtered.append(new_source)
    return filtered


def _report_title(prefix: str, kind: str, cluster_name: str) -> str:
    cluster = f" on {cluster_name} " if cluster_name else " "
    return f"{prefix} ({kind}){cluster}from {datetime.now().strftime('%Y-%m-%d')}"


@dataclass
class Reporter:
    """Renders summary sources into an e-mail report."""

    template_dir: str | os.PathLike[str]
    cluster_name: str = ""
    title_prefix: str = ""

    def report(self, sources: list[Source], format: str) -> Report:
        """Render the summary template; raises jinja2 errors on failure."""
        env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(os.fspath(self.template_dir)),
            autoescape=True,
        )
        message = env.get_template(TEMPLATE_NAME).render(
            sources=sources,
            cluster_name=self.cluster_name,
            title_prefix=self.title_prefix,
        )
        return Report(
            title=_report_title(self.title_prefix, "summary", self.cluster_name),
            message=message,
            format=format,
            cluster_name=self.cluster_name,
        )