"""Violation e-mails: failing results per source, cluster and namespace."""

from __future__ import annotations

import os
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from datetime import datetime
from typing import Union

import jinja2

from policyreporter.mail import Filter, Report, color_from_status
from policyreporter.reports import (
    STATUS_ERROR,
    STATUS_FAIL,
    STATUS_PASS,
    STATUS_SKIP,
    STATUS_WARN,
    PolicyReport,
    Result,
)

ReportSource = Union[Callable[[], Iterable[PolicyReport]], Iterable[PolicyReport]]

TEMPLATE_NAME = "violations.html"
VIOLATION_STATUSES = (STATUS_WARN, STATUS_FAIL, STATUS_ERROR)


@dataclass(frozen=True)
class Violation:
    """One failing result for one resource."""

    policy: str = ""
    rule: str = ""
    kind: str = ""
    name: str = ""
    status: str = ""


def map_result(result: Result) -> list[Violation]:
    """Split a result into one violation per resource it refers to."""
    rule = result.rule or result.message
    if not result.resources:
        return [Violation(policy=result.policy, rule=rule, status=result.result)]
    return [
        Violation(
            policy=result.policy,
            rule=rule,
            kind=resource.kind,
            name=resource.name,
            status=result.result,
        )
        for resource in result.resources
    ]


def _empty_results() -> dict[str, list[Violation]]:
    return {status: [] for status in VIOLATION_STATUSES}


@dataclass
class Source:
    """Violations and pass counts of all reports that share one source."""

    name: str
    cluster_reports: bool = False
    cluster_passed: int = 0
    namespace_passed: dict[str, int] = field(default_factory=dict)
    cluster_results: dict[str, list[Violation]] = field(default_factory=_empty_results)
    namespace_results: dict[str, dict[str, list[Violation]]] = field(default_factory=dict)

    def add_cluster_results(self, results: list[Violation]) -> None:
        """Append violations, grouped by the status of the first one."""
        if not results:
            raise ValueError("no violations to add")
        self.cluster_results.setdefault(results[0].status, []).extend(results)

    def add_cluster_passed(self, count: int) -> None:
        self.cluster_passed += count

    def add_namespaced_passed(self, ns: str, count: int) -> None:
        self.namespace_passed[ns] = self.namespace_passed.get(ns, 0) + count

    def add_namespaced_results(self, ns: str, results: list[Violation]) -> None:
        """Append violations of namespace ns, grouped by the first one's status."""
        if not results:
            raise ValueError("no violations to add")
        status = results[0].status
        if ns in self.namespace_results:
            self.namespace_results[ns].setdefault(status, []).extend(results)
        else:
            by_status = _empty_results()
            by_status[status] = list(results)
            self.namespace_results[ns] = by_status

    def init_results(self, ns: str) -> None:
        """Make sure namespace ns has empty violation lists."""
        self.namespace_results.setdefault(ns, _empty_results())


def _list_reports(reports: ReportSource) -> list[PolicyReport]:
    return list(reports() if callable(reports) else reports)


def _violating(report: PolicyReport) -> Iterable[Result]:
    return (r for r in report.results if r.result not in (STATUS_PASS, STATUS_SKIP))


def _only_passed(report: PolicyReport) -> bool:
    return len(report.results) == report.summary.pass_ + report.summary.skip


@dataclass
class Generator:
    """Collects violations per source from a set of policy reports.

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
                source = source_for(name)
                source.add_cluster_passed(report.summary.pass_)
                if _only_passed(report):
                    continue
                for result in _violating(report):
                    source.add_cluster_results(map_result(result))

        for report in reports:
            if report.is_cluster_scoped or not report.results:
                continue
            name = report.source
            if not self.filter.validate_source(name):
                continue
            if not self.filter.validate_namespace(report.namespace):
                continue
            source = source_for(name)
            source.add_namespaced_passed(report.namespace, report.summary.pass_)
            if _only_passed(report):
                source.init_results(report.namespace)
                continue
            for result in _violating(report):
                source.add_namespaced_results(report.namespace, map_result(result))

        return list(sources.values())


def filter_sources(sources: Iterable[Source], filter: Filter, cluster_reports: bool) -> list[Source]:
    """Apply filter to already generated sources, dropping empty ones."""
    filtered = []
    for source in sources:
        if not filter.validate_source(source.name):
            continue
        new_source = Source(source.name, cluster_reports)
        if cluster_reports:
            new_source.cluster_passed = source.cluster_passed
            new_source.cluster_results = source.cluster_results
        for ns, passed in source.namespace_passed.items():
            if filter.validate_namespace(ns):
                new_source.add_namespaced_passed(ns, passed)
        new_source.namespace_results = {
            ns: results
            for ns, results in source.namespace_results.items()
            if filter.validate_namespace(ns)
        }
        if not cluster_reports and not new_source.namespace_results:
            continue
        filtered.append(new_source)
    return filtered


def _is_separator(char: str) -> bool:
    return not (char.isalnum() or char == "_")


def _title(text: str) -> str:
    """Upper-case the first letter of every word, leaving the rest as is."""
    out = []
    previous = " "
    for char in text:
        out.append(char.upper() if _is_separator(previous) else char)
        previous = char
    return "".join(out)


def _has_violations(results: dict[str, list[Violation]]) -> bool:
    return any(results.get(status) for status in VIOLATION_STATUSES)


def _len_namespace_results(source: Source, ns: str, status: str) -> int:
    return len(source.namespace_results.get(ns, {}).get(status, []))


def _report_title(prefix: str, kind: str, cluster_name: str) -> str:
    cluster = f" on {cluster_name} " if cluster_name else " "
    return f"{prefix} ({kind}){cluster}from {datetime.now().strftime('%Y-%m-%d')}"


@dataclass
class Reporter:
    """Renders violation sources into an e-mail report."""

    template_dir: str | os.PathLike[str]
    cluster_name: str = ""
    title_prefix: str = ""

    def report(self, sources: list[Source], format: str) -> Report:
        """Render the violations template; raises jinja2 errors on failure."""
        env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(os.fspath(self.template_dir)),
            autoescape=True,
        )
        env.globals.update(
            color=color_from_status,
            title=_title,
            has_violations=_has_violations,
            len_namespace_results=_len_namespace_results,
        )
        message = env.get_template(TEMPLATE_NAME).render(
            sources=sources,
            status=list(VIOLATION_STATUSES),
            cluster_name=self.cluster_name,
            title_prefix=self.title_prefix,
        )
        return Report(
            title=_report_title(self.title_prefix, "violations", self.cluster_name),
            message=message,
            format=format,
            cluster_name=self.cluster_name,
        )