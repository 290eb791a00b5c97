from datetime import datetime

import jinja2
import pytest

from policyreporter.mail import Filter
from policyreporter.reports import PolicyReport, Resource, Result, Summary
from policyreporter.summary import (
    Generator,
    Reporter,
    ScopeSummary,
    Source,
    filter_sources,
)

TS = 1614093000
ALL = Filter()


def _default_report():
    return PolicyReport(
        name="policy-report",
        namespace="test",
        summary=Summary(fail=3),
        results=[
            Result(
                message="message", result="fail", scored=True, policy="required-label",
                rule="app-label-required", timestamp=TS, source="test", category="test",
                severity="high",
                resources=[Resource("v1", "Deployment", "nginx", "test", "uid-1")],
                properties={"version": "1.2.0"},
            ),
            Result(message="message 2", result="fail", scored=True,
                   policy="priority-test", timestamp=TS),
            Result(
                message="message 3", result="fail", scored=True, policy="required-label",
                rule="app-label-required", timestamp=TS, source="test", category="test",
                severity="high",
                resources=[Resource("v1", "Deployment", "name", "test", "uid-2")],
                properties={"version": "1.2.0"},
            ),
        ],
    )


def _kyverno_report():
    return PolicyReport(
        name="kyverno-policy-report",
        namespace="kyverno",
        summary=Summary(pass_=1, warn=1),
        results=[
            Result(message="message", result="pass", scored=True, policy="required-limit",
                   rule="resource-limit-required", source="Kyverno",
                   resources=[Resource("v1", "Deployment", "nginx", "kyverno", "uid-3")]),
            Result(message="message", result="warn", scored=True, policy="required-limit",
                   rule="resource-limit-required", source="Kyverno",
                   resources=[Resource("v1", "Deployment", "nginx2", "kyverno", "uid-4")]),
        ],
    )


def _cluster_report():
    return PolicyReport(
        name="cluster-policy-report",
        summary=Summary(fail=4),
        results=[
            Result(message="message", result="fail", scored=True,
                   policy="cluster-required-label", rule="ns-label-required",
                   source="test",
                   resources=[Resource("v1", "Namespace", "policy-reporter", "test", "uid-5")]),
        ],
    )


def _kyverno_cluster_report():
    return PolicyReport(
        name="kyverno-cluster-policy-report",
        summary=Summary(fail=1),
        results=[
            Result(message="message", result="fail", scored=True,
                   policy="cluster-required-quota", rule="ns-quota-required",
                   source="Kyverno",
                   resources=[Resource("v1", "Namespace", "kyverno", "", "uid-6")]),
        ],
    )


def _all_reports():
    return [
        _default_report(),
        PolicyReport(name="empty-policy-report", namespace="test"),
        _kyverno_report(),
        _cluster_report(),
        PolicyReport(name="empty-cluster-policy-report"),
        _kyverno_cluster_report(),
    ]


def _by_name(sources, name):
    return next(s for s in sources if s.name == name)


def test_generate_data_with_single_source():
    data = Generator([_default_report(), _cluster_report()], ALL, True).generate_data()
    assert len(data) == 1
    source = data[0]
    assert source.name == "test"
    assert source.cluster_scope_summary.fail == 4
    assert source.namespace_scope_summary["test"].fail == 3


def test_generate_data_with_multiple_sources():
    data = Generator(_all_reports(), ALL, True).generate_data()
    assert sorted(s.name for s in data) == ["Kyverno", "test"]


def test_generate_data_accepts_callable():
    data = Generator(_all_reports, ALL, True).generate_data()
    assert len(data) == 2


def test_generate_data_with_source_filter():
    data = Generator(_all_reports(), Filter(source_include=("test",)), True).generate_data()
    assert [s.name for s in data] == ["test"]


def test_generate_data_without_cluster_reports_ignores_cluster_scope():
    data = Generator(_all_reports(), ALL, False).generate_data()
    source = _by_name(data, "test")
    assert source.cluster_scope_summary == ScopeSummary()
    assert source.cluster_reports is False


def test_generate_data_propagates_listing_errors():
    def failing():
        raise RuntimeError("list failed")

    with pytest.raises(RuntimeError, match="list failed"):
        Generator(failing, ALL, True).generate_data()


def test_filter_sources_by_source():
    data = Generator(_all_reports(), ALL, True).generate_data()
    data = filter_sources(data, Filter(source_include=("Kyverno",)), True)
    assert [s.name for s in data] == ["Kyverno"]


def test_filter_sources_by_namespace():
    data = Generator(_all_reports(), ALL, True).generate_data()
    data = filter_sources(data, Filter(namespace_exclude=("kyverno",)), True)
    assert len(data) == 2
    source = _by_name(data, "Kyverno")
    assert "kyverno" not in source.namespace_scope_summary
    assert source.cluster_scope_summary.fail == 1


def test_remove_empty_source():
    data = Generator(_all_reports(), ALL, True).generate_data()
    data = filter_sources(data, Filter(namespace_exclude=("kyverno",)), False)
    assert [s.name for s in data] == ["test"]


def test_source_cluster_reports_flag():
    assert Source("kyverno", True).cluster_reports is True


def test_source_add_cluster_summary():
    source = Source("kyverno", True)
    source.add_cluster_summary(Summary(pass_=1, warn=2, fail=4, error=3))
    assert source.cluster_scope_summary == ScopeSummary(pass_=1, warn=2, fail=4, error=3)


def test_source_add_namespaced_summary():
    source = Source("kyverno", True)
    source.add_namespaced_summary("test", Summary(pass_=5, warn=6, fail=7, error=8))
    ns = source.namespace_scope_summary["test"]
    assert (ns.pass_, ns.warn, ns.fail, ns.error) == (5, 6, 7, 8)

    source.add_namespaced_summary("test", Summary(pass_=2, warn=1, fail=0, error=3))
    ns = source.namespace_scope_summary["test"]
    assert (ns.pass_, ns.warn, ns.fail, ns.error) == (7, 7, 7, 11)


@pytest.fixture
def template_dir(tmp_path):
    (tmp_path / "summary.html").write_text(
        "<h1>{{ title_prefix }} {{ cluster_name }}</h1>"
        "{% for s in sources %}<p>{{ s.name }}:{{ s.cluster_scope_summary.fail }}</p>{% endfor %}"
    )
    return tmp_path


def test_create_report(template_dir):
    data = Generator([_default_report(), _cluster_report()], ALL, True).generate_data()
    report = Reporter(template_dir, "Cluster", "Report").report(data, "html")
    assert "<p>test:4</p>" in report.message
    assert "<h1>Report Cluster</h1>" in report.message
    assert report.cluster_name == "Cluster"
    expected = "Report (summary) on Cluster from " + datetime.now().strftime("%Y-%m-%d")
    assert report.title == expected
    assert report.format == "html"


def test_report_title_without_cluster(template_dir):
    report = Reporter(template_dir, "", "Report").report([], "text")
    assert report.title == "Report (summary) from " + datetime.now().strftime("%Y-%m-%d")
    assert report.format == "text"


def test_report_escapes_html(template_dir):
    report = Reporter(template_dir, "<b>", "Report").report([], "html")
    assert "&lt;b&gt;" in report.message


def test_report_missing_template(tmp_path):
    with pytest.raises(jinja2.TemplateNotFound):
        Reporter(tmp_path, "Cluster", "Report").report([], "html")