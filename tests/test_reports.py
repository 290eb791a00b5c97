from policyreporter.reports import (
    STATUS_FAIL,
    PolicyReport,
    Resource,
    Result,
    Summary,
)


def test_cluster_report_is_cluster_scoped():
    report = PolicyReport(name="cluster-policy-report")
    assert report.is_cluster_scoped is True
    assert report.id == "cluster-policy-report"


def test_namespaced_report_is_not_cluster_scoped():
    report = PolicyReport(name="policy-report", namespace="test")
    assert report.is_cluster_scoped is False


def test_ids_differ_between_namespaces():
    first = PolicyReport(name="policy-report", namespace="test")
    second = PolicyReport(name="policy-report", namespace="kyverno")
    cluster = PolicyReport(name="policy-report")
    assert len({first.id, second.id, cluster.id}) == 3


def test_id_is_stable_for_equal_reports():
    first = PolicyReport(name="policy-report", namespace="test")
    second = PolicyReport(name="policy-report", namespace="test", results=[Result()])
    assert first.id == second.id


def test_source_comes_from_first_result():
    report = PolicyReport(
        name="policy-report",
        namespace="test",
        results=[Result(source="Kyverno"), Result(source="test")],
    )
    assert report.source == "Kyverno"


def test_source_of_empty_report_is_empty():
    assert PolicyReport(name="empty-policy-report", namespace="test").source == ""


def test_mutable_defaults_are_independent():
    first = Result()
    second = Result()
    first.properties["version"] = "1.2.0"
    first.resources.append(Resource(kind="Deployment", name="nginx"))
    assert second.properties == {}
    assert second.resources == []


def test_summary_defaults_and_values():
    summary = Summary(fail=3)
    assert summary.fail == 3
    assert (summary.pass_, summary.skip, summary.warn, summary.error) == (0, 0, 0, 0)


def test_result_keeps_given_fields():
    result = Result(
        message="message",
        result=STATUS_FAIL,
        policy="required-label",
        rule="app-label-required",
        timestamp=1614093000,
        resources=[Resource(api_version="v1", kind="Deployment", name="nginx", namespace="test")],
    )
    assert result.result == STATUS_FAIL
    assert result.resources[0].name == "nginx"
    assert result.timestamp == 1614093000