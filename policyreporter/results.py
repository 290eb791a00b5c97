"""Result priorities and a catalogue of ready-made policy results."""

from __future__ import annotations

import calendar
import dataclasses
from datetime import datetime, timezone
from enum import Enum

from policyreporter.reports import (
    SEVERITY_HIGH,
    SEVERITY_MEDIUM,
    STATUS_FAIL,
    STATUS_PASS,
    Resource,
    Result,
)


class Priority(str, Enum):
    """Priority of a result, from the lowest to the highest."""

    DEFAULT = ""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


def result_with_priority(result: Result, priority: Priority | str) -> Result:
    """Return a copy of result carrying the given priority.

    Raises ValueError when priority is not a known priority.
    """
    level = Priority(priority)
    return dataclasses.replace(
        result,
        resources=list(result.resources),
        properties=dict(result.properties),
        priority=level.value,
    )


_TARGET_SECONDS = calendar.timegm(
    datetime(2021, 2, 23, 15, 10, 0, tzinfo=timezone.utc).utctimetuple()
)

_REQUESTS_MESSAGE = (
    "validation error: requests and limits required. Rule "
    "autogen-check-for-requests-and-limits failed at path "
    "/spec/template/spec/containers/0/resources/requests/"
)
_LABEL_MESSAGE = (
    "validation error: label required. Rule app-label-required failed at path "
    "/spec/template/spec/containers/0/resources/requests/"
)
_NAMESPACE_MESSAGE = (
    "validation error: The label `test` is required. "
    "Rule check-for-GetLabels()-on-namespace"
)
_REQUESTS_POLICY = "require-requests-and-limits-required"
_REQUESTS_RULE = "autogen-check-for-requests-and-limits"

_DEPLOYMENT = Resource(
    api_version="v1",
    kind="Deployment",
    name="nginx",
    namespace="test",
    uid="536ab69f-1b3c-4bd9-9ba4-274a56188409",
)
_POD = Resource(
    api_version="v1",
    kind="Pod",
    name="nginx",
    namespace="test",
    uid="536ab69f-1b3c-4bd9-9ba4-274a56188419",
)

PASS_RESULT = Result(
    id="123",
    message=_REQUESTS_MESSAGE,
    policy=_REQUESTS_POLICY,
    rule=_REQUESTS_RULE,
    priority=Priority.WARNING.value,
    result=STATUS_PASS,
    severity=SEVERITY_HIGH,
    category="resources",
    scored=True,
    source="Kyverno",
    resources=[_DEPLOYMENT],
    properties={"xyz": "test"},
)

PASS_POD_RESULT = Result(
    id="124",
    message=_REQUESTS_MESSAGE,
    policy=_REQUESTS_POLICY,
    rule=_REQUESTS_RULE,
    priority=Priority.WARNING.value,
    result=STATUS_PASS,
    category="Best Practices",
    scored=True,
    source="Kyverno",
    resources=[_POD],
)

TRIVY_RESULT = Result(
    id="124",
    message="validation error",
    policy="policy",
    rule="rule",
    priority=Priority.WARNING.value,
    result=STATUS_FAIL,
    category="Best Practices",
    scored=True,
    source="Trivy",
)

FAIL_RESULT = Result(
    id="123",
    message=_REQUESTS_MESSAGE,
    policy=_REQUESTS_POLICY,
    rule=_REQUESTS_RULE,
    priority=Priority.WARNING.value,
    result=STATUS_FAIL,
    severity=SEVERITY_HIGH,
    category="resources",
    scored=True,
    source="Kyverno",
    resources=[_DEPLOYMENT],
)

FAIL_DISALLOW_RULE_RESULT = Result(
    id="123",
    message=_REQUESTS_MESSAGE,
    policy="disallow-policy",
    rule="disallow-policy",
    priority=Priority.WARNING.value,
    result=STATUS_FAIL,
    severity=SEVERITY_HIGH,
    category="resources",
    scored=True,
    source="Kyverno",
    resources=[_DEPLOYMENT],
)

FAIL_POD_RESULT = Result(
    id="124",
    message=_REQUESTS_MESSAGE,
    policy=_REQUESTS_POLICY,
    rule=_REQUESTS_RULE,
    priority=Priority.WARNING.value,
    result=STATUS_FAIL,
    category="Best Practices",
    scored=True,
    source="Kyverno",
    resources=[_POD],
)

FAIL_RESULT_WITHOUT_RESOURCE = Result(
    message=_REQUESTS_MESSAGE,
    policy=_REQUESTS_POLICY,
    rule=_REQUESTS_RULE,
    priority=Priority.WARNING.value,
    result=STATUS_FAIL,
    severity=SEVERITY_HIGH,
    category="resources",
    scored=True,
    source="Kyverno",
)

PASS_NAMESPACE_RESULT = Result(
    id="125",
    message=_NAMESPACE_MESSAGE,
    policy="require-ns-GetLabels()",
    rule="check-for-GetLabels()-on-namespace",
    priority=Priority.ERROR.value,
    result=STATUS_PASS,
    category="namespaces",
    severity=SEVERITY_MEDIUM,
    scored=True,
    source="Kyverno",
    resources=[
        Resource(
            api_version="v1",
            kind="Namespace",
            name="test",
            uid="536ab69f-1b3c-4bd9-9ba4-274a56188411",
        )
    ],
)

FAIL_NAMESPACE_RESULT = Result(
    id="126",
    message=_NAMESPACE_MESSAGE,
    policy="require-ns-GetLabels()",
    rule="check-for-GetLabels()-on-namespace",
    priority=Priority.WARNING.value,
    result=STATUS_FAIL,
    category="namespaces",
    severity=SEVERITY_HIGH,
    scored=True,
    source="Kyverno",
    resources=[
        Resource(
            api_version="v1",
            kind="Namespace",
            name="dev",
            uid="536ab69f-1b3c-4bd9-9ba4-274a56188412",
        )
    ],
)

SCOPE_RESULT = Result(
    message=_REQUESTS_MESSAGE,
    policy=_REQUESTS_POLICY,
    rule=_REQUESTS_RULE,
    priority=Priority.WARNING.value,
    result=STATUS_FAIL,
    severity=SEVERITY_HIGH,
    category="resources",
    scored=True,
    source="Kyverno",
)

COMPLETE_TARGET_SEND_RESULT = Result(
    message=_REQUESTS_MESSAGE,
    policy=_REQUESTS_POLICY,
    rule=_REQUESTS_RULE,
    timestamp=_TARGET_SECONDS,
    priority=Priority.WARNING.value,
    result=STATUS_FAIL,
    severity=SEVERITY_HIGH,
    category="resources",
    scored=True,
    source="Kyverno",
    resources=[
        Resource(
            api_version="v1",
            kind="Deployment",
            name="nginx",
            namespace="default",
            uid="536ab69f-1b3c-4bd9-9ba4-274a56188409",
        )
    ],
    properties={"version": "1.2.0"},
)

MINIMAL_TARGET_SEND_RESULT = Result(
    message=_LABEL_MESSAGE,
    policy="app-label-requirement",
    priority=Priority.CRITICAL.value,
    result=STATUS_FAIL,
    scored=True,
)

ENFORCE_TARGET_SEND_RESULT = Result(
    message=_REQUESTS_MESSAGE,
    policy=_REQUESTS_POLICY,
    rule="check-for-requests-and-limits",
    timestamp=_TARGET_SECONDS,
    priority=Priority.WARNING.value,
    result=STATUS_FAIL,
    severity=SEVERITY_HIGH,
    category="resources",
    scored=True,
    source="Kyverno",
    resources=[Resource(kind="Pod", name="nginx", namespace="default")],
    properties={"version": "1.2.0"},
)

MISSING_UID_SEND_RESULT = Result(
    message=_REQUESTS_MESSAGE,
    policy=_REQUESTS_POLICY,
    rule="check-for-requests-and-limits",
    timestamp=_TARGET_SECONDS,
    priority=Priority.WARNING.value,
    result=STATUS_FAIL,
    severity=SEVERITY_HIGH,
    category="resources",
    scored=True,
    source="Kyverno",
    resources=[Resource(api_version="v1", kind="Pod", name="nginx", namespace="default")],
    properties={"version": "1.2.0"},
)

MISSING_API_VERSION_SEND_RESULT = Result(
    message=_REQUESTS_MESSAGE,
    policy=_REQUESTS_POLICY,
    rule="check-for-requests-and-limits",
    timestamp=_TARGET_SECONDS,
    priority=Priority.WARNING.value,
    result=STATUS_FAIL,
    severity=SEVERITY_HIGH,
    category="resources",
    scored=True,
    source="Kyverno",
    resources=[
        Resource(
            kind="Pod",
            name="nginx",
            namespace="default",
            uid="536ab69f-1b3c-4bd9-9ba4-274a56188409",
        )
    ],
    properties={"version": "1.2.0"},
)

ERROR_SEND_RESULT = result_with_priority(MINIMAL_TARGET_SEND_RESULT, Priority.ERROR)
CRITICAL_SEND_RESULT = result_with_priority(MINIMAL_TARGET_SEND_RESULT, Priority.CRITICAL)
INFO_SEND_RESULT = result_with_priority(MINIMAL_TARGET_SEND_RESULT, Priority.INFO)
DEBUG_SEND_RESULT = result_with_priority(MINIMAL_TARGET_SEND_RESULT, Priority.DEBUG)