# policyreporter

A library for working with policy reports: aggregate the results of
policy reports into per-source summaries and violation lists, render them
as e-mail reports with Jinja2 templates, filter them by source and
namespace, send them over SMTP, read credentials from secret data, and
debounce report lifecycle events.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Modules

- `policyreporter.reports`: the data model. `PolicyReport` (with `name`,
  `namespace`, `summary`, `results`, and the properties `id`,
  `is_cluster_scoped` and `source`), `Result`, `Resource` and `Summary`.
  A report with an empty namespace is cluster scoped; its `id` is its name,
  otherwise `"<namespace>/<name>"`. Its `source` is the source of its first
  result.
- `policyreporter.results`: the `Priority` enum and `result_with_priority`,
  which returns a copy of a result with another priority and raises
  `ValueError` for an unknown one. The module also holds a set of ready-made
  results such as `PASS_RESULT`, `FAIL_RESULT` and
  `COMPLETE_TARGET_SEND_RESULT`.
- `policyreporter.mail`: `Report`, the SMTP `Client` with `SMTPServer` and
  `Encryption` (see `encryption_from_string`), the `Filter` for sources and
  namespaces, and `color_from_status`.
- `policyreporter.summary`: `Source` collects pass/warn/fail/error/skip
  counts per source, split into a cluster scope and one `ScopeSummary` per
  namespace. `Generator` builds sources from reports, `filter_sources`
  narrows them, and `Reporter` renders them.
- `policyreporter.violations`: `map_result` turns a result into one
  `Violation` per resource; `Source` collects violations grouped by status
  (`warn`, `fail`, `error`) and pass counts. `Generator`, `filter_sources`
  and `Reporter` work as in the summary module.
- `policyreporter.secrets`: `Values` built from secret data with
  `Values.from_data`, and `SecretClient`, which reads secrets from a
  mapping or a callable. A missing secret raises `SecretNotFoundError` at
  once; any other error is retried, up to `attempts` tries in total, before
  it is raised. `RetryableError` is offered as an exception type for a
  callable store to raise on transient failures.
- `policyreporter.debouncer`: `Debouncer` forwards `LifecycleEvent`s
  (`EventType.ADDED`, `UPDATED`, `DELETED`) to a publisher callable. An
  update of a report without results is held back for `wait_duration`
  seconds and dropped if another event for the same report arrives first.
  `close()` drops held-back events; the debouncer is also a context
  manager.
- `policyreporter.helpers`: `contains` (case-insensitive membership) and
  `json_response(data, error)`, which returns `(status, headers, body)`.

## Examples

Status colours used in rendered reports:

```python
from policyreporter.mail import color_from_status

color_from_status("fail")   # "#dc3545"
color_from_status("pass")   # "#198754"
color_from_status("")       # "#cccccc"
```

Encryption settings are read from configuration strings, ignoring case:

```python
from policyreporter.mail import Encryption, encryption_from_string

encryption_from_string("STARTTLS") is Encryption.STARTTLS
encryption_from_string("ssl/tls") is Encryption.SSL_TLS
encryption_from_string("") is Encryption.NONE
```

Filtering: source rules compare case-insensitively; namespace rules are
shell-style wildcards. Include rules take precedence over exclude rules,
and a filter without rules lets everything through.

```python
from policyreporter.mail import Filter

f = Filter(namespace_exclude=("kube-*",), source_include=("Kyverno",))
f.validate_source("kyverno")         # True
f.validate_namespace("kube-system")  # False
```

Building and rendering a summary report:

```python
from policyreporter.mail import Filter
from policyreporter.summary import Generator, Reporter, filter_sources

sources = Generator(reports, Filter(), cluster_reports=True).generate_data()
sources = filter_sources(sources, Filter(namespace_exclude=("kyverno",)), True)
report = Reporter("templates", cluster_name="Cluster", title_prefix="Report").report(sources, "html")
report.title  # "Report (summary) on Cluster from <YYYY-MM-DD>"
```

`reports` is an iterable of `PolicyReport`s or a callable returning one.
The title leaves out the `on <cluster>` part when no cluster name is set,
and reads `(violations)` for violation reports. The rendered report can be
sent with `Client(sender, SMTPServer(...)).send(report, ["ops@example.com"])`;
an empty or `html` format sends an HTML body, anything else plain text.

## Templates

`Reporter.report` loads `summary.html` or `violations.html` from the
template directory it is given, with autoescaping on. Both templates get
`sources`, `cluster_name` and `title_prefix`. The violations template also
gets `status` (`["warn", "fail", "error"]`) and the functions `color`,
`title`, `has_violations` and `len_namespace_results`.

## What this package does not do

- It ships no templates; you supply the template directory.
- It does not fetch or watch policy reports itself; reports are handed to
  the generators and events to the debouncer by the calling code.
- It has no command-line program, no scheduler for sending reports and no
  HTTP server; `json_response` only builds the response parts.