"""Policy report aggregation, e-mail reporting, filtering, secrets and event debouncing."""

__version__ = "0.1.0"

__all__ = [
    "debouncer",
    "helpers",
    "mail",
    "reports",
    "results",
    "secrets",
    "summary",
    "violations",
]