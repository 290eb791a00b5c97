[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "policyreporter"
version = "0.1.0"
description = "Policy report processing: summary and violation e-mail reports, source and namespace filters, secret values and event debouncing."
requires-python = ">=3.10"
dependencies = [
    "jinja2",
]
keywords = [
    "policy",
    "policy-report",
    "compliance",
    "monitoring",
    "email",
    "reporting",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: System Administrators",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Monitoring",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["policyreporter"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
