[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "reviewpilot"
version = "0.1.0"
description = "Pull request automation: load, lint and evaluate review policy files with a small typed expression language"
requires-python = ">=3.10"
keywords = [
    "code-review",
    "pull-request",
    "automation",
    "policy",
    "workflow",
    "linter",
    "expression-language",
    "diff",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Quality Assurance",
]
dependencies = [
    "pyyaml",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["reviewpilot"]

[tool.hatch.build.targets.sdist]
include = [
    "reviewpilot",
    "tests",
]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
