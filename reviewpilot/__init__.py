"""Pull request review automation driven by policy files and a typed expression language."""

__version__ = "0.1.0"