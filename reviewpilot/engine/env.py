"""Environment in which a reviewpad file is evaluated."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol

from reviewpilot.collector import Collector
from reviewpilot.engine.program import Program, Statement

_PULL_REQUEST_URL = re.compile(r"github\.com/repos/(.*)/pulls/\d+$")


class GroupKind(str, Enum):
    DEVELOPER = "developer"


class GroupType(str, Enum):
    STATIC = "static"
    FILTER = "filter"


class ExecError(RuntimeError):
    """Evaluation of a reviewpad file failed."""


@dataclass
class PullRequest:
    url: str
    owner: str = ""
    repo: str = ""
    number: int = 0

    def project(self) -> str:
        """The owner/repository part of the pull request API URL."""
        match = _PULL_REQUEST_URL.search(self.url)
        if match is None:
            raise ExecError(f"reviewpad: unexpected pull request url {self.url}")
        return match.group(1)


class Interpreter(Protocol):
    """The language back end that evaluates specs and runs actions."""

    def process_group(
        self, name: str, kind: str, type_of: str, expr: str, param_expr: str, where_expr: str
    ) -> None:
        """Evaluate and register a group."""

    def process_label(self, label_id: str, name: str) -> None:
        """Register a label under its key."""

    def process_rule(self, name: str, spec: str) -> None:
        """Register a rule spec."""

    def eval_expr(self, kind: str, expr: str) -> bool:
        """Evaluate a condition."""

    def exec_program(self, program: Program) -> None:
        """Run every statement of a program."""

    def exec_statement(self, statement: Statement) -> None:
        """Run one statement."""

    def report(self, mode: str) -> None:
        """Publish the report of what ran."""


@dataclass
class Env:
    client: Any
    collector: Collector
    pull_request: PullRequest
    interpreter: Interpreter