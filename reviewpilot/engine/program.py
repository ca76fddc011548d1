"""A program: the ordered statements a set of workflows produces."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from reviewpilot.engine.lang import PadWorkflow, PadWorkflowRule


@dataclass
class Metadata:
    workflow: PadWorkflow
    triggered_by: list[PadWorkflowRule]


@dataclass
class Statement:
    code: str
    metadata: Metadata


@dataclass
class Program:
    statements: list[Statement] = field(default_factory=list)

    def extend_actions(
        self,
        actions: Iterable[str],
        workflow: PadWorkflow,
        rules: list[PadWorkflowRule],
    ) -> None:
        """Append one statement per action, recording what triggered it."""
        self.statements.extend(
            Statement(code=action, metadata=Metadata(workflow=workflow, triggered_by=rules))
            for action in actions
        )