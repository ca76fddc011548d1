"""Evaluation environment of aladino expressions."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable

from reviewpilot.aladino.builtins import BuiltIns
from reviewpilot.aladino.patchfile import PatchFile
from reviewpilot.aladino.report import Report
from reviewpilot.aladino.typesys import Type
from reviewpilot.aladino.values import Value
from reviewpilot.collector import Collector
from reviewpilot.engine.env import PullRequest


@dataclass
class Env:
    client: Any
    collector: Collector
    pull_request: PullRequest
    builtins: BuiltIns
    patch: dict[str, PatchFile] = field(default_factory=dict)
    register_map: dict[str, Value] = field(default_factory=dict)
    report: Report = field(default_factory=Report)


def new_type_env(env: Env) -> dict[str, Type]:
    """Types of every built-in; an action shadows a function of the same name."""
    types = {name: function.type for name, function in env.builtins.functions.items()}
    types.update((name, action.type) for name, action in env.builtins.actions.items())
    return types


def new_eval_env(
    client: Any,
    collector: Collector,
    pull_request: PullRequest,
    builtins: BuiltIns,
    files: Iterable[tuple[str, str | None]],
) -> Env:
    """Build an environment from the (filename, patch) pairs of a pull request."""
    patch = {}
    for filename, file_patch in files:
        patch[filename] = PatchFile.from_patch(filename, file_patch)
    return Env(
        client=client,
        collector=collector,
        pull_request=pull_request,
        builtins=builtins,
        patch=patch,
    )