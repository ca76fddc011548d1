"""Built-in functions and actions available to aladino expressions."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable

from reviewpilot.aladino.typesys import Type
from reviewpilot.aladino.values import Value


@dataclass
class BuiltInFunction:
    type: Type
    code: Callable[[Any, list[Value]], Value]


@dataclass
class BuiltInAction:
    type: Type
    code: Callable[[Any, list[Value]], None]


@dataclass
class BuiltIns:
    functions: dict[str, BuiltInFunction] = field(default_factory=dict)
    actions: dict[str, BuiltInAction] = field(default_factory=dict)


def merge_builtins(*args: BuiltIns) -> BuiltIns:
    """Combine several sets of built-ins; later ones win on name clashes."""
    merged = BuiltIns()
    for builtins in args:
        merged.functions.update(builtins.functions)
        merged.actions.update(builtins.actions)
    return merged