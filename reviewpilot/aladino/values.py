"""Run-time values of the aladino expression language."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

INT_VALUE = "IntValue"
BOOL_VALUE = "BoolValue"
STRING_VALUE = "StringValue"
TIME_VALUE = "TimeValue"
ARRAY_VALUE = "ArrayValue"
FUNCTION_VALUE = "FunctionValue"


class Value:
    """Base of every aladino value; equality follows ``equals``."""

    KIND = ""

    def kind(self) -> str:
        return self.KIND

    def has_kind_of(self, kind: str) -> bool:
        return self.kind() == kind

    def equals(self, other: "Value") -> bool:
        return self.kind() == other.kind() and getattr(self, "val") == getattr(other, "val")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Value):
            return NotImplemented
        return self.equals(other)

    __hash__ = None  # type: ignore[assignment]


@dataclass(eq=False)
class IntValue(Value):
    val: int = 0

    KIND = INT_VALUE


@dataclass(eq=False)
class BoolValue(Value):
    val: bool = False

    KIND = BOOL_VALUE


@dataclass(eq=False)
class StringValue(Value):
    val: str = ""

    KIND = STRING_VALUE


@dataclass(eq=False)
class TimeValue(Value):
    val: int = 0

    KIND = TIME_VALUE


@dataclass(eq=False)
class ArrayValue(Value):
    vals: list[Value] = field(default_factory=list)

    KIND = ARRAY_VALUE

    def equals(self, other: Value) -> bool:
        if not isinstance(other, ArrayValue) or len(self.vals) != len(other.vals):
            return False
        return all(mine.equals(theirs) for mine, theirs in zip(self.vals, other.vals))


@dataclass(eq=False)
class FunctionValue(Value):
    fn: Callable[[list[Value]], Value | None]

    KIND = FUNCTION_VALUE

    def equals(self, other: Value) -> bool:
        # Functions cannot be compared; any two are considered equal.
        return self.kind() == other.kind()