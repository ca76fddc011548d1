"""Types of the aladino expression language."""

from __future__ import annotations

from dataclasses import dataclass, field

BOOL_TYPE = "BoolType"
INT_TYPE = "IntType"
STRING_TYPE = "StringType"
FUNCTION_TYPE = "FunctionType"
ARRAY_TYPE = "ArrayType"
ARRAY_OF_TYPE = "ArrayOfType"
TIME_TYPE = "TimeType"


class Type:
    """Base of every aladino type; equality is structural via ``equals``."""

    KIND = ""

    def kind(self) -> str:
        return self.KIND

    def equals(self, other: "Type") -> bool:
        return other.kind() == self.kind()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Type):
            return NotImplemented
        return self.equals(other)

    __hash__ = None  # type: ignore[assignment]


def types_equal(left: list[Type], right: list[Type]) -> bool:
    """Pairwise equality of two lists of types."""
    if len(left) != len(right):
        return False
    return all(lhs.equals(rhs) for lhs, rhs in zip(left, right))


@dataclass(eq=False)
class StringType(Type):
    KIND = STRING_TYPE


@dataclass(eq=False)
class IntType(Type):
    KIND = INT_TYPE


@dataclass(eq=False)
class BoolType(Type):
    KIND = BOOL_TYPE


@dataclass(eq=False)
class TimeType(Type):
    KIND = TIME_TYPE


@dataclass(eq=False)
class FunctionType(Type):
    param_types: list[Type] = field(default_factory=list)
    return_type: Type = field(default_factory=BoolType)

    KIND = FUNCTION_TYPE

    def equals(self, other: Type) -> bool:
        if not isinstance(other, FunctionType):
            return False
        return types_equal(self.param_types, other.param_types) and self.return_type.equals(
            other.return_type
        )


@dataclass(eq=False)
class ArrayOfType(Type):
    """An array of any length whose elements share one type."""

    elem_type: Type = field(default_factory=StringType)

    KIND = ARRAY_OF_TYPE

    def equals(self, other: Type) -> bool:
        if isinstance(other, ArrayType):
            return other.equals(self)
        if isinstance(other, ArrayOfType):
            return self.elem_type.equals(other.elem_type)
        return False


@dataclass(eq=False)
class ArrayType(Type):
    """A static array with one type per element."""

    elems_type: list[Type] = field(default_factory=list)

    KIND = ARRAY_TYPE

    def equals(self, other: Type) -> bool:
        if isinstance(other, ArrayType):
            return types_equal(other.elems_type, self.elems_type)
        if isinstance(other, ArrayOfType):
            expected = [other.elem_type] * len(self.elems_type)
            return types_equal(expected, self.elems_type)
        return False