"""Abstract syntax of aladino expressions and the operators they use."""

from __future__ import annotations

import calendar
import math
import operator
import re
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import Callable

from reviewpilot.aladino.typesys import Type
from reviewpilot.aladino.values import BoolValue, IntValue, Value

BOOL_CONST = "BoolConst"
INT_CONST = "IntConst"
STRING_CONST = "StringConst"
TIME_CONST = "TimeConst"
VARIABLE_CONST = "Variable"
UNARY_OP_CONST = "UnaryOp"
BINARY_OP_CONST = "BinaryOp"
FUNCTION_CALL_CONST = "FunctionCall"
LAMBDA_CONST = "Lambda"
TYPED_EXPR = "TypedExpr"
ARRAY_CONST = "Array"


def _as_bool(value: Value) -> bool:
    if not isinstance(value, BoolValue):
        raise TypeError(f"expected a bool value, got {value.kind()}")
    return value.val


def _as_int(value: Value) -> int:
    if not isinstance(value, IntValue):
        raise TypeError(f"expected an int value, got {value.kind()}")
    return value.val


class UnaryOperator(Enum):
    NOT = "!"

    def apply(self, value: Value) -> Value:
        """Apply the operator to an evaluated operand."""
        return BoolValue(not _as_bool(value))


class BinaryOperator(Enum):
    EQ = "=="
    NEQ = "!="
    AND = "&&"
    OR = "||"
    LESS_THAN = "<"
    LESS_EQ_THAN = "<="
    GREATER_THAN = ">"
    GREATER_EQ_THAN = ">="

    def apply(self, lhs: Value, rhs: Value) -> Value:
        """Apply the operator to evaluated operands."""
        if self is BinaryOperator.EQ:
            return BoolValue(lhs.equals(rhs))
        if self is BinaryOperator.NEQ:
            return BoolValue(not lhs.equals(rhs))
        if self in _LOGICAL:
            return BoolValue(_LOGICAL[self](_as_bool(lhs), _as_bool(rhs)))
        return BoolValue(_COMPARISONS[self](_as_int(lhs), _as_int(rhs)))


_LOGICAL: dict[BinaryOperator, Callable[[bool, bool], bool]] = {
    BinaryOperator.AND: lambda a, b: a and b,
    BinaryOperator.OR: lambda a, b: a or b,
}

_COMPARISONS: dict[BinaryOperator, Callable[[int, int], bool]] = {
    BinaryOperator.LESS_THAN: operator.lt,
    BinaryOperator.LESS_EQ_THAN: operator.le,
    BinaryOperator.GREATER_THAN: operator.gt,
    BinaryOperator.GREATER_EQ_THAN: operator.ge,
}


class Expr:
    """Base of every expression node; equality follows ``equals``."""

    KIND = ""

    def kind(self) -> str:
        return self.KIND

    def equals(self, other: "Expr") -> bool:
        raise NotImplementedError

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Expr):
            return NotImplemented
        return self.equals(other)

    __hash__ = None  # type: ignore[assignment]


def equal_list(left: list[Expr], right: list[Expr]) -> bool:
    """Pairwise structural equality of two lists of expressions."""
    if len(left) != len(right):
        return False
    return all(lhs.equals(rhs) for lhs, rhs in zip(left, right))


@dataclass(eq=False)
class BoolConst(Expr):
    value: bool

    KIND = BOOL_CONST

    def equals(self, other: Expr) -> bool:
        return isinstance(other, BoolConst) and self.value == other.value


@dataclass(eq=False)
class StringConst(Expr):
    value: str

    KIND = STRING_CONST

    def equals(self, other: Expr) -> bool:
        return isinstance(other, StringConst) and self.value == other.value


@dataclass(eq=False)
class IntConst(Expr):
    value: int

    KIND = INT_CONST

    def equals(self, other: Expr) -> bool:
        return isinstance(other, IntConst) and self.value == other.value


@dataclass(eq=False)
class Variable(Expr):
    ident: str

    KIND = VARIABLE_CONST

    def equals(self, other: Expr) -> bool:
        return isinstance(other, Variable) and self.ident == other.ident


@dataclass(eq=False)
class UnaryOp(Expr):
    op: UnaryOperator
    expr: Expr

    KIND = UNARY_OP_CONST

    def equals(self, other: Expr) -> bool:
        return isinstance(other, UnaryOp) and self.op is other.op and self.expr.equals(other.expr)


@dataclass(eq=False)
class BinaryOp(Expr):
    lhs: Expr
    op: BinaryOperator
    rhs: Expr

    KIND = BINARY_OP_CONST

    def equals(self, other: Expr) -> bool:
        return (
            isinstance(other, BinaryOp)
            and self.op is other.op
            and self.lhs.equals(other.lhs)
            and self.rhs.equals(other.rhs)
        )


@dataclass(eq=False)
class FunctionCall(Expr):
    name: Variable
    arguments: list[Expr] = field(default_factory=list)

    KIND = FUNCTION_CALL_CONST

    def equals(self, other: Expr) -> bool:
        return (
            isinstance(other, FunctionCall)
            and self.name.equals(other.name)
            and equal_list(self.arguments, other.arguments)
        )


@dataclass(eq=False)
class Array(Expr):
    elems: list[Expr] = field(default_factory=list)

    KIND = ARRAY_CONST

    def equals(self, other: Expr) -> bool:
        return isinstance(other, Array) and equal_list(self.elems, other.elems)


@dataclass(eq=False)
class TypedExpr(Expr):
    expr: Expr
    type_of: Type

    KIND = TYPED_EXPR

    def equals(self, other: Expr) -> bool:
        return (
            isinstance(other, TypedExpr)
            and self.expr.equals(other.expr)
            and self.type_of.equals(other.type_of)
        )


@dataclass(eq=False)
class Lambda(Expr):
    parameters: list[Expr]
    body: Expr

    KIND = LAMBDA_CONST

    def equals(self, other: Expr) -> bool:
        return (
            isinstance(other, Lambda)
            and self.body.equals(other.body)
            and equal_list(self.parameters, other.parameters)
        )


def cmp_op(lhs: Expr, op: str, rhs: Expr) -> BinaryOp:
    """Build a comparison from its operator symbol."""
    try:
        comparison = BinaryOperator(op)
    except ValueError:
        comparison = None
    if comparison not in _COMPARISONS:
        raise ValueError(f"cmpOp: invalid op {op}")
    return BinaryOp(lhs, comparison, rhs)


_TIME_UNIT = re.compile(r"year|month|week|day|hour|minute")
_TIME_AMOUNT = re.compile(r"[0-9]+")
_DURATIONS = {"week": 7 * 24 * 3600, "hour": 3600, "minute": 60}


def _add_date(moment: datetime, years: int = 0, months: int = 0, days: int = 0) -> datetime:
    # Calendar arithmetic that rolls overflowing days into the next month.
    total_months = (moment.year + years) * 12 + moment.month - 1 + months
    year, month_index = divmod(total_months, 12)
    first = moment.replace(year=year, month=month_index + 1, day=1)
    return first + timedelta(days=moment.day - 1 + days)


def relative_time_const(val: str, now: datetime | None = None) -> IntConst:
    """Unix time of a moment given relative to now, such as ``2 days ago``."""
    if now is None:
        now = datetime.now()

    amount_match = _TIME_AMOUNT.match(val)
    if amount_match is None:
        raise ValueError(f"invalid relative time {val!r}: missing amount")
    amount = int(amount_match.group(0))

    unit_match = _TIME_UNIT.search(val)
    unit = unit_match.group(0) if unit_match else ""

    if unit == "year":
        moment = _add_date(now, years=-amount)
    elif unit == "month":
        moment = _add_date(now, months=-amount)
    elif unit == "day":
        moment = _add_date(now, days=-amount)
    elif unit in _DURATIONS:
        return IntConst(math.floor(now.timestamp()) - amount * _DURATIONS[unit])
    else:
        raise ValueError(f"Unknown time unit {unit}")
    return IntConst(math.floor(moment.timestamp()))


_DATE = re.compile(r"(\d{4})-?(\d{2})-?(\d{2})")
_CLOCK = re.compile(r"T(\d{2}):(\d{2}):(\d{2})\Z")


def time_const(val: str) -> IntConst:
    """Unix time of a UTC date such as ``2022-05-17`` or ``2022-05-17T10:30:00``."""
    date_match = _DATE.match(val)
    if date_match is None:
        raise ValueError(f"invalid date {val!r}")
    year, month, day = (int(part) for part in date_match.groups())

    clock_match = _CLOCK.search(val)
    hour, minute, second = (
        (int(part) for part in clock_match.groups()) if clock_match else (0, 0, 0)
    )

    # Out-of-range fields roll over into the next unit.
    year, month_index = divmod(year * 12 + month - 1, 12)
    seconds = calendar.timegm((year, month_index + 1, day, hour, minute, second, 0, 0, 0))
    return IntConst(seconds)