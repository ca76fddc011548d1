"""Construction of expressions that the language does not spell directly."""

from __future__ import annotations

from reviewpilot.aladino.expr import Expr, FunctionCall, Lambda, TypedExpr, Variable
from reviewpilot.aladino.typesys import StringType


def build_filter(param: str, condition: Expr) -> Expr:
    """Filter the organization's members by a condition over ``param``."""
    organization = FunctionCall(Variable("organization"), [])
    predicate = Lambda([TypedExpr(Variable(param), StringType())], condition)
    return FunctionCall(Variable("filter"), [organization, predicate])