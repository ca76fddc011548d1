"""Evaluation of aladino expressions to values."""

from __future__ import annotations

from functools import singledispatch

from reviewpilot.aladino.env import Env
from reviewpilot.aladino.expr import (
    Array,
    BinaryOp,
    BoolConst,
    Expr,
    FunctionCall,
    IntConst,
    Lambda,
    StringConst,
    TypedExpr,
    UnaryOp,
    Variable,
)
from reviewpilot.aladino.typeinfer import type_inference
from reviewpilot.aladino.typesys import ARRAY_OF_TYPE, ARRAY_TYPE
from reviewpilot.aladino.values import (
    ArrayValue,
    BoolValue,
    FunctionValue,
    IntValue,
    StringValue,
    Value,
)


class EvalError(RuntimeError):
    """An expression could not be evaluated."""


def evaluate(env: Env, expr: Expr) -> Value:
    """Evaluate an expression in env."""
    return _eval(expr, env)


def eval_condition(env: Env, expr: Expr) -> bool:
    """Evaluate a boolean expression."""
    value = _eval(expr, env)
    if not isinstance(value, BoolValue):
        raise EvalError(f"eval: expression is not a condition, got {value.kind()}")
    return value.val


def eval_group(env: Env, expr: Expr) -> Value:
    """Evaluate an expression that must denote a group (an array)."""
    expr_type = type_inference(env, expr)
    if expr_type.kind() not in (ARRAY_TYPE, ARRAY_OF_TYPE):
        raise EvalError("expression is not a valid group")
    return evaluate(env, expr)


def build_internal_label_id(label_id: str) -> str:
    """Register name under which a label is stored."""
    return f"@label:{label_id}"


def build_internal_rule_name(name: str) -> str:
    """Register name under which a rule spec is stored."""
    return f"@rule:{name}"


@singledispatch
def _eval(expr: Expr, env: Env) -> Value:
    raise EvalError(f"eval: unknown expression {expr.kind()}")


@_eval.register(BoolConst)
def _eval_bool(expr: BoolConst, env: Env) -> Value:
    return BoolValue(expr.value)


@_eval.register(StringConst)
def _eval_string(expr: StringConst, env: Env) -> Value:
    return StringValue(expr.value)


@_eval.register(IntConst)
def _eval_int(expr: IntConst, env: Env) -> Value:
    return IntValue(expr.value)


@_eval.register(UnaryOp)
def _eval_unary(expr: UnaryOp, env: Env) -> Value:
    return expr.op.apply(_eval(expr.expr, env))


@_eval.register(BinaryOp)
def _eval_binary(expr: BinaryOp, env: Env) -> Value:
    lhs = _eval(expr.lhs, env)
    rhs = _eval(expr.rhs, env)
    if not lhs.has_kind_of(rhs.kind()):
        raise EvalError("eval: left and right operand have different kinds")
    return expr.op.apply(lhs, rhs)


@_eval.register(Variable)
def _eval_variable(expr: Variable, env: Env) -> Value:
    if expr.ident in env.register_map:
        return env.register_map[expr.ident]
    function = env.builtins.functions.get(expr.ident)
    if function is None:
        raise EvalError(f"eval: failure on {expr.ident}")
    return function.code(env, [])


@_eval.register(FunctionCall)
def _eval_call(expr: FunctionCall, env: Env) -> Value:
    args = [_eval(argument, env) for argument in expr.arguments]
    function = env.builtins.functions.get(expr.name.ident)
    if function is None:
        raise EvalError(f"eval: failure on {expr.name.ident}")
    return function.code(env, args)


@_eval.register(Lambda)
def _eval_lambda(expr: Lambda, env: Env) -> Value:
    def call(args: list[Value]) -> Value | None:
        # Parameters are bound in the shared register map.
        for parameter, arg in zip(expr.parameters, args):
            env.register_map[parameter.expr.ident] = arg
        try:
            return _eval(expr.body, env)
        except EvalError:
            return None

    return FunctionValue(call)


@_eval.register(TypedExpr)
def _eval_typed(expr: TypedExpr, env: Env) -> Value:
    return _eval(expr.expr, env)


@_eval.register(Array)
def _eval_array(expr: Array, env: Env) -> Value:
    return ArrayValue([_eval(elem, env) for elem in expr.elems])