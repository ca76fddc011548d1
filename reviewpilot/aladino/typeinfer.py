"""Type inference of aladino expressions."""

from __future__ import annotations

from functools import singledispatch

from reviewpilot.aladino.env import Env, new_type_env
from reviewpilot.aladino.expr import (
    Array,
    BinaryOp,
    BinaryOperator,
    BoolConst,
    Expr,
    FunctionCall,
    IntConst,
    Lambda,
    StringConst,
    TypedExpr,
    UnaryOp,
    UnaryOperator,
    Variable,
)
from reviewpilot.aladino.typesys import (
    ArrayType,
    BoolType,
    FunctionType,
    IntType,
    StringType,
    Type,
    types_equal,
)

_EQUALITY = (BinaryOperator.EQ, BinaryOperator.NEQ)
_ORDERING = (
    BinaryOperator.LESS_THAN,
    BinaryOperator.LESS_EQ_THAN,
    BinaryOperator.GREATER_THAN,
    BinaryOperator.GREATER_EQ_THAN,
)
_LOGICAL = (BinaryOperator.AND, BinaryOperator.OR)


class TypeInferenceError(TypeError):
    """An expression is not well typed."""


def infer(type_env: dict[str, Type], expr: Expr) -> Type:
    """Infer the type of an expression; typed parameters extend type_env."""
    return _infer(expr, type_env)


def type_inference(env: Env, expr: Expr) -> Type:
    """Infer the type of an expression against the built-ins of env."""
    return infer(new_type_env(env), expr)


def _infer_all(exprs: list[Expr], env: dict[str, Type]) -> list[Type]:
    return [_infer(expr, env) for expr in exprs]


@singledispatch
def _infer(expr: Expr, env: dict[str, Type]) -> Type:
    raise TypeInferenceError(f"type inference failed: unknown expression {expr.kind()}")


@_infer.register(StringConst)
def _infer_string(expr: StringConst, env: dict[str, Type]) -> Type:
    return StringType()


@_infer.register(IntConst)
def _infer_int(expr: IntConst, env: dict[str, Type]) -> Type:
    return IntType()


@_infer.register(BoolConst)
def _infer_bool(expr: BoolConst, env: dict[str, Type]) -> Type:
    return BoolType()


@_infer.register(Variable)
def _infer_variable(expr: Variable, env: dict[str, Type]) -> Type:
    try:
        return env[expr.ident]
    except KeyError:
        raise TypeInferenceError(
            f"no type for built-in {expr.ident}. Please check if the mode in the "
            "reviewpad.yml file supports it."
        ) from None


@_infer.register(UnaryOp)
def _infer_unary(expr: UnaryOp, env: dict[str, Type]) -> Type:
    operand = _infer(expr.expr, env)
    if expr.op is UnaryOperator.NOT and operand.equals(BoolType()):
        return BoolType()
    raise TypeInferenceError("type inference failed")


@_infer.register(BinaryOp)
def _infer_binary(expr: BinaryOp, env: dict[str, Type]) -> Type:
    lhs = _infer(expr.lhs, env)
    rhs = _infer(expr.rhs, env)
    if expr.op in _EQUALITY and lhs.equals(rhs):
        return BoolType()
    if expr.op in _ORDERING and lhs.equals(IntType()) and rhs.equals(IntType()):
        return BoolType()
    if expr.op in _LOGICAL and lhs.equals(BoolType()) and rhs.equals(BoolType()):
        return BoolType()
    raise TypeInferenceError("type inference failed")


@_infer.register(FunctionCall)
def _infer_call(expr: FunctionCall, env: dict[str, Type]) -> Type:
    arg_types = _infer_all(expr.arguments, env)
    fn_type = _infer(expr.name, env)
    if not isinstance(fn_type, FunctionType):
        raise TypeInferenceError(
            f"type inference failed: {expr.name.ident} is not a function"
        )
    if types_equal(arg_types, fn_type.param_types):
        return fn_type.return_type
    raise TypeInferenceError(
        f"type inference failed: mismatch in arg types on {expr.name.ident}"
    )


@_infer.register(Lambda)
def _infer_lambda(expr: Lambda, env: dict[str, Type]) -> Type:
    param_types = _infer_all(expr.parameters, env)
    body_type = _infer(expr.body, env)
    return FunctionType(param_types, body_type)


@_infer.register(TypedExpr)
def _infer_typed(expr: TypedExpr, env: dict[str, Type]) -> Type:
    if not isinstance(expr.expr, Variable):
        raise TypeInferenceError(f"typed expression {expr.expr!r} is not a variable")
    env[expr.expr.ident] = expr.type_of
    return expr.type_of


@_infer.register(Array)
def _infer_array(expr: Array, env: dict[str, Type]) -> Type:
    return ArrayType(_infer_all(expr.elems, env))