"""Execution of aladino action statements."""

from __future__ import annotations

import logging

from reviewpilot.aladino.env import Env
from reviewpilot.aladino.evaluation import evaluate
from reviewpilot.aladino.expr import Expr, FunctionCall
from reviewpilot.aladino.typeinfer import type_inference

logger = logging.getLogger(__name__)


class ActionError(RuntimeError):
    """A statement cannot be executed as an action."""


def type_check_exec(env: Env, expr: Expr) -> FunctionCall:
    """Check that a statement is a well-typed call and return it."""
    if not isinstance(expr, FunctionCall):
        raise ActionError(f"typecheckexec: {expr.kind()}")
    type_inference(env, expr)
    return expr


def execute(env: Env, call: FunctionCall) -> None:
    """Evaluate the arguments of a call and run the built-in action it names."""
    args = [evaluate(env, argument) for argument in call.arguments]
    name = call.name.ident
    action = env.builtins.actions.get(name)
    if action is None:
        raise ActionError(
            f"exec: {name} not found. are you sure this is a built-in function?"
        )
    try:
        env.collector.collect(
            "Ran Builtin", {"pullRequestUrl": env.pull_request.url, "builtin": name}
        )
    except Exception:
        logger.exception("aladino: failed to collect event for %s", name)
    action.code(env, args)