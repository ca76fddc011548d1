"""Evaluation of a reviewpad file into a program of actions."""

from __future__ import annotations

import logging
from typing import Any

from reviewpilot.engine.env import Env
from reviewpilot.engine.labels import check_label_exists, create_label
from reviewpilot.engine.lang import PadRule, PadWorkflowRule, ReviewpadFile
from reviewpilot.engine.program import Program

logger = logging.getLogger(__name__)


def _collect(env: Env, event_name: str, properties: dict[str, Any]) -> None:
    # Analytics failures must never stop an evaluation.
    try:
        env.collector.collect(event_name, properties)
    except Exception:
        logger.exception("reviewpad: failed to collect event %s", event_name)


def collect_error(env: Env, error: BaseException) -> None:
    """Report an error to the collector."""
    _collect(env, "Error", {"pullRequestUrl": env.pull_request.url, "details": str(error)})


def evaluate(file: ReviewpadFile, env: Env) -> Program:
    """Register labels, groups and rules, then build the program of actions.

    The file is expected to have passed the linter.
    """
    logger.info("reviewpad: file to evaluate:\n%r", file)
    interpreter = env.interpreter

    _collect(
        env,
        "Trigger Analysis",
        {
            "pullRequestUrl": env.pull_request.url,
            "project": env.pull_request.project(),
            "version": file.version,
            "edition": file.edition,
            "mode": file.mode,
            "totalGroups": len(file.groups),
            "totalLabels": len(file.labels),
            "totalRules": len(file.rules),
            "totalWorkflows": len(file.workflows),
        },
    )

    logger.info("reviewpad: detected %d groups", len(file.groups))
    logger.info("reviewpad: detected %d labels", len(file.labels))
    logger.info("reviewpad: detected %d rules", len(file.rules))
    logger.info("reviewpad: detected %d workflows", len(file.workflows))

    for label_key, label in file.labels.items():
        # A label's name falls back to its key.
        label_name = label.name or label_key
        if not check_label_exists(env, label_name):
            try:
                create_label(env, label_name, label)
            except Exception as err:
                collect_error(env, err)
                raise
        interpreter.process_label(label_key, label_name)

    for group in file.groups:
        try:
            interpreter.process_group(
                group.name, group.kind, group.type, group.spec, group.param, group.where
            )
        except Exception as err:
            collect_error(env, err)
            raise

    rules: dict[str, PadRule] = {}
    for rule in file.rules:
        try:
            interpreter.process_rule(rule.name, rule.spec)
        except Exception as err:
            collect_error(env, err)
            raise
        rules[rule.name] = rule

    program = Program()
    triggered_exclusive_workflow = False

    for workflow in file.workflows:
        logger.info("reviewpad: evaluating workflow %s:", workflow.name)

        if not workflow.always_run and triggered_exclusive_workflow:
            logger.info("reviewpad: \tskipping workflow")
            continue

        activated: list[PadWorkflowRule] = []
        for rule in workflow.rules:
            definition = rules.get(rule.rule, PadRule())
            try:
                is_active = interpreter.eval_expr(definition.kind, definition.spec)
            except Exception as err:
                collect_error(env, err)
                raise
            if is_active:
                activated.append(rule)
                logger.info("reviewpad: \trule %s activated", rule.rule)

        if not activated:
            logger.info("reviewpad: \tno rules activated")
            continue

        program.extend_actions(workflow.actions, workflow, activated)
        for rule in activated:
            program.extend_actions(rule.extra_actions, workflow, [rule])

        if not workflow.always_run:
            triggered_exclusive_workflow = True

    return program