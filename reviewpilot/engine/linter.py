"""Static checks over a reviewpad file."""

from __future__ import annotations

import logging
import re

from reviewpilot.engine.lang import (
    KINDS,
    PadGroup,
    PadRule,
    PadWorkflow,
    ReviewpadFile,
    find_group,
    find_rule,
)

logger = logging.getLogger(__name__)

_QUOTED = re.compile(r'"(.*?)"')


class LintError(ValueError):
    """The reviewpad file breaks one of the lint rules."""


def get_all_matches(
    pattern: str,
    groups: list[PadGroup],
    rules: list[PadRule],
    workflows: list[PadWorkflow],
) -> list[str]:
    """Collect every match of pattern in group specs, rule specs and actions."""
    regex = re.compile(pattern)
    texts = [group.spec for group in groups]
    texts += [rule.spec for rule in rules]
    texts += [action for workflow in workflows for action in workflow.actions]
    return [match.group(0) for text in texts for match in regex.finditer(text)]


def lint_rules(rules: list[PadRule]) -> None:
    """Each rule has a unique name, a known kind and a spec."""
    seen: set[str] = set()
    for rule in rules:
        if rule.name == "":
            raise LintError(f"rule {rule!r} has invalid name")
        if rule.name in seen:
            raise LintError(f"rule with the name {rule.name} already exists")
        if rule.kind not in KINDS:
            raise LintError(f"rule {rule.name} has invalid kind {rule.kind}")
        if rule.spec == "":
            raise LintError(f"rule {rule.name} has empty spec")
        seen.add(rule.name)


def lint_groups(groups: list[PadGroup]) -> None:
    """Each group has a unique, non-empty name."""
    seen: set[str] = set()
    for group in groups:
        logger.info("lint: analyzing group %s", group.name)
        if group.name == "":
            raise LintError(f"group {group!r} has invalid name")
        if group.name in seen:
            raise LintError(f"group with the name {group.name} already exists")
        seen.add(group.name)


def lint_workflows(rules: list[PadRule], workflows: list[PadWorkflow]) -> None:
    """Each workflow has a unique name and only non-empty, known rules."""
    seen: set[str] = set()
    has_extra_actions = False
    for workflow in workflows:
        logger.info("lint: analyzing workflow %s", workflow.name)
        has_actions = bool(workflow.actions)

        if workflow.name in seen:
            raise LintError(f"workflow with the name {workflow.name} already exists")
        if not workflow.rules:
            raise LintError(f"workflow {workflow.name} does not have rules")

        for rule in workflow.rules:
            if rule.rule == "":
                raise LintError("workflow has an empty rule")
            if find_rule(rules, rule.rule) is None:
                raise LintError(f"rule {rule.rule} is unknown")
            has_extra_actions = bool(rule.extra_actions)
            if not has_extra_actions and not has_actions:
                logger.warning(
                    "lint: rule %s will be ignored since it has no actions", rule.rule
                )

        if not has_actions and not has_extra_actions:
            logger.warning("lint: workflow has no actions")

        seen.add(workflow.name)


def _quoted_name(call: str) -> str:
    match = _QUOTED.search(call)
    return match.group(1) if match else ""


def lint_rules_mentions(
    rules: list[PadRule], groups: list[PadGroup], workflows: list[PadWorkflow]
) -> None:
    """Every mentioned rule exists and every rule is used somewhere."""
    uses = {rule.name: 0 for rule in rules}

    for workflow in workflows:
        for rule in workflow.rules:
            if find_rule(rules, rule.rule) is not None:
                uses[rule.rule] += 1

    for call in get_all_matches(r'\$rule\(".*"\)', groups, rules, workflows):
        name = _quoted_name(call)
        if find_rule(rules, name) is None:
            raise LintError(f"the rule {name} isn't defined")
        uses[name] += 1

    for name, total in uses.items():
        if total == 0:
            raise LintError(f"unused rule {name}")


def lint_groups_mentions(
    groups: list[PadGroup], rules: list[PadRule], workflows: list[PadWorkflow]
) -> None:
    """Every mentioned group exists."""
    for call in get_all_matches(r'\$group\(".*"\)', groups, rules, workflows):
        name = _quoted_name(call)
        if find_group(groups, name) is None:
            raise LintError(f"the group {name} isn't defined")


def lint(file: ReviewpadFile) -> None:
    """Run every check; raise LintError on the first failure."""
    lint_groups(file.groups)
    lint_rules(file.rules)
    lint_workflows(file.rules, file.workflows)
    lint_rules_mentions(file.rules, file.groups, file.workflows)
    lint_groups_mentions(file.groups, file.rules, file.workflows)