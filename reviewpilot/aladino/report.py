"""Report of the workflows, rules and actions that ran on a pull request."""

from __future__ import annotations

from dataclasses import dataclass, field

from reviewpilot.engine.program import Statement

REVIEWPAD_REPORT_COMMENT_ANNOTATION = "<!--@annotation-reviewpad-report-->"


@dataclass
class ReportWorkflowDetails:
    name: str
    description: str = ""
    rules: dict[str, bool] = field(default_factory=dict)
    actions: list[str] = field(default_factory=list)


def merge_report_workflow_details(
    left: ReportWorkflowDetails, right: ReportWorkflowDetails
) -> ReportWorkflowDetails:
    """Add the rules of right to left; left's actions are kept as they are."""
    for rule in right.rules:
        left.rules.setdefault(rule, True)
    return left


@dataclass
class Report:
    workflow_details: dict[str, ReportWorkflowDetails] = field(default_factory=dict)

    def add(self, statement: Statement) -> None:
        """Record an executed statement under its workflow."""
        workflow = statement.metadata.workflow
        details = ReportWorkflowDetails(
            name=workflow.name,
            description=workflow.description,
            rules=dict.fromkeys((rule.rule for rule in statement.metadata.triggered_by), True),
            actions=[statement.code],
        )
        existing = self.workflow_details.get(workflow.name)
        if existing is None:
            self.workflow_details[workflow.name] = details
        else:
            self.workflow_details[workflow.name] = merge_report_workflow_details(
                existing, details
            )


def report_header() -> str:
    """The annotation that marks a report comment, followed by its title."""
    return f"{REVIEWPAD_REPORT_COMMENT_ANNOTATION}\n**Reviewpad Report**\n\n"


def build_verbose_report(report: Report | None) -> str:
    """Markdown table of the activated workflows."""
    if report is None:
        return ""

    explanation = ":scroll: **Explanation**\n"
    if not report.workflow_details:
        return explanation + "No workflows activated"

    parts = [
        explanation,
        "| Workflows <sub><sup>activated</sup></sub> | Rules <sub><sup>triggered</sup></sub> "
        "| Actions <sub><sup>ran</sub></sup> | Description |\n",
        "| - | - | - | - |\n",
    ]
    for workflow in report.workflow_details.values():
        rules = "".join(f"{rule}<br>" for rule in workflow.rules)
        actions = "".join(f"`{action}`<br>" for action in workflow.actions)
        parts.append(f"| {workflow.name} | {rules} | {actions} | {workflow.description} |\n")
    return "".join(parts)


def build_report(report: Report | None) -> str:
    """The full text of a report comment."""
    return report_header() + build_verbose_report(report)