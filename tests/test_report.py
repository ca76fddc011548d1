from reviewpilot.aladino.report import (
    REVIEWPAD_REPORT_COMMENT_ANNOTATION,
    Report,
    ReportWorkflowDetails,
    build_report,
    build_verbose_report,
    merge_report_workflow_details,
    report_header,
)
from reviewpilot.engine.lang import PadWorkflow, PadWorkflowRule
from reviewpilot.engine.program import Metadata, Statement


def _statement(code, workflow, *rule_names):
    rules = [PadWorkflowRule(rule=name) for name in rule_names]
    return Statement(code=code, metadata=Metadata(workflow=workflow, triggered_by=rules))


def test_header():
    assert report_header() == "<!--@annotation-reviewpad-report-->\n**Reviewpad Report**\n\n"


def test_verbose_report_of_none_is_empty():
    assert build_verbose_report(None) == ""


def test_empty_report():
    assert build_verbose_report(Report()) == ":scroll: **Explanation**\nNo workflows activated"


def test_add_creates_workflow_row():
    report = Report()
    workflow = PadWorkflow(name="wf", description="desc")
    report.add(_statement("$a()", workflow, "r1"))
    text = build_verbose_report(report)
    assert text.endswith("| wf | r1<br> | `$a()`<br> | desc |\n")
    assert "| - | - | - | - |\n" in text


def test_add_merges_rules_but_keeps_first_action():
    report = Report()
    workflow = PadWorkflow(name="wf")
    report.add(_statement("$a()", workflow, "r1"))
    report.add(_statement("$b()", workflow, "r2", "r1"))
    details = report.workflow_details["wf"]
    assert list(details.rules) == ["r1", "r2"]
    assert details.actions == ["$a()"]


def test_merge_returns_left_with_union():
    left = ReportWorkflowDetails(name="wf", rules={"a": True})
    right = ReportWorkflowDetails(name="wf", rules={"b": True}, actions=["$x()"])
    merged = merge_report_workflow_details(left, right)
    assert merged is left
    assert set(merged.rules) == {"a", "b"}
    assert merged.actions == []


def test_build_report_starts_with_annotation():
    report = Report()
    report.add(_statement("$a()", PadWorkflow(name="wf"), "r1"))
    text = build_report(report)
    assert text.startswith(REVIEWPAD_REPORT_COMMENT_ANNOTATION)
    assert text == report_header() + build_verbose_report(report)