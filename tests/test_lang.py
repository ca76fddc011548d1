import pytest

from reviewpilot.engine.lang import (
    PadGroup,
    PadImport,
    PadLabel,
    PadRule,
    PadWorkflow,
    PadWorkflowRule,
    ReviewpadFile,
    find_group,
    find_rule,
)


def sample_document():
    return {
        "api-version": "reviewpad.com/v1alpha",
        "edition": "professional",
        "mode": "verbose",
        "ignore-errors": True,
        "imports": [{"url": "https://example.com/base.yml"}],
        "labels": {"small": {"name": "small-pr", "color": "aa0000"}},
        "groups": [{"name": "seniors", "kind": "developer", "spec": '["a"]'}],
        "rules": [{"name": "tiny", "kind": "patch", "spec": "$size() < 10"}],
        "workflows": [
            {
                "name": "label",
                "always-run": True,
                "if": [{"rule": "tiny", "extra-actions": ['$addLabel("x")']}],
                "then": ['$addLabel("small")'],
            }
        ],
    }


def test_from_dict_reads_all_fields():
    file = ReviewpadFile.from_dict(sample_document())
    assert file.version == "reviewpad.com/v1alpha"
    assert file.edition == "professional"
    assert file.mode == "verbose"
    assert file.ignore_errors is True
    assert file.imports == [PadImport(url="https://example.com/base.yml")]
    assert file.labels == {"small": PadLabel(name="small-pr", color="aa0000")}
    assert file.groups == [PadGroup(name="seniors", kind="developer", spec='["a"]')]
    assert file.rules == [PadRule(name="tiny", kind="patch", spec="$size() < 10")]
    assert file.workflows == [
        PadWorkflow(
            name="label",
            always_run=True,
            rules=[PadWorkflowRule(rule="tiny", extra_actions=['$addLabel("x")'])],
            actions=['$addLabel("small")'],
        )
    ]


def test_from_dict_empty_document_gives_defaults():
    assert ReviewpadFile.from_dict(None) == ReviewpadFile()
    assert ReviewpadFile.from_dict({}) == ReviewpadFile()


def test_from_dict_rejects_wrong_shapes():
    with pytest.raises(ValueError):
        ReviewpadFile.from_dict(["not", "a", "mapping"])
    with pytest.raises(ValueError):
        ReviewpadFile.from_dict({"rules": {"name": "x"}})
    with pytest.raises(ValueError):
        ReviewpadFile.from_dict({"ignore-errors": "yes"})


def test_equality_is_structural():
    assert ReviewpadFile.from_dict(sample_document()) == ReviewpadFile.from_dict(
        sample_document()
    )
    other = sample_document()
    other["mode"] = "silent"
    assert ReviewpadFile.from_dict(other) != ReviewpadFile.from_dict(sample_document())


def test_append_merges_content():
    base = ReviewpadFile(
        rules=[PadRule(name="a")],
        groups=[PadGroup(name="g1")],
        labels={"x": PadLabel(name="old")},
        workflows=[PadWorkflow(name="w1")],
    )
    extra = ReviewpadFile(
        rules=[PadRule(name="b")],
        groups=[PadGroup(name="g2")],
        labels={"x": PadLabel(name="new"), "y": PadLabel(name="y")},
        workflows=[PadWorkflow(name="w2")],
    )
    base.append_labels(extra)
    base.append_rules(extra)
    base.append_groups(extra)
    base.append_workflows(extra)
    assert [rule.name for rule in base.rules] == ["a", "b"]
    assert [group.name for group in base.groups] == ["g1", "g2"]
    assert [wf.name for wf in base.workflows] == ["w1", "w2"]
    assert base.labels == {"x": PadLabel(name="new"), "y": PadLabel(name="y")}


def test_find_group_and_rule():
    groups = [PadGroup(name="a", spec="1"), PadGroup(name="b", spec="2")]
    rules = [PadRule(name="r", spec="s")]
    assert find_group(groups, "b") == groups[1]
    assert find_group(groups, "c") is None
    assert find_rule(rules, "r") == rules[0]
    assert find_rule(rules, "missing") is None