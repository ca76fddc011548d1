import pytest

from reviewpilot.engine.transform import (
    add_default_merge_method,
    add_default_total_requested_reviewers,
    transform_action,
)


@pytest.mark.parametrize(
    "action, expected",
    [
        ('$assignReviewer(["a", "b"])', '$assignReviewer(["a", "b"], 99)'),
        ('$assignReviewer($team("core"))', '$assignReviewer($team("core"), 99)'),
        ('$assignReviewer($group("seniors"))', '$assignReviewer($group("seniors"), 99)'),
    ],
)
def test_reviewer_count_is_added(action, expected):
    assert add_default_total_requested_reviewers(action) == expected


def test_reviewer_count_left_alone_when_present():
    action = '$assignReviewer(["a"], 1)'
    assert add_default_total_requested_reviewers(action) == action


def test_unrelated_action_unchanged():
    action = '$addLabel("small")'
    assert transform_action(action) == action


def test_merge_default_method():
    assert add_default_merge_method("$merge()") == '$merge("merge")'
    assert add_default_merge_method('$merge("squash")') == '$merge("squash")'


def test_transform_is_idempotent():
    for action in ["$merge()", '$assignReviewer(["a"])', '$assignReviewer($team("t"))']:
        once = transform_action(action)
        assert transform_action(once) == once