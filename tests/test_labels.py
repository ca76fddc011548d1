import pytest

from reviewpilot.collector import Collector
from reviewpilot.engine.env import Env, ExecError, PullRequest
from reviewpilot.engine.labels import (
    LabelNotFoundError,
    check_label_exists,
    create_label,
    validate_label_color,
)
from reviewpilot.engine.lang import PadLabel


class FakeGitHub:
    def __init__(self, labels=(), broken=False):
        self.labels = set(labels)
        self.created = []
        self.broken = broken

    def get_label(self, owner, repo, name):
        if self.broken:
            raise ConnectionError("unreachable")
        if name not in self.labels:
            raise LabelNotFoundError(name)
        return name

    def create_label(self, owner, repo, name, color, description):
        self.created.append((owner, repo, name, color, description))
        self.labels.add(name)


def make_env(client):
    pull_request = PullRequest(
        url="https://api.github.com/repos/foo/bar/pulls/6", owner="foo", repo="bar", number=6
    )
    return Env(client=client, collector=Collector("", "someone"), pull_request=pull_request,
               interpreter=None)


def test_color_with_hash_is_rejected():
    with pytest.raises(ExecError, match="without the leading #"):
        validate_label_color(PadLabel(color="#a1b2c3"))


def test_invalid_color_is_rejected():
    with pytest.raises(ExecError, match="color code not valid"):
        validate_label_color(PadLabel(color="zzzzzz"))


def test_seven_digit_color_is_rejected():
    with pytest.raises(ExecError, match="color code not valid"):
        validate_label_color(PadLabel(color="a1b2c3d"))


@pytest.mark.parametrize("color", ["a1B2c3", "A1B2C3a1b2c3"])
def test_valid_colors_are_passed_on(color):
    client = FakeGitHub()
    create_label(make_env(client), "bug", PadLabel(color=color, description="d"))
    assert client.created == [("foo", "bar", "bug", color, "d")]


def test_empty_color_is_sent_as_none():
    client = FakeGitHub()
    create_label(make_env(client), "bug", PadLabel(description="broken"))
    assert client.created == [("foo", "bar", "bug", None, "broken")]


def test_invalid_color_creates_nothing():
    client = FakeGitHub()
    with pytest.raises(ExecError):
        create_label(make_env(client), "bug", PadLabel(color="nope"))
    assert client.created == []


def test_check_label_exists():
    env = make_env(FakeGitHub(labels=["bug"]))
    assert check_label_exists(env, "bug") is True
    assert check_label_exists(env, "feature") is False


def test_check_label_other_errors_propagate():
    with pytest.raises(ConnectionError):
        check_label_exists(make_env(FakeGitHub(broken=True)), "bug")