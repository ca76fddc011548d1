"""Creation and lookup of repository labels."""

from __future__ import annotations

import re

from reviewpilot.engine.env import Env, ExecError
from reviewpilot.engine.lang import PadLabel

_COLOR = re.compile(r"([0-9A-F]{6}){1,2}", re.IGNORECASE)


class LabelNotFoundError(LookupError):
    """The repository has no label of that name."""


def validate_label_color(label: PadLabel) -> None:
    """Check that a label colour, if given, is a hexadecimal code without '#'."""
    if label.color and not _COLOR.fullmatch(label.color):
        if label.color.startswith("#"):
            raise ExecError(
                "reviewpad: evalLabel: the hexadecimal color code for the label "
                "should be without the leading #"
            )
        raise ExecError("reviewpad: evalLabel: color code not valid")


def create_label(env: Env, label_name: str, label: PadLabel) -> None:
    """Create the label in the pull request's repository."""
    validate_label_color(label)
    pull_request = env.pull_request
    env.client.create_label(
        pull_request.owner,
        pull_request.repo,
        name=label_name,
        color=label.color or None,
        description=label.description,
    )


def check_label_exists(env: Env, label_name: str) -> bool:
    """Tell whether the pull request's repository has the label."""
    pull_request = env.pull_request
    try:
        env.client.get_label(pull_request.owner, pull_request.repo, label_name)
    except LabelNotFoundError:
        return False
    return True