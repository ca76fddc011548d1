"""A file of a pull request together with its parsed patch."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from reviewpilot.aladino.diff import DiffBlock, DiffError, parse_file_patch


@dataclass
class PatchFile:
    filename: str
    patch: str = ""
    diff: list[DiffBlock] = field(default_factory=list)

    @classmethod
    def from_patch(cls, filename: str, patch: str | None) -> "PatchFile":
        """Parse the patch of a file."""
        patch = patch or ""
        try:
            blocks = parse_file_patch(patch)
        except DiffError as err:
            raise DiffError(f"error in file patch {filename}: {err}") from err
        return cls(filename=filename, patch=patch, diff=blocks)

    def query(self, expr: str) -> bool:
        """Tell whether the regular expression matches any added text."""
        try:
            regex = re.compile(expr)
        except re.error as err:
            raise ValueError(f"query: compile error {err}") from err
        return any(
            regex.search(block.new_text) is not None
            for block in self.diff
            if not block.is_context
        )