"""Parsing of unified diff patches into blocks of context and changes."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable

_INTEGER = re.compile(r"[+-]?[0-9]+")


class DiffError(ValueError):
    """A patch could not be parsed."""


@dataclass
class DiffSpan:
    start: int
    end: int


@dataclass
class DiffBlock:
    """A run of context lines, or of removed and/or added lines."""

    is_context: bool
    old: DiffSpan | None = None
    new: DiffSpan | None = None
    old_text: str = ""
    new_text: str = ""


@dataclass
class ChunkLinesInfo:
    """Line cursors of a chunk, advanced while the chunk is read."""

    old_line: int
    new_line: int
    num_old: int
    num_new: int


def _atoi(text: str, what: str) -> int:
    if not _INTEGER.fullmatch(text):
        raise DiffError(f"wrong {what} format ({text}): invalid syntax")
    return int(text)


def parse_version_section(section: str) -> tuple[int, int]:
    """Parse ``-start,count`` into (start, count); the count defaults to start."""
    blocks = section.split(",")
    line = abs(_atoi(blocks[0], "line"))
    if len(blocks) < 2:
        return line, line
    return line, _atoi(blocks[1], "num old lines")


def parse_lines(line: str) -> ChunkLinesInfo:
    """Parse a chunk header such as ``@@ -1,3 +1,4 @@``."""
    sections = line.split(" ")
    if len(sections) < 3:
        raise DiffError(f"missing lines info: {line}")
    try:
        old_line, num_old = parse_version_section(sections[1])
    except DiffError as err:
        raise DiffError(f"error when parsing old section {sections[1]}: {err}") from err
    try:
        new_line, num_new = parse_version_section(sections[2])
    except DiffError as err:
        raise DiffError(f"error when parsing new section {sections[2]}: {err}") from err
    return ChunkLinesInfo(old_line=old_line, new_line=new_line, num_old=num_old, num_new=num_new)


def _append_unmodified(blocks: list[DiffBlock], chunk: ChunkLinesInfo, text: str) -> None:
    block = None
    if blocks:
        last = blocks[-1]
        if last.is_context and last.old is not None and last.old.end == chunk.old_line - 1:
            block = last
            block.new_text += "\n" + text
            block.old_text += "\n" + text
    if block is None:
        block = DiffBlock(
            is_context=True,
            old=DiffSpan(chunk.old_line, 0),
            new=DiffSpan(chunk.new_line, 0),
            old_text=text,
            new_text=text,
        )
        blocks.append(block)
    block.old.end = chunk.old_line
    block.new.end = chunk.new_line
    chunk.new_line += 1
    chunk.old_line += 1


def _append_added(blocks: list[DiffBlock], chunk: ChunkLinesInfo, text: str) -> None:
    if blocks and not blocks[-1].is_context:
        block = blocks[-1]
        if block.new is None:
            block.new = DiffSpan(chunk.new_line, 0)
            block.new_text = text
        else:
            block.new_text += "\n" + text
    else:
        block = DiffBlock(is_context=False, new=DiffSpan(chunk.new_line, 0), new_text=text)
        blocks.append(block)
    block.new.end = chunk.new_line
    chunk.new_line += 1


def _append_removed(blocks: list[DiffBlock], chunk: ChunkLinesInfo, text: str) -> None:
    if blocks and not blocks[-1].is_context and blocks[-1].new is None:
        block = blocks[-1]
        block.old_text += "\n" + text
    else:
        block = DiffBlock(is_context=False, old=DiffSpan(chunk.old_line, 0), old_text=text)
        blocks.append(block)
    block.old.end = chunk.old_line
    chunk.old_line += 1


def parse_file_patch_lines(lines: Iterable[str]) -> list[DiffBlock]:
    """Parse the lines of a patch into diff blocks."""
    lines = list(lines)
    blocks: list[DiffBlock] = []
    cursor = iter(enumerate(lines, start=1))

    for number, line in cursor:
        if not line.startswith("@@"):
            continue
        try:
            chunk = parse_lines(line)
        except DiffError as err:
            patch = "\n".join(lines)
            raise DiffError(
                f"error in chunk lines parsing ({number}): {err}\npatch: {patch}"
            ) from err

        old_seen = new_seen = 0
        while old_seen < chunk.num_old or new_seen < chunk.num_new:
            entry = next(cursor, None)
            if entry is None:
                break
            position, chunk_line = entry
            if not chunk_line:
                raise DiffError(f"empty line in chunk ({position})")
            marker, text = chunk_line[0], chunk_line[1:]
            if marker == " ":
                _append_unmodified(blocks, chunk, text)
                old_seen += 1
                new_seen += 1
            elif marker == "+":
                _append_added(blocks, chunk, text)
                new_seen += 1
            elif marker == "-":
                _append_removed(blocks, chunk, text)
                old_seen += 1

    return blocks


def parse_file_patch(patch: str) -> list[DiffBlock]:
    """Parse a patch text into diff blocks."""
    return parse_file_patch_lines(patch.split("\n"))