"""Loading of reviewpad files, inlining their imports."""

from __future__ import annotations

import dataclasses
import hashlib
import urllib.request
from dataclasses import dataclass, field
from typing import Callable

import yaml

from reviewpilot.engine.lang import PadImport, PadWorkflow, PadWorkflowRule, ReviewpadFile
from reviewpilot.engine.transform import transform_action

Fetch = Callable[[str], bytes]


class LoadError(ValueError):
    """A reviewpad file or one of its imports could not be loaded."""


@dataclass
class LoadEnv:
    visited: set[str] = field(default_factory=set)
    stack: set[str] = field(default_factory=set)


def _as_bytes(data: bytes | str) -> bytes:
    return data.encode("utf-8") if isinstance(data, str) else data


def content_hash(data: bytes | str) -> str:
    """Hex SHA-256 digest of the data."""
    return hashlib.sha256(_as_bytes(data)).hexdigest()


def parse(data: bytes | str) -> ReviewpadFile:
    """Decode a YAML document into a reviewpad file."""
    try:
        document = yaml.safe_load(_as_bytes(data))
    except yaml.YAMLError as err:
        raise LoadError(f"loader: {err}") from err
    try:
        return ReviewpadFile.from_dict(document)
    except ValueError as err:
        raise LoadError(f"loader: {err}") from err


def _transform_workflow(workflow: PadWorkflow) -> PadWorkflow:
    return PadWorkflow(
        name=workflow.name,
        description=workflow.description,
        always_run=workflow.always_run,
        rules=[
            PadWorkflowRule(
                rule=rule.rule,
                extra_actions=[transform_action(action) for action in rule.extra_actions],
            )
            for rule in workflow.rules
        ],
        actions=[transform_action(action) for action in workflow.actions],
    )


def transform(file: ReviewpadFile) -> ReviewpadFile:
    """Return a copy of the file with default arguments filled into actions."""
    return dataclasses.replace(
        file,
        imports=list(file.imports),
        groups=list(file.groups),
        rules=list(file.rules),
        labels=dict(file.labels),
        workflows=[_transform_workflow(workflow) for workflow in file.workflows],
    )


def _http_get(url: str) -> bytes:
    try:
        with urllib.request.urlopen(url) as response:
            return response.read()
    except OSError as err:
        raise LoadError(f"loader: cannot fetch {url}: {err}") from err


def load_import(pad_import: PadImport, fetch: Fetch = _http_get) -> tuple[ReviewpadFile, str]:
    """Fetch, parse and transform an import; return it with its content hash."""
    content = fetch(pad_import.url)
    return transform(parse(content)), content_hash(content)


def inline_imports(file: ReviewpadFile, env: LoadEnv, fetch: Fetch = _http_get) -> ReviewpadFile:
    """Merge every import, depth first, into the file and clear its imports."""
    for pad_import in file.imports:
        imported, digest = load_import(pad_import, fetch)

        if digest in env.stack:
            raise LoadError("loader: cyclic dependency")
        if digest in env.visited:
            continue

        env.stack.add(digest)
        env.visited.add(digest)
        subtree = inline_imports(imported, env, fetch)
        env.stack.discard(digest)

        file.append_labels(subtree)
        file.append_groups(subtree)
        file.append_rules(subtree)
        file.append_workflows(subtree)

    file.imports = []
    return file


def load(data: bytes | str, fetch: Fetch | None = None) -> ReviewpadFile:
    """Parse a reviewpad file and inline everything it imports."""
    file = transform(parse(data))
    digest = content_hash(data)
    env = LoadEnv(visited={digest}, stack={digest})
    return inline_imports(file, env, fetch or _http_get)