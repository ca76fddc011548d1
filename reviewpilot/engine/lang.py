"""Data model of a reviewpad configuration file."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

PROFESSIONAL_EDITION = "professional"
TEAM_EDITION = "team"
SILENT_MODE = "silent"
VERBOSE_MODE = "verbose"

KINDS = ("patch", "author")


def _mapping(data: Any, what: str) -> Mapping[str, Any]:
    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise ValueError(f"{what} must be a mapping, got {type(data).__name__}")
    return data


def _text(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if isinstance(value, (Mapping, list)):
        raise ValueError(f"field {key!r} must be a scalar")
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _flag(data: Mapping[str, Any], key: str) -> bool:
    value = data.get(key)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise ValueError(f"field {key!r} must be a boolean")
    return value


def _items(data: Mapping[str, Any], key: str) -> list:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError(f"field {key!r} must be a list")
    return value


def _strings(data: Mapping[str, Any], key: str) -> list[str]:
    result = []
    for item in _items(data, key):
        if isinstance(item, (Mapping, list)):
            raise ValueError(f"entries of {key!r} must be scalars")
        result.append("" if item is None else str(item))
    return result


@dataclass
class PadImport:
    url: str = ""


@dataclass
class PadRule:
    name: str = ""
    kind: str = ""
    description: str = ""
    spec: str = ""


@dataclass
class PadWorkflowRule:
    rule: str = ""
    extra_actions: list[str] = field(default_factory=list)


@dataclass
class PadLabel:
    name: str = ""
    color: str = ""
    description: str = ""


@dataclass
class PadWorkflow:
    name: str = ""
    description: str = ""
    always_run: bool = False
    rules: list[PadWorkflowRule] = field(default_factory=list)
    actions: list[str] = field(default_factory=list)


@dataclass
class PadGroup:
    name: str = ""
    description: str = ""
    kind: str = ""
    type: str = ""
    spec: str = ""
    param: str = ""
    where: str = ""


def _import_from(data: Any) -> PadImport:
    data = _mapping(data, "import")
    return PadImport(url=_text(data, "url"))


def _rule_from(data: Any) -> PadRule:
    data = _mapping(data, "rule")
    return PadRule(
        name=_text(data, "name"),
        kind=_text(data, "kind"),
        description=_text(data, "description"),
        spec=_text(data, "spec"),
    )


def _workflow_rule_from(data: Any) -> PadWorkflowRule:
    data = _mapping(data, "workflow rule")
    return PadWorkflowRule(
        rule=_text(data, "rule"),
        extra_actions=_strings(data, "extra-actions"),
    )


def _label_from(data: Any) -> PadLabel:
    data = _mapping(data, "label")
    return PadLabel(
        name=_text(data, "name"),
        color=_text(data, "color"),
        description=_text(data, "description"),
    )


def _workflow_from(data: Any) -> PadWorkflow:
    data = _mapping(data, "workflow")
    return PadWorkflow(
        name=_text(data, "name"),
        description=_text(data, "description"),
        always_run=_flag(data, "always-run"),
        rules=[_workflow_rule_from(item) for item in _items(data, "if")],
        actions=_strings(data, "then"),
    )


def _group_from(data: Any) -> PadGroup:
    data = _mapping(data, "group")
    return PadGroup(
        name=_text(data, "name"),
        description=_text(data, "description"),
        kind=_text(data, "kind"),
        type=_text(data, "type"),
        spec=_text(data, "spec"),
        param=_text(data, "param"),
        where=_text(data, "where"),
    )


@dataclass
class ReviewpadFile:
    version: str = ""
    edition: str = ""
    mode: str = ""
    ignore_errors: bool = False
    imports: list[PadImport] = field(default_factory=list)
    groups: list[PadGroup] = field(default_factory=list)
    rules: list[PadRule] = field(default_factory=list)
    labels: dict[str, PadLabel] = field(default_factory=dict)
    workflows: list[PadWorkflow] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "ReviewpadFile":
        """Build a file from the mapping a YAML document decodes to."""
        data = _mapping(data, "reviewpad file")
        labels = {
            str(key): _label_from(value)
            for key, value in _mapping(data.get("labels"), "labels").items()
        }
        return cls(
            version=_text(data, "api-version"),
            edition=_text(data, "edition"),
            mode=_text(data, "mode"),
            ignore_errors=_flag(data, "ignore-errors"),
            imports=[_import_from(item) for item in _items(data, "imports")],
            groups=[_group_from(item) for item in _items(data, "groups")],
            rules=[_rule_from(item) for item in _items(data, "rules")],
            labels=labels,
            workflows=[_workflow_from(item) for item in _items(data, "workflows")],
        )

    def append_labels(self, other: "ReviewpadFile") -> None:
        self.labels.update(other.labels)

    def append_rules(self, other: "ReviewpadFile") -> None:
        self.rules.extend(other.rules)

    def append_groups(self, other: "ReviewpadFile") -> None:
        self.groups.extend(other.groups)

    def append_workflows(self, other: "ReviewpadFile") -> None:
        self.workflows.extend(other.workflows)


def find_group(groups: list[PadGroup], name: str) -> PadGroup | None:
    """Return the first group with the given name, or None."""
    return next((group for group in groups if group.name == name), None)


def find_rule(rules: list[PadRule], name: str) -> PadRule | None:
    """Return the first rule with the given name, or None."""
    return next((rule for rule in rules if rule.name == name), None)