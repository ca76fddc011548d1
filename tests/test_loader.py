import hashlib

import pytest

from reviewpilot.engine.lang import PadImport
from reviewpilot.engine.loader import (
    LoadEnv,
    LoadError,
    content_hash,
    inline_imports,
    load,
    load_import,
    parse,
    transform,
)

ROOT = """
api-version: reviewpad.com/v1.x
edition: professional
mode: silent
imports:
  - url: https://example.com/child.yml
rules:
  - name: small
    kind: patch
    spec: $size() < 30
workflows:
  - name: merge-small
    if:
      - rule: small
        extra-actions:
          - $merge()
    then:
      - $assignReviewer(["john"])
"""

CHILD = """
labels:
  small:
    color: "aa0000"
groups:
  - name: seniors
    spec: '["john"]'
rules:
  - name: tiny
    kind: patch
    spec: $size() < 5
workflows:
  - name: label-tiny
    if:
      - rule: tiny
    then:
      - $addLabel("small")
"""


def fetcher(documents):
    calls = []

    def fetch(url):
        calls.append(url)
        return documents[url].encode()

    fetch.calls = calls
    return fetch


def test_content_hash_of_empty_input():
    assert content_hash(b"") == "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"


def test_content_hash_str_and_bytes_agree():
    assert content_hash(ROOT) == content_hash(ROOT.encode())
    assert content_hash(ROOT) == hashlib.sha256(ROOT.encode()).hexdigest()


def test_parse_reads_fields():
    file = parse(ROOT)
    assert file.version == "reviewpad.com/v1.x"
    assert file.mode == "silent"
    assert file.imports == [PadImport(url="https://example.com/child.yml")]
    assert file.workflows[0].rules[0].extra_actions == ["$merge()"]


def test_parse_rejects_invalid_yaml():
    with pytest.raises(LoadError):
        parse("rules: [unclosed")


def test_parse_rejects_wrong_shape():
    with pytest.raises(LoadError):
        parse("rules: 3")


def test_transform_fills_defaults_without_touching_input():
    original = parse(ROOT)
    transformed = transform(original)
    assert transformed.workflows[0].actions == ['$assignReviewer(["john"], 99)']
    assert transformed.workflows[0].rules[0].extra_actions == ['$merge("merge")']
    assert original.workflows[0].actions == ['$assignReviewer(["john"])']
    assert transformed.rules == original.rules


def test_load_import_returns_hash_of_content():
    fetch = fetcher({"https://example.com/child.yml": CHILD})
    file, digest = load_import(PadImport(url="https://example.com/child.yml"), fetch)
    assert digest == content_hash(CHILD)
    assert [rule.name for rule in file.rules] == ["tiny"]


def test_load_inlines_imports():
    fetch = fetcher({"https://example.com/child.yml": CHILD})
    file = load(ROOT, fetch)
    assert file.imports == []
    assert [rule.name for rule in file.rules] == ["small", "tiny"]
    assert [workflow.name for workflow in file.workflows] == ["merge-small", "label-tiny"]
    assert [group.name for group in file.groups] == ["seniors"]
    assert file.labels["small"].color == "aa0000"


def test_load_detects_cycles():
    root = "imports:\n  - url: https://example.com/b.yml\n"
    child = "imports:\n  - url: https://example.com/a.yml\n"
    fetch = fetcher({"https://example.com/a.yml": root, "https://example.com/b.yml": child})
    with pytest.raises(LoadError, match="cyclic dependency"):
        load(root, fetch)


def test_repeated_import_is_inlined_once():
    root = (
        "imports:\n"
        "  - url: https://example.com/child.yml\n"
        "  - url: https://example.com/child.yml\n"
    )
    fetch = fetcher({"https://example.com/child.yml": CHILD})
    file = load(root, fetch)
    assert [rule.name for rule in file.rules] == ["tiny"]
    assert len(fetch.calls) == 2


def test_inline_imports_updates_env():
    fetch = fetcher({"https://example.com/child.yml": CHILD})
    env = LoadEnv()
    file = inline_imports(parse(ROOT), env, fetch)
    assert env.visited == {content_hash(CHILD)}
    assert env.stack == set()
    assert file.imports == []