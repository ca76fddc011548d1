# reviewpilot

`reviewpilot` reads a review policy file written in YAML, checks it, resolves
its imports and works out which actions should be run on a pull request. It
also holds the typed expression language that rules and actions are written
in: syntax tree, types, type inference, values and evaluation, plus a parser
for unified diff patches.

A policy file describes:

- **labels** that must exist in the repository,
- **groups** of people, given as a static list or as a filter,
- **rules**, each a boolean expression,
- **workflows**, which run their actions when any of their rules holds.

## Loading and checking a policy

```python
from reviewpilot.engine.loader import load, LoadError
from reviewpilot.engine.linter import lint, LintError

with open("reviewpad.yml", "rb") as handle:
    data = handle.read()


def fetch(url):
    """Return the raw bytes of an imported policy file."""
    ...


policy = load(data, fetch)

try:
    lint(policy)
except LintError as error:
    print(f"policy rejected: {error}")
```

`load` parses the YAML into a `ReviewpadFile`
(`reviewpilot.engine.lang`), normalises the workflow actions and inlines
every entry under `imports`. Each import is fetched through `fetch`, a
callable taking a URL and returning bytes; without one, a plain HTTP GET
through `urllib` is used. Imports are followed depth first, their labels,
groups, rules and workflows are appended to the importing file, a file whose
content was already seen is skipped, and an import cycle raises `LoadError`.
Malformed YAML or fields of the wrong shape also raise `LoadError`.

`lint` raises `LintError` on the first problem it finds. It checks that:

- group names are present and unique,
- rule names are present and unique, every rule has a known kind
  (`patch` or `author`) and a non-empty spec,
- workflow names are unique, every workflow has rules, and every rule it
  names is non-empty and defined,
- every rule is used, by a workflow or by a `$rule("...")` mention, and
  every `$rule("...")` and `$group("...")` mention refers to something
  defined.

Workflows or rules without any action are only logged as warnings.

## Action normalisation

Actions are rewritten so that optional arguments are always present:

```python
from reviewpilot.engine.transform import transform_action

transform_action('$merge()')
# '$merge("merge")'

transform_action('$assignReviewer(["alice", "bob"])')
# '$assignReviewer(["alice", "bob"], 99)'
```

## Building a program

`reviewpilot.engine.evaluation.evaluate(file, env)` takes a linted file and
an `Env` (`reviewpilot.engine.env`) holding a repository client, a
`Collector`, a `PullRequest` and an interpreter. It:

1. creates every label the repository does not have yet (through the
   client's `get_label` and `create_label`; `get_label` signals a missing
   label by raising `LabelNotFoundError` from `reviewpilot.engine.labels`)
   and registers it with the interpreter,
2. registers every group and rule with the interpreter,
3. walks the workflows in order, asks the interpreter to evaluate each rule,
   and returns a `Program`: a list of `Statement` objects, each carrying
   the action code and the workflow and rules that triggered it.

A workflow with `always-run: false` that fires stops later such workflows
from running; workflows with `always-run: true` are always considered.
Errors raised along the way are reported to the collector and re-raised.

The interpreter is anything that follows the `Interpreter` protocol in
`reviewpilot.engine.env` (`process_group`, `process_label`,
`process_rule`, `eval_expr`, `exec_program`, `exec_statement`,
`report`). `PullRequest.project()` extracts `owner/repo` from a pull
request URL ending in `github.com/repos/<owner>/<repo>/pulls/<number>`.

## Usage events

`reviewpilot.collector.Collector(token, id, client)` forwards events to a
tracking client with `update_user` and `track` methods, tagging each event
with a per-run `runnerId` and an increasing `order`. With an empty token
it does nothing.

## The expression language

The `reviewpilot.aladino` package holds the typed expression language:

- `reviewpilot.aladino.expr` – the syntax tree (`BoolConst`, `IntConst`,
  `StringConst`, `Variable`, `UnaryOp`, `BinaryOp`, `FunctionCall`,
  `Array`, `TypedExpr`, `Lambda`), the operators `UnaryOperator` and
  `BinaryOperator`, and time constants: `time_const("2022-06-01")` or
  `time_const("2022-06-01T10:30:00")` for UTC dates, and
  `relative_time_const("3 days ago")` for moments relative to now (units:
  year, month, week, day, hour, minute),
- `reviewpilot.aladino.typesys` and `reviewpilot.aladino.typeinfer` –
  types and type inference (`type_inference`, `TypeInferenceError`),
- `reviewpilot.aladino.values` – runtime values,
- `reviewpilot.aladino.builtins` – tables of built-in functions and
  actions (`BuiltIns`), combined with `merge_builtins`,
- `reviewpilot.aladino.env` – the evaluation environment; `new_eval_env`
  builds one from `(filename, patch)` pairs,
- `reviewpilot.aladino.evaluation` – `evaluate`, `eval_condition`,
  `eval_group`,
- `reviewpilot.aladino.execution` – `type_check_exec` and `execute`, which
  run a call as a built-in action,
- `reviewpilot.aladino.builder` – `build_filter`, the expression behind a
  filter group,
- `reviewpilot.aladino.diff` and `reviewpilot.aladino.patchfile` – parsing
  unified diff patches and searching the added lines with a regular
  expression,
- `reviewpilot.aladino.report` – the Markdown summary of the workflows,
  rules and actions that ran.

```python
from reviewpilot.aladino.builtins import BuiltIns
from reviewpilot.aladino.env import Env
from reviewpilot.aladino.evaluation import eval_condition
from reviewpilot.aladino.expr import BinaryOp, BinaryOperator, IntConst
from reviewpilot.aladino.typeinfer import type_inference
from reviewpilot.collector import Collector
from reviewpilot.engine.env import PullRequest

env = Env(
    client=None,
    collector=Collector("", "bot"),
    pull_request=PullRequest(url="https://example.com/pulls/1"),
    builtins=BuiltIns(),
)
expr = BinaryOp(IntConst(3), BinaryOperator.LESS_THAN, IntConst(5))

type_inference(env, expr)   # BoolType()
eval_condition(env, expr)   # True
```

```python
from reviewpilot.aladino.patchfile import PatchFile

patch = "@@ -1,2 +1,2 @@\n context\n-old line\n+new line"
changed = PatchFile.from_patch("notes.txt", patch)

changed.query(r"new")   # True
changed.query(r"old")   # False, only added lines are searched
```

## What the package does not do

- It does not parse the text of rule specs or actions into expressions;
  expressions are built as Python objects.
- It ships no built-in functions or actions, and no interpreter object that
  implements the `Interpreter` protocol; both are supplied by the caller.
- It includes no client for a code-hosting service: labels are created,
  and pull request data is read, only through the client object you pass in.
  Reports are built as Markdown text but not posted anywhere.
- It has no command-line program.

## Running the tests

Install the `test` extra and run `pytest` from the project root.