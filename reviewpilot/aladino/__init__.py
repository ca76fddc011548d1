"""The typed expression language: syntax tree, types, values, evaluation, diffs and reports."""