import pytest

from reviewpilot.aladino.values import (
    ArrayValue,
    BoolValue,
    FunctionValue,
    IntValue,
    StringValue,
    TimeValue,
)


def test_kinds_and_has_kind_of():
    assert IntValue(1).kind() == "IntValue"
    assert BoolValue(True).has_kind_of("BoolValue")
    assert not StringValue("a").has_kind_of("IntValue")
    assert TimeValue(5).has_kind_of("TimeValue")
    assert ArrayValue([]).kind() == "ArrayValue"


def test_scalar_equality():
    assert IntValue(3).equals(IntValue(3))
    assert not IntValue(3).equals(IntValue(4))
    assert StringValue("x").equals(StringValue("x"))
    assert not BoolValue(True).equals(BoolValue(False))
    assert TimeValue(10) == TimeValue(10)


def test_different_kinds_never_equal():
    assert not IntValue(7).equals(TimeValue(7))
    assert not StringValue("1").equals(IntValue(1))
    assert IntValue(1) != BoolValue(True)


def test_array_equality():
    left = ArrayValue([IntValue(1), StringValue("a")])
    assert left.equals(ArrayValue([IntValue(1), StringValue("a")]))
    assert not left.equals(ArrayValue([IntValue(1)]))
    assert not left.equals(ArrayValue([IntValue(1), StringValue("b")]))
    assert not left.equals(IntValue(1))


def test_nested_arrays():
    inner = ArrayValue([BoolValue(True)])
    assert ArrayValue([inner]).equals(ArrayValue([ArrayValue([BoolValue(True)])]))
    assert not ArrayValue([inner]).equals(ArrayValue([ArrayValue([BoolValue(False)])]))


def test_functions_compare_by_kind_only():
    first = FunctionValue(lambda args: IntValue(1))
    second = FunctionValue(lambda args: StringValue("other"))
    assert first.equals(second)
    assert not first.equals(IntValue(1))
    assert first.fn([]).equals(IntValue(1))


def test_values_are_unhashable():
    with pytest.raises(TypeError):
        hash(StringValue("a"))