import math

import pytest

from camcore.controls import (
    BooleanDescription,
    BooleanValue,
    BytesDescription,
    BytesValue,
    CameraControl,
    EnumDescription,
    EnumValue,
    FloatDescription,
    FloatRangeDescription,
    FloatValue,
    IntegerDescription,
    IntegerRangeDescription,
    IntegerValue,
    KeyValue,
    KeyValuePairDescription,
    NoneDescription,
    NoValue,
    PointDescription,
    PointValue,
    RGBDescription,
    RGBValue,
    StringDescription,
    StringValue,
)
from camcore.types import KnownCameraControl, KnownCameraControlFlag, OtherControl


@pytest.mark.parametrize(
    "description, expected",
    [
        (NoneDescription(), NoValue()),
        (IntegerDescription(7, 0, 1), IntegerValue(7)),
        (IntegerRangeDescription(0, 100, 42, 1, 50), IntegerValue(42)),
        (FloatDescription(0.5, 0.0, 0.25), FloatValue(0.5)),
        (FloatRangeDescription(0.0, 1.0, 0.75, 0.25, 0.5), FloatValue(0.75)),
        (BooleanDescription(True, False), BooleanValue(True)),
        (StringDescription("abc", None), StringValue("abc")),
        (BytesDescription(b"\x01\x02", b""), BytesValue(b"\x01\x02")),
        (KeyValuePairDescription(3, 4, (0, 0)), KeyValue(3, 4)),
        (PointDescription((1.5, 2.5), (0.0, 0.0)), PointValue(1.5, 2.5)),
        (EnumDescription(2, [1, 2, 3], 1), EnumValue(2)),
        (RGBDescription((0.1, 0.2, 0.3), (1, 1, 1), (0, 0, 0)), RGBValue(0.1, 0.2, 0.3)),
    ],
)
def test_value_reflects_current(description, expected):
    assert description.value() == expected


def test_current_value_always_verifies_for_simple_kinds():
    for description in [
        NoneDescription(),
        BooleanDescription(False, True),
        StringDescription("x"),
        BytesDescription(b"a", b"b"),
        KeyValuePairDescription(1, 2, (1, 2)),
        PointDescription((0, 0), (0, 0)),
        EnumDescription(5, (5, 6), 6),
    ]:
        assert description.verify_setter(description.value()) is True


def test_none_description_accepts_only_no_value():
    desc = NoneDescription()
    assert desc.verify_setter(NoValue()) is True
    assert desc.verify_setter(IntegerValue(0)) is False


def test_integer_step_zero_accepts_anything():
    desc = IntegerDescription(3, 3, 0)
    assert desc.verify_setter(StringValue("anything")) is True


def test_integer_step():
    desc = IntegerDescription(0, 0, 5)
    assert desc.verify_setter(IntegerValue(10)) is True
    assert desc.verify_setter(IntegerValue(3)) is False
    assert desc.verify_setter(FloatValue(10.0)) is False


def test_integer_step_negative_values():
    desc = IntegerDescription(0, 0, 3)
    assert desc.verify_setter(IntegerValue(-6)) is True
    assert desc.verify_setter(IntegerValue(-7)) is False


def test_integer_range_bounds():
    desc = IntegerRangeDescription(0, 100, 50, 10, 50)
    assert desc.verify_setter(IntegerValue(100)) is True
    assert desc.verify_setter(IntegerValue(0)) is True
    assert desc.verify_setter(IntegerValue(110)) is False
    assert desc.verify_setter(IntegerValue(-10)) is False
    assert desc.verify_setter(IntegerValue(55)) is False
    assert desc.verify_setter(BooleanValue(True)) is False


def test_float_step():
    desc = FloatDescription(0.5, 0.0, 0.5)
    assert desc.verify_setter(FloatValue(1.5)) is True
    assert desc.verify_setter(FloatValue(0.3)) is False
    assert desc.verify_setter(FloatValue(math.inf)) is False
    assert desc.verify_setter(FloatValue(math.nan)) is False
    assert desc.verify_setter(IntegerValue(1)) is False


def test_float_step_zero_accepts_anything():
    desc = FloatDescription(0.5, 0.0, 0.0)
    assert desc.verify_setter(NoValue()) is True


def test_float_range_bounds():
    desc = FloatRangeDescription(0.0, 2.0, 1.0, 0.5, 1.0)
    assert desc.verify_setter(FloatValue(2.0)) is True
    assert desc.verify_setter(FloatValue(2.5)) is False
    assert desc.verify_setter(FloatValue(-0.5)) is False
    assert desc.verify_setter(FloatValue(1.25)) is False


@pytest.mark.parametrize(
    "description, good, bad",
    [
        (BooleanDescription(True, True), BooleanValue(False), IntegerValue(1)),
        (StringDescription("a"), StringValue("b"), BytesValue(b"b")),
        (BytesDescription(b"", b""), BytesValue(b"\x00"), StringValue("")),
        (KeyValuePairDescription(0, 0, (0, 0)), KeyValue(9, 9), PointValue(9, 9)),
    ],
)
def test_type_matching_descriptions(description, good, bad):
    assert description.verify_setter(good) is True
    assert description.verify_setter(bad) is False


def test_point_requires_finite():
    desc = PointDescription((0, 0), (0, 0))
    assert desc.verify_setter(PointValue(1.0, -2.0)) is True
    assert desc.verify_setter(PointValue(math.nan, 0.0)) is False
    assert desc.verify_setter(PointValue(0.0, math.inf)) is False


def test_enum_membership():
    desc = EnumDescription(1, [1, 2, 3], 1)
    assert desc.verify_setter(EnumValue(3)) is True
    assert desc.verify_setter(EnumValue(4)) is False
    assert desc.verify_setter(IntegerValue(3)) is False


def test_rgb_compares_against_max():
    desc = RGBDescription((0, 0, 0), (1, 1, 1), (0, 0, 0))
    assert desc.verify_setter(RGBValue(1, 1, 1)) is True
    assert desc.verify_setter(RGBValue(0.5, 1, 1)) is False


def test_setter_strings():
    assert str(NoValue()) == "Value: None"
    assert str(IntegerValue(5)) == "IntegerValue: 5"
    assert str(BooleanValue(True)) == "BoolValue: true"
    assert str(StringValue("abc")) == "StrValue: abc"
    assert str(KeyValue(1, 2)) == "KVValue: (1, 2)"
    assert str(EnumValue(4)) == "EnumValue: 4"
    assert str(FloatValue(0.25)) == "FloatValue: 0.25"


def test_whole_floats_print_without_fraction():
    assert str(FloatValue(1.0)) == "FloatValue: 1"
    assert str(PointValue(2.0, 0.5)) == "PointValue: (2, 0.5)"


def test_bytes_print_as_hex_list():
    assert str(BytesValue(b"\x01\xff")) == "BytesValue: [1, ff]"


def test_description_strings():
    assert str(NoneDescription()) == "(None)"
    assert str(IntegerRangeDescription(0, 100, 50, 10, 50)) == (
        "(Current: 50, Default: 50, Step: 10, Range: (0, 100))"
    )
    assert str(BooleanDescription(True, False)) == "(Current: true, Default: false)"
    assert str(StringDescription("abc")) == "(Current: abc, Default: None)"
    assert str(StringDescription("abc", "x")) == '(Current: abc, Default: Some("x"))'
    assert str(EnumDescription(1, [1, 2], 2)) == (
        "Current: 1, Possible Values: [1, 2], Default: 2"
    )
    assert str(KeyValuePairDescription(1, 2, (3, 4))) == "Current: (1, 2), Default: (3, 4)"


def test_camera_control_value_and_str():
    desc = IntegerDescription(1, 0, 1)
    control = CameraControl(
        KnownCameraControl.Brightness,
        "Brightness",
        desc,
        [KnownCameraControlFlag.Manual],
        True,
    )
    assert control.value() == IntegerValue(1)
    assert str(control) == (
        "Control: Brightness, Name: Brightness, "
        "Value: (Current: 1, Default: 0, Step: 1), Flag: [Manual], Active: true"
    )


def test_camera_control_active_can_change():
    control = CameraControl(OtherControl(9), "custom", NoneDescription(), [], True)
    control.active = False
    assert control.active is False
    assert str(control).endswith("Flag: [], Active: false")


def test_setters_compare_by_kind():
    assert IntegerValue(1) != EnumValue(1)
    assert IntegerValue(1) == IntegerValue(1)
    assert hash(FloatValue(2)) == hash(FloatValue(2.0))