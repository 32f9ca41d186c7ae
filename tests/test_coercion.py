"""Tests for conversion of raw upstream values."""
import pytest

from nnfcm_exporter.coercion import coerce_value
from nnfcm_exporter.errors import CoercionError


def test_integers_pass_through():
    assert coerce_value(7) == 7
    assert coerce_value(-3) == -3
    assert coerce_value(0) == 0


def test_unit_suffix_is_stripped():
    assert coerce_value("120 bps") == 120
    assert coerce_value("42") == 42
    assert coerce_value("  15\tpackets") == 15


def test_fractions_are_truncated_not_rounded():
    assert coerce_value("3.9 Mbps") == 3
    assert coerce_value("0.99") == 0
    assert coerce_value("-2.7 dB") == -2


def test_exponent_notation():
    assert coerce_value("1e3 bps") == 1000


@pytest.mark.parametrize("raw", ["abc", "", "   ", "bps 12", "nan", "inf Mbps", "1_000 bps"])
def test_unparsable_strings_raise(raw):
    with pytest.raises(CoercionError):
        coerce_value(raw)


@pytest.mark.parametrize("raw", [None, 1.5, True, ["1"]])
def test_unsupported_types_raise(raw):
    with pytest.raises(CoercionError):
        coerce_value(raw)
