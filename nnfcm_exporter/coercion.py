"""Conversion of raw upstream readings into integer metric values."""
import math

from nnfcm_exporter.errors import CoercionError


def coerce_value(raw) -> int:
    """Convert a raw reading to an int.

    Integers pass through. Strings such as ``"42.5 bps"`` are reduced to the
    token before the first whitespace, parsed as a float and truncated
    toward zero.
    """
    if isinstance(raw, bool):
        raise CoercionError(raw, "booleans are not metric values")

    if isinstance(raw, int):
        return raw

    if not isinstance(raw, str):
        raise CoercionError(raw, f"unsupported type {type(raw).__name__}")

    tokens = raw.split()
    if not tokens:
        raise CoercionError(raw, "empty value")

    # float() accepts digit separators, upstream readings never carry them
    if "_" in tokens[0]:
        raise CoercionError(raw, "digit separators are not allowed")

    try:
        number = float(tokens[0])
    except ValueError as e:
        raise CoercionError(raw, str(e)) from e

    if math.isnan(number) or math.isinf(number):
        raise CoercionError(raw, "not a finite number")

    return int(number)
