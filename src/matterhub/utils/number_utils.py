import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with halves going towards positive infinity.

    Python's ``round`` rounds halves to even, which would make 0.5 and 1.5 both land on an even
    number. Matter and Home Assistant values are rounded the "school" way, so 12.5 -> 13 and
    -12.5 -> -12.
    """
    return math.floor(value + 0.5)


def to_finite_float(value: object) -> float | None:
    """Coerce a loosely typed hub value to a finite float, or None if that is not possible.

    Strings are accepted since Home Assistant sometimes reports numbers as text.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        result = float(value)  # pyright: ignore[reportArgumentType]
    except (TypeError, ValueError):
        return None
    if not math.isfinite(result):
        return None
    return result
