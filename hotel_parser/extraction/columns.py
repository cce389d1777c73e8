"""Assign quantity, rate and line-total roles to a row's numbers.

Hospitality tables usually print ``quantity, rate, total`` but columns get
reordered, dropped, or glued together by OCR. The interpreter relies on
magnitude (room counts are small, nightly rates are not) and on the
identity ``rate * quantity ~= total``.
"""

from dataclasses import dataclass

# Anything at or above this is a rate or amount, never a room count.
QUANTITY_CEILING = 500
# Relative error tolerated when matching rate * quantity against a total.
RATE_TOLERANCE = 0.15


@dataclass
class ColumnReading:
    """Interpreted roles for one table row."""

    rate: float
    quantity: int
    total: float | None = None


def _relative_error(actual: float, expected: float) -> float:
    if expected == 0:
        return 0.0 if actual == 0 else float("inf")
    return abs(actual - expected) / abs(expected)


def split_glued_quantity(glued: float, total: float) -> tuple[int, float] | None:
    """Undo OCR gluing of a quantity onto the front of a rate.

    ``"30 12000"`` read as ``3012000`` is split back into ``(30, 12000)``
    when ``30 * 12000`` matches the row total.

    Args:
        glued: The suspect merged number.
        total: The line total the split has to explain.

    Returns:
        ``(quantity, rate)`` for the best admissible split, or ``None``.
    """
    if glued != int(glued) or total <= 0:
        return None
    digits = str(int(glued))
    best: tuple[float, int, float] | None = None
    for cut in range(1, min(3, len(digits) - 1) + 1):
        quantity = int(digits[:cut])
        remainder = digits[cut:]
        if quantity < 1 or remainder.startswith("0"):
            continue
        rate = float(remainder)
        error = _relative_error(quantity * rate, total)
        if error <= RATE_TOLERANCE and (best is None or error < best[0]):
            best = (error, quantity, rate)
    return (best[1], best[2]) if best else None


def _interpret_pair(first: float, second: float) -> ColumnReading:
    small, large = sorted((first, second))
    if small < QUANTITY_CEILING and small >= 1 and small == int(small):
        return ColumnReading(rate=large, quantity=int(small))

    # Both large: either [rate, total] or [glued qty+rate, total].
    for glued, total in ((large, small), (small, large)):
        split = split_glued_quantity(glued, total)
        if split:
            quantity, rate = split
            return ColumnReading(rate=rate, quantity=quantity, total=total)

    if small > 0 and large % small == 0 and large // small < QUANTITY_CEILING:
        return ColumnReading(rate=small, quantity=int(large // small), total=large)
    return ColumnReading(rate=small, quantity=1)


def _interpret_many(numbers: list[float]) -> ColumnReading:
    total = max(numbers)
    total_index = numbers.index(total)
    minimum = min(numbers)
    quantity_index = numbers.index(minimum)

    if minimum < QUANTITY_CEILING and minimum >= 1 and minimum == int(minimum):
        quantity = int(minimum)
        expected = total / quantity
        candidates = [
            (i, value)
            for i, value in enumerate(numbers)
            if i != quantity_index and (i != total_index or quantity == 1)
        ]
        best = min(
            candidates,
            key=lambda item: _relative_error(item[1], expected),
            default=None,
        )
        if best and _relative_error(best[1], expected) <= RATE_TOLERANCE:
            return ColumnReading(rate=best[1], quantity=quantity, total=total)
        middle = sorted(numbers)[len(numbers) // 2]
        return ColumnReading(rate=middle, quantity=quantity, total=total)

    middle = sorted(numbers)[len(numbers) // 2]
    return ColumnReading(rate=middle, quantity=1, total=total)


def interpret(numbers: list[float]) -> ColumnReading | None:
    """Infer rate and quantity from a row's numeric tokens.

    Args:
        numbers: Numbers in the order they appear on the line.

    Returns:
        The interpreted reading, or ``None`` when there is nothing to read.
    """
    values = [float(n) for n in numbers if n is not None and n >= 0]
    if not values:
        return None
    if len(values) == 1:
        return ColumnReading(rate=values[0], quantity=1)
    if len(values) == 2:
        return _interpret_pair(values[0], values[1])
    return _interpret_many(values)
