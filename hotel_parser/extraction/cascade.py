"""Ordered strategy lists for field extraction.

Every extracted field is produced by a list of strategies tried from most
to least specific. The first strategy that returns a usable value wins.
"""

from collections.abc import Callable, Iterable
from typing import TypeVar

from hotel_parser.utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

Strategy = Callable[[], T | None]


def _usable(value: object) -> bool:
    if value is None:
        return False
    if isinstance(value, (str, list, tuple, dict)):
        return len(value) > 0
    return True


def run_cascade(field_name: str, strategies: Iterable[Strategy]) -> T | None:
    """Run strategies in order and return the first usable result.

    Empty strings and empty collections count as "no result" so that the
    next strategy gets a chance.

    Args:
        field_name: Name used in debug logging.
        strategies: Zero-argument callables, most specific first.

    Returns:
        The first usable value, or ``None`` if every strategy came up empty.
    """
    for index, strategy in enumerate(strategies):
        value = strategy()
        if _usable(value):
            logger.debug("%s resolved by strategy %d", field_name, index)
            return value
    logger.debug("%s: no strategy produced a value", field_name)
    return None
