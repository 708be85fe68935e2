from collections.abc import Callable
from typing import Any


def all_predicates(*preds: Callable[[Any], bool]) -> Callable[[Any], bool]:
    """
    Combine predicates into one that is true only when every predicate is true.

    Args:
        preds: Any number of single-argument predicates.

    Returns:
        A predicate that lazily evaluates each of `preds` in order.
    """

    return lambda x: all(p(x) for p in preds)
