"""
Fallback chain combinator.

A field is resolved by trying attempts in order, highest fidelity first.
Each attempt is a zero-argument callable returning a raw value or None.
The first value accepted by the field's validity predicate wins; an
attempt that raises counts as "no value" and the chain moves on.
"""

import logging
from typing import Any, Callable, Iterable, Optional, TypeVar

from jobclip.core.normalize import has_text

logger = logging.getLogger(__name__)

T = TypeVar("T")
Attempt = Callable[[], Optional[T]]


def first_valid(
    attempts: Iterable[Attempt],
    accept: Callable[[Any], bool] = has_text,
    field: Optional[str] = None,
) -> Optional[Any]:
    """
    Return the first attempt result that passes `accept`.

    Args:
        attempts: Ordered attempts for one field
        accept: Validity predicate (default: non-empty trimmed text)
        field: Field name, for debug logging

    Returns:
        The accepted value (strings are trimmed) or None
    """
    for index, attempt in enumerate(attempts):
        try:
            value = attempt()
        except Exception as e:
            logger.debug(f"[chain] {field or 'field'} attempt {index} failed: {e.__class__.__name__}: {e}")
            continue

        if value is None:
            continue
        # plain strings only; str-based enums keep their type
        if type(value) is str:
            value = value.strip()
        try:
            if accept(value):
                return value
        except Exception as e:
            logger.debug(f"[chain] {field or 'field'} attempt {index} rejected: {e}")

    return None


def dig(obj: Any, *path: Any) -> Optional[Any]:
    """
    Guarded nested access: dig(data, 'posting', 'compensationTiers', 0, 'tierSummary').

    String keys index dicts, int keys index lists. Any shape mismatch
    yields None instead of raising.
    """
    current = obj
    for key in path:
        if isinstance(key, int):
            if not isinstance(current, list) or not -len(current) <= key < len(current):
                return None
            current = current[key]
        else:
            if not isinstance(current, dict):
                return None
            current = current.get(key)
        if current is None:
            return None
    return current
