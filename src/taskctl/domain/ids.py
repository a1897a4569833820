"""Sequential task identifier patterns and allocation.

Identifiers look like ``T-001``: a literal prefix, a hyphen, and a
three-digit zero-padded sequence number in ``[1, 999]``.

INVARIANT: Allocation only ever advances past the current maximum.
Gaps left by deleted tasks are never reused, so ``T-001, T-003`` is
followed by ``T-004``.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from taskctl.domain.errors import SequenceOverflowError

DEFAULT_PREFIX = "T"
MAX_SEQUENCE = 999


def create_id_pattern(prefix: str = DEFAULT_PREFIX) -> re.Pattern[str]:
    """Compile a pattern matching exactly ``{prefix}-NNN`` with ASCII digits, capturing them."""
    return re.compile(rf"^{re.escape(prefix)}-([0-9]{{3}})\Z")


def generate_first_id(prefix: str = DEFAULT_PREFIX) -> str:
    """First identifier for *prefix*, e.g. ``T-001``."""
    return f"{prefix}-001"


def generate_next_id(max_sequence: int, prefix: str = DEFAULT_PREFIX) -> str:
    """Identifier following *max_sequence*.

    Raises:
        SequenceOverflowError: If the next sequence number exceeds 999.
    """
    next_value = (max_sequence or 0) + 1
    if next_value > MAX_SEQUENCE:
        msg = f"ID sequence overflow: exceeds {MAX_SEQUENCE}"
        raise SequenceOverflowError(msg)
    return f"{prefix}-{next_value:03d}"


def extract_sequence_number(identifier: object, prefix: str = DEFAULT_PREFIX) -> int | None:
    """Parse the numeric suffix of *identifier*.

    Returns None for anything that does not match ``{prefix}-NNN`` exactly,
    including non-string input. Foreign or malformed ids are expected and
    must be filtered by the caller.
    """
    if not isinstance(identifier, str):
        return None
    match = create_id_pattern(prefix).match(identifier)
    if match is None:
        return None
    return int(match.group(1))


def allocate_next_id(existing: Iterable[str], prefix: str = DEFAULT_PREFIX) -> str:
    """Derive the next identifier from every identifier currently stored.

    Unparseable identifiers are ignored. With none stored (or none
    parseable) the first identifier is returned.

    Raises:
        SequenceOverflowError: If the current maximum is already 999.
    """
    sequences = (extract_sequence_number(identifier, prefix) for identifier in existing)
    max_sequence = max((n for n in sequences if n is not None), default=0)
    if max_sequence == 0:
        return generate_first_id(prefix)
    return generate_next_id(max_sequence, prefix)
