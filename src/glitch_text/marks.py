"""
Module: marks

Purpose:
    Provides the three tables of combining diacritical marks (top, middle,
    bottom) used by the encoder. The tables are built once per process and
    shared read-only between callers.

Key Classes:
    - MarkTables: Immutable container for the three mark sequences

Key Functions:
    - build_mark_tables(): Construct the tables from the literal code point list
    - get_mark_tables(): Cached process-wide accessor

Dependencies:
    - functools (std)
    - dataclasses (std)

Used By:
    - encoder: Mark selection during encoding

Notes:
    Membership is a hand-curated list, not a Unicode property lookup.
    Several marks are placed by how they render rather than by their
    formal class, and U+0344 and U+035D appear twice in the top table.
    Duplicates raise the chance of that mark being drawn and must stay.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import FrozenSet, List, Tuple

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class MarkTables:
    """
    The three mark sequences used for glitching.

    Attributes:
        top: Marks rendered above the base character
        middle: Overlay marks rendered through the base character
        bottom: Marks rendered below the base character

    Invariants:
        - All three tables are non-empty
        - No code point appears in more than one table
        - Duplicates within a table are kept (they weight the draw)

    Example:
        >>> tables = get_mark_tables()
        >>> len(tables.middle)
        4
        >>> tables.is_mark(0x0336)
        True
    """

    top: Tuple[int, ...]
    middle: Tuple[int, ...]
    bottom: Tuple[int, ...]

    def __post_init__(self) -> None:
        """Validate tables on construction."""
        for name in ("top", "middle", "bottom"):
            if not getattr(self, name):
                raise ValueError(f"Mark table '{name}' cannot be empty")

        top, middle, bottom = set(self.top), set(self.middle), set(self.bottom)
        overlap = (top & middle) | (top & bottom) | (middle & bottom)
        if overlap:
            listed = ", ".join(f"U+{cp:04X}" for cp in sorted(overlap))
            raise ValueError(f"Mark tables must be disjoint, shared: {listed}")

    @property
    def all_marks(self) -> FrozenSet[int]:
        """Union of every code point in the three tables."""
        return frozenset(self.top) | frozenset(self.middle) | frozenset(self.bottom)

    def is_mark(self, code_point: int) -> bool:
        """Return True if code_point belongs to any of the tables."""
        return code_point in self.top or code_point in self.middle or code_point in self.bottom


def _span(first: int, last: int) -> List[int]:
    """Inclusive range of code points."""
    return list(range(first, last + 1))


def build_mark_tables() -> MarkTables:
    """
    Build the mark tables from the literal code point list.

    Order within a table does not affect behaviour (selection is uniform
    over the sequence), but membership and multiplicity do.

    Returns:
        A freshly constructed MarkTables
    """
    top: List[int] = []
    middle: List[int] = []
    bottom: List[int] = []

    top += _span(0x0300, 0x0315)

    # U+031A and U+031B sit inside the below range but render above
    bottom += [cp for cp in _span(0x0316, 0x0333) if cp not in (0x031A, 0x031B)]
    top += [0x031A, 0x031B]

    # Overlays; one per character is enough or they pile into a smear
    middle += _span(0x0334, 0x0337)

    bottom += _span(0x0339, 0x033C)

    top += _span(0x033D, 0x0344)
    top.append(0x0344)

    # Extended block, classified one by one
    bottom.append(0x0345)
    top.append(0x0346)
    bottom += [0x0347, 0x0348, 0x0349]
    top += [0x034A, 0x034B, 0x034C]
    bottom += [0x034D, 0x034E]
    # U+034F grapheme joiner renders nothing
    top += [0x0350, 0x0351, 0x0352]
    bottom += [0x0353, 0x0354, 0x0355, 0x0356]
    top += [0x0357, 0x0358]
    bottom += [0x0359, 0x035A]
    top.append(0x035B)
    bottom.append(0x035C)
    top += [0x035D, 0x035D]
    bottom.append(0x035F)
    top += [0x0360, 0x0361]

    tables = MarkTables(top=tuple(top), middle=tuple(middle), bottom=tuple(bottom))
    logger.debug(
        f"Built mark tables: top={len(tables.top)}, "
        f"middle={len(tables.middle)}, bottom={len(tables.bottom)}"
    )
    return tables


@lru_cache(maxsize=None)
def get_mark_tables() -> MarkTables:
    """Return the process-wide mark tables, building them on first use."""
    return build_mark_tables()
