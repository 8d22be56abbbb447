"""
Module: encoder

Purpose:
    Turns plain text into glitch (zalgo) text by following every base
    character with randomly chosen combining marks from the top, middle
    and bottom tables.

Key Functions:
    - encode(): Bytes in, bytes out (decodes and re-encodes)
    - encode_text(): str in, str out
    - encode_code_points(): Core transform over a sequence of code points

Key Classes:
    - RandomSource: Protocol for the injected random generator
    - DecodingError: Raised when bytes input is not valid text

Algorithm (per input code point c):
    1. Emit c
    2. If middle enabled: emit one random middle mark
    3. If top enabled: emit N random top marks
    4. If bottom enabled: emit N random bottom marks (fresh N)
    where N = max_height - floor(r * randomization * max_height), r in [0, 1)

Dependencies:
    - random (std): Default random source
    - glitch_text.config: GlitchConfig, options
    - glitch_text.marks: Mark tables

Used By:
    - Library callers
"""

from __future__ import annotations

import codecs
import logging
import math
import random
from typing import Iterable, List, Optional, Protocol, Sequence

from .config import GlitchConfig, Option, build_config
from .marks import MarkTables, get_mark_tables

logger = logging.getLogger(__name__)

DEFAULT_ENCODING = "utf-8"


class DecodingError(ValueError):
    """Input bytes are not valid text in the expected encoding."""
    pass


class RandomSource(Protocol):
    """The subset of random.Random the encoder draws from."""

    def random(self) -> float: ...

    def choice(self, seq: Sequence[int]) -> int: ...


def mark_count(config: GlitchConfig, r: float) -> int:
    """
    Number of marks for one side of one character.

    Args:
        config: Encoder configuration
        r: Uniform random float in [0, 1)

    Returns:
        max_height minus a random share of it, never below zero
    """
    shaved = math.floor(r * config.randomization * config.max_height)
    return max(0, config.max_height - shaved)


def _add_marks(
    out: List[int],
    table: Sequence[int],
    config: GlitchConfig,
    rng: RandomSource,
) -> None:
    qty = mark_count(config, rng.random())
    for _ in range(qty):
        out.append(rng.choice(table))


def encode_code_points(
    code_points: Iterable[int],
    config: GlitchConfig,
    rng: Optional[RandomSource] = None,
    tables: Optional[MarkTables] = None,
) -> List[int]:
    """
    Glitch a sequence of code points.

    Args:
        code_points: Input code points, in order
        config: Encoder configuration
        rng: Random source (a fresh random.Random() if omitted)
        tables: Mark tables (the shared process-wide tables if omitted)

    Returns:
        Output code points: every input code point followed by its marks

    Invariants:
        - Input code points appear in output unchanged and in order
        - At most one middle mark follows each input code point
        - Same seed and config give the same output

    Example:
        >>> out = encode_code_points([ord("a")], GlitchConfig(max_height=1, randomization=0.0))
        >>> len(out)
        4
    """
    if rng is None:
        rng = random.Random()
    if tables is None:
        tables = get_mark_tables()

    out: List[int] = []
    for cp in code_points:
        out.append(cp)
        # Only one middle mark, more of them just collide
        if config.include_middle:
            out.append(rng.choice(tables.middle))
        if config.include_top:
            _add_marks(out, tables.top, config, rng)
        if config.include_bottom:
            _add_marks(out, tables.bottom, config, rng)
    return out


def encode_text(
    text: str,
    *options: Option,
    config: Optional[GlitchConfig] = None,
    rng: Optional[RandomSource] = None,
) -> str:
    """
    Glitch a string.

    Defaults are top, middle and bottom marks, max_height=15 and full
    randomization, unless changed by options.

    Args:
        text: Text to glitch
        *options: with_*() overrides, applied in order
        config: Base configuration the options are applied to
        rng: Random source for reproducible output

    Returns:
        The glitched text

    Raises:
        ConfigurationError: If an argument in options is not an Option

    Example:
        >>> from glitch_text import with_max_height, with_randomization
        >>> len(encode_text("ab", with_max_height(1), with_randomization(0)))
        8
    """
    cfg = build_config(*options, base=config)
    out = encode_code_points(map(ord, text), cfg, rng=rng)
    logger.debug(f"Encoded {len(text)} chars into {len(out)} ({cfg})")
    return "".join(map(chr, out))


def _check_encoding(encoding: str) -> None:
    """Fail before decoding if output could never be re-encoded."""
    marks = "".join(map(chr, sorted(get_mark_tables().all_marks)))
    try:
        codecs.lookup(encoding)
        marks.encode(encoding)
    except LookupError as e:
        # Also covers bytes-to-bytes codecs such as rot13 or hex
        raise DecodingError(f"Unknown text encoding: {encoding!r}") from e
    except UnicodeEncodeError as e:
        raise DecodingError(f"Encoding {encoding!r} cannot represent combining marks") from e


def encode(
    data: bytes,
    *options: Option,
    config: Optional[GlitchConfig] = None,
    rng: Optional[RandomSource] = None,
    encoding: str = DEFAULT_ENCODING,
) -> bytes:
    """
    Glitch encoded text, returning it in the same encoding.

    The whole input is decoded before anything is emitted, so invalid
    input never yields partial output.

    Args:
        data: Text bytes
        *options: with_*() overrides, applied in order
        config: Base configuration the options are applied to
        rng: Random source for reproducible output
        encoding: Codec used to decode input and encode output

    Returns:
        The glitched text, encoded

    Raises:
        DecodingError: If data is not valid in encoding, or the encoding is
            unknown or cannot represent combining marks
        ConfigurationError: If an argument in options is not an Option
    """
    _check_encoding(encoding)
    try:
        text = bytes(data).decode(encoding)
    except UnicodeDecodeError as e:
        logger.debug(f"Rejecting input: {e}")
        raise DecodingError(
            f"Input is not valid {encoding} at byte {e.start}: {e.reason}"
        ) from e

    out = encode_text(text, *options, config=config, rng=rng)
    if not out:
        # Skip the BOM that utf-16 and utf-8-sig write even for empty text
        return b""
    return out.encode(encoding)
