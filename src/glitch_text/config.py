"""
Module: config

Purpose:
    Configuration for the glitch encoder. Immutable configuration with
    validation on construction, plus composable option constructors that
    are folded over the defaults in order.

Key Classes:
    - GlitchConfig: Immutable encoder configuration
    - Option: A single field override
    - ConfigurationError: Raised for invalid configuration values

Key Functions:
    - with_top(), with_middle(), with_bottom(): Toggle mark placements
    - with_max_height(): Upper bound on top/bottom marks per character
    - with_randomization(): Percentage of max_height that may be shaved off
    - build_config(): Apply options over a base configuration

Dependencies:
    - dataclasses (std)

Used By:
    - encoder: encode(), encode_text(), encode_code_points()
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Any, Optional

# Defaults
DEFAULT_MAX_HEIGHT = 15  # Marks per side per character
DEFAULT_RANDOMIZATION = 1.0  # Up to the whole height may be shaved off
MAX_RANDOMIZATION_PERCENT = 100


class ConfigurationError(ValueError):
    """Invalid encoder configuration."""
    pass


def _require_bool(name: str, value: object) -> bool:
    if not isinstance(value, bool):
        raise ConfigurationError(f"{name} must be a bool: {value!r}")
    return value


def _require_int(name: str, value: object) -> int:
    # bool is an int subclass; True as a height is almost certainly a mistake
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"{name} must be an integer: {value!r}")
    return value


def _require_real(name: str, value: object) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigurationError(f"{name} must be a number: {value!r}")
    return value


@dataclass(frozen=True)
class GlitchConfig:
    """
    Configuration for the glitch encoder (immutable).

    With max_height=100 and randomization=0.2 each side gets between 80
    and 100 marks; with randomization=0.7 it gets between 30 and 100.

    Attributes:
        include_top: Put marks above each character
        include_middle: Put one overlay mark through each character
        include_bottom: Put marks below each character
        max_height: Maximum marks per side per character
        randomization: Fraction of max_height that may be randomly removed

    Invariants:
        - max_height >= 0
        - 0.0 <= randomization <= 1.0

    Example:
        >>> config = GlitchConfig(max_height=3, randomization=0.0)
        >>> config.height_range
        (3, 3)
    """

    include_top: bool = True
    include_middle: bool = True
    include_bottom: bool = True
    max_height: int = DEFAULT_MAX_HEIGHT
    randomization: float = DEFAULT_RANDOMIZATION

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        for name in ("include_top", "include_middle", "include_bottom"):
            _require_bool(name, getattr(self, name))
        _require_int("max_height", self.max_height)
        _require_real("randomization", self.randomization)
        if self.max_height < 0:
            raise ConfigurationError(f"max_height cannot be negative: {self.max_height}")
        if not 0.0 <= self.randomization <= 1.0:
            raise ConfigurationError(
                f"randomization must be between 0 and 1: {self.randomization}"
            )

    @property
    def height_range(self) -> tuple[int, int]:
        """Lower bound and maximum for the number of marks on one side.

        Draws are in [0, 1), so the lower bound is not always reached: with
        randomization=1.0 and max_height > 0 a side gets at least one mark.
        """
        shaved = int(self.randomization * self.max_height)
        return (self.max_height - shaved, self.max_height)


DEFAULT_CONFIG = GlitchConfig()
CONFIG_FIELDS = frozenset(f.name for f in fields(GlitchConfig))


@dataclass(frozen=True, slots=True)
class Option:
    """
    A single override of one GlitchConfig field.

    Normally built by the with_*() constructors. Values are validated
    again by GlitchConfig when the option is applied.
    """

    field: str
    value: Any

    def __post_init__(self) -> None:
        if self.field not in CONFIG_FIELDS:
            raise ConfigurationError(f"Unknown config field: {self.field!r}")

    def apply(self, config: GlitchConfig) -> GlitchConfig:
        """Return a copy of config with this option applied."""
        return replace(config, **{self.field: self.value})


def with_top(value: bool) -> Option:
    """Should the encoder put marks on top of the characters."""
    return Option("include_top", _require_bool("top", value))


def with_middle(value: bool) -> Option:
    """Should the encoder put a mark through the middle of the characters."""
    return Option("include_middle", _require_bool("middle", value))


def with_bottom(value: bool) -> Option:
    """Should the encoder put marks below the characters."""
    return Option("include_bottom", _require_bool("bottom", value))


def with_max_height(value: int) -> Option:
    """
    How many marks to put on top and bottom of each character, at most.

    Raises:
        ConfigurationError: If value is not an integer or is negative
    """
    height = _require_int("max_height", value)
    if height < 0:
        raise ConfigurationError(f"max_height cannot be negative: {height}")
    return Option("max_height", height)


def with_randomization(value: int) -> Option:
    """
    Percentage (0-100) of max_height that may be randomly left off.

    max_height 100 with randomization 20 gives 80 to 100 marks per side;
    randomization 70 gives 30 to 100.

    Raises:
        ConfigurationError: If value is not an integer in [0, 100]
    """
    percent = _require_int("randomization", value)
    if not 0 <= percent <= MAX_RANDOMIZATION_PERCENT:
        raise ConfigurationError(
            f"randomization must be between 0 and {MAX_RANDOMIZATION_PERCENT}: {percent}"
        )
    return Option("randomization", percent / MAX_RANDOMIZATION_PERCENT)


def build_config(*options: Option, base: Optional[GlitchConfig] = None) -> GlitchConfig:
    """
    Fold options over a base configuration, in order.

    Later options win when the same field is set more than once.

    Args:
        *options: Overrides produced by the with_*() constructors
        base: Starting configuration (defaults to DEFAULT_CONFIG)

    Returns:
        The resulting GlitchConfig

    Raises:
        ConfigurationError: If an argument is not an Option

    Example:
        >>> build_config(with_max_height(4), with_max_height(2)).max_height
        2
    """
    config = base if base is not None else DEFAULT_CONFIG
    for option in options:
        if not isinstance(option, Option):
            raise ConfigurationError(f"Expected an Option, got {type(option).__name__}")
        config = option.apply(config)
    return config
