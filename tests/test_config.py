"""
Unit Tests for Encoder Configuration

Tests GlitchConfig validation and the with_*() option constructors.
"""

import pytest

from glitch_text.config import (
    DEFAULT_CONFIG,
    ConfigurationError,
    GlitchConfig,
    Option,
    build_config,
    with_bottom,
    with_max_height,
    with_middle,
    with_randomization,
    with_top,
)


class TestGlitchConfig:
    """Tests for GlitchConfig dataclass."""

    def test_init_when_defaults_then_all_channels_and_height_15(self):
        """Defaults should enable everything with max_height 15 and full randomization."""
        config = GlitchConfig()
        assert config.include_top is True
        assert config.include_middle is True
        assert config.include_bottom is True
        assert config.max_height == 15
        assert config.randomization == 1.0

    def test_init_when_negative_height_then_raises_error(self):
        """Negative max_height should raise ConfigurationError."""
        with pytest.raises(ConfigurationError, match="cannot be negative"):
            GlitchConfig(max_height=-1)

    @pytest.mark.parametrize("fraction", [-0.01, 1.01])
    def test_init_when_randomization_out_of_range_then_raises_error(self, fraction):
        """Randomization outside [0, 1] should raise ConfigurationError."""
        with pytest.raises(ConfigurationError, match="between 0 and 1"):
            GlitchConfig(randomization=fraction)

    def test_init_when_frozen_then_immutable(self):
        """Config should be immutable (frozen)."""
        with pytest.raises(AttributeError):
            DEFAULT_CONFIG.max_height = 3  # type: ignore

    @pytest.mark.parametrize("kwargs", [
        {"max_height": 2.5},
        {"max_height": None},
        {"max_height": True},
        {"randomization": "0.5"},
        {"randomization": True},
        {"include_top": "yes"},
        {"include_bottom": 1},
    ])
    def test_init_when_wrong_type_then_raises_error(self, kwargs):
        """Wrong field types should be rejected at construction."""
        with pytest.raises(ConfigurationError):
            GlitchConfig(**kwargs)

    def test_init_when_integer_randomization_then_accepted(self):
        """Integral 0 and 1 are valid fractions."""
        assert GlitchConfig(randomization=0).randomization == 0
        assert GlitchConfig(randomization=1).randomization == 1

    def test_configuration_error_when_raised_then_is_value_error(self):
        """ConfigurationError should be catchable as ValueError."""
        assert issubclass(ConfigurationError, ValueError)

    @pytest.mark.parametrize("height, fraction, expected", [
        (100, 0.2, (80, 100)),
        (100, 0.7, (30, 100)),
        (15, 1.0, (0, 15)),
        (0, 1.0, (0, 0)),
        (7, 0.0, (7, 7)),
    ])
    def test_height_range_when_computed_then_matches_bounds(self, height, fraction, expected):
        """height_range should report the lower bound and max marks per side."""
        config = GlitchConfig(max_height=height, randomization=fraction)
        assert config.height_range == expected


class TestOptions:
    """Tests for the with_*() constructors."""

    def test_with_top_when_false_then_option_disables_top(self):
        """with_top(False) should override include_top."""
        assert build_config(with_top(False)).include_top is False

    def test_with_middle_when_false_then_option_disables_middle(self):
        """with_middle(False) should override include_middle."""
        assert build_config(with_middle(False)).include_middle is False

    def test_with_bottom_when_false_then_option_disables_bottom(self):
        """with_bottom(False) should override include_bottom."""
        assert build_config(with_bottom(False)).include_bottom is False

    def test_with_max_height_when_zero_then_accepted(self):
        """Zero height is valid."""
        assert build_config(with_max_height(0)).max_height == 0

    def test_with_max_height_when_negative_then_fails_fast(self):
        """Negative height should be rejected when the option is built."""
        with pytest.raises(ConfigurationError, match="cannot be negative"):
            with_max_height(-1)

    @pytest.mark.parametrize("percent, fraction", [(0, 0.0), (20, 0.2), (100, 1.0)])
    def test_with_randomization_when_in_range_then_normalised(self, percent, fraction):
        """Percentages should be stored as fractions."""
        assert build_config(with_randomization(percent)).randomization == pytest.approx(fraction)

    @pytest.mark.parametrize("percent", [-1, 101])
    def test_with_randomization_when_out_of_range_then_fails_fast(self, percent):
        """Out of range percentages should be rejected when the option is built."""
        with pytest.raises(ConfigurationError, match="between 0 and 100"):
            with_randomization(percent)

    @pytest.mark.parametrize("build", [
        lambda: with_max_height(True),
        lambda: with_max_height(2.5),
        lambda: with_randomization("50"),
        lambda: with_top(1),
        lambda: with_bottom(None),
    ])
    def test_option_when_wrong_type_then_raises_error(self, build):
        """Wrong value types should be rejected."""
        with pytest.raises(ConfigurationError):
            build()

    def test_option_when_raw_value_wrong_type_then_rejected_on_apply(self):
        """A hand-built Option with a bad value should fail when applied."""
        with pytest.raises(ConfigurationError, match="must be a bool"):
            build_config(Option("include_top", "yes"))
        with pytest.raises(ConfigurationError, match="must be an integer"):
            build_config(Option("max_height", 2.5))

    def test_option_when_unknown_field_then_raises_error(self):
        """Options should only name GlitchConfig fields."""
        with pytest.raises(ConfigurationError, match="Unknown config field"):
            Option("height", 3)

    def test_option_when_applied_then_returns_new_config(self):
        """Applying an option should not mutate the base config."""
        result = Option("max_height", 3).apply(DEFAULT_CONFIG)
        assert result.max_height == 3
        assert DEFAULT_CONFIG.max_height == 15


class TestBuildConfig:
    """Tests for build_config()."""

    def test_build_when_no_options_then_defaults(self):
        """No options should give the default configuration."""
        assert build_config() == DEFAULT_CONFIG

    def test_build_when_field_set_twice_then_last_wins(self):
        """Later options should override earlier ones."""
        config = build_config(with_max_height(4), with_top(False), with_max_height(2), with_top(True))
        assert config.max_height == 2
        assert config.include_top is True

    def test_build_when_base_given_then_options_applied_on_top(self):
        """Options should be applied over the given base."""
        base = GlitchConfig(include_middle=False, max_height=5)
        config = build_config(with_randomization(0), base=base)
        assert config == GlitchConfig(include_middle=False, max_height=5, randomization=0.0)

    def test_build_when_not_an_option_then_raises_error(self):
        """Non-Option arguments should be rejected."""
        with pytest.raises(ConfigurationError, match="Expected an Option"):
            build_config(5)  # type: ignore
