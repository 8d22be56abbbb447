"""Glitch (zalgo) text generator.

Provides modules:
- glitch_text.marks – the top/middle/bottom combining mark tables
- glitch_text.config – GlitchConfig and the with_*() option constructors
- glitch_text.encoder – encode(), encode_text() and the core transform
"""

from .config import (
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
from .encoder import (
    DecodingError,
    RandomSource,
    encode,
    encode_code_points,
    encode_text,
)
from .marks import MarkTables, build_mark_tables, get_mark_tables


def _get_version() -> str:
    """Get version from pyproject.toml (dev) or importlib.metadata (installed)."""
    from pathlib import Path

    # In dev mode, read directly from pyproject.toml
    pyproject = Path(__file__).resolve().parent.parent.parent / "pyproject.toml"
    if pyproject.exists():
        try:
            content = pyproject.read_text()
            for line in content.splitlines():
                if line.strip().startswith("version"):
                    # Parse: version = "0.1.0"
                    return line.split("=")[1].strip().strip('"').strip("'")
        except OSError:
            pass

    # Fallback to importlib.metadata for installed package
    try:
        from importlib.metadata import PackageNotFoundError, version as pkg_version
        return pkg_version("glitch-text")
    except PackageNotFoundError:
        return "0.0.0"


__version__ = _get_version()
__all__: list[str] = [
    "__version__",
    # config
    "DEFAULT_CONFIG",
    "ConfigurationError",
    "GlitchConfig",
    "Option",
    "build_config",
    "with_bottom",
    "with_max_height",
    "with_middle",
    "with_randomization",
    "with_top",
    # encoder
    "DecodingError",
    "RandomSource",
    "encode",
    "encode_code_points",
    "encode_text",
    # marks
    "MarkTables",
    "build_mark_tables",
    "get_mark_tables",
]
