"""TOML config loading for minic.toml."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path

CONFIG_NAME = "minic.toml"


@dataclass
class ParserConfig:
    strict: bool = False
    report_unterminated_blocks: bool = True


@dataclass
class DiagnosticsConfig:
    color: bool = True


@dataclass
class MinicConfig:
    parser: ParserConfig = field(default_factory=ParserConfig)
    diagnostics: DiagnosticsConfig = field(default_factory=DiagnosticsConfig)


def find_config(start_path: Path | None = None) -> Path:
    """Walk up directories to find minic.toml. Raises FileNotFoundError."""
    path = (start_path or Path.cwd()).resolve()
    if path.is_file():
        path = path.parent
    while True:
        candidate = path / CONFIG_NAME
        if candidate.exists():
            return candidate
        parent = path.parent
        if parent == path:
            raise FileNotFoundError(f"No {CONFIG_NAME} found in any parent directory")
        path = parent


def load_config(path: Path) -> MinicConfig:
    """Parse a minic.toml file into a MinicConfig."""
    with open(path, "rb") as f:
        data = tomllib.load(f)

    config = MinicConfig()

    if "parser" in data:
        psr = data["parser"]
        config.parser = ParserConfig(
            strict=psr.get("strict", False),
            report_unterminated_blocks=psr.get("report_unterminated_blocks", True),
        )

    if "diagnostics" in data:
        diag = data["diagnostics"]
        config.diagnostics = DiagnosticsConfig(
            color=diag.get("color", True),
        )

    return config


def config_for(path: Path) -> MinicConfig:
    """Return the config governing ``path``, or defaults when there is none."""
    try:
        return load_config(find_config(path))
    except FileNotFoundError:
        return MinicConfig()
