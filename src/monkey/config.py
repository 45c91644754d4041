"""TOML config loading for monkey.toml."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path

CONFIG_NAME = "monkey.toml"


@dataclass
class PackageConfig:
    name: str = "untitled"
    version: str = "0.0.0"
    source_dir: str = "src"


@dataclass
class OutputConfig:
    color: bool = True


@dataclass
class ReplConfig:
    prompt: str = ">> "


@dataclass
class MonkeyConfig:
    package: PackageConfig = field(default_factory=PackageConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    repl: ReplConfig = field(default_factory=ReplConfig)


def find_config(start_path: Path | None = None) -> Path:
    """Walk up directories to find monkey.toml. Raises FileNotFoundError."""
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


def load_config(path: Path) -> MonkeyConfig:
    """Parse a monkey.toml file into a MonkeyConfig."""
    with open(path, "rb") as f:
        data = tomllib.load(f)

    config = MonkeyConfig()

    if "package" in data:
        pkg = data["package"]
        config.package = PackageConfig(
            name=pkg.get("name", "untitled"),
            version=pkg.get("version", "0.0.0"),
            source_dir=pkg.get("source_dir", "src"),
        )

    if "output" in data:
        config.output = OutputConfig(color=data["output"].get("color", True))

    if "repl" in data:
        config.repl = ReplConfig(prompt=data["repl"].get("prompt", ">> "))

    return config


def load_nearest_config(start_path: Path | None = None) -> MonkeyConfig:
    """Load the nearest monkey.toml, falling back to defaults when none exists."""
    try:
        return load_config(find_config(start_path))
    except FileNotFoundError:
        return MonkeyConfig()
