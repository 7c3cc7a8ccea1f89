"""Import configuration dataclasses and YAML loading/validation."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from mysql_slowlog.parsers import ParserRegistry

DEFAULT_PARSER = "mysql_slow"
DEFAULT_BATCH_SIZE = 5000


# ── Source ─────────────────────────────────────────────────────────────

@dataclass
class SourceConfig:
    """A slow log file (or directory of them) to import."""

    path: Path
    host: str | None = None

    def __post_init__(self) -> None:
        if self.host is not None and not str(self.host).strip():
            raise ValueError(f"Source {self.path}: host must not be blank")


# ── Import ─────────────────────────────────────────────────────────────

@dataclass
class ImportConfig:
    """Top-level import configuration."""

    sources: list[SourceConfig]
    db_path: Path
    parser: str = DEFAULT_PARSER
    batch_size: int = DEFAULT_BATCH_SIZE

    def __post_init__(self) -> None:
        if not self.sources:
            raise ValueError("At least one source is required")
        if self.parser not in ParserRegistry.available():
            raise ValueError(
                f"Unknown parser {self.parser!r}. "
                f"Available: {ParserRegistry.available()}"
            )
        if self.batch_size < 1:
            raise ValueError(f"batch_size must be >= 1, got {self.batch_size}")


# ── YAML Loading ───────────────────────────────────────────────────────

def _resolve(base: Path, raw: str) -> Path:
    if not raw:
        raise ValueError("Path must not be empty")
    path = Path(raw).expanduser()
    if not path.is_absolute():
        path = base / path
    return path


def _parse_source(base: Path, raw: dict[str, Any] | str) -> SourceConfig:
    if isinstance(raw, str):
        return SourceConfig(path=_resolve(base, raw))
    return SourceConfig(
        path=_resolve(base, raw["path"]),
        host=raw.get("host"),
    )


def load_config(path: str | Path) -> ImportConfig:
    """Load and validate an import YAML file.

    Relative paths are resolved against the config file's directory.
    """
    path = Path(path)
    with open(path) as f:
        raw = yaml.safe_load(f)

    if not isinstance(raw, dict) or "slowlog" not in raw:
        raise ValueError("Config must have a 'slowlog' top-level key")

    section = raw["slowlog"]
    if not isinstance(section, dict):
        raise ValueError("'slowlog' must be a mapping")
    base = path.parent
    output = section.get("output", {})

    return ImportConfig(
        sources=[_parse_source(base, s) for s in section["sources"]],
        db_path=_resolve(base, output["db"]),
        parser=section.get("parser", DEFAULT_PARSER),
        batch_size=int(output.get("batch_size", DEFAULT_BATCH_SIZE)),
    )


def validate_config(path: str | Path) -> list[str]:
    """Validate a YAML import config, returning a list of errors (empty = valid)."""
    errors: list[str] = []
    try:
        load_config(path)
    except KeyError as e:
        errors.append(f"Missing required key: {e}")
    except (ValueError, TypeError) as e:
        errors.append(str(e))
    except yaml.YAMLError as e:
        errors.append(f"YAML parse error: {e}")
    return errors
