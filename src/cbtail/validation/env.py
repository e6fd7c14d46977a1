"""
Parsing of environment variable overrides.

Overrides come from repeated `--env NAME=VALUE` options and from an env
file holding one `NAME=VALUE` per line. Values wrapped in double quotes are
decoded as JSON strings so that quotes and escapes survive the shell.
"""

import json
import logging
from pathlib import Path
from typing import Iterable, List, Tuple, Union

from ..models.job import EnvOverride
from .exceptions import ValidationError

logger = logging.getLogger(__name__)


def parse_env_override(entry: str, field_name: str = "--env") -> EnvOverride:
    """
    Parse a single `NAME=VALUE` entry.

    Args:
        entry: Raw entry as given by the user
        field_name: Where the entry came from, for error messages

    Returns:
        The parsed override

    Raises:
        ValidationError: If the entry has no '=', an empty name, or a
            quoted value that is not a valid JSON string
    """
    name, sep, raw_value = entry.partition("=")
    if not sep:
        raise ValidationError(
            f"Failed to parse env {entry!r}: expected NAME=VALUE",
            field_name=field_name,
            value=entry
        )

    name = name.strip()
    if not name:
        raise ValidationError(
            f"Failed to parse env {entry!r}: name is empty",
            field_name=field_name,
            value=entry
        )

    if raw_value.startswith('"'):
        try:
            value = json.loads(raw_value)
        except json.JSONDecodeError as e:
            raise ValidationError(
                f"Failed to parse env {entry!r}: {e}",
                field_name=field_name,
                value=entry
            )
        if not isinstance(value, str):
            raise ValidationError(
                f"Failed to parse env {entry!r}: quoted value must be a string",
                field_name=field_name,
                value=entry
            )
    else:
        value = raw_value

    return EnvOverride(name=name, value=value)


def read_env_file(path: Union[str, Path]) -> List[EnvOverride]:
    """
    Read overrides from a file, one `NAME=VALUE` per line.

    Blank lines and lines starting with '#' are skipped.

    Raises:
        ValidationError: If the file cannot be read or a line is malformed
    """
    file_path = Path(path)
    try:
        text = file_path.read_text(encoding="utf-8")
    except OSError as e:
        raise ValidationError(
            f"Failed to read env file {file_path}: {e}",
            field_name="--env-file",
            value=str(file_path)
        )

    overrides = []
    for lineno, line in enumerate(text.splitlines(), start=1):
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        overrides.append(
            parse_env_override(stripped, field_name=f"{file_path}:{lineno}")
        )

    logger.debug(f"Read {len(overrides)} env overrides from {file_path}")
    return overrides


def merge_env_overrides(overrides: Iterable[EnvOverride]) -> Tuple[EnvOverride, ...]:
    """
    Collapse duplicate names so that the last value given wins.

    Each name keeps the position of its first occurrence.
    """
    merged = {}
    for override in overrides:
        if override.name in merged:
            logger.debug(f"Env {override.name} given more than once; using the later value")
        merged[override.name] = override
    return tuple(merged.values())
