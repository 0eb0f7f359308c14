"""Credentials from the process environment or a local .env file."""

import os
from pathlib import Path


def parse_env_line(raw_line: str) -> tuple[str, str] | None:
    """Split one KEY=VALUE row; None for blanks, comments and malformed rows."""
    line = raw_line.strip()
    if not line or line.startswith("#"):
        return None

    # Values may themselves contain '='.
    key, sep, value = line.partition("=")
    key = key.strip()
    if not sep or not key:
        return None
    return key, value.strip().strip("'\"")


def load_env_file(path: Path = Path(".env")) -> list[str]:
    """Export .env entries not already set in the shell; returns the keys applied."""
    if not path.exists():
        return []

    applied: list[str] = []
    for raw_line in path.read_text(encoding="utf-8").splitlines():
        entry = parse_env_line(raw_line)
        if entry is None or entry[0] in os.environ:
            continue
        os.environ[entry[0]] = entry[1]
        applied.append(entry[0])
    return applied


def get_required_env(name: str) -> str:
    value = os.getenv(name)
    if not value:
        raise RuntimeError(f"Missing required environment variable: {name}")
    return value
