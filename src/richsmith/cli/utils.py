"""Input/output helpers for CLI commands."""

from __future__ import annotations

import json
from pathlib import Path
import sys
from typing import Any

import yaml

from richsmith.core.exceptions import InvalidNodeError


_YAML_SUFFIXES = {".yml", ".yaml"}


def load_document(source: Path | str) -> Any:
    """Load a rich-text document from a JSON/YAML file, or stdin for ``-``."""
    if str(source) == "-":
        payload = sys.stdin.read()
        suffix = ""
    else:
        path = Path(source)
        payload = path.read_text(encoding="utf-8")
        suffix = path.suffix.lower()

    try:
        if suffix in _YAML_SUFFIXES:
            document = yaml.safe_load(payload)
        else:
            document = json.loads(payload)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise InvalidNodeError(f"Unable to parse rich-text document from {source}") from exc

    if not isinstance(document, (dict, list)):
        raise InvalidNodeError(
            f"Rich-text document must be an object or a list, got {type(document).__name__}"
        )
    return document


def write_output(content: str, output: Path | None) -> None:
    """Write *content* to *output*, or stdout when no path is given."""
    if output is None:
        sys.stdout.write(content)
        if not content.endswith("\n"):
            sys.stdout.write("\n")
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(content, encoding="utf-8")


__all__ = ["load_document", "write_output"]
