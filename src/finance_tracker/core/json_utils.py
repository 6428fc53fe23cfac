#!/usr/bin/env python3
"""
JSON and YAML Utilities Module

Centralized reading and writing of data files with consistent formatting.
Writes go through a temporary file and an atomic rename so a failed save never
leaves a half-written file behind.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Any

import yaml

YAML_SUFFIXES = (".yaml", ".yml")


def _atomic_write_text(filepath: Path, text: str) -> None:
    filepath.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=filepath.parent, prefix=f".{filepath.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(text)
        os.replace(tmp_name, filepath)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


def write_json(filepath: str | Path, data: Any, ensure_ascii: bool = False, sort_keys: bool = False) -> None:
    """
    Write data to a JSON file with standard pretty-printing.

    Args:
        filepath: Path to the JSON file
        data: Data to write to the file
        ensure_ascii: If True, escape non-ASCII characters (default: False)
        sort_keys: If True, sort dictionary keys (default: False)
    """
    _atomic_write_text(Path(filepath), format_json(data, ensure_ascii=ensure_ascii, sort_keys=sort_keys) + "\n")


def read_json(filepath: str | Path) -> Any:
    """
    Read data from a JSON file.

    Args:
        filepath: Path to the JSON file

    Returns:
        The parsed JSON data
    """
    with open(filepath, encoding="utf-8") as f:
        return json.load(f)


def format_json(data: Any, ensure_ascii: bool = False, sort_keys: bool = False, default: Any = None) -> str:
    """
    Format data as a pretty-printed JSON string.

    Args:
        data: Data to format
        ensure_ascii: If True, escape non-ASCII characters (default: False)
        sort_keys: If True, sort dictionary keys (default: False)
        default: Function to serialize non-JSON types (default: None)

    Returns:
        Pretty-printed JSON string
    """
    return json.dumps(data, indent=2, ensure_ascii=ensure_ascii, sort_keys=sort_keys, default=default)


def write_document(filepath: str | Path, data: Any) -> None:
    """Write a document as YAML or JSON, chosen by file suffix."""
    filepath = Path(filepath)
    if filepath.suffix.lower() in YAML_SUFFIXES:
        _atomic_write_text(filepath, yaml.safe_dump(data, default_flow_style=False, sort_keys=False))
    else:
        write_json(filepath, data)


def read_document(filepath: str | Path) -> Any:
    """Read a YAML or JSON document, chosen by file suffix."""
    filepath = Path(filepath)
    if filepath.suffix.lower() in YAML_SUFFIXES:
        with open(filepath, encoding="utf-8") as f:
            return yaml.safe_load(f)
    return read_json(filepath)
