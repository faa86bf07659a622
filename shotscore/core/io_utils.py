"""
I/O utilities for YAML shot files, config and report export.
Writes are atomic to avoid half-written reports after a crash.
"""
import os
import yaml
import tempfile
from pathlib import Path
from typing import Any, Dict, List
import logging

from .types import Shot

logger = logging.getLogger(__name__)


def atomic_write_yaml(filepath: Path, data: Dict[str, Any]) -> None:
    """
    Write YAML file atomically using temporary file + os.replace().

    Args:
        filepath: Target file path
        data: Dictionary to serialize as YAML

    Raises:
        IOError: If write operation fails
    """
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)

    # Temp file in the same directory keeps os.replace on one filesystem
    fd, temp_path = tempfile.mkstemp(
        dir=filepath.parent,
        prefix=f".{filepath.stem}_",
        suffix=".tmp"
    )

    try:
        with os.fdopen(fd, 'w', encoding='utf-8') as f:
            yaml.safe_dump(data, f, default_flow_style=False, allow_unicode=True, sort_keys=False)

        os.replace(temp_path, filepath)
        logger.debug(f"Atomically wrote {filepath}")

    except Exception as e:
        try:
            os.unlink(temp_path)
        except OSError:
            pass
        logger.error(f"Failed to write {filepath}: {e}")
        raise IOError(f"Atomic write failed: {e}") from e


def load_yaml(filepath: Path) -> Dict[str, Any]:
    """
    Load a YAML file.

    Args:
        filepath: Path to YAML file

    Returns:
        Parsed dictionary (empty for an empty file)

    Raises:
        FileNotFoundError: If file does not exist
        yaml.YAMLError: If file is malformed
    """
    filepath = Path(filepath)

    if not filepath.exists():
        raise FileNotFoundError(f"YAML file not found: {filepath}")

    try:
        with open(filepath, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
        logger.debug(f"Loaded {filepath}")
        return data if data is not None else {}

    except yaml.YAMLError as e:
        logger.error(f"Failed to parse {filepath}: {e}")
        raise


def load_shots(filepath: Path) -> List[Shot]:
    """
    Load a shot list from YAML.

    The file holds either a top-level list of shot mappings or a mapping
    with a ``shots`` key.

    Args:
        filepath: Path to YAML file

    Returns:
        List of Shot objects in file order
    """
    filepath = Path(filepath)
    with open(filepath, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f)

    if isinstance(data, dict):
        data = data.get("shots", [])
    if not data:
        return []

    shots = [Shot.from_dict(item) for item in data]
    logger.info(f"Loaded {len(shots)} shots from {filepath}")
    return shots
