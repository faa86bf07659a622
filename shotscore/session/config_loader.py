"""
Utilities to load session-related configuration from YAML files.

Phase timers and lane defaults live in `config/default_config.yaml` so range
officers can adjust countdowns and windows without touching code. Unknown
keys are ignored to keep the loader backwards compatible.
"""
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional
import logging

from shotscore.core import TargetTemplate, load_yaml
from shotscore.target import find_template, template_from_distance
from .phase import PhaseConfig

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("config/default_config.yaml")


@dataclass
class LaneDefaults:
    """Defaults applied to new lanes."""
    session_type: str = "practice"
    template_id: Optional[str] = None
    target_distance_m: Optional[float] = None  # Used when template_id is unset
    esa: Optional[int] = None
    duplicate_tolerance_px: float = 3.0

    def resolve_template(self) -> Optional[TargetTemplate]:
        """Catalog template by id, else a virtual one from the distance."""
        if self.template_id:
            template = find_template(template_id=self.template_id)
            if template is not None:
                return template
            logger.warning(f"Unknown template id in config: {self.template_id}")
        if self.target_distance_m is not None:
            return template_from_distance(self.target_distance_m)
        return None


def _apply_overrides(target: Any, overrides: Dict[str, Any]) -> None:
    """
    Apply dictionary overrides to a dataclass-like object.

    Unknown keys are ignored to remain forward compatible with new YAML fields.
    """
    for key, value in overrides.items():
        if hasattr(target, key):
            setattr(target, key, value)
        else:
            logger.debug("Ignoring unknown config key: %s", key)


def load_session_settings(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load raw configuration dictionary from YAML.

    Args:
        config_path: Optional path to YAML file (defaults to DEFAULT_CONFIG_PATH)

    Returns:
        Dictionary with configuration values (empty dict on failure)
    """
    path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH

    if not path.exists():
        logger.info("Session config not found at %s, using defaults", path)
        return {}

    try:
        return load_yaml(path) or {}
    except Exception as exc:  # YAML/IO errors fall back to safe defaults
        logger.warning("Failed to load session config from %s: %s", path, exc)
        return {}


def build_phase_config(settings: Optional[Dict[str, Any]] = None) -> PhaseConfig:
    """
    Construct PhaseConfig from settings.

    Raises:
        ValueError: If the configured firing mode is unknown
    """
    settings = settings or {}
    overrides = settings.get("phase") or {}

    config = PhaseConfig()
    _apply_overrides(config, overrides)
    # Re-run validation on the overridden values
    config.__post_init__()
    return config


def build_lane_defaults(settings: Optional[Dict[str, Any]] = None) -> LaneDefaults:
    """Construct LaneDefaults from settings."""
    settings = settings or {}
    defaults = LaneDefaults()
    _apply_overrides(defaults, settings.get("lane") or {})
    return defaults


def configure_logging(settings: Optional[Dict[str, Any]] = None) -> None:
    """
    Apply the ``logging.level`` setting to the package logger.
    """
    settings = settings or {}
    level_name = str((settings.get("logging") or {}).get("level", "INFO")).upper()
    level = getattr(logging, level_name, None)
    if not isinstance(level, int):
        logger.warning("Unknown log level %s, keeping INFO", level_name)
        level = logging.INFO
    logging.getLogger("shotscore").setLevel(level)
