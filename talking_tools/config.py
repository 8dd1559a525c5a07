"""
Configuration for the talking prompts front ends.

Settings come from a YAML file (``config/talking.yaml`` by default, or the
path in ``TALKING_CONFIG``) merged over built-in defaults.  A missing file
means defaults; a malformed one is an error.
"""

from __future__ import annotations

import copy
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

from .activity_catalog import BASE_PHRASES
from .phrase_history import DEFAULT_HISTORY_LIMIT
from .pronouns import Pronoun, labels

# Environment variable that points at an alternate config file.
CONFIG_ENV_VAR = "TALKING_CONFIG"

REPO_ROOT = Path(__file__).resolve().parent.parent
DEFAULT_CONFIG_PATH = REPO_ROOT / "config" / "talking.yaml"

_DEFAULTS: Dict[str, Any] = {
    "pronouns": labels(),
    "default_pronoun": Pronoun.I.value,
    "base_phrases": list(BASE_PHRASES),
    "history": {"limit": DEFAULT_HISTORY_LIMIT},
    "speech": {
        "enabled": True,
        "voice_language": "en",
        "rate": 1.0,
        "volume": 1.0,
    },
    "logging": {"level": "INFO", "file": None},
}


@dataclass(frozen=True)
class SpeechSettings:
    enabled: bool = True
    voice_language: str = "en"
    # Multiplier over the engine's default words-per-minute.
    rate: float = 1.0
    # 0.0 - 1.0
    volume: float = 1.0


@dataclass(frozen=True)
class TalkingConfig:
    pronouns: Tuple[Pronoun, ...]
    default_pronoun: Pronoun
    base_phrases: Tuple[str, ...]
    history_limit: int
    speech: SpeechSettings
    log_level: str
    log_file: Optional[str]
    source: Optional[Path] = None


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively overlay *override* onto a copy of *base*; unknown keys are dropped."""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if key not in merged:
            continue
        if isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def resolve_config_path(path: Optional[str] = None) -> Path:
    """Explicit *path*, then ``TALKING_CONFIG``, then the repo default."""
    if path:
        return Path(path)
    env_path = os.environ.get(CONFIG_ENV_VAR, "")
    if env_path:
        return Path(env_path)
    return DEFAULT_CONFIG_PATH


def read_config_file(path: Path) -> Dict[str, Any]:
    """
    Parse *path* as YAML.

    Returns:
        The document as a dict, or ``{}`` if the file does not exist or is
        empty.

    Raises:
        ValueError: If the file is not valid YAML or not a mapping.
    """
    if not path.exists():
        return {}
    try:
        with open(path, encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except yaml.YAMLError as exc:
        raise ValueError(f"{path}: invalid YAML: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a mapping at top level")
    return data


def _section(raw: Dict[str, Any], name: str, config_path: Path) -> Dict[str, Any]:
    """Return the *name* sub-mapping; an empty section counts as ``{}``."""
    value = raw[name]
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"{config_path}: '{name}' must be a mapping")
    return value


def load_config(path: Optional[str] = None) -> TalkingConfig:
    """
    Load the configuration.

    Args:
        path: Optional explicit config file.  See resolve_config_path().

    Raises:
        ValueError: If the file is malformed or names an unknown pronoun.
    """
    config_path = resolve_config_path(path)
    raw = _merge(_DEFAULTS, read_config_file(config_path))

    if not isinstance(raw["pronouns"], list):
        raise ValueError(f"{config_path}: 'pronouns' must be a list")
    pronouns = tuple(Pronoun.parse(p) for p in raw["pronouns"])
    if not pronouns:
        raise ValueError(f"{config_path}: 'pronouns' must not be empty")
    default_pronoun = Pronoun.parse(raw["default_pronoun"])
    if default_pronoun not in pronouns:
        raise ValueError(
            f"{config_path}: default_pronoun '{default_pronoun.value}' "
            f"is not one of the enabled pronouns"
        )

    history = _section(raw, "history", config_path)
    speech = _section(raw, "speech", config_path)
    logging_cfg = _section(raw, "logging", config_path)

    try:
        history_limit = int(history.get("limit", DEFAULT_HISTORY_LIMIT))
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{config_path}: history.limit must be an integer") from exc
    if history_limit < 1:
        raise ValueError(f"{config_path}: history.limit must be at least 1")

    return TalkingConfig(
        pronouns=pronouns,
        default_pronoun=default_pronoun,
        base_phrases=tuple(str(b) for b in raw["base_phrases"] or ()),
        history_limit=history_limit,
        speech=SpeechSettings(
            enabled=bool(speech.get("enabled", True)),
            voice_language=str(speech.get("voice_language", "en")),
            rate=float(speech.get("rate", 1.0)),
            volume=float(speech.get("volume", 1.0)),
        ),
        log_level=str(logging_cfg.get("level", "INFO")).upper(),
        log_file=logging_cfg.get("file"),
        source=config_path if config_path.exists() else None,
    )
