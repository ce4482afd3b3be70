from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Optional

import yaml

API_KEY_ENV_VARS = ("API_KEY", "GEMINI_API_KEY")


@dataclass(frozen=True)
class AssistConfig:
    """Settings for the generative text service used by AI Assist."""

    model: str = "gemini-3-flash-preview"
    insight_system_instruction: str = (
        "You are a corporate expense analyst. Provide professional, concise insights."
    )
    timeout_seconds: float = 30.0
    api_key: Optional[str] = None


def load_config(path: Path | str | None = None) -> AssistConfig:
    """Build the assist config from defaults, an optional YAML file and the environment."""
    config = AssistConfig()
    if path is not None:
        config = replace(config, **_load_overrides(Path(path)))
    if config.api_key is None:
        config = replace(config, api_key=api_key_from_env())
    return config


def api_key_from_env() -> Optional[str]:
    for name in API_KEY_ENV_VARS:
        value = os.environ.get(name)
        if value:
            return value
    return None


def _load_overrides(config_path: Path) -> dict[str, Any]:
    with config_path.open("r", encoding="utf-8") as config_file:
        loaded = yaml.safe_load(config_file)

    if not isinstance(loaded, dict):
        msg = f"Config file must contain a dictionary at root: {config_path}"
        raise ValueError(msg)

    section = loaded.get("assist", loaded)
    if not isinstance(section, dict):
        msg = f"'assist' section must be a dictionary: {config_path}"
        raise ValueError(msg)

    known = {f.name for f in fields(AssistConfig)}
    unknown = set(section) - known
    if unknown:
        raise ValueError(f"Unknown assist settings: {sorted(unknown)}")
    return section
