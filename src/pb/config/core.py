"""Core config state management and persistence helpers."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from pb.home import load_json, resolve_config_path, save_json
from pb.models import Config, Profile

logger = logging.getLogger(__name__)

DEMO_PROFILE_NAME = "demo"
DEMO_PROFILE = Profile(
    url="https://demo.parseable.io", username="admin", password="admin"
)

_CONFIG: Config | None = None
_CONFIG_PATH: Path | None = None


class ProfileError(Exception):
    """Error in config loading or profile resolution."""

    pass


def reset() -> None:
    """Reset cached config (primarily for tests)."""

    global _CONFIG, _CONFIG_PATH
    _CONFIG = None
    _CONFIG_PATH = None


def config_path() -> Path | None:
    """Return the path of the active config, if set."""

    if _CONFIG_PATH is not None:
        return _CONFIG_PATH
    if _CONFIG is not None and _CONFIG.config_path is not None:
        return _CONFIG.config_path
    return None


def _store(config_obj: Config, path: Path) -> Config:
    config_obj.config_path = path
    global _CONFIG, _CONFIG_PATH
    _CONFIG = config_obj
    _CONFIG_PATH = path
    return config_obj


def _initial_config() -> Config:
    return Config(
        profiles={DEMO_PROFILE_NAME: DEMO_PROFILE},
        default_profile=DEMO_PROFILE_NAME,
    )


def use(path: Path | str | None = None) -> Config:
    """Load config from ``path`` (or fallback locations) and cache it.

    A missing file is created with the bundled demo profile as default.
    """

    target: Optional[Path]
    if path is None:
        target = None
    elif isinstance(path, Path):
        target = path
    else:
        target = Path(path)

    resolved = resolve_config_path(target)
    if not resolved.exists():
        logger.info("No config at %s, writing demo profile", resolved)
        config_obj = _initial_config()
        save_json(resolved, config_obj.model_dump(exclude_none=True))
        return _store(config_obj, resolved)

    try:
        data = load_json(resolved)
        config_obj = Config.model_validate(data)
    except json.JSONDecodeError as e:
        raise ProfileError(f"Invalid JSON in {resolved}: {e}")
    except ValidationError as e:
        raise ProfileError(f"Invalid config in {resolved}: {e}")
    return _store(config_obj, resolved)


def ensure(path: Path | str | None = None) -> Config:
    """Ensure a config is loaded, optionally overriding the path."""

    if path is not None:
        return use(path)
    if _CONFIG is None:
        return use(None)
    return _CONFIG


def require() -> Config:
    """Return the cached config, loading it if necessary."""

    return ensure(None)


def persist(config_obj: Config) -> Config:
    """Persist and cache the given config object."""

    path = config_path()
    if path is None:
        raise RuntimeError("Config path not set; call use() first")

    validated = Config.model_validate(config_obj.model_dump())
    save_json(path, validated.model_dump(exclude_none=True))
    return _store(validated, path)


__all__ = [
    "DEMO_PROFILE",
    "DEMO_PROFILE_NAME",
    "ProfileError",
    "config_path",
    "ensure",
    "persist",
    "require",
    "reset",
    "use",
]
