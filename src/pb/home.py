"""Home layer: config path resolution and file I/O (no Pydantic dependencies)."""

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

CONFIG_APP_NAME = "pb"
CONFIG_FILENAME = "config.json"


def user_config_dir() -> Path:
    """Return the per-user config directory ($XDG_CONFIG_HOME or ~/.config)."""
    xdg = os.getenv("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg).expanduser()
    return Path.home() / ".config"


def resolve_config_path(cli_path: Optional[Path] = None) -> Path:
    """
    Resolve config.json path with precedence:
    1. CLI --config path
    2. PB_CONFIG env var
    3. <user config dir>/pb/config.json
    """
    if cli_path:
        return cli_path

    env = os.getenv("PB_CONFIG")
    if env:
        return Path(env).expanduser()

    return user_config_dir() / CONFIG_APP_NAME / CONFIG_FILENAME


def load_json(path: Path) -> Dict[str, Any]:
    """Load and parse JSON file."""
    return json.loads(path.read_text(encoding="utf-8"))


def save_json(path: Path, data: Dict[str, Any]) -> None:
    """Save data to JSON file with pretty formatting."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        json.dumps(data, indent=2, ensure_ascii=False) + "\n", encoding="utf-8"
    )
