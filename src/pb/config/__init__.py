"""Config layer facade: cached state and profile mutations."""

from pb.models import Config, Error, Profile

from .core import (
    DEMO_PROFILE,
    DEMO_PROFILE_NAME,
    ProfileError,
    config_path,
    ensure,
    persist,
    require,
    reset,
    use,
)
from .profiles import add_profile, remove_profile, resolve_profile, set_default

__all__ = [
    "Config",
    "DEMO_PROFILE",
    "DEMO_PROFILE_NAME",
    "Error",
    "Profile",
    "ProfileError",
    "add_profile",
    "config_path",
    "ensure",
    "persist",
    "remove_profile",
    "require",
    "reset",
    "resolve_profile",
    "set_default",
    "use",
]
