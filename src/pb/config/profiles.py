"""Profile mutations and lookup on top of the cached config."""

from __future__ import annotations

from typing import Optional
from urllib.parse import urlparse

from pb.models import Error, Profile

from .core import ProfileError, persist, require

__all__ = ["add_profile", "remove_profile", "resolve_profile", "set_default"]


def add_profile(
    name: str,
    url: str,
    username: str = "",
    password: str = "",
) -> Profile | Error:
    """Add or replace a profile and persist it.

    The first profile added to an empty config becomes the default.
    """

    parsed = urlparse(url)
    if not parsed.scheme or not parsed.netloc:
        return Error(message=f"Invalid URL '{url}': expected scheme://host[:port]")

    config_obj = require().model_copy(deep=True)
    profile = Profile(url=url, username=username, password=password)
    config_obj.profiles[name] = profile
    if not config_obj.default_profile:
        config_obj.default_profile = name

    persist(config_obj)
    return profile


def remove_profile(name: str) -> Profile | Error:
    """Delete a profile; the default is cleared when it pointed at ``name``."""

    config_obj = require().model_copy(deep=True)
    profile = config_obj.profiles.pop(name, None)
    if profile is None:
        return Error(message=f"No profile found with the name: {name}")

    if config_obj.default_profile == name or not config_obj.profiles:
        config_obj.default_profile = ""

    persist(config_obj)
    return profile


def set_default(name: str) -> Profile | Error:
    """Make ``name`` the default profile."""

    config_obj = require().model_copy(deep=True)
    profile = config_obj.get_profile(name)
    if profile is None:
        return Error(message=f"profile {name} does not exist")

    config_obj.default_profile = name
    persist(config_obj)
    return profile


def resolve_profile(name: Optional[str] = None) -> Profile:
    """Return the named profile, or the default one when ``name`` is None.

    Raises:
        ProfileError: If no such profile exists or no default is configured
    """

    config_obj = require()
    if name is None:
        if not config_obj.profiles or not config_obj.default_profile:
            raise ProfileError(
                "no profile is configured to run this command. "
                "please create one using the profile command"
            )
        name = config_obj.default_profile

    profile = config_obj.get_profile(name)
    if profile is None:
        raise ProfileError(f"Profile not found: {name}")
    return profile
