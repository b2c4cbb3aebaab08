"""Profile and root configuration models for the config store."""

from __future__ import annotations

from pathlib import Path
from typing import Dict

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Profile(BaseModel):
    """Server endpoint plus basic-auth credentials."""

    model_config = ConfigDict(frozen=True)

    url: str
    username: str = ""
    password: str = ""

    @field_validator("url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")


class Config(BaseModel):
    """Root config.json document."""

    profiles: Dict[str, Profile] = Field(default_factory=dict)
    default_profile: str = ""
    config_path: Path | None = Field(default=None, exclude=True)

    def get_profile(self, name: str) -> Profile | None:
        """Get profile by name, or None if not found."""

        return self.profiles.get(name)

    def has_profile(self, name: str) -> bool:
        """Check if profile exists."""

        return name in self.profiles


__all__ = ["Config", "Profile"]
