"""Result and error models used across the config layer."""

from __future__ import annotations

from pydantic import BaseModel


class Error(BaseModel):
    """Error result from operations."""

    message: str

    def __str__(self) -> str:
        return self.message


__all__ = ["Error"]
