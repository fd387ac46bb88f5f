"""Error types raised while collecting stats and writing the card."""

from __future__ import annotations
import copy
from typing import Optional


class ProfileError(Exception):
    """Base class for every failure that ends a run."""

    def with_context(self, context: str) -> "ProfileError":
        """Return a copy of this error (same type) with `context` prepended."""
        err = copy.copy(self)
        err.args = (f"{context}: {self}",)
        return err


class ConfigError(ProfileError):
    pass


class TransportError(ProfileError):
    """Connection failure or timeout."""


class StatusError(ProfileError):
    """The server answered with something other than 200."""

    def __init__(self, message: str, status_code: Optional[int] = None, url: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.url = url


class DecodeError(ProfileError):
    """Body is not JSON or does not have the expected shape."""


class WriteError(ProfileError):
    pass
