"""Immutable records built from API payloads."""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict

from .errors import DecodeError


def _require_mapping(payload: Any, what: str) -> Dict[str, Any]:
    if not isinstance(payload, dict):
        raise DecodeError(f"{what}: expected a JSON object, got {type(payload).__name__}")
    return payload


def _int_field(payload: Dict[str, Any], key: str, what: str) -> int:
    value = payload.get(key) or 0
    # bool is an int subclass; a flag in a count field means the shape is wrong
    if isinstance(value, bool) or not isinstance(value, int):
        raise DecodeError(f"{what}: field {key!r} is not an integer: {value!r}")
    return value


def _str_field(payload: Dict[str, Any], key: str, what: str) -> str:
    value = payload.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise DecodeError(f"{what}: field {key!r} is not a string: {value!r}")
    return value


@dataclass(frozen=True)
class Account:
    login: str
    followers: int
    following: int
    bio: str
    public_repos: int

    @classmethod
    def from_payload(cls, payload: Any) -> "Account":
        data = _require_mapping(payload, "account")
        login = data.get("login")
        if not isinstance(login, str) or not login:
            raise DecodeError("account: missing 'login'")
        return cls(
            login=login,
            followers=_int_field(data, "followers", "account"),
            following=_int_field(data, "following", "account"),
            bio=_str_field(data, "bio", "account"),
            public_repos=_int_field(data, "public_repos", "account"),
        )


@dataclass(frozen=True)
class RepositorySummary:
    name: str
    language: str
    commits_url: str
    is_fork: bool = False
    is_archived: bool = False

    @property
    def counted(self) -> bool:
        """Forks and archived repositories are left out of every statistic."""
        return not (self.is_fork or self.is_archived)

    @classmethod
    def from_payload(cls, payload: Any) -> "RepositorySummary":
        data = _require_mapping(payload, "repository")
        name = data.get("name")
        commits_url = data.get("commits_url")
        if not isinstance(name, str) or not isinstance(commits_url, str):
            raise DecodeError(f"repository: missing 'name' or 'commits_url' in {sorted(data)}")
        return cls(
            name=name,
            language=_str_field(data, "language", "repository"),
            commits_url=commits_url,
            is_fork=bool(data.get("fork", False)),
            is_archived=bool(data.get("archived", False)),
        )


@dataclass(frozen=True)
class AggregatedStats:
    """Everything the renderer needs. Built once per run."""

    account: Account
    stars: int
    total_commits: int
    most_used_languages: str
    bio: str
