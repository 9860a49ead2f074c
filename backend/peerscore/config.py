from __future__ import annotations

from dataclasses import dataclass
import logging
import os
from urllib.parse import urlparse

DEFAULT_SKILL_NAMES = ("Communication", "Collaboration", "Problem Solving", "Leadership")
SKILL_COUNT = 4
DEFAULT_CORS_ORIGIN = "http://localhost:3000"
ZERO_VARIANCE_POLICIES = {"neutral", "reject"}
SCORE_OVERFLOW_POLICIES = {"wrap", "clamp", "reject"}


class SettingsError(ValueError):
    pass


@dataclass(frozen=True)
class Settings:
    authority_address: str
    skill_names: tuple[str, ...]
    catalog_base_locator: str
    zero_variance_policy: str
    score_overflow_policy: str
    cors_origins: list[str]
    log_level: str


def _require_env(name: str) -> str:
    value = os.getenv(name, "").strip()
    if not value:
        raise SettingsError(f"Missing required environment variable: {name}")
    return value


def _optional_env(name: str) -> str | None:
    value = os.getenv(name, "").strip()
    return value or None


def _require_choice(name: str, value: str, choices: set[str]) -> str:
    normalized = value.lower()
    if normalized not in choices:
        allowed = ", ".join(sorted(choices))
        raise SettingsError(f"Invalid value for {name}: {value} (expected one of {allowed})")
    return normalized


def _require_origin(value: str) -> str:
    parsed = urlparse(value)
    if parsed.scheme not in {"http", "https"} or not parsed.netloc:
        raise SettingsError(f"Invalid URL for CORS_ORIGINS: {value}")
    return value


def _split(raw: str) -> list[str]:
    return [item.strip() for item in raw.split(",") if item.strip()]


def _skill_names(raw: str | None) -> tuple[str, ...]:
    if raw is None:
        return DEFAULT_SKILL_NAMES
    names = tuple(_split(raw))
    if len(names) != SKILL_COUNT:
        raise SettingsError(
            f"SKILL_NAMES must list exactly {SKILL_COUNT} skills, got {len(names)}"
        )
    return names


def load_cors_origins() -> list[str]:
    raw = _optional_env("CORS_ORIGINS") or DEFAULT_CORS_ORIGIN
    return [_require_origin(origin) for origin in _split(raw)]


def _log_level(raw: str | None) -> str:
    level = (raw or "INFO").upper()
    if not isinstance(logging.getLevelName(level), int):
        raise SettingsError(f"Invalid value for LOG_LEVEL: {raw}")
    return level


def load_settings() -> Settings:
    authority_address = _require_env("AUTHORITY_ADDRESS")
    skill_names = _skill_names(_optional_env("SKILL_NAMES"))
    catalog_base_locator = _optional_env("CATALOG_BASE_LOCATOR") or ""
    zero_variance_policy = _require_choice(
        "ZERO_VARIANCE_POLICY",
        _optional_env("ZERO_VARIANCE_POLICY") or "neutral",
        ZERO_VARIANCE_POLICIES,
    )
    score_overflow_policy = _require_choice(
        "SCORE_OVERFLOW_POLICY",
        _optional_env("SCORE_OVERFLOW_POLICY") or "wrap",
        SCORE_OVERFLOW_POLICIES,
    )
    cors_origins = load_cors_origins()
    log_level = _log_level(_optional_env("LOG_LEVEL"))

    return Settings(
        authority_address=authority_address,
        skill_names=skill_names,
        catalog_base_locator=catalog_base_locator,
        zero_variance_policy=zero_variance_policy,
        score_overflow_policy=score_overflow_policy,
        cors_origins=cors_origins,
        log_level=log_level,
    )
