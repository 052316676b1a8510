"""Configuration models for BriefDeck."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Literal, Sequence


StorageBackend = Literal["memory", "sqlalchemy"]

_TRUTHY = {"1", "true", "yes"}


@dataclass(slots=True)
class StorageConfig:
    """Configure where users, designs and badges are kept."""

    backend: StorageBackend = "memory"
    dsn: str | None = None
    echo_sql: bool = False

    def resolve_dsn(self) -> str | None:
        if self.dsn:
            return self.dsn
        if self.backend == "sqlalchemy":
            return "sqlite+aiosqlite:///./briefdeck.db"
        return None


@dataclass(slots=True)
class AdminCommandConfig:
    """Allows renaming admin bot commands."""

    add_card: str = "addcard"
    remove_card: str = "removecard"
    award_badge: str = "awardbadge"
    grant_points: str = "grantpoints"
    promote: str = "promote"


@dataclass(slots=True)
class AdminConfig:
    admin_ids: set[int] = field(default_factory=set)
    enable_audit_logs: bool = True
    commands: AdminCommandConfig = field(default_factory=AdminCommandConfig)


@dataclass(slots=True)
class ProgressConfig:
    """Point rewards and penalties applied around the level curve."""

    design_points: int = 25
    badge_points: int = 50
    cancel_penalty: int = 50
    timer_presets: Sequence[int] = (30, 60, 120)
    max_timer_minutes: int = 24 * 60


@dataclass(slots=True)
class BriefDeckConfig:
    """Top-level configuration container."""

    bot_token: str = ""
    storage: StorageConfig = field(default_factory=StorageConfig)
    admin: AdminConfig = field(default_factory=AdminConfig)
    progress: ProgressConfig = field(default_factory=ProgressConfig)
    seed_sample_data: bool = False
    rng_seed: int | None = None

    @classmethod
    def from_env(cls) -> "BriefDeckConfig":
        """Create config from environment variables prefixed with BRIEFDECK_."""
        prefix = "BRIEFDECK_"

        admin_ids = {
            _parse_int(f"{prefix}ADMIN_IDS", raw.strip())
            for raw in os.getenv(f"{prefix}ADMIN_IDS", "").split(",")
            if raw.strip()
        }
        commands = AdminCommandConfig(
            add_card=os.getenv(f"{prefix}ADMIN_CMD_ADD_CARD") or "addcard",
            remove_card=os.getenv(f"{prefix}ADMIN_CMD_REMOVE_CARD") or "removecard",
            award_badge=os.getenv(f"{prefix}ADMIN_CMD_AWARD_BADGE") or "awardbadge",
            grant_points=os.getenv(f"{prefix}ADMIN_CMD_GRANT_POINTS") or "grantpoints",
            promote=os.getenv(f"{prefix}ADMIN_CMD_PROMOTE") or "promote",
        )

        progress = ProgressConfig(
            design_points=_env_int(f"{prefix}PROGRESS_DESIGN_POINTS", 25),
            badge_points=_env_int(f"{prefix}PROGRESS_BADGE_POINTS", 50),
            cancel_penalty=_env_int(f"{prefix}PROGRESS_CANCEL_PENALTY", 50),
            timer_presets=_parse_presets(os.getenv(f"{prefix}PROGRESS_TIMER_PRESETS")),
            max_timer_minutes=_env_int(f"{prefix}PROGRESS_MAX_TIMER_MINUTES", 24 * 60),
        )

        rng_seed = os.getenv(f"{prefix}RNG_SEED")
        return cls(
            bot_token=os.getenv(f"{prefix}BOT_TOKEN", ""),
            storage=StorageConfig(
                backend=os.getenv(f"{prefix}STORAGE_BACKEND", "memory"),
                dsn=os.getenv(f"{prefix}STORAGE_DSN"),
                echo_sql=_env_flag(f"{prefix}STORAGE_ECHO_SQL", False),
            ),
            admin=AdminConfig(
                admin_ids=admin_ids,
                enable_audit_logs=_env_flag(f"{prefix}ADMIN_ENABLE_AUDIT_LOGS", True),
                commands=commands,
            ),
            progress=progress,
            seed_sample_data=_env_flag(f"{prefix}SEED_SAMPLE_DATA", False),
            rng_seed=_parse_int(f"{prefix}RNG_SEED", rng_seed) if rng_seed else None,
        )


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUTHY


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return _parse_int(name, raw)


def _parse_int(name: str, raw: str) -> int:
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"Invalid integer for {name}: {raw!r}") from exc


def _parse_presets(raw: str | None) -> tuple[int, ...]:
    if not raw:
        return (30, 60, 120)
    presets = tuple(
        _parse_int("BRIEFDECK_PROGRESS_TIMER_PRESETS", item.strip())
        for item in raw.split(",")
        if item.strip()
    )
    if any(value <= 0 for value in presets):
        raise ValueError("BRIEFDECK_PROGRESS_TIMER_PRESETS must contain positive minutes")
    return presets
