from __future__ import annotations

import os
from dataclasses import dataclass


def _get_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _get_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name, "").strip().lower()
    if not raw:
        return default
    return raw in {"1", "true", "yes", "y", "on"}


@dataclass(frozen=True)
class Settings:
    token: str
    sync_guild_id: int = 0
    sqlite_path: str = "pinwarden.sqlite3"
    log_level: str = "INFO"
    cache_default_ttl_seconds: int = 120
    # Only needed when the target message content is not delivered with the interaction.
    message_content_intent: bool = True

    # Pin request timing. Interaction tokens expire after 15 minutes, so the
    # requester's cancel button cannot outlive that.
    cancel_window_seconds: int = 840
    deny_reason_timeout_seconds: int = 3600
    # 0 keeps the moderator buttons alive until someone decides.
    moderator_window_seconds: int = 0

    # Members who can pin in the source channel are told to do it themselves.
    enforce_self_service: bool = True

    @property
    def moderator_timeout(self) -> float | None:
        return float(self.moderator_window_seconds) if self.moderator_window_seconds > 0 else None


def load_settings() -> Settings:
    token = os.getenv("DISCORD_TOKEN", "").strip()
    if not token:
        raise RuntimeError("DISCORD_TOKEN is required")
    return Settings(
        token=token,
        sync_guild_id=_get_int("SYNC_GUILD_ID", 0),
        sqlite_path=(os.getenv("SQLITE_PATH", "pinwarden.sqlite3").strip() or "pinwarden.sqlite3"),
        log_level=(os.getenv("LOG_LEVEL", "INFO").strip() or "INFO"),
        cache_default_ttl_seconds=_get_int("CACHE_DEFAULT_TTL_SECONDS", 120),
        message_content_intent=_get_bool("MESSAGE_CONTENT_INTENT", True),
        cancel_window_seconds=max(1, _get_int("CANCEL_WINDOW_SECONDS", 840)),
        deny_reason_timeout_seconds=max(1, _get_int("DENY_REASON_TIMEOUT_SECONDS", 3600)),
        moderator_window_seconds=max(0, _get_int("MODERATOR_WINDOW_SECONDS", 0)),
        enforce_self_service=_get_bool("ENFORCE_SELF_SERVICE", True),
    )
