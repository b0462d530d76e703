from __future__ import annotations

from typing import Final

# Discord limits
MAX_EMBED_DESCRIPTION: Final[int] = 4096
MAX_EMBED_TITLE: Final[int] = 256
MAX_FIELD_VALUE: Final[int] = 1024
MAX_REASON_LENGTH: Final[int] = 1000

# Bot configuration
CACHE_TTL_SECONDS: Final[int] = 120

# Colors (hex values)
COLORS = {
    "default": 0x5865F2,
    "success": 0x57F287,
    "error": 0xED4245,
    "info": 0x3498DB,
    "pending": 0x1ABC9C,
}

# Component custom ids
APPROVE_ID: Final[str] = "request-pin-approve"
DENY_ID: Final[str] = "request-pin-deny"
CANCEL_ID: Final[str] = "request-pin-cancel"
REASON_INPUT_ID: Final[str] = "reason"

# Discord JSON error codes that mean "the thing is gone"
UNKNOWN_CHANNEL: Final[int] = 10003
UNKNOWN_MESSAGE: Final[int] = 10008
UNKNOWN_WEBHOOK: Final[int] = 10015
INVALID_WEBHOOK_TOKEN: Final[int] = 50027
GONE_ERROR_CODES: Final[frozenset[int]] = frozenset(
    {UNKNOWN_CHANNEL, UNKNOWN_MESSAGE, UNKNOWN_WEBHOOK, INVALID_WEBHOOK_TOKEN}
)
INVALID_FORM_BODY: Final[int] = 50035
# The 3 second window to respond to an interaction has passed
UNKNOWN_INTERACTION: Final[int] = 10062

NO_REASON_GIVEN: Final[str] = "No reason given"

# User-facing messages
ERROR_MESSAGES = {
    "internal_error": ":x: Internal error!",
    "missing_permissions": ":x: I don't have the permissions to do that here!",
    "not_configured": ":x: I'm not configured yet!",
    "already_pinned": ":x: This message is already pinned, silly!",
    "do_it_yourself": ":x: Just pin it yourself, stoobid.",
    "not_a_moderator": ":x: You can't act on pin requests.",
}

PIN_REQUEST_MESSAGES = {
    "requested": ":white_check_mark: Your request has been sent to the mods! Please be patient while they have a look. :coffee:",
    "cancelled": ":x: Your pin request was cancelled!",
    "approved_feedback": ":white_check_mark: Your pin request has been approved!",
    "approved_mod": ":white_check_mark: Pin approved!",
    "denied_feedback": ":x: Your pin request has been denied!",
    "denied_mod": ":x: Pin denied!",
}
