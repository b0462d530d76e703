from __future__ import annotations


class PinWardenError(Exception):
    """Base class for errors raised by the pin request workflow."""


class InvalidTransitionError(PinWardenError):
    """A request was asked to leave a terminal state or re-bind its messages."""


class UnknownControlError(PinWardenError):
    def __init__(self, custom_id: str | None) -> None:
        super().__init__(f"Unknown component ID in pin response: {custom_id}.")
        self.custom_id = custom_id
