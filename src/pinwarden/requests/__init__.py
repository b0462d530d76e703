from .guard import ResolutionGuard
from .models import ApprovalRequest, Decision, RequestStatus, ResolveAttempt
from .render import render
from .workflow import PinRequest, PinRequestService, Refusal

__all__ = [
    "ApprovalRequest",
    "Decision",
    "PinRequest",
    "PinRequestService",
    "Refusal",
    "RequestStatus",
    "ResolutionGuard",
    "ResolveAttempt",
    "render",
]
