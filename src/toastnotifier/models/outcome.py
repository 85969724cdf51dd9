"""Terminal results of a display session."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class OutcomeKind(Enum):
    ACTIVATED = "Activated"
    DISMISSED = "Dismissed"
    FAILED = "Failed"
    CANCELLED = "Cancelled"


class DismissalReason(Enum):
    # Values follow the platform's ToastDismissalReason numbering
    USER_CANCELED = 0
    APPLICATION_HIDDEN = 1
    TIMED_OUT = 2
    UNSPECIFIED = -1

    @property
    def label(self) -> str:
        return {
            DismissalReason.USER_CANCELED: "UserCanceled",
            DismissalReason.APPLICATION_HIDDEN: "ApplicationHidden",
            DismissalReason.TIMED_OUT: "TimedOut",
            DismissalReason.UNSPECIFIED: "Unspecified",
        }[self]

    @classmethod
    def from_platform(cls, reason: object) -> "DismissalReason":
        """Map a platform dismissal reason; anything unknown is UNSPECIFIED.

        Accepts our own members, the platform's integer codes (including int
        enums) and names such as ``"TimedOut"`` or ``"TIMED_OUT"``.
        """
        if isinstance(reason, cls):
            return reason
        if isinstance(reason, int) and not isinstance(reason, bool):
            for member in cls:
                if member is not cls.UNSPECIFIED and member.value == int(reason):
                    return member
            return cls.UNSPECIFIED
        name = getattr(reason, "name", reason)
        if isinstance(name, str):
            wanted = name.replace("_", "").casefold()
            for member in cls:
                if member.label.casefold() == wanted:
                    return member
        return cls.UNSPECIFIED


@dataclass(frozen=True)
class DisplayOutcome:
    kind: OutcomeKind
    reason: Optional[DismissalReason] = None
    error: Optional[object] = None

    @classmethod
    def activated(cls) -> "DisplayOutcome":
        return cls(OutcomeKind.ACTIVATED)

    @classmethod
    def dismissed(cls, reason: DismissalReason = DismissalReason.UNSPECIFIED) -> "DisplayOutcome":
        return cls(OutcomeKind.DISMISSED, reason=reason)

    @classmethod
    def failed(cls, error: Optional[object] = None) -> "DisplayOutcome":
        return cls(OutcomeKind.FAILED, error=error)

    @classmethod
    def cancelled(cls) -> "DisplayOutcome":
        return cls(OutcomeKind.CANCELLED)

    def __str__(self) -> str:
        if self.kind is OutcomeKind.DISMISSED and self.reason not in (None, DismissalReason.UNSPECIFIED):
            return f"{self.kind.value} ({self.reason.label})"
        if self.kind is OutcomeKind.FAILED and self.error is not None:
            return f"{self.kind.value} ({self.error})"
        return self.kind.value
