"""External identity check types.

A check targets one identity in one external service and resolves to exactly
one outcome: exists, absent, or unknown.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class IdentityStatus(str, Enum):
    EXISTS = "exists"
    ABSENT = "absent"
    UNKNOWN = "unknown"


class IdentityService(str, Enum):
    GITHUB = "github"
    SLACK = "slack"


@dataclass(frozen=True)
class LookupOutcome:
    status: IdentityStatus
    reason: str = ""

    @classmethod
    def exists(cls) -> LookupOutcome:
        return cls(status=IdentityStatus.EXISTS)

    @classmethod
    def absent(cls) -> LookupOutcome:
        return cls(status=IdentityStatus.ABSENT)

    @classmethod
    def unknown(cls, reason: str) -> LookupOutcome:
        return cls(status=IdentityStatus.UNKNOWN, reason=reason)


@dataclass(frozen=True)
class IdentityCheck:
    """One identity lookup, stamped with the file that declared the identity."""

    file: str
    service: IdentityService
    identity: str


@dataclass(frozen=True)
class IdentityCheckResult:
    check: IdentityCheck
    outcome: LookupOutcome
