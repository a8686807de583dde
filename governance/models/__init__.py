"""Pydantic models and value types."""

from governance.models.entities import Contributor, EntityKey, EntityKind, Repo, Team
from governance.models.identity import (
    IdentityCheck,
    IdentityCheckResult,
    IdentityService,
    IdentityStatus,
    LookupOutcome,
)
from governance.models.validation import (
    FileValidationMessages,
    ValidationError,
    ValidationReport,
    ValidationStatistics,
    ValidationWarning,
)

__all__ = [
    "Contributor",
    "EntityKey",
    "EntityKind",
    "FileValidationMessages",
    "IdentityCheck",
    "IdentityCheckResult",
    "IdentityService",
    "IdentityStatus",
    "LookupOutcome",
    "Repo",
    "Team",
    "ValidationError",
    "ValidationReport",
    "ValidationStatistics",
    "ValidationWarning",
]
