"""Validation report models.

Errors are definite integrity violations; warnings are inconclusive checks
and never affect validity.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class ValidationError(BaseModel):
    file: str
    message: str


class ValidationWarning(BaseModel):
    file: str
    message: str


class FileValidationMessages(BaseModel):
    errors: list[ValidationError] = Field(default_factory=list)
    warnings: list[ValidationWarning] = Field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.errors


class ValidationStatistics(BaseModel):
    contributors_count: int = Field(default=0, ge=0)
    teams_count: int = Field(default=0, ge=0)
    repos_count: int = Field(default=0, ge=0)
    valid_files_count: int = Field(default=0, ge=0)
    invalid_files_count: int = Field(default=0, ge=0)
    total_errors: int = Field(default=0, ge=0)
    total_warnings: int = Field(default=0, ge=0)


class ValidationReport(BaseModel):
    valid: bool
    stats: ValidationStatistics
    files: dict[str, FileValidationMessages] = Field(default_factory=dict)
