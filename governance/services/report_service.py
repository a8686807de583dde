"""Validation report aggregation.

Merges the findings of every check into a per-file ledger and derives the
statistics. A file is valid iff it has no errors; the report is valid iff no
file is invalid. Warnings are counted but never affect validity.
"""

from __future__ import annotations

import json
from collections.abc import Iterable

from governance.adapters.entity_store import EntityStore
from governance.models.validation import (
    FileValidationMessages,
    ValidationError,
    ValidationReport,
    ValidationStatistics,
    ValidationWarning,
)


def build_report(
    store: EntityStore,
    errors: Iterable[ValidationError],
    warnings: Iterable[ValidationWarning],
) -> ValidationReport:
    files: dict[str, FileValidationMessages] = {key.file_path: FileValidationMessages() for key in store.keys()}

    for error in errors:
        files.setdefault(error.file, FileValidationMessages()).errors.append(error)
    for warning in warnings:
        files.setdefault(warning.file, FileValidationMessages()).warnings.append(warning)

    valid_files = sum(1 for messages in files.values() if messages.valid)
    stats = ValidationStatistics(
        contributors_count=len(store.contributors),
        teams_count=len(store.teams),
        repos_count=len(store.repos),
        valid_files_count=valid_files,
        invalid_files_count=len(files) - valid_files,
        total_errors=sum(len(m.errors) for m in files.values()),
        total_warnings=sum(len(m.warnings) for m in files.values()),
    )
    return ValidationReport(valid=stats.invalid_files_count == 0, stats=stats, files=files)


def report_to_dict(report: ValidationReport) -> dict:
    files: dict[str, dict] = {}
    for path in sorted(report.files):
        messages = report.files[path]
        row: dict[str, list[dict]] = {}
        if messages.errors:
            row["errors"] = [e.model_dump() for e in messages.errors]
        if messages.warnings:
            row["warnings"] = [w.model_dump() for w in messages.warnings]
        files[path] = row
    return {
        "valid": report.valid,
        "stats": report.stats.model_dump(),
        "files": files,
    }


def report_to_json(report: ValidationReport) -> str:
    return json.dumps(report_to_dict(report), indent=2)


def failure_message(report: ValidationReport) -> str:
    return (
        f"Validation failed with {report.stats.total_errors} error(s) "
        f"in {report.stats.invalid_files_count} file(s)"
    )


def format_report(report: ValidationReport) -> str:
    """Human-readable report: summary, errors, warnings, then a pass/fail line."""
    stats = report.stats
    lines = [
        "===== SUMMARY =====",
        f"Contributors: {stats.contributors_count}",
        f"Teams: {stats.teams_count}",
        f"Repos: {stats.repos_count}",
        f"Valid files: {stats.valid_files_count}",
        f"Invalid files: {stats.invalid_files_count}",
        f"Total errors: {stats.total_errors}",
        f"Total warnings: {stats.total_warnings}",
    ]

    if stats.total_errors > 0:
        lines += ["", "===== ERRORS ====="]
        for path in sorted(report.files):
            errors = report.files[path].errors
            if not errors:
                continue
            lines.append(path)
            lines.extend(f"  - {e.message}" for e in errors)

    if stats.total_warnings > 0:
        lines += ["", "===== WARNINGS ====="]
        for path in sorted(report.files):
            warnings = report.files[path].warnings
            if not warnings:
                continue
            lines.append(path)
            lines.extend(f"  - {w.message}" for w in warnings)

    lines.append("")
    lines.append("✅ Validation passed!" if report.valid else f"❌ {failure_message(report)}")
    return "\n".join(lines)
