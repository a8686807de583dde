"""Runs every governance check over a loaded store and builds the report."""

from __future__ import annotations

import asyncio

from governance.adapters.entity_store import EntityStore
from governance.models.validation import ValidationError, ValidationReport, ValidationWarning
from governance.services.entity_checks import validate_cross_references, validate_file_names
from governance.services.identity_verifier import verify_identities
from governance.services.report_service import build_report
from governance.services.validator_config import ValidatorConfig


async def validate_store(
    store: EntityStore,
    config: ValidatorConfig,
    *,
    check_external: bool = True,
) -> ValidationReport:
    errors: list[ValidationError] = []
    warnings: list[ValidationWarning] = []

    errors.extend(validate_file_names(store))
    errors.extend(validate_cross_references(store))

    if check_external:
        external_errors, external_warnings = await verify_identities(store, config)
        errors.extend(external_errors)
        warnings.extend(external_warnings)

    return build_report(store, errors, warnings)


def run_validation(store: EntityStore, config: ValidatorConfig, *, check_external: bool = True) -> ValidationReport:
    return asyncio.run(validate_store(store, config, check_external=check_external))
