#!/usr/bin/env python3
"""Validate governance records (contributors, teams, repos).

Checks:
- file names match the identity each record declares
- team members and team repos reference existing records
- GitHub usernames and Slack member/channel IDs exist (skipped with --skip-external)

Usage:
    python scripts/validate_governance.py [--root DIR] [--json-output PATH] [--skip-external] [-v]

Environment (a .env file in the root is loaded first):
    GITHUB_TOKEN  optional; unauthenticated GitHub requests are still attempted
    SLACK_TOKEN   required for Slack checks; when unset every Slack check is a warning

Exit codes:
    0 - Valid (warnings allowed)
    1 - Validation errors found
    2 - Workspace not found or records could not be loaded
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from dotenv import load_dotenv

from governance.adapters.entity_store import EntityLoadError, EntityStore
from governance.services.report_service import failure_message, format_report, report_to_json
from governance.services.validation_service import run_validation
from governance.services.validator_config import ValidatorConfig

log = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Validate governance records",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--root",
        type=Path,
        default=Path.cwd(),
        help="Workspace root containing contributors/, teams/ and repos/ (default: current directory)",
    )
    parser.add_argument(
        "--json-output",
        type=Path,
        default=None,
        help="Also write the report as JSON to this path",
    )
    parser.add_argument(
        "--skip-external",
        action="store_true",
        help="Skip GitHub and Slack identity checks",
    )
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    root = args.root.resolve()
    if not (root / "contributors").is_dir():
        log.error("No contributors/ directory under %s; run from the workspace root or pass --root.", root)
        return 2

    load_dotenv(root / ".env")
    config = ValidatorConfig.from_env()

    try:
        store = EntityStore.load(root)
    except EntityLoadError as exc:
        print(f"❌ {exc}")
        return 2

    report = run_validation(store, config, check_external=not args.skip_external)

    print(format_report(report))

    if args.json_output is not None:
        args.json_output.parent.mkdir(parents=True, exist_ok=True)
        args.json_output.write_text(report_to_json(report) + "\n", encoding="utf-8")
        log.info("Wrote JSON report to %s", args.json_output)

    if not report.valid:
        print(f"\n{failure_message(report)}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
