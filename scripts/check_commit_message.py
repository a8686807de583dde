#!/usr/bin/env python3
"""commit-msg hook: require a Conventional Commit header.

Usage:
    python scripts/check_commit_message.py <commit-msg-file>

Exit codes:
    0 - Valid header
    1 - Invalid header, or the file could not be read
"""

from __future__ import annotations

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from governance.services.commit_message import USAGE_HINT, CommitMessageError, parse_conventional_commit


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    if not args:
        print("Usage: check_commit_message.py <commit-msg-file>", file=sys.stderr)
        return 1

    try:
        message = Path(args[0]).read_text(encoding="utf-8")
    except OSError as exc:
        print(f"Failed to read commit message file: {exc}", file=sys.stderr)
        return 1

    try:
        parse_conventional_commit(message)
    except CommitMessageError as exc:
        print(f"Invalid commit format: {exc}", file=sys.stderr)
        print(USAGE_HINT, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
