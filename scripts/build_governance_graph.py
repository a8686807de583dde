#!/usr/bin/env python3
"""Write governance graph data (contributors, teams, repos and their links) as JSON.

Usage:
    python scripts/build_governance_graph.py [--root DIR] [--output PATH]
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from governance.adapters.entity_store import EntityLoadError, EntityStore
from governance.services.graph_service import build_graph_data

log = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Build governance graph data")
    parser.add_argument("--root", type=Path, default=Path.cwd(), help="Workspace root (default: current directory)")
    parser.add_argument("--output", type=Path, default=None, help="Output path (default: <root>/dist/graph.json)")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    root = args.root.resolve()
    if not (root / "contributors").is_dir():
        log.error("No contributors/ directory under %s; run from the workspace root or pass --root.", root)
        return 2

    try:
        store = EntityStore.load(root)
    except EntityLoadError as exc:
        print(f"❌ {exc}")
        return 2

    output = args.output or root / "dist" / "graph.json"
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(json.dumps(build_graph_data(store), indent=2) + "\n", encoding="utf-8")
    print(f"✅ Wrote {output}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
