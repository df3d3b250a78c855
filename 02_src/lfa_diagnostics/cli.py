"""CLI entrypoint: run diagnostics on a saved canvas graph and emit the JSON report."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List

from .config import EngineConfig
from .engine import run_simulation
from .errors import InvalidInput
from .inventory import InventoryCatalog, load_default_catalog

logger = logging.getLogger(__name__)


def run_report(
    graph_path: str,
    project_id: str = "local",
    catalog_path: str = "",
    scale: float | None = None,
) -> Dict[str, Any]:
    payload = json.loads(Path(graph_path).read_text(encoding="utf-8"))
    if not isinstance(payload, dict):
        raise InvalidInput("Graph file must hold an object with 'nodes' and 'edges'")
    catalog = (
        InventoryCatalog.from_json_file(Path(catalog_path)) if catalog_path else load_default_catalog()
    )
    result = run_simulation(
        project_id=project_id,
        nodes=payload.get("nodes", []),
        edges=payload.get("edges", []),
        catalog=catalog,
        config=EngineConfig.from_env(),
        scale=scale,
    )
    return result.to_dict()


def parse_args(argv: List[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run logic diagnostics on a Logical Framework graph.")
    parser.add_argument("--graph-path", required=True, help="JSON file with 'nodes' and 'edges'.")
    parser.add_argument("--project-id", default="local", help="Project id echoed into the report.")
    parser.add_argument(
        "--catalog-path",
        default="",
        help="Optional inventory catalog JSON; the bundled master inventory is used otherwise.",
    )
    parser.add_argument(
        "--scale",
        type=float,
        default=None,
        help="Number of schools/sites covered; enables the missing-authority check.",
    )
    parser.add_argument(
        "--output-path",
        default="",
        help="Where to save the report JSON; printed to stdout when omitted.",
    )
    parser.add_argument("--log-level", default="WARNING", help="Logging level (DEBUG, INFO, ...).")
    return parser.parse_args(argv)


def main(argv: List[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        report = run_report(
            graph_path=args.graph_path,
            project_id=args.project_id,
            catalog_path=args.catalog_path,
            scale=args.scale,
        )
    except (InvalidInput, json.JSONDecodeError) as error:
        logger.error("Invalid input: %s", error)
        print(f"Invalid input: {error}", file=sys.stderr)
        return 2

    rendered = json.dumps(report, ensure_ascii=False, indent=2)
    if not args.output_path:
        print(rendered)
        return 0
    output_path = Path(args.output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(rendered, encoding="utf-8")
    print(f"Diagnostics report saved to: {output_path.resolve()}")
    print(
        "Summary:",
        f"status={report['status']}",
        f"score={report['overallScore']}",
        f"errors={len(report['errors'])}",
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
