"""
College resolver command line.

Usage:
    python -m college_resolver.cli.resolve --config config/config.yaml resolve "SUNY Maritime"
    python -m college_resolver.cli.resolve search "suny mar" --limit 10
    python -m college_resolver.cli.resolve stats
    python -m college_resolver.cli.resolve serve --port 8000

Output is JSON on stdout.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from ..config_loader import load_config
from ..dataset import DatasetLoadError
from ..monitoring import ResolutionQualityChecker
from ..service import CollegeResolutionService

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Resolve and search college names")
    parser.add_argument("--config", default=None, help="Path to config file")

    subparsers = parser.add_subparsers(dest="command", required=True)

    resolve_parser = subparsers.add_parser("resolve", help="Resolve college names")
    resolve_parser.add_argument("names", nargs="*", help="College names to resolve")
    resolve_parser.add_argument(
        "--file", default=None, help="File with one college name per line"
    )

    search_parser = subparsers.add_parser("search", help="Autocomplete search")
    search_parser.add_argument("query", help="Search text")
    search_parser.add_argument("--limit", type=int, default=None, help="Maximum results")

    subparsers.add_parser("stats", help="Show index statistics")

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)

    return parser


def _read_names(names: list[str], file_path: Optional[str]) -> list[str]:
    collected = list(names)
    if file_path:
        with open(Path(file_path), "r", encoding="utf-8") as f:
            collected.extend(line.rstrip("\n") for line in f)
    return collected


def main(argv: Optional[list[str]] = None) -> int:
    """Run a college resolver command."""
    load_dotenv()
    args = build_parser().parse_args(argv)
    config = load_config(args.config)

    logging.basicConfig(
        level=config.LOG_LEVEL.upper(),
        format='%(asctime)s - %(levelname)s - %(message)s',
    )

    try:
        service = CollegeResolutionService.create(config)
    except DatasetLoadError as e:
        logger.error(f"❌ {e}")
        return 1

    if args.command == "resolve":
        names = _read_names(args.names, args.file)
        resolutions = service.resolve_colleges(names)
        report = ResolutionQualityChecker().check_batch(resolutions)
        logger.info(
            f"Resolved {report.get('matched', 0)}/{report.get('total', 0)} names "
            f"(status: {report['status']})"
        )
        output = [r.model_dump(mode="json", by_alias=True) for r in resolutions]
    elif args.command == "search":
        output = service.search_colleges(args.query, args.limit)
    elif args.command == "stats":
        output = service.get_stats()
    else:
        import uvicorn

        from ..api import create_app

        uvicorn.run(create_app(config, service), host=args.host, port=args.port)
        return 0

    json.dump(output, sys.stdout, indent=2, ensure_ascii=False)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
