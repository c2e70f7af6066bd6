"""
Command line entry point.

    ghactivity serve                 run the JSON API
    ghactivity export [-o FILE]      write the site activity payload as JSON
"""

import argparse
import asyncio
import sys
from pathlib import Path
from typing import Optional, Union

from ghactivity.connectors.proxy_connector import ProxyConnector
from ghactivity.core.config import settings
from ghactivity.core.exceptions import BaseAppException
from ghactivity.core.github_client import GitHubClient
from ghactivity.core.logger import get_logger, setup_logging
from ghactivity.pipelines.activity_aggregator import ActivityAggregator
from ghactivity.pipelines.source_resolver import (
    DirectSourced,
    ProxySourced,
    resolve_activity_source,
)

logger = get_logger(__name__)


async def export_activity(use_proxy: bool = True) -> Union[ProxySourced, DirectSourced]:
    """Resolve the activity payload the same way a site build would."""
    client = GitHubClient(token=settings.GITHUB_TOKEN)
    aggregator = ActivityAggregator(client, settings.github_options())
    proxy = ProxyConnector() if use_proxy else None
    return await resolve_activity_source(aggregator, proxy)


def _export(args: argparse.Namespace) -> int:
    try:
        result = asyncio.run(export_activity(use_proxy=not args.no_proxy))
    except BaseAppException as e:
        logger.error("Error fetching GitHub activity", extra={"error": e.message, **e.details})
        return 1

    payload = result.model_dump_json(by_alias=True, indent=2)
    if args.output:
        Path(args.output).write_text(payload + "\n", encoding="utf-8")
        logger.info(
            f"Activity written to {args.output}",
            extra={"source": result.source},
        )
    else:
        sys.stdout.write(payload + "\n")
    return 0


def _serve(args: argparse.Namespace) -> int:
    import uvicorn

    uvicorn.run(
        "ghactivity.api.main:app",
        host=args.host or settings.API_HOST,
        port=args.port or settings.API_PORT,
        reload=settings.API_RELOAD,
        log_level=settings.LOG_LEVEL.lower(),
    )
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="ghactivity", description="GitHub activity aggregator")
    subparsers = parser.add_subparsers(dest="command", required=True)

    export_parser = subparsers.add_parser("export", help="write activity JSON")
    export_parser.add_argument("-o", "--output", help="file to write (default: stdout)")
    export_parser.add_argument(
        "--no-proxy",
        action="store_true",
        help="skip the local proxy and query GitHub directly",
    )
    export_parser.set_defaults(handler=_export)

    serve_parser = subparsers.add_parser("serve", help="run the JSON API")
    serve_parser.add_argument("--host")
    serve_parser.add_argument("--port", type=int)
    serve_parser.set_defaults(handler=_serve)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging()
    return args.handler(args)


if __name__ == "__main__":
    sys.exit(main())
