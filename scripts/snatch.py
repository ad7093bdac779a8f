#!/usr/bin/env python3
"""Query the unplanted tower sites feed from the command line.

Default behavior prints the ``snatch`` reply once.  With ``--watch`` the
script keeps running and prints every new-site announcement, mimicking the
org-channel broadcast of a bot.

Settings come from ``SNATCH_*`` environment variables; flags override them.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from towersnatch import (  # noqa: E402
    HELP_TEXT,
    SnatchClient,
    SnatchConfig,
    SnatchError,
    SnatchWatcher,
)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("--catalog", help="JSON catalog of regions and tower sites (or SNATCH_CATALOG)")
    parser.add_argument("--feed-url", help="Override the feed endpoint (or SNATCH_FEED_URL)")
    parser.add_argument("--bot-name", help="Name substituted for <myname> in chat commands")
    parser.add_argument("--watch", action="store_true", help="Keep polling and print new-site announcements")
    parser.add_argument("--interval", type=float, help="Seconds between polls in --watch mode")
    parser.add_argument("--help-text", action="store_true", help="Print the bot help text for 'snatch' and exit")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def _config_from_args(args: argparse.Namespace) -> SnatchConfig:
    overrides: dict[str, object] = {}
    if args.catalog:
        overrides["catalog_path"] = args.catalog
    if args.feed_url:
        overrides["feed_url"] = args.feed_url
    if args.bot_name:
        overrides["bot_name"] = args.bot_name
    if args.interval:
        overrides["poll_interval"] = args.interval
    return SnatchConfig.from_env(**overrides)


async def _run(config: SnatchConfig, watch: bool) -> int:
    async with SnatchClient(config) as client:
        print(await client.snatch())
        if not watch:
            return 0
        if not config.announce_enabled:
            logging.getLogger(__name__).info("Announcements disabled (SNATCH_ANNOUNCE_ENABLED), not watching")
            return 0

        # The query above already set the baseline, so the first tick can announce.
        async with SnatchWatcher(client, print, interval=config.poll_interval, enabled=config.announce_enabled):
            await asyncio.Event().wait()
    return 0


def main() -> int:
    args = _build_parser().parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if args.help_text:
        print(HELP_TEXT)
        return 0

    try:
        config = _config_from_args(args)
        return asyncio.run(_run(config, args.watch))
    except SnatchError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    raise SystemExit(main())
