#!/usr/bin/env python3
"""
Run one player analysis from the command line and print the report as JSON.

Usage:
  python scripts/analyze_player.py RiotSchmick NA1 --region na1 [--matches 20]

Exit codes:
  0  report printed
  1  upstream lookup failed
  2  bad input or missing RIOT_API_KEY
"""

from __future__ import annotations

import asyncio
import json
import pathlib
import sys

# Make repo importable when executed as a script
_ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

from lolscout.adapters.ddragon_adapter import DDragonAdapter
from lolscout.adapters.riot_api import RiotAPIAdapter
from lolscout.config.settings import get_settings
from lolscout.core.observability import configure_logging
from lolscout.core.services import AnalysisError, PlayerAnalysisService
from lolscout.core.stats import MasterySort


async def _amain(
    name: str, tag: str, region: str | None, matches: int | None, mastery_sort: MasterySort
) -> int:
    settings = get_settings()
    # Pre-flight env
    if not settings.riot_api_key:
        print("RIOT_API_KEY is not configured (.env)", file=sys.stderr)
        return 2

    riot_api = RiotAPIAdapter(settings)
    ddragon = DDragonAdapter(
        version=settings.ddragon_version,
        language=settings.ddragon_language,
        timeout_seconds=settings.http_timeout_seconds,
    )
    service = PlayerAnalysisService(riot_api=riot_api, ddragon=ddragon, settings=settings)
    try:
        report = await service.analyze(
            name, tag, region, match_count=matches, mastery_sort=mastery_sort
        )
    except AnalysisError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2 if e.status_code == 400 else 1
    finally:
        await riot_api.close()
        await ddragon.close()

    print(json.dumps(report.model_dump(mode="json"), ensure_ascii=False, indent=2))
    return 0


def main() -> None:
    import argparse

    parser = argparse.ArgumentParser(description="Analyze a League of Legends player by Riot ID")
    parser.add_argument("name", help="Riot ID game name")
    parser.add_argument("tag", help="Riot ID tag line (without '#')")
    parser.add_argument("--region", dest="region", default=None, help="Platform id, e.g. na1")
    parser.add_argument(
        "--matches", dest="matches", type=int, default=None, help="Number of recent matches"
    )
    parser.add_argument(
        "--mastery-sort",
        dest="mastery_sort",
        choices=[s.value for s in MasterySort],
        default=MasterySort.POINTS_DESC.value,
    )
    parser.add_argument("--log-level", dest="log_level", default="WARNING")
    args = parser.parse_args()

    if args.matches is not None and not 1 <= args.matches <= 100:
        parser.error("--matches must be between 1 and 100")

    configure_logging(level=args.log_level)
    code = asyncio.run(
        _amain(args.name, args.tag, args.region, args.matches, MasterySort(args.mastery_sort))
    )
    raise SystemExit(code)


if __name__ == "__main__":
    main()
