import argparse
import json
import sys
from typing import Dict, List, Optional, Tuple

# Same pipeline functions the HTTP route uses
from langchart.aggregator import LanguageSource, RankedEntry, compute_language_totals, rank_languages
from langchart.config import get_settings
from langchart.exceptions import LangChartError
from langchart.github_client import GitHubLanguageSource
from langchart.logging import configure_logging
from langchart.renderer import render_chart


def collect(source: LanguageSource) -> Tuple[Dict[str, int], List[RankedEntry]]:
    totals = compute_language_totals(source)
    return totals, rank_languages(totals)


def main(argv: Optional[List[str]] = None, source: Optional[LanguageSource] = None) -> int:
    parser = argparse.ArgumentParser(description="GitHub language chart CLI (renders the chart without the HTTP server)")
    parser.add_argument("--json", action="store_true", help="Print totals and ranked languages as JSON instead of SVG")
    parser.add_argument("--pretty", action="store_true", help="Pretty-print JSON output")
    parser.add_argument("--output", "-o", help="Write output to this file instead of stdout")
    parser.add_argument("--credit", help="Credit line drawn on the chart (defaults to CHART_CREDIT)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log progress to stderr")
    args = parser.parse_args(argv)

    settings = get_settings()
    configure_logging(level="DEBUG" if args.verbose else settings.log_level)
    if source is None:
        source = GitHubLanguageSource(settings.github_token, timeout=settings.github_timeout)

    try:
        totals, ranked = collect(source)
    except LangChartError as e:
        print(f"error: {e.message}", file=sys.stderr)
        return 1

    if args.json:
        data = {
            "totals": dict(sorted(totals.items(), key=lambda kv: (-kv[1], kv[0]))),
            "ranked": [entry.model_dump() for entry in ranked],
        }
        if args.pretty:
            out = json.dumps(data, indent=2, ensure_ascii=False)
        else:
            out = json.dumps(data, separators=(",", ":"), ensure_ascii=False)
    else:
        if not ranked:
            print("error: No language data available", file=sys.stderr)
            return 1
        out = render_chart(ranked, credit=args.credit or settings.chart_credit)

    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(out)
    else:
        print(out)
    return 0


if __name__ == "__main__":
    sys.exit(main())
