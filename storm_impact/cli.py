"""
Storm impact command line interface (CLI)
=========================================

Run it like:

    python -m storm_impact.cli --csv "repdata_StormData.csv.bz2" --charts out/

It loads the Storm Data file once, cleans it, and prints the three ranked
reports (fatalities, injuries, economic damage). The CLI never modifies the
dataset file.
"""

from __future__ import annotations
import argparse
import logging
from typing import Dict, List, Optional, Sequence
from .loader import load_storm_csv
from .pipeline import run_pipeline
from .report import REPORTS, ReportConfig, build_impact_reports, format_report, write_charts
from .taxonomy import build_rules

def _parse_aliases(items: Sequence[str]) -> Dict[str, List[str]]:
    """Parse LABEL=TERM pairs, e.g. "Thunderstorm Wind=TSTM Wind"."""
    out: Dict[str, List[str]] = {}
    for item in items:
        label, sep, term = item.partition("=")
        if not sep or not label.strip() or not term.strip():
            raise ValueError(f"alias must look like LABEL=TERM, got {item!r}")
        out.setdefault(label.strip(), []).append(term.strip())
    return out

def _log_level(name: str) -> int:
    level = logging.getLevelName(name.strip().upper())
    if not isinstance(level, int):
        raise ValueError(f"unknown log level {name!r}")
    return level

def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="storm_impact",
                                 description="Rank storm event types by human and economic impact.")
    ap.add_argument("--csv", required=True, help="Path to the Storm Data CSV (bz2/gzip ok)")
    ap.add_argument("--top", type=int, default=10, help="Event types per report (default 10)")
    ap.add_argument("--charts", default=None, help="Directory for PNG bar charts")
    ap.add_argument("--alias", action="append", default=[], metavar="LABEL=TERM",
                    help="Extra match term for a canonical label (repeatable)")
    ap.add_argument("--log-level", default="INFO", help="Logging level (default INFO)")
    return ap

def main(argv: Optional[Sequence[str]] = None) -> int:
    """Entry point for the CLI.

    1) Load dataset
    2) Run the cleaning pipeline
    3) Print the ranked reports (and optionally write charts)
    """
    args = build_parser().parse_args(argv)

    try:
        logging.basicConfig(level=_log_level(args.log_level),
                            format='%(asctime)s - %(levelname)s - %(message)s')
        rules = build_rules(aliases=_parse_aliases(args.alias))
        config = ReportConfig(top_n=args.top, chart_dir=args.charts)
        records = load_storm_csv(args.csv)
        result = run_pipeline(records, rules)
        reports = build_impact_reports(result.tidy, config)
    except (ValueError, KeyError, OSError) as e:
        print(f"Error: {e}")
        return 1

    print(f"Loaded {result.total_input} events.")
    print(f"Rejected (bad exponent code): {len(result.rejected)}")
    print(f"Unresolved event type: {result.unresolved_count} ({result.drop_rate:.2%} of input dropped)")
    print(f"Tidy records: {len(result.tidy)}")
    for metric, summaries in reports.items():
        print()
        print(format_report(REPORTS[metric][0], summaries))

    if config.chart_dir:
        try:
            paths = write_charts(reports, config.chart_dir)
        except (ImportError, OSError) as e:
            print(f"Error: {e}")
            return 1
        for p in paths:
            print(f"Chart written to {p}")
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
