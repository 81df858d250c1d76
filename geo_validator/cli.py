"""Command-line runner: load a page, grade it, write SUMMARY.json."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from .aggregator import analyze_failure, analyze_html
from .loader import DEFAULT_TIMEOUT, LoadError, load_page, normalize_url
from .models import CHECK_LABELS, report_to_dict


def requested_url(args: argparse.Namespace) -> str:
    raw = args.url or args.page_url
    if not raw:
        return Path(args.html_file).resolve().as_uri()
    try:
        return normalize_url(raw)
    except ValueError:
        return raw.strip()


def run(args: argparse.Namespace) -> int:
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    if bool(args.url) == bool(args.html_file):
        print("Error: provide exactly one of --url or --html-file")
        return 2
    if args.workers < 1:
        print("Error: --workers must be at least 1")
        return 2

    page_url = requested_url(args)
    try:
        html, page_url = load_page(url=args.url, html_file=args.html_file, page_url=args.page_url, timeout=args.timeout)
    except LoadError as exc:
        report = analyze_failure(str(exc))
    except ValueError as exc:
        print(f"Error: {exc}")
        return 2
    else:
        report = analyze_html(html, workers=args.workers)

    checks = report_to_dict(report)
    summary = {"url": page_url, "score": report.score, "checks": checks}

    out = Path(args.output_dir).resolve()
    out.mkdir(parents=True, exist_ok=True)
    summ = out / "SUMMARY.json"
    summ.write_text(json.dumps(summary, indent=2, ensure_ascii=False), encoding="utf-8")

    if args.json:
        print(json.dumps(summary, indent=2, ensure_ascii=False))
        return 0
    print(f"URL: {page_url}")
    for key, verdict in report.verdicts().items():
        print(f"{verdict.icon} {CHECK_LABELS[key]}: {verdict.status} - {verdict.details}")
    print(f"GEO score: {report.score}/100")
    print(f"Summary: {summ}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Grade a page's structure for AI search and answer engines.")
    p.add_argument("--url", default="", help="Target URL to analyze")
    p.add_argument("--html-file", default="", help="Local HTML file path")
    p.add_argument("--page-url", default="", help="Canonical page URL for --html-file mode")
    p.add_argument("--timeout", type=int, default=DEFAULT_TIMEOUT)
    p.add_argument("--workers", type=int, default=1, help="Run checks on this many threads")
    p.add_argument("--output-dir", default="geo-validator-output")
    p.add_argument("--json", action="store_true", help="Print the summary JSON instead of the text summary")
    p.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return p


def main(argv: list[str] | None = None) -> int:
    return run(build_parser().parse_args(argv))


if __name__ == "__main__":
    raise SystemExit(main())
