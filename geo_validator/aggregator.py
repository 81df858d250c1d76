"""Run every check against one document and fold the verdicts into a report."""

from __future__ import annotations

import concurrent.futures
import logging

from bs4 import BeautifulSoup

from .checks import CHECKS
from .loader import soup_of
from .models import ALARM, Report, Verdict, make_verdict

logger = logging.getLogger(__name__)


def run_check(key: str, soup: BeautifulSoup) -> Verdict:
    try:
        verdict = CHECKS[key](soup)
    except Exception as exc:  # fault stays local to this check
        logger.warning("check %s crashed: %s", key, exc, exc_info=True)
        return make_verdict(ALARM, f"Check failed: {exc}")
    logger.debug("check %s -> %s", key, verdict.status)
    return verdict


def analyze(soup: BeautifulSoup, workers: int = 1) -> Report:
    """Run all six checks on ``soup`` and return the assembled report.

    With ``workers > 1`` the checks run on a thread pool; the report is the
    same either way because checks share no state.
    """
    if workers > 1:
        with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as pool:
            futures = {key: pool.submit(run_check, key, soup) for key in CHECKS}
            verdicts = {key: fut.result() for key, fut in futures.items()}
    else:
        verdicts = {key: run_check(key, soup) for key in CHECKS}
    report = Report(**verdicts)
    logger.debug("GEO score %s", report.score)
    return report


def analyze_failure(reason: str) -> Report:
    """Degraded report used when the page could not be retrieved or parsed."""
    logger.warning("analysis failed: %s", reason)
    verdict = make_verdict(ALARM, f"Analysis failed: {reason}")
    return Report(**{key: verdict for key in CHECKS})


def analyze_html(html: str, workers: int = 1) -> Report:
    try:
        soup = soup_of(html)
    except Exception as exc:
        return analyze_failure(f"could not parse HTML ({exc})")
    return analyze(soup, workers=workers)
