"""Deterministic GEO (Generative Engine Optimization) page checks."""

from .aggregator import analyze, analyze_failure, analyze_html
from .checks import CHECKS
from .models import ALARM, INFO, OK, Report, Verdict, make_verdict, report_to_dict

__all__ = [
    "ALARM",
    "CHECKS",
    "INFO",
    "OK",
    "Report",
    "Verdict",
    "analyze",
    "analyze_failure",
    "analyze_html",
    "make_verdict",
    "report_to_dict",
]
