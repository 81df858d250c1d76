"""Verdict and report value types shared by every check."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

OK = "ok"
INFO = "info"
ALARM = "alarm"

STATUS_ICONS = {
    OK: "✅",
    INFO: "ℹ️",
    ALARM: "🚨",
}
STATUS_WEIGHTS = {OK: 100, INFO: 50, ALARM: 0}

CHECK_LABELS = {
    "semantic_html": "Semantic Structure",
    "metadata": "Metadata",
    "structured_data": "Structured Data",
    "ai_readiness": "AI-Readiness",
    "accessibility": "Accessibility",
    "crawlability": "Crawlability",
}


@dataclass(frozen=True)
class Verdict:
    status: str
    details: str
    evidence: str | None = None
    icon: str = field(init=False)

    def __post_init__(self) -> None:
        if self.status not in STATUS_ICONS:
            raise ValueError(f"Unknown status: {self.status!r}")
        if self.status == OK and self.evidence is not None:
            raise ValueError("ok verdicts carry no evidence")
        object.__setattr__(self, "icon", STATUS_ICONS[self.status])

    @property
    def weight(self) -> int:
        return STATUS_WEIGHTS[self.status]


def make_verdict(status: str, details: str, evidence: str | None = None) -> Verdict:
    """Build a verdict, dropping evidence for passing or empty results."""
    if status == OK or not evidence:
        evidence = None
    return Verdict(status=status, details=details, evidence=evidence)


@dataclass(frozen=True)
class Report:
    semantic_html: Verdict
    metadata: Verdict
    structured_data: Verdict
    ai_readiness: Verdict
    accessibility: Verdict
    crawlability: Verdict

    def verdicts(self) -> dict[str, Verdict]:
        return {key: getattr(self, key) for key in CHECK_LABELS}

    @property
    def score(self) -> int:
        # Means of six weights are multiples of 25/3, so round() never sees a .5 tie.
        weights = [v.weight for v in self.verdicts().values()]
        return round(sum(weights) / len(weights))


def verdict_to_dict(key: str, verdict: Verdict) -> dict[str, Any]:
    out: dict[str, Any] = {
        "label": CHECK_LABELS[key],
        "status": verdict.status,
        "icon": verdict.icon,
        "details": verdict.details,
    }
    if verdict.evidence is not None:
        out["evidence"] = verdict.evidence
    return out


def report_to_dict(report: Report) -> dict[str, Any]:
    out: dict[str, Any] = {key: verdict_to_dict(key, v) for key, v in report.verdicts().items()}
    out["score"] = report.score
    return out
