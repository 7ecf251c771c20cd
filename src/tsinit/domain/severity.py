"""Severity classification for audit reports."""

from dataclasses import dataclass
from typing import Optional

from tsinit.domain.models import AuditReport


@dataclass(frozen=True)
class Severity:
    """Highest severity found by an audit, with its badge colour."""

    name: str
    label: str
    color: str


# Highest first; the first level with a non-zero count wins.
SEVERITY_LEVELS: tuple[Severity, ...] = (
    Severity("critical", "Critical", "#6b21a8"),
    Severity("high", "High", "#dc2626"),
    Severity("moderate", "Moderate", "#fb923c"),
    Severity("low", "Low", "#fbbf24"),
    Severity("info", "Info", "#525252"),
)


def classify(report: AuditReport) -> Optional[Severity]:
    """
    Return the highest severity with at least one vulnerability.

    Args:
        report: Parsed audit report

    Returns:
        Severity for the worst finding, or None when the audit is clean
    """
    counts = report.vulnerabilities
    for level in SEVERITY_LEVELS:
        if getattr(counts, level.name) > 0:
            return level
    return None
