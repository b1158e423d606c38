"""
Reporting and export utilities.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

import pandas as pd

from .models import StaleReport, VersionDecision


logger = logging.getLogger(__name__)

DECISION_COLUMNS = [
    "package_id",
    "package_name",
    "version_id",
    "version",
    "updated_at",
    "stale",
    "reason",
]


def format_stale_versions(version_ids: Iterable[str]) -> str:
    return ", ".join(version_ids)


def decisions_frame(decisions: Iterable[VersionDecision]) -> pd.DataFrame:
    rows = [
        {
            "package_id": d.package_id,
            "package_name": d.package_name,
            "version_id": d.version_id,
            "version": d.version,
            "updated_at": d.updated_at.isoformat() if d.updated_at else None,
            "stale": d.stale,
            "reason": d.reason,
        }
        for d in decisions
    ]
    return pd.DataFrame(rows, columns=DECISION_COLUMNS)


def export_decisions_csv(decisions: Iterable[VersionDecision], path: Path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    decisions_frame(decisions).to_csv(path, index=False)
    return path


def log_summary(report: StaleReport) -> None:
    skipped = sum(1 for d in report.decisions if d.updated_at is None)
    logger.info(
        "Inspected %d versions: %d stale, %d without files.",
        len(report.decisions), len(report.stale_versions), skipped,
    )
