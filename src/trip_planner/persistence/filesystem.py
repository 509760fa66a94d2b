"""Export of trip generation runs to the data directory."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path

from ..config import settings

SUMMARY_FILE = "summary.json"
ROWS_FILE = "trips.csv"


class RunExporter:
    """Writes each run to its own ``<data_root>/outputs/<prefix>_<timestamp>/`` directory."""

    def __init__(self, root: Path | None = None) -> None:
        self.output_root = (root or settings.data_root).resolve() / "outputs"

    def export(self, prefix: str, summary: dict, rows_csv: str) -> Path:
        """Store ``summary`` as JSON next to the per-student CSV and return the run directory."""
        stamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%S%fZ")
        run_dir = self.output_root / f"{prefix}_{stamp}"
        # Microsecond stamps keep back-to-back runs apart; a clash is an error.
        run_dir.mkdir(parents=True, exist_ok=False)
        (run_dir / SUMMARY_FILE).write_text(json.dumps(summary, ensure_ascii=False, indent=2), encoding="utf-8")
        with (run_dir / ROWS_FILE).open("w", encoding="utf-8", newline="") as handle:
            handle.write(rows_csv)
        return run_dir
