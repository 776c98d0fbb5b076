"""Seeding and run-directory helpers for evaluation runs."""
from __future__ import annotations

import json
import random
import re
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

import numpy as np


def set_global_seed(seed: int) -> None:
    random.seed(seed)
    np.random.seed(seed)


def utc_timestamp() -> str:
    # 2026-01-08T12-34-56Z, usable as a directory name
    return time.strftime("%Y-%m-%dT%H-%M-%SZ", time.gmtime())


@dataclass(frozen=True)
class RunPaths:
    """Output files of one evaluation run."""
    run_dir: Path
    report_json: Path
    summary_txt: Path

    def save(self, report: Dict[str, Any], summary: str) -> None:
        self.run_dir.mkdir(parents=True, exist_ok=True)
        self.report_json.write_text(json.dumps(report, indent=2, sort_keys=True), encoding="utf-8")
        self.summary_txt.write_text(summary, encoding="utf-8")


def make_run_dir(runs_root: str | Path, run_name: str) -> RunPaths:
    """Create `<runs_root>/<timestamp>_<run_name>` and return its file layout."""
    label = re.sub(r"[^A-Za-z0-9_-]", "_", run_name.strip())[:60]
    run_dir = Path(runs_root) / f"{utc_timestamp()}_{label}"
    run_dir.mkdir(parents=True, exist_ok=True)
    return RunPaths(
        run_dir=run_dir,
        report_json=run_dir / "evaluation_report.json",
        summary_txt=run_dir / "summary.txt",
    )
