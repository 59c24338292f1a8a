"""CSV logger for per-iteration ACO metrics."""

from __future__ import annotations

import csv
import datetime as dt
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, MutableMapping, Optional

import pandas as pd


def _utc_stamp() -> str:
    return dt.datetime.now(dt.timezone.utc).isoformat(timespec='milliseconds').replace('+00:00', 'Z')


@dataclass
class RunLogger:
    """Buffer one row per iteration, tagged with run metadata, and write a CSV."""

    base_dir: Path
    filename: Optional[str] = None
    metadata: Optional[Dict[str, object]] = None
    field_order: Optional[Iterable[str]] = None

    _records: List[MutableMapping[str, object]] = field(default_factory=list, init=False)
    _resolved_path: Optional[Path] = field(default=None, init=False)

    def __post_init__(self) -> None:
        self.base_dir = Path(self.base_dir)
        self.base_dir.mkdir(parents=True, exist_ok=True)
        self.metadata = dict(self.metadata or {})

    def __len__(self) -> int:
        return len(self._records)

    @property
    def path(self) -> Path:
        return self._resolve_path()

    def log_iteration(self, **metrics: object) -> None:
        """Buffer metrics for an iteration."""

        record: MutableMapping[str, object] = {'timestamp': _utc_stamp()}
        record.update(self.metadata)
        record.update(metrics)
        self._records.append(record)

    def update_metadata(self, **extra: object) -> None:
        """Merge metadata shared by all rows logged from now on."""

        self.metadata.update(extra)

    def to_frame(self) -> pd.DataFrame:
        """Buffered rows as a DataFrame (columns in CSV order)."""

        return pd.DataFrame(self._records, columns=self._determine_fieldnames())

    def flush(self) -> Path:
        """Write buffered records to disk and return the file path."""

        if not self._records:
            raise RuntimeError("No records to write; did you call log_iteration()?")

        path = self._resolve_path()
        with path.open('w', newline='') as handle:
            writer = csv.DictWriter(handle, fieldnames=self._determine_fieldnames(), extrasaction='ignore')
            writer.writeheader()
            writer.writerows(self._records)

        return path

    def _resolve_path(self) -> Path:
        if self._resolved_path is None:
            stamp = dt.datetime.now(dt.timezone.utc).strftime('%Y%m%dT%H%M%S')
            self._resolved_path = self.base_dir / (self.filename or f"aco_run_{stamp}.csv")
        return self._resolved_path

    def _determine_fieldnames(self) -> List[str]:
        if self.field_order:
            return list(self.field_order)

        keys: List[str] = []
        for record in self._records:
            for key in record:
                if key not in keys:
                    keys.append(key)
        return keys
