"""Per-epoch training log."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, List, Mapping


class EpochLog:
    """Trainer callback writing one JSON line per epoch.

    The file is truncated on construction, so a log always describes exactly
    one walk of the training trace.
    """

    def __init__(self, path: str | Path, *, learning_rate: float | None = None) -> None:
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text("")
        self.learning_rate = learning_rate

    def on_epoch(self, epoch: int, metrics: Mapping[str, float]) -> None:
        record: Dict[str, object] = {"epoch": int(epoch)}
        if self.learning_rate is not None:
            record["learning_rate"] = float(self.learning_rate)
        record.update({name: float(value) for name, value in sorted(metrics.items())})
        with self.path.open("a", encoding="utf-8") as handle:
            handle.write(json.dumps(record) + "\n")

    def records(self) -> List[Dict[str, object]]:
        """Read the log back, oldest epoch first."""

        lines = self.path.read_text(encoding="utf-8").splitlines()
        return [json.loads(line) for line in lines if line.strip()]
