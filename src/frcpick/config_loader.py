"""Persist and load custom weight profiles."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from frcpick.config import WeightConfiguration


@dataclass
class WeightProfile:
    weights: WeightConfiguration
    name: Optional[str] = None
    min_matches: Optional[int] = None

    @classmethod
    def load(cls, path: Path) -> "WeightProfile":
        data = json.loads(path.read_text(encoding="utf-8"))
        raw_weights = data.get("weights", data)
        min_matches = data.get("min_matches")
        return cls(
            weights=WeightConfiguration.from_mapping(
                {key: value for key, value in raw_weights.items() if key not in {"name", "min_matches"}}
            ),
            name=data.get("name"),
            min_matches=int(min_matches) if min_matches is not None else None,
        )

    def save(self, path: Path) -> None:
        payload: dict = {"weights": self.weights.to_dict()}
        if self.name:
            payload["name"] = self.name
        if self.min_matches is not None:
            payload["min_matches"] = self.min_matches
        path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
