"""Weight configurations and the preset pick-list strategies."""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Tuple


@dataclass(frozen=True)
class WeightConfiguration:
    opr: float = 0.0
    dpr: float = 0.0
    ccwm: float = 0.0
    auto_score: float = 0.0
    teleop_score: float = 0.0
    endgame_score: float = 0.0
    reliability: float = 0.0
    driver_skill: float = 0.0
    defense_rating: float = 0.0
    speed_rating: float = 0.0

    @property
    def total(self) -> float:
        return sum(value for _, value in self.items())

    def items(self) -> Tuple[Tuple[str, float], ...]:
        """Return (metric, weight) pairs in the fixed metric order."""

        return tuple((field.name, float(getattr(self, field.name))) for field in fields(self))

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)

    @classmethod
    def from_mapping(cls, data: Mapping[str, float]) -> "WeightConfiguration":
        known = {field.name for field in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown weight keys: {', '.join(unknown)}")
        return cls(**{key: float(value) for key, value in data.items()})


METRIC_NAMES: Tuple[str, ...] = tuple(field.name for field in fields(WeightConfiguration))


@dataclass(frozen=True)
class PickListStrategy:
    id: str
    name: str
    description: str
    weights: WeightConfiguration


CUSTOM_STRATEGY_ID = "CUSTOM"


_STRATEGIES: Dict[str, PickListStrategy] = {
    "BALANCED": PickListStrategy(
        id="BALANCED",
        name="Balanced",
        description="Equal emphasis on all metrics for well-rounded teams",
        weights=WeightConfiguration(
            opr=0.15,
            dpr=0.10,
            ccwm=0.25,
            auto_score=0.10,
            teleop_score=0.10,
            endgame_score=0.10,
            reliability=0.10,
            driver_skill=0.05,
            defense_rating=0.03,
            speed_rating=0.02,
        ),
    ),
    "OFFENSIVE": PickListStrategy(
        id="OFFENSIVE",
        name="Offensive",
        description="Prioritizes scoring ability and offensive output",
        weights=WeightConfiguration(
            opr=0.30,
            dpr=0.05,
            ccwm=0.20,
            auto_score=0.15,
            teleop_score=0.15,
            endgame_score=0.05,
            reliability=0.05,
            driver_skill=0.03,
            defense_rating=0.01,
            speed_rating=0.01,
        ),
    ),
    "DEFENSIVE": PickListStrategy(
        id="DEFENSIVE",
        name="Defensive",
        description="Prioritizes defensive capability and reliability",
        weights=WeightConfiguration(
            opr=0.10,
            dpr=0.30,
            ccwm=0.15,
            auto_score=0.05,
            teleop_score=0.05,
            endgame_score=0.15,
            reliability=0.15,
            driver_skill=0.03,
            defense_rating=0.01,
            speed_rating=0.01,
        ),
    ),
    "RELIABLE": PickListStrategy(
        id="RELIABLE",
        name="Reliable",
        description="Prioritizes consistency and reliability over peak performance",
        weights=WeightConfiguration(
            opr=0.10,
            dpr=0.10,
            ccwm=0.20,
            auto_score=0.10,
            teleop_score=0.10,
            endgame_score=0.15,
            reliability=0.20,
            driver_skill=0.03,
            defense_rating=0.01,
            speed_rating=0.01,
        ),
    ),
}


def iter_strategies() -> Iterable[PickListStrategy]:
    """Return an iterator of all preset strategies."""

    return _STRATEGIES.values()


def get_strategy(strategy_id: str) -> PickListStrategy:
    """Fetch a preset strategy by id, raising KeyError if missing."""

    key = strategy_id.strip().upper()
    if key not in _STRATEGIES:
        available = ", ".join(_STRATEGIES)
        raise KeyError(f"Unknown strategy {strategy_id!r}. Available: {available}")
    return _STRATEGIES[key]


def custom_strategy(weights: WeightConfiguration) -> PickListStrategy:
    return PickListStrategy(
        id=CUSTOM_STRATEGY_ID,
        name="Custom Strategy",
        description="User-defined custom weight configuration",
        weights=weights,
    )


# Read-only view keyed by strategy id.
PICK_LIST_STRATEGIES: Mapping[str, PickListStrategy] = MappingProxyType(_STRATEGIES)
