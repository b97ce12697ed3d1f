"""
Shared types for intent inference and action scoring

Intents, culture modes and relationships are closed string enumerations so
they serialize to JSON unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Literal, Mapping, Optional, Tuple

from .exceptions import ValidationError

Intent = Literal[
    "GO_HOME",
    "STAY",
    "NEUTRAL",
    "TEST_BOUNDARY",
    "POWER_SIGNAL",
    "SMALL_TALK",
    "HELP_SEEK",
]

INTENTS: Tuple[str, ...] = (
    "GO_HOME",
    "STAY",
    "NEUTRAL",
    "TEST_BOUNDARY",
    "POWER_SIGNAL",
    "SMALL_TALK",
    "HELP_SEEK",
)

CultureMode = Literal["balanced", "pressure", "wlb"]
CULTURE_MODES: Tuple[str, ...] = ("balanced", "pressure", "wlb")

StrategyMode = Literal["gto", "exploit"]
STRATEGY_MODES: Tuple[str, ...] = ("gto", "exploit")

Relationship = Literal["peer", "manager", "subordinate", "client", "family", "partner"]
RELATIONSHIPS: Tuple[str, ...] = ("peer", "manager", "subordinate", "client", "family", "partner")

LikelihoodVector = Dict[str, float]


def clamp01(value: float) -> float:
    return max(0.0, min(1.0, float(value)))


@dataclass(frozen=True)
class IntentProb:
    """Probability assigned to one intent"""
    intent: str
    probability: float

    def to_dict(self) -> Dict[str, Any]:
        return {"intent": self.intent, "probability": self.probability}


@dataclass(frozen=True)
class Profile:
    """User profile knobs for EV scoring; numeric fields live in [0, 1]"""
    relationship: str = "peer"
    task_urgency: float = 0.4
    future_importance: float = 0.6
    tolerance: float = 0.5

    def merged(self, overrides: Optional[Mapping[str, Any]] = None) -> "Profile":
        """Return a new profile with ``overrides`` applied field by field and clamped.

        Missing or ``None`` fields keep this profile's value. Raises
        ``ValidationError`` when a numeric field is not a number.
        """
        if not overrides:
            return self
        if not isinstance(overrides, Mapping):
            raise ValidationError(f"Profile must be a mapping, got {type(overrides).__name__}")

        def pick(name: str) -> Any:
            value = overrides.get(name)
            return getattr(self, name) if value is None else value

        def number(name: str) -> float:
            value = pick(name)
            try:
                return clamp01(value)
            except (TypeError, ValueError):
                raise ValidationError(f"Profile field '{name}' must be a number, got {value!r}")

        relationship = pick("relationship")
        if relationship not in RELATIONSHIPS:
            relationship = self.relationship
        return Profile(
            relationship=relationship,
            task_urgency=number("task_urgency"),
            future_importance=number("future_importance"),
            tolerance=number("tolerance"),
        )


@dataclass
class IntentRangeResult:
    """Posterior intent range plus explanation data"""
    range: List[IntentProb]
    signals: List[str]
    note: str

    def probability_of(self, intent: str) -> float:
        for item in self.range:
            if item.intent == intent:
                return item.probability
        return 0.0

    @property
    def top(self) -> IntentProb:
        return self.range[0]


@dataclass(frozen=True)
class ActionDefinition:
    """Static catalog entry for a candidate response action"""
    action: str
    label: str
    intent_focus: Mapping[str, float]
    time_slope: float
    relationship_slope: float
    task_slope: float
    future_slope: float
    tone: str


@dataclass
class ActionRecommendation:
    action: str
    ev: float
    rationale: str
    intents: List[IntentProb] = field(default_factory=list)
    template: str = ""

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["intents"] = [item.to_dict() for item in self.intents]
        return data
