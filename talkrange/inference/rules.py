"""
Keyword rule sets for context-dependent intent adjustments

A rule is a list of keywords plus per-intent deltas. A rule set is an
ordered list of rules evaluated against lowercased text with plain
substring matching. Exclusive rule sets stop at the first matching rule
(role categories); non-exclusive ones let every matching rule stack
(time context, history cues).
"""

from dataclasses import dataclass
from typing import Dict, List, Mapping, MutableMapping, Optional, Tuple


@dataclass(frozen=True)
class KeywordRule:
    keywords: Tuple[str, ...]
    deltas: Mapping[str, float]
    name: str = ""

    def matches(self, lowered: str) -> bool:
        return any(keyword.lower() in lowered for keyword in self.keywords)


@dataclass(frozen=True)
class KeywordRuleSet:
    rules: Tuple[KeywordRule, ...]
    exclusive: bool = False

    def matching(self, text: Optional[str]) -> List[KeywordRule]:
        """Rules that fire for ``text``, honouring first-match-wins when exclusive"""
        lowered = (text or "").lower()
        fired: List[KeywordRule] = []
        for rule in self.rules:
            if rule.matches(lowered):
                fired.append(rule)
                if self.exclusive:
                    break
        return fired

    def apply(self, weights: MutableMapping[str, float], text: Optional[str]) -> List[str]:
        """Add the deltas of every firing rule to ``weights`` in place.

        Returns the names of the rules that fired.
        """
        fired = self.matching(text)
        for rule in fired:
            for intent, delta in rule.deltas.items():
                weights[intent] = weights.get(intent, 0.0) + delta
        return [rule.name for rule in fired]


@dataclass(frozen=True)
class PriorRules:
    """Everything the prior model needs to shape its weights"""
    base_weights: Mapping[str, float]
    culture_deltas: Mapping[str, Mapping[str, float]]
    default_culture_deltas: Mapping[str, float]
    role_rules: KeywordRuleSet
    time_rules: KeywordRuleSet
    floor: float = 0.05

    def culture(self, culture: str) -> Mapping[str, float]:
        return self.culture_deltas.get(culture, self.default_culture_deltas)


BASE_WEIGHTS: Dict[str, float] = {
    "GO_HOME": 1.0,
    "STAY": 1.0,
    "NEUTRAL": 1.0,
    "TEST_BOUNDARY": 0.6,
    "POWER_SIGNAL": 0.6,
    "SMALL_TALK": 0.8,
    "HELP_SEEK": 0.8,
}

CULTURE_DELTAS: Dict[str, Dict[str, float]] = {
    "pressure": {"STAY": 0.6, "POWER_SIGNAL": 0.4, "GO_HOME": -0.2},
    "wlb": {"GO_HOME": 0.8, "STAY": -0.3, "NEUTRAL": 0.2},
    "balanced": {"NEUTRAL": 0.2},
}

KOREAN_ROLE_RULES = KeywordRuleSet(
    rules=(
        KeywordRule(("상사", "manager"), {"POWER_SIGNAL": 0.5, "STAY": 0.3}, name="superior"),
        KeywordRule(("동료", "peer"), {"SMALL_TALK": 0.4, "HELP_SEEK": 0.2}, name="peer"),
        KeywordRule(("가족", "family"), {"GO_HOME": 0.5, "SMALL_TALK": 0.3}, name="family"),
        KeywordRule(("고객", "client"), {"TEST_BOUNDARY": 0.4, "POWER_SIGNAL": 0.2}, name="client"),
    ),
    exclusive=True,
)

KOREAN_TIME_RULES = KeywordRuleSet(
    rules=(
        KeywordRule(("late", "퇴근", "밤"), {"GO_HOME": 0.6, "STAY": -0.2}, name="end_of_day"),
        KeywordRule(("deadline", "마감"), {"STAY": 0.5, "HELP_SEEK": 0.4}, name="deadline"),
        KeywordRule(("lunch", "점심"), {"SMALL_TALK": 0.3}, name="lunch"),
    ),
)

# Additive log-space boosts from cues in the joined conversation history
KOREAN_HISTORY_RULES = KeywordRuleSet(
    rules=(
        KeywordRule(("야근", "late"), {"STAY": 0.1}, name="overtime"),
        KeywordRule(("미안", "죄송"), {"GO_HOME": 0.1, "HELP_SEEK": 0.05}, name="apology"),
        KeywordRule(("도와",), {"HELP_SEEK": 0.15}, name="help"),
    ),
)

KOREAN_PRIOR_RULES = PriorRules(
    base_weights=BASE_WEIGHTS,
    culture_deltas=CULTURE_DELTAS,
    default_culture_deltas=CULTURE_DELTAS["balanced"],
    role_rules=KOREAN_ROLE_RULES,
    time_rules=KOREAN_TIME_RULES,
)
