"""
Prior construction over conversational intents

p(intent | role, time, culture) starts from fixed base weights, adds
culture, role and time-context deltas, floors every weight and normalizes.
"""

import logging
from typing import Dict, List, Optional, Sequence

import numpy as np

from ..core.types import INTENTS, IntentProb
from .rules import KOREAN_PRIOR_RULES, PriorRules

logger = logging.getLogger(__name__)


class PriorModel:
    """
    Build the intent prior from role, time context and culture mode

    Role rules are first-match-wins across categories; time rules stack.
    """

    def __init__(self, rules: Optional[PriorRules] = None, intents: Sequence[str] = INTENTS):
        self.rules = rules or KOREAN_PRIOR_RULES
        self.intents = tuple(intents)

    def weights(self, role: str, time_context: str, culture: str) -> Dict[str, float]:
        """Unnormalized intent weights after all adjustments"""
        weights = {intent: float(self.rules.base_weights.get(intent, 0.0)) for intent in self.intents}

        for intent, delta in self.rules.culture(culture).items():
            weights[intent] = weights.get(intent, 0.0) + delta

        role_hits = self.rules.role_rules.apply(weights, role)
        time_hits = self.rules.time_rules.apply(weights, time_context)

        logger.debug(f"Prior adjustments culture={culture} role={role_hits} time={time_hits}")
        return weights

    def normalize(self, weights: Dict[str, float]) -> List[IntentProb]:
        """Floor every weight and divide by the floored total"""
        floored = np.maximum(np.array([weights[intent] for intent in self.intents], dtype=float),
                             self.rules.floor)
        probs = floored / floored.sum()
        return [IntentProb(intent, float(p)) for intent, p in zip(self.intents, probs)]

    def prior(self, role: str, time_context: str, culture: str) -> List[IntentProb]:
        """
        Compute the prior distribution for intents

        Args:
            role: Free-text role of the counterpart (e.g. "상사", "peer")
            time_context: Free-text time cue (e.g. "퇴근 직전", "deadline")
            culture: Culture mode; unknown values use the balanced deltas

        Returns:
            One IntentProb per intent in the fixed intent order
        """
        return self.normalize(self.weights(role or "", time_context or "", culture))
