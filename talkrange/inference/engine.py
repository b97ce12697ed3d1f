"""
Posterior intent inference

Implements the update q(intent | u) ∝ p(u | intent) × p(intent) in log space:

    log q = log p(intent) + history_boost + Σ_signals log p(signal | intent)

followed by a numerically stable softmax.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence

import numpy as np

from ..core.types import INTENTS, IntentProb, IntentRangeResult
from .likelihood import LikelihoodTable
from .prior import PriorModel
from .rules import KOREAN_HISTORY_RULES, KeywordRuleSet
from .signals import SignalExtractor

logger = logging.getLogger(__name__)

PRIOR_FLOOR = 1e-9
LIKELIHOOD_FLOOR = 1e-6


def softmax(log_scores: np.ndarray) -> np.ndarray:
    """Softmax with the max subtracted before exponentiating"""
    shifted = np.exp(log_scores - np.max(log_scores))
    return shifted / shifted.sum()


def clean_history(history: Optional[Iterable[Any]]) -> List[str]:
    """Keep only string entries of a history sequence"""
    if not history:
        return []
    return [item for item in history if isinstance(item, str)]


class InferenceEngine:
    """
    Combine the intent prior with lexical signal likelihoods

    All collaborators are read-only after construction, so one engine can
    serve concurrent requests.
    """

    def __init__(self,
                 prior_model: Optional[PriorModel] = None,
                 extractor: Optional[SignalExtractor] = None,
                 likelihoods: Optional[LikelihoodTable] = None,
                 history_rules: Optional[KeywordRuleSet] = None,
                 intents: Sequence[str] = INTENTS):
        self.intents = tuple(intents)
        self.prior_model = prior_model or PriorModel(intents=self.intents)
        self.extractor = extractor or SignalExtractor()
        self.likelihoods = likelihoods or LikelihoodTable.from_yaml(intents=self.intents)
        self.history_rules = history_rules or KOREAN_HISTORY_RULES

        logger.info(f"🎯 InferenceEngine initialized with {len(self.likelihoods.signals)} known signals")

    def history_boost(self, history: List[str]) -> Dict[str, float]:
        """Additive log-weight boosts from cues in the joined history text"""
        boost = {intent: 0.0 for intent in self.intents}
        self.history_rules.apply(boost, " ".join(history))
        return boost

    def infer(self,
              role: str,
              time_context: str,
              culture: str,
              utterance: str,
              history: Optional[Iterable[Any]] = None) -> IntentRangeResult:
        """
        Compute the posterior intent range for one utterance

        Args:
            role: Counterpart role text
            time_context: Time context text
            culture: Culture mode
            utterance: Current utterance (may be empty)
            history: Previous utterances; non-string entries are ignored

        Returns:
            IntentRangeResult sorted by probability, with observed signals
        """
        past = clean_history(history)

        prior = self.prior_model.prior(role, time_context, culture)
        prior_probs = np.array([item.probability for item in prior], dtype=float)
        log_scores = np.log(np.maximum(prior_probs, PRIOR_FLOOR))

        boost = self.history_boost(past)
        log_scores = log_scores + np.array([boost[intent] for intent in self.intents])

        signals = self.extractor.extract_all([utterance, *past])
        for signal in signals:
            likelihood = self.likelihoods.lookup(signal)
            vector = np.array([likelihood.get(intent, LIKELIHOOD_FLOOR) for intent in self.intents], dtype=float)
            log_scores = log_scores + np.log(np.maximum(vector, LIKELIHOOD_FLOOR))

        posterior = softmax(log_scores)
        ranked = sorted(
            (IntentProb(intent, float(p)) for intent, p in zip(self.intents, posterior)),
            key=lambda item: item.probability,
            reverse=True,
        )

        note = f"signals={len(signals)}, history={len(past)}"
        logger.debug(f"Posterior top={ranked[0].intent}:{ranked[0].probability:.3f} ({note})")

        return IntentRangeResult(range=ranked, signals=signals, note=note)
