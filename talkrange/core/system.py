"""
Main TalkRange orchestrator
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional

from .config import Settings
from .exceptions import TalkRangeError
from .types import ActionRecommendation, IntentRangeResult
from ..inference.engine import InferenceEngine, clean_history
from ..decision.ev import EVScorer

logger = logging.getLogger(__name__)


@dataclass
class RangeAnalysis:
    """Intent range and ranked actions for one request"""
    result: IntentRangeResult
    actions: List[ActionRecommendation]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "intent_range": [item.to_dict() for item in self.result.range],
            "recommended_actions": [item.to_dict() for item in self.actions],
            "explain": {
                "signals": list(self.result.signals),
                "note": self.result.note,
            },
        }


class TalkRangeSystem:
    """
    Coordinates inference and EV scoring

    Settings are frozen at construction; every call is a pure function of
    its arguments.
    """

    def __init__(self,
                 settings: Optional[Settings] = None,
                 engine: Optional[InferenceEngine] = None,
                 scorer: Optional[EVScorer] = None):
        self.settings = settings or Settings()
        try:
            self.engine = engine or InferenceEngine()
            self.scorer = scorer or EVScorer(self.settings)
        except TalkRangeError:
            raise
        except Exception as e:
            raise TalkRangeError(f"Failed to initialize components: {e}")

        logger.info(f"✓ TalkRange ready (strategy={self.settings.strategy}, "
                    f"culture={self.settings.default_culture})")

    def analyze(self,
                role: str,
                time_context: str,
                utterance: str,
                culture: Optional[str] = None,
                history: Optional[Iterable[Any]] = None,
                profile: Optional[Mapping[str, Any]] = None) -> RangeAnalysis:
        """
        Infer the intent range and rank the response actions

        Args:
            role: Counterpart role text
            time_context: Time context text
            utterance: Current utterance
            culture: Culture mode, configured default when omitted
            history: Previous utterances
            profile: Partial profile overrides merged over the default profile

        Returns:
            RangeAnalysis with the sorted range and ranked actions
        """
        culture = culture or self.settings.default_culture
        past = clean_history(history)
        merged_profile = self.settings.default_profile.merged(profile)

        result = self.engine.infer(role, time_context, culture, utterance, past)
        actions = self.scorer.score(result.range, merged_profile, culture, role)

        logger.debug(f"Analyzed role={role!r} culture={culture} top={result.top.intent} "
                     f"action={actions[0].action if actions else None}")
        return RangeAnalysis(result=result, actions=actions)
