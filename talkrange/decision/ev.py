"""
Expected-value scoring of response actions

EV(action) = Σ_intent p(intent) × focus(action, intent)
           + w_time × time_slope × task_urgency
           + w_rel  × relationship_slope × REL[relationship]
           + w_task × task_slope × task_urgency
           + w_fut  × future_slope × future_importance
           + 0.1 × tolerance
           + culture_bias(culture, action)

In GTO mode the intent distribution is first blended toward uniform
(0.7 posterior / 0.3 uniform); exploit mode uses it unchanged.
"""

import logging
from typing import Dict, List, Optional, Sequence

from ..core.config import Settings
from ..core.types import ActionDefinition, ActionRecommendation, IntentProb, Profile
from ..core.utility import rank_by_value, value_of_action
from .actions import ACTION_DEFINITIONS, RELATIONSHIP_WEIGHT, culture_bias
from .templates import TemplateCatalog

logger = logging.getLogger(__name__)

GTO_POSTERIOR_SHARE = 0.7
TOLERANCE_SCALE = 0.1


def _focus_utility(definition: ActionDefinition, intent: str) -> float:
    return definition.intent_focus.get(intent, 0.0)


def describe_top_intents(intent_range: Sequence[IntentProb], count: int = 2) -> str:
    """Human-readable summary of the leading intents, e.g. 'GO_HOME:61%, HELP_SEEK:20%'"""
    if not intent_range:
        return "N/A"
    top = sorted(intent_range, key=lambda item: item.probability, reverse=True)[:count]
    return ", ".join(f"{item.intent}:{item.probability * 100:.0f}%" for item in top)


class EVScorer:
    """Rank the action catalog by expected value under an intent range"""

    def __init__(self,
                 settings: Optional[Settings] = None,
                 templates: Optional[TemplateCatalog] = None,
                 actions: Sequence[ActionDefinition] = ACTION_DEFINITIONS):
        self.settings = settings or Settings()
        self.templates = templates or TemplateCatalog.from_yaml()
        self.actions = tuple(actions)

    def blended(self, intent_range: Sequence[IntentProb]) -> Dict[str, float]:
        """Belief used for scoring: blended toward uniform in GTO mode"""
        if self.settings.strategy == "exploit" or not intent_range:
            return {item.intent: item.probability for item in intent_range}
        uniform = 1.0 / len(intent_range)
        return {
            item.intent: GTO_POSTERIOR_SHARE * item.probability + (1.0 - GTO_POSTERIOR_SHARE) * uniform
            for item in intent_range
        }

    def action_value(self, definition: ActionDefinition, belief: Dict[str, float],
                     profile: Profile, culture: str) -> float:
        weights = self.settings.weights
        alignment = value_of_action(definition, belief, _focus_utility)
        relationship = RELATIONSHIP_WEIGHT.get(profile.relationship, 0.0)

        value = (
            alignment
            + weights.time * definition.time_slope * profile.task_urgency
            + weights.relationship * definition.relationship_slope * relationship
            + weights.task * definition.task_slope * profile.task_urgency
            + weights.future * definition.future_slope * profile.future_importance
            + profile.tolerance * TOLERANCE_SCALE
            + culture_bias(culture, definition.action)
        )
        return round(value, 3)

    def score(self,
              intent_range: Sequence[IntentProb],
              profile: Optional[Profile] = None,
              culture: Optional[str] = None,
              role: str = "") -> List[ActionRecommendation]:
        """
        Score every catalog action and return them best first

        Args:
            intent_range: Posterior intent distribution
            profile: User profile; the configured default when omitted
            culture: Culture mode; the configured default when omitted
            role: Counterpart role, used for template lookup

        Returns:
            One ActionRecommendation per catalog action, sorted by EV with
            catalog order breaking exact ties
        """
        profile = profile or self.settings.default_profile
        culture = culture or self.settings.default_culture

        belief = self.blended(intent_range)
        ranked_range = sorted(intent_range, key=lambda item: item.probability, reverse=True)
        summary = describe_top_intents(ranked_range)

        scored = rank_by_value(
            (definition, self.action_value(definition, belief, profile, culture))
            for definition in self.actions
        )

        recommendations = [
            ActionRecommendation(
                action=definition.action,
                ev=value,
                rationale=f"상위 의도({summary})와 {definition.tone} 톤 가정.",
                intents=list(ranked_range[:3]),
                template=self.templates.render(role, definition.action, culture),
            )
            for definition, value in scored
        ]

        logger.debug(f"Ranked actions: {[(r.action, r.ev) for r in recommendations]}")
        return recommendations
