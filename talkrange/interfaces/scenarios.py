from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from ..core.exceptions import ConfigurationError, ValidationError
from ..core.system import TalkRangeSystem

DEFAULT_SCENARIOS = Path(__file__).resolve().parent.parent / "data" / "scenarios.example.yaml"

_PROFILE_KEYS = {
    "taskUrgency": "task_urgency",
    "futureImportance": "future_importance",
}

_TEXT_FIELDS = ("name", "role", "time_context", "utterance", "culture")


@dataclass
class ScenarioOutcome:
    name: str
    top_intent: str
    top_probability: float
    top_action: str
    top_ev: float
    signals: List[str]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "top_intent": self.top_intent,
            "top_probability": round(self.top_probability, 3),
            "top_action": self.top_action,
            "top_ev": self.top_ev,
            "signals": self.signals,
        }


def _check_scenario(index: int, scenario: Any) -> Dict[str, Any]:
    label = f"Scenario #{index + 1}"
    if not isinstance(scenario, dict):
        raise ValidationError(f"{label} must be a mapping, got {type(scenario).__name__}")
    for key in _TEXT_FIELDS:
        value = scenario.get(key)
        if value is not None and not isinstance(value, str):
            raise ValidationError(f"{label}: '{key}' must be a string")
    history = scenario.get("history")
    if history is not None and not isinstance(history, list):
        raise ValidationError(f"{label}: 'history' must be a list")
    profile = scenario.get("my_profile")
    if profile is not None and not isinstance(profile, dict):
        raise ValidationError(f"{label}: 'my_profile' must be a mapping")
    return scenario


def load_scenarios(path: Optional[Path] = None) -> List[Dict[str, Any]]:
    scenario_path = Path(path) if path else DEFAULT_SCENARIOS
    try:
        with scenario_path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or []
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Failed to load scenarios from {scenario_path}: {e}")
    if not isinstance(data, list):
        raise ConfigurationError(f"Scenario file {scenario_path} must contain a list")
    return [_check_scenario(index, scenario) for index, scenario in enumerate(data)]


def _profile(raw: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    if not raw:
        return None
    return {_PROFILE_KEYS.get(key, key): value for key, value in raw.items()}


def run_scenarios(system: TalkRangeSystem, path: Optional[Path] = None) -> List[ScenarioOutcome]:
    outcomes: List[ScenarioOutcome] = []
    for index, scenario in enumerate(load_scenarios(path)):
        name = scenario.get("name") or f"scenario-{index + 1}"
        try:
            analysis = system.analyze(
                role=scenario.get("role", ""),
                time_context=scenario.get("time_context", ""),
                utterance=scenario.get("utterance", ""),
                culture=scenario.get("culture"),
                history=scenario.get("history"),
                profile=_profile(scenario.get("my_profile")),
            )
        except ValidationError as e:
            raise ValidationError(f"{name}: {e}")
        top = analysis.result.top
        best = analysis.actions[0]
        outcomes.append(ScenarioOutcome(
            name=name,
            top_intent=top.intent,
            top_probability=top.probability,
            top_action=best.action,
            top_ev=best.ev,
            signals=analysis.result.signals,
        ))
    return outcomes
