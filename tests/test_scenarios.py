from __future__ import annotations

from pathlib import Path

import pytest

from talkrange.core.config import Settings
from talkrange.core.exceptions import ConfigurationError, ValidationError
from talkrange.core.system import TalkRangeSystem
from talkrange.interfaces.scenarios import load_scenarios, run_scenarios


def _write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "scenarios.yaml"
    path.write_text(text, encoding="utf-8")
    return path


def test_bundled_scenarios_load() -> None:
    scenarios = load_scenarios()
    assert len(scenarios) == 4
    assert all(isinstance(item, dict) for item in scenarios)


def test_top_level_must_be_a_list(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError):
        load_scenarios(_write(tmp_path, "name: lonely\n"))


@pytest.mark.parametrize(
    "text, message",
    [
        ("- just a string\n", "must be a mapping"),
        ("- role: 123\n", "'role' must be a string"),
        ("- history: 야근\n", "'history' must be a list"),
        ("- my_profile: [1, 2]\n", "'my_profile' must be a mapping"),
    ],
)
def test_malformed_entries_are_rejected(tmp_path: Path, text: str, message: str) -> None:
    with pytest.raises(ValidationError, match=message):
        load_scenarios(_write(tmp_path, text))


def test_non_numeric_profile_names_the_scenario(tmp_path: Path) -> None:
    path = _write(
        tmp_path,
        "- name: eager\n"
        "  role: 동료\n"
        "  utterance: 안녕\n"
        "  my_profile:\n"
        "    taskUrgency: high\n",
    )
    with pytest.raises(ValidationError, match="eager: .*task_urgency"):
        run_scenarios(TalkRangeSystem(Settings()), path)


def test_outcome_to_dict_rounds_probability(tmp_path: Path) -> None:
    path = _write(
        tmp_path,
        "- role: 상사\n"
        "  time_context: 야근\n"
        "  culture: pressure\n"
        "  utterance: 다들 지금 바로 마무리합시다. 반드시 오늘 끝내야 해요.\n",
    )
    [outcome] = run_scenarios(TalkRangeSystem(Settings()), path)
    data = outcome.to_dict()
    assert data["name"] == "scenario-1"
    assert data["top_intent"] == "STAY"
    assert data["top_probability"] == round(outcome.top_probability, 3)
