from __future__ import annotations

from dataclasses import replace

import pytest

from talkrange.core.types import INTENTS
from talkrange.inference.prior import PriorModel
from talkrange.inference.rules import KOREAN_PRIOR_RULES, KeywordRule, KeywordRuleSet


def _as_dict(dist) -> dict:
    return {item.intent: item.probability for item in dist}


def test_prior_is_distribution_in_intent_order() -> None:
    dist = PriorModel().prior("동료", "퇴근 직전", "wlb")
    assert [item.intent for item in dist] == list(INTENTS)
    assert sum(item.probability for item in dist) == pytest.approx(1.0)


def test_peer_end_of_day_wlb_weights() -> None:
    probs = _as_dict(PriorModel().prior("동료", "퇴근 직전", "wlb"))
    # GO 2.4, STAY 0.5, NEUTRAL 1.2, TB 0.6, PS 0.6, SMALL_TALK 1.2, HELP 1.0
    assert probs["GO_HOME"] == pytest.approx(2.4 / 7.5)
    assert probs["STAY"] == pytest.approx(0.5 / 7.5)
    assert probs["HELP_SEEK"] == pytest.approx(1.0 / 7.5)


def test_role_rules_first_match_wins() -> None:
    weights = PriorModel().weights("상사 겸 동료", "", "balanced")
    assert weights["POWER_SIGNAL"] == pytest.approx(1.1)
    assert weights["SMALL_TALK"] == pytest.approx(0.8)


def test_role_match_is_case_insensitive() -> None:
    weights = PriorModel().weights("Senior MANAGER", "", "balanced")
    assert weights["POWER_SIGNAL"] == pytest.approx(1.1)


def test_time_rules_stack() -> None:
    weights = PriorModel().weights("", "deadline, late, then lunch", "balanced")
    assert weights["GO_HOME"] == pytest.approx(1.6)
    assert weights["STAY"] == pytest.approx(1.3)
    assert weights["HELP_SEEK"] == pytest.approx(1.2)
    assert weights["SMALL_TALK"] == pytest.approx(1.1)


def test_unknown_culture_uses_balanced_deltas() -> None:
    model = PriorModel()
    assert model.prior("동료", "오후", "mystery") == model.prior("동료", "오후", "balanced")


def test_negative_weights_are_floored() -> None:
    rules = replace(
        KOREAN_PRIOR_RULES,
        role_rules=KeywordRuleSet((KeywordRule(("x",), {"STAY": -5.0}),), exclusive=True),
    )
    probs = _as_dict(PriorModel(rules).prior("x", "", "balanced"))
    # balanced: GO 1, NEUTRAL 1.2, TB 0.6, PS 0.6, SMALL_TALK 0.8, HELP 0.8, STAY floored
    assert probs["STAY"] == pytest.approx(0.05 / 5.05)
    assert all(p > 0 for p in probs.values())


def test_culture_shifts_prior() -> None:
    model = PriorModel()
    pressure = _as_dict(model.prior("동료", "오후", "pressure"))
    wlb = _as_dict(model.prior("동료", "오후", "wlb"))
    assert wlb["GO_HOME"] > pressure["GO_HOME"]
    assert wlb["STAY"] < pressure["STAY"]
