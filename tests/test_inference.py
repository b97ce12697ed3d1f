from __future__ import annotations

import numpy as np
import pytest

from talkrange.core.types import INTENTS
from talkrange.inference.engine import InferenceEngine, softmax
from talkrange.inference.signals import KOREAN_PATTERNS, SignalExtractor, SignalPattern


@pytest.fixture(scope="module")
def engine() -> InferenceEngine:
    return InferenceEngine()


CASES = [
    ("동료", "퇴근 직전", "wlb", "미안한데 오늘은 조금 먼저 가도 될까?", ["최근 연속 야근으로 지침"]),
    ("상사", "야근", "pressure", "다들 지금 바로 마무리합시다. 반드시 오늘 끝내야 해요.", []),
    ("고객", "마감 전날", "balanced", "혹시 범위를 조금 더 늘려도 괜찮을까요?", ["지난번에도 일정이 밀렸어요"]),
    ("가족", "밤", "balanced", "", []),
    ("", "", "mystery", "   ", ["", "도와줘"]),
]


@pytest.mark.parametrize("role,time_context,culture,utterance,history", CASES)
def test_range_is_valid_distribution(engine, role, time_context, culture, utterance, history) -> None:
    result = engine.infer(role, time_context, culture, utterance, history)
    assert sorted(item.intent for item in result.range) == sorted(INTENTS)
    assert sum(item.probability for item in result.range) == pytest.approx(1.0, abs=1e-5)
    assert all(item.probability > 0 for item in result.range)
    probs = [item.probability for item in result.range]
    assert probs == sorted(probs, reverse=True)


def test_peer_asking_to_leave_early(engine: InferenceEngine) -> None:
    result = engine.infer(
        "동료",
        "퇴근 직전",
        "wlb",
        "미안한데 오늘은 조금 먼저 가도 될까?",
        ["최근 연속 야근으로 지침"],
    )
    assert result.top.intent in {"GO_HOME", "HELP_SEEK"}
    assert result.probability_of("GO_HOME") > result.probability_of("STAY")
    assert len(result.signals) > 0
    assert result.note == "signals=2, history=1"


def test_reacts_to_boundary_pushing_signals(engine: InferenceEngine) -> None:
    pressure = engine.infer(
        "상사",
        "야근",
        "pressure",
        "다들 지금 바로 마무리합시다. 반드시 오늘 끝내야 해요.",
        [],
    )
    soft = engine.infer(
        "상사",
        "야근",
        "pressure",
        "오늘은 가능하면 여기까지 하고 내일 일찍 마무리하는 게 어떨까요?",
        ["최근 잦은 야근에 대한 불만"],
    )

    assert pressure.top.intent == "STAY"
    go_home_soft = soft.probability_of("GO_HOME")
    assert go_home_soft > pressure.probability_of("GO_HOME")
    assert pressure.probability_of("STAY") > go_home_soft


@pytest.mark.parametrize(
    "role,utterance",
    [
        ("동료", "회의 자료 확인 부탁드려요"),
        ("상사", "다들 지금 바로 마무리합시다."),
    ],
)
def test_culture_moves_mass_from_stay_to_go_home(engine, role: str, utterance: str) -> None:
    pressure = engine.infer(role, "오후", "pressure", utterance, [])
    wlb = engine.infer(role, "오후", "wlb", utterance, [])
    assert wlb.probability_of("GO_HOME") > pressure.probability_of("GO_HOME")
    assert wlb.probability_of("STAY") < pressure.probability_of("STAY")


def test_inference_is_idempotent(engine: InferenceEngine) -> None:
    args = ("동료", "퇴근 직전", "wlb", "미안한데 오늘은 조금 먼저 가도 될까?", ["최근 연속 야근으로 지침"])
    first = engine.infer(*args)
    second = engine.infer(*args)
    assert first.range == second.range
    assert first.signals == second.signals


def test_no_signals_leaves_prior_unchanged(engine: InferenceEngine) -> None:
    result = engine.infer("동료", "오후", "balanced", "회의 자료 확인 부탁드려요", [])
    prior = {item.intent: item.probability for item in engine.prior_model.prior("동료", "오후", "balanced")}
    assert result.signals == []
    for item in result.range:
        assert item.probability == pytest.approx(prior[item.intent])


def test_empty_utterance_emits_silence(engine: InferenceEngine) -> None:
    result = engine.infer("동료", "오후", "balanced", "", [])
    assert result.signals == ["silence"]


def test_history_help_cue_boosts_help_seek(engine: InferenceEngine) -> None:
    base = engine.infer("동료", "오후", "balanced", "회의 자료 확인 부탁드려요", [])
    helped = engine.infer("동료", "오후", "balanced", "회의 자료 확인 부탁드려요", ["도와주세요"])
    assert helped.probability_of("HELP_SEEK") > base.probability_of("HELP_SEEK")


def test_history_signals_are_merged_and_deduplicated(engine: InferenceEngine) -> None:
    result = engine.infer("동료", "오후", "balanced", "감사해요", ["정말 감사합니다", "죄송해요"])
    assert sorted(result.signals) == ["apology", "gratitude"]


def test_non_string_history_entries_are_ignored(engine: InferenceEngine) -> None:
    result = engine.infer("동료", "오후", "balanced", "안녕", [None, 3, "도와줘"])
    assert result.note.endswith("history=1")


def test_unknown_signal_does_not_move_posterior() -> None:
    extractor = SignalExtractor([*KOREAN_PATTERNS, SignalPattern.compile("meeting", r"회의")])
    custom = InferenceEngine(extractor=extractor)
    plain = InferenceEngine()
    args = ("동료", "오후", "balanced", "회의 자료 확인 부탁드려요", [])

    with_unknown = custom.infer(*args)
    without = plain.infer(*args)
    assert "meeting" in with_unknown.signals
    for item in with_unknown.range:
        assert item.probability == pytest.approx(without.probability_of(item.intent))


def test_softmax_is_stable_for_large_scores() -> None:
    probs = softmax(np.array([1000.0, 999.0, -1000.0]))
    assert np.isfinite(probs).all()
    assert probs.sum() == pytest.approx(1.0)
    assert probs[0] > probs[1] > probs[2]
