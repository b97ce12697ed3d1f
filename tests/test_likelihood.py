from __future__ import annotations

from pathlib import Path

import pytest

from talkrange.core.exceptions import ConfigurationError
from talkrange.core.types import INTENTS
from talkrange.inference.likelihood import LikelihoodTable
from talkrange.inference.signals import SignalExtractor


@pytest.fixture(scope="module")
def table() -> LikelihoodTable:
    return LikelihoodTable.from_yaml()


def test_every_extractor_tag_is_known(table: LikelihoodTable) -> None:
    for tag in SignalExtractor().tags:
        assert tag in table


def test_known_signal_returns_authored_vector(table: LikelihoodTable) -> None:
    vector = table.lookup("apology")
    assert vector["GO_HOME"] == pytest.approx(0.8)
    assert vector["POWER_SIGNAL"] == pytest.approx(0.1)
    assert set(vector) == set(INTENTS)


def test_lookup_returns_copy(table: LikelihoodTable) -> None:
    table.lookup("question")["GO_HOME"] = 99.0
    assert table.lookup("question")["GO_HOME"] == pytest.approx(0.5)


def test_unknown_signal_falls_back_to_uniform(table: LikelihoodTable) -> None:
    # The fallback blends uniform with a uniform background, so the nominal
    # smoothing weight has no effect and the signal carries no information.
    vector = table.lookup("never_seen")
    assert set(vector) == set(INTENTS)
    for weight in vector.values():
        assert weight == pytest.approx(1.0 / len(INTENTS))


def test_unknown_signal_blends_toward_explicit_background(table: LikelihoodTable) -> None:
    background = {intent: 0.0 for intent in INTENTS}
    background["GO_HOME"] = 1.0
    vector = table.lookup("never_seen", background=background)
    uniform = 1.0 / len(INTENTS)
    assert vector["GO_HOME"] == pytest.approx(0.15 * uniform + 0.85)
    assert vector["STAY"] == pytest.approx(0.15 * uniform)


def test_missing_intent_is_rejected() -> None:
    with pytest.raises(ConfigurationError):
        LikelihoodTable({"question": {"GO_HOME": 0.5}})


def test_out_of_range_weight_is_rejected() -> None:
    vector = {intent: 0.5 for intent in INTENTS}
    vector["STAY"] = 0.0
    with pytest.raises(ConfigurationError):
        LikelihoodTable({"question": vector})


def test_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError):
        LikelihoodTable.from_yaml(tmp_path / "nope.yaml")
