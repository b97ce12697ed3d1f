"""
Static catalog of candidate response actions
"""

from typing import Dict, Tuple

from ..core.types import ActionDefinition

ACTION_DEFINITIONS: Tuple[ActionDefinition, ...] = (
    ActionDefinition(
        action="HARD_GO",
        label="단호하게 퇴근 선언",
        intent_focus={"GO_HOME": 1.0, "STAY": -0.4, "POWER_SIGNAL": -0.2},
        time_slope=-0.2,
        relationship_slope=-0.1,
        task_slope=-0.3,
        future_slope=0.2,
        tone="단호/명확",
    ),
    ActionDefinition(
        action="SOFT_GO",
        label="완곡한 철수 제안",
        intent_focus={"GO_HOME": 0.8, "SMALL_TALK": 0.2, "HELP_SEEK": 0.3},
        time_slope=-0.1,
        relationship_slope=0.2,
        task_slope=-0.2,
        future_slope=0.3,
        tone="부드럽고 협조적",
    ),
    ActionDefinition(
        action="STAY_SHORT",
        label="짧게 머무르기",
        intent_focus={"STAY": 0.6, "HELP_SEEK": 0.2},
        time_slope=0.2,
        relationship_slope=0.1,
        task_slope=0.3,
        future_slope=0.1,
        tone="타협/실무적",
    ),
    ActionDefinition(
        action="STAY_FULL",
        label="끝까지 남기",
        intent_focus={"STAY": 0.9, "POWER_SIGNAL": 0.2},
        time_slope=0.4,
        relationship_slope=0.3,
        task_slope=0.4,
        future_slope=0.2,
        tone="헌신/책임감",
    ),
    ActionDefinition(
        action="CLARIFY",
        label="의도 확인 질문",
        intent_focus={"NEUTRAL": 0.5, "TEST_BOUNDARY": 0.4, "HELP_SEEK": 0.4},
        time_slope=0.1,
        relationship_slope=0.2,
        task_slope=0.1,
        future_slope=0.3,
        tone="탐색/메타대화",
    ),
    ActionDefinition(
        action="CARE_SUPPORT",
        label="정서적 지지 제공",
        intent_focus={"SMALL_TALK": 0.4, "HELP_SEEK": 0.5, "NEUTRAL": 0.2},
        time_slope=-0.1,
        relationship_slope=0.4,
        task_slope=-0.1,
        future_slope=0.4,
        tone="공감/케어",
    ),
    ActionDefinition(
        action="HELP_BRIDGE",
        label="도움 연결 요청",
        intent_focus={"HELP_SEEK": 0.7, "TEST_BOUNDARY": 0.2, "SMALL_TALK": 0.1},
        time_slope=0.2,
        relationship_slope=0.3,
        task_slope=0.2,
        future_slope=0.4,
        tone="학습/협력",
    ),
)

# Relationship multiplier for the relationship EV term
RELATIONSHIP_WEIGHT: Dict[str, float] = {
    "peer": 0.3,
    "manager": 0.6,
    "subordinate": 0.2,
    "client": 0.7,
    "family": 0.4,
    "partner": 0.5,
}


def culture_bias(culture: str, action: str) -> float:
    """Culture-specific EV adjustment for an action id"""
    if culture == "pressure":
        if action == "STAY_FULL":
            return 0.25
        if action == "HARD_GO":
            return -0.2
    elif culture == "wlb":
        if action.startswith("STAY"):
            return -0.2
        if "GO" in action:
            return 0.25
    elif action == "CLARIFY":
        return 0.1
    return 0.0


def action_labels() -> Dict[str, str]:
    return {definition.action: definition.label for definition in ACTION_DEFINITIONS}
