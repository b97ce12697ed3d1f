"""
Request/response models for the HTTP API
"""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..core.types import CultureMode, Relationship


class ProfileIn(BaseModel):
    """Partial profile; every field is optional and clamped to [0, 1] later"""
    model_config = ConfigDict(populate_by_name=True)

    relationship: Optional[Relationship] = None
    task_urgency: Optional[float] = Field(default=None, alias="taskUrgency")
    future_importance: Optional[float] = Field(default=None, alias="futureImportance")
    tolerance: Optional[float] = None


class RangeRequest(BaseModel):
    role: str = Field(..., min_length=1)
    time_context: str = Field(..., min_length=1)
    utterance: str = Field(..., min_length=1)
    culture: Optional[CultureMode] = None
    history: Optional[List[Any]] = None
    my_profile: Optional[ProfileIn] = None


class IntentProbOut(BaseModel):
    intent: str
    probability: float


class ActionOut(BaseModel):
    action: str
    ev: float
    rationale: str
    intents: List[IntentProbOut]
    template: str


class ExplainOut(BaseModel):
    signals: List[str]
    note: str


class RangeResponse(BaseModel):
    intent_range: List[IntentProbOut]
    recommended_actions: List[ActionOut]
    explain: ExplainOut


class HealthResponse(BaseModel):
    status: str = "ok"


class ErrorResponse(BaseModel):
    error: str
