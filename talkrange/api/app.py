"""
HTTP API for TalkRange

Run with ``talkrange serve`` or ``uvicorn --factory talkrange.api.app:create_app``.
"""

import logging
from typing import Any, Dict, Optional, Sequence

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .. import __version__
from ..core.config import Settings, load_settings
from ..core.system import TalkRangeSystem
from .schemas import ErrorResponse, HealthResponse, RangeRequest, RangeResponse

logger = logging.getLogger(__name__)

router = APIRouter()


def get_system(request: Request) -> TalkRangeSystem:
    return request.app.state.system


def describe_validation_error(errors: Sequence[Dict[str, Any]]) -> str:
    """Turn the first pydantic error into a short client-facing message"""
    if not errors:
        return "invalid request"
    first = errors[0]
    loc = [str(part) for part in first.get("loc", ()) if part != "body"]
    if not loc:
        return "request body must be a JSON object"
    field = ".".join(loc)
    if first.get("type") in ("missing", "string_too_short") and len(loc) == 1:
        return f"{field} is required"
    return f"{field}: {first.get('msg', 'invalid value')}"


@router.get("/health", response_model=HealthResponse, summary="헬스 체크", tags=["health"])
def health():
    return {"status": "ok"}


@router.post(
    "/range",
    response_model=RangeResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="의도 분포와 추천 행동 계산",
    tags=["range"],
)
def post_range(body: RangeRequest, system: TalkRangeSystem = Depends(get_system)):
    profile = body.my_profile.model_dump(exclude_none=True) if body.my_profile else None
    analysis = system.analyze(
        role=body.role,
        time_context=body.time_context,
        utterance=body.utterance,
        culture=body.culture,
        history=body.history,
        profile=profile,
    )
    return analysis.to_dict()


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    message = describe_validation_error(exc.errors())
    logger.info(f"Rejected {request.method} {request.url.path}: {message}")
    return JSONResponse(status_code=400, content={"error": message})


async def internal_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"TalkRange API error on {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content={"error": "internal_error"})


def create_app(settings: Optional[Settings] = None,
               system: Optional[TalkRangeSystem] = None) -> FastAPI:
    """Construct the TalkRange FastAPI application with configured routes"""
    if system is None:
        system = TalkRangeSystem(settings or load_settings())

    app = FastAPI(title="TalkRange", version=__version__)
    app.state.system = system
    app.include_router(router)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, internal_error_handler)
    return app
