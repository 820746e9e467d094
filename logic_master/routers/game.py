"""Game session endpoints."""
from typing import Dict

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel, Field, field_validator

from logic_master.constants import (
    ANSWER_SUBMISSION_RATE_LIMIT,
    DEFAULT_QUESTION_COUNT,
    GAME_MODES,
    GAME_START_RATE_LIMIT,
    MAX_QUESTION_COUNT,
)
from logic_master.rate_limit import limiter
from logic_master.services.game_service import GameService, HintStatus
from logic_master.services.session import Phase

router = APIRouter(prefix="/api/game", tags=["game"])


class StartGameRequest(BaseModel):
    """Request body for starting a game."""
    mode: str = "single"
    question_count: int = Field(
        DEFAULT_QUESTION_COUNT, ge=1, le=MAX_QUESTION_COUNT, description="Number of questions in the session"
    )

    @field_validator("mode")
    @classmethod
    def validate_mode(cls, v):
        if v not in GAME_MODES:
            raise ValueError(f"mode must be one of {', '.join(GAME_MODES)}")
        return v


class AnswerRequest(BaseModel):
    """Request body for answer submission."""
    selected_index: int = Field(..., ge=0, description="Index of the chosen option")


def get_game_service(request: Request) -> GameService:
    """The application's game service, created at startup."""
    return request.app.state.game_service


def serialize_state(service: GameService) -> Dict:
    """
    Public view of the running session.

    The correct answer and explanation are only revealed while the answer
    is being displayed (SCORING phase).
    """
    scorer = service.scorer
    state = scorer.state
    payload = {
        "phase": state.phase.value,
        "mode": state.mode,
        "difficulty": state.difficulty,
        "question_index": state.question_index,
        "total_questions": len(state.questions),
        "score": state.score,
        "streak": state.streak,
        "total_correct": state.total_correct,
        "time_left": scorer.time_left(),
        "question": None,
    }

    question = state.current_question
    if question is not None:
        payload["question"] = {
            "category": question.category,
            "difficulty": question.difficulty,
            "text": question.text,
            "options": question.options,
        }
        if state.phase == Phase.SCORING:
            payload["question"]["correct_index"] = question.correct_index
            payload["question"]["explanation"] = question.explanation

    if state.phase == Phase.IDLE and scorer.last_result is not None:
        payload["last_result"] = scorer.last_result.model_dump(mode="json")

    return payload


@router.post("/start")
@limiter.limit(GAME_START_RATE_LIMIT)
async def start_game(
    request: Request,
    body: StartGameRequest,
    service: GameService = Depends(get_game_service)
):
    """
    Start a new game, abandoning any session in progress.

    Difficulty and categories adapt to the player's stats and learning profile.
    """
    if not service.start_game(body.mode, body.question_count):
        raise HTTPException(status_code=409, detail="Game could not be started")
    return serialize_state(service)


@router.post("/daily")
async def start_daily_challenge(service: GameService = Depends(get_game_service)):
    """Start today's daily challenge."""
    if not service.start_daily_challenge():
        raise HTTPException(status_code=409, detail="Daily challenge could not be started")
    return serialize_state(service)


@router.get("/state")
async def get_game_state(service: GameService = Depends(get_game_service)):
    """Current session state; phase is 'idle' when no game is running."""
    return serialize_state(service)


@router.post("/answer")
@limiter.limit(ANSWER_SUBMISSION_RATE_LIMIT)
async def submit_answer(
    request: Request,
    body: AnswerRequest,
    service: GameService = Depends(get_game_service)
):
    """
    Submit an answer for the current question.

    Returns:
    - correctness, the correct option and its explanation
    - points earned (base, time bonus, streak bonus) for correct answers
    - running score and streak
    """
    state = service.scorer.state
    if state.phase != Phase.AWAITING_ANSWER:
        raise HTTPException(status_code=409, detail="No question is awaiting an answer")
    if body.selected_index >= len(state.current_question.options):
        raise HTTPException(status_code=400, detail="Selected option does not exist")

    question = state.current_question
    outcome = service.submit_answer(body.selected_index)
    if outcome is None:
        raise HTTPException(status_code=409, detail="Answer was not accepted")

    points = None
    if outcome.points is not None:
        points = {**outcome.points._asdict(), "total": outcome.points.total}

    return {
        "is_correct": outcome.record.is_correct,
        "correct_index": outcome.record.correct_index,
        "explanation": question.explanation,
        "response_time": outcome.record.response_time,
        "points": points,
        "score": outcome.score,
        "streak": outcome.streak,
        "is_last_question": outcome.is_last_question,
    }


@router.post("/skip")
async def skip_question(service: GameService = Depends(get_game_service)):
    """Skip the current question; the next one is shown immediately."""
    if not service.skip_question():
        raise HTTPException(status_code=409, detail="No question is awaiting an answer")
    return serialize_state(service)


@router.post("/hint")
async def request_hint(service: GameService = Depends(get_game_service)):
    """Spend coins on a hint for the current question."""
    status, hint = service.request_hint()
    if status == HintStatus.NOT_AVAILABLE:
        raise HTTPException(status_code=409, detail="No question is awaiting an answer")
    if status == HintStatus.INSUFFICIENT_COINS:
        raise HTTPException(status_code=402, detail="Not enough coins for a hint")
    return {"hint": hint, "coins": service.profile.coins}


@router.post("/abort")
async def abort_game(service: GameService = Depends(get_game_service)):
    """Abandon the current session without recording it."""
    if not service.abort():
        raise HTTPException(status_code=409, detail="No game is running")
    return serialize_state(service)
