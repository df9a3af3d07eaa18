import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Cookie, Depends, Request, Response
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse

from .config import settings
from .exceptions import InvalidAnswerError, UnknownModeError
from .generator import QuizFactory, QuizGenerator
from .globals import charset_manager, sessions, templates
from .models import ModeRequest, SelectRequest, SessionState
from .scoring import summarize
from .session import new_session, regenerate, select_option, submit, toggle_mode

logger = logging.getLogger("kanaquiz.router")

router = APIRouter()


# --- Dependencies ---
def get_session_id(
    session_id: Optional[str] = Cookie(None, alias=settings.SESSION_COOKIE_NAME)
) -> Optional[str]:
    return session_id


def generator_for(mode: str) -> QuizGenerator:
    return QuizFactory.create("random", charset_manager.get_pairs(mode), settings.BATCH_SIZE)


def start_session(mode: str) -> SessionState:
    state = new_session(mode, generator_for(mode))
    logger.info(
        f"New batch [Mode: {mode}, Questions: {state.total_questions}]",
        extra={"mode": mode},
    )
    return state


def save(response: Response, session_id: Optional[str], state: SessionState) -> str:
    """Stores `state`; a cookie that is not a live session gets a fresh id."""
    new_id = sessions.put(session_id, state)
    if new_id != session_id:
        response.set_cookie(
            key=settings.SESSION_COOKIE_NAME,
            value=new_id,
            httponly=True,
            samesite="Lax",
        )
    return new_id


def session_payload(state: SessionState) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "mode": state.mode,
        "title": charset_manager.title(state.mode),
        "total_questions": state.total_questions,
        "created_at": state.created_at.isoformat(),
        "questions": [
            {"id": q.id, "prompt": q.prompt, "options": q.options}
            for q in state.questions
        ],
        "answers": state.answers,
        "score": state.score,
    }
    if state.score is not None:
        payload["summary"] = summarize(state.questions, state.answers).model_dump()
    return payload


# --- HTML Routes ---
@router.get("/", response_class=HTMLResponse)
async def home(request: Request, session_id: Optional[str] = Depends(get_session_id)):
    state = sessions.get(session_id)
    if state is None:
        state = start_session(settings.DEFAULT_MODE)

    summary = None
    if state.score is not None:
        summary = summarize(state.questions, state.answers)

    response = templates.TemplateResponse(
        request,
        "index.html",
        {
            "title": charset_manager.title(state.mode),
            "mode": state.mode,
            "other_mode": charset_manager.other_mode(state.mode),
            "questions": state.questions,
            "answers": state.answers,
            "score": state.score,
            "batch_size": settings.BATCH_SIZE,
            "summary": summary,
        },
    )
    save(response, session_id, state)
    return response


@router.post("/mode", response_class=RedirectResponse)
async def switch_mode(session_id: Optional[str] = Depends(get_session_id)):
    state = sessions.get(session_id)
    current = state.mode if state else settings.DEFAULT_MODE
    target = charset_manager.other_mode(current)
    if state is None:
        state = start_session(target)
    else:
        state = toggle_mode(state, charset_manager, generator_for(target))
        logger.info(f"Switched to {target}", extra={"mode": target})

    redirect = RedirectResponse(url="./", status_code=302)
    save(redirect, session_id, state)
    return redirect


@router.post("/new", response_class=RedirectResponse)
async def new_batch(session_id: Optional[str] = Depends(get_session_id)):
    state = sessions.get(session_id)
    if state is None:
        state = start_session(settings.DEFAULT_MODE)
    else:
        state = regenerate(state, generator_for(state.mode))
        logger.info(f"Regenerated batch [Mode: {state.mode}]", extra={"mode": state.mode})

    redirect = RedirectResponse(url="./", status_code=302)
    save(redirect, session_id, state)
    return redirect


@router.post("/submit", response_class=RedirectResponse)
async def submit_form(request: Request, session_id: Optional[str] = Depends(get_session_id)):
    state = sessions.get(session_id)
    if state is None:
        return RedirectResponse(url="./", status_code=302)

    form = await request.form()
    state = sessions.get(session_id)
    if state is None:
        return RedirectResponse(url="./", status_code=302)
    for question in state.questions:
        choice = form.get(f"q{question.id}")
        if choice is None:
            continue
        try:
            state = select_option(state, question.id, str(choice))
        except InvalidAnswerError as e:
            logger.warning(f"Ignoring form answer: {e}")

    state = submit(state)
    logger.info(
        f"Submitted [Mode: {state.mode}, Score: {state.score}/{state.total_questions}]",
        extra={"mode": state.mode},
    )

    redirect = RedirectResponse(url="./", status_code=302)
    save(redirect, session_id, state)
    return redirect


# --- JSON API ---
@router.get("/api/modes")
async def get_modes():
    return [m.model_dump() for m in charset_manager.get_modes()]


@router.get("/api/session")
async def get_session(response: Response, session_id: Optional[str] = Depends(get_session_id)):
    state = sessions.get(session_id)
    if state is None:
        state = start_session(settings.DEFAULT_MODE)
        save(response, session_id, state)
    return session_payload(state)


@router.post("/api/select")
async def api_select(body: SelectRequest, session_id: Optional[str] = Depends(get_session_id)):
    state = sessions.get(session_id)
    if state is None:
        return JSONResponse({"error": "Session invalid"}, status_code=401)
    try:
        state = select_option(state, body.question_id, body.option)
    except InvalidAnswerError as e:
        logger.warning(f"Rejected answer: {e}")
        return JSONResponse({"error": str(e)}, status_code=400)
    sessions.put(session_id, state)
    return {"question_id": body.question_id, "option": body.option}


@router.post("/api/submit")
async def api_submit(session_id: Optional[str] = Depends(get_session_id)):
    state = sessions.get(session_id)
    if state is None:
        return JSONResponse({"error": "Session invalid"}, status_code=401)
    state = submit(state)
    sessions.put(session_id, state)
    logger.info(
        f"Submitted [Mode: {state.mode}, Score: {state.score}/{state.total_questions}]",
        extra={"mode": state.mode},
    )
    return summarize(state.questions, state.answers).model_dump()


@router.post("/api/new")
async def api_new(response: Response, session_id: Optional[str] = Depends(get_session_id)):
    state = sessions.get(session_id)
    if state is None:
        state = start_session(settings.DEFAULT_MODE)
    else:
        state = regenerate(state, generator_for(state.mode))
        logger.info(f"Regenerated batch [Mode: {state.mode}]", extra={"mode": state.mode})
    save(response, session_id, state)
    return session_payload(state)


@router.post("/api/mode")
async def api_mode(
    response: Response,
    body: Optional[ModeRequest] = None,
    session_id: Optional[str] = Depends(get_session_id),
):
    state = sessions.get(session_id)
    target = body.mode if body and body.mode else None
    try:
        if target is None:
            target = charset_manager.other_mode(state.mode if state else settings.DEFAULT_MODE)
        state = start_session(target)
    except UnknownModeError as e:
        return JSONResponse({"error": str(e)}, status_code=404)
    save(response, session_id, state)
    return session_payload(state)


@router.post("/api/reset")
async def reset_session(response: Response, session_id: Optional[str] = Depends(get_session_id)):
    sessions.discard(session_id)
    response.delete_cookie(settings.SESSION_COOKIE_NAME)
    return {"status": "success"}
