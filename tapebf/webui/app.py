from __future__ import annotations

import io
import logging
from typing import List, Optional

from fastapi import FastAPI, HTTPException, Response, status
from pydantic import BaseModel, Field

from tapebf.bf_interpreter import BrainfuckError, StepLimitExceeded

from .session import SessionRecord, SessionStore

logger = logging.getLogger(__name__)


class SessionConfiguration(BaseModel):
    tape_window: int = Field(default=10, ge=0)
    max_steps: Optional[int] = Field(default=None, ge=1)


class TapeState(BaseModel):
    pointer: int
    tape_start: int
    tape: List[int]
    tape_length: int


class SessionPayload(BaseModel):
    session_id: str
    executions: int
    state: TapeState


class ExecuteRequest(BaseModel):
    program: str
    input: str = ""


class ExecuteResponse(BaseModel):
    session_id: str
    output: str
    steps: Optional[int]
    error: Optional[str]
    error_type: Optional[str]
    state: TapeState


def _tape_state(record: SessionRecord) -> TapeState:
    interpreter = record.interpreter
    pointer = interpreter.pointer
    start = max(0, pointer - record.tape_window)
    end = pointer + record.tape_window + 1
    return TapeState(
        pointer=pointer,
        tape_start=start,
        tape=interpreter.tape.window(start, end),
        tape_length=len(interpreter.tape),
    )


def create_app(store: Optional[SessionStore] = None) -> FastAPI:
    session_store = store or SessionStore()
    app = FastAPI(title="tapebf session API", version="0.1.0")

    def _get_record(session_id: str) -> SessionRecord:
        try:
            return session_store.get(session_id)
        except KeyError as exc:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc

    def _build_payload(record: SessionRecord) -> SessionPayload:
        return SessionPayload(
            session_id=record.session_id,
            executions=record.executions,
            state=_tape_state(record),
        )

    @app.post("/api/session", response_model=SessionPayload, status_code=status.HTTP_201_CREATED)
    def create_session(payload: SessionConfiguration) -> SessionPayload:
        record = session_store.create_session(
            tape_window=payload.tape_window,
            max_steps=payload.max_steps,
        )
        logger.debug("Created session %s", record.session_id)
        return _build_payload(record)

    @app.get("/api/session/{session_id}", response_model=SessionPayload)
    def get_session(session_id: str) -> SessionPayload:
        return _build_payload(_get_record(session_id))

    @app.post("/api/session/{session_id}/execute", response_model=ExecuteResponse)
    def execute_program(session_id: str, payload: ExecuteRequest) -> ExecuteResponse:
        record = _get_record(session_id)
        output = io.StringIO()
        steps: Optional[int] = None
        error: Optional[str] = None
        error_type: Optional[str] = None

        with record.lock:
            try:
                steps = record.interpreter.execute(
                    payload.program,
                    stdin=io.StringIO(payload.input),
                    stdout=output,
                    max_steps=record.max_steps,
                )
            except StepLimitExceeded as exc:
                raise HTTPException(
                    status_code=status.HTTP_409_CONFLICT,
                    detail=str(exc),
                ) from exc
            except BrainfuckError as exc:
                error = str(exc)
                error_type = type(exc).__name__
            finally:
                record.executions += 1
            state = _tape_state(record)

        return ExecuteResponse(
            session_id=record.session_id,
            output=output.getvalue(),
            steps=steps,
            error=error,
            error_type=error_type,
            state=state,
        )

    @app.post("/api/session/{session_id}/reset", response_model=SessionPayload)
    def reset_session(session_id: str) -> SessionPayload:
        try:
            record = session_store.reset(session_id)
        except KeyError as exc:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
        return _build_payload(record)

    @app.delete("/api/session/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
    def delete_session(session_id: str) -> Response:
        removed = session_store.remove(session_id)
        if not removed:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Unknown session id: {session_id}",
            )
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return app


__all__ = ["create_app"]
