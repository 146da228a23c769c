from __future__ import annotations

import threading
import uuid
from dataclasses import dataclass, field
from typing import Dict, Optional

from tapebf.bf_interpreter import BrainfuckInterpreter


@dataclass
class SessionRecord:
    session_id: str
    interpreter: BrainfuckInterpreter
    tape_window: int = 10
    max_steps: Optional[int] = None
    executions: int = 0
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False)


class SessionStore:
    """Thread-safe registry of interpreters, one per interactive session."""

    def __init__(self) -> None:
        self._sessions: Dict[str, SessionRecord] = {}
        self._lock = threading.RLock()

    def create_session(
        self,
        *,
        tape_window: int = 10,
        max_steps: Optional[int] = None,
    ) -> SessionRecord:
        session_id = uuid.uuid4().hex
        record = SessionRecord(
            session_id=session_id,
            interpreter=BrainfuckInterpreter(),
            tape_window=tape_window,
            max_steps=max_steps,
        )
        with self._lock:
            self._sessions[session_id] = record
        return record

    def get(self, session_id: str) -> SessionRecord:
        with self._lock:
            try:
                return self._sessions[session_id]
            except KeyError as exc:
                raise KeyError(f"Unknown session id: {session_id}") from exc

    def reset(self, session_id: str) -> SessionRecord:
        record = self.get(session_id)
        with record.lock:
            record.interpreter.reset()
            record.executions = 0
        return record

    def remove(self, session_id: str) -> bool:
        with self._lock:
            return self._sessions.pop(session_id, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._sessions.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)


__all__ = ["SessionRecord", "SessionStore"]
