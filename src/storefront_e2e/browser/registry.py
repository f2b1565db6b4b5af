"""Ownership of the live browser session of each test worker."""

from __future__ import annotations

import logging
import threading
from types import TracebackType
from typing import Optional, Union

from ..models import BrowserFamily, ExecutionMode
from .base import BrowserSession, Liveness
from .factory import SessionFactory

LOGGER = logging.getLogger(__name__)


class SessionRegistry:
    """Hold at most one live session per logical worker.

    A worker is identified by name and defaults to the name of the calling
    thread. Sessions found dead are replaced transparently on ``acquire``.
    """

    def __init__(
        self,
        factory: SessionFactory,
        family: Union[BrowserFamily, str] = BrowserFamily.CHROME,
        mode: Union[ExecutionMode, str] = ExecutionMode.LOCAL,
    ) -> None:
        self._factory = factory
        self._family = family
        self._mode = mode
        self._guard = threading.Lock()
        self._worker_locks: dict[str, threading.Lock] = {}
        self._sessions: dict[str, BrowserSession] = {}

    def acquire(self, worker: Optional[str] = None) -> BrowserSession:
        """Return the worker's live session, creating one if needed."""

        worker = worker or _current_worker()
        with self._lock_for(worker):
            session = self._get(worker)
            if session is not None:
                if session.probe() == Liveness.ALIVE:
                    return session
                LOGGER.warning(
                    "Browser session for worker %s is no longer responding; replacing it",
                    worker,
                )
                self._pop(worker)
                _discard(session)
            session = self._factory.create(self._family, self._mode)
            with self._guard:
                self._sessions[worker] = session
            LOGGER.debug("Worker %s acquired new %s session", worker, session.family.value)
            return session

    def release(self, worker: Optional[str] = None) -> None:
        """Quit the worker's session. Does nothing when none is held."""

        worker = worker or _current_worker()
        with self._lock_for(worker):
            session = self._pop(worker)
            if session is None:
                return
            LOGGER.debug("Worker %s releasing %s session", worker, session.family.value)
            session.quit()

    quit = release

    def shutdown(self) -> None:
        """Release the sessions of every worker."""

        for worker in self.active_workers():
            try:
                self.release(worker)
            except Exception:  # pragma: no cover - defensive logging
                LOGGER.exception("Failed to quit browser session of worker %s", worker)

    def active_workers(self) -> list[str]:
        with self._guard:
            return list(self._sessions)

    def current(self, worker: Optional[str] = None) -> Optional[BrowserSession]:
        """Return the held session without probing or creating one."""

        return self._get(worker or _current_worker())

    def __enter__(self) -> "SessionRegistry":
        return self

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None:
        self.shutdown()

    def _lock_for(self, worker: str) -> threading.Lock:
        with self._guard:
            lock = self._worker_locks.get(worker)
            if lock is None:
                lock = self._worker_locks[worker] = threading.Lock()
            return lock

    def _get(self, worker: str) -> Optional[BrowserSession]:
        with self._guard:
            return self._sessions.get(worker)

    def _pop(self, worker: str) -> Optional[BrowserSession]:
        with self._guard:
            return self._sessions.pop(worker, None)


def _current_worker() -> str:
    return threading.current_thread().name


def _discard(session: BrowserSession) -> None:
    try:
        session.quit()
    except Exception as exc:
        LOGGER.debug("Ignoring error while quitting dead session: %s", exc)
