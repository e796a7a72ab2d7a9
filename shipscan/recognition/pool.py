import threading
from collections.abc import Callable

from shipscan.logging.logger import Log
from shipscan.recognition.base import BaseTextRecognizer


class RecognizerPool:
    """Recognizers keyed by session, with explicit acquire/release.

    Each session gets its own recognizer so engines are never shared between
    concurrently running sessions; acquisition and release are serialized.
    """

    def __init__(self, factory: Callable[[], BaseTextRecognizer]) -> None:
        self._factory = factory
        self._leases: dict[str, BaseTextRecognizer] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._leases)

    def acquire(self, session_id: str) -> BaseTextRecognizer:
        """Return the session's recognizer, creating it on first use."""
        with self._lock:
            recognizer = self._leases.get(session_id)
            if recognizer is None:
                recognizer = self._factory()
                self._leases[session_id] = recognizer
                Log.debug(f"Recognizer leased to session {session_id}")
            return recognizer

    def release(self, session_id: str) -> None:
        """Close and forget the session's recognizer. Unknown ids are ignored."""
        with self._lock:
            recognizer = self._leases.pop(session_id, None)
        if recognizer is not None:
            recognizer.close()
            Log.debug(f"Recognizer released by session {session_id}")

    def close_all(self) -> None:
        with self._lock:
            session_ids = list(self._leases)
        for session_id in session_ids:
            self.release(session_id)
