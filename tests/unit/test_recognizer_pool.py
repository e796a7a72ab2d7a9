import threading
from unittest.mock import MagicMock

from shipscan.config.settings import Settings
from shipscan.recognition.base import BaseTextRecognizer
from shipscan.recognition.factory import RecognizerFactory
from shipscan.recognition.pool import RecognizerPool
from shipscan.recognition.tesseract_recognizer import TesseractRecognizer


def _make_pool() -> tuple[RecognizerPool, MagicMock]:
    factory = MagicMock(side_effect=lambda: MagicMock(spec=BaseTextRecognizer))
    return RecognizerPool(factory), factory


class TestRecognizerPool:
    def test_acquire_creates_once_per_session(self) -> None:
        pool, factory = _make_pool()
        first = pool.acquire("s1")
        assert pool.acquire("s1") is first
        factory.assert_called_once()
        assert len(pool) == 1

    def test_sessions_get_separate_recognizers(self) -> None:
        pool, _ = _make_pool()
        assert pool.acquire("s1") is not pool.acquire("s2")
        assert len(pool) == 2

    def test_release_closes_and_forgets(self) -> None:
        pool, _ = _make_pool()
        recognizer = pool.acquire("s1")
        pool.release("s1")
        recognizer.close.assert_called_once()  # type: ignore[attr-defined]
        assert len(pool) == 0

    def test_release_unknown_session_is_ignored(self) -> None:
        pool, _ = _make_pool()
        pool.release("missing")
        assert len(pool) == 0

    def test_close_all_releases_every_lease(self) -> None:
        pool, _ = _make_pool()
        leased = [pool.acquire(f"s{i}") for i in range(3)]
        pool.close_all()
        assert len(pool) == 0
        for recognizer in leased:
            recognizer.close.assert_called_once()  # type: ignore[attr-defined]

    def test_concurrent_acquire_for_one_session_creates_one(self) -> None:
        pool, factory = _make_pool()
        results: list[BaseTextRecognizer] = []
        threads = [
            threading.Thread(target=lambda: results.append(pool.acquire("shared")))
            for _ in range(8)
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        factory.assert_called_once()
        assert all(result is results[0] for result in results)


class TestRecognizerFactory:
    def test_pool_creates_tesseract_recognizers_lazily(self) -> None:
        pool = RecognizerFactory.create_pool(Settings(ocr_psm=6))
        recognizer = pool.acquire("s1")
        assert isinstance(recognizer, TesseractRecognizer)
        assert not recognizer.engine_started
