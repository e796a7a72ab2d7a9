"""Tesseract engine handle.

The engine is the expensive, session-scoped part of recognition: starting it
verifies the binary and fixes the recognition config, and it stays usable
until ``terminate()``. Lines are rebuilt from a single ``image_to_data`` pass
so the caller gets both the text layout and per-word confidences.
"""

from dataclasses import dataclass, field

import pytesseract
from PIL import Image

from shipscan.logging.logger import Log
from shipscan.recognition.exceptions import RecognitionError


@dataclass
class PageText:
    """Recognized lines and word confidences for one page."""

    lines: list[str] = field(default_factory=list)
    word_confidences: list[float] = field(default_factory=list)

    @property
    def text(self) -> str:
        return "\n".join(self.lines)


class TesseractEngine:
    """Owned handle around the Tesseract binary."""

    def __init__(
        self,
        *,
        language: str = "eng",
        psm: int = 3,
        char_whitelist: str = "",
        tesseract_cmd: str | None = None,
    ) -> None:
        self._language = language
        self._psm = psm
        self._char_whitelist = char_whitelist
        self._tesseract_cmd = tesseract_cmd
        self._config: str | None = None

    @property
    def is_running(self) -> bool:
        return self._config is not None

    def start(self) -> None:
        """Verify the binary and build the recognition config. No-op when running."""
        if self.is_running:
            return
        if self._tesseract_cmd:
            pytesseract.pytesseract.tesseract_cmd = self._tesseract_cmd
        try:
            version = pytesseract.get_tesseract_version()
        except (pytesseract.TesseractNotFoundError, pytesseract.TesseractError) as exc:
            raise RecognitionError(f"Tesseract engine unavailable: {exc}") from exc
        self._config = self._build_config()
        Log.info(f"Tesseract {version} started (lang={self._language}, psm={self._psm})")

    def recognize_image(self, image: Image.Image) -> PageText:
        """Recognize one page image."""
        if self._config is None:
            self.start()
        try:
            data = pytesseract.image_to_data(
                image,
                lang=self._language,
                config=self._config,
                output_type=pytesseract.Output.DICT,
            )
        except (pytesseract.TesseractNotFoundError, pytesseract.TesseractError) as exc:
            raise RecognitionError(f"Tesseract recognition failed: {exc}") from exc
        return self._collect_lines(data)

    def terminate(self) -> None:
        """Release the engine; a later call to recognize_image restarts it."""
        if self._config is not None:
            self._config = None
            Log.info("Tesseract engine terminated")

    def _build_config(self) -> str:
        config = f"--psm {self._psm}"
        if self._char_whitelist:
            config += f' -c tessedit_char_whitelist="{self._char_whitelist}"'
        return config

    @staticmethod
    def _collect_lines(data: dict[str, list[object]]) -> PageText:
        page = PageText()
        grouped: dict[tuple[object, ...], list[str]] = {}
        for i, raw_text in enumerate(data["text"]):
            word = str(raw_text).strip()
            conf = float(str(data["conf"][i]))
            if not word or conf < 0:
                continue
            key = (
                data["page_num"][i],
                data["block_num"][i],
                data["par_num"][i],
                data["line_num"][i],
            )
            grouped.setdefault(key, []).append(word)
            page.word_confidences.append(conf)
        page.lines = [" ".join(words) for words in grouped.values()]
        return page
