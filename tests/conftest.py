import io

import pytest
from PIL import Image
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

from shipscan.recognition.models import RawScan

LABEL_TEXT = "\n".join([
    "UPS GROUND",
    "FROM:",
    "Jane Sender",
    "12 Elm St",
    "Springfield, IL 62704",
    "SHIP TO:",
    "John Receiver",
    "500 Oak Avenue",
    "Portland, OR 97201",
    "TRACKING # 1Z12345E0291980026",
])


@pytest.fixture()
def label_text() -> str:
    """OCR output of a typical UPS label."""
    return LABEL_TEXT


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a minimal single-page PDF with known text content."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "SHIP TO: John Receiver")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    """Generate a two-page PDF with known text on each page."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Page one content")
    c.showPage()
    c.drawString(72, 720, "Page two content")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def png_bytes() -> bytes:
    """A small white RGB PNG."""
    buf = io.BytesIO()
    Image.new("RGB", (40, 20), "white").save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture()
def png_scan(png_bytes: bytes) -> RawScan:
    return RawScan(content=png_bytes, mime_type="image/png", filename="label.png")
