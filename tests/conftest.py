import io
from collections.abc import Generator
from unittest.mock import MagicMock, patch

import pytest
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

from app.taxonomy.loader import load_taxonomy
from app.taxonomy.models import Taxonomy


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a minimal single-page PDF that reads like a certificate of insurance."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "CERTIFICATE OF LIABILITY INSURANCE")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    """Generate a two-page PDF with known text on each page."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Loss run report page one")
    c.showPage()
    c.drawString(72, 720, "Loss run report page two")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def taxonomy() -> Taxonomy:
    return load_taxonomy()


@pytest.fixture()
def no_sleep() -> Generator[MagicMock, None, None]:
    """Make polling loops spin without waiting."""
    with patch("app.processor.polling.time.sleep") as mock_sleep:
        yield mock_sleep
