import io

import pdfplumber

from app.pdf.base import BasePdfValidator
from app.processor.exceptions import InvalidInputError


class PdfPlumberValidator(BasePdfValidator):
    """Validates PDF uploads by opening them with pdfplumber."""

    def validate(self, pdf_bytes: bytes) -> int:
        if not pdf_bytes:
            raise InvalidInputError("Uploaded file is empty.")
        try:
            with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
                page_count = len(pdf.pages)
        except Exception as exc:
            raise InvalidInputError(f"Uploaded file is not a readable PDF: {exc}") from exc
        if page_count == 0:
            raise InvalidInputError("Uploaded PDF has no pages.")
        return page_count
