from abc import ABC, abstractmethod


class BasePdfValidator(ABC):
    """Contract for PDF sanity checks run before anything is sent to the backend."""

    @abstractmethod
    def validate(self, pdf_bytes: bytes) -> int:
        """Check that the bytes are a readable PDF.

        Args:
            pdf_bytes: Raw uploaded file content.

        Returns:
            Number of pages in the document.

        Raises:
            InvalidInputError: if the content is not a readable, non-empty PDF.
        """
