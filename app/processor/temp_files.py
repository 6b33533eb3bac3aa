import os
import re
import tempfile
from pathlib import Path

from app.logging.logger import Log
from app.processor.exceptions import InvalidInputError, IOFailureError
from app.processor.models import UploadedDocument


def sanitize_suffix(filename: str) -> str:
    """Reduce an uploaded filename to a safe temp-file suffix."""
    name = Path(filename.replace("\\", "/")).name.replace("\0", "")
    name = re.sub(r"[^a-zA-Z0-9._-]", "_", name)
    return name[-100:]


class TransientFileManager:
    """Copies uploads to uniquely named local files and removes them afterwards."""

    PREFIX = "upload-"

    def __init__(self, temp_dir: Path | None = None) -> None:
        self._temp_dir = temp_dir

    def acquire(self, document: UploadedDocument) -> Path:
        """Write the document bytes to a new local file.

        Raises:
            InvalidInputError: if the document is empty.
            IOFailureError: if the file cannot be written or ends up empty.
        """
        if document.size_bytes == 0:
            raise InvalidInputError("Uploaded file is empty.")

        try:
            fd, name = tempfile.mkstemp(
                prefix=self.PREFIX,
                suffix=sanitize_suffix(document.filename),
                dir=self._temp_dir,
            )
        except OSError as exc:
            raise IOFailureError(f"Could not create temporary file: {exc}") from exc

        path = Path(name)
        try:
            with os.fdopen(fd, "wb") as fh:
                fh.write(document.content)
            size = path.stat().st_size
        except OSError as exc:
            self.release(path)
            raise IOFailureError(f"Could not write temporary file: {exc}") from exc

        if size == 0:
            self.release(path)
            raise IOFailureError("Temporary file is empty after copying.")
        Log.info(f"Temporary file created: {size} bytes")
        return path

    def release(self, path: Path | None) -> None:
        """Delete the file if present. Never raises."""
        if path is None:
            return
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            Log.error(f"Error cleaning up temporary file {path}: {exc}")
