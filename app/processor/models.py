from dataclasses import dataclass


@dataclass(frozen=True)
class UploadedDocument:
    """Document received from the caller for a single classification request."""

    filename: str
    content: bytes

    @property
    def size_bytes(self) -> int:
        return len(self.content)


@dataclass(frozen=True)
class ProvisionedAssistant:
    """Backend handles of an assistant bound to a one-file vector store."""

    assistant_id: str
    vector_store_id: str
    file_id: str


@dataclass
class CreatedResources:
    """Backend resources created during one request, filled in as they appear."""

    assistant_id: str | None = None
    vector_store_id: str | None = None
    file_id: str | None = None
    thread_id: str | None = None


@dataclass(frozen=True)
class ClassificationResult:
    """Outcome of a successful classification request."""

    label: str
    reply_text: str
    filename: str = ""
