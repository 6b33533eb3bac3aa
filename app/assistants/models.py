from dataclasses import dataclass


@dataclass(frozen=True)
class VectorStoreFileState:
    """Indexing state of one file inside a vector store."""

    id: str
    status: str
    last_error: str | None = None


@dataclass(frozen=True)
class RunState:
    """Status view of an assistant run on a thread."""

    id: str
    status: str
    last_error: str | None = None


@dataclass(frozen=True)
class ThreadMessage:
    """A thread message flattened to its text content."""

    id: str
    role: str
    text: str
