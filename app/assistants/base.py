from abc import ABC, abstractmethod
from pathlib import Path

from app.assistants.models import RunState, ThreadMessage, VectorStoreFileState


class BaseAssistantsBackend(ABC):
    """Contract for provider-specific assistants backends.

    Every method returns plain identifiers or small status views; remote
    objects are never exposed to the pipeline. Implementations raise
    BackendFailureError on any provider failure.
    """

    @abstractmethod
    def create_assistant(
        self,
        *,
        name: str,
        model: str,
        instructions: str,
    ) -> str:
        """Create an assistant with file search enabled and return its id."""

    @abstractmethod
    def create_vector_store(self, *, name: str) -> str:
        """Create an empty vector store and return its id."""

    @abstractmethod
    def upload_file(self, path: Path) -> str:
        """Upload a local file for assistant use and return its id."""

    @abstractmethod
    def add_file_to_vector_store(
        self, *, vector_store_id: str, file_id: str
    ) -> VectorStoreFileState:
        """Attach an uploaded file to a vector store."""

    @abstractmethod
    def retrieve_vector_store_file(
        self, *, vector_store_id: str, file_id: str
    ) -> VectorStoreFileState:
        """Fetch the current indexing state of a vector store file."""

    @abstractmethod
    def attach_vector_store(self, *, assistant_id: str, vector_store_id: str) -> None:
        """Make the vector store the assistant's file search resource."""

    @abstractmethod
    def create_thread(self, *, question: str) -> str:
        """Create a thread seeded with one user message and return its id."""

    @abstractmethod
    def create_run(
        self, *, thread_id: str, assistant_id: str, temperature: float
    ) -> RunState:
        """Start a run of the assistant on the thread."""

    @abstractmethod
    def retrieve_run(self, *, thread_id: str, run_id: str) -> RunState:
        """Fetch the current status of a run."""

    @abstractmethod
    def list_messages(self, *, thread_id: str) -> list[ThreadMessage]:
        """List thread messages, most recent first."""

    @abstractmethod
    def delete_assistant(self, assistant_id: str) -> None:
        """Delete an assistant."""

    @abstractmethod
    def delete_vector_store(self, vector_store_id: str) -> None:
        """Delete a vector store."""

    @abstractmethod
    def delete_file(self, file_id: str) -> None:
        """Delete an uploaded file."""

    @abstractmethod
    def delete_thread(self, thread_id: str) -> None:
        """Delete a thread and its messages."""
