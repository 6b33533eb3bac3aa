"""Example assistants backend.

Use this module as a reference when implementing new provider backends.
Implement BaseAssistantsBackend and register the provider in
AssistantsBackendFactory.
"""

import itertools
from pathlib import Path
from typing import TypeVar

from app.assistants.base import BaseAssistantsBackend
from app.assistants.models import RunState, ThreadMessage, VectorStoreFileState
from app.processor.exceptions import BackendFailureError

T = TypeVar("T")


class ExampleAssistantsBackend(BaseAssistantsBackend):
    """In-memory backend that answers every run with a fixed reply.

    No network calls. Useful for local development, tests, and as a template
    for building real provider backends. Every run completes immediately and
    appends ``reply`` to the thread as the assistant's message.
    """

    def __init__(self, reply: str = "UNKNOWN") -> None:
        self._reply = reply
        self._ids = itertools.count(1)
        self.assistants: dict[str, dict[str, object]] = {}
        self.vector_stores: dict[str, list[str]] = {}
        self.files: dict[str, bytes] = {}
        self.threads: dict[str, list[ThreadMessage]] = {}

    def create_assistant(self, *, name: str, model: str, instructions: str) -> str:
        assistant_id = self._next_id("asst")
        self.assistants[assistant_id] = {
            "name": name,
            "model": model,
            "instructions": instructions,
            "vector_store_ids": [],
        }
        return assistant_id

    def create_vector_store(self, *, name: str) -> str:
        _ = name
        vector_store_id = self._next_id("vs")
        self.vector_stores[vector_store_id] = []
        return vector_store_id

    def upload_file(self, path: Path) -> str:
        file_id = self._next_id("file")
        try:
            self.files[file_id] = path.read_bytes()
        except OSError as exc:
            raise BackendFailureError(f"Example backend could not read {path}: {exc}") from exc
        return file_id

    def add_file_to_vector_store(
        self, *, vector_store_id: str, file_id: str
    ) -> VectorStoreFileState:
        self._require(self.vector_stores, vector_store_id, "vector store")
        self._require(self.files, file_id, "file")
        self.vector_stores[vector_store_id].append(file_id)
        return VectorStoreFileState(id=file_id, status="in_progress")

    def retrieve_vector_store_file(
        self, *, vector_store_id: str, file_id: str
    ) -> VectorStoreFileState:
        files = self._require(self.vector_stores, vector_store_id, "vector store")
        if file_id not in files:
            raise BackendFailureError(f"Example backend has no file {file_id} in {vector_store_id}")
        return VectorStoreFileState(id=file_id, status="completed")

    def attach_vector_store(self, *, assistant_id: str, vector_store_id: str) -> None:
        assistant = self._require(self.assistants, assistant_id, "assistant")
        self._require(self.vector_stores, vector_store_id, "vector store")
        assistant["vector_store_ids"] = [vector_store_id]

    def create_thread(self, *, question: str) -> str:
        thread_id = self._next_id("thread")
        self.threads[thread_id] = [
            ThreadMessage(id=self._next_id("msg"), role="user", text=question)
        ]
        return thread_id

    def create_run(
        self, *, thread_id: str, assistant_id: str, temperature: float
    ) -> RunState:
        _ = temperature
        messages = self._require(self.threads, thread_id, "thread")
        self._require(self.assistants, assistant_id, "assistant")
        messages.append(
            ThreadMessage(id=self._next_id("msg"), role="assistant", text=self._reply)
        )
        return RunState(id=self._next_id("run"), status="in_progress")

    def retrieve_run(self, *, thread_id: str, run_id: str) -> RunState:
        self._require(self.threads, thread_id, "thread")
        return RunState(id=run_id, status="completed")

    def list_messages(self, *, thread_id: str) -> list[ThreadMessage]:
        return list(reversed(self._require(self.threads, thread_id, "thread")))

    def delete_assistant(self, assistant_id: str) -> None:
        self._require(self.assistants, assistant_id, "assistant")
        del self.assistants[assistant_id]

    def delete_vector_store(self, vector_store_id: str) -> None:
        self._require(self.vector_stores, vector_store_id, "vector store")
        del self.vector_stores[vector_store_id]

    def delete_file(self, file_id: str) -> None:
        self._require(self.files, file_id, "file")
        del self.files[file_id]

    def delete_thread(self, thread_id: str) -> None:
        self._require(self.threads, thread_id, "thread")
        del self.threads[thread_id]

    def _next_id(self, prefix: str) -> str:
        return f"{prefix}_example_{next(self._ids)}"

    @staticmethod
    def _require(store: dict[str, T], key: str, kind: str) -> T:
        if key not in store:
            raise BackendFailureError(f"Example backend has no {kind} {key}")
        return store[key]
