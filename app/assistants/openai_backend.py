from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar

import httpx
import openai

from app.assistants.base import BaseAssistantsBackend
from app.assistants.models import RunState, ThreadMessage, VectorStoreFileState
from app.processor.exceptions import BackendFailureError

T = TypeVar("T")


class OpenAIAssistantsBackend(BaseAssistantsBackend):
    """Assistants backend built on the OpenAI Assistants and Vector Stores APIs."""

    FILE_PURPOSE = "assistants"

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        base_url: str | None = None,
    ) -> None:
        self._client = openai.OpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
        )

    def create_assistant(self, *, name: str, model: str, instructions: str) -> str:
        assistant = self._call(
            "create assistant",
            lambda: self._client.beta.assistants.create(
                name=name,
                model=model,
                instructions=instructions,
                tools=[{"type": "file_search"}],
            ),
        )
        return self._require_id(assistant, "assistant")

    def create_vector_store(self, *, name: str) -> str:
        vector_store = self._call(
            "create vector store",
            lambda: self._client.vector_stores.create(name=name),
        )
        return self._require_id(vector_store, "vector store")

    def upload_file(self, path: Path) -> str:
        uploaded = self._call(
            "upload file",
            lambda: self._client.files.create(file=path, purpose=self.FILE_PURPOSE),
        )
        return self._require_id(uploaded, "file")

    def add_file_to_vector_store(
        self, *, vector_store_id: str, file_id: str
    ) -> VectorStoreFileState:
        vs_file = self._call(
            "add file to vector store",
            lambda: self._client.vector_stores.files.create(
                vector_store_id=vector_store_id,
                file_id=file_id,
            ),
        )
        return self._to_vector_store_file_state(vs_file)

    def retrieve_vector_store_file(
        self, *, vector_store_id: str, file_id: str
    ) -> VectorStoreFileState:
        vs_file = self._call(
            "retrieve vector store file",
            lambda: self._client.vector_stores.files.retrieve(
                file_id,
                vector_store_id=vector_store_id,
            ),
        )
        return self._to_vector_store_file_state(vs_file)

    def attach_vector_store(self, *, assistant_id: str, vector_store_id: str) -> None:
        self._call(
            "update assistant",
            lambda: self._client.beta.assistants.update(
                assistant_id,
                tool_resources={"file_search": {"vector_store_ids": [vector_store_id]}},
            ),
        )

    def create_thread(self, *, question: str) -> str:
        thread = self._call(
            "create thread",
            lambda: self._client.beta.threads.create(
                messages=[{"role": "user", "content": question}],
            ),
        )
        return self._require_id(thread, "thread")

    def create_run(
        self, *, thread_id: str, assistant_id: str, temperature: float
    ) -> RunState:
        run = self._call(
            "create run",
            lambda: self._client.beta.threads.runs.create(
                thread_id=thread_id,
                assistant_id=assistant_id,
                temperature=temperature,
            ),
        )
        return self._to_run_state(run)

    def retrieve_run(self, *, thread_id: str, run_id: str) -> RunState:
        run = self._call(
            "retrieve run",
            lambda: self._client.beta.threads.runs.retrieve(run_id, thread_id=thread_id),
        )
        return self._to_run_state(run)

    def list_messages(self, *, thread_id: str) -> list[ThreadMessage]:
        page = self._call(
            "list messages",
            lambda: self._client.beta.threads.messages.list(thread_id, order="desc"),
        )
        data = getattr(page, "data", None)
        if data is None:
            raise BackendFailureError("AI provider returned no message list")
        return [self._to_thread_message(message) for message in data]

    def delete_assistant(self, assistant_id: str) -> None:
        self._call(
            "delete assistant",
            lambda: self._client.beta.assistants.delete(assistant_id),
        )

    def delete_vector_store(self, vector_store_id: str) -> None:
        self._call(
            "delete vector store",
            lambda: self._client.vector_stores.delete(vector_store_id),
        )

    def delete_file(self, file_id: str) -> None:
        self._call("delete file", lambda: self._client.files.delete(file_id))

    def delete_thread(self, thread_id: str) -> None:
        self._call("delete thread", lambda: self._client.beta.threads.delete(thread_id))

    @staticmethod
    def _call(action: str, request: Callable[[], T]) -> T:
        try:
            return request()
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise BackendFailureError(
                f"AI provider network error during {action}: {exc}"
            ) from exc
        except openai.APIError as exc:
            raise BackendFailureError(
                f"AI provider API error during {action}: {exc}"
            ) from exc

    @staticmethod
    def _require_id(obj: Any, kind: str) -> str:
        obj_id = getattr(obj, "id", None)
        if not obj_id:
            raise BackendFailureError(f"AI provider returned {kind} without an id")
        return str(obj_id)

    @classmethod
    def _to_vector_store_file_state(cls, vs_file: Any) -> VectorStoreFileState:
        status = getattr(vs_file, "status", None)
        if not status:
            raise BackendFailureError("AI provider returned vector store file without a status")
        return VectorStoreFileState(
            id=cls._require_id(vs_file, "vector store file"),
            status=str(status),
            last_error=cls._format_error(getattr(vs_file, "last_error", None)),
        )

    @classmethod
    def _to_run_state(cls, run: Any) -> RunState:
        status = getattr(run, "status", None)
        if not status:
            raise BackendFailureError("AI provider returned run without a status")
        return RunState(
            id=cls._require_id(run, "run"),
            status=str(status),
            last_error=cls._format_error(getattr(run, "last_error", None)),
        )

    @classmethod
    def _to_thread_message(cls, message: Any) -> ThreadMessage:
        parts: list[str] = []
        for block in getattr(message, "content", None) or []:
            if getattr(block, "type", None) == "text":
                parts.append(block.text.value)
        return ThreadMessage(
            id=cls._require_id(message, "message"),
            role=str(getattr(message, "role", "")),
            text="\n".join(parts),
        )

    @staticmethod
    def _format_error(error: Any) -> str | None:
        if error is None:
            return None
        code = getattr(error, "code", None)
        message = getattr(error, "message", None)
        if code and message:
            return f"{code}: {message}"
        return str(message or code or error)
