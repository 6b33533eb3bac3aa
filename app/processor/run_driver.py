from app.assistants.base import BaseAssistantsBackend
from app.assistants.models import RunState, ThreadMessage
from app.logging.logger import Log
from app.processor.exceptions import (
    IncompleteConversationError,
    PollTimeoutError,
    RunFailedError,
)
from app.processor.models import CreatedResources
from app.processor.polling import poll_until

RUN_PENDING_STATUSES = frozenset({"queued", "in_progress", "cancelling"})
RUN_FAILED_STATUS = "failed"
# The seeded question plus at least one reply.
REQUIRED_MESSAGE_COUNT = 2


class ClassificationRunDriver:
    """Asks the classification question on a fresh thread and returns the reply text."""

    def __init__(
        self,
        *,
        backend: BaseAssistantsBackend,
        question: str,
        temperature: float,
        poll_interval_seconds: float,
        run_timeout_seconds: float | None,
        message_max_retries: int,
    ) -> None:
        self._backend = backend
        self._question = question
        self._temperature = temperature
        self._poll_interval_seconds = poll_interval_seconds
        self._run_timeout_seconds = run_timeout_seconds
        self._message_max_retries = message_max_retries

    def run(self, assistant_id: str, created: CreatedResources | None = None) -> str:
        """Return the text of the assistant's most recent message.

        Raises:
            BackendFailureError: if any backend call fails.
            RunFailedError: if the run ends in the failed status.
            PollTimeoutError: if the run does not finish in time.
            IncompleteConversationError: if the reply never shows up.
        """
        thread_id = self._backend.create_thread(question=self._question)
        if created is not None:
            created.thread_id = thread_id
        Log.info(f"Created thread {thread_id}")

        run = self._backend.create_run(
            thread_id=thread_id,
            assistant_id=assistant_id,
            temperature=self._temperature,
        )
        Log.info(f"Started run {run.id} on thread {thread_id}")
        self._wait_for_run(thread_id, run.id)

        messages = self._retrieve_messages(thread_id)
        return messages[0].text

    def _wait_for_run(self, thread_id: str, run_id: str) -> RunState:
        def fetch() -> RunState:
            state = self._backend.retrieve_run(thread_id=thread_id, run_id=run_id)
            Log.info(f"Run status: {state.status}")
            return state

        def failed(state: RunState) -> RunFailedError:
            Log.error(f"Run failed: {state.last_error}")
            return RunFailedError(f"Run failed: {state.last_error}")

        return poll_until(
            fetch,
            is_pending=lambda state: state.status in RUN_PENDING_STATUSES,
            is_failure=lambda state: state.status == RUN_FAILED_STATUS,
            on_failure=failed,
            interval_seconds=self._poll_interval_seconds,
            timeout_seconds=self._run_timeout_seconds,
            delay_first=True,
            description=f"run {run_id}",
        )

    def _retrieve_messages(self, thread_id: str) -> list[ThreadMessage]:
        try:
            return poll_until(
                lambda: self._backend.list_messages(thread_id=thread_id),
                is_pending=lambda messages: len(messages) < REQUIRED_MESSAGE_COUNT,
                interval_seconds=self._poll_interval_seconds,
                max_attempts=self._message_max_retries,
                description=f"messages of thread {thread_id}",
            )
        except PollTimeoutError as exc:
            raise IncompleteConversationError(
                "Failed to get the required number of messages."
            ) from exc
