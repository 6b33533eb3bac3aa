from unittest.mock import MagicMock

import pytest

from app.assistants.base import BaseAssistantsBackend
from app.assistants.models import RunState, ThreadMessage
from app.processor.exceptions import IncompleteConversationError, PollTimeoutError, RunFailedError
from app.processor.models import CreatedResources
from app.processor.run_driver import ClassificationRunDriver

QUESTION = "What type of insurance document is this?"
REPLY = "Based on the content, this is a Certificate of Insurance."


def _conversation() -> list[ThreadMessage]:
    return [
        ThreadMessage(id="msg_2", role="assistant", text=REPLY),
        ThreadMessage(id="msg_1", role="user", text=QUESTION),
    ]


def _make_driver(
    run_statuses: list[str] | None = None,
    message_batches: list[list[ThreadMessage]] | None = None,
    run_timeout_seconds: float | None = None,
) -> tuple[ClassificationRunDriver, MagicMock]:
    backend = MagicMock(spec=BaseAssistantsBackend)
    backend.create_thread.return_value = "thread_1"
    backend.create_run.return_value = RunState(id="run_1", status="queued")
    backend.retrieve_run.side_effect = [
        RunState(
            id="run_1",
            status=s,
            last_error="rate_limit_exceeded: quota" if s == "failed" else None,
        )
        for s in (run_statuses or ["completed"])
    ]
    backend.list_messages.side_effect = message_batches or [_conversation()]
    driver = ClassificationRunDriver(
        backend=backend,
        question=QUESTION,
        temperature=0.01,
        poll_interval_seconds=0.1,
        run_timeout_seconds=run_timeout_seconds,
        message_max_retries=10,
    )
    return driver, backend


class TestRunConversation:
    def test_returns_latest_message_text(self, no_sleep: MagicMock) -> None:
        driver, _backend = _make_driver()
        assert driver.run("asst_1") == REPLY

    def test_seeds_thread_and_starts_run(self, no_sleep: MagicMock) -> None:
        driver, backend = _make_driver()

        driver.run("asst_1")

        backend.create_thread.assert_called_once_with(question=QUESTION)
        backend.create_run.assert_called_once_with(
            thread_id="thread_1", assistant_id="asst_1", temperature=0.01
        )

    def test_records_thread_id(self, no_sleep: MagicMock) -> None:
        driver, _backend = _make_driver()
        created = CreatedResources()

        driver.run("asst_1", created)

        assert created.thread_id == "thread_1"


class TestRunPolling:
    def test_polls_while_pending(self, no_sleep: MagicMock) -> None:
        driver, backend = _make_driver(run_statuses=["queued", "in_progress", "completed"])

        driver.run("asst_1")

        assert backend.retrieve_run.call_count == 3

    def test_failed_run_raises_with_backend_detail(self, no_sleep: MagicMock) -> None:
        driver, backend = _make_driver(run_statuses=["in_progress", "failed"])

        with pytest.raises(RunFailedError, match="rate_limit_exceeded: quota"):
            driver.run("asst_1")

        backend.list_messages.assert_not_called()

    def test_other_terminal_status_ends_poll(self, no_sleep: MagicMock) -> None:
        driver, backend = _make_driver(run_statuses=["expired"])

        assert driver.run("asst_1") == REPLY
        backend.list_messages.assert_called_once_with(thread_id="thread_1")

    def test_run_timeout(self, no_sleep: MagicMock) -> None:
        driver, _backend = _make_driver(
            run_statuses=["in_progress"] * 5, run_timeout_seconds=0.0
        )

        with pytest.raises(PollTimeoutError):
            driver.run("asst_1")


class TestMessageRetrieval:
    def test_retries_until_reply_arrives(self, no_sleep: MagicMock) -> None:
        question_only = [ThreadMessage(id="msg_1", role="user", text=QUESTION)]
        driver, backend = _make_driver(
            message_batches=[question_only, question_only, _conversation()]
        )

        assert driver.run("asst_1") == REPLY
        assert backend.list_messages.call_count == 3

    def test_gives_up_after_ten_attempts(self, no_sleep: MagicMock) -> None:
        question_only = [ThreadMessage(id="msg_1", role="user", text=QUESTION)]
        driver, backend = _make_driver(message_batches=[question_only] * 20)

        with pytest.raises(IncompleteConversationError, match="required number of messages"):
            driver.run("asst_1")

        assert backend.list_messages.call_count == 10
