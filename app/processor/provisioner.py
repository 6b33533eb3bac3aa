from pathlib import Path

from app.assistants.base import BaseAssistantsBackend
from app.assistants.models import VectorStoreFileState
from app.logging.logger import Log
from app.processor.exceptions import IndexingFailedError
from app.processor.models import CreatedResources, ProvisionedAssistant
from app.processor.polling import poll_until
from app.taxonomy.models import Taxonomy

INDEXING_PENDING_STATUSES = frozenset({"processing", "in_progress"})
INDEXING_FAILED_STATUSES = frozenset({"failed", "cancelled"})


class RemoteResourceProvisioner:
    """Creates an assistant bound to a vector store that indexes one uploaded file."""

    def __init__(
        self,
        *,
        backend: BaseAssistantsBackend,
        taxonomy: Taxonomy,
        model: str,
        assistant_name: str,
        vector_store_name: str,
        poll_interval_seconds: float,
        indexing_timeout_seconds: float | None,
    ) -> None:
        self._backend = backend
        self._taxonomy = taxonomy
        self._model = model
        self._assistant_name = assistant_name
        self._vector_store_name = vector_store_name
        self._poll_interval_seconds = poll_interval_seconds
        self._indexing_timeout_seconds = indexing_timeout_seconds

    def provision(
        self,
        local_path: Path,
        created: CreatedResources | None = None,
    ) -> ProvisionedAssistant:
        """Run the provisioning sequence for ``local_path``.

        Ids are written to ``created`` as soon as each resource exists so the
        caller can clean up after a partial failure.

        Raises:
            BackendFailureError: if any backend call fails.
            IndexingFailedError: if indexing ends in a failure status.
            PollTimeoutError: if indexing does not finish in time.
        """
        if created is None:
            created = CreatedResources()

        assistant_id = self._backend.create_assistant(
            name=self._assistant_name,
            model=self._model,
            instructions=self._taxonomy.instructions,
        )
        created.assistant_id = assistant_id
        Log.info(f"Created assistant {assistant_id}")

        vector_store_id = self._backend.create_vector_store(name=self._vector_store_name)
        created.vector_store_id = vector_store_id
        Log.info(f"Created vector store {vector_store_id}")

        file_id = self._backend.upload_file(local_path)
        created.file_id = file_id
        Log.info(f"Uploaded file {file_id}")

        self._backend.add_file_to_vector_store(
            vector_store_id=vector_store_id,
            file_id=file_id,
        )
        state = self._wait_for_indexing(vector_store_id, file_id)
        Log.info(f"File {file_id} indexed with status '{state.status}'")

        self._backend.attach_vector_store(
            assistant_id=assistant_id,
            vector_store_id=vector_store_id,
        )
        return ProvisionedAssistant(
            assistant_id=assistant_id,
            vector_store_id=vector_store_id,
            file_id=file_id,
        )

    def _wait_for_indexing(self, vector_store_id: str, file_id: str) -> VectorStoreFileState:
        return poll_until(
            lambda: self._backend.retrieve_vector_store_file(
                vector_store_id=vector_store_id,
                file_id=file_id,
            ),
            is_pending=lambda state: state.status in INDEXING_PENDING_STATUSES,
            is_failure=lambda state: state.status in INDEXING_FAILED_STATUSES,
            on_failure=lambda state: IndexingFailedError(
                f"Indexing of file {file_id} ended with status '{state.status}': "
                f"{state.last_error or 'no error detail'}"
            ),
            interval_seconds=self._poll_interval_seconds,
            timeout_seconds=self._indexing_timeout_seconds,
            delay_first=True,
            description=f"vector store file {file_id}",
        )
