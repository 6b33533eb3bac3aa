from collections.abc import Callable

from app.assistants.base import BaseAssistantsBackend
from app.logging.logger import Log
from app.pdf.base import BasePdfValidator
from app.processor.pipeline import ClassificationContext, PipelineStep
from app.processor.provisioner import RemoteResourceProvisioner
from app.processor.run_driver import ClassificationRunDriver
from app.processor.temp_files import TransientFileManager
from app.taxonomy.label_extractor import LabelExtractor


class ValidateDocumentStep(PipelineStep):
    def __init__(self, validator: BasePdfValidator) -> None:
        self._validator = validator

    def run(self, context: ClassificationContext) -> ClassificationContext:
        context.page_count = self._validator.validate(context.document.content)
        Log.info(
            f"Validated '{context.document.filename}': {context.page_count} page(s)"
        )
        return context


class PersistUploadStep(PipelineStep):
    def __init__(self, file_manager: TransientFileManager) -> None:
        self._file_manager = file_manager

    def run(self, context: ClassificationContext) -> ClassificationContext:
        context.local_path = self._file_manager.acquire(context.document)
        return context


class ProvisionAssistantStep(PipelineStep):
    def __init__(self, provisioner: RemoteResourceProvisioner) -> None:
        self._provisioner = provisioner

    def run(self, context: ClassificationContext) -> ClassificationContext:
        if context.local_path is None:
            raise ValueError("ClassificationContext.local_path must be set before provisioning")
        context.assistant = self._provisioner.provision(context.local_path, context.created)
        return context


class RunClassificationStep(PipelineStep):
    def __init__(self, run_driver: ClassificationRunDriver) -> None:
        self._run_driver = run_driver

    def run(self, context: ClassificationContext) -> ClassificationContext:
        if context.assistant is None:
            raise ValueError("ClassificationContext.assistant must be set before the run")
        context.reply_text = self._run_driver.run(
            context.assistant.assistant_id, context.created
        )
        return context


class ExtractLabelStep(PipelineStep):
    def __init__(self, label_extractor: LabelExtractor) -> None:
        self._label_extractor = label_extractor

    def run(self, context: ClassificationContext) -> ClassificationContext:
        context.label = self._label_extractor.extract(context.reply_text)
        Log.info(f"Classified '{context.document.filename}' as '{context.label}'")
        return context


class ReleaseUploadStep(PipelineStep):
    """Removes the transient local file. Never raises."""

    def __init__(self, file_manager: TransientFileManager) -> None:
        self._file_manager = file_manager

    def run(self, context: ClassificationContext) -> ClassificationContext:
        self._file_manager.release(context.local_path)
        context.local_path = None
        return context


class CleanupRemoteResourcesStep(PipelineStep):
    """Deletes backend resources created for the request, or logs them when retained.

    Deletion errors are logged and never raised.
    """

    def __init__(self, backend: BaseAssistantsBackend, enabled: bool = True) -> None:
        self._backend = backend
        self._enabled = enabled

    def run(self, context: ClassificationContext) -> ClassificationContext:
        created = context.created
        if not self._enabled:
            Log.info(
                "Retaining backend resources: "
                f"assistant={created.assistant_id} vector_store={created.vector_store_id} "
                f"file={created.file_id} thread={created.thread_id}"
            )
            return context

        if created.assistant_id:
            self._delete("assistant", created.assistant_id, self._backend.delete_assistant)
        if created.vector_store_id:
            self._delete(
                "vector store", created.vector_store_id, self._backend.delete_vector_store
            )
        if created.file_id:
            self._delete("file", created.file_id, self._backend.delete_file)
        if created.thread_id:
            self._delete("thread", created.thread_id, self._backend.delete_thread)
        return context

    @staticmethod
    def _delete(kind: str, resource_id: str, delete: Callable[[str], None]) -> None:
        try:
            delete(resource_id)
            Log.info(f"Deleted {kind} {resource_id}")
        except Exception as exc:
            Log.error(f"Error deleting {kind} {resource_id}: {exc}")
