from pathlib import Path

from app.assistants.base import BaseAssistantsBackend
from app.assistants.factory import AssistantsBackendFactory
from app.config.settings import Settings
from app.logging.logger import Log
from app.pdf.pdfplumber_adapter import PdfPlumberValidator
from app.processor.exceptions import ClassificationError
from app.processor.models import ClassificationResult, UploadedDocument
from app.processor.pipeline import ClassificationContext, PipelineStep
from app.processor.provisioner import RemoteResourceProvisioner
from app.processor.run_driver import ClassificationRunDriver
from app.processor.steps import (
    CleanupRemoteResourcesStep,
    ExtractLabelStep,
    PersistUploadStep,
    ProvisionAssistantStep,
    ReleaseUploadStep,
    RunClassificationStep,
    ValidateDocumentStep,
)
from app.processor.temp_files import TransientFileManager
from app.taxonomy.label_extractor import LabelExtractor
from app.taxonomy.loader import load_taxonomy
from app.taxonomy.models import Taxonomy


class Processor:
    """Orchestrates one classification request.

    Pipeline: validate -> persist upload -> provision assistant -> run -> extract label.
    The cleanup steps always run afterwards, whatever happened.
    """

    def __init__(
        self,
        steps: list[PipelineStep],
        cleanup_steps: list[PipelineStep] | None = None,
    ) -> None:
        self._steps = steps
        self._cleanup_steps = cleanup_steps or []

    def classify(self, document: UploadedDocument) -> ClassificationResult:
        """Classify a document, raising a ClassificationError subclass on failure."""
        Log.info(f"Classifying '{document.filename}' ({document.size_bytes} bytes)")
        context = ClassificationContext(document=document)
        try:
            for step in self._steps:
                context = step.run(context)
        finally:
            for cleanup_step in self._cleanup_steps:
                context = cleanup_step.run(context)
        return ClassificationResult(
            label=context.label,
            reply_text=context.reply_text,
            filename=document.filename,
        )


def error_text(detail: object) -> str:
    return f"An error occurred: {detail}"


def report_error(exc: ClassificationError) -> str:
    """Log a classification failure and return the text shown to the caller."""
    Log.error(f"Error occurred while processing the file: {exc}")
    return error_text(exc)


def classify_to_text(processor: Processor, content: bytes, filename: str) -> str:
    """Return the label, or a human-readable error string for any classification failure."""
    try:
        return processor.classify(UploadedDocument(filename=filename, content=content)).label
    except ClassificationError as exc:
        return report_error(exc)


def build_processor(
    settings: Settings,
    backend: BaseAssistantsBackend | None = None,
    taxonomy: Taxonomy | None = None,
) -> Processor:
    """Build a Processor with all required adapters."""
    if backend is None:
        backend = AssistantsBackendFactory.create(settings)
    if taxonomy is None:
        taxonomy = load_taxonomy(Path(settings.taxonomy_path) if settings.taxonomy_path else None)

    file_manager = TransientFileManager(
        temp_dir=Path(settings.temp_dir) if settings.temp_dir else None
    )
    provisioner = RemoteResourceProvisioner(
        backend=backend,
        taxonomy=taxonomy,
        model=settings.openai_model_name,
        assistant_name=settings.assistant_name,
        vector_store_name=settings.vector_store_name,
        poll_interval_seconds=settings.poll_interval_seconds,
        indexing_timeout_seconds=settings.indexing_timeout_seconds,
    )
    run_driver = ClassificationRunDriver(
        backend=backend,
        question=taxonomy.question,
        temperature=settings.temperature,
        poll_interval_seconds=settings.poll_interval_seconds,
        run_timeout_seconds=settings.run_timeout_seconds,
        message_max_retries=settings.message_max_retries,
    )

    steps: list[PipelineStep] = []
    if settings.pdf_validation_enabled:
        steps.append(ValidateDocumentStep(PdfPlumberValidator()))
    steps += [
        PersistUploadStep(file_manager),
        ProvisionAssistantStep(provisioner),
        RunClassificationStep(run_driver),
        ExtractLabelStep(LabelExtractor(taxonomy)),
    ]
    cleanup_steps: list[PipelineStep] = [
        ReleaseUploadStep(file_manager),
        CleanupRemoteResourcesStep(backend, enabled=settings.cleanup_remote_resources),
    ]
    return Processor(steps=steps, cleanup_steps=cleanup_steps)
