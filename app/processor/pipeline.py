from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path

from app.processor.models import CreatedResources, ProvisionedAssistant, UploadedDocument


@dataclass(slots=True)
class ClassificationContext:
    document: UploadedDocument
    page_count: int | None = None
    local_path: Path | None = None
    created: CreatedResources = field(default_factory=CreatedResources)
    assistant: ProvisionedAssistant | None = None
    reply_text: str = ""
    label: str = ""


class PipelineStep(ABC):
    @abstractmethod
    def run(self, context: ClassificationContext) -> ClassificationContext:
        raise NotImplementedError
