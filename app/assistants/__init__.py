from app.assistants.base import BaseAssistantsBackend
from app.assistants.example_backend import ExampleAssistantsBackend
from app.assistants.factory import AssistantsBackendFactory
from app.assistants.openai_backend import OpenAIAssistantsBackend

__all__ = [
    "AssistantsBackendFactory",
    "BaseAssistantsBackend",
    "ExampleAssistantsBackend",
    "OpenAIAssistantsBackend",
]
