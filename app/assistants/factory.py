from app.assistants.base import BaseAssistantsBackend
from app.assistants.example_backend import ExampleAssistantsBackend
from app.assistants.openai_backend import OpenAIAssistantsBackend
from app.config.settings import Settings


class AssistantsBackendFactory:
    """Creates the configured assistants backend."""

    PROVIDERS = ("example", "openai", "openai_compatible")

    @classmethod
    def create(cls, settings: Settings) -> BaseAssistantsBackend:
        """Create a configured backend from application settings."""
        provider = settings.assistants_provider.lower()
        if provider == "example":
            return ExampleAssistantsBackend(reply=settings.example_reply)
        if provider not in cls.PROVIDERS:
            raise ValueError(
                f"Unknown assistants provider '{provider}'. Choose from: {list(cls.PROVIDERS)}"
            )
        return OpenAIAssistantsBackend(
            api_key=settings.openai_api_key,
            timeout_seconds=settings.openai_timeout_seconds,
            base_url=cls._resolve_base_url(provider, settings),
        )

    @classmethod
    def _resolve_base_url(cls, provider: str, settings: Settings) -> str | None:
        url = (settings.openai_base_url or "").strip()
        if provider == "openai":
            return url or None
        if not url:
            raise ValueError(
                "openai_base_url is required for assistants_provider=openai_compatible"
            )
        return url
