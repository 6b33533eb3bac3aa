from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    host: str = "0.0.0.0"
    port: int = 8080
    max_upload_size_mb: int = 20

    assistants_provider: str = "openai"
    openai_api_key: str = ""
    openai_base_url: str | None = None
    openai_model_name: str = "gpt-3.5-turbo"
    openai_timeout_seconds: int = 30

    assistant_name: str = "Insurance Document Classifier"
    vector_store_name: str = "Insurance Document Classifier"
    temperature: float = 0.01

    poll_interval_seconds: float = 0.1
    indexing_timeout_seconds: float = 300.0
    run_timeout_seconds: float = 300.0
    message_max_retries: int = 10

    taxonomy_path: str | None = None
    temp_dir: str | None = None
    cleanup_remote_resources: bool = True
    pdf_validation_enabled: bool = True

    example_reply: str = "UNKNOWN"
