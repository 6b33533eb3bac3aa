import uvicorn

from app.api.server import create_app
from app.config.settings import Settings
from app.logging.logger import Log


def main() -> None:
    """Entry point: load settings -> configure logging -> build app -> serve."""
    settings = Settings()
    Log.configure(settings.log_level)
    Log.info(
        f"Starting document classifier (env={settings.app_env}, "
        f"provider={settings.assistants_provider}, model={settings.openai_model_name})"
    )
    app = create_app(settings)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
