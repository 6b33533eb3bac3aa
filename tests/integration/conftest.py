import os
from pathlib import Path

import pytest

from app.config.settings import Settings


@pytest.fixture
def example_settings(tmp_path: Path) -> Settings:
    return Settings(
        assistants_provider="example",
        temp_dir=str(tmp_path),
        poll_interval_seconds=0.0,
    )


@pytest.fixture
def openai_settings(tmp_path: Path) -> Settings:
    if not os.getenv("OPENAI_API_KEY"):
        pytest.skip("OPENAI_API_KEY not set; live classification tests need a real API key")
    return Settings(
        assistants_provider="openai",
        temp_dir=str(tmp_path),
        cleanup_remote_resources=True,
    )
