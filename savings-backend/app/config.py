from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parent


class Settings(BaseSettings):
    use_mocks: bool = True
    simulate_latency: bool = False
    latency_ms: int = 150
    log_level: str = "INFO"
    mock_seed: Optional[int] = None
    assistant_chunk_size: int = 10
    assistant_chunk_delay_ms: int = 50
    fixture_dir: Optional[Path] = None

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def model_post_init(self, __context):
        if self.fixture_dir is None:
            self.fixture_dir = BASE_DIR / "fixtures"
        if self.assistant_chunk_size < 1:
            self.assistant_chunk_size = 1

settings = Settings()
