from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


_PACKAGED_STATIC_DIR = Path(__file__).parent / "static"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_json: bool = Field(default=True, alias="LOG_JSON")

    request_id_header: str = Field(default="x-request-id", alias="REQUEST_ID_HEADER")
    request_id_max_length: int = Field(default=128, alias="REQUEST_ID_MAX_LENGTH")

    user_api_base_url: str = Field(default="https://jsonplaceholder.typicode.com", alias="USER_API_BASE_URL")
    user_api_timeout_seconds: float = Field(default=10.0, alias="USER_API_TIMEOUT_SECONDS")

    sse_interval_seconds: float = Field(default=1.0, alias="SSE_INTERVAL_SECONDS")
    static_dir: str = Field(default="", alias="STATIC_DIR")

    host: str = Field(default="127.0.0.1", alias="HOST")
    port: int = Field(default=3000, alias="PORT")

    @property
    def static_path(self) -> Path:
        if self.static_dir:
            return Path(self.static_dir)
        return _PACKAGED_STATIC_DIR


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
