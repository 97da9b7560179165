from functools import lru_cache

from pydantic_settings import BaseSettings

VERSION = "0.1.0"


class Settings(BaseSettings):
    host: str = "127.0.0.1"
    port: int = 9000
    log_level: str = "INFO"
    mattermost_url: str = "http://localhost:8065"
    mattermost_token: str = ""
    site_url: str = ""
    request_timeout: float = 10.0
    enable_move_route: bool = False

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    @property
    def permalink_base(self) -> str:
        return self.site_url or self.mattermost_url


@lru_cache
def get_settings() -> Settings:
    return Settings()
