"""Application settings loaded from environment variables."""

import os

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def _env_file() -> str | None:
    if os.getenv("PYTEST_CURRENT_TEST"):
        return None
    return ".env"


class Settings(BaseSettings):
    """ghhook configuration. All values come from environment variables."""

    # Dispatch
    github_event_header: str = Field(default="X-GitHub-Event")

    # HTTP server
    webhook_host: str = Field(default="0.0.0.0")
    webhook_port: int = Field(default=8080)
    webhook_path: str = Field(default="/webhooks/github")

    # Modules imported at start-up so their handlers register
    handler_modules: str = Field(default="")

    # Logging
    log_level: str = Field(default="INFO")

    model_config = SettingsConfigDict(env_file=_env_file(), env_file_encoding="utf-8")

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        if os.getenv("PYTEST_CURRENT_TEST"):
            return (init_settings,)
        return (init_settings, env_settings, dotenv_settings, file_secret_settings)

    def get_handler_modules(self) -> list[str]:
        """Parse HANDLER_MODULES into a list of import paths."""
        if not self.handler_modules.strip():
            return []
        return [name.strip() for name in self.handler_modules.split(",") if name.strip()]


settings = Settings()
