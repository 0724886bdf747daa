from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # --- OpenAI (report generation) ---
    openai_api_key: str = ""
    openai_model: str = "gpt-4o-mini"
    openai_expert_model: str = "o1-mini"
    openai_max_completion_tokens: int = 2500

    # --- Deepgram (server transcription) ---
    deepgram_api_key: str = ""
    deepgram_model: str = "nova-2"
    deepgram_language: str = "de-CH"

    # --- Local SQLite ---
    sqlite_db_path: Path = Path("data/befundtool.db")

    # --- Web interface ---
    web_host: str = "127.0.0.1"
    web_port: int = 8080

    app_version: str = "BefundTool v0.9.6"

    @property
    def sqlite_url(self) -> str:
        return f"sqlite:///{self.sqlite_db_path}"

    @property
    def llm_configured(self) -> bool:
        return bool(self.openai_api_key.strip())


settings = Settings()
