"""CareAssist configuration — loaded from environment variables / .env file."""

from typing import Literal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Ollama connection
    ollama_host: str = "http://localhost:11434"
    request_timeout_seconds: float = 120.0
    health_probe_timeout_seconds: float = 5.0

    # Models
    chat_model: str = "mistral"
    stream_model: str = "nemotron-mini"

    # Streaming generation options (passed through to the model server)
    stream_temperature: float = 0.7
    stream_top_k: int = 40
    stream_top_p: float = 0.9
    stream_num_ctx: int = 512
    stream_repeat_penalty: float = 1.1

    # Retry / recovery
    retry_max_attempts: int = 3
    retry_base_delay_seconds: float = 1.0
    recovery_enabled: bool = True
    ollama_executable: str = ""

    # Conversation settings
    confirmation_match: Literal["substring", "word"] = "substring"

    # Service settings
    agent_port: int = 8000
    request_db_path: str = "/app/data/requests.db"
    log_dir: str = "/app/logs"

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
