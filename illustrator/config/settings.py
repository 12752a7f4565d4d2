from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    pdf_engine: str = "pymupdf"
    render_scale: float = 2.0

    storage_backend: str = "sqlite"
    storage_path: str = "illustrator.db"
    storage_key: str = "academic-illustrator-storage"

    db_host: str = "localhost"
    db_port: int = 5432
    db_database: str = "illustrator"
    db_username: str = "illustrator"
    db_password: str = "secret"

    max_history_items: int = 20

    generation_provider: str = "openai"
    generation_timeout_seconds: int = 60

    default_logic_base_url: str = "https://api.deepseek.com"
    default_logic_model_name: str = "deepseek-chat"
    default_vision_base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    default_vision_model_name: str = "gemini-3-pro-image-preview"
