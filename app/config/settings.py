from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", frozen=True)

    app_env: str = "dev"
    log_level: str = "INFO"

    host: str = "0.0.0.0"
    port: int = 3000
    cors_allowed_origins: list[str] = ["*"]

    max_upload_bytes: int = 5 * 1024 * 1024
    allowed_content_types: list[str] = ["application/pdf"]

    storage_backend: str = "local"
    storage_local_root: str = "/app/files"
    storage_public_base_url: str = "http://localhost:3000/files"
    storage_gcs_bucket: str = ""
    storage_gcs_credentials_file: str = ""

    pdf_engine: str = "pdfplumber"

    analysis_provider: str = "openai"
    analysis_api_key: str = ""
    analysis_model_name: str = "gpt-4"
    analysis_base_url: str = ""
    analysis_timeout_seconds: int = 30
    analysis_temperature: float = 0.7
    analysis_max_tokens: int = 2500

    resume_registry_enabled: bool = False
    db_host: str = "host.docker.internal"
    db_port: int = 5432
    db_database: str = "resumes"
    db_username: str = "resumes"
    db_password: str = "secret"
