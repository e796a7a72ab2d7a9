from pydantic_settings import BaseSettings, SettingsConfigDict

_DEFAULT_CHAR_WHITELIST = (
    "0123456789"
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
    "abcdefghijklmnopqrstuvwxyz"
    " .,()-/"
)


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    db_host: str = "host.docker.internal"
    db_port: int = 5432
    db_database: str = "shipscan"
    db_username: str = "shipscan"
    db_password: str = "secret"
    db_pool_min_size: int = 1
    db_pool_max_size: int = 10

    ocr_tesseract_cmd: str | None = None
    ocr_language: str = "eng"
    ocr_psm: int = 3
    ocr_char_whitelist: str = _DEFAULT_CHAR_WHITELIST
    ocr_pdf_dpi: int = 300

    extraction_provider: str = "mistral"
    extraction_api_key: str = ""
    extraction_model_name: str = "mistral-small-latest"
    extraction_base_url: str | None = None
    extraction_temperature: float = 0.1
    extraction_max_tokens: int = 1000
    extraction_timeout_seconds: int = 30

    upload_max_file_size_bytes: int = 5 * 1024 * 1024
    upload_allowed_mime_types: list[str] = [
        "image/jpeg",
        "image/jpg",
        "image/png",
        "application/pdf",
    ]
