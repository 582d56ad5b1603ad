from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    db_host: str = "host.docker.internal"
    db_port: int = 5432
    db_database: str = "receipts"
    db_username: str = "receipts"
    db_password: str = "secret"
    database_url: str = ""
    db_pool_max_size: int = 4
    db_pool_timeout_seconds: float = 10.0

    max_job_attempts: int = 5
    batch_size: int = 10
    processor_version: str = "textract-worker-prod-v1"

    ocr_engine: str = "textract"
    storage_backend: str = "s3"

    aws_region: str = "us-east-1"
    artifact_bucket: str = ""
    source_bucket: str = ""
    local_storage_root: str = "/app/files"

    remote_storage_url_marker: str = "supabase.co/storage"
    remote_storage_service_key: str = ""
    remote_storage_timeout_seconds: int = 30
