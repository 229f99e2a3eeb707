from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Logging
    log_level: str = "INFO"
    log_dir: str | None = None
    log_max_bytes: int = 10 * 1024 * 1024
    log_backup_count: int = 5

    # Interception
    root_namespaces: list[str] = []
    swallow_errors: bool = False  # reproduce the legacy suppress-and-return-None policy
    targets: list[str] = []  # "pkg.module:Qual.name=LEVEL"

    model_config = {"env_prefix": "LOGEXEC_", "env_file": ".env", "extra": "ignore"}


settings = Settings()
