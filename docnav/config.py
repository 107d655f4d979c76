from pathlib import Path

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Docs tree settings
    docs_path: Path | None = None
    docs_folder_name: str = "docs"
    docs_glob: str = "**/*.md"
    ignore_dirs: tuple[str, ...] = ("node_modules", ".git")

    # Retrieval settings
    default_search_limit: int = 10
    related_per_type: int = 3
    outdated_after_days: int = 365
    excerpt_chars: int = 200

    log_level: str = "INFO"  # Can be DEBUG, INFO, WARNING, ERROR, CRITICAL


settings = Settings()
