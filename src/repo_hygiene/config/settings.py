"""Application settings using Pydantic Settings."""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="REPO_HYGIENE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # General
    log_level: str = "WARNING"

    # Git
    git_executable: str = "git"

    # --- Remote access ---
    ssh_command: str = "ssh"
    ssh_dir: str = "~/.ssh"
    # Private keys tried in order by the ssh-key strategy
    ssh_key_names: list[str] = ["id_ed25519", "id_ecdsa", "id_rsa", "id_dsa"]
    # Seconds allowed for listing remote references; None waits forever
    remote_timeout: float | None = None

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self.ssh_dir = str(Path(self.ssh_dir).expanduser())

    @property
    def ssh_key_candidates(self) -> list[Path]:
        return [Path(self.ssh_dir) / name for name in self.ssh_key_names]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
