"""Configuration management for the application."""

import json
from pathlib import Path

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class EvidenceConfig(BaseSettings):
    """Evidence upload configuration."""

    upload_prefix: str = "skill-evidence"
    max_file_size_bytes: int = 10 * 1024 * 1024
    default_accepted_file_types: list[str] = [".pdf", ".doc", ".docx", ".jpg", ".jpeg", ".png"]

    @classmethod
    def from_file(cls, filepath: str = "config/evidence.json") -> "EvidenceConfig":
        """
        Load evidence configuration from JSON file.

        Falls back to the defaults when the file does not exist, so the
        service can start from any working directory.

        Args:
            filepath: Path to the configuration file

        Returns:
            EvidenceConfig instance
        """
        if not Path(filepath).exists():
            return cls()
        with open(filepath, "r") as f:
            data = json.load(f)
        return cls(**data)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Data root: the SQLite DB and uploaded evidence live here (outside the repo)
    data_root: str = Field(default="~/Documents/turf_talent")

    # Database, auto-derived from data_root if not explicitly set
    database_url: str | None = Field(default=None)

    # Evidence blob root, auto-derived from data_root if not explicitly set
    evidence_root: str | None = Field(default=None)

    # Backend Server
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(default=8000)
    api_prefix: str = Field(default="/api")
    log_level: str = Field(default="INFO")

    # Frontend
    frontend_url: str = Field(default="http://localhost:5173")

    @model_validator(mode="after")
    def derive_paths(self) -> "Settings":
        """Expand data_root and derive database_url / evidence_root if not explicitly set."""
        self.data_root = str(Path(self.data_root).expanduser().resolve())
        if self.database_url is None:
            self.database_url = f"sqlite:///{self.data_root}/turf_talent.db"
        if self.evidence_root is None:
            self.evidence_root = str(Path(self.data_root) / "evidence")
        return self


# Global settings instance
settings = Settings()

# Load configurations
evidence_config = EvidenceConfig.from_file()
