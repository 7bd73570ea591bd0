"""Application configuration loaded from config.yaml."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml


@dataclass(frozen=True)
class LLMConfig:
    analysis_model: str = "claude-haiku-4-5-20251001"
    tailoring_model: str = "claude-sonnet-4-5-20250929"
    analysis_max_tokens: int = 2048
    tailoring_max_tokens: int = 4000
    timeout: int = 60
    max_attempts: int = 1

    def __post_init__(self) -> None:
        if self.timeout < 1:
            raise ValueError(f"llm.timeout must be >= 1, got {self.timeout}")
        if not 1 <= self.max_attempts <= 5:
            raise ValueError(f"llm.max_attempts must be 1-5, got {self.max_attempts}")


@dataclass(frozen=True)
class StoreConfig:
    db_path: str = "~/.job-tailor/store.db"

    @property
    def resolved_db_path(self) -> Path:
        return Path(self.db_path).expanduser()


@dataclass(frozen=True)
class PaymentConfig:
    delay_seconds: float = 2.0
    price_label: str = "$5.00"

    def __post_init__(self) -> None:
        if self.delay_seconds < 0:
            raise ValueError(f"payment.delay_seconds must be >= 0, got {self.delay_seconds}")


@dataclass(frozen=True)
class ExportConfig:
    header_threshold: int = 200


@dataclass(frozen=True)
class UploadConfig:
    max_mb: int = 5


@dataclass(frozen=True)
class UsageConfig:
    enabled: bool = True
    db_path: str = "~/.job-tailor/usage.db"

    @property
    def resolved_db_path(self) -> Path:
        return Path(self.db_path).expanduser()


@dataclass(frozen=True)
class AppConfig:
    llm: LLMConfig = field(default_factory=LLMConfig)
    store: StoreConfig = field(default_factory=StoreConfig)
    payment: PaymentConfig = field(default_factory=PaymentConfig)
    export: ExportConfig = field(default_factory=ExportConfig)
    upload: UploadConfig = field(default_factory=UploadConfig)
    usage: UsageConfig = field(default_factory=UsageConfig)


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load config from YAML file, falling back to defaults."""
    if path is None:
        candidates = [
            Path.cwd() / "config.yaml",
            Path(__file__).resolve().parent.parent.parent / "config.yaml",
        ]
        for c in candidates:
            if c.exists():
                path = c
                break

    raw: dict = {}
    if path is not None:
        p = Path(path)
        if p.exists():
            raw = yaml.safe_load(p.read_text()) or {}

    return AppConfig(
        llm=LLMConfig(**raw.get("llm", {})),
        store=StoreConfig(**raw.get("store", {})),
        payment=PaymentConfig(**raw.get("payment", {})),
        export=ExportConfig(**raw.get("export", {})),
        upload=UploadConfig(**raw.get("upload", {})),
        usage=UsageConfig(**raw.get("usage", {})),
    )
