"""Application configuration loaded from config.yaml."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml

PAGE_SIZES = ("A4", "Letter")


@dataclass(frozen=True)
class RegistrarConfig:
    api_url: str = "https://api.dev.name.com"
    timeout: int = 30

    def __post_init__(self) -> None:
        if not 1 <= self.timeout <= 300:
            raise ValueError(f"registrar.timeout must be between 1 and 300, got {self.timeout}")
        if not self.api_url.startswith(("http://", "https://")):
            raise ValueError(f"registrar.api_url must be an http(s) URL, got {self.api_url!r}")


@dataclass(frozen=True)
class AssistConfig:
    model: str = "claude-haiku-4-5-20251001"
    timeout: int = 60
    max_tokens: int = 1024

    def __post_init__(self) -> None:
        if not 1 <= self.timeout <= 600:
            raise ValueError(f"assist.timeout must be between 1 and 600, got {self.timeout}")
        if not 1 <= self.max_tokens <= 8192:
            raise ValueError(f"assist.max_tokens must be between 1 and 8192, got {self.max_tokens}")


@dataclass(frozen=True)
class StorageConfig:
    db_path: str = "~/.resume-builder/sites.db"

    @property
    def resolved_db_path(self) -> Path:
        return Path(self.db_path).expanduser()


@dataclass(frozen=True)
class PublishConfig:
    extensions: tuple[str, ...] = (".me", ".cv")
    default_extension: str = ".me"

    def __post_init__(self) -> None:
        # YAML hands us a list
        object.__setattr__(self, "extensions", tuple(self.extensions))
        if not self.extensions:
            raise ValueError("publish.extensions must not be empty")
        for ext in self.extensions:
            if not ext.startswith(".") or len(ext) < 2:
                raise ValueError(f"publish.extensions entries must look like '.me', got {ext!r}")
        if self.default_extension not in self.extensions:
            raise ValueError(
                f"publish.default_extension {self.default_extension!r} is not one of {self.extensions}"
            )


@dataclass(frozen=True)
class ExportConfig:
    page_size: str = "A4"

    def __post_init__(self) -> None:
        if self.page_size not in PAGE_SIZES:
            raise ValueError(f"export.page_size must be one of {PAGE_SIZES}, got {self.page_size!r}")


@dataclass(frozen=True)
class AppConfig:
    registrar: RegistrarConfig = field(default_factory=RegistrarConfig)
    assist: AssistConfig = field(default_factory=AssistConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    publish: PublishConfig = field(default_factory=PublishConfig)
    export: ExportConfig = field(default_factory=ExportConfig)


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
        registrar=RegistrarConfig(**raw.get("registrar", {})),
        assist=AssistConfig(**raw.get("assist", {})),
        storage=StorageConfig(**raw.get("storage", {})),
        publish=PublishConfig(**raw.get("publish", {})),
        export=ExportConfig(**raw.get("export", {})),
    )
