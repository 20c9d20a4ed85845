"""Application configuration loaded from config.yaml."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml


@dataclass(frozen=True)
class LLMConfig:
    model: str = "claude-haiku-4-5-20251001"
    timeout: int = 60
    base_url: str | None = None

    def __post_init__(self) -> None:
        if self.timeout < 1:
            raise ValueError(f"llm.timeout must be >= 1, got {self.timeout}")


@dataclass(frozen=True)
class LimitsConfig:
    max_input_tokens: int = 10000
    max_output_tokens: int = 1000
    tokens_per_word: float = 1.3
    tolerance: float = 1.1  # accepted output is at most ceil(target * tolerance) words
    temperature: float = 0.7

    def __post_init__(self) -> None:
        if self.max_input_tokens < 1:
            raise ValueError(f"limits.max_input_tokens must be >= 1, got {self.max_input_tokens}")
        if self.max_output_tokens < 1:
            raise ValueError(f"limits.max_output_tokens must be >= 1, got {self.max_output_tokens}")
        if self.tokens_per_word <= 0:
            raise ValueError(f"limits.tokens_per_word must be > 0, got {self.tokens_per_word}")
        if self.tolerance < 1:
            raise ValueError(f"limits.tolerance must be >= 1, got {self.tolerance}")
        if not 0 <= self.temperature <= 1:
            raise ValueError(f"limits.temperature must be within 0-1, got {self.temperature}")


@dataclass(frozen=True)
class ServerConfig:
    host: str = "0.0.0.0"
    port: int = 3000
    allowed_origins: tuple[str, ...] = ("http://localhost:5173", "http://localhost:3000")

    def __post_init__(self) -> None:
        if not 0 < self.port < 65536:
            raise ValueError(f"server.port must be within 1-65535, got {self.port}")
        # YAML hands us a list
        object.__setattr__(self, "allowed_origins", tuple(self.allowed_origins))

    @property
    def resolved_origins(self) -> list[str]:
        origins = list(self.allowed_origins)
        frontend = os.environ.get("FRONTEND_URL")
        if frontend and frontend not in origins:
            origins.append(frontend)
        return origins


@dataclass(frozen=True)
class ClientConfig:
    backend_url: str = "http://localhost:3000"
    health_timeout: float = 5.0
    enhance_timeout: float = 60.0
    debounce_seconds: float = 0.3
    max_attempts: int = 3

    def __post_init__(self) -> None:
        if self.health_timeout <= 0:
            raise ValueError(f"client.health_timeout must be > 0, got {self.health_timeout}")
        if self.enhance_timeout <= 0:
            raise ValueError(f"client.enhance_timeout must be > 0, got {self.enhance_timeout}")
        if self.debounce_seconds < 0:
            raise ValueError(f"client.debounce_seconds must be >= 0, got {self.debounce_seconds}")
        if not 1 <= self.max_attempts <= 10:
            raise ValueError(f"client.max_attempts must be within 1-10, got {self.max_attempts}")

    @property
    def resolved_backend_url(self) -> str:
        return os.environ.get("TONE_RESIZER_BACKEND_URL", self.backend_url).rstrip("/")


@dataclass(frozen=True)
class AppConfig:
    llm: LLMConfig = field(default_factory=LLMConfig)
    limits: LimitsConfig = field(default_factory=LimitsConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
    client: ClientConfig = field(default_factory=ClientConfig)


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load config from YAML file, falling back to defaults."""
    if path is None:
        # Look for config.yaml relative to the project root
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
        limits=LimitsConfig(**raw.get("limits", {})),
        server=ServerConfig(**raw.get("server", {})),
        client=ClientConfig(**raw.get("client", {})),
    )
