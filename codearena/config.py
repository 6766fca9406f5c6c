"""Configuration for CodeArena, loaded from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass

# Judge0 CE language ids
LANGUAGE_IDS: dict[str, int] = {
    "python": 71,
    "javascript": 63,
    "cpp": 54,
}

RAPIDAPI_URL = "https://judge0-ce.p.rapidapi.com"


@dataclass
class Config:
    judge0_url: str = RAPIDAPI_URL
    judge0_api_key: str = ""
    judge0_host: str = ""  # X-RapidAPI-Host; derived from the URL when empty
    language: str = "python"
    catalog_path: str = ""  # JSON catalog replacing the built-in problems
    poll_interval: float = 0.5
    max_poll_attempts: int = 60

    def __post_init__(self) -> None:
        if self.language not in LANGUAGE_IDS:
            raise ValueError(
                f"Unsupported language {self.language!r}; expected one of {', '.join(LANGUAGE_IDS)}"
            )

    @property
    def uses_rapidapi(self) -> bool:
        return bool(self.judge0_host) or "rapidapi.com" in self.judge0_url

    @property
    def rapidapi_host(self) -> str:
        if self.judge0_host:
            return self.judge0_host
        return self.judge0_url.split("://", 1)[-1].split("/", 1)[0]

    @classmethod
    def from_env(cls, **overrides) -> Config:
        kwargs: dict = {}
        api_key = os.environ.get("JUDGE0_API_KEY") or os.environ.get("RAPIDAPI_KEY")
        if api_key:
            kwargs["judge0_api_key"] = api_key
        env_map: dict[str, tuple[str, type]] = {
            "JUDGE0_URL": ("judge0_url", str),
            "JUDGE0_HOST": ("judge0_host", str),
            "CODEARENA_LANGUAGE": ("language", str),
            "CODEARENA_CATALOG": ("catalog_path", str),
            "CODEARENA_POLL_INTERVAL": ("poll_interval", float),
            "CODEARENA_MAX_POLL_ATTEMPTS": ("max_poll_attempts", int),
        }
        for env_var, (field_name, conv) in env_map.items():
            val = os.environ.get(env_var)
            if val is not None:
                kwargs[field_name] = conv(val)
        kwargs.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**kwargs)
