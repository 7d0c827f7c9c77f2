"""Configuration and environment settings for chanterm."""

from __future__ import annotations

import os
from dataclasses import dataclass, field


@dataclass(frozen=True)
class FourChanConfig:
    """4chan API configuration."""
    api_base: str = "https://a.4cdn.org"
    image_base: str = "https://i.4cdn.org"
    timeout: float = 30.0
    user_agent: str = "chanterm/1.0"

    @classmethod
    def from_env(cls) -> FourChanConfig:
        return cls(
            api_base=os.getenv("CHANTERM_API_BASE", cls.api_base).rstrip("/"),
            image_base=os.getenv("CHANTERM_IMAGE_BASE", cls.image_base).rstrip("/"),
            timeout=float(os.getenv("CHANTERM_TIMEOUT", cls.timeout)),
        )


@dataclass
class BrowserConfig:
    fourchan: FourChanConfig = field(default_factory=FourChanConfig.from_env)
    log_file: str | None = None
    verbose: bool = False
