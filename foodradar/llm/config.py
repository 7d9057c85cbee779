from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


@dataclass(frozen=True)
class GeminiConfig:
    api_key: str = os.getenv("GEMINI_API_KEY", os.getenv("API_KEY", ""))
    model: str = "gemini-2.5-flash"
    timeout: float = 30.0
    result_count: int = 8
    enabled: bool = True
    demo_latency: float = 2.0  # seconds of simulated network time in demo mode

    @property
    def is_live(self) -> bool:
        return self.enabled and bool(self.api_key)


DEFAULT_GEMINI_CONFIG = GeminiConfig()
