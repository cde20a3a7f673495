"""
Runtime Configuration

Reads service credentials and model options from the environment.
A local .env file (current directory or its parent) is loaded first.
"""

import os
from dataclasses import dataclass, field
from typing import List, Optional

from dotenv import load_dotenv

DEFAULT_TOGETHER_BASE_URL = "https://api.together.xyz/v1"
DEFAULT_MODEL = "mistralai/Mixtral-8x7B-Instruct-v0.1"
DEFAULT_CORS_ORIGINS = [
    "http://localhost:5173",
    "http://localhost:3000",
    "http://127.0.0.1:5173",
]


@dataclass
class AdvisorSettings:
    """Credentials for the hosted services plus completion options."""
    supabase_url: Optional[str] = None
    supabase_anon_key: Optional[str] = None
    together_api_key: Optional[str] = None
    together_base_url: str = DEFAULT_TOGETHER_BASE_URL
    model: str = DEFAULT_MODEL
    temperature: float = 0.7
    cors_origins: List[str] = field(default_factory=lambda: list(DEFAULT_CORS_ORIGINS))
    log_level: str = "INFO"
    max_workspaces: int = 1000
    workspace_idle_minutes: int = 60

    @classmethod
    def from_env(cls) -> "AdvisorSettings":
        load_dotenv()
        load_dotenv('../.env')

        origins = os.getenv("CORS_ORIGINS")
        return cls(
            supabase_url=os.getenv("SUPABASE_URL"),
            supabase_anon_key=os.getenv("SUPABASE_ANON_KEY"),
            together_api_key=os.getenv("TOGETHER_API_KEY"),
            together_base_url=os.getenv("TOGETHER_BASE_URL", DEFAULT_TOGETHER_BASE_URL),
            model=os.getenv("CAREER_AI_MODEL", DEFAULT_MODEL),
            temperature=float(os.getenv("CAREER_AI_TEMPERATURE", "0.7")),
            cors_origins=[o.strip() for o in origins.split(",") if o.strip()] if origins else list(DEFAULT_CORS_ORIGINS),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            max_workspaces=int(os.getenv("MAX_WORKSPACES", "1000")),
            workspace_idle_minutes=int(os.getenv("WORKSPACE_IDLE_MINUTES", "60")),
        )

    @property
    def supabase_configured(self) -> bool:
        return bool(self.supabase_url and self.supabase_anon_key)
