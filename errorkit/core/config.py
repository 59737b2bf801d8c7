import os
from dataclasses import dataclass
from typing import List

from dotenv import load_dotenv


load_dotenv()

RENDERERS = ("ansi", "css", "plain")


@dataclass(frozen=True)
class Config:
    """Application configuration loaded from environment variables.

    Controls how console output is rendered and where localized
    responses are loaded from at startup.
    """

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "WARNING")

    @staticmethod
    def allowed_origins(extra_origins: List[str] | None = None) -> List[str]:
        env_origins = [o.strip() for o in os.getenv("CORS_ALLOWED_ORIGINS", "http://localhost:3000").split(",") if o.strip()]
        merged = list(env_origins)
        if extra_origins:
            merged.extend(extra_origins)
        # Deduplicate while preserving order
        seen = set()
        result: List[str] = []
        for origin in merged:
            if origin not in seen:
                seen.add(origin)
                result.append(origin)
        return result

    @staticmethod
    def renderer_name() -> str:
        return os.getenv("COLOR_RENDERER", "ansi").strip().lower() or "ansi"

    @staticmethod
    def responses_file() -> str:
        return os.getenv("ERRORKIT_RESPONSES_FILE", "").strip()

    @classmethod
    def validate(cls) -> None:
        if cls.renderer_name() not in RENDERERS:
            raise ValueError(f"COLOR_RENDERER must be one of: {', '.join(RENDERERS)}")
        responses_file = cls.responses_file()
        if responses_file and not os.path.isfile(responses_file):
            raise ValueError(f"ERRORKIT_RESPONSES_FILE does not exist: {responses_file}")
