import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from mealdb_client import MEALDB_API_BASE
from xai_client import DEFAULT_CHAT_MODEL, DEFAULT_IMAGE_MODEL, XAI_API_BASE


@dataclass
class Settings:
    """Runtime configuration read from the environment (and a .env file)."""

    xai_api_key: Optional[str] = None
    xai_base_url: str = XAI_API_BASE
    xai_chat_model: str = DEFAULT_CHAT_MODEL
    xai_image_model: str = DEFAULT_IMAGE_MODEL
    mealdb_base_url: str = MEALDB_API_BASE
    http_timeout: float = 30.0
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls, load_env_file: bool = True) -> "Settings":
        if load_env_file:
            load_dotenv()
        timeout = os.getenv("HTTP_TIMEOUT")
        try:
            http_timeout = float(timeout) if timeout else cls.http_timeout
        except ValueError:
            raise SystemExit(f"HTTP_TIMEOUT must be a number of seconds, got {timeout!r}")
        return cls(
            xai_api_key=os.getenv("XAI_API_KEY") or None,
            xai_base_url=os.getenv("XAI_BASE_URL") or XAI_API_BASE,
            xai_chat_model=os.getenv("XAI_CHAT_MODEL") or DEFAULT_CHAT_MODEL,
            xai_image_model=os.getenv("XAI_IMAGE_MODEL") or DEFAULT_IMAGE_MODEL,
            mealdb_base_url=os.getenv("MEALDB_BASE_URL") or MEALDB_API_BASE,
            http_timeout=http_timeout,
            log_level=(os.getenv("LOG_LEVEL") or "WARNING").upper(),
        )

    @property
    def ai_enabled(self) -> bool:
        return bool(self.xai_api_key)
