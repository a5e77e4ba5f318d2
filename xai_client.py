import logging
from typing import Any, Dict, Optional

import requests

from errors import RemoteUnavailableError
from prompts import food_photo_prompt

logger = logging.getLogger(__name__)

XAI_API_BASE = "https://api.x.ai/v1"
DEFAULT_CHAT_MODEL = "grok-3-mini"
DEFAULT_IMAGE_MODEL = "grok-2-image"


def _headers(api_key: str) -> Dict[str, str]:
    return {
        "Authorization": f"Bearer {api_key}",
        "Content-Type": "application/json",
    }


class XAIClient:
    """Chat completion and image generation against the xAI HTTP API."""

    def __init__(
        self,
        api_key: str,
        base_url: str = XAI_API_BASE,
        chat_model: str = DEFAULT_CHAT_MODEL,
        image_model: str = DEFAULT_IMAGE_MODEL,
        timeout: float = 60,
    ):
        if not api_key:
            raise ValueError("an xAI API key is required")
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.chat_model = chat_model
        self.image_model = image_model
        self.timeout = timeout

    def _post(self, endpoint: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        try:
            resp = requests.post(
                f"{self.base_url}/{endpoint}",
                headers=_headers(self.api_key),
                json=payload,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise RemoteUnavailableError("xAI", str(exc)) from exc
        if not resp.ok:
            raise RemoteUnavailableError("xAI", f"{endpoint} returned {resp.status_code}: {resp.text[:200]}")
        try:
            return resp.json()
        except ValueError as exc:
            raise RemoteUnavailableError("xAI", f"{endpoint} returned invalid JSON") from exc

    def complete(self, system_prompt: str, user_prompt: str) -> str:
        """Single-turn chat completion; raises RemoteUnavailableError on failure."""
        data = self._post("chat/completions", {
            "model": self.chat_model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
        })
        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as exc:
            raise RemoteUnavailableError("xAI", "completion response has no message content") from exc
        return (content or "").strip()

    def generate(self, prompt: str) -> Optional[str]:
        """URL of a generated food photo, or None if anything goes wrong."""
        try:
            data = self._post("images/generations", {
                "model": self.image_model,
                "prompt": food_photo_prompt(prompt),
                "n": 1,
                "response_format": "url",
            })
            image = data["data"][0]
        except (RemoteUnavailableError, KeyError, IndexError, TypeError) as exc:
            logger.warning("Image generation failed for %r: %s", prompt, exc)
            return None
        if not isinstance(image, dict):
            return None
        if image.get("revised_prompt"):
            logger.debug("Generated image with revised prompt: %s", image["revised_prompt"])
        return image.get("url") or None
