"""
Client session for the supermarket dashboard

Every request-issuing call receives its session explicitly; nothing is
read from ambient storage.
"""
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict

from marketlink.core.config import settings


class ClientSession(BaseModel):
    """Base URL and bearer token of one logged-in dashboard user"""

    base_url: str
    token: Optional[str] = None
    timeout: float = 30.0

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_settings(cls, token: Optional[str] = None) -> "ClientSession":
        return cls(base_url=settings.API_BASE_URL, token=token, timeout=settings.HTTP_TIMEOUT)

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    def headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers
