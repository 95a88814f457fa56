import os
from dataclasses import dataclass, field
from typing import Optional

import httpx

from token_storage import FileStorage, MemoryStorage, TokenStorage

API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:9100")
API_STORAGE_PATH = os.getenv("API_STORAGE_PATH", "~/.shopfront/storage.json")


@dataclass(frozen=True)
class ClientConfig:
    """
    Everything the dispatcher needs, fixed for the life of the client.

    transport is handed to httpx.AsyncClient as-is and closed with it after
    every call, so it should be a test double (MockTransport, ASGITransport);
    leave it None for real network calls.
    """

    base_url: str = API_BASE_URL
    storage: TokenStorage = field(default_factory=MemoryStorage)
    transport: Optional[httpx.AsyncBaseTransport] = None
    validate_responses: bool = True

    def __post_init__(self):
        # frozen, so bypass __setattr__
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))

    @classmethod
    def from_env(cls, **overrides) -> "ClientConfig":
        values = {
            "base_url": os.getenv("API_BASE_URL", API_BASE_URL),
            "storage": FileStorage(os.getenv("API_STORAGE_PATH", API_STORAGE_PATH)),
        }
        values.update(overrides)
        return cls(**values)
