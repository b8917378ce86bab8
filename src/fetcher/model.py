# src/fetcher/model.py (Fetch Layer)
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class FetchErrorType(str, Enum):
    NETWORK = "network"
    HTTP = "http"
    CORS = "cors"
    TIMEOUT = "timeout"
    INVALID = "invalid"
    EMPTY = "empty"
    UNKNOWN = "unknown"


class FetchResult(BaseModel):
    """Outcome of one fetch: either `html` is set, or `error` and `error_type` are."""
    url: str
    html: Optional[str] = None
    error: Optional[str] = None
    error_type: Optional[FetchErrorType] = None
    status: Optional[int] = None
    elapsed_time: Optional[float] = None

    @property
    def ok(self) -> bool:
        return self.html is not None

    @classmethod
    def failure(cls, url: str, message: str, error_type: FetchErrorType, status: Optional[int] = None) -> "FetchResult":
        return cls(url=url, error=message, error_type=error_type, status=status)


class FetchSettings(BaseModel):
    timeout: float = Field(default=30.0, gt=0)
    read_timeout: float = Field(default=30.0, gt=0)
    delay_ms: int = Field(default=300, ge=0, description="Pause between two consecutive samples.")
    user_agent: Optional[str] = None
