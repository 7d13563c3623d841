"""
Core type definitions for artifactory_client.
"""
from dataclasses import dataclass
from typing import Callable, Dict, Literal, Optional, TypedDict

# HTTP Methods
HttpMethod = Literal["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]

# Credential strategies understood by the transport
AuthType = Literal["basic", "api_key", "bearer"]

# Outer shape of a JSON document, as seen by the decoder
JsonShape = Literal["array", "object", "scalar"]


@dataclass
class DiagnosticsEvent:
    """Event for diagnostics/observability."""
    name: str  # 'request:start', 'request:end', 'request:error'
    timestamp: float
    method: str
    url: str
    status: Optional[int] = None
    duration: Optional[float] = None
    error: Optional[BaseException] = None


EventHook = Callable[[DiagnosticsEvent], None]


class RequestContext(TypedDict):
    """Context passed to auth handlers."""
    method: str
    url: str
    headers: Dict[str, str]
