"""Per-request context threaded explicitly into service calls."""
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class RequestContext:
    """
    Identity for one request.

    user_id is the opaque id issued by the identity provider, or None when
    the request carried no verified identity.
    """
    user_id: Optional[str] = None

    @property
    def is_authenticated(self) -> bool:
        return bool(self.user_id)
