"""
Access grant and object identity models.
"""

from enum import Enum
from typing import Optional
from urllib.parse import quote

from pydantic import BaseModel


class AccessGrant(BaseModel):
    """Signed capability carried in the query string; forwarded, never checked here."""

    resource_id: str
    key: str
    expiry: str
    signature: str

    def as_query(self) -> dict:
        return {"k": self.key, "ex": self.expiry, "s": self.signature}


class MediaScope(str, Enum):
    GUILD = "guild"
    ICON = "icon"


class MediaObject(BaseModel):
    """A stored object: generic files are keyed by filename, icons by content hash."""

    scope: MediaScope
    scope_id: str
    name: Optional[str] = None

    @property
    def backend_path(self) -> str:
        if not self.name:
            return f"/{self.scope.value}/{quote(self.scope_id, safe='')}"
        return f"/{self.scope.value}/{quote(self.scope_id, safe='')}/{quote(self.name, safe='')}"
