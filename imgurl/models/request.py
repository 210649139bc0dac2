from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

from imgurl.core.config import Settings, settings as default_settings
from imgurl.core.constants import DEFAULT_TRANSFORMATION_POSITION


class UrlRequestContext(BaseModel):
    """Credentials and endpoint defaults applied to every generated URL."""

    public_key: str = Field(default="", description="Public API key")
    private_key: str = Field(default="", description="Private key used for signing")
    url_endpoint: str = Field(default="", description="Base URL of the image endpoint")
    transformation_position: str = Field(
        default=DEFAULT_TRANSFORMATION_POSITION,
        description="Where transformations are placed (path or query)"
    )

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "UrlRequestContext":
        """Build a context from application settings."""
        settings = settings or default_settings
        return cls(
            public_key=settings.imagekit_public_key,
            private_key=settings.imagekit_private_key,
            url_endpoint=settings.imagekit_url_endpoint,
            transformation_position=settings.transformation_position,
        )

    def defaults(self) -> Dict[str, Any]:
        """Option defaults keyed the same way as ``generate_url`` options."""
        return {
            "public_key": self.public_key,
            "private_key": self.private_key,
            "url_endpoint": self.url_endpoint,
            "transformation_position": self.transformation_position,
        }
