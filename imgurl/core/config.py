import os

from pydantic import BaseModel, Field
from dotenv import load_dotenv

from imgurl.core.constants import DEFAULT_TRANSFORMATION_POSITION

# Load environment variables from .env file if it exists
load_dotenv()


class Settings(BaseModel):
    """Application settings."""

    # Image endpoint credentials and defaults
    imagekit_public_key: str = Field(
        default_factory=lambda: os.getenv("IMAGEKIT_PUBLIC_KEY", "")
    )
    imagekit_private_key: str = Field(
        default_factory=lambda: os.getenv("IMAGEKIT_PRIVATE_KEY", "")
    )
    imagekit_url_endpoint: str = Field(
        default_factory=lambda: os.getenv("IMAGEKIT_URL_ENDPOINT", "")
    )
    transformation_position: str = Field(
        default_factory=lambda: os.getenv(
            "IMAGEKIT_TRANSFORMATION_POSITION", DEFAULT_TRANSFORMATION_POSITION
        ).lower()
    )
    # 0 means signed URLs never expire
    default_expire_seconds: int = Field(
        default_factory=lambda: int(os.getenv("IMAGEKIT_DEFAULT_EXPIRE_SECONDS", "0")),
        ge=0,
    )

    # API settings
    api_prefix: str = Field(
        default_factory=lambda: os.getenv("API_PREFIX", "")
    )

    # Server settings
    workers: int = Field(
        default_factory=lambda: int(os.getenv("WORKERS", "1"))
    )


# Create settings instance
settings = Settings()
