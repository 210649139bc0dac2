from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field, model_validator


class UrlRequest(BaseModel):
    """Request model for the URL generation endpoint."""
    path: Optional[str] = Field(
        default=None,
        description="Resource path relative to the URL endpoint",
        examples=["/default-image.jpg"]
    )
    src: Optional[str] = Field(
        default=None,
        description="Absolute source URL, used instead of path",
        examples=["https://ik.imagekit.io/demo/default-image.jpg"]
    )
    url_endpoint: Optional[str] = Field(
        default=None,
        description="Override for the configured URL endpoint",
        examples=["https://ik.imagekit.io/demo/"]
    )
    transformation: List[Dict[str, Any]] = Field(
        default_factory=list,
        description="Ordered transformation steps",
        examples=[[{"height": 300, "width": 400}]]
    )
    transformation_position: Optional[Literal["path", "query"]] = Field(
        default=None,
        description="Place transformations in the path or the query string"
    )
    query_parameters: Dict[str, Any] = Field(
        default_factory=dict,
        description="Extra query parameters"
    )
    signed: bool = Field(default=False, description="Sign the URL with the configured private key")
    expire_seconds: Optional[int] = Field(
        default=None,
        ge=0,
        description="Signed URL lifetime in seconds, 0 for no expiry"
    )

    model_config = {
        "json_schema_extra": {
            "example": {
                "path": "/default-image.jpg",
                "transformation": [{"height": 300, "width": 400}],
                "signed": True,
                "expire_seconds": 300
            }
        }
    }

    @model_validator(mode="after")
    def check_source(self):
        """Require either a path or a source URL."""
        if not self.path and not self.src:
            raise ValueError("Either path or src must be provided")
        return self

    def to_options(self) -> Dict[str, Any]:
        """Convert to generate_url options, leaving unset overrides to the defaults."""
        return self.model_dump(exclude_none=True)


class UrlResponse(BaseModel):
    """Response model for the URL generation endpoint."""
    url: str = Field(
        ...,
        description="Generated image URL",
        examples=["https://ik.imagekit.io/demo/tr:h-300,w-400/default-image.jpg"]
    )
