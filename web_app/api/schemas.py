"""Pydantic schemas for API requests and responses."""

from pydantic import BaseModel, Field


class ShortenRequest(BaseModel):
    """Request to shorten a URL."""

    url: str = Field(..., description="The URL to shorten")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"url": "https://example.com/very/long/path/to/resource"},
            ]
        }
    }


class ShortenResponse(BaseModel):
    """Response after shortening a URL."""

    result: str = Field(..., description="The complete short URL")


class BatchShortenItem(BaseModel):
    """One URL of a batch shortening request."""

    correlation_id: str = Field("", description="Caller-chosen tag echoed in the response")
    original_url: str = Field(..., description="The URL to shorten")


class BatchShortenResult(BaseModel):
    """One shortened URL of a batch response."""

    correlation_id: str
    short_url: str


class UserURL(BaseModel):
    """A link owned by the caller."""

    short_url: str
    original_url: str


class ErrorResponse(BaseModel):
    """Error response."""

    detail: str = Field(..., description="Error message")
