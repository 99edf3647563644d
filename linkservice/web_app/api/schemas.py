"""Pydantic schemas for API requests and responses."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class CreateRequest(BaseModel):
    """Request to shorten a URL."""

    # Format is checked by the service so that bad URLs report INVALID_INPUT
    url: str = Field(..., description="The URL to shorten")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"url": "https://example.com/very/long/path/to/resource"},
                {"url": "github.com/user/repo"},
            ]
        }
    }


class CreateResponse(BaseModel):
    """Response after shortening a URL."""

    code: str = Field(..., description="The 10-character short code")
    short_url: str = Field(..., description="The complete short URL")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "code": "4fR_x09Kqa",
                    "short_url": "https://short.link/4fR_x09Kqa",
                }
            ]
        }
    }


class ResolveResponse(BaseModel):
    """Response with the URL behind a short code."""

    code: str = Field(..., description="The short code")
    url: str = Field(..., description="The original URL")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Overall status")
    database: str = Field(..., description="Database status")
    timestamp: datetime = Field(..., description="Check timestamp")


class ErrorResponse(BaseModel):
    """Error response."""

    error: str = Field(..., description="Error kind (INVALID_INPUT, NOT_FOUND, REQUEST_PROCESSING_FAILED)")
    detail: Optional[str] = Field(None, description="Error message")
