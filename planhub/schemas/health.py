"""Pydantic schemas for hello and health responses."""

from typing import Literal

from pydantic import BaseModel, Field


class HelloResponse(BaseModel):
    success: bool = True
    message: str


class HealthResponse(BaseModel):
    """Response body for the health check endpoint."""

    status: Literal["ok"] = Field(default="ok", description="Service status")
    environment: str = Field(description="Current app environment (e.g. dev, prod)")
    store: Literal["ok", "unavailable"] = Field(
        description="Whether the JSON data file can be loaded",
    )
