"""Pydantic schemas for the system prompt preview API."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class PreviewRequest(BaseModel):
    """Preview request payload.

    ``systemPrompt`` is a partial ``agents.defaults.systemPrompt`` block;
    omitted fields take their defaults.
    """

    model_config = ConfigDict(populate_by_name=True)

    system_prompt: dict[str, Any] | None = Field(
        None, alias="systemPrompt", description="Partial system prompt customization"
    )


class PreviewResponse(BaseModel):
    """Preview result: ``prompt`` on success, ``error`` on failure."""

    ok: bool
    prompt: str | None = None
    error: str | None = None


class SectionResponse(BaseModel):
    """One entry of the section catalogue."""

    id: str
    title: str
    description: str


class SectionsResponse(BaseModel):
    sections: list[SectionResponse]


class HealthResponse(BaseModel):
    status: str
    version: str
    sections: int
    workspace: str
