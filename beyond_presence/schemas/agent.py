"""Request and response models for the agent and avatar REST operations."""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class CreateAgentRequest(BaseModel):
    """
    Body of ``POST /agent``.

    Only ``name``, ``avatar_id`` and ``system_prompt`` are required; optional
    fields left unset are omitted from the request body.
    """

    name: str = Field(..., min_length=1)
    avatar_id: str = Field(..., min_length=1)
    system_prompt: str = Field(..., min_length=1)
    language: Optional[str] = None
    greeting: Optional[str] = None
    max_session_length_minutes: Optional[int] = Field(default=None, ge=1)

    def to_payload(self) -> Dict[str, Any]:
        """Serialize for the API, dropping unset optional fields."""
        return self.model_dump(exclude_none=True)


class Avatar(BaseModel):
    """
    One entry of ``GET /avatar``.

    Fields beyond ``id`` and ``name`` are kept as returned by the API.
    """

    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    id: Optional[str] = None
    name: Optional[str] = None

    def to_record(self) -> Dict[str, Any]:
        """Return the avatar as emitted, without fields the API left out."""
        return self.model_dump(exclude_unset=True)
