"""Generate Schemas — request body for POST / (document generation).

Invariants:
    - userData is optional at the schema level; its absence is a domain 400, not a 422
    - userData, when present, must be a JSON object (its inner shape is never validated)
    - Unknown top-level fields are ignored
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class GenerateRequest(BaseModel):
    """Template id plus the data merged into its placeholder tags."""
    model_config = ConfigDict(populate_by_name=True)

    template_id: str | None = Field(None, alias="templateId")
    user_data: dict[str, Any] | None = Field(None, alias="userData")
