"""Common models shared across resources."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict


class GitLabModel(BaseModel):
    """Base model for all GitLab API models."""

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        use_enum_values=True,
    )


class OptionsModel(GitLabModel):
    """Base model for sparse request payloads.

    Only fields the caller actually set are serialized. A field set to
    None is sent as JSON null, which GitLab reads as "clear this value".
    """

    model_config = ConfigDict(
        populate_by_name=True,
        use_enum_values=True,
        extra="forbid",
    )

    def to_payload(self) -> dict[str, Any]:
        """Return the JSON body for this options object."""
        return self.model_dump(mode="json", exclude_unset=True)
