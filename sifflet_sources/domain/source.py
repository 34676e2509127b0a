"""Source entity - a monitored system and its connection parameters."""

from __future__ import annotations

from uuid import UUID

from pydantic import BaseModel, Field, model_validator
from typing_extensions import Self

from sifflet_sources.domain.enums import TagKind
from sifflet_sources.domain.parameters import ParametersModel


class TagReference(BaseModel):
    """
    Reference to a tag, either by ID or by name.

    A name can be paired with a kind when it matches both a regular tag and a
    classification tag.
    """

    id: UUID | None = Field(None, description="Tag ID. Excludes name and kind.")
    name: str | None = Field(None, description="Tag name. Excludes id.")
    kind: TagKind | None = Field(
        None, description="Tag kind, only valid together with a name"
    )

    model_config = {"frozen": True, "extra": "forbid"}

    @model_validator(mode="after")
    def validate_id_or_name(self) -> Self:
        """Ensure exactly one of id/name is set and kind goes with a name."""
        if self.id is None and self.name is None:
            raise ValueError("Either 'id' or 'name' must be provided for a tag")
        if self.id is not None and self.name is not None:
            raise ValueError("Tag 'id' and 'name' are mutually exclusive")
        if self.kind is not None and self.id is not None:
            raise ValueError("Tag 'kind' can only be used together with 'name'")
        return self


class SourceModel(BaseModel):
    """A Sifflet source."""

    id: UUID | None = Field(None, description="Source ID, assigned by the API")
    name: str = Field(..., description="Source name")
    description: str | None = Field(None, description="Source description")
    credentials: str | None = Field(
        None,
        description=(
            "Name of the credentials used to connect to the source. Required "
            "for most source types, except athena, dbt and quicksight."
        ),
    )
    schedule: str | None = Field(
        None, description="Cron expression. Empty means manual refresh only."
    )
    timezone: str | None = Field(None, description="Timezone, defaults to UTC")
    tags: list[TagReference] = Field(default_factory=list)
    parameters: ParametersModel = Field(..., description="Connection parameters")

    model_config = {"frozen": True, "extra": "forbid"}


class SourceFilter(BaseModel):
    """Search criteria for sources. Empty criteria match every source."""

    text_search: str | None = Field(
        None, description="Return sources whose name matches this text"
    )
    types: list[str] = Field(
        default_factory=list,
        description="Source types to filter by, as configuration tags (e.g. dbt_cloud)",
    )
    tags: list[TagReference] = Field(
        default_factory=list, description="Tags to filter sources by"
    )

    model_config = {"frozen": True, "extra": "forbid"}
