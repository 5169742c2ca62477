"""Pydantic schemas for coverage-zone selection (courier assignment forms)."""

from typing import Literal

from pydantic import BaseModel, model_validator


class ZoneAssignment(BaseModel):
    """Payload submitted when attaching zones to a courier."""

    zone_ids: list[str]
    primary_zone_id: str | None = None

    @model_validator(mode="after")
    def _primary_must_be_selected(self) -> "ZoneAssignment":
        if self.primary_zone_id is not None and self.primary_zone_id not in self.zone_ids:
            raise ValueError("primary_zone_id must be one of zone_ids")
        return self


class SelectionOperation(BaseModel):
    op: Literal["toggle", "set_primary"]
    id: str


class ZoneSelectionRequest(BaseModel):
    selected: list[str] = []
    primary: str | None = None
    required: bool = False
    operations: list[SelectionOperation] = []


class ZoneSelectionResponse(BaseModel):
    selected: list[str]
    primary: str | None
    required_but_empty: bool
    multiple_without_primary: bool
