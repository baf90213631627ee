"""Inventory models.

Inventory comes in two persisted shapes. v1 is a bare item string; v2
splits items carried on the person, items stored per location, and owned
assets. Both are resolved into InventoryV2 once, at the migration boundary.
"""

from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from story_tracker.inventory.items import EMPTY_ITEM_LIST


class InventoryV2(BaseModel):
    """Structured inventory.

    Serialized with camelCase keys (`onPerson`) to stay compatible with the
    host's persisted blobs.
    """

    model_config = ConfigDict(
        frozen=False,
        validate_assignment=True,
        populate_by_name=True,
        extra="ignore",
    )

    version: Literal[2] = Field(default=2, description="Schema version")
    on_person: str = Field(
        default=EMPTY_ITEM_LIST, alias="onPerson", description="Items carried"
    )
    stored: dict[str, str] = Field(
        default_factory=dict, description="Location name -> item string, in display order"
    )
    assets: str = Field(default=EMPTY_ITEM_LIST, description="Owned property and vehicles")


class InventoryV1(BaseModel):
    """Legacy single-string inventory."""

    model_config = ConfigDict(frozen=True)

    version: Literal[1] = Field(default=1, description="Schema version")
    items: str = Field(..., description="Comma-separated item string")


Inventory = Annotated[InventoryV1 | InventoryV2, Field(discriminator="version")]


class MigrationSource(str, Enum):
    """Which input shape a migrated inventory came from."""

    V2 = "v2"
    V1 = "v1"
    NULL = "null"
    DEFAULT = "default"


class MigrationResult(BaseModel):
    """Outcome of migrating an inventory payload."""

    inventory: InventoryV2 = Field(..., description="Canonical inventory")
    migrated: bool = Field(..., description="Whether the input was converted")
    source: MigrationSource = Field(..., description="Detected input shape")


class InventoryCategory(str, Enum):
    """Item list addressed by an inventory edit."""

    ON_PERSON = "onPerson"
    STORED = "stored"
    ASSETS = "assets"
