"""Dataset records supplied to the resolution core.

These mirror the JSON documents the editor ships for mechanics, targeters,
conditions, enums and placeholders. Loading and fetching those documents is
the caller's job; the core only validates and indexes them.
"""

from pydantic import BaseModel, ConfigDict, Field

ALL_TYPES = "ALL"


class AttributeData(BaseModel):
    """A named, typed parameter of a mechanic-like object."""

    model_config = ConfigDict(populate_by_name=True)

    name: list[str] = Field(..., min_length=1, description="Attribute name and aliases")
    type: str = Field(default="String", description="Value type as documented")
    enum: str | None = Field(
        default=None,
        description="Enum dataset for the value, or an inline comma-separated list",
    )
    is_list: bool = Field(default=False, alias="list", description="Whether the value is a list")
    description: str = Field(default="")
    link: str | None = Field(default=None)
    default_value: str = Field(default="")
    inheritable: bool = Field(default=True, description="Inherited by extending mechanics")
    special_value: str | None = Field(
        default=None,
        description="Special value domain, e.g. 'conditions' for inline condition lists",
    )


class MechanicData(BaseModel):
    """A mechanic, targeter, condition, trigger or AI selector definition."""

    model_config = ConfigDict(populate_by_name=True)

    plugin: str = Field(default="MythicMobs")
    class_name: str = Field(..., alias="class")
    extends: str | None = Field(default=None, description="Class of the parent object")
    implements: list[str] = Field(default_factory=list)
    name: list[str] = Field(..., min_length=1, description="Name and aliases")
    description: str = Field(default="")
    link: str = Field(default="")
    attributes: list[AttributeData] = Field(default_factory=list)


class EnumEntry(BaseModel):
    """One value of an enumerated dataset."""

    description: str = Field(default="")
    name: list[str] = Field(default_factory=list, description="Additional aliases")
    attributes: list[AttributeData] = Field(
        default_factory=list,
        description="Attributes added to mechanics that use this enum",
    )


class PlaceholderData(BaseModel):
    """A known placeholder path such as caster.var.{custom_placeholder}."""

    path: str = Field(..., min_length=1)
    description: str = Field(default="")
    return_type: str | None = Field(default=None, description="Type tag of the value")


class MetaKeywordData(BaseModel):
    """A keyword that can be chained after placeholders of a given type."""

    keyword: str = Field(..., min_length=1, description="Dotted keyword path")
    description: str = Field(default="")
    origin_type: str = Field(default=ALL_TYPES, description="Type the keyword applies to")
    return_type: str = Field(default=ALL_TYPES, description="Type the keyword produces")


class ScribeDataset(BaseModel):
    """Everything a resolution context is built from."""

    mechanics: list[MechanicData] = Field(default_factory=list)
    targeters: list[MechanicData] = Field(default_factory=list)
    conditions: list[MechanicData] = Field(default_factory=list)
    triggers: list[MechanicData] = Field(default_factory=list)
    aitargets: list[MechanicData] = Field(default_factory=list)
    aigoals: list[MechanicData] = Field(default_factory=list)
    enums: dict[str, dict[str, EnumEntry]] = Field(default_factory=dict)
    placeholders: list[PlaceholderData] = Field(default_factory=list)
    meta_keywords: list[MetaKeywordData] = Field(default_factory=list)
