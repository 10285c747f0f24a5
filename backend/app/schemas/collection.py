"""Pydantic schemas for the collection catalog and collection data endpoints."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

# One object from a collection. Shape is whatever Weaviate returns.
CollectionData = dict[str, Any]


class PropertyInfo(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    description: str | None = None
    data_type: list[str] | None = Field(default=None, alias="dataType")
    # Declared fields of object / object[] properties
    nested_properties: list["PropertyInfo"] | None = Field(
        default=None, alias="nestedProperties"
    )

    @property
    def is_reference(self) -> bool:
        """Cross-references are declared with a capitalised class name as type."""
        return bool(self.data_type) and self.data_type[0][:1].isupper()

    @property
    def is_object(self) -> bool:
        return bool(self.data_type) and self.data_type[0] in ("object", "object[]")

    @property
    def is_sortable(self) -> bool:
        """Weaviate sorts on scalar properties only."""
        if not self.data_type:
            return True
        return not (
            self.is_reference
            or self.is_object
            or self.data_type[0] in ("geoCoordinates", "phoneNumber", "blob")
        )


class CollectionInfo(BaseModel):
    name: str
    description: str | None = None
    count: int = Field(default=0, ge=0)
    properties: list[PropertyInfo] = []

    @property
    def property_names(self) -> list[str]:
        return [p.name for p in self.properties]

    def get_property(self, name: str) -> PropertyInfo | None:
        return next((p for p in self.properties if p.name == name), None)


class SortDirective(BaseModel):
    property: str
    order: Literal["asc", "desc"] = "asc"


class CollectionListResponse(BaseModel):
    """Catalog returned to the dashboard page."""

    collections: list[CollectionInfo]


class CollectionDataResponse(BaseModel):
    data: list[CollectionData]


class CollectionIdsResponse(BaseModel):
    ids: list[str]


class DeleteResponse(BaseModel):
    success: bool = True


class ErrorResponse(BaseModel):
    error: str
    details: str | None = None
