"""Category domain model."""

from pydantic import BaseModel, ConfigDict, Field


class Category(BaseModel):
    """Category data transfer object."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(..., description="Unique category ID assigned by the repository")
    name: str = Field(..., description="Display name")
    color: str = Field(..., description="Hex color string, e.g. #3b82f6")
    created_at: int = Field(..., description="Creation timestamp (epoch seconds)")
    updated_at: int = Field(..., description="Last update timestamp (epoch seconds)")
