from pydantic import Field

from genobase.models.enums.ancestry_group import AncestryGroup
from genobase.view_models.base.base import BaseModel


class AlleleBase(BaseModel):
    id: int = Field(gt=0, description="The RSID of the variant this allele belongs to.")
    ref: str = Field(min_length=1)
    alt: str = Field(min_length=1)
    ancestry: AncestryGroup
    frequency: float = Field(ge=0, le=1)


class AlleleCreate(AlleleBase):
    pass


# Properties to return to client
class Allele(AlleleBase):
    class Config:
        from_attributes = True
