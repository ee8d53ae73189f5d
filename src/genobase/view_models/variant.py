from pydantic import Field

from genobase.models.enums.chromosome import Chromosome
from genobase.models.enums.variant_class import VariantClass
from genobase.view_models.base.base import BaseModel


class VariantBase(BaseModel):
    id: int = Field(gt=0, description="The RSID of the variant, without its rs prefix.")
    chromosome: Chromosome
    position: int = Field(ge=0)
    variant_class: VariantClass


class VariantCreate(VariantBase):
    pass


# Properties to return to client
class Variant(VariantBase):
    class Config:
        from_attributes = True
