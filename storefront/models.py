# storefront/models.py
from pydantic import BaseModel, ConfigDict, Field

# Stored and remote records use the field names codigo / nombre / precio / qty.


class Product(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    code: str = Field(alias="codigo", min_length=1)
    name: str = Field(alias="nombre")
    price: float = Field(alias="precio", ge=0, allow_inf_nan=False)

    def matches(self, code: str) -> bool:
        return self.code.upper() == code.upper()


class CartLine(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    code: str = Field(alias="codigo")
    quantity: int = Field(alias="qty")
