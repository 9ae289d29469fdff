from typing import Any
from pydantic import BaseModel, Field, StrictBool, field_validator
from models import json_safe

class ProductCreate(BaseModel):
    name: Any  # Obligatoire et non vide
    price: Any  # Seule l'absence est refusée (0 et null passent)
    in_stock: StrictBool = Field(alias="inStock")  # true/false uniquement, pas "true"

    @field_validator("name")
    @classmethod
    def name_must_be_present(cls, v):
        if not v:
            raise ValueError('Name must not be empty')
        return v


class ProductUpdate(BaseModel):
    name: Any = None
    price: Any = None
    in_stock: Any = Field(default=None, alias="inStock")

    def changes(self) -> dict:
        # Seuls les champs envoyés par le client (null compris) sont appliqués
        return json_safe(self.model_dump(exclude_unset=True, by_alias=True))


class ErrorResponse(BaseModel):
    error: str


class MessageResponse(BaseModel):
    message: str
