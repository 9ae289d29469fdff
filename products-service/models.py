import math
import re
from typing import Any, List, Optional
from pydantic import BaseModel, ConfigDict, Field

# Un produit tel qu'il est stocké dans products.json
class Product(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    name: Any
    price: Any
    in_stock: Any = Field(alias="inStock")

    def to_record(self) -> dict:
        return json_safe(self.model_dump(by_alias=True))


_LEADING_INT = re.compile(r"\s*([+-]?[0-9]+)")


def parse_product_id(raw: str) -> Optional[int]:
    """Lit l'identifiant du chemin comme un entier (ex: "12abc" -> 12, "abc" -> None)"""
    match = _LEADING_INT.match(raw)
    if not match:
        return None
    return int(match.group(1))


def _integer_id(record: dict) -> Optional[int]:
    value = record.get("id")
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


def next_product_id(products: List[dict]) -> int:
    ids = [i for i in (_integer_id(p) for p in products) if i is not None]
    return max(ids) + 1 if ids else 1


def find_product_index(products: List[dict], product_id: Optional[int]) -> int:
    if product_id is None:
        return -1
    return next((i for i, p in enumerate(products) if _integer_id(p) == product_id), -1)


def is_in_stock(record: dict) -> bool:
    return record.get("inStock") is True


def json_safe(value: Any) -> Any:
    """Remplace inf/-inf/NaN par None, comme JSON.stringify"""
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, list):
        return [json_safe(v) for v in value]
    if isinstance(value, dict):
        return {k: json_safe(v) for k, v in value.items()}
    return value
