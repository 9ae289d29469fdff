"""
Accès au document products.json.

Chaque appel relit ou réécrit le fichier entier : aucun cache n'est
conservé entre deux requêtes.
"""
import json
from pathlib import Path
from typing import List
from loguru import logger
from models import json_safe


class ProductStorage:
    def __init__(self, path):
        self.path = Path(path)

    def load(self) -> List[dict]:
        """
        Retourne la liste des produits du document.
        Le fichier est créé (vide) s'il n'existe pas ; un contenu illisible
        donne une liste vide, l'erreur est seulement loggée.
        """
        try:
            if not self.path.exists():
                logger.info(f"Creating empty products file at {self.path}")
                self.path.parent.mkdir(parents=True, exist_ok=True)
                self.path.write_text("[]", encoding="utf-8")
            raw = self.path.read_text(encoding="utf-8")
            data = json_safe(json.loads(raw)) if raw.strip() else []
        except (OSError, ValueError):
            logger.exception(f"Error reading products file {self.path}")
            return []

        if not isinstance(data, list):
            logger.bind(found_type=type(data).__name__).error(
                f"Products file {self.path} does not contain a JSON array"
            )
            return []

        products = [p for p in data if isinstance(p, dict)]
        if len(products) != len(data):
            logger.warning(f"Ignored {len(data) - len(products)} malformed entries in {self.path}")
        return products

    def save(self, products: List[dict]) -> None:
        self.path.write_text(json.dumps(json_safe(products), indent=2, ensure_ascii=False, allow_nan=False), encoding="utf-8")
        logger.info(f"Saved {len(products)} products to {self.path}")
