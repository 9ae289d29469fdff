import os
from pathlib import Path
from dotenv import load_dotenv
from loguru import logger
from pydantic import BaseModel

# Chargement des variables d'environnement
load_dotenv()

SERVICE_NAME = "products-service"
DEFAULT_PORT = 3001
DEFAULT_PRODUCTS_FILE = Path(__file__).resolve().parent / "products.json"


class Settings(BaseModel):
    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT
    products_file: Path = DEFAULT_PRODUCTS_FILE
    log_file: str = "logs.json"
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        """Construit la configuration depuis l'environnement (.env inclus)"""
        return cls(
            host=os.getenv("HOST", "0.0.0.0"),
            port=_read_port(os.getenv("PORT")),
            products_file=Path(os.getenv("PRODUCTS_FILE", str(DEFAULT_PRODUCTS_FILE))),
            log_file=os.getenv("LOG_FILE", "logs.json"),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )


def _read_port(raw):
    if not raw:
        return DEFAULT_PORT
    try:
        return int(raw)
    except ValueError:
        logger.warning(f"Invalid PORT value {raw!r}, falling back to {DEFAULT_PORT}")
        return DEFAULT_PORT
