# storefront/config.py
import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


@dataclass
class Settings:
    data_dir: str = "data/storage"
    products_base_url: str = "http://127.0.0.1:8085/"
    fetch_timeout: float = 5.0
    log_level: str = "INFO"
    api_url: str = "http://127.0.0.1:8085"


def load_settings() -> Settings:
    return Settings(
        data_dir=os.getenv("STOREFRONT_DATA_DIR", "data/storage"),
        products_base_url=os.getenv("STOREFRONT_PRODUCTS_BASE_URL", "http://127.0.0.1:8085/"),
        fetch_timeout=float(os.getenv("STOREFRONT_FETCH_TIMEOUT", "5")),
        log_level=os.getenv("STOREFRONT_LOG_LEVEL", "INFO").upper(),
        api_url=os.getenv("STOREFRONT_API_URL", "http://127.0.0.1:8085"),
    )
