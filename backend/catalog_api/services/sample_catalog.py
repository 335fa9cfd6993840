"""
Catalog API — Static Sample Catalog
=====================================

What:  Loads the fixed demo product list shipped in data/sample_products.json.
Why:   Front-end demos need a stable list that never depends on the database.
How:   Read once, validated into SampleProduct models, cached for the process.
"""

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import List

from catalog_api.schemas.product import SampleProduct

logger = logging.getLogger(__name__)

SAMPLE_PRODUCTS_PATH = Path(__file__).resolve().parent.parent / "data" / "sample_products.json"


def load_sample_products(path: Path = SAMPLE_PRODUCTS_PATH) -> List[SampleProduct]:
    with path.open(encoding="utf-8") as fh:
        raw = json.load(fh)
    products = [SampleProduct.model_validate(item) for item in raw]
    logger.info("Loaded %d sample products from %s", len(products), path.name)
    return products


@lru_cache(maxsize=1)
def get_sample_products() -> List[SampleProduct]:
    return load_sample_products()
