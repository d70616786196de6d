from entity_match.datasets.profiles import (
    CUSTOMER_SCHEMA,
    PRODUCT_SCHEMA,
    SCHEMAS,
    SUPPLIER_COLUMNS,
    SUPPLIER_SCHEMA,
)
from entity_match.datasets.reference import ReferenceDataset, ReferenceDatasetGenerator

__all__ = [
    "CUSTOMER_SCHEMA",
    "PRODUCT_SCHEMA",
    "SCHEMAS",
    "SUPPLIER_COLUMNS",
    "SUPPLIER_SCHEMA",
    "ReferenceDataset",
    "ReferenceDatasetGenerator",
]
