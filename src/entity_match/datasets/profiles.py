from __future__ import annotations

from entity_match.schema import FieldTag, RecordSchema

SUPPLIER_COLUMNS = [
    "id",
    "name",
    "contact_person",
    "email",
    "phone",
    "website",
    "address",
    "tax_id",
    "status",
]


SUPPLIER_SCHEMA = RecordSchema.from_mapping(
    {
        FieldTag.RECORD_ID: ["id"],
        FieldTag.NAME: ["name"],
        FieldTag.EMAIL: ["email"],
        FieldTag.PHONE: ["phone"],
        FieldTag.WEBSITE: ["website"],
    }
)

# Customer pickers search on the full name, first and last name joined.
CUSTOMER_SCHEMA = RecordSchema.from_mapping(
    {
        FieldTag.RECORD_ID: ["id"],
        FieldTag.NAME: ["first_name", "last_name"],
        FieldTag.EMAIL: ["email"],
        FieldTag.PHONE: ["phone"],
    }
)

PRODUCT_SCHEMA = RecordSchema.from_mapping(
    {
        FieldTag.RECORD_ID: ["id"],
        FieldTag.TEXT: ["name"],
        FieldTag.KIND: ["kind"],
    }
)

SCHEMAS = {
    "supplier": SUPPLIER_SCHEMA,
    "customer": CUSTOMER_SCHEMA,
    "product": PRODUCT_SCHEMA,
}
