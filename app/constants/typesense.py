"""Constants for the Typesense product collections."""

EN_US = "en_US"
ES_ES = "es_ES"

# Order in which per-locale payloads are checked and bucketed
LOCALES = (EN_US, ES_ES)

API_KEY_HEADER = "X-TYPESENSE-API-KEY"

ALIAS_PATH = "/aliases/{alias}"
IMPORT_PATH = "/collections/{collection}/documents/import"
DOCUMENTS_PATH = "/collections/{collection}/documents"
ODOO_ID_FILTER = "odoo_id:={odoo_id}"


class ProductAction:
    """Product event actions that need special handling."""
    DELETE = "delete"


class BucketAction:
    """Outbound call grouping for a batch."""
    UPSERT = "upsert"
    DELETE = "delete"
