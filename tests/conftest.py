import copy
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.services.product_queue import ProductQueue, get_product_queue


PRODUCT_PAYLOAD = {
    "collection_alias": "english-products-alias",
    "odoo_id": 101,
    "name": "Cuchilla de corte",
    "display_name": "[CC-01] Cuchilla de corte",
    "barcode": None,
    "sku": "CC-01",
    "description": "Cuchilla de acero\ncon dos filos",
    "short_description": None,
    "deduplication_key": "cc-01",
    "url_key": "cuchilla-de-corte",
    "avatar_image": "https://cdn.example.com/cc-01.jpg",
    "images": ["https://cdn.example.com/cc-01.jpg", "https://cdn.example.com/cc-01-b.jpg"],
    "hierarchical_categories": {"lv0": "Recambios", "lv1": "Recambios > Cuchillas"},
    "uom_id": "Unidades",
    "brand": {"id": 7, "name": "Dmi", "url_key": "dmi"},
    "price": {"value": 12.5, "tax_included": True, "original_value": 15.0, "discount": 2.5},
    "variant_count": 1,
    "variant_attributes": [],
    "dmi_ecommerce_product_backend_new_product": False,
    "dmi_ecommerce_tags": ["oferta"],
    "dmi_product_sector": ["alimentación"],
    "dmi_ecommerce_packaging_ids": [],
    "dmi_ecommerce_optional_product_ids": [],
    "dmi_ecommerce_alternative_product_ids": ["102"],
    "dmi_ecommerce_accesory_product_ids": [],
    "compatible_machines": ["M-200"],
}


def build_payload(odoo_id=101, alias="english-products-alias", **overrides):
    payload = copy.deepcopy(PRODUCT_PAYLOAD)
    payload.update(odoo_id=odoo_id, collection_alias=alias, **overrides)
    return payload


def build_event(action="create", languages=("en_US",), odoo_id=101, **payloads):
    """Build an event with a payload for each listed language unless given explicitly."""
    event = {"action": action, "backend_id": 1, "languages": list(languages)}
    for locale in languages:
        if action == "delete":
            event[locale] = {"collection_alias": f"{locale}-alias", "odoo_id": odoo_id}
        else:
            event[locale] = build_payload(odoo_id=odoo_id, alias=f"{locale}-alias")
    event.update(payloads)
    return event


@pytest.fixture
def product_payload():
    return build_payload()


@pytest.fixture
def mock_queue():
    """ProductQueue over a mocked redis client"""
    return ProductQueue(MagicMock(), "test_product_events")


@pytest.fixture
def test_client(mock_queue):
    """Test client whose product queue is the mocked one"""
    app.dependency_overrides[get_product_queue] = lambda: mock_queue
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def make_payload():
    return build_payload


@pytest.fixture
def make_event():
    return build_event
