"""
Esquemas de los eventos de producto que llegan desde Odoo.

Un evento lleva una acción (create, update, delete), la lista de idiomas
afectados y un payload por idioma. El payload de un idioma debe existir si y
solo si el idioma aparece en ``languages``; esa comprobación se hace aparte
(``check_language_consistency``) porque se informa con un error distinto al de
esquema.
"""
from typing import Annotated, Any, Iterator, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from app.constants.typesense import LOCALES
from app.core.exceptions import ConsistencyError, SchemaValidationError

Locale = Literal["en_US", "es_ES"]

# Enteros y decimales se reenvían tal como llegan (10 no pasa a 10.0)
Number = Union[int, float]


class StrictModel(BaseModel):
    """Sin conversiones: "7" no es un número ni "yes" un booleano."""
    model_config = ConfigDict(strict=True)


class HierarchicalCategories(StrictModel):
    lv0: str
    lv1: str


class ProductBrand(StrictModel):
    id: Optional[Any] = None
    name: Optional[str]
    url_key: Optional[str]


class ProductPrice(StrictModel):
    value: Number
    tax_included: bool
    original_value: Number
    discount: Number


class ProductReference(StrictModel):
    """Campos comunes a cualquier documento de producto."""
    collection_alias: str
    odoo_id: int


class DeletedProduct(ProductReference):
    """Producto a eliminar del índice."""
    pass


class ProductPayload(ProductReference):
    """Documento completo tal y como se indexa en Typesense."""
    name: str
    display_name: str
    barcode: Optional[str]
    sku: str
    description: Optional[str]
    short_description: Optional[str]
    deduplication_key: str
    url_key: str
    avatar_image: Optional[str]
    images: List[str]
    hierarchical_categories: HierarchicalCategories
    uom_id: str
    brand: ProductBrand
    price: ProductPrice
    variant_count: int
    variant_attributes: List[str]
    dmi_ecommerce_product_backend_new_product: bool
    dmi_ecommerce_tags: List[str]
    dmi_product_sector: List[str]
    dmi_ecommerce_packaging_ids: List[str]
    dmi_ecommerce_optional_product_ids: List[str]
    dmi_ecommerce_alternative_product_ids: List[str]
    dmi_ecommerce_accesory_product_ids: List[str]
    compatible_machines: List[str]


class ProductEventBase(StrictModel):
    action: str
    backend_id: int
    languages: List[Locale]

    def payloads(self) -> Iterator[Tuple[str, Any]]:
        """Devuelve (locale, payload) para cada idioma listado en languages."""
        for locale in LOCALES:
            if locale in self.languages:
                yield locale, getattr(self, locale)


class UpsertProductEventBase(ProductEventBase):
    en_US: Optional[ProductPayload] = None
    es_ES: Optional[ProductPayload] = None


class CreateProductEvent(UpsertProductEventBase):
    action: Literal["create"]


class UpdateProductEvent(UpsertProductEventBase):
    action: Literal["update"]


class DeleteProductEvent(ProductEventBase):
    action: Literal["delete"]
    en_US: Optional[DeletedProduct] = None
    es_ES: Optional[DeletedProduct] = None


ProductEvent = Annotated[
    Union[CreateProductEvent, UpdateProductEvent, DeleteProductEvent],
    Field(discriminator="action"),
]

product_event_adapter = TypeAdapter(ProductEvent)


def parse_product_event(data: Any) -> ProductEventBase:
    """
    Valida un evento contra el esquema.

    Args:
        data: JSON en bruto (str/bytes) o un objeto ya decodificado

    Raises:
        SchemaValidationError: si el JSON es inválido o no cumple el esquema
    """
    try:
        if isinstance(data, (str, bytes, bytearray)):
            return product_event_adapter.validate_json(data)
        return product_event_adapter.validate_python(data)
    except ValidationError as e:
        raise SchemaValidationError(str(e)) from e


def check_language_consistency(event: ProductEventBase) -> None:
    """
    Comprueba que languages concuerda con los payloads recibidos.

    Raises:
        ConsistencyError: en la primera discrepancia encontrada
    """
    for locale in LOCALES:
        payload = getattr(event, locale)
        if locale in event.languages and payload is None:
            raise ConsistencyError(
                f"El campo {locale} es obligatorio",
                locale=locale,
                reason="required",
            )
        if locale not in event.languages and payload is not None:
            raise ConsistencyError(
                f"El campo {locale} no debería existir",
                locale=locale,
                reason="disallowed",
            )


def validate_product_event(data: Any) -> ProductEventBase:
    """Parsea el evento y comprueba la coherencia idiomas/payloads."""
    event = parse_product_event(data)
    check_language_consistency(event)
    return event
