"""
Sincronización por lotes de eventos de producto con Typesense.

Cada lote se reparte en cuatro grupos, (upsert | delete) x (en_US | es_ES).
Los grupos de alta/actualización se envían en una sola importación masiva
contra el alias del idioma; los de borrado resuelven el alias una vez y
borran producto a producto por odoo_id.
"""
import logging
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple

from app.constants.typesense import EN_US, ES_ES, BucketAction, ProductAction
from app.core.config import settings
from app.core.exceptions import (
    ConsistencyError,
    ProductSyncError,
    SchemaValidationError,
)
from app.schemas.products import (
    DeletedProduct,
    ProductEventBase,
    ProductPayload,
    validate_product_event,
)
from app.schemas.sync_schemas import BatchSyncReport, BucketSyncResult, MessageError
from app.services.typesense import TypesenseClient, dump_jsonl

logger = logging.getLogger(__name__)

# Orden de procesamiento de los grupos dentro de un lote
BUCKET_ORDER = (
    (BucketAction.UPSERT, ES_ES),
    (BucketAction.UPSERT, EN_US),
    (BucketAction.DELETE, ES_ES),
    (BucketAction.DELETE, EN_US),
)


def bucket_action(event: ProductEventBase) -> str:
    if event.action == ProductAction.DELETE:
        return BucketAction.DELETE
    return BucketAction.UPSERT


class ProductBuckets:
    """Payloads de un lote agrupados por (acción, idioma), en orden de llegada."""

    def __init__(self):
        self._items: Dict[Tuple[str, str], List[Any]] = {key: [] for key in BUCKET_ORDER}

    def add(self, action: str, locale: str, payload: Any) -> None:
        self._items[(action, locale)].append(payload)

    def get(self, action: str, locale: str) -> List[Any]:
        return self._items[(action, locale)]

    def sizes(self) -> Dict[str, int]:
        return {f"{action}.{locale}": len(items) for (action, locale), items in self._items.items()}

    def __iter__(self) -> Iterator[Tuple[str, str, List[Any]]]:
        for action, locale in BUCKET_ORDER:
            yield action, locale, self._items[(action, locale)]


def partition_events(messages: Sequence[Any]) -> Tuple[ProductBuckets, List[MessageError]]:
    """
    Valida cada mensaje y reparte sus payloads en los cuatro grupos.

    Los mensajes inválidos no detienen el lote: se devuelven aparte junto con
    su posición para poder informarlos.
    """
    buckets = ProductBuckets()
    invalid = []
    for index, message in enumerate(messages):
        try:
            event = validate_product_event(message)
        except (SchemaValidationError, ConsistencyError) as e:
            logger.error(f"Evento de producto inválido en la posición {index}: {e}")
            invalid.append(MessageError(index=index, error=str(e)))
            continue

        action = bucket_action(event)
        for locale, payload in event.payloads():
            buckets.add(action, locale, payload)
    return buckets, invalid


class ProductBatchSynchronizer:
    """Aplica un lote de eventos de producto sobre las colecciones de Typesense."""

    def __init__(self, client: TypesenseClient, aliases: Optional[Dict[str, str]] = None):
        self.client = client
        self.aliases = aliases or {
            EN_US: settings.english_products_alias,
            ES_ES: settings.spanish_products_alias,
        }

    def handle(self, messages: Sequence[Any]) -> BatchSyncReport:
        """
        Procesa un lote completo. Nunca lanza: los fallos quedan en el informe.

        Args:
            messages: Cuerpos de los mensajes de la cola (JSON o dict)
        """
        report = BatchSyncReport(received=len(messages))
        try:
            buckets, invalid = partition_events(messages)
            report.invalid = invalid
            logger.info(f"Lote de {len(messages)} eventos repartido: {buckets.sizes()}")

            for action, locale, items in buckets:
                if not items:
                    continue
                if action == BucketAction.UPSERT:
                    report.buckets.append(self.upsert_products(locale, items))
                else:
                    report.buckets.append(self.delete_products(locale, items))
        except Exception as e:
            logger.error(f"No se ha podido procesar el producto: {e}", exc_info=True)
            report.errors.append(str(e))

        if report.success:
            logger.info(f"Lote sincronizado: {len(report.buckets)} grupos")
        else:
            logger.warning(
                f"Lote sincronizado con errores: {len(report.invalid)} mensajes inválidos, "
                f"{sum(len(b.errors) for b in report.buckets) + len(report.errors)} fallos"
            )
        return report

    def upsert_products(self, locale: str, products: List[ProductPayload]) -> BucketSyncResult:
        """Importa todos los productos del grupo en una sola llamada."""
        alias = self.aliases[locale]
        result = BucketSyncResult(
            action=BucketAction.UPSERT, locale=locale, alias=alias, total=len(products)
        )
        try:
            result.collection = self.client.resolve_collection(alias)
            body = dump_jsonl(
                product.model_dump(mode="json", exclude_unset=True) for product in products
            )
            imported = self.client.bulk_import(result.collection, body, expected=len(products))
            result.succeeded = len(imported)
        except ProductSyncError as e:
            logger.error(f"Error importando {len(products)} productos en {alias}: {e}")
            result.errors.append(str(e))
        return result

    def delete_products(self, locale: str, products: List[DeletedProduct]) -> BucketSyncResult:
        """Borra los productos uno a uno; un fallo no detiene el resto del grupo."""
        alias = self.aliases[locale]
        result = BucketSyncResult(
            action=BucketAction.DELETE, locale=locale, alias=alias, total=len(products)
        )
        try:
            result.collection = self.client.resolve_collection(alias)
        except ProductSyncError as e:
            logger.error(f"Error resolviendo el alias {alias}: {e}")
            result.errors.append(str(e))
            return result

        for product in products:
            try:
                self.client.delete_by_filter(result.collection, product.odoo_id)
                result.succeeded += 1
            except ProductSyncError as e:
                logger.error(f"Error eliminando el producto {product.odoo_id} de {alias}: {e}")
                result.errors.append(f"odoo_id {product.odoo_id}: {e}")
        return result
