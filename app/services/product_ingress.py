"""Validación y encolado de eventos de producto recibidos por HTTP."""

import logging
from typing import Any, Dict, Union

from app.core.exceptions import ConsistencyError, SchemaValidationError
from app.schemas.products import validate_product_event
from app.services.product_queue import ProductQueue

logger = logging.getLogger(__name__)

ACCEPTED_MESSAGE = "Producto encolado con éxito"


class ProductIngressService:
    """Valida un evento y lo envía a la cola tal cual."""

    def __init__(self, queue: ProductQueue):
        self.queue = queue

    def handle(self, body: Union[bytes, str, Dict[str, Any]]) -> Dict[str, Any]:
        """
        Valida el cuerpo de la petición y lo encola.

        Args:
            body: Cuerpo en bruto de la petición (o ya decodificado)

        Returns:
            Acuse de recibo

        Raises:
            SchemaValidationError: el cuerpo no cumple el esquema
            ConsistencyError: languages no concuerda con los payloads
            EnqueueError: no se ha podido encolar
        """
        try:
            event = validate_product_event(body)
        except (SchemaValidationError, ConsistencyError) as e:
            logger.warning(f"Product event rejected: {e}")
            raise

        self.queue.send(event)

        logger.info(
            f"Product event queued: action={event.action}, "
            f"backend={event.backend_id}, languages={event.languages}"
        )
        return {
            "status": "ok",
            "message": ACCEPTED_MESSAGE,
            "action": event.action,
            "languages": list(event.languages),
        }
