"""API endpoints for receiving product events from Odoo."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from starlette.concurrency import run_in_threadpool

from app.core.exceptions import ConsistencyError, EnqueueError, SchemaValidationError
from app.services.product_ingress import ProductIngressService
from app.services.product_queue import ProductQueue, get_product_queue

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/")
async def receive_product_event(
    request: Request,
    queue: ProductQueue = Depends(get_product_queue)
):
    """
    Receive a product create/update/delete event and queue it for sync.

    The raw body is validated here instead of through a FastAPI body model so
    invalid events answer 400 with a readable message rather than 422.

    Returns:
        Acknowledgment response
    """
    raw_body = await request.body()
    service = ProductIngressService(queue)

    try:
        return await run_in_threadpool(service.handle, raw_body)
    except (SchemaValidationError, ConsistencyError) as e:
        raise HTTPException(
            status_code=e.status_code,
            detail=f"No se ha podido procesar el producto: {e}"
        )
    except EnqueueError as e:
        raise HTTPException(
            status_code=e.status_code,
            detail=f"No se ha podido encolar el producto: {e}"
        )
    except Exception as e:
        logger.error(f"Error processing product event: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"No se ha podido procesar el producto: {e}"
        )


@router.get("/health")
def product_receiver_health_check(queue: ProductQueue = Depends(get_product_queue)):
    """
    Health check endpoint for the product receiver.

    Returns:
        Queue status
    """
    if not queue.ping():
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Product queue is not reachable"
        )

    return {
        "status": "ok",
        "queue": queue.name,
        "pending": queue.size(),
        "message": "Product receiver is ready"
    }
