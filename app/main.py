import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.api.v1.endpoints.products import router as products_router
from app.core.config import settings
from app.services.product_queue import close_redis_client

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
_logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    # Cierre limpio de Redis
    close_redis_client()


app = FastAPI(title="Product search sync", lifespan=lifespan)

app.include_router(products_router, prefix="/products", tags=["products"])

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=5010)
