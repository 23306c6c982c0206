"""
FastAPI Application Entry Point

Reddy's Kitchen storefront backend: serves the restaurant catalog from a
JSON file and keeps the flat store of placed orders.

Endpoints:
    - GET /api/restaurants: Restaurant catalog
    - POST /api/orders: Place an order (checkout)
    - GET /api/orders: List orders, newest first
    - GET /api/orders/{order_id}: Single order
    - GET /health: System health check

Run:
    uvicorn storefront.main:app --port 5000

Version: 1.0.0
"""

import json
import logging
from datetime import datetime
from typing import Any
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Depends, Request
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
import redis

from storefront.core.config import get_settings, setup_logging
from storefront.database import get_db, init_db, engine
from storefront.models import Order
from storefront.schemas import (
    CatalogErrorResponse,
    ErrorResponse,
    HealthResponse,
    OrderCreate,
    OrderCreateResponse,
    OrderItemCreate,
    OrderResponse,
    RestaurantRecord,
)
from storefront.services.catalog_store import CatalogUnavailableError, get_catalog_store
from storefront.services.order_ledger import ledger_row_source
from storefront.tasks import export_order_to_ledger

settings = get_settings()
setup_logging()
logger = logging.getLogger(__name__)


# =============================================================================
# STARTUP / SHUTDOWN
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the order table and check the catalog file before serving."""
    logger.info("=" * 60)
    logger.info(f"🚀 Starting {settings.app_name}")
    logger.info(f"   Version: {settings.app_version}")
    logger.info(f"   Environment: {settings.env_mode.value}")
    logger.info(f"   Catalog: {settings.catalog_file}")
    logger.info("=" * 60)

    await init_db()
    logger.info("✅ Database initialized")

    if not get_catalog_store().health_check():
        logger.warning(f"⚠️ Catalog file not servable: {settings.catalog_file}")

    if settings.ledger_export_enabled:
        logger.info(f"✅ Ledger export enabled → {settings.ledger_path}")

    yield

    logger.info("Closing order store connections...")
    await engine.dispose()
    logger.info("✅ Shutdown complete")


# =============================================================================
# APP
# =============================================================================

app = FastAPI(
    title=settings.app_name,
    description="Food-ordering storefront API: restaurant catalog and order store.",
    version=settings.app_version,
    lifespan=lifespan,
    docs_url=None if settings.is_production else "/docs",
    redoc_url=None if settings.is_production else "/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# PRICING & LEDGER HELPERS
# =============================================================================

def calculate_order_totals(items: list[OrderItemCreate]) -> dict[str, float]:
    """Calculate order subtotal, delivery fee and total."""
    subtotal = sum(item.qty * item.price for item in items)
    total = round(subtotal + settings.delivery_fee, 2)

    return {
        "subtotal": round(subtotal, 2),
        "delivery_fee": settings.delivery_fee,
        "total": total,
    }


def queue_ledger_export(order: Order) -> None:
    """Hand a stored order to the ledger worker."""
    try:
        export_order_to_ledger.delay(ledger_row_source(order))
    except Exception:
        # Order is already committed
        logger.exception(f"Could not queue ledger export for Order #{order.id}")


# =============================================================================
# STATUS
# =============================================================================

@app.get("/", tags=["Root"])
async def root() -> dict[str, Any]:
    """Liveness banner."""
    return {
        "message": f"{settings.app_name} API is running!",
        "version": settings.app_version,
        "environment": settings.env_mode.value,
        "documentation": app.docs_url,
        "health": "/health",
    }


@app.get(
    "/health",
    response_model=HealthResponse,
    tags=["Health"],
    summary="System Health Check",
)
async def health_check(
    db: AsyncSession = Depends(get_db)
) -> HealthResponse:
    """Verify the order store, catalog file and ledger broker."""

    db_status = "healthy"
    try:
        await db.execute(select(func.count(Order.id)))
    except Exception as e:
        db_status = f"unhealthy: {str(e)}"
        logger.error(f"Database health check failed: {e}")

    catalog_status = "healthy" if get_catalog_store().health_check() else "unhealthy"

    redis_status = "disabled"
    if settings.ledger_export_enabled:
        redis_status = "healthy"
        try:
            r = redis.Redis.from_url(settings.redis_url, socket_timeout=2)
            r.ping()
            r.close()
        except Exception as e:
            redis_status = f"unhealthy: {str(e)}"
            logger.error(f"Redis health check failed: {e}")

    overall = "operational" if all(
        s in ("healthy", "disabled") for s in [db_status, catalog_status, redis_status]
    ) else "degraded"

    return HealthResponse(
        status=overall,
        database=db_status,
        redis=redis_status,
        catalog=catalog_status,
        timestamp=datetime.now(),
    )


# =============================================================================
# CATALOG STORE
# =============================================================================

@app.get(
    "/api/restaurants",
    response_model=list[RestaurantRecord],
    response_model_exclude_none=True,
    responses={500: {"model": CatalogErrorResponse}},
    tags=["Catalog"],
    summary="Restaurant Catalog",
)
async def list_restaurants():
    """Return every restaurant and its menu from the catalog file."""
    try:
        return get_catalog_store().load()
    except CatalogUnavailableError:
        return JSONResponse(
            status_code=500,
            content={"message": f"Check {get_catalog_store().path.name}"},
        )


# =============================================================================
# ORDER STORE
# =============================================================================

@app.post(
    "/api/orders",
    status_code=201,
    response_model=OrderCreateResponse,
    responses={400: {"model": ErrorResponse}},
    tags=["Orders"],
    summary="Place Order",
)
async def create_order(
    order_data: OrderCreate,
    db: AsyncSession = Depends(get_db),
) -> OrderCreateResponse:
    """
    Store a checkout submission.

    The submitted total must equal the sum of the line totals plus the
    flat delivery fee.
    """
    logger.info(f"Creating order for: {order_data.customer_name}")

    totals = calculate_order_totals(order_data.items)
    if abs(order_data.total - totals["total"]) > 0.01:
        logger.warning(
            f"Rejected order for {order_data.customer_name}: "
            f"total {order_data.total} != {totals['total']}"
        )
        raise HTTPException(
            status_code=400,
            detail=f"Order total mismatch: expected {totals['total']}"
        )

    items_json = json.dumps(
        [item.model_dump(by_alias=True) for item in order_data.items],
        ensure_ascii=False,
    )

    new_order = Order(
        customer_name=order_data.customer_name,
        phone=order_data.phone,
        address=order_data.address,
        payment_method=order_data.payment,
        items=items_json,
        subtotal=totals["subtotal"],
        delivery_fee=totals["delivery_fee"],
        total_amount=totals["total"],
    )

    db.add(new_order)
    await db.commit()
    await db.refresh(new_order)

    logger.info(f"Order #{new_order.id} created successfully")

    if settings.ledger_export_enabled:
        queue_ledger_export(new_order)

    return OrderCreateResponse(
        success=True,
        message="Order placed successfully!",
        id=new_order.id,
        total=new_order.total_amount,
        created_at=new_order.created_at,
    )


@app.get(
    "/api/orders",
    response_model=list[OrderResponse],
    tags=["Orders"],
    summary="List Orders",
)
async def list_orders(
    db: AsyncSession = Depends(get_db),
) -> list[OrderResponse]:
    """Retrieve every order, newest first."""
    result = await db.execute(select(Order).order_by(Order.created_at.desc()))
    return [OrderResponse.from_model(order) for order in result.scalars().all()]


@app.get(
    "/api/orders/{order_id}",
    response_model=OrderResponse,
    responses={404: {"model": ErrorResponse}},
    tags=["Orders"],
)
async def get_order(
    order_id: str,
    db: AsyncSession = Depends(get_db),
) -> OrderResponse:
    """One stored order, by `_id`."""
    result = await db.execute(select(Order).where(Order.id == order_id))
    order = result.scalar_one_or_none()

    if not order:
        raise HTTPException(status_code=404, detail=f"Order #{order_id} not found")

    return OrderResponse.from_model(order)


# =============================================================================
# FALLBACK ERROR HANDLER
# =============================================================================

@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log anything unhandled and answer with a generic 500 body."""
    logger.exception(f"Unhandled exception: {exc}")

    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": "Internal Server Error",
            "detail": str(exc) if settings.debug else "An unexpected error occurred",
        },
    )


def run() -> None:
    """Console entry point: serve the API with uvicorn."""
    import uvicorn

    uvicorn.run(app, host=settings.api_host, port=settings.api_port)


if __name__ == "__main__":
    run()
