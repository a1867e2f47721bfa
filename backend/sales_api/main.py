"""
REST API main application.
Entry point for the FastAPI REST server.
"""

from fastapi import FastAPI

from sales_api.core.cors import configure_cors
from sales_api.core.exception_handlers import register_exception_handlers
from sales_api.core.lifespan import lifespan
from sales_api.core.middlewares import register_middlewares
from sales_api.routers.customers import router as customers_router
from sales_api.routers.health import router as health_router
from sales_api.routers.products import router as products_router
from sales_api.routers.sales import router as sales_router
from shared.config.settings import settings


# Create FastAPI application
app = FastAPI(
    title="Sales REST API",
    description="Customers, products and sales with paged CRUD",
    version="0.1.0",
    lifespan=lifespan,
)

# Middlewares (correlation ID, security headers, content type) and CORS
register_middlewares(app)
configure_cors(app)

# Problem details for every error
register_exception_handlers(app)


# =============================================================================
# Include Routers
# =============================================================================

app.include_router(health_router, prefix="/api")
app.include_router(customers_router, prefix="/api")
app.include_router(products_router, prefix="/api")
app.include_router(sales_router, prefix="/api")


# =============================================================================
# Development entry point
# =============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "sales_api.main:app",
        host=settings.rest_api_host,
        port=settings.rest_api_port,
        reload=True,
    )
