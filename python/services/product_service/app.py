"""Product Service — FastAPI application for creating and listing products."""

from __future__ import annotations

import json
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from decimal import Decimal

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from loguru import logger
from pydantic import ValidationError
from pymongo import MongoClient
from starlette.responses import JSONResponse

from common.models import HealthResponse, ProductRequest, ProductResponse
from product_service.repository import MongoProductRepository, ProductRepository
from product_service.service import PersistenceFailure, ProductService
from product_service.settings import DEFAULT_DATABASE, Settings, get_settings


_PRODUCT_REQUEST_BODY = {
    "requestBody": {
        "required": True,
        "content": {"application/json": {"schema": ProductRequest.model_json_schema()}},
    }
}


def get_product_service(request: Request) -> ProductService:
    return request.app.state.product_service


async def read_product_request(request: Request) -> ProductRequest:
    """Decode the body keeping JSON number prices as exact decimals."""
    body = await request.body()
    try:
        data = json.loads(body, parse_float=Decimal)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise RequestValidationError(
            [{"type": "json_invalid", "loc": ("body",), "msg": str(exc), "input": {}}],
            body=body,
        ) from exc
    try:
        return ProductRequest.model_validate(data)
    except ValidationError as exc:
        raise RequestValidationError(
            [{**err, "loc": ("body", *err["loc"])} for err in exc.errors()],
            body=data,
        ) from exc


async def _invalid_request(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    logger.info("Rejected {} {}: {}", request.method, request.url.path, exc.errors())
    return JSONResponse(
        status_code=400, content={"detail": "Malformed product request"}
    )


async def _persistence_failure(
    request: Request, exc: PersistenceFailure
) -> JSONResponse:
    logger.opt(exception=exc).error(
        "Storage failure on {} {}", request.method, request.url.path
    )
    return JSONResponse(
        status_code=503, content={"detail": "Product storage unavailable"}
    )


async def _unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.opt(exception=exc).error(
        "Unhandled error on {} {}", request.method, request.url.path
    )
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


def create_app(
    repository: ProductRepository | None = None,
    settings: Settings | None = None,
) -> FastAPI:
    """Build the application.

    With an explicit ``repository`` the app uses it as is; otherwise a
    MongoDB client is opened from ``settings.mongodb_uri`` at startup and
    closed at shutdown.
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if repository is not None:
            yield
            return

        client: MongoClient = MongoClient(settings.mongodb_uri)
        database = client.get_default_database(DEFAULT_DATABASE)
        logger.info("Using MongoDB database {}", database.name)
        app.state.product_service = ProductService(MongoProductRepository(database))
        try:
            yield
        finally:
            client.close()

    app = FastAPI(title="Product Service", version="0.3.0", lifespan=lifespan)
    if repository is not None:
        app.state.product_service = ProductService(repository)

    app.add_exception_handler(RequestValidationError, _invalid_request)
    app.add_exception_handler(PersistenceFailure, _persistence_failure)
    app.add_exception_handler(Exception, _unexpected)

    @app.get("/health", response_model=HealthResponse)
    def health():
        return HealthResponse(status="ok", service="product-service")

    @app.get("/api/product", response_model=list[ProductResponse])
    def get_all_products(service: ProductService = Depends(get_product_service)):
        return service.get_all_products()

    @app.post(
        "/api/product",
        response_model=ProductResponse,
        status_code=201,
        openapi_extra=_PRODUCT_REQUEST_BODY,
    )
    def create_product(
        payload: ProductRequest = Depends(read_product_request),
        service: ProductService = Depends(get_product_service),
    ):
        return service.create_product(payload)

    return app
