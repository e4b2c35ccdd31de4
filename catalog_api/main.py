# catalog_api/main.py
import logging
from contextlib import asynccontextmanager
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, FastAPI, Query, Request
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import Settings, get_settings
from .database import InMemoryProductStore, ProductRepository, load_products
from .models import MessageResponse, ProductResponse, UpdateProductResponse
from .orchestrator import ProductOrchestrator
from .outcomes import Outcome

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(level=settings.effective_log_level, format=LOG_FORMAT)


# ---------------------------
# Dependencies
# ---------------------------
def get_orchestrator(request: Request) -> ProductOrchestrator:
    return request.app.state.orchestrator


def _respond(outcome: Outcome) -> JSONResponse:
    return JSONResponse(status_code=outcome.status_code, content=jsonable_encoder(outcome.body()))


# ---------------------------
# Product endpoints
# ---------------------------
router = APIRouter(prefix="/api/products", tags=["Products"])

_ERROR_RESPONSES: Dict[int, Dict[str, Any]] = {
    400: {"description": "Invalid request; field errors or a message"},
    500: {"model": MessageResponse, "description": "Unexpected failure"},
}


@router.get(
    "",
    response_model=List[ProductResponse],
    responses=_ERROR_RESPONSES,
    summary="Get filtered products",
)
async def get_filtered_products(
    name: Optional[str] = Query(None, description="Case-insensitive name fragment"),
    category_id: Optional[str] = Query(None, alias="categoryId", description="Exact category id"),
    min_price: Optional[str] = Query(None, alias="minPrice", description="Inclusive lower price bound"),
    max_price: Optional[str] = Query(None, alias="maxPrice", description="Inclusive upper price bound"),
    orchestrator: ProductOrchestrator = Depends(get_orchestrator),
):
    criteria = {
        "name": name,
        "categoryId": category_id,
        "minPrice": min_price,
        "maxPrice": max_price,
    }
    outcome = orchestrator.handle_filter_request({k: v for k, v in criteria.items() if v is not None})
    return _respond(outcome)


@router.patch(
    "/{product_id}",
    response_model=UpdateProductResponse,
    responses={**_ERROR_RESPONSES, 404: {"model": MessageResponse, "description": "Unknown product"}},
    summary="Update a product's name and/or price",
)
async def update_product(
    product_id: int,
    payload: Optional[Dict[str, Any]] = Body(default=None, examples=[{"name": "Gaming Laptop", "price": 1299.99}]),
    orchestrator: ProductOrchestrator = Depends(get_orchestrator),
):
    outcome = orchestrator.handle_update_request(product_id, payload)
    return _respond(outcome)


# ---------------------------
# App factory
# ---------------------------
def _build_store(settings: Settings) -> InMemoryProductStore:
    path = settings.products_path
    if path is not None:
        return InMemoryProductStore(load_products(path))
    return InMemoryProductStore()


def create_app(store: Optional[ProductRepository] = None, settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    repository = store if store is not None else _build_store(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        configure_logging(settings)
        logger.info("Starting %s", settings.app_name)
        yield
        logger.info("Shutting down %s", settings.app_name)

    app = FastAPI(
        title=settings.app_name,
        version="1.0.0",
        description="Filter and partially update an in-memory product catalog",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.settings = settings
    app.state.orchestrator = ProductOrchestrator(repository)
    app.include_router(router)

    @app.get("/health", tags=["Health"])
    async def health():
        return {"status": "ok"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "catalog_api.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.effective_log_level.lower(),
    )
