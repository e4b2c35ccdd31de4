# catalog_api/orchestrator.py
import logging
import threading
from typing import Any, Dict, Mapping, Optional

from pydantic import ValidationError

from .core import (
    FilterProductsRequest, UpdateProductRequest,
    collect_field_errors, _make_product_response
)
from .database import ProductRepository
from .models import UpdateProductResponse
from .outcomes import (
    BadRequest, InternalFailure, NotFound, Outcome, Success, ValidationFailed
)

logger = logging.getLogger(__name__)

PRICE_RANGE_MESSAGE = "Minimum price cannot be greater than maximum price."
INVALID_ID_MESSAGE = "Invalid product ID"
NO_FIELDS_MESSAGE = "At least one field (Name or Price) must be provided for update"
UPDATE_FAILED_MESSAGE = "Failed to update product"
UPDATED_MESSAGE = "Product updated successfully"


class ProductOrchestrator:
    """
    Validates catalog requests, runs them against a repository and turns the
    result into an outcome value. Nothing raised by the repository escapes.
    """

    def __init__(self, repository: ProductRepository):
        if repository is None:
            raise ValueError("repository is required")
        self._repository = repository
        self._locks: Dict[int, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    @property
    def repository(self) -> ProductRepository:
        return self._repository

    def _get_lock(self, product_id: int) -> threading.Lock:
        with self._locks_guard:
            if product_id not in self._locks:
                self._locks[product_id] = threading.Lock()
            return self._locks[product_id]

    # ---------------------------
    # Filter
    # ---------------------------
    def handle_filter_request(self, criteria: Optional[Mapping[str, Any]] = None) -> Outcome:
        try:
            request = FilterProductsRequest.model_validate(dict(criteria or {}))
        except ValidationError as exc:
            errors = collect_field_errors(exc, FilterProductsRequest)
            logger.debug("Rejected filter request: %s", errors)
            return ValidationFailed(errors)

        if (
            request.min_price is not None
            and request.max_price is not None
            and request.min_price > request.max_price
        ):
            logger.debug("Rejected filter request: min %s > max %s", request.min_price, request.max_price)
            return ValidationFailed({"minPrice": [PRICE_RANGE_MESSAGE]})

        try:
            logger.info(
                "Filtering products - name: %r, categoryId: %s, minPrice: %s, maxPrice: %s",
                request.name, request.category_id, request.min_price, request.max_price,
            )
            products = self._repository.query(
                name=request.name,
                category_id=request.category_id,
                min_price=request.min_price,
                max_price=request.max_price,
            )
            return Success([_make_product_response(p) for p in products])
        except Exception:
            logger.exception("Error occurred while filtering products")
            return InternalFailure()

    # ---------------------------
    # Update
    # ---------------------------
    def handle_update_request(self, product_id: int, payload: Optional[Mapping[str, Any]] = None) -> Outcome:
        if product_id <= 0:
            return BadRequest(INVALID_ID_MESSAGE)

        try:
            request = UpdateProductRequest.model_validate(dict(payload or {}))
        except ValidationError as exc:
            errors = collect_field_errors(exc, UpdateProductRequest)
            logger.debug("Rejected update of product %s: %s", product_id, errors)
            return ValidationFailed(errors)

        if not request.has_changes():
            return BadRequest(NO_FIELDS_MESSAGE)

        logger.info("Updating product %s - name: %r, price: %s", product_id, request.name, request.price)

        not_found = NotFound(f"Product with ID {product_id} not found")
        try:
            # locks are only created for ids the repository knows about
            if self._repository.get_by_id(product_id) is None:
                logger.warning("Product with ID %s not found", product_id)
                return not_found

            with self._get_lock(product_id):
                current = self._repository.get_by_id(product_id)
                if current is None:
                    logger.warning("Product with ID %s not found", product_id)
                    return not_found

                name = request.name if request.name is not None else current.name
                price = request.price if request.price is not None else current.price

                if not self._repository.update(product_id, name, price, current.category_id):
                    logger.error("Failed to update product %s", product_id)
                    return InternalFailure(UPDATE_FAILED_MESSAGE)

                updated = current.model_copy(update={"name": name, "price": price})
        except Exception:
            logger.exception("Error occurred while updating product %s", product_id)
            return InternalFailure()

        logger.info("Product %s updated successfully", product_id)
        return Success(UpdateProductResponse(
            success=True,
            message=UPDATED_MESSAGE,
            product=_make_product_response(updated),
        ))
