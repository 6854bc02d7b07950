"""Product lookup and admin CRUD."""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields, replace
from typing import Any, Mapping

from motoin.domain.errors import NotFoundError, ValidationError
from motoin.domain.identifiers import validate_uuid
from motoin.domain.products import Product, ProductDraft
from motoin.ports.product_repository import ProductRepository

logger = logging.getLogger(__name__)

RESOURCE = "Product"


@dataclass(frozen=True, slots=True)
class UpdateProductRequest:
    product_id: str
    changes: Mapping[str, Any]


def _draft_from(product: Product) -> ProductDraft:
    return ProductDraft(**{f.name: getattr(product, f.name) for f in fields(ProductDraft)})


class GetProduct:
    """
    Resolve a product by UUID, or by its legacy numeric shop id.

    Purely numeric identifiers are looked up as legacy ids so links from the
    previous storefront keep working.
    """

    def __init__(self, product_repository: ProductRepository) -> None:
        self._repository = product_repository

    def execute(self, identifier: str) -> Product:
        """
        Raises:
            NotFoundError: If no product matches
        """
        if identifier.isdigit():
            product = self._repository.get_by_wc_id(int(identifier))
        else:
            try:
                validate_uuid(identifier, field="product_id")
            except ValidationError:
                raise NotFoundError(RESOURCE, identifier)
            product = self._repository.get_by_id(identifier)

        if product is None:
            raise NotFoundError(RESOURCE, identifier)
        return product


class CreateProduct:
    def __init__(self, product_repository: ProductRepository) -> None:
        self._repository = product_repository

    def execute(self, draft: ProductDraft) -> Product:
        draft.validate()
        product = self._repository.add(draft)
        logger.info("Product created", extra={"product_id": product.id, "sku": product.sku})
        return product


class UpdateProduct:
    """Partial update: only the keys present in changes are modified."""

    def __init__(self, product_repository: ProductRepository) -> None:
        self._repository = product_repository

    def execute(self, request: UpdateProductRequest) -> Product:
        validate_uuid(request.product_id, field="product_id")

        current = self._repository.get_by_id(request.product_id)
        if current is None:
            raise NotFoundError(RESOURCE, request.product_id)

        draft = replace(_draft_from(current), **request.changes)
        draft.validate()

        updated = self._repository.update(request.product_id, draft)
        if updated is None:
            raise NotFoundError(RESOURCE, request.product_id)

        logger.info("Product updated", extra={"product_id": updated.id, "fields": sorted(request.changes)})
        return updated


class DeleteProduct:
    def __init__(self, product_repository: ProductRepository) -> None:
        self._repository = product_repository

    def execute(self, product_id: str) -> None:
        validate_uuid(product_id, field="product_id")
        if not self._repository.delete(product_id):
            raise NotFoundError(RESOURCE, product_id)
        logger.info("Product deleted", extra={"product_id": product_id})
