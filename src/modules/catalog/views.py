"""Catalog API views.

Exposes ``CategoryService`` and ``ProductService`` via DRF ViewSets.
Domain exceptions are caught and translated into error envelopes; the
view never swallows generic exceptions.  Does **not** extend
``ModelViewSet``: all writes go through the service layer.
"""

from __future__ import annotations

from django.db.models import ProtectedError
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.mixins import ListModelMixin
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.catalog.dtos import (
    CreateCategoryDTO,
    CreateProductDTO,
    UpdateCategoryDTO,
    UpdateProductDTO,
)
from modules.catalog.exceptions import (
    CategoryAlreadyExists,
    CategoryHasProducts,
    CategoryNotFound,
    InvalidCategoryParent,
    ProductAlreadyExists,
    ProductNotFound,
)
from modules.catalog.filters import CategoryFilter, ProductFilter
from modules.catalog.repositories.django_repository import (
    CategoryDjangoRepository,
    ProductDjangoRepository,
)
from modules.catalog.serializers import CategorySerializer, ProductSerializer
from modules.catalog.services import (
    CATEGORY_HAS_PRODUCTS_MESSAGE,
    CategoryService,
    ProductService,
)
from modules.core.responses import errors, success


class CategoryViewSet(ListModelMixin, GenericViewSet):
    filterset_class = CategoryFilter
    serializer_class = CategorySerializer

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = CategoryService(repository=CategoryDjangoRepository())

    def get_queryset(self):
        return self._service.list_categories()

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/admin/categories/{pk}"""
        try:
            category = self._service.get_category(pk)
        except CategoryNotFound:
            return errors.not_found("Category")
        return success(CategorySerializer(category).data)

    def create(self, request: Request) -> Response:
        """POST /api/v1/admin/categories"""
        dto = CreateCategoryDTO.model_validate(request.data)
        try:
            category = self._service.create_category(dto)
        except CategoryAlreadyExists as exc:
            return errors.conflict(str(exc))
        except InvalidCategoryParent as exc:
            return errors.bad_request(str(exc))
        return success(CategorySerializer(category).data, status=status.HTTP_201_CREATED)

    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT/PATCH /api/v1/admin/categories/{pk}"""
        dto = UpdateCategoryDTO.model_validate(request.data)
        try:
            category = self._service.update_category(pk, dto)
        except CategoryNotFound:
            return errors.not_found("Category")
        except CategoryAlreadyExists as exc:
            return errors.conflict(str(exc))
        except InvalidCategoryParent as exc:
            return errors.bad_request(str(exc))
        return success(CategorySerializer(category).data)

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        return self.update(request, pk)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/v1/admin/categories/{pk}"""
        try:
            self._service.delete_category(pk)
        except CategoryNotFound:
            return errors.not_found("Category")
        except (CategoryHasProducts, ProtectedError):
            return errors.bad_request(CATEGORY_HAS_PRODUCTS_MESSAGE)
        return success({"message": "Category permanently deleted"})

    @action(detail=True, methods=["patch"], url_path="toggle-status")
    def toggle_status(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/v1/admin/categories/{pk}/toggle-status"""
        try:
            category = self._service.toggle_status(pk)
        except CategoryNotFound:
            return errors.not_found("Category")
        message = "Category activated" if category.is_active else "Category suspended"
        return success({"message": message, "is_active": category.is_active})


class ProductViewSet(ListModelMixin, GenericViewSet):
    filterset_class = ProductFilter
    serializer_class = ProductSerializer

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = ProductService(
            repository=ProductDjangoRepository(),
            category_repository=CategoryDjangoRepository(),
        )

    def get_queryset(self):
        return self._service.list_products()

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/admin/products/{pk}"""
        try:
            product = self._service.get_product(pk)
        except ProductNotFound:
            return errors.not_found("Product")
        return success(ProductSerializer(product).data)

    def create(self, request: Request) -> Response:
        """POST /api/v1/admin/products"""
        dto = CreateProductDTO.model_validate(request.data)
        try:
            product = self._service.create_product(dto)
        except ProductAlreadyExists as exc:
            return errors.conflict(str(exc))
        except CategoryNotFound:
            return errors.bad_request("Category not found")
        return success(ProductSerializer(product).data, status=status.HTTP_201_CREATED)

    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT/PATCH /api/v1/admin/products/{pk}"""
        dto = UpdateProductDTO.model_validate(request.data)
        try:
            product = self._service.update_product(pk, dto)
        except ProductNotFound:
            return errors.not_found("Product")
        except ProductAlreadyExists as exc:
            return errors.conflict(str(exc))
        except CategoryNotFound:
            return errors.bad_request("Category not found")
        return success(ProductSerializer(product).data)

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        return self.update(request, pk)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/v1/admin/products/{pk} (soft delete)"""
        try:
            self._service.delete_product(pk)
        except ProductNotFound:
            return errors.not_found("Product")
        return success({"message": "Product deleted"})
