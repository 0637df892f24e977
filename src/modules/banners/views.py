from __future__ import annotations

from rest_framework import status
from rest_framework.mixins import ListModelMixin
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.banners.dtos import CreateBannerDTO, UpdateBannerDTO
from modules.banners.exceptions import BannerNotFound, InvalidBannerWindow
from modules.banners.repositories.django_repository import BannerDjangoRepository
from modules.banners.serializers import BannerSerializer
from modules.banners.services import BannerService
from modules.core.responses import errors, success


class BannerViewSet(ListModelMixin, GenericViewSet):
    serializer_class = BannerSerializer

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = BannerService(repository=BannerDjangoRepository())

    def get_queryset(self):
        return self._service.list_banners()

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        try:
            banner = self._service.get_banner(pk)
        except BannerNotFound:
            return errors.not_found("Banner")
        return success(BannerSerializer(banner).data)

    def create(self, request: Request) -> Response:
        dto = CreateBannerDTO.model_validate(request.data)
        banner = self._service.create_banner(dto)
        return success(BannerSerializer(banner).data, status=status.HTTP_201_CREATED)

    def update(self, request: Request, pk: str | None = None) -> Response:
        dto = UpdateBannerDTO.model_validate(request.data)
        try:
            banner = self._service.update_banner(pk, dto)
        except BannerNotFound:
            return errors.not_found("Banner")
        except InvalidBannerWindow as exc:
            return errors.bad_request(str(exc))
        return success(BannerSerializer(banner).data)

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        return self.update(request, pk)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        try:
            self._service.delete_banner(pk)
        except BannerNotFound:
            return errors.not_found("Banner")
        return success({"message": "Banner deleted"})
