"""Property API views."""

from __future__ import annotations

from rest_framework import permissions, status, viewsets  # type: ignore
from rest_framework.response import Response  # type: ignore

from .serializers import PropertySerializer, PropertyWriteSerializer
from .services import PropertyCatalog


class PropertyViewSet(viewsets.ViewSet):
    """Public catalog reads; writes go through the catalog service.

    PUT and PATCH both replace only the supplied fields.
    """

    permission_classes = [permissions.IsAuthenticatedOrReadOnly]
    serializer_class = PropertySerializer

    def get_catalog(self) -> PropertyCatalog:
        return PropertyCatalog.from_settings()

    def _write_payload(self, request, *, partial: bool):
        serializer = PropertyWriteSerializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        data = dict(serializer.validated_data)
        return data, data.pop("image", None)

    def list(self, request):  # type: ignore
        properties = self.get_catalog().list_properties(request.query_params)
        return Response(PropertySerializer(properties, many=True).data)

    def retrieve(self, request, pk=None):  # type: ignore
        property_obj = self.get_catalog().get_property(pk)
        return Response(PropertySerializer(property_obj).data)

    def create(self, request):  # type: ignore
        data, image = self._write_payload(request, partial=False)
        property_obj = self.get_catalog().create_property(data, image=image, requester=request.user)
        return Response(PropertySerializer(property_obj).data, status=status.HTTP_201_CREATED)

    def update(self, request, pk=None):  # type: ignore
        data, image = self._write_payload(request, partial=True)
        property_obj = self.get_catalog().update_property(pk, data, image=image, requester=request.user)
        return Response(PropertySerializer(property_obj).data)

    def partial_update(self, request, pk=None):  # type: ignore
        return self.update(request, pk=pk)

    def destroy(self, request, pk=None):  # type: ignore
        self.get_catalog().delete_property(pk, requester=request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)
