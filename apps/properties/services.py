"""Property catalog: the write path for properties and their images.

Views never save a ``Property`` themselves. Every create, update and delete
goes through :class:`PropertyCatalog`, which checks the access policy,
validates the merged entity and keeps the media store in step with the
database. Stored images are released best-effort: a failed release is
logged and never fails the request.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from django.core.exceptions import ValidationError as DjangoValidationError  # type: ignore
from django.db import DatabaseError, transaction  # type: ignore
from django.db.models import ProtectedError  # type: ignore

from apps.users import access_policy
from shared.domain.exceptions import Conflict, Forbidden, NotFound, ServerError, ValidationError
from shared.domain.value_objects import parse_identifier
from shared.infrastructure.media import InvalidImage, MediaStoreError, StoredMedia, get_media_store

from .filters import PropertyFilterSet
from .models import Property

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = (
    "title",
    "description",
    "location",
    "price_per_night",
    "bedrooms",
    "bathrooms",
    "guests",
    "image_url",
)


class PropertyCatalog:
    def __init__(self, media_store):
        self.media_store = media_store

    @classmethod
    def from_settings(cls) -> "PropertyCatalog":
        return cls(media_store=get_media_store())

    # Queries

    def list_properties(self, filters: Mapping[str, Any] | None = None):
        """All properties, newest first, narrowed by the optional filters."""
        filterset = PropertyFilterSet(data=filters or {}, queryset=Property.objects.select_related("owner"))
        if not filterset.is_valid():
            raise ValidationError(errors={k: list(v) for k, v in filterset.errors.items()})
        return filterset.qs

    def get_property(self, identity) -> Property:
        pk = parse_identifier(identity)
        try:
            return Property.objects.select_related("owner").get(pk=pk)
        except Property.DoesNotExist as exc:
            raise NotFound("Property not found.") from exc

    # Commands

    def create_property(self, data: Mapping[str, Any], image=None, owner=None, *, requester=None) -> Property:
        if not access_policy.can_create_property(requester):
            raise Forbidden("Only administrators can create properties.")

        property_obj = Property(owner=owner if owner is not None else requester)
        self._assign(property_obj, data)
        if not property_obj.image_url:
            property_obj.image_url = Property._meta.get_field("image_url").get_default()
        self._validate(property_obj)

        stored = self._store_image(image) if image is not None else None
        if stored is not None:
            property_obj.image_url, property_obj.image_handle = stored.url, stored.handle

        try:
            with transaction.atomic():
                property_obj.save()
        except DatabaseError as exc:
            if stored is not None:
                self._discard_image(stored.handle)
            raise ServerError("Could not save property.") from exc

        logger.info(f"Property {property_obj.pk} created by user {getattr(requester, 'pk', None)}")
        return property_obj

    def update_property(self, identity, data: Mapping[str, Any], image=None, *, requester=None) -> Property:
        property_obj = self.get_property(identity)
        if not access_policy.can_mutate(requester, property_obj):
            raise Forbidden("You cannot modify this property.")

        previous_handle = property_obj.image_handle
        self._assign(property_obj, data)
        if "image_url" in data and image is None:
            # An explicit URL replaces any stored upload.
            property_obj.image_handle = ""
        self._validate(property_obj)

        stored = self._store_image(image) if image is not None else None
        if stored is not None:
            property_obj.image_url, property_obj.image_handle = stored.url, stored.handle

        try:
            with transaction.atomic():
                property_obj.save()
        except DatabaseError as exc:
            if stored is not None:
                self._discard_image(stored.handle)
            raise ServerError("Could not save property.") from exc

        if previous_handle and previous_handle != property_obj.image_handle:
            transaction.on_commit(lambda: self._discard_image(previous_handle))
        return property_obj

    def delete_property(self, identity, *, requester=None) -> None:
        property_obj = self.get_property(identity)
        if not access_policy.can_mutate(requester, property_obj):
            raise Forbidden("You cannot delete this property.")

        if property_obj.bookings.exists():
            raise Conflict("Property has bookings and cannot be deleted.")

        handle, pk = property_obj.image_handle, property_obj.pk
        try:
            with transaction.atomic():
                property_obj.delete()
        except ProtectedError as exc:
            raise Conflict("Property has bookings and cannot be deleted.") from exc
        except DatabaseError as exc:
            raise ServerError("Could not delete property.") from exc

        logger.info(f"Property {pk} deleted by user {getattr(requester, 'pk', None)}")
        if handle:
            transaction.on_commit(lambda: self._discard_image(handle))

    # Helpers

    @staticmethod
    def _assign(property_obj: Property, data: Mapping[str, Any]) -> None:
        for field in EDITABLE_FIELDS:
            if field in data:
                value = data[field]
                if isinstance(value, str):
                    value = value.strip()
                setattr(property_obj, field, value)

    @staticmethod
    def _validate(property_obj: Property) -> None:
        try:
            property_obj.full_clean()
        except DjangoValidationError as exc:
            raise ValidationError(errors=exc.message_dict) from exc

    def _store_image(self, image) -> StoredMedia:
        try:
            return self.media_store.store(image)
        except InvalidImage as exc:
            raise ValidationError(errors={"image": [str(exc)]}) from exc
        except MediaStoreError as exc:
            raise ServerError("Image storage is unavailable.") from exc

    def _discard_image(self, handle: str) -> None:
        if not self.media_store.delete(handle):
            logger.warning(f"Stored image {handle} was not released")
