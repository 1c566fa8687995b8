"""API views for the booking domain."""

from __future__ import annotations

from rest_framework import permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from shared.domain.value_objects import parse_identifier

from .availability import occupied_ranges
from .serializers import (
    BookingCreateSerializer,
    BookingSerializer,
    BookingStatusSerializer,
    OccupiedRangeSerializer,
    PropertyBookingSerializer,
)
from .services import BookingService


class BookingViewSet(viewsets.ViewSet):
    """Booking endpoints. Authorization is decided by the booking service."""

    permission_classes = [permissions.IsAuthenticated]
    serializer_class = BookingSerializer

    def get_service(self) -> BookingService:
        return BookingService.from_settings()

    def create(self, request):  # type: ignore
        serializer = BookingCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        booking = self.get_service().create_booking(
            data["property_id"],
            request.user,
            data["check_in_date"],
            data["check_out_date"],
            data["guests"],
        )
        return Response(BookingSerializer(booking).data, status=status.HTTP_201_CREATED)

    def retrieve(self, request, pk=None):  # type: ignore
        booking = self.get_service().get_booking(pk, request.user)
        return Response(BookingSerializer(booking).data)

    @action(detail=False, methods=["get"])
    def my(self, request):  # type: ignore
        bookings = self.get_service().list_for_user(request.user)
        return Response(BookingSerializer(bookings, many=True).data)

    @action(detail=True, methods=["put"])
    def cancel(self, request, pk=None):  # type: ignore
        booking = self.get_service().cancel_booking(pk, request.user)
        return Response(BookingSerializer(booking).data)

    @action(detail=True, methods=["put"], url_path="status", url_name="status")
    def change_status(self, request, pk=None):  # type: ignore
        serializer = BookingStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        booking = self.get_service().set_status(pk, request.user, serializer.validated_data["status"])
        return Response(BookingSerializer(booking).data)

    @action(
        detail=False,
        methods=["get"],
        url_path=r"property/(?P<property_id>[^/.]+)",
        url_name="property-bookings",
    )
    def property_bookings(self, request, property_id=None):  # type: ignore
        bookings = self.get_service().list_for_property(property_id, request.user)
        return Response(PropertyBookingSerializer(bookings, many=True).data)

    @action(
        detail=False,
        methods=["get"],
        url_path=r"property/(?P<property_id>[^/.]+)/occupied-dates",
        url_name="occupied-dates",
        permission_classes=[permissions.AllowAny],
    )
    def occupied_dates(self, request, property_id=None):  # type: ignore
        ranges = occupied_ranges(parse_identifier(property_id))
        data = [{"start": start, "end": end} for start, end in ranges]
        return Response(OccupiedRangeSerializer(data, many=True).data)
