"""Access policy: who may view or change properties and bookings.

Every authorization decision in the project is made here. The catalog and
booking services call these predicates before touching storage; views only
require authentication and never re-implement an ownership or role check.

Rules:
- administrators may do anything;
- a property may be changed by its owner; an unowned property only by an
  administrator;
- a booking may be viewed and cancelled by its booker, the owner of the
  booked property, or an administrator;
- a booking's status may be set only by the property owner or an
  administrator;
- a property's bookings may be listed only by its owner or an administrator.
"""

from __future__ import annotations


def _is_authenticated(principal) -> bool:
    return principal is not None and getattr(principal, "is_authenticated", False)


def _is_booking(resource) -> bool:
    return resource._meta.label == "bookings.Booking"


def is_admin(principal) -> bool:
    return _is_authenticated(principal) and principal.is_admin()


def owns_property(principal, property_obj) -> bool:
    if not _is_authenticated(principal) or property_obj.owner_id is None:
        return False
    return property_obj.owner_id == principal.pk


def is_booker(principal, booking) -> bool:
    return _is_authenticated(principal) and booking.user_id == principal.pk


def can_create_property(principal) -> bool:
    return is_admin(principal)


def can_view(principal, resource) -> bool:
    """Properties are public; bookings are visible to their stakeholders."""
    if not _is_booking(resource):
        return True
    return is_admin(principal) or is_booker(principal, resource) or owns_property(principal, resource.property)


def can_mutate(principal, resource) -> bool:
    """Change a property, or cancel a booking."""
    if is_admin(principal):
        return True
    if _is_booking(resource):
        return is_booker(principal, resource) or owns_property(principal, resource.property)
    return owns_property(principal, resource)


def can_manage_booking(principal, booking) -> bool:
    """Set an arbitrary booking status. Bookers alone may only cancel."""
    return is_admin(principal) or owns_property(principal, booking.property)


def can_list_property_bookings(principal, property_obj) -> bool:
    return is_admin(principal) or owns_property(principal, property_obj)
