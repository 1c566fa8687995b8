"""Bookings app package.

This app encapsulates the booking domain: the booking model and its
status lifecycle, the availability engine answering whether a stay can be
accepted, and the lifecycle service that creates, prices and transitions
bookings. Creation is serialized per property so that two active bookings
of one property never overlap.
"""
