"""Rooms app package: the admin-managed room catalog."""
