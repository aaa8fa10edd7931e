"""Reusable libraries used by the service layer."""
