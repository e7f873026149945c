"""Presentation layer for Proyectate."""
