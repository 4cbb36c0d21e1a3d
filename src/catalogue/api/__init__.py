"""Catalogue domain API package."""

from catalogue.api.routes import menu_router, user_menu_router

__all__ = ["menu_router", "user_menu_router"]
