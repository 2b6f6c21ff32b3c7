"""API v1: resource, auth and health routes."""

from portfolio.api.v1.router import api_router

__all__ = ["api_router"]
