"""Base blueprint for API endpoints."""

from __future__ import annotations

from abc import ABC, abstractmethod

from fastapi import APIRouter


class ServiceAPIEndpointBluePrint(ABC):
    """Blueprint for API endpoints.

    Subclasses store their use cases first and then call ``super().__init__()``
    so the router is built with everything it needs.
    """

    def __init__(self):
        """Build the endpoint's router."""
        self.api_route = self.create_rest_api_route()

    @abstractmethod
    def create_rest_api_route(self) -> APIRouter:
        """Create and return a configured APIRouter with route handlers.

        Returns:
            APIRouter with all endpoint routes configured
        """
        pass
