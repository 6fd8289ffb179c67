"""FastAPI application entry point.

Serve with ``uvicorn card_counter.frameworks.api.entry_point:app``.
"""

from __future__ import annotations

from card_counter.config_dependency_injection import get_container
from card_counter.frameworks.api.api_endpoint import APIEndpoint

app = get_container()[APIEndpoint].rest_application
