"""FastAPI configuration settings."""

from __future__ import annotations

from typing import Dict, List, Any

from card_counter import __version__

# API version prefix, empty to serve the routes at the root
api_prefix: str = ""

fastapi_information: Dict[str, Any] = {
    "title": "Card Counter API",
    "description": "Story point summaries and burndown charts for kanban boards",
    "version": __version__,
    "openapi_url": f"{api_prefix}/openapi.json",
    "docs_url": f"{api_prefix}/docs",
    "redoc_url": f"{api_prefix}/redoc",
}

fastapi_tags_metadata: List[Dict[str, str]] = [
    {
        "name": "Main",
        "description": "Main API endpoints and navigation",
    },
    {
        "name": "Boards",
        "description": "Boards of the kanban source and their story point scores",
    },
    {
        "name": "Burndown",
        "description": "Burndown charts rendered from stored snapshots",
    },
    {
        "name": "Health",
        "description": "Health check endpoints for monitoring service status",
    },
]
