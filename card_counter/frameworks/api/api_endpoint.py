"""API Endpoint class for the FastAPI application."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import uvicorn
from fastapi import APIRouter, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse
from pydantic_settings import BaseSettings, SettingsConfigDict

from card_counter import LOGGER
from card_counter.frameworks.api.configs.fastapi_doc import (
    api_prefix,
    fastapi_information,
    fastapi_tags_metadata,
)
from card_counter.frameworks.api.registry import SubServiceEndpoints
from card_counter.utils.exceptions import CustomException, CustomHTTPException


class APIEndpointConfig(BaseSettings):
    """Configuration settings for the API endpoint.

    Attributes:
        information: Information about the API
        tags_metadata: Tags metadata for OpenAPI
        api_version_prefix: Prefix every route is mounted under
        allow_origins: CORS allowed origins
        enable_docs: Whether to redirect the root to the API documentation
        host: Interface to bind the server to
        port: Port to run the server on
    """

    information: dict = fastapi_information
    tags_metadata: list = fastapi_tags_metadata
    api_version_prefix: str = api_prefix
    allow_origins: list = ["*"]
    enable_docs: bool = True
    host: str = "0.0.0.0"
    port: int = 8000

    model_config = SettingsConfigDict(env_prefix="card_counter_api_", extra="ignore")


class APIEndpoint:
    """Configures the FastAPI application around the registered endpoints."""

    def __init__(
        self,
        config: APIEndpointConfig,
        sub_service_endpoints: SubServiceEndpoints,
    ) -> None:
        """Initialize the API endpoint.

        Args:
            config: API endpoint configuration
            sub_service_endpoints: Registry of endpoint services
        """
        self.config = config
        self.logger = LOGGER
        self.api_route = APIRouter()
        self.sub_service_endpoints = sub_service_endpoints

        self.rest_api_app = self._create_rest_api_app()
        self._create_rest_api_route()
        self._register_sub_service_endpoints()
        self.rest_application = self.rest_api_app

    def _create_rest_api_app(self) -> FastAPI:
        @asynccontextmanager
        async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
            self.logger.info("Starting API server...")
            yield
            self.logger.info("Shutting down API server...")

        app = FastAPI(
            **self.config.information,
            openapi_tags=self.config.tags_metadata,
            lifespan=lifespan,
        )

        app.add_middleware(
            CORSMiddleware,
            allow_origins=self.config.allow_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

        @app.exception_handler(RequestValidationError)
        async def validation_exception_handler(request: Request, exc: RequestValidationError):
            errors = [
                f"{'.'.join(str(part) for part in error['loc'][1:]) or error['loc'][0]}: {error['msg']}"
                for error in exc.errors()
            ]
            return JSONResponse(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                content={
                    "detail": "validation_error",
                    "errors": errors,
                },
            )

        @app.exception_handler(CustomException)
        async def custom_exception_handler(request: Request, exc: CustomException):
            if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
                self.logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
            return JSONResponse(
                status_code=exc.status_code,
                content=exc.message,
                headers=exc.headers,
            )

        @app.exception_handler(CustomHTTPException)
        async def custom_http_exception_handler(request: Request, exc: CustomHTTPException):
            return JSONResponse(
                status_code=exc.status_code,
                content=exc.message,
                headers=exc.to_json(),
            )

        return app

    def _register_sub_service_endpoints(self) -> None:
        self.rest_api_app.include_router(
            self.api_route,
            prefix=self.config.api_version_prefix
        )

        for endpoint in self.sub_service_endpoints.endpoints:
            self.logger.info(f"Mounting endpoint: {endpoint.__class__.__name__}")
            self.rest_api_app.include_router(
                endpoint.api_route,
                prefix=self.config.api_version_prefix
            )

    def _create_rest_api_route(self) -> None:
        if self.config.enable_docs:
            @self.rest_api_app.get(
                "/",
                tags=["Main"],
                name="Root",
                include_in_schema=False,
            )
            async def root(request: Request):
                """Root endpoint of the API."""
                return RedirectResponse(url=self.config.information.get("docs_url", "/docs"))

    def run(self) -> None:
        """Run the FastAPI application with Uvicorn."""
        self.logger.info(f"Starting API server on {self.config.host}:{self.config.port}")
        uvicorn.run(
            self.rest_application,
            host=self.config.host,
            port=self.config.port,
            log_level="info",
        )
