"""Burndown chart API endpoint."""

from __future__ import annotations

from typing import Optional, Union

from fastapi import APIRouter, HTTPException, Query, Response, status

from card_counter import LOGGER
from card_counter.entities.api_schemas.burndown_schemas import (
    BurndownCommand,
    BurndownCommandRequest,
    BurndownComparisonResponse,
)
from card_counter.entities.constants import OutputMode
from card_counter.frameworks.api.base_endpoint import ServiceAPIEndpointBluePrint
from card_counter.settings.card_counter_settings import CardCounterSettings
from card_counter.use_cases.burndown_chart_use_case import BurndownChartUseCase
from card_counter.utils.exceptions import CardCounterException, CustomHTTPException


class BurndownEndpoint(ServiceAPIEndpointBluePrint):
    """API endpoint rendering burndown charts from stored snapshots."""

    def __init__(
        self,
        burndown_chart_use_case: BurndownChartUseCase,
        settings: CardCounterSettings,
    ):
        """Initialize the endpoint.

        Args:
            burndown_chart_use_case: Use case building and rendering the series
            settings: Application settings holding the default board
        """
        self.burndown_chart_use_case = burndown_chart_use_case
        self.settings = settings
        super().__init__()

    async def _chart_response(
        self,
        board_id: str,
        start: str,
        end: str,
        name_filter: Optional[str],
        output: OutputMode,
        compare: bool = False,
    ) -> Union[Response, BurndownComparisonResponse]:
        try:
            chart = await self.burndown_chart_use_case.execute(
                board_id, start, end, name_filter=name_filter, output=output, compare=compare
            )
        except CardCounterException:
            raise
        except Exception as e:
            LOGGER.error(f"Error rendering burndown of {board_id}: {str(e)}", exc_info=True)
            raise HTTPException(
                status_code=500,
                detail=f"Error rendering burndown: {str(e)}"
            )
        if compare:
            return BurndownComparisonResponse(
                board_id=board_id,
                output=chart.output,
                media_type=chart.media_type,
                content=chart.content,
                comparison=chart.series.comparison or [],
            )
        return Response(content=chart.content, media_type=chart.media_type)

    def create_rest_api_route(self) -> APIRouter:
        api_route = APIRouter(
            prefix="/burndown",
            tags=["Burndown"]
        )

        @api_route.get(
            "/{board_id}",
            summary="Render a burndown chart",
            description=(
                "Renders the day-by-day remaining and completed effort of a board as CSV, ASCII or SVG. "
                "With compare, a JSON body carries the chart and the per-list changes over the range."
            ),
        )
        async def burndown(
            board_id: str,
            start: str = Query(..., description="First day, YYYY-MM-DD"),
            end: str = Query(..., description="Last day, YYYY-MM-DD"),
            filter: Optional[str] = Query(None, description="Leave out lists whose name contains this text"),
            output: OutputMode = Query(OutputMode.CSV, description="Output format"),
            compare: bool = Query(
                False,
                description="Answer JSON with the chart and the per-list changes since the snapshot before the range",
            ),
        ):
            return await self._chart_response(board_id, start, end, filter, output, compare)

        @api_route.post(
            "/command",
            summary="Render a burndown chart from a chat command",
            description=(
                "Accepts 'burndown from YYYY-MM-DD to YYYY-MM-DD for <board-id>'. "
                "An empty command covers the last two weeks of the default board."
            ),
        )
        async def burndown_command(request: BurndownCommandRequest):
            if request.text.strip():
                command = BurndownCommand.parse(request.text)
            else:
                command = BurndownCommand.for_two_weeks_ago(self.settings.default_board_id)

            usage = command.helper_string()
            if usage is not None:
                LOGGER.info(f"Incomplete burndown command: {request.text!r}")
                raise CustomHTTPException(
                    status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                    message={"error": "incomplete_command", "detail": usage},
                )
            return await self._chart_response(
                command.board_id, command.start, command.end, None, request.output
            )

        return api_route
