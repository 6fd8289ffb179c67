"""Board listing and scoring API endpoint."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from card_counter import LOGGER
from card_counter.entities.api_schemas.score_schemas import BoardListResponse, BoardScoreResponse
from card_counter.frameworks.api.base_endpoint import ServiceAPIEndpointBluePrint
from card_counter.use_cases.board_score_use_case import BoardScoreUseCase
from card_counter.utils.exceptions import CardCounterException


class BoardsEndpoint(ServiceAPIEndpointBluePrint):
    """API endpoint for the boards of the kanban source."""

    def __init__(self, board_score_use_case: BoardScoreUseCase):
        """Initialize the endpoint.

        Args:
            board_score_use_case: Use case fetching and scoring boards
        """
        self.board_score_use_case = board_score_use_case
        super().__init__()

    def create_rest_api_route(self) -> APIRouter:
        api_route = APIRouter(
            prefix="/boards",
            tags=["Boards"]
        )

        @api_route.get(
            "/",
            summary="List boards",
            description="Returns the boards visible to the configured kanban account",
            response_model=BoardListResponse
        )
        async def list_boards():
            try:
                boards = await self.board_score_use_case.list_boards()
                return BoardListResponse(boards=boards)
            except CardCounterException:
                raise
            except Exception as e:
                LOGGER.error(f"Error listing boards: {str(e)}", exc_info=True)
                raise HTTPException(
                    status_code=500,
                    detail=f"Error listing boards: {str(e)}"
                )

        @api_route.get(
            "/{board_id}/score",
            summary="Score a board",
            description="Sums the story points of every list of a board",
            response_model=BoardScoreResponse
        )
        async def score_board(
            board_id: str,
            filter: Optional[str] = Query(None, description="Leave out lists whose name contains this text"),
            save: bool = Query(False, description="Store the snapshot for later burndown charts"),
            compare: bool = Query(False, description="Report changes since the newest stored snapshot"),
        ):
            """Score a board.

            Args:
                board_id: Board to score
                filter: Lists whose name contains this text are left out
                save: Whether to persist the snapshot
                compare: Whether to diff against the newest stored snapshot

            Returns:
                Per-list summaries with the TOTAL row
            """
            try:
                LOGGER.debug(f"Scoring board {board_id} with filter={filter}, save={save}, compare={compare}")
                report = await self.board_score_use_case.execute(
                    board_id, name_filter=filter, save=save, compare=compare
                )
                return BoardScoreResponse(
                    board=report.board,
                    timestamp=report.timestamp,
                    lists=report.summary.lists,
                    total=report.summary.total,
                    deltas=report.deltas,
                    baseline_timestamp=report.baseline_timestamp,
                    saved=report.saved,
                )
            except CardCounterException:
                raise
            except Exception as e:
                LOGGER.error(f"Error scoring board {board_id}: {str(e)}", exc_info=True)
                raise HTTPException(
                    status_code=500,
                    detail=f"Error scoring board: {str(e)}"
                )

        return api_route
