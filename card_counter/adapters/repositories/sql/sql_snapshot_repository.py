from __future__ import annotations

import asyncio
import json
from datetime import date
from datetime import timedelta
from typing import List
from typing import Optional

from sqlalchemy import Column
from sqlalchemy import create_engine
from sqlalchemy import Integer
from sqlalchemy import String
from sqlalchemy import Text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import declarative_base
from sqlalchemy.orm import sessionmaker

from card_counter import LOGGER
from card_counter.adapters.repositories.file_storage.json_snapshot_repository import (
    deck_from_summary,
)
from card_counter.adapters.repositories.file_storage.json_snapshot_repository import (
    summary_from_deck,
)
from card_counter.adapters.repositories.memory.in_memory_snapshot_repository import start_of_day
from card_counter.entities.snapshot import BoardSnapshot
from card_counter.settings.storage_settings import StorageSettings
from card_counter.use_cases.interfaces.snapshot_repository_interface import (
    SnapshotRepositoryInterface,
)
from card_counter.utils.exceptions import RepositoryUnavailable

Base = declarative_base()


class BoardSnapshotRecord(Base):
    """
    SQLAlchemy model of the 'board_snapshot' table.
    (board_id, time_stamp) is the primary key; lists holds the summaries as JSON.
    """

    __tablename__ = "board_snapshot"

    board_id = Column(String, primary_key=True)
    time_stamp = Column(Integer, primary_key=True)
    lists = Column(Text, nullable=False)

    def to_snapshot(self) -> BoardSnapshot:
        return BoardSnapshot.from_unix(
            self.board_id,
            self.time_stamp,
            [summary_from_deck(deck) for deck in json.loads(self.lists)],
        )


class SqlSnapshotRepository(SnapshotRepositoryInterface):
    """Snapshot store in any database SQLAlchemy can reach.

    Sessions are synchronous, so every query runs in a worker thread.
    """

    def __init__(self, settings: StorageSettings):
        if not settings.database_url:
            raise RepositoryUnavailable(
                "The sql store needs CARD_COUNTER_STORAGE_DATABASE_URL to be set"
            )
        try:
            self.engine = create_engine(settings.database_url)
            self.Session = sessionmaker(bind=self.engine)
            Base.metadata.create_all(self.engine)
        except SQLAlchemyError as e:
            LOGGER.error(f"Could not open snapshot database: {e}", exc_info=True)
            raise RepositoryUnavailable("Could not open snapshot database") from e

    async def save(self, snapshot: BoardSnapshot) -> None:
        record = BoardSnapshotRecord(
            board_id=snapshot.board_id,
            time_stamp=snapshot.unix_timestamp,
            lists=json.dumps([deck_from_summary(summary) for summary in snapshot.lists]),
        )

        def upsert() -> None:
            with self.Session() as session:
                session.merge(record)
                session.commit()

        await self._run(upsert, f"save snapshot of {snapshot.board_id}")

    async def load_range(self, board_id: str, start_date: date, end_date: date) -> List[BoardSnapshot]:
        lower = int(start_of_day(start_date).timestamp())
        upper = int(start_of_day(end_date + timedelta(days=1)).timestamp())

        def query() -> List[BoardSnapshot]:
            with self.Session() as session:
                records = (
                    session.query(BoardSnapshotRecord)
                    .filter(
                        BoardSnapshotRecord.board_id == board_id,
                        BoardSnapshotRecord.time_stamp >= lower,
                        BoardSnapshotRecord.time_stamp < upper,
                    )
                    .order_by(BoardSnapshotRecord.time_stamp)
                    .all()
                )
                return [record.to_snapshot() for record in records]

        return await self._run(query, f"load snapshots of {board_id}")

    async def load_latest_before(self, board_id: str, day: date) -> Optional[BoardSnapshot]:
        boundary = int(start_of_day(day).timestamp())
        return await self._latest(board_id, boundary)

    async def load_latest(self, board_id: str) -> Optional[BoardSnapshot]:
        return await self._latest(board_id, None)

    async def _latest(self, board_id: str, boundary: Optional[int]) -> Optional[BoardSnapshot]:
        def query() -> Optional[BoardSnapshot]:
            with self.Session() as session:
                records = session.query(BoardSnapshotRecord).filter(
                    BoardSnapshotRecord.board_id == board_id
                )
                if boundary is not None:
                    records = records.filter(BoardSnapshotRecord.time_stamp < boundary)
                record = records.order_by(BoardSnapshotRecord.time_stamp.desc()).first()
                return record.to_snapshot() if record is not None else None

        return await self._run(query, f"load latest snapshot of {board_id}")

    async def _run(self, operation, description: str):
        try:
            return await asyncio.to_thread(operation)
        except SQLAlchemyError as e:
            LOGGER.error(f"Could not {description}: {e}", exc_info=True)
            raise RepositoryUnavailable(f"Could not {description}") from e
