"""SQLAlchemy implementation of GpsPositionRepository."""
import logging
from datetime import datetime
from typing import Optional, List, Iterable
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from app.domain.entities.gps_position import GpsPosition as GpsPositionEntity
from app.domain.exceptions import DuplicatePositionError
from app.domain.repositories.gps_position_repository import GpsPositionRepository
from app.infrastructure.persistence import models
from app.utils.time_utils import ensure_utc, to_naive_utc

logger = logging.getLogger(__name__)


def _to_entity(row: models.GpsPosition) -> GpsPositionEntity:
    return GpsPositionEntity(
        id=row.id,
        vehicle_id=row.vehicle_id,
        latitude=row.latitude,
        longitude=row.longitude,
        recorded_at=ensure_utc(row.recorded_at),
    )


def _to_row(position: GpsPositionEntity) -> models.GpsPosition:
    return models.GpsPosition(
        vehicle_id=position.vehicle_id,
        latitude=position.latitude,
        longitude=position.longitude,
        recorded_at=to_naive_utc(position.recorded_at),
    )


class SQLAlchemyGpsPositionRepository(GpsPositionRepository):
    """GPS position repository using SQLAlchemy.
    
    Timestamps are stored as naive UTC and returned as aware UTC.
    """

    def __init__(self, session: Session):
        self.session = session
        self._pending: List[models.GpsPosition] = []

    def add(self, position: GpsPositionEntity) -> None:
        row = _to_row(position)
        self.session.add(row)
        self._pending.append(row)

    def add_range(self, positions: Iterable[GpsPositionEntity]) -> None:
        rows = [_to_row(p) for p in positions]
        self.session.add_all(rows)
        self._pending.extend(rows)

    async def save_changes(self) -> List[GpsPositionEntity]:
        pending, self._pending = self._pending, []
        try:
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            # Lost the race against a concurrent insert of the same (vehicle, timestamp)
            logger.warning(f"Duplicate position rejected by storage: {str(e.orig)[:200]}")
            first = pending[0] if pending else None
            raise DuplicatePositionError(
                first.vehicle_id if first else 0,
                ensure_utc(first.recorded_at) if len(pending) == 1 else None,
            ) from e
        except Exception:
            self.session.rollback()
            raise
        for row in pending:
            self.session.refresh(row)
        return [_to_entity(r) for r in pending]

    async def position_exists(self, vehicle_id: int, recorded_at: datetime) -> bool:
        query = self.session.query(models.GpsPosition.id).filter(
            models.GpsPosition.vehicle_id == vehicle_id,
            models.GpsPosition.recorded_at == to_naive_utc(recorded_at),
        )
        return self.session.query(query.exists()).scalar()

    async def get_positions_for_vehicle(
        self, vehicle_id: int, from_time: datetime, to_time: datetime
    ) -> List[GpsPositionEntity]:
        rows = (
            self.session.query(models.GpsPosition)
            .filter(
                models.GpsPosition.vehicle_id == vehicle_id,
                models.GpsPosition.recorded_at >= to_naive_utc(from_time),
                models.GpsPosition.recorded_at <= to_naive_utc(to_time),
            )
            .order_by(models.GpsPosition.recorded_at)
            .all()
        )
        return [_to_entity(r) for r in rows]

    async def get_last_position_for_vehicle(self, vehicle_id: int) -> Optional[GpsPositionEntity]:
        row = (
            self.session.query(models.GpsPosition)
            .filter(models.GpsPosition.vehicle_id == vehicle_id)
            .order_by(models.GpsPosition.recorded_at.desc())
            .first()
        )
        return _to_entity(row) if row else None
