"""SQLAlchemy implementation of VehicleRepository."""
from typing import Optional, List
from sqlalchemy.orm import Session
from app.domain.entities.vehicle import Vehicle as VehicleEntity
from app.domain.repositories.vehicle_repository import VehicleRepository
from app.infrastructure.persistence import models
from app.utils.time_utils import ensure_utc, to_naive_utc


def _to_entity(row: models.Vehicle) -> VehicleEntity:
    return VehicleEntity(
        id=row.id,
        name=row.name,
        is_active=row.is_active,
        created_date=ensure_utc(row.created_date),
    )


class SQLAlchemyVehicleRepository(VehicleRepository):
    """Vehicle repository using SQLAlchemy."""

    def __init__(self, session: Session):
        self.session = session
        self._pending: List[models.Vehicle] = []

    async def get_by_id(self, vehicle_id: int) -> Optional[VehicleEntity]:
        row = self.session.get(models.Vehicle, vehicle_id)
        return _to_entity(row) if row else None

    async def list_all(self) -> List[VehicleEntity]:
        rows = self.session.query(models.Vehicle).order_by(models.Vehicle.name).all()
        return [_to_entity(r) for r in rows]

    def add(self, vehicle: VehicleEntity) -> None:
        row = models.Vehicle(
            id=vehicle.id,
            name=vehicle.name,
            is_active=vehicle.is_active,
            created_date=to_naive_utc(vehicle.created_date),
        )
        self.session.add(row)
        self._pending.append(row)

    async def save_changes(self) -> List[VehicleEntity]:
        pending, self._pending = self._pending, []
        try:
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
        for row in pending:
            self.session.refresh(row)
        return [_to_entity(r) for r in pending]
