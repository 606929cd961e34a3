from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import func, select

from bloodbank.models.blood_unit import BloodUnit, BloodUnitStatus
from bloodbank.services.repository import BaseRepository, Row
from bloodbank.utils.exceptions import ConflictError


class BloodUnitRepository(BaseRepository):
    model = BloodUnit
    pk_name = "id_unit"
    label = "Blood unit"

    def _stock_stmt(self):
        t = self.table
        return (
            select(
                t.c.bloodtype,
                t.c.rhesus,
                func.count().label("quantity"),
                func.sum(t.c.volume).label("total_volume"),
            )
            .where(t.c.status == BloodUnitStatus.IN_STOCK)
            .group_by(t.c.bloodtype, t.c.rhesus)
            .order_by(t.c.bloodtype, t.c.rhesus)
        )

    async def stock_total(self) -> List[Row]:
        """In-stock units grouped by blood type and rhesus."""
        return await self.fetch_all(
            self._stock_stmt(), "Failed to get blood stocks data!"
        )

    async def stock_by_type(self, bloodtype: str, rhesus: Optional[str]) -> List[Row]:
        t = self.table
        stmt = self._stock_stmt().where(t.c.bloodtype == bloodtype)
        if rhesus is not None:
            stmt = stmt.where(t.c.rhesus == rhesus)
        return await self.fetch_all(stmt, "Failed to get blood stocks data!")

    async def create(self, fields: Row) -> Row:
        fields = {**fields, "donordate": datetime.now(timezone.utc)}
        return await super().create(fields)

    async def update(self, entity_id: int, fields: Row) -> Row:
        """
        Replace a unit's fields. A unit already dispensed (status 2) cannot be
        put back in stock; the check and the update share one transaction.
        """
        async with self.write(f"Failed to update {self.label}!"):
            current = (
                await self.db.execute(self.lock_stmt(entity_id))
            ).mappings().first()
            if current is None:
                raise self.not_found(entity_id)

            if (
                current["status"] == BloodUnitStatus.OUT
                and fields.get("status") == BloodUnitStatus.IN_STOCK
            ):
                raise ConflictError(
                    f"Blood unit with ID {entity_id} was already dispensed "
                    "and cannot return to stock."
                )

            result = await self.db.execute(self.update_stmt(entity_id, fields))
            row = dict(result.mappings().one())
        return row
