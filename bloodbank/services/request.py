from datetime import datetime, timezone
from typing import Any, Dict, List

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from bloodbank.models.doctor import Doctor
from bloodbank.models.hospital import Hospital
from bloodbank.models.patient import Patient
from bloodbank.models.request import BloodRequest, RequestStatus
from bloodbank.services.confirmed import ConfirmedRepository
from bloodbank.services.repository import BaseRepository, Row, driver_message
from bloodbank.utils.exceptions import (
    BloodBankError,
    ConflictError,
    PartialTransitionError,
    StoreError,
)
from bloodbank.utils.logging_config import get_logger, log_audit_event

logger = get_logger(__name__)


def is_terminal_status(status) -> bool:
    """Unknown status values are treated as not terminal."""
    try:
        return RequestStatus(status).is_terminal
    except ValueError:
        return False


class BloodRequestRepository(BaseRepository):
    model = BloodRequest
    pk_name = "id_request"
    label = "Request data"

    async def create(self, fields: Row) -> Row:
        if is_terminal_status(fields.get("status")):
            raise ConflictError(
                "A new request must be waiting (status 0); "
                "approve or reject it with an update."
            )
        fields = {**fields, "requestedat": datetime.now(timezone.utc)}
        return await super().create(fields)

    def details_stmt(self):
        """Requests with the patient, doctor and hospital names resolved."""
        r = self.table
        p = Patient.__table__
        d = Doctor.__table__
        h = Hospital.__table__
        patient_name = func.trim(p.c.firstname + " " + func.coalesce(p.c.lastname, ""))
        return (
            select(
                r,
                patient_name.label("patient_name"),
                d.c.doctorname,
                h.c.hospitalname.label("hospital_name"),
            )
            .select_from(
                r.outerjoin(p, r.c.id_patient == p.c.id_patient)
                .outerjoin(d, r.c.id_doctor == d.c.id_doctor)
                .outerjoin(h, d.c.id_hospital == h.c.id_hospital)
            )
            .order_by(r.c.id_request)
        )

    async def list_details(self) -> List[Row]:
        return await self.fetch_all(
            self.details_stmt(), "Failed to fetch request Data!"
        )

    async def get_detail(self, request_id: int) -> Row:
        row = await self.fetch_one(
            self.details_stmt().where(self.pk == request_id),
            "Failed to fetch request Data!",
        )
        if row is None:
            raise self.not_found(request_id)
        return row


class RequestLifecycleService:
    """
    Moves a request through waiting -> approved/rejected.

    An update that resolves a request (status 1 or 2) copies it into the
    confirmed table and deletes it from the pending table. The lock, update,
    archive and delete run in one transaction, so a request is never both
    pending and confirmed.
    """

    def __init__(self, db: AsyncSession):
        self.db = db
        self.requests = BloodRequestRepository(db)
        self.confirmed = ConfirmedRepository(db)

    async def update_request(self, request_id: int, fields: Dict[str, Any]) -> Row:
        """
        Replace the request's fields and archive it when the new status is
        terminal. Returns the updated row as it was before archiving.

        Raises:
            NotFoundError: no pending request has this id
            StoreError: the update itself failed
            PartialTransitionError: the update applied but archiving failed;
                everything was rolled back
        """
        try:
            # Serializes concurrent transitions of the same request
            locked = (
                await self.db.execute(self.requests.lock_stmt(request_id))
            ).first()
            if locked is None:
                raise self.requests.not_found(request_id)

            result = await self.db.execute(
                self.requests.update_stmt(request_id, fields)
            )
            updated = result.mappings().first()
            if updated is None:
                raise self.requests.not_found(request_id)
            updated = dict(updated)
        except BloodBankError:
            await self.db.rollback()
            raise
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(
                "Request update failed",
                extra={
                    "extra_fields": {
                        "event_type": "request_update_failed",
                        "request_id": request_id,
                        "error": driver_message(e),
                    }
                },
            )
            raise StoreError(
                "Failed to update a request Data!", error=driver_message(e)
            ) from e

        resolved = is_terminal_status(updated["status"])
        if resolved:
            await self._archive(request_id, updated)

        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            if resolved:
                raise PartialTransitionError(error=driver_message(e)) from e
            raise StoreError(
                "Failed to update a request Data!", error=driver_message(e)
            ) from e

        log_audit_event(
            action="archive" if resolved else "update",
            resource_type="blood_request",
            resource_id=str(request_id),
            new_values={"status": updated["status"]},
        )
        return updated

    async def _archive(self, request_id: int, updated: Row) -> None:
        try:
            await self.db.execute(self.confirmed.archive_stmt(updated))

            deleted = (
                await self.db.execute(self.requests.delete_stmt(request_id))
            ).first()
            if deleted is None:
                # Another transition already removed it
                logger.warning(
                    "Resolved request was already removed from pending",
                    extra={
                        "extra_fields": {
                            "event_type": "request_already_archived",
                            "request_id": request_id,
                        }
                    },
                )
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(
                "Archiving resolved request failed, transaction rolled back",
                extra={
                    "extra_fields": {
                        "event_type": "request_archive_failed",
                        "request_id": request_id,
                        "status": updated["status"],
                        "error": driver_message(e),
                    }
                },
            )
            raise PartialTransitionError(error=driver_message(e)) from e
