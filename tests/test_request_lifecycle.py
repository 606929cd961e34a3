"""
Service-level tests for moving requests from pending to the confirmed archive.
"""

from unittest.mock import patch

import pytest
from sqlalchemy import func, select, text

from bloodbank.models.request import BloodRequest, ConfirmedRequest
from bloodbank.schemas.request import BloodRequestUpdate
from bloodbank.services.request import (
    BloodRequestRepository,
    RequestLifecycleService,
    is_terminal_status,
)
from bloodbank.utils.exceptions import (
    ConflictError,
    NotFoundError,
    PartialTransitionError,
)


def request_fields(**overrides) -> dict:
    data = {
        "id_patient": None,
        "id_doctor": None,
        "bloodtype": "O",
        "rhesus": "-",
        "quantity": 2,
        "urgency": 3,
        "status": 0,
    }
    data.update(overrides)
    return BloodRequestUpdate(**data).model_dump()


async def count(db_session, model) -> int:
    result = await db_session.execute(select(func.count()).select_from(model))
    return result.scalar_one()


class TestRequestLifecycle:
    async def test_approve_moves_request_to_confirmed(self, db_session):
        created = await BloodRequestRepository(db_session).create(request_fields())
        service = RequestLifecycleService(db_session)

        updated = await service.update_request(
            created["id_request"], request_fields(status=1)
        )

        assert updated["status"] == 1
        assert updated["id_request"] == created["id_request"]
        assert await count(db_session, BloodRequest) == 0

        confirmed = (
            (await db_session.execute(select(ConfirmedRequest.__table__)))
            .mappings()
            .all()
        )
        assert len(confirmed) == 1
        assert confirmed[0]["id_request"] == created["id_request"]
        assert confirmed[0]["status"] == 1
        assert confirmed[0]["bloodtype"] == "O"
        assert confirmed[0]["quantity"] == 2
        assert confirmed[0]["requestedat"] == created["requestedat"]

    async def test_reject_also_archives(self, db_session):
        created = await BloodRequestRepository(db_session).create(request_fields())

        await RequestLifecycleService(db_session).update_request(
            created["id_request"], request_fields(status=2)
        )

        assert await count(db_session, BloodRequest) == 0
        assert await count(db_session, ConfirmedRequest) == 1

    async def test_waiting_status_stays_pending(self, db_session):
        created = await BloodRequestRepository(db_session).create(request_fields())

        updated = await RequestLifecycleService(db_session).update_request(
            created["id_request"], request_fields(quantity=5)
        )

        assert updated["quantity"] == 5
        assert updated["requestedat"] == created["requestedat"]
        assert await count(db_session, BloodRequest) == 1
        assert await count(db_session, ConfirmedRequest) == 0

    async def test_missing_request(self, db_session):
        with pytest.raises(NotFoundError) as exc_info:
            await RequestLifecycleService(db_session).update_request(
                404, request_fields(status=1)
            )

        assert exc_info.value.status_code == 404
        assert await count(db_session, ConfirmedRequest) == 0

    async def test_archive_failure_rolls_back_everything(self, db_session):
        created = await BloodRequestRepository(db_session).create(request_fields())
        service = RequestLifecycleService(db_session)
        broken_insert = text("INSERT INTO missing_archive (id) VALUES (1)")

        with patch.object(service.confirmed, "archive_stmt", return_value=broken_insert):
            with pytest.raises(PartialTransitionError) as exc_info:
                await service.update_request(
                    created["id_request"], request_fields(status=1)
                )

        assert exc_info.value.status_code == 500
        assert exc_info.value.error is not None

        pending = await BloodRequestRepository(db_session).get_by_id(
            created["id_request"]
        )
        assert pending["status"] == 0
        assert await count(db_session, ConfirmedRequest) == 0

    async def test_second_resolution_finds_nothing(self, db_session):
        created = await BloodRequestRepository(db_session).create(request_fields())
        service = RequestLifecycleService(db_session)
        await service.update_request(created["id_request"], request_fields(status=1))

        with pytest.raises(NotFoundError):
            await service.update_request(created["id_request"], request_fields(status=2))

        assert await count(db_session, ConfirmedRequest) == 1

    async def test_approval_scenario(self, db_session):
        fields = request_fields(
            id_patient=1, id_doctor=2, bloodtype="A", rhesus="+", quantity=2, urgency=3
        )
        created = await BloodRequestRepository(db_session).create(fields)

        await RequestLifecycleService(db_session).update_request(
            created["id_request"], {**fields, "status": 1}
        )

        pending = await db_session.execute(
            select(BloodRequest.__table__).where(
                BloodRequest.id_request == created["id_request"]
            )
        )
        assert pending.first() is None

        archived = (
            (await db_session.execute(select(ConfirmedRequest.__table__)))
            .mappings()
            .one()
        )
        assert (archived["bloodtype"], archived["rhesus"]) == ("A", "+")
        assert archived["quantity"] == 2
        assert archived["status"] == 1
        assert archived["id_patient"] == 1
        assert archived["id_doctor"] == 2

    async def test_request_removed_concurrently_is_still_archived_once(
        self, db_session
    ):
        created = await BloodRequestRepository(db_session).create(request_fields())
        service = RequestLifecycleService(db_session)
        delete_stmt = service.requests.delete_stmt

        # The pending row is gone by the time the delete runs
        with patch.object(
            service.requests,
            "delete_stmt",
            side_effect=lambda _request_id: delete_stmt(999999),
        ):
            updated = await service.update_request(
                created["id_request"], request_fields(status=1)
            )

        assert updated["status"] == 1
        assert updated["id_request"] == created["id_request"]
        assert await count(db_session, ConfirmedRequest) == 1

    async def test_unknown_status_stays_pending(self, db_session):
        created = await BloodRequestRepository(db_session).create(request_fields())

        updated = await RequestLifecycleService(db_session).update_request(
            created["id_request"], request_fields(status=7)
        )

        assert updated["status"] == 7
        assert await count(db_session, BloodRequest) == 1
        assert await count(db_session, ConfirmedRequest) == 0

    async def test_new_request_must_be_waiting(self, db_session):
        with pytest.raises(ConflictError) as exc_info:
            await BloodRequestRepository(db_session).create(request_fields(status=2))

        assert exc_info.value.status_code == 400
        assert await count(db_session, BloodRequest) == 0


@pytest.mark.parametrize(
    "status, terminal",
    [(0, False), (1, True), (2, True), (7, False), (None, False)],
)
def test_is_terminal_status(status, terminal):
    assert is_terminal_status(status) is terminal
