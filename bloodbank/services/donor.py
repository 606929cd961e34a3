from bloodbank.models.donor import Donor
from bloodbank.services.repository import BaseRepository


class DonorRepository(BaseRepository):
    model = Donor
    pk_name = "id_donor"
    label = "Donor data"
    read_failure_status = 500

    async def list(self):
        return await self.fetch_all(self.select_stmt(), "Server error")

    async def get_by_id(self, entity_id: int):
        row = await self.fetch_one(self.get_stmt(entity_id), "Server error")
        if row is None:
            raise self.not_found(entity_id)
        return row
