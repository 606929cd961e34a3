from bloodbank.models.hospital import Hospital
from bloodbank.services.repository import BaseRepository


class HospitalRepository(BaseRepository):
    model = Hospital
    pk_name = "id_hospital"
    label = "Hospital"
