from bloodbank.models.doctor import Doctor
from bloodbank.services.repository import BaseRepository


class DoctorRepository(BaseRepository):
    model = Doctor
    pk_name = "id_doctor"
    label = "Doctor"
    not_found_template = "No {label} with id : {id} found."
