from sqlalchemy import func

from bloodbank.models.patient import Patient
from bloodbank.services.repository import BaseRepository


class PatientRepository(BaseRepository):
    model = Patient
    pk_name = "id_patient"
    label = "Patient"
    not_found_template = "No {label} with id : {id} found."

    def returning_columns(self):
        t = self.table
        fullname = func.trim(t.c.firstname + " " + func.coalesce(t.c.lastname, ""))
        return (t, fullname.label("fullname"))
