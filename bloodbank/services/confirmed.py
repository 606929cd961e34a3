from bloodbank.models.request import ConfirmedRequest
from bloodbank.services.repository import BaseRepository

# Business columns carried from a resolved request into the archive
ARCHIVED_FIELDS = (
    "id_patient",
    "id_doctor",
    "bloodtype",
    "rhesus",
    "quantity",
    "urgency",
    "status",
    "requestedat",
)


class ConfirmedRepository(BaseRepository):
    """Archive of resolved requests. Rows are only written by the request workflow."""

    model = ConfirmedRequest
    pk_name = "id_confirmed"
    label = "Confirmed data"
    not_found_template = "{label} with ID {id} is not found."

    def archive_stmt(self, request_row: dict):
        fields = {name: request_row[name] for name in ARCHIVED_FIELDS}
        fields["id_request"] = request_row["id_request"]
        return self.insert_stmt(fields)
