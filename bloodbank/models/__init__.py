from .hospital import Hospital
from .doctor import Doctor
from .patient import Patient
from .donor import Donor
from .blood_unit import BloodUnit, BloodUnitStatus
from .request import BloodRequest, ConfirmedRequest, RequestStatus
from .user import User, UserRole
