"""Registration service module - step validation and record persistence."""

from .validators import (
    validate_aadhaar,
    validate_pan,
    validate_entrepreneur_name,
    validate_mobile,
    validate_email,
    validate_organization_type,
)
from .actions import submit_step, update_registration
from .models import UdyamRegistration
from .store import RegistrationStore, get_engine

__all__ = [
    'validate_aadhaar',
    'validate_pan',
    'validate_entrepreneur_name',
    'validate_mobile',
    'validate_email',
    'validate_organization_type',
    'submit_step',
    'update_registration',
    'UdyamRegistration',
    'RegistrationStore',
    'get_engine',
]
