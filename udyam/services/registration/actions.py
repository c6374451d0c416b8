"""Registration step handlers.

Each handler validates one step's payload against the domain rules and
persists the result through a RegistrationStore. Validation problems raise
udyam.errors.ValidationError; unknown identifiers raise NotFoundError.
"""

import logging
from typing import Any, Dict

from ...errors import ValidationError
from .models import API_FIELDS, UdyamRegistration
from .store import RegistrationStore
from .validators import (
    clean_aadhaar,
    clean_pan,
    parse_consent,
    validate_aadhaar,
    validate_entrepreneur_name,
    validate_organization_type,
    validate_pan,
)

logger = logging.getLogger(__name__)

AADHAAR_INVALID = 'Please enter a valid 12-digit Aadhaar number'
NAME_INVALID = 'Entrepreneur name is required and must be less than 100 characters'
CONSENT_MISSING = 'You must consent to proceed'
PAN_INVALID = 'Please enter a valid PAN number (Format: ABCDE1234F)'
ORGANIZATION_TYPE_MISSING = 'Please select organization type'
REGISTRATION_ID_MISSING = 'Registration ID is required'
INVALID_STEP = 'Invalid step'


def handle_aadhaar_step(data: Dict[str, Any], store: RegistrationStore) -> Dict[str, Any]:
    """Step 1 - identity number, name and consent; creates the record."""
    aadhaar_number = data.get('aadhaarNumber')
    entrepreneur_name = data.get('entrepreneurName')

    if not validate_aadhaar(aadhaar_number):
        raise ValidationError(AADHAAR_INVALID, field_id='aadhaarNumber')
    if not validate_entrepreneur_name(entrepreneur_name):
        raise ValidationError(NAME_INVALID, field_id='entrepreneurName')
    if not parse_consent(data.get('aadhaarConsent')):
        raise ValidationError(CONSENT_MISSING, field_id='aadhaarConsent')

    registration = store.create(
        aadhaar_number=clean_aadhaar(aadhaar_number),
        entrepreneur_name=entrepreneur_name.strip(),
        aadhaar_consent=True,
        step_completed=1,
    )

    return {
        'success': True,
        'message': 'Aadhaar validation successful',
        'registrationId': registration.id,
    }


def handle_pan_step(data: Dict[str, Any], store: RegistrationStore) -> Dict[str, Any]:
    """Step 2 - PAN and organization type; updates the record from step 1."""
    pan_number = data.get('panNumber')
    organization_type = data.get('organizationType')
    registration_id = data.get('registrationId')

    if not validate_pan(pan_number):
        raise ValidationError(PAN_INVALID, field_id='panNumber')
    if not organization_type or not validate_organization_type(organization_type):
        raise ValidationError(ORGANIZATION_TYPE_MISSING, field_id='organizationType')
    if not registration_id:
        raise ValidationError(REGISTRATION_ID_MISSING)

    registration = store.update(registration_id, {
        'pan_number': clean_pan(pan_number),
        'organization_type': str(organization_type).strip(),
        'step_completed': 2,
    })

    return {
        'success': True,
        'message': 'PAN validation successful',
        'registrationId': registration.id,
    }


STEP_HANDLERS = {
    1: handle_aadhaar_step,
    2: handle_pan_step,
}


def submit_step(step: Any, data: Dict[str, Any], store: RegistrationStore) -> Dict[str, Any]:
    """
    Dispatch a step submission to its handler.

    Args:
        step: 1-based step number from the request
        data: Step payload
        store: Registration store

    Returns:
        Success envelope

    Raises:
        ValidationError: If the step number or payload is invalid
        NotFoundError: If step 2 names an unknown registration
    """
    # bool is an int subclass; True must not be taken for step 1
    if isinstance(step, bool) or not isinstance(step, int) or step not in STEP_HANDLERS:
        raise ValidationError(INVALID_STEP)
    if not isinstance(data, dict):
        raise ValidationError('Step data must be an object')

    return STEP_HANDLERS[step](data, store)


def normalize_patch(patch: Dict[str, Any]) -> Dict[str, Any]:
    """
    Validate a partial update and translate it to column names.

    Accepts camelCase API names or column names.

    Raises:
        ValidationError: On unknown fields or invalid values
    """
    if not isinstance(patch, dict) or not patch:
        raise ValidationError('Update must be a non-empty object')

    columns = set(API_FIELDS.values())
    changes = {}
    for key, value in patch.items():
        column = API_FIELDS.get(key, key)
        if column not in columns:
            raise ValidationError(f"Unknown field: {key}", field_id=key)
        changes[column] = value

    if 'aadhaar_number' in changes:
        if not validate_aadhaar(changes['aadhaar_number']):
            raise ValidationError(AADHAAR_INVALID, field_id='aadhaarNumber')
        changes['aadhaar_number'] = clean_aadhaar(changes['aadhaar_number'])
    if 'entrepreneur_name' in changes:
        if not validate_entrepreneur_name(changes['entrepreneur_name']):
            raise ValidationError(NAME_INVALID, field_id='entrepreneurName')
        changes['entrepreneur_name'] = changes['entrepreneur_name'].strip()
    if 'aadhaar_consent' in changes:
        changes['aadhaar_consent'] = parse_consent(changes['aadhaar_consent'])
    if 'pan_number' in changes:
        if not validate_pan(changes['pan_number']):
            raise ValidationError(PAN_INVALID, field_id='panNumber')
        changes['pan_number'] = clean_pan(changes['pan_number'])
    if 'organization_type' in changes:
        if not validate_organization_type(changes['organization_type']):
            raise ValidationError(ORGANIZATION_TYPE_MISSING, field_id='organizationType')
        changes['organization_type'] = str(changes['organization_type']).strip()
    if 'step_completed' in changes:
        step_completed = changes['step_completed']
        if isinstance(step_completed, bool) or not isinstance(step_completed, int) \
                or step_completed not in (1, 2):
            raise ValidationError('stepCompleted must be 1 or 2', field_id='stepCompleted')

    return changes


def update_registration(registration_id: str, patch: Dict[str, Any], store: RegistrationStore) -> UdyamRegistration:
    """Validate a partial update and apply it to an existing record."""
    return store.update(registration_id, normalize_patch(patch))
