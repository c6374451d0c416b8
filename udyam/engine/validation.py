"""Field validation - required, pattern and max-length rules, in that order."""

import re
from typing import Any, Dict, Optional
from .schema import FormField, FormStep


def is_absent(value: Any) -> bool:
    """True for None, an unticked checkbox (False) or a blank string."""
    if value is None or value is False:
        return True
    if isinstance(value, str) and not value.strip():
        return True
    return False


def validate_field(field: FormField, value: Any) -> Optional[str]:
    """Validate one value against its field definition.

    Args:
        field: Field definition from the schema
        value: Current value (str, number, bool or None)

    Returns:
        None when valid, otherwise the message for the first failing rule

    Examples:
        >>> validate_field(FormField(id='pan', name='pan', label='PAN', type='text', required=True), '')
        'PAN is required'
    """
    messages = field.validation

    if field.required and is_absent(value):
        return (messages and messages.required) or f"{field.label} is required"

    # Whitespace-only text still goes through the pattern and length checks
    if value is None or value is False or value == '':
        return None

    text = str(value)

    if field.pattern and not re.fullmatch(field.pattern, text):
        return (messages and messages.pattern) or "Invalid format"

    if field.max_length is not None and len(text) > field.max_length:
        return (messages and messages.max_length) or f"Maximum {field.max_length} characters allowed"

    return None


def validate_step(step: FormStep, values: Dict[str, Any]) -> Dict[str, str]:
    """Validate every field of a step.

    Args:
        step: Step whose fields are checked
        values: Current form values keyed by field id

    Returns:
        Mapping of field id to message for each failing field (empty when valid)
    """
    errors = {}
    for field in step.fields:
        error = validate_field(field, values.get(field.id))
        if error:
            errors[field.id] = error
    return errors
