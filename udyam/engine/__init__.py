"""Wizard engine - core infrastructure for the schema-driven form wizard."""

from .engine import WizardEngine, WizardState
from .loader import SchemaLoader
from .runner import ActionRunner, HttpActionRunner, MockActionRunner
from .schema import FormSchema, FormStep, FormField, FormButton, FieldType
from .validation import validate_field, validate_step

__all__ = [
    'WizardEngine',
    'WizardState',
    'SchemaLoader',
    'ActionRunner',
    'HttpActionRunner',
    'MockActionRunner',
    'FormSchema',
    'FormStep',
    'FormField',
    'FormButton',
    'FieldType',
    'validate_field',
    'validate_step',
]
