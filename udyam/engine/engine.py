"""Core wizard engine - drives the form schema with an injected runner."""

import asyncio
import logging
from typing import Dict, Any, Optional, List, Union
from pydantic import BaseModel, Field
from .runner import ActionRunner
from .schema import FormSchema, FormStep, FieldType
from .validation import validate_field, validate_step
from ..errors import ServiceError, TransportError, ValidationError
from ..services.pincode import Location, clean_pincode, is_valid_pincode

logger = logging.getLogger(__name__)

FormValue = Union[str, int, float, bool]

PINCODE_FIELD = 'pincode'
LOCATION_FIELDS = ('city', 'district', 'state')
SUBMIT_ERROR_KEY = 'submit'

INVALID_PINCODE_MESSAGE = 'Invalid PIN code'
PINCODE_LOOKUP_FAILED_MESSAGE = 'Failed to fetch PIN code data'
NETWORK_ERROR_MESSAGE = 'Network error. Please try again.'
SUBMISSION_FAILED_MESSAGE = 'Submission failed'


class WizardState(BaseModel):
    """Mutable state of one wizard session."""

    current_step: int = Field(0, description="0-based index of the active step")
    values: Dict[str, FormValue] = Field(default_factory=dict, description="Field id -> value")
    errors: Dict[str, str] = Field(default_factory=dict, description="Field id (or 'submit') -> message")
    registration_id: Optional[str] = Field(None, description="Issued by the service after step 1")
    submitting: bool = False
    completed: bool = False
    lookup_in_progress: bool = False
    pincode_suggestions: List[Location] = Field(default_factory=list)


class WizardEngine:
    """
    Executes the form schema with dependency injection.

    Key responsibilities:
    - Hold WizardState for a single session
    - Validate fields as they are edited and whole steps on submit
    - Send step payloads and postal-code lookups through the runner
    - Support headless mode for testing
    """

    def __init__(self, runner: ActionRunner, schema: FormSchema):
        """
        Initialize the wizard engine.

        Args:
            runner: ActionRunner implementation for side effects
            schema: Loaded form schema (read-only)
        """
        self.runner = runner
        self.schema = schema
        self.state = WizardState()
        self._lookup_ticket = 0
        self._deferred_lookup = None

    @property
    def current_step(self) -> FormStep:
        return self.schema.steps[self.state.current_step]

    @property
    def is_last_step(self) -> bool:
        return self.state.current_step >= self.schema.step_count - 1

    def edit_field(self, field_id: str, value: FormValue) -> Optional[asyncio.Task]:
        """Store a new value, clear its error and re-validate it.

        Editing the postal-code field strips non-digits; reaching a new
        6-digit code schedules a lookup on the running event loop. Without a
        running loop the lookup is kept until resolve_deferred_lookup() is awaited.

        Args:
            field_id: Field identifier
            value: New value

        Returns:
            The scheduled lookup task, or None when no lookup was scheduled
        """
        needs_lookup = False

        if field_id == PINCODE_FIELD and isinstance(value, (str, int)) and not isinstance(value, bool):
            previous = self.state.values.get(PINCODE_FIELD)
            value = clean_pincode(value)
            self.state.values[field_id] = value
            self.state.errors.pop(field_id, None)

            if is_valid_pincode(value):
                needs_lookup = value != previous
            else:
                # Orphan any lookup still running for the previous code
                self._lookup_ticket += 1
                self._deferred_lookup = None
                self.state.lookup_in_progress = False
                self.state.pincode_suggestions = []
        else:
            self.state.values[field_id] = value
            self.state.errors.pop(field_id, None)

        field = self.current_step.get_field(field_id)
        if field:
            error = validate_field(field, value)
            if error:
                self.state.errors[field_id] = error

        if needs_lookup:
            return self._schedule_lookup(value)
        return None

    def _schedule_lookup(self, pincode: str) -> Optional[asyncio.Task]:
        self._lookup_ticket += 1
        ticket = self._lookup_ticket
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("No running event loop, deferring lookup for %s", pincode)
            self._deferred_lookup = (pincode, ticket)
            return None

        self._deferred_lookup = None
        return loop.create_task(self._lookup_pincode(pincode, ticket))

    async def resolve_deferred_lookup(self) -> None:
        """Run the postal-code lookup requested by an edit made outside an event loop."""
        if self._deferred_lookup is None:
            return
        pincode, ticket = self._deferred_lookup
        self._deferred_lookup = None
        await self._lookup_pincode(pincode, ticket)

    async def _lookup_pincode(self, pincode: str, ticket: int) -> None:
        """Resolve a postal code and fill the dependent location fields.

        Responses carrying an outdated ticket are dropped so that a slow reply
        for an earlier code cannot overwrite a newer one.
        """
        self.state.lookup_in_progress = True
        try:
            try:
                locations = await self.runner.lookup_pincode(pincode)
            except TransportError:
                if ticket == self._lookup_ticket:
                    self.state.pincode_suggestions = []
                    self.state.errors[PINCODE_FIELD] = PINCODE_LOOKUP_FAILED_MESSAGE
                return

            if ticket != self._lookup_ticket:
                logger.debug("Discarding stale lookup for %s", pincode)
                return

            if not locations:
                self.state.pincode_suggestions = []
                self.state.errors[PINCODE_FIELD] = INVALID_PINCODE_MESSAGE
                return

            if len(locations) == 1:
                self._fill_location(locations[0])
                self.state.pincode_suggestions = []
            else:
                self.state.pincode_suggestions = list(locations)
        finally:
            if ticket == self._lookup_ticket:
                self.state.lookup_in_progress = False

    def _fill_location(self, location: Location) -> None:
        for key in LOCATION_FIELDS:
            self.state.values[key] = getattr(location, key)

    def select_location(self, location: Location) -> None:
        """Fill the location fields from a suggestion chosen by the user."""
        self._fill_location(location)
        self.state.pincode_suggestions = []

    def validate_current_step(self) -> Dict[str, str]:
        """Validate every field of the active step against current values."""
        return validate_step(self.current_step, self.state.values)

    async def submit_step(self) -> bool:
        """Validate and submit the active step.

        Returns:
            True if the service accepted the step, False otherwise
        """
        if self.state.submitting or self.state.completed:
            return False

        step_errors = self.validate_current_step()
        if step_errors:
            self.state.errors = step_errors
            return False

        self.state.submitting = True
        try:
            data = dict(self.state.values)
            if self.state.registration_id:
                data['registrationId'] = self.state.registration_id

            step_number = self.state.current_step + 1
            try:
                result = await self.runner.submit_step(step_number, data)
            except ServiceError as e:
                self.state.errors = {SUBMIT_ERROR_KEY: e.message or SUBMISSION_FAILED_MESSAGE}
                return False
            except TransportError as e:
                logger.info("Step %s submission failed: %s", step_number, e)
                self.state.errors = {SUBMIT_ERROR_KEY: NETWORK_ERROR_MESSAGE}
                return False

            if self.state.current_step == 0 and result.get('registrationId'):
                self.state.registration_id = result['registrationId']

            self.state.errors = {}
            if self.is_last_step:
                self.state.completed = True
            else:
                self.state.current_step += 1
            return True
        finally:
            self.state.submitting = False

    def restart(self) -> None:
        """Discard everything and return to the first step."""
        self.state = WizardState()
        self._lookup_ticket += 1
        self._deferred_lookup = None

    def _coerce_input(self, field_type: FieldType, user_input: Any) -> Any:
        if field_type == FieldType.CHECKBOX and isinstance(user_input, str):
            # Convert string to boolean (y/yes/true -> True, n/no/false -> False)
            return user_input.lower().strip() in ('y', 'yes', 'true', '1')
        return user_input

    async def _collect_step(self, headless_inputs: Optional[Dict[str, Any]]) -> None:
        step = self.current_step
        for field in step.fields:
            if headless_inputs is not None:
                user_input = headless_inputs.get(field.id, '')
            else:
                if field.type == FieldType.SELECT and field.options:
                    self.runner.display("")
                    for option in field.options:
                        self.runner.display(f"  {option.value}. {option.text}")
                    self.runner.display("")
                default = self.state.values.get(field.id)
                user_input = self.runner.get_input(field.label, default)

            task = self.edit_field(field.id, self._coerce_input(field.type, user_input))
            if task is not None:
                await task

    async def run(self, headless_inputs: Optional[Dict[str, Any]] = None) -> WizardState:
        """
        Walk through every step until the registration is completed.

        Args:
            headless_inputs: Optional dict of {field_id: value} for testing
                            If None: INTERACTIVE mode (prompt user via runner)
                            If provided: HEADLESS mode (fail fast on errors)

        Returns:
            Final WizardState
        """
        while not self.state.completed:
            step = self.current_step
            self.runner.display(f"\n{step.title}")
            if step.description:
                self.runner.display(step.description)

            await self._collect_step(headless_inputs)
            if await self.submit_step():
                continue

            if headless_inputs is not None:
                # Fail fast in tests
                field_id, message = next(iter(self.state.errors.items()))
                raise ValidationError(message, field_id=field_id)

            for field_id, message in self.state.errors.items():
                self.runner.display(f"Error: {message}")

        self.runner.display(f"Registration complete. Registration ID: {self.state.registration_id}")
        return self.state
