"""ActionRunner interface - all side effects go here."""

import inspect
import logging
from abc import ABC, abstractmethod
from typing import List, Dict, Any, Optional

import httpx

from ..config import Settings
from ..errors import ServiceError, TransportError
from ..services.pincode import Location, parse_post_offices

logger = logging.getLogger(__name__)


class ActionRunner(ABC):
    """Interface for executing side effects."""

    @abstractmethod
    async def submit_step(self, step: int, data: Dict[str, Any]) -> Dict[str, Any]:
        """Send one step's payload to the registration service.

        Args:
            step: 1-based step number
            data: Accumulated form values (plus registrationId once known)

        Returns:
            Success envelope ({success, message, registrationId?})

        Raises:
            ServiceError: If the service answers with an error envelope
            TransportError: If the service cannot be reached
        """
        pass

    @abstractmethod
    async def lookup_pincode(self, pincode: str) -> List[Location]:
        """Resolve a 6-digit postal code to candidate locations.

        Raises:
            TransportError: If the lookup service cannot be reached
        """
        pass

    @abstractmethod
    def display(self, message: str) -> None:
        """Display a message to the user.

        Args:
            message: Text to display (may contain newlines)
        """
        pass

    @abstractmethod
    def get_input(self, prompt: str, default: str = None) -> str:
        """Get input from user.

        Args:
            prompt: Question to ask user
            default: Default value if user presses Enter (shown in [brackets])

        Returns:
            User's input string (or default if empty)
        """
        pass


class HttpActionRunner(ActionRunner):
    """Real implementation - talks to the registration service and the PIN code API."""

    def __init__(self, settings: Settings, client: Optional[httpx.AsyncClient] = None):
        """Initialize with settings and an optional preconfigured client.

        Args:
            settings: Service URLs and timeout
            client: httpx.AsyncClient to reuse (created lazily otherwise)
        """
        self.settings = settings
        self.verbose = settings.verbose
        self._client = client

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.settings.timeout, follow_redirects=True)
        return self._client

    async def aclose(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def submit_step(self, step: int, data: Dict[str, Any]) -> Dict[str, Any]:
        url = f"{self.settings.api_url}/api/submit-step"
        if self.verbose:
            logger.debug("POST %s step=%s", url, step)

        try:
            response = await self._get_client().post(url, json={'step': step, 'data': data})
        except httpx.RequestError as e:
            logger.warning("Step %s submission failed: %s", step, e)
            raise TransportError(f"Request failed: {e}") from e

        try:
            body = response.json()
        except ValueError:
            body = {}

        if response.is_error:
            message = body.get('error') if isinstance(body, dict) else None
            raise ServiceError(response.status_code, message or 'Submission failed')

        return body

    async def lookup_pincode(self, pincode: str) -> List[Location]:
        url = f"{self.settings.pincode_api_url}/{pincode}"
        if self.verbose:
            logger.debug("GET %s", url)

        try:
            response = await self._get_client().get(url)
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("PIN code lookup for %s failed: %s", pincode, e)
            raise TransportError(f"PIN code lookup failed: {e}") from e

        return parse_post_offices(payload, pincode)

    def display(self, message: str) -> None:
        """Print message to stdout."""
        print(message)

    def get_input(self, prompt: str, default: str = None) -> str:
        """Read from stdin with optional default."""
        if default is not None:
            # Special formatting for boolean defaults
            if isinstance(default, bool):
                default_display = 'y/N' if not default else 'Y/n'
            else:
                default_display = str(default)

            response = input(f"{prompt} [{default_display}]: ").strip()
            print()

            if response:
                return response
            return str(default) if not isinstance(default, bool) else default

        response = input(f"{prompt}: ").strip()
        print()
        return response


class MockActionRunner(ActionRunner):
    """Mock for testing - records calls.

    ``responses`` maps a method name to what it should produce: a value, an
    exception instance to raise, or a callable taking the call arguments.
    """

    def __init__(self):
        self.calls = []
        self.responses = {}
        self.input_queue = []  # Pre-scripted user inputs for testing

    def _respond(self, name: str, default: Any, *args) -> Any:
        response = self.responses.get(name, default)
        if callable(response) and not isinstance(response, type):
            response = response(*args)
        if isinstance(response, Exception):
            raise response
        return response

    async def _await(self, response: Any) -> Any:
        # Callables may return coroutines to simulate slow or out-of-order replies
        if inspect.isawaitable(response):
            return await response
        return response

    async def submit_step(self, step: int, data: Dict[str, Any]) -> Dict[str, Any]:
        self.calls.append(('submit_step', step, dict(data)))
        default = {'success': True, 'message': f'Step {step} saved'}
        if step == 1:
            default['registrationId'] = 'mock-registration-id'
        return await self._await(self._respond('submit_step', default, step, data))

    async def lookup_pincode(self, pincode: str) -> List[Location]:
        self.calls.append(('lookup_pincode', pincode))
        return await self._await(self._respond('lookup_pincode', [], pincode))

    def display(self, message: str) -> None:
        """Capture display call for test verification."""
        self.calls.append(('display', message))

    def get_input(self, prompt: str, default: str = None) -> str:
        """Return next value from input_queue."""
        self.calls.append(('get_input', prompt, default))

        if self.input_queue:
            response = self.input_queue.pop(0)
            return response if response else (default if default else '')

        return default if default else ''
