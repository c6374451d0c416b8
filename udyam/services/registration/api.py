"""Registration HTTP API.

Implements:
- POST   /api/submit-step
- GET    /api/registrations
- GET    /api/registrations/{registration_id}
- PATCH  /api/registrations/{registration_id}
- DELETE /api/registrations/{registration_id}
- GET    /health

Errors are returned as {"error": "..."} with 400 (validation), 404 (unknown
registration) or 500 (anything unexpected).
"""

import logging
from typing import Any, Dict, Optional

from fastapi import Body, Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ...config import Settings, load_settings
from ...errors import NotFoundError, ValidationError
from . import actions
from .store import RegistrationStore, get_engine

logger = logging.getLogger(__name__)

INTERNAL_ERROR = 'Internal server error'
NOT_FOUND = 'Registration not found'


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={'error': message})


def get_store(request: Request) -> RegistrationStore:
    return request.app.state.store


def create_app(store: Optional[RegistrationStore] = None, settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        store: Registration store (default: one built from settings.database_url)
        settings: Runtime settings (default: load_settings())

    Returns:
        Configured FastAPI app
    """
    if store is None:
        settings = settings or load_settings()
        store = RegistrationStore(get_engine(settings.database_url))
    store.create_tables()

    app = FastAPI(title="Udyam Registration Service")
    app.state.store = store

    @app.exception_handler(RequestValidationError)
    async def _bad_request(request: Request, exc: RequestValidationError) -> JSONResponse:
        return _error(400, 'Invalid request body')

    @app.get("/health")
    def health() -> Dict[str, str]:
        return {'status': 'ok'}

    @app.post("/api/submit-step")
    def submit_step(payload: Dict[str, Any] = Body(...), store: RegistrationStore = Depends(get_store)):
        try:
            return actions.submit_step(payload.get('step'), payload.get('data') or {}, store)
        except ValidationError as e:
            logger.debug("Step %s rejected: %s", payload.get('step'), e.message)
            return _error(400, e.message)
        except NotFoundError:
            return _error(404, NOT_FOUND)
        except Exception:
            logger.exception("Database error while submitting step %s", payload.get('step'))
            return _error(500, INTERNAL_ERROR)

    @app.get("/api/registrations")
    def list_registrations(limit: int = 100, store: RegistrationStore = Depends(get_store)):
        try:
            return {'registrations': [r.to_api() for r in store.list(limit=limit)]}
        except Exception:
            logger.exception("Database error while listing registrations")
            return _error(500, INTERNAL_ERROR)

    @app.get("/api/registrations/{registration_id}")
    def get_registration(registration_id: str, store: RegistrationStore = Depends(get_store)):
        try:
            return {'registration': store.get(registration_id).to_api()}
        except NotFoundError:
            return _error(404, NOT_FOUND)
        except Exception:
            logger.exception("Database error while reading %s", registration_id)
            return _error(500, INTERNAL_ERROR)

    @app.patch("/api/registrations/{registration_id}")
    def update_registration(
        registration_id: str,
        patch: Dict[str, Any] = Body(...),
        store: RegistrationStore = Depends(get_store),
    ):
        try:
            registration = actions.update_registration(registration_id, patch, store)
            return {'registration': registration.to_api()}
        except ValidationError as e:
            return _error(400, e.message)
        except NotFoundError:
            return _error(404, NOT_FOUND)
        except Exception:
            logger.exception("Database error while updating %s", registration_id)
            return _error(500, INTERNAL_ERROR)

    @app.delete("/api/registrations/{registration_id}")
    def delete_registration(registration_id: str, store: RegistrationStore = Depends(get_store)):
        try:
            store.delete(registration_id)
            return {'success': True, 'message': 'Registration deleted'}
        except NotFoundError:
            return _error(404, NOT_FOUND)
        except Exception:
            logger.exception("Database error while deleting %s", registration_id)
            return _error(500, INTERNAL_ERROR)

    return app
