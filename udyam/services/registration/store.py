"""Registration persistence - engine factory and record store.

SQLite is the default; any SQLAlchemy URL works. An in-memory SQLite URL
("sqlite://") shares one connection so that every session sees the same data.
"""

import logging
from datetime import UTC, datetime
from typing import Any, Dict, List

from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine, select

from ...errors import NotFoundError
from .models import UdyamRegistration

logger = logging.getLogger(__name__)

IN_MEMORY_URL = "sqlite://"


def get_engine(database_url: str = IN_MEMORY_URL, echo: bool = False) -> Engine:
    """Create SQLAlchemy engine for the registration database.

    Args:
        database_url: SQLAlchemy URL (default: in-memory SQLite)
        echo: Whether to echo SQL statements (useful for debugging)

    Returns:
        SQLAlchemy engine instance
    """
    if database_url.startswith("sqlite"):
        connect_args = {"check_same_thread": False}
        if database_url in (IN_MEMORY_URL, "sqlite:///:memory:"):
            return create_engine(database_url, echo=echo, connect_args=connect_args, poolclass=StaticPool)
        return create_engine(database_url, echo=echo, connect_args=connect_args)

    return create_engine(database_url, echo=echo)


class RegistrationStore:
    """CRUD access to UdyamRegistration rows."""

    def __init__(self, engine: Engine):
        self.engine = engine

    def create_tables(self) -> None:
        SQLModel.metadata.create_all(self.engine)

    def create(self, **values: Any) -> UdyamRegistration:
        """Insert a new registration and return it with its issued id."""
        registration = UdyamRegistration(**values)
        with Session(self.engine) as session:
            session.add(registration)
            session.commit()
            session.refresh(registration)
        logger.info("Created registration %s", registration.id)
        return registration

    def get(self, registration_id: str) -> UdyamRegistration:
        """
        Fetch one registration.

        Raises:
            NotFoundError: If no row has this id
        """
        with Session(self.engine) as session:
            registration = session.get(UdyamRegistration, registration_id)
        if registration is None:
            raise NotFoundError(registration_id)
        return registration

    def list(self, limit: int = 100) -> List[UdyamRegistration]:
        """Most recently created registrations first."""
        with Session(self.engine) as session:
            statement = (
                select(UdyamRegistration)
                .order_by(UdyamRegistration.created_at.desc())
                .limit(limit)
            )
            return list(session.exec(statement).all())

    def update(self, registration_id: str, changes: Dict[str, Any]) -> UdyamRegistration:
        """
        Set columns on an existing registration.

        Args:
            registration_id: Record to change
            changes: Column name -> new value (already validated)

        Raises:
            NotFoundError: If no row has this id
        """
        with Session(self.engine) as session:
            registration = session.get(UdyamRegistration, registration_id)
            if registration is None:
                raise NotFoundError(registration_id)

            for column, value in changes.items():
                setattr(registration, column, value)
            registration.updated_at = datetime.now(UTC)

            session.add(registration)
            session.commit()
            session.refresh(registration)
        logger.info("Updated registration %s (%s)", registration_id, ', '.join(sorted(changes)))
        return registration

    def delete(self, registration_id: str) -> None:
        """
        Remove a registration.

        Raises:
            NotFoundError: If no row has this id
        """
        with Session(self.engine) as session:
            registration = session.get(UdyamRegistration, registration_id)
            if registration is None:
                raise NotFoundError(registration_id)
            session.delete(registration)
            session.commit()
        logger.info("Deleted registration %s", registration_id)
