"""Registration record table."""

import uuid
from datetime import UTC, datetime
from typing import Any, Dict, Optional

from sqlalchemy import TIMESTAMP, Column
from sqlmodel import Field, SQLModel


# API (camelCase) name -> column name for fields a client may set
API_FIELDS: Dict[str, str] = {
    'aadhaarNumber': 'aadhaar_number',
    'entrepreneurName': 'entrepreneur_name',
    'aadhaarConsent': 'aadhaar_consent',
    'panNumber': 'pan_number',
    'organizationType': 'organization_type',
    'stepCompleted': 'step_completed',
}


def _utcnow() -> datetime:
    return datetime.now(UTC)


class UdyamRegistration(SQLModel, table=True):
    """One MSME registration, built up step by step.

    Created when step 1 succeeds, updated by every later step.
    """

    __tablename__ = "udyam_registrations"

    id: str = Field(
        default_factory=lambda: str(uuid.uuid4()),
        primary_key=True,
        description="Opaque registration identifier",
    )
    aadhaar_number: str = Field(max_length=12, index=True)
    entrepreneur_name: str = Field(max_length=100)
    aadhaar_consent: bool = Field(default=False)
    pan_number: Optional[str] = Field(default=None, max_length=10)
    organization_type: Optional[str] = Field(default=None, max_length=4)
    step_completed: int = Field(default=1, description="Number of wizard steps completed")

    created_at: datetime = Field(
        default_factory=_utcnow,
        sa_column=Column(TIMESTAMP(timezone=True), nullable=False),
        description="Record creation timestamp (immutable)",
    )
    updated_at: datetime = Field(
        default_factory=_utcnow,
        sa_column=Column(TIMESTAMP(timezone=True), nullable=False),
        description="Last update timestamp",
    )

    def to_api(self) -> Dict[str, Any]:
        """Serialize with the camelCase keys used on the wire."""
        data = {'id': self.id}
        for api_name, column in API_FIELDS.items():
            data[api_name] = getattr(self, column)
        data['createdAt'] = self.created_at.isoformat() if self.created_at else None
        data['updatedAt'] = self.updated_at.isoformat() if self.updated_at else None
        return data
