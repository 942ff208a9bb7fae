"""Verification requests and the approved relationships they produce.

A requester asks to see the verification status of a company by its
registration number. The holder of the matching completed submission
approves it; status only ever moves pending → approved.
"""

import enum
import uuid
from datetime import datetime

from sqlalchemy import DateTime, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from snapaml.database import Base, utcnow


class RequestStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"


class VerificationRequest(Base):
    __tablename__ = "kyb_requests"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    requester_user_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    requester_email: Mapped[str] = mapped_column(String(255), nullable=False)
    company_registration_number: Mapped[str] = mapped_column(
        String(100), nullable=False, index=True
    )
    # Filled in with the approver's user id on approval
    requested_user_id: Mapped[str | None] = mapped_column(String(36))
    status: Mapped[str] = mapped_column(
        String(20), default=RequestStatus.PENDING.value, nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow
    )


class ApprovedRelationship(Base):
    """Grant letting `user_id` (requester) view `requested_user_id`'s submission."""

    __tablename__ = "kyb_approved_requests"
    __table_args__ = (
        UniqueConstraint(
            "user_id",
            "requested_user_id",
            "company_registration_number",
            name="uq_kyb_approved_requests_pair",
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    requested_user_id: Mapped[str] = mapped_column(String(36), nullable=False)
    company_registration_number: Mapped[str | None] = mapped_column(String(100))
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
