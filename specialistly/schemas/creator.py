from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime
from enum import Enum

from specialistly.schemas.appointment_slot import AppointmentSlotResponse

class StripeConnectStatus(str, Enum):
    PENDING = "pending"
    ACTIVE = "active"
    DISABLED = "disabled"
    NOT_CONNECTED = "not_connected"

class CreatorProfileResponse(BaseModel):
    id: str
    creatorName: str
    email: str
    slug: Optional[str] = None
    bio: Optional[str] = None
    profileImage: Optional[str] = None
    stripeAccountId: Optional[str] = None
    stripeConnectStatus: StripeConnectStatus = StripeConnectStatus.NOT_CONNECTED
    commissionPercentage: float = Field(15, ge=0, le=100)
    createdAt: Optional[datetime] = None

class StripeAssignment(BaseModel):
    stripeAccountId: str = Field(..., pattern=r"^acct_[A-Za-z0-9]+$")
    commissionPercentage: float = Field(15, ge=0, le=100)

class SpecialistLandingResponse(BaseModel):
    """Public payload served for a tenant subdomain."""
    tenant: str
    specialist: CreatorProfileResponse
    availableSlots: List[AppointmentSlotResponse] = []
