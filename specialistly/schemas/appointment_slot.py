from pydantic import BaseModel, Field, EmailStr
from typing import Optional
from datetime import datetime
from enum import Enum

class SlotStatus(str, Enum):
    AVAILABLE = "available"
    BOOKED = "booked"

# Fields that describe who holds a booked slot. All of them are null while
# the slot is available.
OCCUPANT_FIELDS = (
    "bookedBy",
    "customerEmail",
    "customerName",
    "googleMeetLink",
    "googleEventId",
    "serviceTitle",
)

# Occupant fields a booking must always set
REQUIRED_OCCUPANT_FIELDS = ("bookedBy", "customerEmail", "customerName")

class AppointmentSlotCreate(BaseModel):
    date: datetime
    startTime: str = Field(..., pattern=r"^\d{2}:\d{2}$")
    endTime: str = Field(..., pattern=r"^\d{2}:\d{2}$")
    specialistEmail: EmailStr
    specialistName: Optional[str] = None

class AppointmentSlotBook(BaseModel):
    bookedBy: str
    customerEmail: EmailStr
    customerName: str
    serviceTitle: str
    googleMeetLink: Optional[str] = None
    googleEventId: Optional[str] = None

class SpecialistReassign(BaseModel):
    specialistEmail: EmailStr
    specialistName: str
    currentSpecialistEmail: Optional[EmailStr] = None

class BulkUpdateResult(BaseModel):
    matchedCount: int
    modifiedCount: int

class AppointmentSlotResponse(BaseModel):
    id: str
    date: datetime
    startTime: str
    endTime: str
    status: SlotStatus
    specialistEmail: Optional[str] = None
    specialistName: Optional[str] = None
    bookedBy: Optional[str] = None
    customerEmail: Optional[str] = None
    customerName: Optional[str] = None
    googleMeetLink: Optional[str] = None
    googleEventId: Optional[str] = None
    serviceTitle: Optional[str] = None
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None

    class Config:
        populate_by_name = True

class SlotSummary(BaseModel):
    total: int
    available: int
    booked: int
    withoutSpecialist: int
    inconsistent: int
