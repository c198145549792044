from fastapi import APIRouter, Depends, HTTPException, Query, Path, status
from typing import List, Optional
import logging

from specialistly.core.auth import get_current_admin
from specialistly.schemas.appointment_slot import (
    AppointmentSlotCreate, AppointmentSlotBook, AppointmentSlotResponse,
    SpecialistReassign, BulkUpdateResult, SlotStatus, SlotSummary
)
from specialistly.services.slot_service import (
    create_slot, get_slot_by_id, list_slots, list_available_slots,
    book_slot, reset_slot, delete_slot, reassign_specialist, slot_summary
)

router = APIRouter()
logger = logging.getLogger(__name__)

@router.post("/", response_model=AppointmentSlotResponse, status_code=status.HTTP_201_CREATED)
async def create_appointment_slot(slot_in: AppointmentSlotCreate):
    """
    Create an available appointment slot for a specialist
    """
    return await create_slot(slot_in)

@router.get("/", response_model=List[AppointmentSlotResponse])
async def get_appointment_slots(
    specialistEmail: Optional[str] = Query(None, description="Only slots owned by this specialist"),
    slot_status: Optional[SlotStatus] = Query(None, alias="status"),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500)
):
    return await list_slots(specialistEmail, slot_status, skip, limit)

@router.get("/available", response_model=List[AppointmentSlotResponse])
async def get_available_appointment_slots(
    specialistEmail: Optional[str] = Query(None, description="Only slots owned by this specialist")
):
    return await list_available_slots(specialistEmail)

@router.get("/summary", response_model=SlotSummary)
async def get_slot_summary(specialistEmail: Optional[str] = Query(None)):
    """
    Slot counts per status plus invariant violations, for operators
    """
    return await slot_summary(specialistEmail)

@router.put("/specialist", response_model=BulkUpdateResult)
async def reassign_slots(
    reassign: SpecialistReassign,
    current_admin: dict = Depends(get_current_admin)
):
    """
    Re-home slots to another specialist.

    Without currentSpecialistEmail every slot is re-assigned. The response
    carries the exact number of modified slots.
    """
    return await reassign_specialist(
        reassign.specialistEmail,
        reassign.specialistName,
        reassign.currentSpecialistEmail
    )

@router.get("/{slot_id}", response_model=AppointmentSlotResponse)
async def get_appointment_slot(slot_id: str = Path(..., title="The ID of the slot")):
    slot = await get_slot_by_id(slot_id)
    if not slot:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Slot not found"
        )
    return slot

@router.put("/{slot_id}/book", response_model=AppointmentSlotResponse)
async def book_appointment_slot(
    booking: AppointmentSlotBook,
    slot_id: str = Path(..., title="The ID of the slot")
):
    """
    Book an available slot for a customer
    """
    try:
        slot = await get_slot_by_id(slot_id)
        if not slot:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Slot not found"
            )

        if slot["status"] != SlotStatus.AVAILABLE:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Slot is not available"
            )

        booked_slot = await book_slot(slot_id, booking)
        if not booked_slot:
            # Someone else booked it between the read and the update
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Slot was booked by another customer"
            )

        return booked_slot

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error in book_appointment_slot: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error occurred while booking the slot"
        )

@router.put("/{slot_id}/reset", response_model=AppointmentSlotResponse)
async def reset_appointment_slot(slot_id: str = Path(..., title="The ID of the slot")):
    """
    Remove the customer from a slot and make it available again
    """
    slot = await reset_slot(slot_id)
    if not slot:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Slot not found"
        )
    return slot

@router.delete("/{slot_id}")
async def delete_appointment_slot(slot_id: str = Path(..., title="The ID of the slot")):
    deleted = await delete_slot(slot_id)
    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Slot not found"
        )
    return {"message": "Appointment slot deleted successfully"}
