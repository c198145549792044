from typing import Dict, Any, List, Optional
from specialistly.db.mongodb import db, SLOTS
from specialistly.schemas.appointment_slot import (
    AppointmentSlotCreate, AppointmentSlotBook, BulkUpdateResult, SlotStatus,
    OCCUPANT_FIELDS, REQUIRED_OCCUPANT_FIELDS
)
from datetime import datetime
from bson import ObjectId
from bson.errors import InvalidId
from pymongo import ReturnDocument
import logging

logger = logging.getLogger(__name__)

def _to_object_id(slot_id: str) -> Optional[ObjectId]:
    try:
        return ObjectId(slot_id)
    except (InvalidId, TypeError):
        return None

def _with_id(slot: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    if slot:
        slot["id"] = str(slot["_id"])
    return slot

def _cleared_occupant_fields() -> Dict[str, Any]:
    """The $set document that returns a slot to the available state."""
    update = {field: None for field in OCCUPANT_FIELDS}
    update["status"] = SlotStatus.AVAILABLE.value
    update["updatedAt"] = datetime.utcnow()
    return update

def is_consistent(slot: Dict[str, Any]) -> bool:
    """
    Check the occupancy invariant of a slot document.

    A booked slot carries every required occupant field; an available slot
    carries none of the occupant fields at all.
    """
    status = slot.get("status")
    if status == SlotStatus.BOOKED:
        return all(slot.get(field) is not None for field in REQUIRED_OCCUPANT_FIELDS)
    if status == SlotStatus.AVAILABLE:
        return all(slot.get(field) is None for field in OCCUPANT_FIELDS)
    return False

async def create_slot(slot_in: AppointmentSlotCreate) -> Dict[str, Any]:
    """
    Create a new appointment slot. New slots are always available.
    """
    slot_data = slot_in.dict()
    slot_data["status"] = SlotStatus.AVAILABLE.value
    for field in OCCUPANT_FIELDS:
        slot_data[field] = None
    slot_data["createdAt"] = datetime.utcnow()
    slot_data["updatedAt"] = slot_data["createdAt"]

    result = await db.db[SLOTS].insert_one(slot_data)

    created_slot = await db.db[SLOTS].find_one({"_id": result.inserted_id})
    return _with_id(created_slot)

async def get_slot_by_id(slot_id: str) -> Optional[Dict[str, Any]]:
    """
    Get a slot by ID
    """
    object_id = _to_object_id(slot_id)
    if object_id is None:
        return None
    slot = await db.db[SLOTS].find_one({"_id": object_id})
    return _with_id(slot)

def _slot_query(specialist_email: Optional[str] = None, status: Optional[SlotStatus] = None) -> Dict[str, Any]:
    query: Dict[str, Any] = {}
    if specialist_email:
        query["specialistEmail"] = specialist_email
    if status:
        query["status"] = SlotStatus(status).value
    return query

async def list_slots(
    specialist_email: Optional[str] = None,
    status: Optional[SlotStatus] = None,
    skip: int = 0,
    limit: int = 100
) -> List[Dict[str, Any]]:
    """
    List slots ordered by date and start time
    """
    query = _slot_query(specialist_email, status)

    cursor = db.db[SLOTS].find(query).sort([("date", 1), ("startTime", 1)]).skip(skip).limit(limit)
    slots = await cursor.to_list(length=limit)

    for slot in slots:
        slot["id"] = str(slot["_id"])

    return slots

async def list_available_slots(specialist_email: Optional[str] = None, limit: int = 100) -> List[Dict[str, Any]]:
    return await list_slots(specialist_email, SlotStatus.AVAILABLE, limit=limit)

async def count_slots(specialist_email: Optional[str] = None, status: Optional[SlotStatus] = None) -> int:
    return await db.db[SLOTS].count_documents(_slot_query(specialist_email, status))

async def book_slot(slot_id: str, booking: AppointmentSlotBook) -> Optional[Dict[str, Any]]:
    """
    Book an available slot.

    The availability check, the status flip and every occupant field go
    into one conditional update on the slot document.

    Returns:
        The booked slot, or None if the slot does not exist or is not available
    """
    object_id = _to_object_id(slot_id)
    if object_id is None:
        return None

    update_data = {field: None for field in OCCUPANT_FIELDS}
    update_data.update(booking.dict())
    update_data["status"] = SlotStatus.BOOKED.value
    update_data["updatedAt"] = datetime.utcnow()

    slot = await db.db[SLOTS].find_one_and_update(
        {"_id": object_id, "status": SlotStatus.AVAILABLE.value},
        {"$set": update_data},
        return_document=ReturnDocument.AFTER
    )
    if slot:
        logger.info(f"Slot {slot_id} booked by {booking.customerEmail}")
    return _with_id(slot)

async def reset_slot(slot_id: str) -> Optional[Dict[str, Any]]:
    """
    Return a slot to the available state, clearing its occupant in the same update.
    Resetting an already available slot is a no-op that still returns the slot.
    """
    object_id = _to_object_id(slot_id)
    if object_id is None:
        return None

    slot = await db.db[SLOTS].find_one_and_update(
        {"_id": object_id},
        {"$set": _cleared_occupant_fields()},
        return_document=ReturnDocument.AFTER
    )
    if slot:
        logger.info(f"Slot {slot_id} reset to available")
    return _with_id(slot)

async def reset_customer_bookings(customer_email: Optional[str] = None) -> int:
    """
    Reset every slot held by a customer (or by any customer).

    Returns:
        Number of slots modified
    """
    if customer_email:
        query = {"customerEmail": customer_email}
    else:
        query = {"customerEmail": {"$exists": True, "$ne": None}}

    result = await db.db[SLOTS].update_many(query, {"$set": _cleared_occupant_fields()})
    logger.info(f"Reset {result.modified_count} appointment slot(s)")
    return result.modified_count

async def reassign_specialist(
    specialist_email: str,
    specialist_name: str,
    current_email: Optional[str] = None
) -> BulkUpdateResult:
    """
    Move slots to another specialist.

    Without current_email every slot in the collection is re-homed. Slots that
    already carry the target identity are matched but not modified, so the
    modified count is exact and repeated runs report zero.
    """
    query = {"specialistEmail": current_email} if current_email else {}

    result = await db.db[SLOTS].update_many(
        query,
        {"$set": {"specialistEmail": specialist_email, "specialistName": specialist_name}}
    )
    logger.info(
        f"Re-assigned slots to {specialist_email}: "
        f"matched={result.matched_count} modified={result.modified_count}"
    )
    return BulkUpdateResult(matchedCount=result.matched_count, modifiedCount=result.modified_count)

async def delete_slot(slot_id: str) -> bool:
    object_id = _to_object_id(slot_id)
    if object_id is None:
        return False
    result = await db.db[SLOTS].delete_one({"_id": object_id})
    return result.deleted_count == 1

async def slot_summary(specialist_email: Optional[str] = None) -> Dict[str, int]:
    """
    Count slots per status, slots missing an owner and slots breaking the
    occupancy invariant
    """
    query = _slot_query(specialist_email)

    slots = await db.db[SLOTS].find(query).to_list(length=None)
    inconsistent = sum(1 for slot in slots if not is_consistent(slot))

    return {
        "total": len(slots),
        "available": await count_slots(specialist_email, SlotStatus.AVAILABLE),
        "booked": await count_slots(specialist_email, SlotStatus.BOOKED),
        # Owner-less slots never fall inside a single specialist's scope
        "withoutSpecialist": 0 if specialist_email else await db.db[SLOTS].count_documents({"specialistEmail": None}),
        "inconsistent": inconsistent,
    }
