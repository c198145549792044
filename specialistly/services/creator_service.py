from typing import Dict, Any, List, Optional
from specialistly.db.mongodb import db, CREATORS
from specialistly.schemas.creator import StripeConnectStatus
from datetime import datetime
from pymongo import ReturnDocument
import logging
import re

logger = logging.getLogger(__name__)

def _with_id(creator: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    if creator:
        creator["id"] = str(creator["_id"])
        creator.setdefault("stripeConnectStatus", StripeConnectStatus.NOT_CONNECTED.value)
        creator.setdefault("commissionPercentage", 15)
    return creator

async def get_creator_by_email(email: str) -> Optional[Dict[str, Any]]:
    """
    Get a creator profile by email
    """
    creator = await db.db[CREATORS].find_one({"email": email})
    return _with_id(creator)

async def get_creator_by_slug(slug: str) -> Optional[Dict[str, Any]]:
    """
    Get a creator profile by its public slug.

    Profiles without an explicit slug are addressed by the local part of
    their email, e.g. jane@example.com is reachable as "jane".
    """
    slug = slug.lower()
    creator = await db.db[CREATORS].find_one({"slug": slug})
    if creator is None:
        # An explicit slug takes over the email-derived address
        creator = await db.db[CREATORS].find_one({
            "email": {"$regex": f"^{re.escape(slug)}@", "$options": "i"},
            "$or": [{"slug": None}, {"slug": ""}],
        })
    return _with_id(creator)

async def list_creators(skip: int = 0, limit: int = 100) -> List[Dict[str, Any]]:
    cursor = db.db[CREATORS].find({}).sort("creatorName", 1).skip(skip).limit(limit)
    creators = await cursor.to_list(length=limit)
    return [_with_id(creator) for creator in creators]

async def assign_stripe_account(
    email: str,
    account_id: str,
    commission_percentage: float = 15
) -> Optional[Dict[str, Any]]:
    """
    Attach a connected Stripe account to a specialist and mark it active

    Returns:
        Updated profile or None if no specialist has that email
    """
    creator = await db.db[CREATORS].find_one_and_update(
        {"email": email},
        {"$set": {
            "stripeAccountId": account_id,
            "stripeConnectStatus": StripeConnectStatus.ACTIVE.value,
            "commissionPercentage": commission_percentage,
            "updatedAt": datetime.utcnow()
        }},
        return_document=ReturnDocument.AFTER
    )
    if creator:
        logger.info(f"Assigned Stripe account {account_id} to {email}")
    return _with_id(creator)

async def disconnect_stripe(email: str) -> Optional[Dict[str, Any]]:
    """
    Remove the Stripe connection of a specialist so a new account can be linked

    Returns:
        Updated profile or None if no specialist has that email
    """
    creator = await db.db[CREATORS].find_one_and_update(
        {"email": email},
        {"$set": {
            "stripeAccountId": None,
            "stripeConnectStatus": StripeConnectStatus.NOT_CONNECTED.value,
            "stripeConnectUrl": None,
            "stripeOnboardingExpires": None,
            "updatedAt": datetime.utcnow()
        }},
        return_document=ReturnDocument.BEFORE
    )
    if creator is None:
        return None

    if creator.get("stripeAccountId"):
        logger.info(f"Disconnected Stripe account {creator['stripeAccountId']} from {email}")
    else:
        logger.info(f"{email} had no Stripe account connected")

    updated_creator = await get_creator_by_email(email)
    updated_creator["previousStripeAccountId"] = creator.get("stripeAccountId")
    return updated_creator
