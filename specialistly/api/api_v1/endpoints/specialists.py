from fastapi import APIRouter, Depends, HTTPException, Query, status
from typing import List

from specialistly.core.auth import get_current_admin
from specialistly.schemas.creator import CreatorProfileResponse, StripeAssignment
from specialistly.services.creator_service import (
    list_creators, get_creator_by_email, assign_stripe_account, disconnect_stripe
)

router = APIRouter()

@router.get("/", response_model=List[CreatorProfileResponse])
async def get_specialists(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500)
):
    return await list_creators(skip, limit)

@router.get("/{email}", response_model=CreatorProfileResponse)
async def get_specialist(email: str):
    creator = await get_creator_by_email(email)
    if not creator:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Specialist not found"
        )
    return creator

@router.put("/{email}/stripe", response_model=CreatorProfileResponse)
async def connect_specialist_stripe(
    email: str,
    assignment: StripeAssignment,
    current_admin: dict = Depends(get_current_admin)
):
    """
    Record a connected Stripe account for a specialist
    """
    creator = await assign_stripe_account(
        email, assignment.stripeAccountId, assignment.commissionPercentage
    )
    if not creator:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Specialist not found"
        )
    return creator

@router.delete("/{email}/stripe", response_model=CreatorProfileResponse)
async def disconnect_specialist_stripe(
    email: str,
    current_admin: dict = Depends(get_current_admin)
):
    creator = await disconnect_stripe(email)
    if not creator:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Specialist not found"
        )
    return creator
