from fastapi import APIRouter, HTTPException, Path, status

from specialistly.schemas.creator import SpecialistLandingResponse
from specialistly.services.creator_service import get_creator_by_slug
from specialistly.services.slot_service import list_available_slots

router = APIRouter()

async def _landing(slug: str) -> dict:
    creator = await get_creator_by_slug(slug)
    if not creator:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Specialist not found"
        )

    slots = await list_available_slots(creator["email"])
    return {
        "tenant": slug.lower(),
        "specialist": creator,
        "availableSlots": slots,
    }

@router.get("/{slug}", response_model=SpecialistLandingResponse)
async def specialist_landing(slug: str = Path(..., title="Specialist slug")):
    """
    Public landing data for a specialist, served for tenant subdomains
    """
    return await _landing(slug)

@router.get("/{slug}/{rest:path}", response_model=SpecialistLandingResponse)
async def specialist_landing_subpath(slug: str, rest: str):
    return await _landing(slug)
