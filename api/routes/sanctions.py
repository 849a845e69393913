from fastapi import APIRouter, Depends, HTTPException
from api.dependencies import get_snapshot
from api.services import SanctionService
from api.schemas import SanctionsResponse
from src.models import AgoraData

router = APIRouter()

@router.get("", response_model=SanctionsResponse)
async def get_sanctions(data: AgoraData = Depends(get_snapshot)):
    """
    Active sanctions with their rate as a percent, plus lifted history.
    """
    try:
        return SanctionService.sanctions(data)
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))
