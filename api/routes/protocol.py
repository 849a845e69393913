from fastapi import APIRouter, Depends, HTTPException
from api.dependencies import get_snapshot
from api.services import ProtocolService, SnapshotService
from api.schemas import ProtocolStatsResponse, SnapshotResponse
from src.models import AgoraData

router = APIRouter()

@router.get("/stats", response_model=ProtocolStatsResponse)
async def get_protocol_stats(data: AgoraData = Depends(get_snapshot)):
    """
    Users, UBI claimed, supply and fee split.
    """
    try:
        return ProtocolService.stats(data)
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))

@router.get("/snapshot", response_model=SnapshotResponse)
async def get_raw_snapshot(data: AgoraData = Depends(get_snapshot)):
    """
    The whole snapshot, unformatted.
    """
    try:
        return SnapshotService.raw_snapshot(data)
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))
