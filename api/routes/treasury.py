from fastapi import APIRouter, Depends, HTTPException
from api.dependencies import get_snapshot
from api.services import TreasuryService
from api.schemas import GasPoolResponse, DaoTreasuryResponse, TokenTreasuryResponse
from src.models import AgoraData

router = APIRouter()

@router.get("/gas-pool", response_model=GasPoolResponse)
async def get_gas_pool(data: AgoraData = Depends(get_snapshot)):
    """
    SOL gas pool balances, usage, sponsor tiers and top sponsors.
    """
    try:
        return TreasuryService.gas_pool(data)
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))

@router.get("/dao", response_model=DaoTreasuryResponse)
async def get_dao_treasury(data: AgoraData = Depends(get_snapshot)):
    """
    DAO treasury balance and the approval tiers for SOL spending.
    """
    try:
        return TreasuryService.dao_treasury(data)
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))

@router.get("/token", response_model=TokenTreasuryResponse)
async def get_token_treasury(data: AgoraData = Depends(get_snapshot)):
    """
    AGORA token treasury balance and 30-day flows.
    """
    try:
        return TreasuryService.token_treasury(data)
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))
