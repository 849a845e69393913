from fastapi import APIRouter, Depends, HTTPException, Query
from typing import List, Optional
from api.dependencies import get_snapshot
from api.services import GovernanceService
from api.schemas import ProposalListResponse, ProposalView, DaoProposalView, VotingResponse
from src.models import AgoraData

router = APIRouter()

@router.get("/proposals", response_model=ProposalListResponse)
async def list_proposals(
    status: Optional[str] = Query(None, description="Only proposals with this status, e.g. 'voting'."),
    data: AgoraData = Depends(get_snapshot),
):
    """
    Recent and active protocol proposals with vote share and time left.
    """
    try:
        return GovernanceService.proposals(data, status=status)
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))

@router.get("/proposals/{proposal_id}", response_model=ProposalView)
async def get_proposal(proposal_id: str, data: AgoraData = Depends(get_snapshot)):
    try:
        return GovernanceService.proposal(data, proposal_id)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Proposal '{proposal_id}' not found")
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))

@router.get("/dao-proposals", response_model=List[DaoProposalView])
async def list_dao_proposals(data: AgoraData = Depends(get_snapshot)):
    """
    SOL spending proposals with the yes/no/abstain split.
    """
    try:
        return GovernanceService.dao_proposals(data)
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))

@router.get("/voting", response_model=VotingResponse)
async def get_voting(data: AgoraData = Depends(get_snapshot)):
    try:
        return GovernanceService.voting(data)
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))
