from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException

from bias_scorecard import BiasScorecardStore
from core.exceptions import ClientInputError
from dashboard.dependencies import get_store
from dashboard.schemas import RecomputeRequest, RecomputeResponse, ScorecardSchema

router = APIRouter(prefix="/api/v1/scorecard", tags=["Bias Scorecard"])

@router.get("", response_model=List[ScorecardSchema])
def get_all_scorecards(store: BiasScorecardStore = Depends(get_store)):
    """
    Get the scorecard of every supported currency.
    """
    return [ScorecardSchema.model_validate(s.to_dict()) for s in store.get_all_scorecards()]

@router.get("/{currency}", response_model=ScorecardSchema)
def get_scorecard(currency: str, store: BiasScorecardStore = Depends(get_store)):
    """
    Get one currency's scorecard (code is case-insensitive).
    """
    try:
        scorecard = store.get_scorecard(currency)
    except ClientInputError as e:
        raise HTTPException(status_code=400, detail=e.message)
    return ScorecardSchema.model_validate(scorecard.to_dict())

@router.post("/recompute", response_model=RecomputeResponse)
def recompute_scorecards(
    request: Optional[RecomputeRequest] = None,
    store: BiasScorecardStore = Depends(get_store),
):
    """
    Apply an optional pillar update and recompute.

    Without a currency the update targets every currency.
    Invalid pillar values are skipped.
    """
    request = request or RecomputeRequest()
    try:
        if request.currency is None and not request.pillars:
            scorecards = store.recompute_all()
        else:
            scorecards = store.update_pillars(request.currency, request.pillars)
    except ClientInputError as e:
        raise HTTPException(status_code=400, detail=e.message)

    return RecomputeResponse(
        ok=True,
        scorecards=[ScorecardSchema.model_validate(s.to_dict()) for s in scorecards],
    )
