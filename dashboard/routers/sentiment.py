from fastapi import APIRouter, Depends, HTTPException

from core.exceptions import ClientInputError
from dashboard.dependencies import get_analyzer
from dashboard.schemas import ObservationRequest, SentimentResultSchema
from event_sentiment import EventSentimentAnalyzer, observation_from_dict

router = APIRouter(prefix="/api/v1/sentiment", tags=["Event Sentiment"])

@router.post("/analyze", response_model=SentimentResultSchema)
def analyze_observation(
    request: ObservationRequest,
    analyzer: EventSentimentAnalyzer = Depends(get_analyzer),
):
    """
    Score one economic event observation.
    """
    try:
        observation = observation_from_dict(request.model_dump(by_alias=True, exclude_none=True))
        result = analyzer.analyze(observation)
    except ClientInputError as e:
        raise HTTPException(status_code=400, detail=e.message)

    return SentimentResultSchema.model_validate(result.to_dict())
