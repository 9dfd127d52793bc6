"""
Pydantic schemas for Dashboard API requests and responses.

Field names are snake_case in Python and camelCase on the wire.
"""
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field

# =======================
# COMMON
# =======================

class HealthResponse(BaseModel):
    status: str
    service: str
    timestamp: str

# =======================
# 1. BIAS SCORECARD
# =======================

class PillarScoreSchema(BaseModel):
    pillar: str
    score: float
    weight: float
    rationale: str

class ScorecardSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    currency: str
    pillars: List[PillarScoreSchema]
    weighted_bias_score: float = Field(alias="weightedBiasScore")
    bias: str  # BULLISH, BEARISH, NEUTRAL
    updated_at: str = Field(alias="updatedAt")  # ISO-8601

class RecomputeRequest(BaseModel):
    currency: Optional[str] = None  # None = every currency
    pillars: Optional[Dict[str, Any]] = None  # validated by the store

class RecomputeResponse(BaseModel):
    ok: bool
    scorecards: List[ScorecardSchema]

# =======================
# 2. EVENT SENTIMENT
# =======================

# Values stay loosely typed; the ingestion layer rejects malformed ones with 400.

class AdditionalDataSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    voting_pattern: Optional[Any] = Field(default=None, alias="votingPattern")  # "hike-cut-hold"
    speech_tone: Optional[Any] = Field(default=None, alias="speechTone")
    policy_change: Optional[Any] = Field(default=None, alias="policyChange")
    market_surprise: Optional[Any] = Field(default=None, alias="marketSurprise")

class ObservationRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: Optional[Any] = None
    currency: Optional[Any] = None
    event_type: Optional[Any] = Field(default=None, alias="eventType")
    category: Optional[Any] = None
    actual_value: Optional[Any] = Field(default=None, alias="actualValue")
    expected_value: Optional[Any] = Field(default=None, alias="expectedValue")
    previous_value: Optional[Any] = Field(default=None, alias="previousValue")
    additional_data: Optional[AdditionalDataSchema] = Field(default=None, alias="additionalData")

class SentimentResultSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    sentiment: str  # BULLISH, BEARISH, NEUTRAL
    confidence: int
    reasoning: List[str]
    economic_factors: List[str] = Field(alias="economicFactors")
    score: int
