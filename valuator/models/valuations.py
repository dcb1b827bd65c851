from pydantic import BaseModel, Field
from typing import Optional


class MethodologyWeight(BaseModel):
    method: str
    weight: float
    rationale: str


class BlendedValuation(BaseModel):
    fair_value: float
    fair_value_range: list[float] = Field(..., description="[low, high] range estimate")
    methodology_weights: list[MethodologyWeight]


class RiskAssessment(BaseModel):
    market_risk: int
    financial_risk: int
    operational_risk: int
    liquidity_risk: int
    overall_score: int


class KeyMetrics(BaseModel):
    revenue_multiple: float
    ebitda_multiple: float
    enterprise_value: int
    pe_ratio: float
    peg_ratio: Optional[float] = Field(None, description="Undefined (null) when growth is zero")
    price_to_book: float


class ValuationResults(BaseModel):
    valuation_range: str = Field(..., description="Formatted range in millions, e.g. '$2.1M - $2.8M'")
    valuation_low: int
    valuation_high: int
    confidence: int = Field(..., ge=0, le=100)
    dcf: int
    comps: int
    asset_based: int
    ai_analysis: str = Field("", description="Narrative filled in after the numeric valuation")
    risk_assessment: RiskAssessment
    key_metrics: KeyMetrics
    methodology_weights: list[MethodologyWeight] = Field(default_factory=list)


class QuickEstimateResult(BaseModel):
    revenue_multiple: str
    ebitda_multiple: str
    quick_estimate: str
