from valuator.models.request import (
    CompanyStage, CompanyProfile, ValuationRequest, QuickEstimateRequest, VALUATION_METHODS,
)
from valuator.models.valuations import (
    MethodologyWeight, BlendedValuation, RiskAssessment, KeyMetrics,
    ValuationResults, QuickEstimateResult,
)
from valuator.models.report import PipelineStep, LLMCallLog, ValuationReport

__all__ = [
    "CompanyStage", "CompanyProfile", "ValuationRequest", "QuickEstimateRequest", "VALUATION_METHODS",
    "MethodologyWeight", "BlendedValuation", "RiskAssessment", "KeyMetrics",
    "ValuationResults", "QuickEstimateResult",
    "PipelineStep", "LLMCallLog", "ValuationReport",
]
