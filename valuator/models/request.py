from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

VALUATION_METHODS = ("dcf", "comparables", "precedent", "asset_based")


class CompanyStage(str, Enum):
    STARTUP = "Startup"
    GROWTH = "Growth"
    MATURE = "Mature"
    PUBLIC = "Public"


class CompanyProfile(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    industry: Optional[str] = Field("Other", description="Industry category; unrecognized values use 'Other'")
    revenue: float = Field(..., description="Latest annual revenue")
    ebitda: float = Field(..., description="Latest annual EBITDA (may be negative)")
    growth_rate: float = Field(..., description="Annual growth rate in percentage points, e.g. 15 for 15%")
    employees: int = Field(..., ge=0, description="Headcount")


class ValuationRequest(CompanyProfile):
    company_name: str = Field(..., min_length=1, description="Name of the company being valued")
    company_stage: CompanyStage = Field(CompanyStage.GROWTH, description="Lifecycle stage")
    selected_methods: list[str] = Field(
        default_factory=lambda: ["dcf", "comparables", "asset_based"],
        description="Valuation methods requested on the form",
    )

    @field_validator("selected_methods")
    @classmethod
    def _check_methods(cls, methods: list[str]) -> list[str]:
        if not methods:
            raise ValueError("Please select at least one valuation method")
        unknown = [m for m in methods if m not in VALUATION_METHODS]
        if unknown:
            raise ValueError(f"Unknown valuation method(s): {', '.join(unknown)}")
        return methods

    def profile(self) -> CompanyProfile:
        return CompanyProfile(
            industry=self.industry,
            revenue=self.revenue,
            ebitda=self.ebitda,
            growth_rate=self.growth_rate,
            employees=self.employees,
        )


class QuickEstimateRequest(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    revenue: Optional[float] = Field(None, description="Latest annual revenue")
    ebitda: Optional[float] = Field(None, description="Latest annual EBITDA")
    industry: Optional[str] = Field(None, description="Industry category")
