import json
from valuator.models.report import LLMCallLog
from valuator.models.request import ValuationRequest
from valuator.models.valuations import ValuationResults
from valuator.services.llm_service import LLMService
from valuator.valuation.risk import risk_level

FALLBACK_MESSAGE = (
    "AI analysis temporarily unavailable. The valuation results are based on "
    "industry-standard methodologies and comparable company analysis."
)


async def generate_narrative(
    request: ValuationRequest,
    results: ValuationResults,
    llm: LLMService,
    call_logs: list[LLMCallLog] | None = None,
) -> str:
    """Step 3: Generate a short analyst narrative via LLM."""
    system_prompt = (
        "You are a professional financial analyst specializing in business valuations. "
        "Provide detailed, accurate analysis based on the company data provided."
    )

    risk = results.risk_assessment
    data = {
        "company_name": request.company_name,
        "industry": request.industry,
        "stage": request.company_stage.value,
        "revenue": request.revenue,
        "ebitda": request.ebitda,
        "growth_rate_pct": request.growth_rate,
        "employees": request.employees,
        "selected_methods": request.selected_methods,
        "valuation": {
            "dcf_value": results.dcf,
            "comps_value": results.comps,
            "asset_based_value": results.asset_based,
            "estimated_range": results.valuation_range,
            "confidence": results.confidence,
        },
        "risk": {
            "market": f"{risk.market_risk} ({risk_level(risk.market_risk)})",
            "financial": f"{risk.financial_risk} ({risk_level(risk.financial_risk)})",
            "operational": f"{risk.operational_risk} ({risk_level(risk.operational_risk)})",
            "liquidity": f"{risk.liquidity_risk} ({risk_level(risk.liquidity_risk)})",
            "overall": f"{risk.overall_score} ({risk_level(risk.overall_score)})",
        },
    }

    user_prompt = (
        f"Analyze this company for business valuation:\n{json.dumps(data, indent=2)}\n\n"
        "Please provide a concise analysis (150-200 words) covering:\n"
        "1. Key strengths and weaknesses\n"
        "2. Valuation methodology insights\n"
        "3. Industry-specific considerations\n"
        "4. Growth prospects and risks\n\n"
        "Focus on actionable insights for decision-making."
    )

    return await llm.text_completion(
        system_prompt=system_prompt,
        user_prompt=user_prompt,
        step_name="narrate",
        call_logs=call_logs,
    )


def fallback_narrative(results: ValuationResults) -> str:
    """Fallback narrative if LLM is unavailable."""
    risk = results.risk_assessment
    parts = [FALLBACK_MESSAGE]
    parts.append(f"Estimated range: {results.valuation_range} ({results.confidence}% confidence)")
    for w in results.methodology_weights:
        parts.append(f"- {w.method}: weight {w.weight:.0%} ({w.rationale})")
    parts.append(f"Overall risk: {risk_level(risk.overall_score)} ({risk.overall_score / 20:.1f}/5.0)")
    return "\n".join(parts)
