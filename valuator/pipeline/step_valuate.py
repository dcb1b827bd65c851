import logging
from valuator.models.request import ValuationRequest
from valuator.models.valuations import ValuationResults
from valuator.valuation.engine import compute_valuation

logger = logging.getLogger(__name__)


def run_valuation(request: ValuationRequest) -> ValuationResults:
    """Step 2: Run the valuation engine on the submitted company profile."""
    results = compute_valuation(request.profile())
    logger.info(
        f"Valuation for '{request.company_name}': {results.valuation_range}, "
        f"confidence={results.confidence}, risk={results.risk_assessment.overall_score}"
    )
    return results
