import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from valuator.models.request import ValuationRequest, QuickEstimateRequest
from valuator.models.report import ValuationReport
from valuator.models.valuations import QuickEstimateResult
from valuator.api.dependencies import get_pipeline, get_db_service
from valuator.pipeline.orchestrator import ValuationPipeline
from valuator.services.db_service import DBService
from valuator.valuation.engine import quick_estimate
from valuator.valuation.errors import ValuationError
from valuator.valuation.industries import INDUSTRY_MULTIPLES

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/valuations", tags=["valuations"])
tools_router = APIRouter(prefix="/api", tags=["tools"])


@router.post("", response_model=ValuationReport)
async def create_valuation(
    request: ValuationRequest,
    pipeline: ValuationPipeline = Depends(get_pipeline),
):
    """Run the valuation pipeline and return the complete report."""
    try:
        return await pipeline.run(request)
    except ValuationError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("", response_model=list[dict])
async def list_valuations(
    limit: int = Query(10, ge=1, le=100),
    db: DBService = Depends(get_db_service),
):
    """List the most recent valuations (summary only)."""
    return db.list_recent(limit)


@router.get("/{valuation_id}", response_model=ValuationReport)
async def get_valuation(
    valuation_id: int,
    db: DBService = Depends(get_db_service),
):
    """Get full valuation report by ID."""
    report = db.get_report(valuation_id)
    if not report:
        raise HTTPException(status_code=404, detail="Valuation not found")
    return report


@router.delete("/{valuation_id}")
async def delete_valuation(
    valuation_id: int,
    db: DBService = Depends(get_db_service),
):
    """Delete a valuation report."""
    deleted = db.delete_report(valuation_id)
    if not deleted:
        raise HTTPException(status_code=404, detail="Valuation not found")
    return {"status": "deleted"}


@router.get("/{valuation_id}/audit-log")
async def get_audit_log(
    valuation_id: int,
    db: DBService = Depends(get_db_service),
):
    """Get pipeline steps and LLM call logs for a valuation."""
    return db.get_audit_log(valuation_id)


@tools_router.post("/quick-calculator", response_model=QuickEstimateResult)
async def quick_calculator(body: QuickEstimateRequest):
    """Rough value range from the industry revenue and EBITDA multiples."""
    try:
        return quick_estimate(body.revenue, body.ebitda, body.industry)
    except ValuationError as e:
        logger.info(f"Quick calculator rejected input: {e}")
        raise HTTPException(status_code=400, detail=str(e))


@tools_router.get("/industries")
async def list_industries():
    """Industry categories and the multiples applied to each."""
    return [
        {
            "industry": industry.value,
            "revenue_multiple": multiples.revenue_multiple,
            "ebitda_multiple": multiples.ebitda_multiple,
        }
        for industry, multiples in INDUSTRY_MULTIPLES.items()
    ]
