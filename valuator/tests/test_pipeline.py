import asyncio
from unittest.mock import MagicMock

import pytest

from valuator.models.report import LLMCallLog
from valuator.models.request import ValuationRequest
from valuator.pipeline.orchestrator import ValuationPipeline
from valuator.pipeline.step_narrate import FALLBACK_MESSAGE
from valuator.valuation.errors import UndefinedRatioError


@pytest.mark.asyncio
async def test_full_pipeline(mock_llm, mock_db, full_request):
    pipeline = ValuationPipeline(mock_llm, mock_db)
    report = await pipeline.run(full_request)

    assert report.id is not None
    assert report.company_name == "TestCorp"
    assert report.results["valuation_range"] == "$2.1M - $2.8M"
    assert report.results["ai_analysis"] == "This is a mock valuation narrative."
    assert [s.step_name for s in report.pipeline_steps] == ["validate", "valuate", "narrate", "persist"]
    assert all(s.status == "completed" for s in report.pipeline_steps)

    loaded = mock_db.get_report(report.id)
    assert loaded is not None
    assert loaded.company_name == "TestCorp"
    assert loaded.results["confidence"] == 90


@pytest.mark.asyncio
async def test_assumptions_recorded(mock_llm, mock_db, full_request):
    pipeline = ValuationPipeline(mock_llm, mock_db)
    report = await pipeline.run(full_request)

    assert report.assumptions["wacc"] == 0.10
    assert report.assumptions["terminal_growth_rate"] == 0.03
    assert report.assumptions["method_weights"] == {"dcf": 0.4, "comps": 0.4, "asset_based": 0.2}
    assert report.assumptions["industry_used"] == "Technology"


@pytest.mark.asyncio
async def test_unknown_industry_reported_as_other(mock_llm, mock_db):
    request = ValuationRequest(
        company_name="OddCo", industry="Aerospace",
        revenue=1_000_000, ebitda=200_000, growth_rate=10, employees=10,
    )
    report = await ValuationPipeline(mock_llm, mock_db).run(request)
    assert report.assumptions["industry_used"] == "Other"
    assert report.request_summary["industry"] == "Aerospace"


@pytest.mark.asyncio
async def test_narrative_failure_uses_fallback(mock_llm, mock_db, full_request):
    async def failing_text(*args, **kwargs):
        raise RuntimeError("LLM configuration missing")

    mock_llm.text_completion = failing_text

    pipeline = ValuationPipeline(mock_llm, mock_db)
    report = await pipeline.run(full_request)

    assert report.results["ai_analysis"].startswith(FALLBACK_MESSAGE)
    assert "$2.1M - $2.8M" in report.results["ai_analysis"]
    assert report.results["dcf"] > 0
    assert report.id is not None


@pytest.mark.asyncio
async def test_zero_ebitda_rejected_and_not_stored(mock_llm, mock_db):
    request = ValuationRequest(
        company_name="NoProfit", industry="Retail",
        revenue=1_000_000, ebitda=0, growth_rate=5, employees=30,
    )
    pipeline = ValuationPipeline(mock_llm, mock_db)

    with pytest.raises(UndefinedRatioError):
        await pipeline.run(request)

    assert mock_db.list_recent() == []


@pytest.mark.asyncio
async def test_persist_failure_keeps_results(mock_llm, mock_db, full_request):
    def broken_save(report):
        raise RuntimeError("store unavailable")

    mock_db.save_report = broken_save

    report = await ValuationPipeline(mock_llm, mock_db).run(full_request)

    assert report.id is None
    assert report.results["valuation_range"] == "$2.1M - $2.8M"
    persist = next(s for s in report.pipeline_steps if s.step_name == "persist")
    assert persist.status == "failed"
    assert "store unavailable" in persist.error


@pytest.mark.asyncio
async def test_concurrent_runs_keep_their_own_llm_logs(mock_db):
    llm = MagicMock()
    llm.call_logs = []

    async def slow_text(system_prompt, user_prompt, step_name, call_logs=None):
        company = "AlphaCo" if "AlphaCo" in user_prompt else "BetaCo"
        # AlphaCo finishes last, so its call lands after BetaCo's
        await asyncio.sleep(0.05 if company == "AlphaCo" else 0.01)
        log = call_logs if call_logs is not None else llm.call_logs
        log.append(LLMCallLog(
            step_name=step_name, model="mock", system_prompt=system_prompt,
            user_prompt=user_prompt, response=company,
        ))
        return f"Narrative for {company}"

    llm.text_completion = slow_text
    pipeline = ValuationPipeline(llm, mock_db)

    def request(name):
        return ValuationRequest(
            company_name=name, industry="Technology",
            revenue=1_000_000, ebitda=200_000, growth_rate=15, employees=50,
        )

    alpha, beta = await asyncio.gather(pipeline.run(request("AlphaCo")), pipeline.run(request("BetaCo")))

    assert [log.response for log in alpha.llm_call_logs] == ["AlphaCo"]
    assert [log.response for log in beta.llm_call_logs] == ["BetaCo"]
    assert llm.call_logs == []
    assert [c["response"] for c in mock_db.get_audit_log(alpha.id)["llm_calls"]] == ["AlphaCo"]
    assert [c["response"] for c in mock_db.get_audit_log(beta.id)["llm_calls"]] == ["BetaCo"]
