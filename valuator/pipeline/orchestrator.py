import inspect
import time
import logging
from datetime import datetime, timezone

from valuator.models.request import ValuationRequest
from valuator.models.valuations import ValuationResults
from valuator.models.report import LLMCallLog, PipelineStep, ValuationReport
from valuator.services.llm_service import LLMService
from valuator.services.db_service import DBService
from valuator.pipeline.step_valuate import run_valuation
from valuator.pipeline.step_narrate import generate_narrative, fallback_narrative
from valuator.pipeline.step_persist import persist_report
from valuator.valuation.engine import valuation_assumptions
from valuator.valuation.errors import ValuationError
from valuator.valuation.industries import Industry

logger = logging.getLogger(__name__)


class ValuationPipeline:
    def __init__(self, llm: LLMService, db: DBService):
        self.llm = llm
        self.db = db

    async def run(self, request: ValuationRequest) -> ValuationReport:
        """Value, narrate and store one company.

        ValuationError from the engine propagates; nothing is stored for a failed valuation.
        """
        steps: list[PipelineStep] = []
        # Per-run list; the LLM service is shared across concurrent requests
        call_logs: list[LLMCallLog] = []

        logger.info(f"=== Pipeline started for '{request.company_name}' ===")

        industry = Industry.parse(request.industry)
        assumptions = valuation_assumptions()
        assumptions["industry_used"] = industry.value
        assumptions["growth_rate_fraction"] = request.growth_rate / 100

        # Step 1: Validate (trivial — Pydantic already did it)
        now = datetime.now(timezone.utc)
        steps.append(PipelineStep(
            step_name="validate", status="completed",
            started_at=now, completed_at=now, duration_ms=0,
        ))

        # Step 2: Valuate — domain errors abort the run
        valuate_step = PipelineStep(step_name="valuate", status="running", started_at=datetime.now(timezone.utc))
        valuate_start = time.time()
        try:
            results = run_valuation(request)
        except ValuationError as e:
            valuate_step.status = "failed"
            valuate_step.error = str(e)
            valuate_step.completed_at = datetime.now(timezone.utc)
            valuate_step.duration_ms = (time.time() - valuate_start) * 1000
            logger.error(f"Valuation failed for '{request.company_name}': {e}")
            raise
        valuate_step.status = "completed"
        valuate_step.completed_at = datetime.now(timezone.utc)
        valuate_step.duration_ms = (time.time() - valuate_start) * 1000
        steps.append(valuate_step)
        logger.info(f"Step 'valuate' completed in {valuate_step.duration_ms:.0f}ms")

        # Step 3: Narrate (never fails the run)
        narrative = await self._run_step("narrate", steps, self._narrate, request, results, call_logs)
        results.ai_analysis = narrative or fallback_narrative(results)

        report = ValuationReport(
            company_name=request.company_name,
            request_summary=request.model_dump(mode="json"),
            results=results.model_dump(),
            pipeline_steps=steps,
            llm_call_logs=list(call_logs),
            created_at=datetime.now(timezone.utc),
            assumptions=assumptions,
        )

        # Step 4: Persist
        await self._run_step("persist", steps, self._persist, report)
        report.pipeline_steps = steps

        logger.info(
            f"=== Pipeline completed for '{request.company_name}': "
            f"range={results.valuation_range}, id={report.id} ==="
        )

        return report

    async def _run_step(self, name: str, steps: list[PipelineStep], fn, *args):
        step = PipelineStep(step_name=name, status="running", started_at=datetime.now(timezone.utc))
        start = time.time()
        logger.info(f"Step '{name}' started")
        try:
            result = await fn(*args) if inspect.iscoroutinefunction(fn) else fn(*args)
            step.status = "completed"
            step.completed_at = datetime.now(timezone.utc)
            step.duration_ms = (time.time() - start) * 1000
            steps.append(step)
            logger.info(f"Step '{name}' completed in {step.duration_ms:.0f}ms")
            return result
        except Exception as e:
            step.status = "failed"
            step.error = str(e)
            step.completed_at = datetime.now(timezone.utc)
            step.duration_ms = (time.time() - start) * 1000
            steps.append(step)
            logger.error(f"Step '{name}' failed in {step.duration_ms:.0f}ms: {e}")
            return None

    async def _narrate(
        self, request: ValuationRequest, results: ValuationResults, call_logs: list[LLMCallLog]
    ) -> str:
        try:
            return await generate_narrative(request, results, self.llm, call_logs=call_logs)
        except Exception as e:
            logger.warning(f"Narrative generation failed: {e}")
            return fallback_narrative(results)

    def _persist(self, report: ValuationReport) -> int:
        return persist_report(report, self.db)
