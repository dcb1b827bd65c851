import os
import logging
from sqlalchemy import create_engine, desc
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from valuator.models.db import Base, ValuationRecord, AuditLogEntry, LLMCallRecord
from valuator.models.report import ValuationReport

logger = logging.getLogger(__name__)


class DBService:
    """Report store. Defaults to an in-memory SQLite database that lives as long as the process."""

    def __init__(self, database_url: str | None = None):
        url = database_url or os.getenv("DATABASE_URL", "sqlite://")
        if url in ("sqlite://", "sqlite:///:memory:"):
            # One shared connection, otherwise every session sees an empty database
            self.engine = create_engine(
                url,
                echo=False,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )
        else:
            self.engine = create_engine(url, echo=False)
        Base.metadata.create_all(self.engine)
        self.Session = sessionmaker(bind=self.engine)

    def save_report(self, report: ValuationReport) -> int:
        """Insert the report, assign it an id, and store its pipeline and LLM audit trail."""
        session = self.Session()
        try:
            summary = report.request_summary
            results = report.results or {}

            record = ValuationRecord(
                company_name=report.company_name,
                industry=summary.get("industry") or "Other",
                company_stage=str(summary.get("company_stage", "")),
                revenue=summary.get("revenue", 0.0),
                ebitda=summary.get("ebitda", 0.0),
                growth_rate=summary.get("growth_rate", 0.0),
                employees=summary.get("employees", 0),
                selected_methods=summary.get("selected_methods", []),
                ai_analysis=results.get("ai_analysis"),
                valuation_range=results.get("valuation_range"),
                confidence=results.get("confidence"),
                dcf_value=results.get("dcf"),
                comps_value=results.get("comps"),
                asset_based_value=results.get("asset_based"),
                risk_assessment=results.get("risk_assessment"),
                report_json="{}",
                created_at=report.created_at,
            )
            session.add(record)
            session.flush()

            report.id = record.id
            record.report_json = report.model_dump_json()

            for step in report.pipeline_steps:
                session.add(AuditLogEntry(
                    valuation_id=record.id,
                    step_name=step.step_name,
                    status=step.status,
                    duration_ms=step.duration_ms,
                    error=step.error,
                ))

            for log in report.llm_call_logs:
                session.add(LLMCallRecord(
                    valuation_id=record.id,
                    step_name=log.step_name,
                    model=log.model,
                    system_prompt=log.system_prompt,
                    user_prompt=log.user_prompt,
                    response=log.response,
                    tokens_used=log.tokens_used,
                    duration_ms=log.duration_ms,
                ))

            session.commit()
            logger.info(f"Saved valuation {record.id} for '{report.company_name}'")
            return record.id
        finally:
            session.close()

    def get_report(self, report_id: int) -> ValuationReport | None:
        session = self.Session()
        try:
            record = session.query(ValuationRecord).filter_by(id=report_id).first()
            if not record:
                return None
            return ValuationReport.model_validate_json(record.report_json)
        finally:
            session.close()

    def list_recent(self, limit: int = 10) -> list[dict]:
        session = self.Session()
        try:
            records = (
                session.query(ValuationRecord)
                .order_by(desc(ValuationRecord.created_at), desc(ValuationRecord.id))
                .limit(limit)
                .all()
            )
            return [
                {
                    "id": r.id,
                    "company_name": r.company_name,
                    "industry": r.industry,
                    "valuation_range": r.valuation_range,
                    "confidence": r.confidence,
                    "created_at": r.created_at.isoformat() if r.created_at else None,
                }
                for r in records
            ]
        finally:
            session.close()

    def delete_report(self, report_id: int) -> bool:
        session = self.Session()
        try:
            record = session.query(ValuationRecord).filter_by(id=report_id).first()
            if not record:
                return False
            session.query(AuditLogEntry).filter_by(valuation_id=report_id).delete()
            session.query(LLMCallRecord).filter_by(valuation_id=report_id).delete()
            session.delete(record)
            session.commit()
            return True
        finally:
            session.close()

    def get_audit_log(self, report_id: int) -> dict:
        session = self.Session()
        try:
            steps = session.query(AuditLogEntry).filter_by(valuation_id=report_id).all()
            llm_calls = session.query(LLMCallRecord).filter_by(valuation_id=report_id).all()
            return {
                "pipeline_steps": [
                    {
                        "step_name": s.step_name,
                        "status": s.status,
                        "duration_ms": s.duration_ms,
                        "error": s.error,
                    }
                    for s in steps
                ],
                "llm_calls": [
                    {
                        "step_name": c.step_name,
                        "model": c.model,
                        "system_prompt": c.system_prompt,
                        "user_prompt": c.user_prompt,
                        "response": c.response,
                        "tokens_used": c.tokens_used,
                        "duration_ms": c.duration_ms,
                    }
                    for c in llm_calls
                ],
            }
        finally:
            session.close()
