from sqlalchemy import JSON, Column, String, Text, DateTime, Float, Integer
from sqlalchemy.orm import declarative_base
from datetime import datetime, timezone

Base = declarative_base()


class ValuationRecord(Base):
    __tablename__ = "valuation_records"

    id = Column(Integer, primary_key=True, autoincrement=True)
    company_name = Column(String, nullable=False)
    industry = Column(String, nullable=False)
    company_stage = Column(String, nullable=False)
    revenue = Column(Float, nullable=False)
    ebitda = Column(Float, nullable=False)
    growth_rate = Column(Float, nullable=False)
    employees = Column(Integer, nullable=False)
    selected_methods = Column(JSON, nullable=False)
    ai_analysis = Column(Text, nullable=True)
    valuation_range = Column(String, nullable=True)
    confidence = Column(Float, nullable=True)
    dcf_value = Column(Float, nullable=True)
    comps_value = Column(Float, nullable=True)
    asset_based_value = Column(Float, nullable=True)
    risk_assessment = Column(JSON, nullable=True)
    report_json = Column(Text, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))


class AuditLogEntry(Base):
    __tablename__ = "audit_log_entries"

    id = Column(Integer, primary_key=True, autoincrement=True)
    valuation_id = Column(Integer, nullable=False)
    step_name = Column(String, nullable=False)
    status = Column(String, nullable=False)
    duration_ms = Column(Float, nullable=True)
    error = Column(Text, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))


class LLMCallRecord(Base):
    __tablename__ = "llm_call_records"

    id = Column(Integer, primary_key=True, autoincrement=True)
    valuation_id = Column(Integer, nullable=False)
    step_name = Column(String, nullable=False)
    model = Column(String, nullable=False)
    system_prompt = Column(Text, nullable=False)
    user_prompt = Column(Text, nullable=False)
    response = Column(Text, nullable=False)
    tokens_used = Column(Integer, nullable=True)
    duration_ms = Column(Float, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))
