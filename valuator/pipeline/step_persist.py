from valuator.models.report import ValuationReport
from valuator.services.db_service import DBService


def persist_report(report: ValuationReport, db: DBService) -> int:
    """Step 4: Save the completed report to the in-memory store."""
    return db.save_report(report)
