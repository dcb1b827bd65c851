import pytest
from unittest.mock import MagicMock

from valuator.models.request import ValuationRequest
from valuator.services.db_service import DBService


@pytest.fixture
def mock_llm():
    llm = MagicMock()
    llm.call_logs = []

    async def mock_text(*args, **kwargs):
        return "This is a mock valuation narrative."

    llm.text_completion = mock_text
    return llm


@pytest.fixture
def mock_db():
    return DBService("sqlite://")


@pytest.fixture
def full_request():
    return ValuationRequest(
        company_name="TestCorp",
        industry="Technology",
        company_stage="Growth",
        revenue=1_000_000,
        ebitda=200_000,
        growth_rate=15,
        employees=50,
    )
