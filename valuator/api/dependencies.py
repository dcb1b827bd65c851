from functools import lru_cache
from valuator.services.llm_service import LLMService
from valuator.services.db_service import DBService
from valuator.pipeline.orchestrator import ValuationPipeline


@lru_cache
def get_llm_service() -> LLMService:
    return LLMService()


@lru_cache
def get_db_service() -> DBService:
    return DBService()


def get_pipeline() -> ValuationPipeline:
    return ValuationPipeline(
        llm=get_llm_service(),
        db=get_db_service(),
    )
