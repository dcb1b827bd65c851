import logging
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType

logger = logging.getLogger(__name__)


class Industry(str, Enum):
    TECHNOLOGY = "Technology"
    HEALTHCARE = "Healthcare"
    FINANCIAL_SERVICES = "Financial Services"
    MANUFACTURING = "Manufacturing"
    RETAIL = "Retail"
    OTHER = "Other"

    @classmethod
    def parse(cls, value: "str | Industry | None") -> "Industry":
        """Map a label to its industry. Unknown or empty labels resolve to OTHER."""
        if isinstance(value, Industry):
            return value
        for member in cls:
            if member.value == value:
                return member
        logger.debug(f"Unrecognized industry {value!r}, using {cls.OTHER.value}")
        return cls.OTHER


@dataclass(frozen=True)
class IndustryMultiples:
    revenue_multiple: float
    ebitda_multiple: float


INDUSTRY_MULTIPLES: MappingProxyType = MappingProxyType({
    Industry.TECHNOLOGY: IndustryMultiples(revenue_multiple=4.2, ebitda_multiple=15.5),
    Industry.HEALTHCARE: IndustryMultiples(revenue_multiple=3.8, ebitda_multiple=12.3),
    Industry.FINANCIAL_SERVICES: IndustryMultiples(revenue_multiple=2.9, ebitda_multiple=11.2),
    Industry.MANUFACTURING: IndustryMultiples(revenue_multiple=1.8, ebitda_multiple=8.5),
    Industry.RETAIL: IndustryMultiples(revenue_multiple=1.4, ebitda_multiple=7.8),
    Industry.OTHER: IndustryMultiples(revenue_multiple=2.5, ebitda_multiple=10.0),
})


def get_industry_multiples(industry: "str | Industry | None") -> IndustryMultiples:
    return INDUSTRY_MULTIPLES[Industry.parse(industry)]
