"""Caller input and intelligence record models."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Wire keys of the focus flags, in the order they appear everywhere.
FOCUS_AREAS = ("ppa", "genAI", "cloudCostConcerns")


class CompanyContext(BaseModel):
    """One recommendation request. Never mutated once built."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    company_name: str = Field(alias="companyName")
    website_url: str = Field("", alias="websiteUrl")
    email: str = ""

    # Focus flags — independent of each other
    ppa: bool = False
    gen_ai: bool = Field(False, alias="genAI")
    cloud_cost_concerns: bool = Field(False, alias="cloudCostConcerns")

    @field_validator("company_name")
    @classmethod
    def check_company_name(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("company_name must not be empty")
        return v

    @field_validator("website_url", "email", mode="before")
    @classmethod
    def coerce_none_to_empty(cls, v: object) -> object:
        return "" if v is None else v

    def flag(self, area: str) -> bool:
        """Look up a focus flag by its wire key (``ppa``, ``genAI``, ...)."""
        return {
            "ppa": self.ppa,
            "genAI": self.gen_ai,
            "cloudCostConcerns": self.cloud_cost_concerns,
        }[area]

    def enabled_focus_areas(self) -> list[str]:
        return [area for area in FOCUS_AREAS if self.flag(area)]


class StockPerformance(BaseModel):
    summary: str


class CompanyIntelligence(BaseModel):
    """Web-intelligence summary of a company. Empty lists are valid."""

    model_config = ConfigDict(populate_by_name=True)

    company_name: str = Field(alias="companyName")
    industry: str
    business_model: str = Field(alias="businessModel")
    tech_stack: list[str] = Field(default_factory=list, alias="techStack")
    recent_news: list[str] = Field(default_factory=list, alias="recentNews")
    cloud_usage_indicators: list[str] = Field(
        default_factory=list, alias="cloudUsageIndicators"
    )
    stock_performance: StockPerformance | None = Field(None, alias="stockPerformance")
