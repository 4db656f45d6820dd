"""Pydantic models for the recommendation output contract.

Provider output is kept as returned: unknown keys survive a round trip
through ``to_wire`` and items that don't fit the typed shapes are stored
unchanged. ``invariant_violations`` reports everything that is off-shape.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from finops.schemas.company import FOCUS_AREAS, CompanyContext

UNIT_METRICS_MIN = 4
UNIT_METRICS_MAX = 5
CONVERSATION_STARTERS = 3
INSIGHTS_PER_AREA = 3


class UnitMetric(BaseModel):
    """A cost figure normalized per business-meaningful unit."""

    model_config = ConfigDict(extra="allow")

    title: str
    description: str


class ConditionalInsights(BaseModel):
    """Focus-area discussion points. ``None`` means the key is absent."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    ppa: Any = None
    gen_ai: Any = Field(None, alias="genAI")
    cloud_cost_concerns: Any = Field(None, alias="cloudCostConcerns")

    def get(self, area: str) -> Any:
        return {
            "ppa": self.ppa,
            "genAI": self.gen_ai,
            "cloudCostConcerns": self.cloud_cost_concerns,
        }[area]

    def present_keys(self) -> list[str]:
        return [area for area in FOCUS_AREAS if self.get(area) is not None]

    def unknown_keys(self) -> list[str]:
        return list(self.model_extra or {})


def _typed(model: type[BaseModel], value: Any) -> Any:
    """``value`` as ``model`` when it fits, otherwise unchanged."""
    if isinstance(value, (model, dict)):
        try:
            return model.model_validate(value)
        except ValidationError:
            return value
    return value


class AIRecommendation(BaseModel):
    """Structured FinOps recommendation for one company."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    unit_metrics: Any = Field(alias="unitMetrics")
    conversation_starters: Any = Field(alias="conversationStarters")
    conditional_insights: Any = Field(
        default_factory=ConditionalInsights, alias="conditionalInsights"
    )

    @field_validator("conditional_insights", mode="before")
    @classmethod
    def coerce_none_to_empty(cls, v: object) -> object:
        return {} if v is None else v

    @field_validator("unit_metrics", mode="after")
    @classmethod
    def type_metrics(cls, v: Any) -> Any:
        if not isinstance(v, list):
            return v
        return [_typed(UnitMetric, item) for item in v]

    @field_validator("conditional_insights", mode="after")
    @classmethod
    def type_insights(cls, v: Any) -> Any:
        return _typed(ConditionalInsights, v)

    @property
    def metrics(self) -> list[Any]:
        return self.unit_metrics if isinstance(self.unit_metrics, list) else []

    @property
    def starters(self) -> list[Any]:
        return self.conversation_starters if isinstance(self.conversation_starters, list) else []

    @property
    def insights(self) -> ConditionalInsights:
        """The insights mapping, or an empty one when the provider sent something else."""
        if isinstance(self.conditional_insights, ConditionalInsights):
            return self.conditional_insights
        return ConditionalInsights()

    def to_wire(self) -> dict[str, Any]:
        """Dump with camelCase keys, leaving absent insight keys out entirely."""
        return self.model_dump(by_alias=True, exclude_none=True)

    def invariant_violations(self, context: CompanyContext | None = None) -> list[str]:
        """List every breach of the output-shape invariants (empty if none).

        When ``context`` is given, also checks that each insight key is
        present exactly when its focus flag is enabled.
        """
        problems: list[str] = []

        if not isinstance(self.unit_metrics, list):
            problems.append("unitMetrics is not a list")
        n_metrics = len(self.metrics)
        if not UNIT_METRICS_MIN <= n_metrics <= UNIT_METRICS_MAX:
            problems.append(
                f"unitMetrics has {n_metrics} items, expected "
                f"{UNIT_METRICS_MIN}-{UNIT_METRICS_MAX}"
            )
        for i, metric in enumerate(self.metrics):
            if not isinstance(metric, UnitMetric):
                problems.append(f"unitMetrics[{i}] is not a {{title, description}} object")

        if not isinstance(self.conversation_starters, list):
            problems.append("conversationStarters is not a list")
        n_starters = len(self.starters)
        if n_starters != CONVERSATION_STARTERS:
            problems.append(
                f"conversationStarters has {n_starters} items, "
                f"expected {CONVERSATION_STARTERS}"
            )
        for i, starter in enumerate(self.starters):
            if not isinstance(starter, str):
                problems.append(f"conversationStarters[{i}] is not a string")

        if not isinstance(self.conditional_insights, ConditionalInsights):
            problems.append("conditionalInsights is not an object")
        for key in self.insights.unknown_keys():
            problems.append(f"conditionalInsights.{key} is not a known focus area")

        for area in FOCUS_AREAS:
            items = self.insights.get(area)
            if items is not None:
                if not isinstance(items, list) or not all(isinstance(s, str) for s in items):
                    problems.append(f"conditionalInsights.{area} is not a list of strings")
                elif len(items) != INSIGHTS_PER_AREA:
                    problems.append(
                        f"conditionalInsights.{area} has {len(items)} items, "
                        f"expected {INSIGHTS_PER_AREA}"
                    )
            if context is None:
                continue
            if context.flag(area) and items is None:
                problems.append(f"conditionalInsights.{area} missing but {area} was requested")
            elif not context.flag(area) and items is not None:
                problems.append(f"conditionalInsights.{area} present but {area} was not requested")

        return problems
