"""Markdown report builder — renders an AIRecommendation to a Markdown document."""

from __future__ import annotations

import json
from typing import Any

from finops.schemas.company import CompanyContext
from finops.schemas.recommendations import AIRecommendation, UnitMetric

_INSIGHT_HEADINGS = {
    "ppa": "PPA Discussion Starters",
    "genAI": "GenAI-Specific FinOps Insights",
    "cloudCostConcerns": "Cloud Cost Risk Signals",
}


def _plain(item: Any) -> str:
    """Text for an item that came back in an unexpected shape."""
    if isinstance(item, str):
        return item
    return json.dumps(item, ensure_ascii=False)


def render_markdown_report(
    context: CompanyContext,
    recommendation: AIRecommendation,
    *,
    degraded: bool = False,
) -> str:
    """Render a recommendation into a Markdown string."""
    sections: list[str] = []

    sections.append(f"# FinOps Recommendations: {context.company_name}\n")
    if context.website_url:
        sections.append(f"*Website: {context.website_url}*\n")
    if degraded:
        sections.append(
            "> Generated offline from templates; live company intelligence was not used.\n"
        )

    # Unit metrics
    sections.append("## Unit Cost Metrics\n")
    for i, metric in enumerate(recommendation.metrics, 1):
        if isinstance(metric, UnitMetric):
            sections.append(f"### {i}. {metric.title}\n")
            sections.append(f"{metric.description}\n")
        else:
            sections.append(f"### {i}. {_plain(metric)}\n")

    # Conversation starters
    sections.append("## FinOps Conversation Starters\n")
    for i, starter in enumerate(recommendation.starters, 1):
        sections.append(f"{i}. {_plain(starter)}")
    sections.append("")

    # Conditional insights, only for keys that are present
    insights = recommendation.insights
    present = insights.present_keys()
    if present:
        sections.append("## Focus Area Insights\n")
        for area in present:
            sections.append(f"### {_INSIGHT_HEADINGS[area]}\n")
            items = insights.get(area)
            for item in items if isinstance(items, list) else [items]:
                sections.append(f"- {_plain(item)}")
            sections.append("")

    return "\n".join(sections)
