"""Prompts for the Recommender agent (primary provider).

``build_prompt`` is a pure function: the same inputs always yield the same
instruction text.
"""

from __future__ import annotations

import json
from typing import Any

from finops.schemas.company import CompanyContext, CompanyIntelligence

SYSTEM_PROMPT = (
    "You are an expert FinOps consultant with deep knowledge of cloud cost "
    "optimization, unit economics, and industry-specific infrastructure patterns. "
    "You must respond with valid JSON only, no additional text or formatting."
)

_BODY = """\
You are a FinOps strategy assistant with access to current company intelligence \
and industry analysis.

Company Information:
- Company Name: {company_name}
- Website: {website}
- Industry: {industry}
- Business Model: {business_model}
- Tech Stack: {tech_stack}

Recent Company Intelligence:
- Recent News: {recent_news}
- Cloud Usage Patterns: {cloud_usage}
{stock_line}
Industry Analysis:
{industry_analysis}

Focus Areas Selected:
- Private Pricing Agreement (PPA): {ppa}
- Generative AI: {gen_ai}
- Cloud Cost Concerns: {cloud_cost_concerns}

Please provide a structured response with the following sections:

1. **Unit Cost Metrics (4-5 recommendations)**
   - Suggest 4-5 relevant unit cost metrics tailored to {company_name}'s business
   - For each metric, provide a clear title and 2-3 sentence explanation that includes:
     * Why this metric matters for their specific business model
     * How it connects to business value and decision-making
     * What insights it can reveal about cost efficiency
   - Consider the company's likely industry and business model
   - Make recommendations specific and actionable

2. **FinOps Conversation Starters (3 questions)**
   - Provide 3 strategic, open-ended questions to open FinOps discussions with {company_name}
   - Each question should be 2-3 sentences that include context about why this matters \
for their business
   - Focus on usage-based cost transparency, business value alignment, and strategic \
decision-making
   - Include specific examples or scenarios relevant to their industry and business model
   - Keep tone consultative and educational, not salesy
   - Make questions thought-provoking and discussion-worthy

3. **Conditional Insights (only if applicable)**"""

# One paragraph per focus area, keyed by wire key
_FOCUS_SECTIONS = {
    "ppa": (
        "   - **PPA Discussion Starters**: 3 strategic questions about private pricing "
        "agreements and committed use optimization for {company_name}. Each should be "
        "2-3 sentences explaining the context and why PPAs matter for their specific "
        "situation, including potential savings scenarios and commitment strategies."
    ),
    "genAI": (
        "   - **GenAI-Specific FinOps Insights**: 3 strategic questions about GPU costs, "
        "model training, and AI infrastructure optimization for {company_name}. Each "
        "should be 2-3 sentences providing context about GenAI cost patterns, "
        "optimization opportunities, and how to align AI spending with business outcomes."
    ),
    "cloudCostConcerns": (
        "   - **Cloud Cost Risk Signals**: 3 strategic questions about cost visibility, "
        "budget overruns, and cost optimization for {company_name}. Each should be 2-3 "
        "sentences explaining common cost risk patterns, warning signs to watch for, and "
        "proactive strategies for cost management."
    ),
}

# Placeholder items shown in the schema example for each focus area
_SCHEMA_PLACEHOLDERS = {
    "ppa": ["PPA question 1", "PPA question 2", "PPA question 3"],
    "genAI": ["GenAI question 1", "GenAI question 2", "GenAI question 3"],
    "cloudCostConcerns": ["Cost concern 1", "Cost concern 2", "Cost concern 3"],
}

_SCHEMA_INTRO = "Please return your response as a valid JSON object with this exact structure:"

_CLOSING = (
    "Make all recommendations highly specific to {company_name} and their likely "
    "business model. Avoid generic advice."
)


def _yes_no(flag: bool) -> str:
    return "Yes" if flag else "No"


def build_output_schema(context: CompanyContext) -> dict[str, Any]:
    """The JSON structure the model must return.

    ``conditionalInsights`` holds only the keys whose focus flag is enabled;
    with no flags enabled it is an empty object.
    """
    name = context.company_name
    insights: dict[str, list[str]] = {}
    for area in context.enabled_focus_areas():
        insights[area] = list(_SCHEMA_PLACEHOLDERS[area])

    return {
        "unitMetrics": [
            {
                "title": f"Cost per [specific unit for {name}]",
                "description": (
                    "Detailed explanation of why this metric matters for their business, "
                    "how it connects to business value, and what cost efficiency "
                    "insights it reveals"
                ),
            }
        ],
        "conversationStarters": [
            f"Strategic question 1 for {name}",
            f"Strategic question 2 for {name}",
            f"Strategic question 3 for {name}",
        ],
        "conditionalInsights": insights,
    }


def build_prompt(
    context: CompanyContext,
    intel: CompanyIntelligence,
    industry_analysis: str,
) -> str:
    """Render the full instruction text for the primary provider."""
    name = context.company_name
    stock_line = ""
    if intel.stock_performance:
        stock_line = f"- Stock Performance: {intel.stock_performance.summary}\n"

    parts = [
        _BODY.format(
            company_name=name,
            website=context.website_url or "Not provided",
            industry=intel.industry,
            business_model=intel.business_model,
            tech_stack=", ".join(intel.tech_stack),
            recent_news="; ".join(intel.recent_news),
            cloud_usage="; ".join(intel.cloud_usage_indicators),
            stock_line=stock_line,
            industry_analysis=industry_analysis,
            ppa=_yes_no(context.ppa),
            gen_ai=_yes_no(context.gen_ai),
            cloud_cost_concerns=_yes_no(context.cloud_cost_concerns),
        )
    ]
    for area in context.enabled_focus_areas():
        parts.append(_FOCUS_SECTIONS[area].format(company_name=name))

    schema = json.dumps(build_output_schema(context), indent=2, ensure_ascii=False)
    parts.append("")
    parts.append(f"{_SCHEMA_INTRO}\n{schema}")
    parts.append("")
    parts.append(_CLOSING.format(company_name=name))
    return "\n".join(parts)
