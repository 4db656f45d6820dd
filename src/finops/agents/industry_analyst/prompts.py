"""Prompt for the industry analyst (secondary provider)."""

from finops.schemas.company import CompanyIntelligence

ANALYSIS_PROMPT = """\
Analyze this company's industry context and provide insights for FinOps strategy:

Company: {company_name}
Industry: {industry}
Business Model: {business_model}
Tech Stack: {tech_stack}
Recent News: {recent_news}
Cloud Usage Indicators: {cloud_usage_indicators}
{stock_line}
Provide a 2-3 sentence analysis of their likely cloud cost patterns, \
infrastructure needs, and FinOps priorities based on this context."""

FALLBACK_ANALYSIS = (
    "Based on {company_name}'s {industry} industry focus and {business_model} "
    "business model, they likely have significant cloud infrastructure needs with "
    "potential for cost optimization through unit economics and usage-based monitoring."
)


def build_analysis_prompt(intel: CompanyIntelligence) -> str:
    stock_line = ""
    if intel.stock_performance:
        stock_line = f"Stock Performance: {intel.stock_performance.summary}\n"
    return ANALYSIS_PROMPT.format(
        company_name=intel.company_name,
        industry=intel.industry,
        business_model=intel.business_model,
        tech_stack=", ".join(intel.tech_stack),
        recent_news="; ".join(intel.recent_news),
        cloud_usage_indicators="; ".join(intel.cloud_usage_indicators),
        stock_line=stock_line,
    )


def fallback_analysis(intel: CompanyIntelligence) -> str:
    return FALLBACK_ANALYSIS.format(
        company_name=intel.company_name,
        industry=intel.industry,
        business_model=intel.business_model,
    )
