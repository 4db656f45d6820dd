"""Offline recommendation templates — no network, never fails.

Used when the caller opts into degraded mode (``FailurePolicy.FALLBACK``)
or runs fully offline.
"""

from __future__ import annotations

from finops.schemas.company import CompanyContext
from finops.schemas.recommendations import AIRecommendation, ConditionalInsights, UnitMetric

_UNIT_METRICS = [
    (
        "Cost per {name} customer transaction",
        "Monitor the total infrastructure cost for each customer transaction or core "
        "business action at {name}. This metric directly connects cloud spending to "
        "revenue-generating activities, helping you understand the true cost of serving "
        "customers and identify optimization opportunities that improve profit margins. "
        "It's essential for maintaining healthy unit economics as you scale.",
    ),
    (
        "Cost per {name} service delivery",
        "Track infrastructure costs associated with delivering your core product or "
        "service to customers. For {name}, this means understanding how much it costs to "
        "fulfill each customer request, process each order, or deliver each unit of value. "
        "This business-focused metric helps align technical spending with customer "
        "satisfaction and operational efficiency.",
    ),
    (
        "Cost per {name} customer acquisition",
        "Measure the infrastructure costs associated with onboarding and serving new "
        "customers during their first month at {name}. This metric helps you understand "
        "the true cost of growth and ensures that customer acquisition costs remain "
        "sustainable. It's particularly valuable for identifying whether your platform can "
        "profitably scale with new customer growth.",
    ),
    (
        "Cost per {name} business outcome",
        "Track infrastructure costs per key business result - whether that's completed "
        "orders, successful deliveries, processed payments, or other core value-creating "
        "activities for {name}. This metric ensures that technology spending directly "
        "supports business objectives and helps identify which operational processes are "
        "most cost-effective to scale.",
    ),
    (
        "Cost per {name} customer success milestone",
        "Monitor infrastructure costs for key customer journey milestones - from initial "
        "signup through product adoption and ongoing engagement. For {name}, this helps "
        "identify which stages of the customer lifecycle are most expensive to support and "
        "where optimization efforts will have the biggest impact on customer lifetime "
        "value and retention.",
    ),
]

_CONVERSATION_STARTERS = [
    "How does {name} ensure infrastructure costs scale proportionally with user growth "
    "and product value? Many companies find that as they scale, their cloud costs grow "
    "faster than revenue, often due to inefficient resource allocation or lack of "
    "usage-based monitoring. Understanding this relationship early helps prevent costly "
    "surprises and enables data-driven scaling decisions that align with your business model.",
    "Are your development teams at {name} empowered with cost visibility to make "
    "efficient architecture decisions? When engineers can see the cost impact of their "
    "choices in real-time, they naturally optimize for efficiency without sacrificing "
    "performance. This visibility often leads to 20-30% cost reductions through better "
    "resource selection and usage patterns, especially important as your team grows.",
    "Would unit cost metrics help {name} align engineering priorities with business "
    "profitability goals? By connecting infrastructure spending to business outcomes like "
    "customer acquisition cost or revenue per user, teams can make more strategic "
    "decisions about where to invest their optimization efforts and which features truly "
    "drive value for your specific market and customer base.",
]

_PPA_INSIGHTS = [
    "How might {name} leverage committed use discounts and reserved instances to reduce "
    "baseline infrastructure costs? Understanding your predictable workload patterns can "
    "unlock significant savings through AWS Enterprise Discount Programs or similar "
    "commitment-based pricing models. This is especially valuable for companies with "
    "steady growth trajectories.",
    "What's {name}'s strategy for balancing flexibility with cost savings in your private "
    "pricing agreements? While PPAs can offer substantial discounts, they require careful "
    "capacity planning and usage forecasting. The key is identifying which workloads are "
    "predictable enough to commit to while maintaining agility for growth and experimentation.",
    "How does {name} measure and optimize the ROI of your committed cloud spending? "
    "Tracking metrics like commitment utilization rates and cost per committed unit helps "
    "ensure you're maximizing the value of your private pricing agreements. This becomes "
    "increasingly important as your infrastructure needs evolve and scale.",
]

_GENAI_INSIGHTS = [
    "How is {name} managing the unpredictable cost patterns of GPU-intensive AI "
    "workloads? GenAI applications often have highly variable compute needs, making "
    "traditional cost forecasting challenging. Understanding cost per inference, training "
    "job, or model iteration helps teams optimize both performance and spending in this "
    "rapidly evolving space.",
    "What's {name}'s approach to balancing model performance with infrastructure costs "
    "for AI features? The choice between different model sizes, inference methods, and "
    "hosting strategies can dramatically impact both user experience and cloud spending. "
    "Tracking unit costs helps teams make informed trade-offs between capability and "
    "cost-effectiveness.",
    "How does {name} optimize costs across the AI development lifecycle from "
    "experimentation to production? GenAI projects often involve significant compute costs "
    "for data processing, model training, fine-tuning, and inference. Understanding the "
    "cost structure of each phase helps teams allocate resources efficiently and identify "
    "optimization opportunities throughout the development process.",
]

_COST_CONCERN_INSIGHTS = [
    "What early warning signals does {name} monitor to prevent cloud cost overruns? "
    "Implementing automated alerts for unusual spending patterns, resource utilization "
    "thresholds, and budget variance can help teams catch cost issues before they become "
    "significant problems. This proactive approach is essential for maintaining "
    "predictable unit economics.",
    "How does {name} ensure cost visibility and accountability across different teams "
    "and projects? Without proper cost allocation and chargeback mechanisms, it's "
    "difficult to identify which initiatives are driving cloud spending and whether that "
    "spending is justified by business value. Clear cost attribution helps teams make "
    "more responsible resource decisions.",
    "What's {name}'s strategy for rightsizing resources and eliminating waste in your "
    "cloud infrastructure? Regular audits of unused resources, oversized instances, and "
    "inefficient architectures often reveal 15-25% cost reduction opportunities. The key "
    "is establishing processes to continuously optimize resource allocation as your "
    "application and usage patterns evolve.",
]


def _fill(templates: list[str], name: str) -> list[str]:
    return [t.format(name=name) for t in templates]


def fallback_recommendation(context: CompanyContext) -> AIRecommendation:
    """Templated recommendation satisfying every output-shape invariant.

    Insight keys are present exactly for the enabled focus flags; disabled
    flags leave the key absent rather than an empty list.
    """
    name = context.company_name

    insights = ConditionalInsights(
        ppa=_fill(_PPA_INSIGHTS, name) if context.ppa else None,
        gen_ai=_fill(_GENAI_INSIGHTS, name) if context.gen_ai else None,
        cloud_cost_concerns=(
            _fill(_COST_CONCERN_INSIGHTS, name) if context.cloud_cost_concerns else None
        ),
    )

    return AIRecommendation(
        unit_metrics=[
            UnitMetric(title=title.format(name=name), description=desc.format(name=name))
            for title, desc in _UNIT_METRICS
        ],
        conversation_starters=_fill(_CONVERSATION_STARTERS, name),
        conditional_insights=insights,
    )
