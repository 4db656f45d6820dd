"""Typer CLI — ``finops recommend``, ``finops check`` and ``finops validate`` commands."""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path

import typer
from dotenv import load_dotenv
from pydantic import ValidationError
from rich.console import Console

from finops.config import load_credentials, load_request, load_settings
from finops.errors import CredentialError, FinOpsError
from finops.schemas.company import CompanyContext
from finops.schemas.config import ProviderCredentials, RecommenderSettings
from finops.schemas.recommendations import AIRecommendation
from finops.shared.identity import matches, mismatch_warning

# Load .env file from project root (if it exists)
load_dotenv()

app = typer.Typer(
    name="finops",
    help="FinOps Recommender — unit-cost metrics and conversation starters for a company.",
    no_args_is_help=True,
)
console = Console()

# Plausible-looking placeholders so dry runs pass the credential shape checks
_DRY_RUN_CREDENTIALS = ProviderCredentials(
    openai_api_key="dry-run-openai-key-000000000000",
    aws_access_key_id="dry-run-aws-access-key-0000000",
    aws_secret_access_key="dry-run-aws-secret-key-0000000",
)


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
        datefmt="%H:%M:%S",
    )
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)


def _build_context(
    config: Path | None,
    company: str | None,
    url: str | None,
    email: str,
    ppa: bool,
    genai: bool,
    cloud_cost_concerns: bool,
) -> CompanyContext:
    if config is not None:
        return load_request(config)
    if not company:
        raise ValueError("either --config or --company is required")
    return CompanyContext(
        company_name=company,
        website_url=url or "",
        email=email,
        ppa=ppa,
        gen_ai=genai,
        cloud_cost_concerns=cloud_cost_concerns,
    )


@app.command()
def check(
    company: str = typer.Argument(..., help="Company name, e.g. 'CloudZero'"),
    url: str = typer.Argument(..., help="Company website, e.g. https://www.cloudzero.com"),
) -> None:
    """Check whether a company name plausibly matches a website URL."""
    if matches(company, url):
        console.print(f"[green]Match:[/] {company} ↔ {url}")
        return
    console.print(f"[yellow]Warning:[/] {mismatch_warning(company, url)}")
    raise typer.Exit(code=1)


@app.command()
def validate(
    config: Path = typer.Option(..., "--config", "-c", help="Path to a request YAML file"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Validate a request file without generating recommendations."""
    _setup_logging(verbose)

    try:
        ctx = load_request(config)
    except (FileNotFoundError, ValueError, ValidationError) as exc:
        console.print(f"[red]Request validation failed:[/] {exc}")
        raise typer.Exit(code=1)

    console.print("[green]Request is valid![/]\n")
    console.print(f"  Company:     {ctx.company_name}")
    console.print(f"  Website:     {ctx.website_url or '(none)'}")
    console.print(f"  Email:       {ctx.email or '(none)'}")
    focus = ctx.enabled_focus_areas()
    console.print(f"  Focus areas: {', '.join(focus) if focus else '(none)'}")
    if not matches(ctx.company_name, ctx.website_url):
        console.print(f"\n[yellow]Warning:[/] {mismatch_warning(ctx.company_name, ctx.website_url)}")


@app.command()
def recommend(
    company: str = typer.Option(None, "--company", "-n", help="Company name"),
    url: str = typer.Option(None, "--url", "-u", help="Company website URL"),
    email: str = typer.Option("", "--email", help="Contact email (informational)"),
    ppa: bool = typer.Option(False, "--ppa", help="Focus on private pricing agreements."),
    genai: bool = typer.Option(False, "--genai", help="Focus on generative-AI infrastructure cost."),
    cloud_cost_concerns: bool = typer.Option(
        False, "--cloud-cost-concerns", help="Focus on cloud cost risk signals."
    ),
    config: Path = typer.Option(None, "--config", "-c", help="Path to a request YAML file (replaces the options above)."),
    force: bool = typer.Option(False, "--force", help="Proceed even if the name doesn't match the URL."),
    fallback_on_error: bool = typer.Option(
        False, "--fallback-on-error", help="Use offline templates if intelligence or the AI response fails."
    ),
    offline: bool = typer.Option(False, "--offline", help="Skip all network calls and use offline templates."),
    strict: bool = typer.Option(False, "--strict", help="Reject AI output with wrong item counts."),
    dry_run: bool = typer.Option(False, "--dry-run", help="Run the full pipeline with mock data (no API calls)."),
    json_out: Path = typer.Option(None, "--json", help="Also write the recommendation as JSON to this path."),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Generate FinOps recommendations for a company.

    Examples:

        finops recommend --company CloudZero --url https://www.cloudzero.com --ppa

        finops recommend --config request.yml --fallback-on-error
    """
    _setup_logging(verbose)

    try:
        ctx = _build_context(config, company, url, email, ppa, genai, cloud_cost_concerns)
    except (FileNotFoundError, ValueError, ValidationError) as exc:
        console.print(f"[red]Invalid request:[/] {exc}")
        raise typer.Exit(code=1)

    if not ctx.website_url.strip():
        console.print("[red]Please enter both a company name and website URL to continue.[/]")
        raise typer.Exit(code=1)

    if not force and not matches(ctx.company_name, ctx.website_url):
        console.print(f"[yellow]Warning:[/] {mismatch_warning(ctx.company_name, ctx.website_url)}")
        console.print("Re-run with [bold]--force[/] to continue anyway.")
        raise typer.Exit(code=1)

    if offline:
        from finops.agents.recommender.fallback import fallback_recommendation

        console.print("[yellow]OFFLINE mode — using template recommendations.[/]\n")
        recommendation = fallback_recommendation(ctx)
    else:
        if dry_run:
            console.print("[yellow]DRY-RUN mode — no API calls will be made.[/]\n")
        try:
            settings = load_settings(strict=strict)
        except ValidationError as exc:
            console.print(f"[red]Invalid configuration:[/] {exc}")
            raise typer.Exit(code=1)
        try:
            recommendation = asyncio.run(
                _run_recommendation(
                    ctx, settings, dry_run=dry_run, fallback_on_error=fallback_on_error,
                )
            )
        except CredentialError as exc:
            console.print(f"[red]API configuration error:[/] {exc.message}")
            console.print("Please check your .env file and ensure your OpenAI API key is valid.")
            raise typer.Exit(code=1)
        except FinOpsError as exc:
            console.print(f"[red]Error generating recommendations ({exc.kind}):[/] {exc.message}")
            raise typer.Exit(code=1)

    _emit(ctx, recommendation, json_out=json_out, degraded=offline)


async def _run_recommendation(
    ctx: CompanyContext,
    settings: RecommenderSettings,
    *,
    dry_run: bool = False,
    fallback_on_error: bool = False,
) -> AIRecommendation:
    """Build the provider clients once and run the recommender."""
    from finops.agents.industry_analyst.agent import IndustryAnalystAgent
    from finops.agents.recommender.agent import (
        FailurePolicy,
        RecommenderAgent,
        require_primary_credentials,
    )
    from finops.shared.progress import PipelineProgress

    if dry_run:
        from finops.shared.bedrock_client import DryRunBedrockClient
        from finops.shared.openai_client import DryRunClient
        from finops.shared.web_intel import DryRunGatherer

        credentials = _DRY_RUN_CREDENTIALS
        client = DryRunClient()
        analyst_client = DryRunBedrockClient()
        gatherer = DryRunGatherer()
    else:
        from finops.shared.bedrock_client import BedrockClient
        from finops.shared.openai_client import OpenAIClient
        from finops.shared.web_intel import HttpIntelligenceGatherer

        credentials = load_credentials()
        require_primary_credentials(credentials)
        client = OpenAIClient(
            api_key=credentials.openai_api_key,
            model=settings.openai_model,
            timeout=settings.request_timeout,
        )
        analyst_client = None
        if credentials.has_secondary:
            analyst_client = BedrockClient(
                aws_access_key=credentials.aws_access_key_id,
                aws_secret_key=credentials.aws_secret_access_key,
                aws_region=credentials.aws_region,
                model=settings.bedrock_model,
                timeout=settings.request_timeout,
            )
        gatherer = HttpIntelligenceGatherer(timeout=settings.request_timeout)

    analyst = None
    if analyst_client is not None:
        analyst = IndustryAnalystAgent(
            analyst_client,
            timeout=settings.request_timeout,
            max_tokens=settings.analysis_max_tokens,
        )

    agent = RecommenderAgent(
        client,
        gatherer,
        analyst=analyst,
        credentials=credentials,
        settings=settings,
    )
    policy = FailurePolicy.FALLBACK if fallback_on_error else FailurePolicy.RAISE

    with PipelineProgress(f"FinOps recommendations for {ctx.company_name}") as progress:
        try:
            result = await agent.recommend(ctx, policy=policy, on_progress=progress.step)
        except FinOpsError as exc:
            progress.fail(exc.kind)
            raise
        progress.finish()
    return result


def _emit(
    ctx: CompanyContext,
    recommendation: AIRecommendation,
    *,
    json_out: Path | None,
    degraded: bool,
) -> None:
    from finops.output.markdown import render_markdown_report

    typer.echo(render_markdown_report(ctx, recommendation, degraded=degraded))

    if json_out is not None:
        json_out.parent.mkdir(parents=True, exist_ok=True)
        json_out.write_text(json.dumps(recommendation.to_wire(), indent=2))
        console.print(f"[green]JSON written to:[/] {json_out}")
