"""CLI interface for seolab."""

import asyncio
import json
import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from seolab.config import SeoLabConfig, load_config, merge_cli_overrides
from seolab.content import BlogPost, Category, ContentFetcher, FaqEntry, Guide, create_content_service
from seolab.errors import ContentFetchError, InvalidSlugError
from seolab.pipeline.build import build_site, validate_build, validate_environment
from seolab.pipeline.sitemaps import (
    BLOG_SITEMAP,
    GUIDES_SITEMAP,
    INDEX_SITEMAP,
    PAGES_SITEMAP,
    blog_sitemap,
    guides_sitemap,
    pages_sitemap,
    sitemap_index,
)
from seolab.seo import (
    ContentCounts,
    PageType,
    StructuredDataBuilder,
    UrlPatternManager,
    create_meta_tag_generator,
    create_schema_generator,
    get_base_url,
    render_json_ld,
    structured_data_for,
)

app = typer.Typer(
    name="seolab",
    help="Generate sitemaps, structured data and meta tags for the content site.",
)

console = Console()

SITEMAP_NAMES = {
    "index": INDEX_SITEMAP,
    "pages": PAGES_SITEMAP,
    "blog": BLOG_SITEMAP,
    "guides": GUIDES_SITEMAP,
}

# Page types whose content is looked up by slug
_SLUG_PAGES = (PageType.BLOG, PageType.GUIDE, PageType.CATEGORY)

PageContent = BlogPost | Guide | Category | list[FaqEntry] | None


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        from seolab import __version__

        console.print(f"seolab {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging."),
    ] = False,
) -> None:
    """seolab - SEO core for a headless-CMS content site."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _load(config_path: Path | None = None, **overrides: object) -> SeoLabConfig:
    config = load_config(config_path)
    return merge_cli_overrides(config, **overrides)


async def _category_counts(fetcher: ContentFetcher, config: SeoLabConfig, slug: str) -> ContentCounts:
    posts = await fetcher.get_blog_posts(limit=config.build.blog_limit)
    guides = await fetcher.get_guides(limit=config.build.guide_limit)
    return ContentCounts(
        blog_posts=sum(1 for p in posts if p.category and p.category.slug == slug),
        guides=sum(1 for g in guides if g.category.slug == slug),
    )


async def _page_content(
    fetcher: ContentFetcher, page_type: PageType, slug: str | None
) -> PageContent:
    """Fetch what a page renders; raises LookupError when a slug matches nothing."""
    content: PageContent = None
    if page_type == PageType.BLOG:
        content = await fetcher.get_blog_post(slug or "")
    elif page_type == PageType.GUIDE:
        content = await fetcher.get_guide(slug or "")
    elif page_type == PageType.CATEGORY:
        content = await fetcher.get_category(slug or "")
    elif page_type == PageType.FAQ:
        return await fetcher.get_faq_entries()
    else:
        return None

    if content is None:
        raise LookupError(f"No {page_type.value} found with slug {slug!r}")
    return content


def _resolve_page(
    config: SeoLabConfig, page_type: PageType, slug: str | None
) -> tuple[ContentFetcher, PageContent]:
    if page_type in _SLUG_PAGES and not slug:
        console.print(f"[red]Error:[/red] A slug is required for {page_type.value} pages.")
        raise typer.Exit(1)

    fetcher = create_content_service(config)
    try:
        content = asyncio.run(_page_content(fetcher, page_type, slug))
    except (LookupError, ContentFetchError) as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(1)
    return fetcher, content


@app.command()
def build(
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Output directory. Defaults to the configured output_dir."),
    ] = None,
    config_path: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Path to a .seolab.toml file."),
    ] = None,
    site_url: Annotated[
        Optional[str],
        typer.Option("--site-url", help="Public site origin, e.g. https://example.com."),
    ] = None,
) -> None:
    """Write every sitemap file, then validate the output directory."""
    config = _load(config_path, site_url=site_url, output_dir=str(output) if output else None)
    output_dir = Path(config.build.output_dir)

    fetcher = create_content_service(config)
    result = asyncio.run(build_site(output_dir, fetcher, config))

    console.print(f"[green]Wrote {len(result.written)} sitemap file(s) to {output_dir}[/green]")
    for path in result.written:
        console.print(f"  - {path.name}")
    if result.fallbacks:
        console.print(
            f"[yellow]Fallback documents served for: {', '.join(result.fallbacks)}[/yellow]"
        )

    problems = validate_build(output_dir)
    if problems:
        for problem in problems:
            console.print(f"[red]Error:[/red] {problem}")
        raise typer.Exit(1)
    console.print("[green]Build validation passed.[/green]")


@app.command()
def sitemap(
    name: Annotated[str, typer.Argument(help="Sitemap to print: index, pages, blog or guides.")],
    config_path: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Path to a .seolab.toml file."),
    ] = None,
    site_url: Annotated[
        Optional[str],
        typer.Option("--site-url", help="Public site origin."),
    ] = None,
) -> None:
    """Print one sitemap document to stdout."""
    if name not in SITEMAP_NAMES:
        console.print(f"[red]Error:[/red] Unknown sitemap: {name}")
        console.print(f"Choose one of: {', '.join(SITEMAP_NAMES)}")
        raise typer.Exit(1)

    config = _load(config_path, site_url=site_url)
    if name == "index":
        response = sitemap_index(config)
    else:
        fetcher = create_content_service(config)
        routine = {"pages": pages_sitemap, "blog": blog_sitemap, "guides": guides_sitemap}[name]
        response = asyncio.run(routine(fetcher, config))

    typer.echo(response.body, nl=False)


@app.command()
def schema(
    page_type: Annotated[PageType, typer.Argument(help="Page type.")],
    slug: Annotated[Optional[str], typer.Argument(help="Content slug for blog, guide and category pages.")] = None,
    query: Annotated[
        Optional[str],
        typer.Option("--query", "-q", help="Search query for search pages."),
    ] = None,
    config_path: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Path to a .seolab.toml file."),
    ] = None,
) -> None:
    """Print the JSON-LD structured data embedded in a page."""
    config = _load(config_path)
    fetcher, content = _resolve_page(config, page_type, slug)

    counts = None
    if isinstance(content, Category):
        counts = asyncio.run(_category_counts(fetcher, config, content.slug))

    urls = UrlPatternManager(get_base_url(config))
    try:
        canonical = urls.canonical_url(
            page_type, content if not isinstance(content, list) else None, query
        )
    except InvalidSlugError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(1)

    builder = StructuredDataBuilder(create_schema_generator(config))
    schemas = structured_data_for(builder, page_type, content, canonical, counts=counts, query=query)
    typer.echo(render_json_ld(schemas))


@app.command()
def meta(
    page_type: Annotated[PageType, typer.Argument(help="Page type.")],
    slug: Annotated[Optional[str], typer.Argument(help="Content slug for blog, guide and category pages.")] = None,
    query: Annotated[
        Optional[str],
        typer.Option("--query", "-q", help="Search query for search pages."),
    ] = None,
    config_path: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Path to a .seolab.toml file."),
    ] = None,
) -> None:
    """Print the head metadata of a page as JSON."""
    config = _load(config_path)
    fetcher, content = _resolve_page(config, page_type, slug)
    generator = create_meta_tag_generator(config)

    if isinstance(content, BlogPost):
        head = generator.blog_post(content, f"/blog/{content.slug}")
    elif isinstance(content, Guide):
        head = generator.guide(content, f"/guides/{content.slug}")
    elif isinstance(content, Category):
        counts = asyncio.run(_category_counts(fetcher, config, content.slug))
        head = generator.category(content, f"/category/{content.slug}", counts)
    elif page_type == PageType.FAQ:
        head = generator.faq(content or [])
    elif page_type == PageType.SEARCH:
        head = generator.search(query=query)
    elif page_type == PageType.HOMEPAGE:
        head = generator.homepage()
    else:
        head = generator.fallback(page_type, f"/{page_type.value}")

    typer.echo(json.dumps({**head.model_dump(), "robots": head.robots}, indent=2))


@app.command()
def validate(
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Build directory. Defaults to the configured output_dir."),
    ] = None,
) -> None:
    """Validate an existing build directory."""
    output_dir = output or Path(load_config().build.output_dir)
    problems = validate_build(output_dir)
    if problems:
        for problem in problems:
            console.print(f"[red]Error:[/red] {problem}")
        raise typer.Exit(1)
    console.print(f"[green]{output_dir} is valid.[/green]")


@app.command("check-env")
def check_env(
    production: Annotated[
        bool,
        typer.Option("--production", help="Require every Contentful variable."),
    ] = False,
) -> None:
    """Report on the environment variables a build reads."""
    report = validate_environment(production=production)

    table = Table(title="Build Configuration Report")
    table.add_column("Check")
    table.add_column("Result")
    table.add_row("Mode", report.mode)
    table.add_row("Environment valid", "Yes" if report.is_valid else "No")
    table.add_row("Site URL valid", "Yes" if report.site_url_valid else "No")
    table.add_row("Contentful configured", "Yes" if report.contentful_configured else "No (mock data)")
    table.add_row("Missing required vars", ", ".join(report.missing_required) or "-")
    table.add_row("Optional vars present", ", ".join(report.present_optional) or "-")
    console.print(table)

    for problem in report.contentful_problems:
        console.print(f"[yellow]Warning:[/yellow] {problem}")

    if not report.is_valid:
        console.print("[red]Error:[/red] Production builds require all Contentful credentials.")
        raise typer.Exit(1)
