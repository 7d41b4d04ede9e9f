"""news2md CLI - Click command definition and main entry point."""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

import click
import httpx
import orjson
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn

from news2md.convert import DEFAULT_MAX_LENGTH, continuation_hint, html_to_markdown
from news2md.fetch import fetch_static

console = Console(stderr=True)


@click.command()
@click.argument("source")
@click.option("--links/--no-links", "preserve_links", default=False,
              help="Keep hyperlinks as [text](url) (default: flatten to text)")
@click.option("--max-length", default=DEFAULT_MAX_LENGTH, type=int, show_default=True,
              help="Truncate output to N characters (0 = no limit)")
@click.option("--selector", default=None, help="CSS selector for the article body")
@click.option("--readability", is_flag=True,
              help="Extract main content with readability before converting")
@click.option("--format", "output_format", type=click.Choice(["markdown", "json"]),
              default="markdown", help="Output format (default: markdown)")
@click.option("-o", "--output", "output_path", type=click.Path(), default=None,
              help="Output file. Omit for stdout.")
@click.option("--timeout", default=30, help="Fetch timeout in seconds")
@click.option("-v", "--verbose", is_flag=True, help="Verbose progress output")
def main(
    source: str,
    preserve_links: bool,
    max_length: int,
    selector: str | None,
    readability: bool,
    output_format: str,
    output_path: str | None,
    timeout: int,
    verbose: bool,
):
    """Convert a news article to compact markdown.

    SOURCE can be a URL, a local HTML file, or - for stdin.

    \b
    Examples:
        news2md https://example.com/news/123           # markdown to stdout
        news2md article.html --links                   # keep hyperlinks
        news2md https://example.com/a --max-length 4000
        cat article.html | news2md - --format json
    """
    is_url = source.startswith(("http://", "https://"))

    if verbose:
        console.print(Panel(
            f"[bold]news2md - News to Markdown[/bold]\n{source}\n"
            f"Links: {'kept' if preserve_links else 'flattened'}, "
            f"max length: {max_length or 'unlimited'}",
            expand=False,
        ))

    if is_url:
        html, url = _fetch(source, timeout, verbose)
    elif source == "-":
        html, url = sys.stdin.read(), ""
    else:
        source_path = Path(source)
        if not source_path.is_file():
            raise click.ClickException(
                f"Source must be a URL (http/https), an existing file, or -: {source}"
            )
        html, url = source_path.read_text(encoding="utf-8"), ""

    markdown = html_to_markdown(
        html, url=url,
        preserve_links=preserve_links,
        max_length=max_length,
        selector=selector,
        strip_boilerplate=readability,
    )

    if verbose:
        console.print(f"[dim]HTML: {len(html)} chars -> markdown: {len(markdown)} chars[/dim]")
        if max_length > 0 and markdown.endswith(continuation_hint(url)):
            console.print(f"[yellow]Truncated to {max_length} characters[/yellow]")

    if output_format == "json":
        output = orjson.dumps(
            {"source": url or source, "markdown": markdown, "length": len(markdown)},
            option=orjson.OPT_INDENT_2,
        ).decode()
    else:
        output = markdown

    if output_path:
        out = Path(output_path)
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(output, encoding="utf-8")
        console.print(f"[green]Saved:[/green] {out}")
    else:
        click.echo(output)


def _fetch(url: str, timeout: int, verbose: bool) -> tuple[str, str]:
    """Fetch a URL, returning (html, final url)."""
    with Progress(
        SpinnerColumn(), TextColumn("[progress.description]{task.description}"),
        console=console, transient=True,
    ) as progress:
        if verbose:
            progress.add_task(description="Fetching...", total=None)
        try:
            result = asyncio.run(_fetch_static(url, timeout))
        except httpx.HTTPError as e:
            raise click.ClickException(f"Failed to fetch {url}: {e}") from e

    if verbose:
        console.print(f"[dim]HTTP {result.status} {result.url}[/dim]")
    return result.html, result.url


async def _fetch_static(url: str, timeout: int):
    try:
        return await fetch_static(url, timeout=timeout)
    except httpx.ConnectError as e:
        if "CERTIFICATE_VERIFY_FAILED" in str(e):
            console.print(
                "[yellow]SSL verification failed, retrying without verification[/yellow]",
            )
            return await fetch_static(url, timeout=timeout, verify_ssl=False)
        raise


if __name__ == "__main__":
    main()
