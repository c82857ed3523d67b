"""
Command-line interface for the NLP term injector.

Provides a CLI for injecting missing terms into HTML content from a file
or URL.
"""

import json
import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from .config import InjectionConfig
from .content_sources import ContentExtractionError, load_content
from .injector import TermInjector
from .models import InjectionResult
from .report import format_report_dict, log_injection_summary
from .term_loader import TermLoadError, deduplicate_terms, load_terms

console = Console()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


@click.command()
@click.option(
    "--content",
    "content_path",
    type=click.Path(exists=True, path_type=Path),
    help="Path to the HTML content to augment.",
)
@click.option(
    "--source-url",
    type=str,
    help="URL to fetch content from.",
)
@click.option(
    "--terms",
    "-t",
    type=click.Path(exists=True, path_type=Path),
    required=True,
    help="Path to term file (CSV, Excel or JSON).",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(path_type=Path),
    required=True,
    help="Output path for the augmented HTML.",
)
@click.option(
    "--target",
    type=click.IntRange(0, 100),
    default=85,
    help="Target coverage percentage (default: 85).",
)
@click.option(
    "--max-insertions",
    type=click.IntRange(min=0),
    default=30,
    help="Maximum number of insertions (default: 30).",
)
@click.option(
    "--no-headers",
    is_flag=True,
    default=False,
    help="Skip the heading rewrite pass.",
)
@click.option(
    "--no-prioritize",
    is_flag=True,
    default=False,
    help="Keep term order instead of trying critical terms first.",
)
@click.option(
    "--seed",
    type=int,
    default=None,
    help="Seed for template selection, for reproducible output.",
)
@click.option(
    "--report",
    "report_path",
    type=click.Path(path_type=Path),
    default=None,
    help="Optional path for a JSON run report.",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    default=False,
    help="Enable verbose output.",
)
def main(
    content_path: Optional[Path],
    source_url: Optional[str],
    terms: Path,
    output: Path,
    target: int,
    max_insertions: int,
    no_headers: bool,
    no_prioritize: bool,
    seed: Optional[int],
    report_path: Optional[Path],
    verbose: bool,
) -> None:
    """
    NLP Term Injector - raise term coverage of HTML content.

    Reads HTML from a file or URL, inserts natural sentences for the
    missing terms from a term file until the coverage target is met, and
    writes the augmented HTML.

    Examples:

        term-inject --content article.html --terms terms.csv -o out.html

        term-inject --source-url https://example.com/post -t terms.json -o out.html --target 90
    """
    _configure_logging(verbose)

    if not content_path and not source_url:
        console.print("[red]Error:[/red] Must provide either --content or --source-url")
        sys.exit(1)

    if content_path and source_url:
        console.print("[red]Error:[/red] Provide only one of --content or --source-url")
        sys.exit(1)

    source = source_url or str(content_path)

    console.print(Panel.fit(
        "[bold blue]NLP Term Injector[/bold blue]\n"
        "Raising term coverage with natural sentence insertion",
        border_style="blue",
    ))

    try:
        with console.status("[bold green]Loading content..."):
            content = load_content(source)
            if verbose:
                console.print(f"  Loaded content from: {source}")

        with console.status("[bold green]Loading terms..."):
            term_list = deduplicate_terms(load_terms(terms))
            if verbose:
                console.print(f"  Loaded {len(term_list)} terms from: {terms}")

        config = InjectionConfig(
            target_coverage=target,
            max_insertions=max_insertions,
            inject_headers=not no_headers,
            prioritize_critical=not no_prioritize,
            seed=seed,
        )
        result = TermInjector(config).inject(content, term_list)

        output.write_text(result.final_content, encoding="utf-8")
        if report_path:
            report_path.write_text(json.dumps(format_report_dict(result), indent=2), encoding="utf-8")

        log_injection_summary(result)
        _display_summary(result, verbose)

        console.print(f"\n[bold green]Success![/bold green] Output saved to: {output}")

    except ContentExtractionError as e:
        console.print(f"[red]Content extraction error:[/red] {e}")
        sys.exit(1)
    except TermLoadError as e:
        console.print(f"[red]Term loading error:[/red] {e}")
        sys.exit(1)
    except Exception as e:
        console.print(f"[red]Unexpected error:[/red] {e}")
        if verbose:
            import traceback
            console.print(traceback.format_exc())
        sys.exit(1)


def _display_summary(result: InjectionResult, verbose: bool) -> None:
    """Display injection summary."""
    console.print("\n[bold]Injection Summary[/bold]")
    console.print(
        f"Coverage: [cyan]{result.initial_coverage}%[/cyan] -> "
        f"[green]{result.final_coverage}%[/green]"
    )

    if result.insertion_report:
        table = Table(title="Inserted Terms", show_header=True)
        table.add_column("Term", style="green")
        table.add_column("Placement", style="cyan")
        table.add_column("Score", justify="right")
        if verbose:
            table.add_column("Template", style="dim")

        for detail in result.insertion_report:
            row = [detail.term, detail.placement_kind.value, str(detail.relevance_score)]
            if verbose:
                row.append(detail.template_used)
            table.add_row(*row)

        console.print(table)

    if result.failed_terms:
        console.print(f"\n[yellow]No placement found for:[/yellow] {', '.join(result.failed_terms)}")


def run_cli() -> None:
    """Entry point for the CLI."""
    main()


if __name__ == "__main__":
    run_cli()
