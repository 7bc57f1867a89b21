"""
Command-line interface for the NLP Content Optimizer.

Runs the optimization pipeline on inline text or a text/Word file and
prints the metrics, the change log and the optimized prose.
"""

import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .config import PipelineConfig
from .content_sources import ContentLoadError, load_content
from .grammar import LLMGrammarValidator
from .llm_client import LLMClientError
from .models import PipelineResult
from .phrase_rules import FilePhraseRuleProvider, PhraseRuleLoadError
from .pipeline import ContentOptimizationPipeline

console = Console()


@click.command()
@click.argument(
    "source",
    required=False,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "--text",
    "-t",
    type=str,
    help="Content to optimize, given inline.",
)
@click.option(
    "--phrases",
    "-p",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to a prohibited phrase file (CSV or Excel).",
)
@click.option(
    "--strategy",
    type=click.Choice(["first", "hashed"]),
    default="first",
    show_default=True,
    help="How prohibited phrase replacements are chosen.",
)
@click.option(
    "--legacy-tags",
    is_flag=True,
    default=False,
    help="Report complexity truncations as grammar changes.",
)
@click.option(
    "--llm-grammar",
    is_flag=True,
    default=False,
    help="Use Claude for the grammar stage instead of the built-in rules.",
)
@click.option(
    "--api-key",
    type=str,
    envvar="ANTHROPIC_API_KEY",
    help="Anthropic API key. Can also be set via ANTHROPIC_API_KEY env var.",
)
@click.option(
    "--json",
    "as_json",
    is_flag=True,
    default=False,
    help="Print the result as JSON.",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    default=False,
    help="Enable verbose output.",
)
def main(
    source: Optional[Path],
    text: Optional[str],
    phrases: Optional[Path],
    strategy: str,
    legacy_tags: bool,
    llm_grammar: bool,
    api_key: Optional[str],
    as_json: bool,
    verbose: bool,
) -> None:
    """
    NLP Content Optimizer - Tighten generated prose.

    Optimizes content given with --text or read from a .txt, .md or .docx
    SOURCE file, then reports quality metrics and every change made.

    Examples:

        nlp-optimize --text "This meticulous approach works."

        nlp-optimize draft.docx --phrases banned.csv --json
    """
    if not source and text is None:
        console.print("[red]Error:[/red] Must provide either SOURCE or --text")
        sys.exit(1)

    if source and text is not None:
        console.print("[red]Error:[/red] Provide only one of SOURCE or --text")
        sys.exit(1)

    if verbose:
        logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    try:
        content = text if text is not None else load_content(source)

        config = PipelineConfig(
            replacement_strategy=strategy,
            complexity_change_stage="grammar" if legacy_tags else "complexity",
        )
        pipeline = ContentOptimizationPipeline(
            config=config,
            phrase_rules=FilePhraseRuleProvider(phrases) if phrases else None,
            grammar_validator=LLMGrammarValidator(api_key=api_key) if llm_grammar else None,
        )

        result = asyncio.run(pipeline.optimize(content))

        if as_json:
            click.echo(json.dumps(result.to_dict(), indent=2))
        else:
            _display_result(result, verbose)

    except ContentLoadError as e:
        console.print(f"[red]Content loading error:[/red] {e}")
        sys.exit(1)
    except PhraseRuleLoadError as e:
        console.print(f"[red]Phrase rule loading error:[/red] {e}")
        sys.exit(1)
    except LLMClientError as e:
        console.print(f"[red]LLM error:[/red] {e}")
        sys.exit(1)
    except Exception as e:
        console.print(f"[red]Unexpected error:[/red] {e}")
        if verbose:
            import traceback
            console.print(traceback.format_exc())
        sys.exit(1)


def _display_result(result: PipelineResult, verbose: bool) -> None:
    """Display metrics, changes and the optimized content."""
    metrics_table = Table(title="Quality Metrics", show_header=True)
    metrics_table.add_column("Metric", style="cyan")
    metrics_table.add_column("Score", style="green", justify="right")

    for name, value in result.metrics.to_dict().items():
        metrics_table.add_row(name, f"{value:.2f}")

    console.print(metrics_table)

    if result.changes:
        changes_table = Table(title=f"Changes ({len(result.changes)})", show_header=True)
        changes_table.add_column("Stage", style="cyan")
        changes_table.add_column("Original", style="red")
        changes_table.add_column("Optimized", style="green")
        if verbose:
            changes_table.add_column("Reason", style="dim")

        for change in result.changes:
            row = [change.stage.value, Text(change.original), Text(change.optimized)]
            if verbose:
                row.append(Text(change.reason))
            changes_table.add_row(*row)

        console.print(changes_table)
    else:
        console.print("\n[dim]No changes made.[/dim]")

    if result.failed_stages:
        console.print(f"[yellow]Stages skipped after errors:[/yellow] {', '.join(result.failed_stages)}")

    console.print(Panel(Text(result.optimized_content or "(empty)"), title="Optimized Content",
                        border_style="green"))


def run_cli() -> None:
    """Entry point for the CLI."""
    main()


if __name__ == "__main__":
    run_cli()
