"""
Command-line interface for wordvec-analogy.
"""

import logging
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.progress import Progress

from .analyzer import find_nearest, rank_neighbors
from .config import COMBINATION_MODES, ENV_PREFIX, QueryConfig
from .errors import EmptyInput, ParseError, TableIOError
from .expression import combine, parse_expression
from .loader import EmbeddingTable, load_table

# Answers go to stdout, everything else to stderr
console = Console(highlight=False, markup=False, emoji=False, soft_wrap=True)
err_console = Console(stderr=True, soft_wrap=True)

logger = logging.getLogger(__name__)


def configure_logging(verbose: int = 0, quiet: bool = False) -> None:
    """Route package log records to stderr through rich."""
    if quiet:
        level = logging.ERROR
    elif verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    package_logger = logging.getLogger(__package__)
    if not any(isinstance(h, RichHandler) for h in package_logger.handlers):
        package_logger.addHandler(RichHandler(
            console=err_console,
            show_time=False,
            show_path=False,
            markup=False,
        ))
    package_logger.setLevel(level)


def run_query(table: EmbeddingTable, tokens: list[str], config: QueryConfig) -> None:
    """Combine the tokens, search the table and print the results."""
    if config.mode == "expression":
        tokens = parse_expression(tokens, vocabulary=table)

    try:
        combination = combine(tokens, table, mode=config.mode)
    except EmptyInput:
        err_console.print("[yellow]No valid input words found in the table.[/yellow]")
        return

    logger.info(
        "Combined %d words in %s mode: %s",
        len(combination.words),
        combination.mode,
        " ".join(combination.words),
    )

    exclude = set(combination.words) if config.exclude_inputs else set()

    if config.top > 1:
        results = rank_neighbors(table, combination.vector, k=config.top, exclude=exclude, metric=config.metric)
    else:
        nearest = find_nearest(table, combination.vector, exclude=exclude, metric=config.metric)
        results = [nearest] if nearest else []

    if not results:
        err_console.print("[yellow]No nearest neighbor found.[/yellow]")
        return

    for result in results:
        console.print(result.describe())


@click.command(context_settings={"auto_envvar_prefix": ENV_PREFIX})
@click.argument("table", type=click.Path(dir_okay=False))
@click.argument("tokens", nargs=-1)
@click.option(
    "--mode", "-m",
    type=click.Choice(COMBINATION_MODES),
    default="expression",
    show_default=True,
    help="How input words are combined",
)
@click.option(
    "--cosine/--euclidean",
    default=True,
    help="Maximize cosine similarity (default) or minimize euclidean distance",
)
@click.option("--dim", "-d", type=click.IntRange(min=1), default=None, help="Expected vector dimension")
@click.option("--lenient/--strict", default=False, help="Skip malformed rows instead of failing")
@click.option("--include-inputs", is_flag=True, help="Allow input words as results")
@click.option("--top", "-k", type=click.IntRange(min=1), default=1, show_default=True, help="Number of results")
@click.option("--verbose", "-v", count=True, help="Show progress messages (-vv for debug)")
@click.option("--quiet", "-q", is_flag=True, help="Only show errors")
def main(
    table: str,
    tokens: tuple[str, ...],
    mode: str,
    cosine: bool,
    dim: Optional[int],
    lenient: bool,
    include_inputs: bool,
    top: int,
    verbose: int,
    quiet: bool,
):
    """
    Find the word closest to a combination of word vectors.

    TABLE is a text file with one word and its vector components per line.
    TOKENS are words, optionally joined by + and - operators.

    Examples:

        wordvec-analogy glove.6B.50d.txt king - man + woman

        wordvec-analogy glove.6B.50d.txt --mode average cat dog --euclidean

        wordvec-analogy glove.6B.50d.txt --mode sum paris france -k 5
    """
    configure_logging(verbose, quiet)

    if not tokens:
        raise click.UsageError("No words given. Example: wordvec-analogy TABLE king - man + woman")

    config = QueryConfig(
        mode=mode,
        metric="cosine" if cosine else "euclidean",
        exclude_inputs=not include_inputs,
        top=top,
        strict=not lenient,
        expected_dim=dim,
    )

    try:
        with Progress(console=err_console, transient=True) as progress:
            progress.add_task("Loading vectors...", total=None)
            embeddings = load_table(table, expected_dim=config.expected_dim, strict=config.strict)
    except (TableIOError, ParseError) as e:
        raise click.ClickException(str(e)) from e

    skipped = embeddings.metadata.get("skipped_rows", 0)
    if skipped:
        logger.warning("Skipped %d malformed rows", skipped)

    run_query(embeddings, list(tokens), config)


if __name__ == "__main__":
    main()
