"""
Training Module with Rich Terminal UI

This module provides training and evaluation entry points with progress
bars and status displays using the Rich library.
"""

from typing import Dict, List, Optional, Sequence

from rich.console import Console
from rich.progress import (
    Progress, SpinnerColumn, TextColumn, BarColumn,
    TaskProgressColumn, TimeElapsedColumn
)
from rich.panel import Panel
from rich.table import Table
from rich import box

from .config import ModelConfig, SplitConfig
from .corpus import load_brown_corpus, read_sentences, split_sentences, START_TOKEN
from .model import LanguageModel
from .smoothing import SmoothingMethod


console = Console()


def create_stats_table(stats: Dict) -> Table:
    """Create a Rich table displaying statistics."""
    table = Table(box=box.ROUNDED, show_header=True, header_style="bold cyan")
    table.add_column("Metric", style="green")
    table.add_column("Value", style="yellow", justify="right")

    for key, value in stats.items():
        display_key = key.replace('_', ' ').title()

        if isinstance(value, float):
            display_value = f"{value:,.4f}"
        elif isinstance(value, int):
            display_value = f"{value:,}"
        else:
            display_value = str(value)

        table.add_row(display_key, display_value)

    return table


def load_partitions(corpus: Optional[str], split: SplitConfig,
                    categories: Optional[List[str]] = None):
    """Load a corpus file, or the Brown corpus if no path is given, and split it."""
    if corpus is None:
        sentences = load_brown_corpus(categories=categories)
    else:
        sentences = read_sentences(corpus)
    return split_sentences(sentences, split)


def train_model_cli(
    train_corpus: Optional[str] = None,
    config: Optional[ModelConfig] = None,
    split: Optional[SplitConfig] = None,
    categories: Optional[List[str]] = None,
) -> LanguageModel:
    """
    Train a trigram model with terminal output.

    Args:
        train_corpus: Path of the training corpus (None for the Brown corpus)
        config: Smoothing parameters
        split: Partition proportions; only the training partition is used
        categories: Brown corpus categories when no path is given

    Returns:
        Trained LanguageModel
    """
    config = config or ModelConfig()
    split = split or SplitConfig()
    source = train_corpus or "Brown corpus"

    console.print()
    console.print(Panel.fit(
        "[bold blue]Trigram Language Model Training[/bold blue]",
        border_style="blue"
    ))
    console.print()

    config_table = Table(box=box.SIMPLE, show_header=False)
    config_table.add_column("Setting", style="cyan")
    config_table.add_column("Value", style="white")
    config_table.add_row("Training Corpus", source)
    config_table.add_row("Split (train/dev/test)",
                         f"{split.train:g} / {split.dev:g} / {split.test:g}")
    config_table.add_row("Discount (D)", f"{config.discount:g}")
    config_table.add_row("Lambdas", ", ".join(f"{x:g}" for x in config.lambdas))
    config_table.add_row("Smoothing Constant (K)", f"{config.k:g}")

    console.print(Panel(config_table, title="[bold]Configuration[/bold]", border_style="green"))
    console.print()

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        TimeElapsedColumn(),
        console=console
    ) as progress:

        task = progress.add_task(f"[cyan]Loading {source}...", total=None)
        training, _, _ = load_partitions(train_corpus, split, categories)
        progress.update(task, completed=100, total=100)
        progress.remove_task(task)

        console.print(f"[green]✓[/green] Loaded {len(training):,} training sentences")
        console.print()

        model = LanguageModel(config)

        train_task = progress.add_task("[cyan]Training model...", total=2)

        def update_progress(current, total, stage=""):
            progress.update(train_task, completed=current, total=total,
                            description=f"[cyan]{stage}")

        stats = model.train(training, progress_callback=update_progress)

        progress.remove_task(train_task)

    console.print()
    console.print("[green]✓[/green] Training complete!")
    console.print()

    console.print(Panel(
        create_stats_table(stats),
        title="[bold]Training Statistics[/bold]",
        border_style="yellow"
    ))

    console.print()
    console.print(Panel.fit("[bold]Sample Predictions[/bold]", border_style="magenta"))

    for word, _ in model.get_top_words(3):
        predictions = model.next_word_distribution((START_TOKEN, word), top_k=5)
        pred_str = ", ".join([f"{w} ({p:.3f})" for w, p in predictions])
        console.print(f"  After '[bold]{word}[/bold]': {pred_str}")

    console.print()

    return model


def evaluate_model_cli(model: LanguageModel, test_sentences: List[List[str]],
                       methods: Sequence[SmoothingMethod] = tuple(SmoothingMethod),
                       round_places: Optional[int] = None) -> Dict:
    """
    Evaluate a model with terminal output.

    Args:
        model: Trained LanguageModel
        test_sentences: Marked test sentences
        methods: Smoothing methods to evaluate
        round_places: Optional rounding of the average log probability

    Returns:
        Dictionary of evaluation metrics
    """
    console.print()
    console.print(Panel.fit("[bold blue]Model Evaluation[/bold blue]", border_style="blue"))
    console.print()

    results = {'test_sentences': len(test_sentences)}

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        TimeElapsedColumn(),
        console=console
    ) as progress:

        for method in methods:
            method = SmoothingMethod(method)
            task = progress.add_task(
                f"[cyan]Computing {method.value} perplexity...",
                total=len(test_sentences)
            )

            def update_progress(current, total):
                progress.update(task, completed=current)

            results[f"{method.value}_perplexity"] = model.perplexity(
                test_sentences, method,
                round_places=round_places,
                progress_callback=update_progress,
            )

    console.print()
    console.print(Panel(
        create_stats_table(results),
        title="[bold]Evaluation Results[/bold]",
        border_style="green"
    ))

    return results
