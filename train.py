#!/usr/bin/env python3
"""
Trigram Language Model Training Script

Train back-off and interpolation models on a corpus and report their
perplexity on a held-out partition.

Usage:
    python train.py --train-corpus corpus/gutenberg.txt --test-corpus corpus/brown.txt
    python train.py --brown --categories news fiction --split dev
    python train.py --train-corpus corpus/reuters.txt --discount 0.5 --method backoff
"""

import argparse
import logging
import sys

from rich.console import Console
from rich.logging import RichHandler

from trigram_lm import ModelConfig, SplitConfig, SmoothingMethod
from trigram_lm.corpus import get_brown_categories
from trigram_lm.errors import TrigramLMError
from trigram_lm.training import train_model_cli, evaluate_model_cli, load_partitions


console = Console()


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Train a trigram language model and measure its perplexity",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s --train-corpus corpus/gutenberg.txt --test-corpus corpus/brown.txt
  %(prog)s --brown --categories news --split dev
  %(prog)s --train-corpus corpus/reuters.txt --lambdas 0.2 0.5 0.3
  %(prog)s --train-corpus corpus/reuters.txt --round-places 2

Corpus files hold one sentence per line. Each line is lowercased, stripped
of punctuation and wrapped in <s> <s> ... </s>.
        """
    )

    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        '--train-corpus',
        type=str,
        help='Path of the training corpus'
    )
    source.add_argument(
        '--brown',
        action='store_true',
        help='Train on the NLTK Brown corpus'
    )

    parser.add_argument(
        '--test-corpus',
        type=str,
        default=None,
        help='Path of the evaluation corpus (default: the training corpus)'
    )

    parser.add_argument(
        '-c', '--categories',
        type=str,
        nargs='+',
        default=None,
        help='Brown corpus categories to use with --brown (default: all)'
    )

    parser.add_argument(
        '--split',
        choices=['dev', 'test'],
        default='test',
        help='Partition of the evaluation corpus to score (default: test)'
    )

    parser.add_argument('--train-split', type=float, default=0.90,
                        help='Training proportion (default: 0.90)')
    parser.add_argument('--dev-split', type=float, default=0.05,
                        help='Development proportion (default: 0.05)')
    parser.add_argument('--test-split', type=float, default=0.05,
                        help='Test proportion (default: 0.05)')

    parser.add_argument(
        '-d', '--discount',
        type=float,
        default=0.7,
        help='Back-off discount factor (default: 0.7)'
    )

    parser.add_argument(
        '-l', '--lambdas',
        type=float,
        nargs=3,
        default=[0.1, 0.5, 0.4],
        metavar=('L1', 'L2', 'L3'),
        help='Trigram, bigram and unigram interpolation weights (default: 0.1 0.5 0.4)'
    )

    parser.add_argument(
        '-k', '--k',
        type=float,
        default=1.0,
        help='Additive smoothing constant (default: 1)'
    )

    parser.add_argument(
        '-m', '--method',
        choices=['backoff', 'interpolation', 'both'],
        default='both',
        help='Smoothing method to evaluate (default: both)'
    )

    parser.add_argument(
        '--round-places',
        type=int,
        default=None,
        help='Round the average log2 probability before exponentiation'
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Show debug logging'
    )

    parser.add_argument(
        '--list-categories',
        action='store_true',
        help='List available Brown corpus categories and exit'
    )

    args = parser.parse_args(argv)

    # List categories and exit
    if args.list_categories:
        print("Available Brown corpus categories:")
        for cat in get_brown_categories():
            print(f"  - {cat}")
        return 0

    if not (args.train_corpus or args.brown):
        parser.error("one of the arguments --train-corpus --brown is required")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )

    if args.method == 'both':
        methods = list(SmoothingMethod)
    else:
        methods = [SmoothingMethod(args.method)]

    try:
        config = ModelConfig(discount=args.discount, lambdas=tuple(args.lambdas), k=args.k)
        split = SplitConfig(train=args.train_split, dev=args.dev_split, test=args.test_split)

        model = train_model_cli(
            train_corpus=args.train_corpus,
            config=config,
            split=split,
            categories=args.categories,
        )

        test_corpus = args.test_corpus or args.train_corpus
        _, dev, test = load_partitions(test_corpus, split, args.categories)
        sentences = dev if args.split == 'dev' else test

        console.print(f"Scoring {len(sentences):,} {args.split} sentences "
                      f"from [bold]{test_corpus or 'Brown corpus'}[/bold]")

        evaluate_model_cli(model, sentences, methods, round_places=args.round_places)
    except TrigramLMError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
