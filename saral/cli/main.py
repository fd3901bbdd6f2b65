import argparse
import json
import sys
import logging
from pathlib import Path
from typing import List, Optional

logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog="saral",
        description="Saral - Multi-format text simplifier for Bharat audiences",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable verbose output"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    _add_simplify_subparser(subparsers)
    _add_analyze_subparser(subparsers)

    return parser


def _add_config_arguments(subparser):
    subparser.add_argument(
        "--config", type=Path, help="YAML config file with a 'simplifier' section"
    )
    subparser.add_argument(
        "--seed", type=int, help="Seed for phrase selection (reproducible output)"
    )


def _add_simplify_subparser(subparsers):
    """Add the simplify subcommand."""
    simplify_parser = subparsers.add_parser(
        "simplify", help="Simplify text into five audience formats"
    )
    source = simplify_parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "-i", "--input", type=Path, help="Input text file or directory of .txt/.md files"
    )
    source.add_argument("--text", type=str, help="Inline text to simplify")
    simplify_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=Path("output"),
        help="Output directory for file input (default: output)",
    )
    _add_config_arguments(simplify_parser)


def _add_analyze_subparser(subparsers):
    """Add the analyze subcommand."""
    analyze_parser = subparsers.add_parser(
        "analyze", help="Show sentences, keywords, entities and ranking for a text"
    )
    source = analyze_parser.add_mutually_exclusive_group(required=True)
    source.add_argument("-i", "--input", type=Path, help="Input text file")
    source.add_argument("--text", type=str, help="Inline text to analyze")
    analyze_parser.add_argument(
        "--top-n", type=int, default=None, help="Number of ranked sentences to show"
    )
    _add_config_arguments(analyze_parser)


def _build_config(args):
    from ..config import SimplifierConfig, load_config

    config = load_config(args.config) if args.config else SimplifierConfig()
    if args.seed is not None:
        config.seed = args.seed
    return config


def cmd_simplify(args) -> int:
    """Execute the simplify command."""
    from ..pipeline import SimplifierPipeline
    from ..utils.io import collect_text_files, read_text

    try:
        config = _build_config(args)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}")
        return 1

    pipeline = SimplifierPipeline(config=config)

    if args.text is not None:
        result = pipeline.run(args.text)
        print(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
        return 0

    text_files = collect_text_files(args.input)
    if not text_files:
        print(f"No text files found in {args.input}")
        return 1

    output_dir = args.output
    output_dir.mkdir(parents=True, exist_ok=True)

    from rich.progress import Progress, SpinnerColumn

    successful = 0
    fallbacks = 0
    with Progress(
        SpinnerColumn(), *Progress.get_default_columns(), transient=True
    ) as progress:
        task = progress.add_task("Simplifying...", total=len(text_files))
        for path in text_files:
            progress.update(task, description=f"Simplifying {path.name}...")
            try:
                text = read_text(path)
            except OSError as e:
                logger.error(f"Could not read {path}: {e}")
                progress.advance(task)
                continue

            out_path = output_dir / f"{path.stem}.json"
            try:
                result = pipeline.run(text)
                payload = {"source_path": str(path), **result.to_dict()}
                out_path.write_text(
                    json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8"
                )
            except OSError as e:
                logger.error(f"Could not write {out_path}: {e}")
                progress.advance(task)
                continue
            logger.info(f"Saved simplified formats to {out_path}")

            successful += 1
            fallbacks += int(result.fallback_used)
            progress.advance(task)

    print(f"Simplified {successful}/{len(text_files)} documents")
    if fallbacks:
        print(f"{fallbacks} document(s) used the fallback path")

    return 0 if successful else 1


def cmd_analyze(args) -> int:
    """Execute the analyze command."""
    from ..analyzers.text import TextAnalyzer
    from ..analyzers.ranker import SentenceRanker
    from ..analyzers.readability import grade_level, reading_ease
    from ..utils.io import read_text

    try:
        config = _build_config(args)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}")
        return 1

    if args.text is not None:
        text = args.text
    else:
        try:
            text = read_text(args.input)
        except OSError as e:
            print(f"Could not read {args.input}: {e}")
            return 1

    analyzer = TextAnalyzer(
        keyword_count=config.keyword_count,
        cleaning_passes=config.max_cleaning_passes,
    )
    ranker = SentenceRanker(similarity_threshold=config.similarity_threshold)

    analyzed = analyzer.analyze(text)
    top_n = args.top_n if args.top_n is not None else config.top_n
    ranked = ranker.rank(analyzed, top_n)
    prose = ". ".join(analyzed.sentences)

    report = {
        "sentences": analyzed.sentences,
        "keywords": analyzed.keywords,
        "entities": sorted(analyzed.entities),
        "ranked": [
            {"index": r.index, "score": round(r.score, 4), "text": r.text}
            for r in ranked
        ],
        "grade_level": grade_level(prose),
        "reading_ease": reading_ease(prose),
    }
    print(json.dumps(report, ensure_ascii=False, indent=2))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO, format="%(message)s"
    )

    if args.command is None:
        parser.print_help()
        return 0

    commands = {
        "simplify": cmd_simplify,
        "analyze": cmd_analyze,
    }

    return commands[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
