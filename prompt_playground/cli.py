"""
CLI - Command-line interface for the prompt playground.

Main entry point for the application. Orchestrates:
1. Configuration loading and command-line overrides
2. Provider selection
3. Single or batched generation runs
4. Optional comparison summary
5. JSON output to file or stdout
"""

import argparse
import json
import sys
from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv

from .core.config import AppConfig, ProviderName, load_config
from .core.context import PlaygroundContext
from .core.models import summarize_results
from .engine import ComparisonEngine, OrchestrationEngine, ParameterSampler
from .llm import (
    ConfigurationError,
    GenerationProvider,
    PlaygroundError,
    create_provider,
)
from .utils.logger import setup_logging, get_logger, log_exception

logger = get_logger(__name__)


def parse_stop_sequences(value: str) -> List[str]:
    """Split a comma-separated list, trimming entries and dropping empty ones."""
    return [s.strip() for s in value.split(",") if s.strip()]


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="prompt-playground",
        description="Run prompt variations against a text-generation provider and compare the outputs",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s --product "Tesla Model S"
  %(prog)s --batched --samples 4 --seed 7 --compare -o results.json
  %(prog)s --repeat 3 --compare --provider mock
        """,
    )

    parser.add_argument(
        "-c", "--config",
        type=Path,
        help="Configuration file (YAML)",
    )

    parser.add_argument(
        "--provider",
        choices=[p.value for p in ProviderName],
        help="Generation provider (default: from config, gemini)",
    )

    generation = parser.add_argument_group("generation settings")
    generation.add_argument("--model", help="Model identifier")
    generation.add_argument("--system", dest="system_prompt", help="System prompt")
    generation.add_argument(
        "--prompt",
        dest="user_prompt",
        help="User prompt template; {product_name} is replaced by --product",
    )
    generation.add_argument("--product", dest="product_name", help="Product name")
    generation.add_argument("--temperature", type=float, help="Sampling temperature")
    generation.add_argument("--max-tokens", type=int, help="Maximum output tokens")
    generation.add_argument("--presence-penalty", type=float, help="Presence penalty")
    generation.add_argument("--frequency-penalty", type=float, help="Frequency penalty")
    generation.add_argument(
        "--stop",
        dest="stop_sequences",
        type=parse_stop_sequences,
        help="Comma-separated stop sequences",
    )

    mode = parser.add_argument_group("run mode")
    mode.add_argument(
        "--batched",
        action="store_true",
        default=None,
        help="Run several randomized parameter variants",
    )
    mode.add_argument("--samples", type=int, help="Number of batched samples (2-12)")
    mode.add_argument("--seed", type=int, help="Seed for batched parameter sampling")
    mode.add_argument(
        "--repeat",
        type=int,
        default=1,
        help="Number of runs to perform (single mode builds history; default: 1)",
    )
    mode.add_argument(
        "--compare",
        action="store_true",
        help="Synthesize a summary from the generated outputs",
    )

    output = parser.add_argument_group("output")
    output.add_argument(
        "-o", "--output",
        type=Path,
        help="Output JSON file (default: stdout)",
    )
    output.add_argument(
        "--indent",
        type=int,
        default=2,
        help="JSON indentation (default: 2)",
    )
    output.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )

    return parser


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    return build_parser().parse_args(argv)


GENERATION_OPTIONS = (
    "model",
    "system_prompt",
    "user_prompt",
    "product_name",
    "temperature",
    "max_tokens",
    "presence_penalty",
    "frequency_penalty",
    "stop_sequences",
)


def apply_overrides(config: AppConfig, args: argparse.Namespace) -> AppConfig:
    """
    Apply command-line options on top of a loaded configuration.

    Options left unset keep their configured values.
    """
    overrides = {
        name: getattr(args, name)
        for name in GENERATION_OPTIONS
        if getattr(args, name, None) is not None
    }
    if overrides:
        config.generation = replace(config.generation, **overrides)

    if args.batched is not None:
        config.playground.batched = args.batched
    if args.samples is not None:
        config.playground.sample_count = args.samples
    if args.seed is not None:
        config.playground.seed = args.seed
    if args.provider is not None:
        config.provider.name = ProviderName(args.provider)

    return config


def build_provider(config: AppConfig) -> GenerationProvider:
    """Create the provider named in the configuration."""
    settings = config.provider
    return create_provider(settings.name.value, **settings.provider_kwargs())


def run_session(
    config: Optional[AppConfig] = None,
    provider: Optional[GenerationProvider] = None,
    repeat: int = 1,
    compare: bool = False,
    output_path: Optional[str | Path] = None,
) -> Dict[str, Any]:
    """
    Programmatic interface to run a playground session.

    Args:
        config: Optional configuration
        provider: Provider to use (default: built from config)
        repeat: Number of runs; single-mode runs accumulate history
        compare: Synthesize a summary after the runs
        output_path: Optional path to write the session JSON

    Returns:
        Session dict with mode, results, history, stats and summary

    Raises:
        ConfigurationError: If the provider has no credential
    """
    config = config or AppConfig()
    provider = provider or build_provider(config)

    context = PlaygroundContext.from_config(config)
    engine = OrchestrationEngine(
        context,
        provider,
        sampler=ParameterSampler(seed=config.playground.seed),
    )

    for run_number in range(1, max(1, repeat) + 1):
        logger.info(f"Run {run_number}/{max(1, repeat)} ({context.mode.value} mode)")
        engine.run()

    # Stats cover the outputs a comparison would draw from
    stats = summarize_results(context.results if context.batched else context.history)

    summary = None
    if compare:
        summary = ComparisonEngine(context, provider).compare()
        if summary is None:
            logger.warning("Comparison needs at least two outputs; skipped")
        else:
            context.restore()

    session = {
        "mode": context.mode.value,
        "provider": provider.provider_name,
        "config": config.generation.to_dict(),
        "results": [r.to_dict() for r in context.results],
        "history": [r.to_dict() for r in context.history],
        "stats": stats.to_dict() if stats else None,
        "summary": summary.to_dict() if summary else None,
    }

    if output_path:
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(
            json.dumps(session, indent=2, ensure_ascii=False),
            encoding="utf-8",
        )

    return session


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point.

    Returns:
        Exit code (0 success, 1 run failure, 2 configuration error)
    """
    args = parse_args(argv)
    load_dotenv()

    try:
        config = load_config(args.config)
        config = apply_overrides(config, args)
    except (FileNotFoundError, ConfigurationError) as e:
        setup_logging(level="DEBUG" if args.verbose else "INFO")
        logger.error(f"Configuration error: {e}")
        return 2

    log_level = "DEBUG" if args.verbose else config.logging.level
    setup_logging(
        level=log_level,
        format_string=config.logging.format,
        log_file=config.logging.file,
    )

    logger.info("Prompt Playground")
    logger.info(f"Provider: {config.provider.name.value}, model: {config.generation.model}")

    try:
        session = run_session(
            config=config,
            repeat=args.repeat,
            compare=args.compare,
        )
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        return 2
    except PlaygroundError as e:
        logger.error(f"Run failed: {e}")
        return 1
    except Exception as e:
        log_exception(logger, "Unexpected error", e)
        return 1

    json_str = json.dumps(session, indent=args.indent, ensure_ascii=False)

    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(json_str, encoding="utf-8")
        logger.info(f"Output written to: {args.output}")
    else:
        print(json_str)

    return 0


if __name__ == "__main__":
    sys.exit(main())
