"""
Report - Colored console report for playground sessions.

Accepts the same options as the ``prompt-playground`` command and prints
the session as a colored report instead of JSON.
"""

import sys
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv

from .cli import apply_overrides, parse_args, run_session
from .core.config import load_config
from .llm import ConfigurationError, PlaygroundError
from .utils.logger import setup_logging, get_logger, log_exception

logger = get_logger(__name__)


# ANSI color codes
class Colors:
    RESET = "\033[0m"
    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    BLUE = "\033[94m"
    MAGENTA = "\033[95m"
    CYAN = "\033[96m"
    GRAY = "\033[90m"
    BOLD = "\033[1m"
    DIM = "\033[2m"


def color(text: str, color_code: str) -> str:
    """Apply color to text."""
    return f"{color_code}{text}{Colors.RESET}"


def print_header(title: str) -> None:
    """Print a styled header."""
    print()
    print(color(f"{'=' * 60}", Colors.CYAN))
    print(color(f"  {title}", Colors.BOLD + Colors.CYAN))
    print(color(f"{'=' * 60}", Colors.CYAN))


def print_error(message: str) -> None:
    """Print an error message."""
    print(color(f"[ERROR] {message}", Colors.RED), file=sys.stderr)


def print_warning(message: str) -> None:
    """Print a warning message."""
    print(color(f"[WARNING] {message}", Colors.YELLOW))


def print_step(message: str) -> None:
    """Print a step/progress message."""
    print(color(f"  -> {message}", Colors.DIM))


def temperature_color(value: float) -> str:
    if value <= 0.4:
        return Colors.BLUE
    if value <= 0.8:
        return Colors.GREEN
    return Colors.YELLOW


def penalty_color(value: float) -> str:
    if abs(value) <= 0.2:
        return Colors.GRAY
    if abs(value) <= 0.5:
        return Colors.YELLOW
    return Colors.RED


def print_result(result: Dict[str, Any], label: str) -> None:
    """Print one result with its parameter badges and metrics."""
    config = result["config"]
    badges = " ".join([
        color(f"[T: {config['temperature']:.1f}]", temperature_color(config["temperature"])),
        color(f"[PP: {config['presence_penalty']:.1f}]", penalty_color(config["presence_penalty"])),
        color(f"[FP: {config['frequency_penalty']:.1f}]", penalty_color(config["frequency_penalty"])),
        color(f"[{label}]", Colors.DIM),
    ])
    print()
    print(badges)
    print(result["output"])
    print_step(f"{result['token_count']} tokens, {result['generation_time_ms']}ms")


def print_stats(stats: Optional[Dict[str, Any]]) -> None:
    """Print aggregate metrics and insights."""
    if not stats:
        return
    print()
    print(color("Analysis & Insights:", Colors.BOLD))
    print_step(f"Avg token count: {stats['average_token_count']}")
    print_step(f"Avg generation time: {stats['average_generation_time_ms']}ms")
    print_step(f"Token count range: {stats['token_count_range']}")
    for line in stats["insights"]:
        print(f"  {color('*', Colors.YELLOW)} {line}")


def print_session(session: Dict[str, Any]) -> None:
    """Print a full session report."""
    print_header("Prompt Playground")
    print_step(f"Provider: {session['provider']}, model: {session['config']['model']}")
    print_step(f"Mode: {session['mode']}")

    results = session["results"]
    print()
    print(color(f"Parameter Variations & Results ({len(results)})", Colors.BOLD))
    for index, result in enumerate(results, start=1):
        print_result(result, f"Variation {index}")

    if session["mode"] == "single" and len(session["history"]) > 1:
        print()
        print(color(f"History ({len(session['history'])} runs)", Colors.BOLD))
        for index, result in enumerate(session["history"], start=1):
            print_result(result, f"Run {index}")

    print_stats(session["stats"])

    summary = session["summary"]
    if summary:
        print()
        print(color("Comparison Summary:", Colors.BOLD + Colors.MAGENTA))
        print(summary["output"])
        print_step(f"{summary['token_count']} tokens")
    print()


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point.

    Returns:
        Exit code (0 success, 1 run failure, 2 configuration error)
    """
    args = parse_args(argv)
    load_dotenv()
    setup_logging(level="DEBUG" if args.verbose else "WARNING")

    try:
        config = apply_overrides(load_config(args.config), args)
        session = run_session(
            config=config,
            repeat=args.repeat,
            compare=args.compare,
            output_path=args.output,
        )
    except FileNotFoundError as e:
        print_error(str(e))
        return 2
    except ConfigurationError as e:
        print_error(f"Configuration error: {e}")
        return 2
    except PlaygroundError as e:
        print_error(f"Run failed: {e}")
        return 1
    except Exception as e:
        log_exception(logger, "Unexpected error", e)
        print_error(f"Unexpected error: {e}")
        return 1

    print_session(session)
    if args.compare and session["summary"] is None:
        print_warning("Comparison needs at least two outputs")
    return 0


if __name__ == "__main__":
    sys.exit(main())
