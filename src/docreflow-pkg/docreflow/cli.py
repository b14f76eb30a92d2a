"""
docreflow: reflow markdown doc comment text to a line width.

Paragraphs are re-wrapped; lists, block quotes, code blocks and tables keep
their structure.

Usage:
    docreflow [FILES...] [--width N] [--style STYLE] [--tagged]
              [--extra-leading-space] [--in-place | --check]

With no FILES the text is read from stdin and the result written to stdout.
"""

import argparse
import sys
from pathlib import Path

from pydantic import ValidationError

from .config import ReflowConfig, WrappingStyle
from .text import reflow_markdown
from .ui import ANSI_GREEN, ANSI_YELLOW, ansi, log, log_error


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="docreflow",
        description="Reflow markdown doc comment text to a line width.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "files", nargs="*", type=Path, metavar="FILES",
        help="Files to reflow (default: read stdin)",
    )
    parser.add_argument(
        "--width", type=int, default=100,
        help="Maximum line width; negative disables reflow (default: 100)",
    )
    parser.add_argument(
        "--style", default=WrappingStyle.MINIMUM_RAGGED.value,
        help="greedy, minimum_ragged or equal (default: minimum_ragged)",
    )
    parser.add_argument(
        "--tagged", action="store_true",
        help="Treat the text as a tag section such as '@param name ...'",
    )
    parser.add_argument(
        "--extra-leading-space", action="store_true",
        help="Lines carry one decoration space after the comment marker",
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "--in-place", action="store_true",
        help="Rewrite files that change",
    )
    mode.add_argument(
        "--check", action="store_true",
        help="Write nothing; exit 1 if any file would change",
    )
    return parser


def _reflow_files(paths: list[Path], config: ReflowConfig,
                  in_place: bool, check: bool) -> bool:
    """Reflow each file; return True when the run should exit non-zero."""
    failed = False
    for path in paths:
        try:
            original = path.read_text(encoding="utf-8")
        except OSError as e:
            log_error(f"cannot read {path}: {e.strerror or e}")
            failed = True
            continue

        result = reflow_markdown(original, config)

        if check:
            if result != original:
                log(f"{ansi('Would reflow', ANSI_YELLOW)} {path}")
                failed = True
        elif in_place:
            if result == original:
                continue
            try:
                path.write_text(result, encoding="utf-8")
            except OSError as e:
                log_error(f"cannot write {path}: {e.strerror or e}")
                failed = True
                continue
            log(f"{ansi('Reflowed', ANSI_GREEN)} {path}")
        else:
            sys.stdout.write(result)
    return failed


def main(argv: list[str] | None = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        config = ReflowConfig(
            max_line_width=args.width,
            wrapping_style=args.style,
            before_any_tags=not args.tagged,
            extra_leading_space=args.extra_leading_space,
        )
    except ValidationError as e:
        log_error(f"invalid configuration: {e.errors()[0]['msg']}")
        sys.exit(2)

    if not args.files:
        if args.in_place or args.check:
            parser.error("--in-place and --check need at least one file")
        sys.stdout.write(reflow_markdown(sys.stdin.read(), config))
        return

    if _reflow_files(args.files, config, args.in_place, args.check):
        sys.exit(1)


if __name__ == "__main__":
    main()
