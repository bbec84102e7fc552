"""
MINILANG CLI Entrypoint.

This module provides the command-line interface for parsing MINILANG programs and
rendering their parse trees.

Features:
    - Read source from `.mini` files or inline strings.
    - Lex with optional extra spellings, parse, and render as text, DOT or JSON.
    - Output to console or file.
    - Optionally offer to open the GraphViz viewer afterwards.

Example usage:
    minilang program.mini
    minilang -s "x := ( 1 + 2 ) * 3 ." -t dot --view
    minilang program.mini -t json -o tree.json
    minilang program.mini -c run.json --verbose
    minilang program.mini --spellings spanish.json

Functions:
    run_minilang(source: str, config: RunConfig | None = None, is_string: bool = False) -> int:
        Runs the full pipeline (lex → parse → render → output) and returns an exit status.

    main() -> None:
        Parses CLI arguments and exits with the status of `run_minilang`.
"""

import argparse
import logging
import sys
import webbrowser

from minilang.minilang_config import ConfigError, RunConfig, setup_logging
from minilang.minilang_lexer import TokenStream
from minilang.minilang_render import Renderer
from minilang.minilang_spellings import MappingError, SpellingTable

logger = logging.getLogger(__name__)

SOURCE_SUFFIX = ".mini"


def prompt_for_viewer(config: RunConfig) -> bool:
    """Asks whether to open the GraphViz viewer; opens it on a yes."""
    try:
        answer = input(f"Open GraphViz viewer ({config.viewer_url})? [y/N] ")
    except EOFError:
        return False
    if answer.strip().lower() not in ("y", "yes"):
        return False
    webbrowser.open(config.viewer_url)
    return True


def run_minilang(
    source: str, config: RunConfig | None = None, is_string: bool = False
) -> int:
    """
    Run the MINILANG toolchain: lex, parse, render, and print or write the result.

    Args:
        source (str): MINILANG source text or a path to a `.mini` file.
        config (RunConfig | None): Run options; defaults to `RunConfig()`.
        is_string (bool): If True, treats `source` as raw code instead of a file path.

    Returns:
        int: 0 if the program was accepted, 1 on a syntax error.

    Raises:
        ValueError: If `is_string` is False and the source does not end with `.mini`,
            or the render target is unknown.
        MappingError: If the spelling file or the configured aliases are invalid.
    """
    config = config or RunConfig()
    if not is_string and not source.endswith(SOURCE_SUFFIX):
        raise ValueError(f"Only {SOURCE_SUFFIX} files are supported.")
    if not is_string:
        with open(source, encoding="utf-8") as f:
            source = f.read()

    spellings = SpellingTable.from_defaults()
    if config.spellings_file:
        spellings.load_from_json(config.spellings_file)
        logger.info("Loaded spellings from %s", config.spellings_file)
    if config.aliases:
        spellings.configure(config.aliases)
        logger.info("Loaded %d extra spelling(s)", len(config.aliases))

    tokens = TokenStream.from_source(source, spellings)
    renderer = Renderer(config.target)
    outcome, output = renderer.render(tokens, config.title)

    if config.out:
        with open(config.out, "w", encoding="utf-8") as f:
            f.write(output + "\n")
        logger.info("Wrote %s output to %s", renderer.target, config.out)
    else:
        print(output)

    if outcome.ok:
        logger.info("Program accepted")
    if config.open_viewer:
        prompt_for_viewer(config)
    return 0 if outcome.ok else 1


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="minilang", description="Parse a MINILANG program and render its parse tree."
    )
    parser.add_argument("source", help="Filename or raw source (with -s)")
    parser.add_argument(
        "-s", "--string", action="store_true", help="Interpret source as literal string"
    )
    parser.add_argument(
        "-t",
        "--target",
        choices=("text", "dot", "json"),
        default=None,
        help="Render target (default: text)",
    )
    parser.add_argument("-o", "--out", metavar="OUTFILE", help="Output to file")
    parser.add_argument("-c", "--config", metavar="CONFIG", help="JSON config file")
    parser.add_argument("--title", default=None, help="Title of the parse tree")
    parser.add_argument(
        "--spellings", metavar="FILE", help="JSON file of extra spellings"
    )
    parser.add_argument(
        "--view",
        dest="open_viewer",
        action="store_true",
        default=None,
        help="Offer to open the GraphViz viewer afterwards",
    )
    parser.add_argument(
        "--verbose", action="store_true", default=None, help="Verbose logging"
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """
    Entry point for the MINILANG CLI.

    Command-line flags override values loaded from `--config`. Exits with 0 when
    the program is accepted, 1 on a syntax error, and 2 on usage or configuration
    problems.
    """
    args = build_arg_parser().parse_args(argv)

    try:
        config = RunConfig.from_json(args.config) if args.config else RunConfig()
        config = config.merged(
            target=args.target,
            title=args.title,
            open_viewer=args.open_viewer,
            verbose=args.verbose,
            out=args.out,
            spellings_file=args.spellings,
        )
    except ConfigError as e:
        print(f"minilang: {e}", file=sys.stderr)
        sys.exit(2)

    setup_logging(config.verbose)

    try:
        status = run_minilang(args.source, config, is_string=args.string)
    except (ValueError, MappingError, OSError) as e:
        print(f"minilang: {e}", file=sys.stderr)
        sys.exit(2)
    sys.exit(status)


if __name__ == "__main__":
    main()
