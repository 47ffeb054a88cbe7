"""
sd-rg - sd-style find and replace on top of ripgrep
All matching and substitution is delegated to rg; this module parses the
command line, picks the operating mode and dispatches to the mode command.
"""
import argparse
import sys
from typing import List, Optional, Sequence
from dependency_injector import containers, providers
from .commands import Preview, Replace, Stream
from .libs.config import ConfigError, SdRgConfig, load_config
from .libs.invocation import Invocation, Mode
from .libs.logger import get_logger, init_logger
from .services.search import RipgrepService, SearchEngineError
logger = get_logger(__name__)

PROG = "sd-rg"
USAGE = (
    f"{PROG} [OPTIONS] PATTERN REPLACEMENT [PATH...]\n"
    f"       {PROG} [OPTIONS] PATTERN -- REPLACEMENT [PATH...]\n"
    f"       command | {PROG} PATTERN REPLACEMENT"
)
EPILOG = """\
Replacement syntax is ripgrep's: $1, $2, $name and ${name} refer to capture groups.
Without PATH and with piped input, standard input is rewritten to standard output.
Otherwise matching files under PATH (default: current directory) are rewritten in place.

examples:
  sd-rg 'foo' 'bar' src/
  sd-rg -p '(\\w+)@example' '$1@test' .
  echo 'lots((([]))) of special chars' | sd-rg -s '((([])))' ''
"""


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser"""
    parser = argparse.ArgumentParser(
        prog=PROG,
        usage=USAGE,
        description="Find and replace with sd-style arguments, powered by ripgrep.",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        allow_abbrev=False,
    )
    parser.add_argument("--preview", "-p", action="store_true", help="Show the changes without modifying files")
    parser.add_argument(
        "--string-mode", "-s", "--fixed-strings", "-F", dest="string_mode", action="store_true",
        help="Treat PATTERN as a literal string instead of a regular expression",
    )
    parser.add_argument("--flags", "-f", default="", metavar="FLAGS",
                        help="Regex flags; 'i' enables case-insensitive matching")
    parser.add_argument("positionals", nargs="*", metavar="ARGS", help=argparse.SUPPRESS)
    return parser


def parse_invocation(argv: Sequence[str], parser: Optional[argparse.ArgumentParser] = None) -> Invocation:
    """
    Parse the command line into an Invocation
    Args:
        argv: Arguments without the program name
        parser: Parser to use (default: build_parser())
    Returns:
        Invocation
    Exits through parser.error (status 2) on unknown options or missing
    PATTERN/REPLACEMENT, and with status 0 after printing --help.
    """
    if parser is None:
        parser = build_parser()
    argv = list(argv)
    # Everything after the first "--" is positional, whatever it looks like
    trailing: List[str] = []
    if "--" in argv:
        split = argv.index("--")
        argv, trailing = argv[:split], argv[split + 1:]
    args, unknown = parser.parse_known_intermixed_args(argv)
    # argparse accepts "-" and negative-number lookalikes as positionals
    given = list(args.positionals or [])
    unknown.extend(token for token in given if token.startswith("-"))
    if unknown:
        parser.error(f"unknown option: {unknown[0]}")
    positionals = given + trailing
    if len(positionals) < 2:
        parser.error("PATTERN and REPLACEMENT required")
    unsupported = sorted(set(args.flags) - {"i"})
    if unsupported:
        logger.debug("Ignoring unsupported regex flags: %s", "".join(unsupported))
    return Invocation(
        pattern=positionals[0],
        replacement=positionals[1],
        paths=tuple(positionals[2:]),
        preview=args.preview,
        string_mode=args.string_mode,
        flags=args.flags,
    )


def build_container(cfg: SdRgConfig) -> containers.DynamicContainer:
    """Register the search engine and mode commands"""
    di = containers.DynamicContainer()
    di.config = providers.Object(cfg)
    di.search_engine = providers.Singleton(RipgrepService, cfg=di.config)
    di.stream = providers.Factory(Stream, cfg=di.config, search_engine=di.search_engine)
    di.preview = providers.Factory(Preview, cfg=di.config, search_engine=di.search_engine)
    di.replace = providers.Factory(Replace, cfg=di.config, search_engine=di.search_engine)
    return di


def stdin_is_tty() -> bool:
    """Whether standard input is an interactive terminal"""
    try:
        return sys.stdin is not None and sys.stdin.isatty()
    except ValueError:
        return False


def dispatch(invocation: Invocation, di: containers.DynamicContainer, is_tty: Optional[bool] = None) -> int:
    """
    Run the mode command selected for this invocation
    Args:
        invocation: Parsed invocation
        di: Dependency container
        is_tty: Override for terminal detection (default: inspect sys.stdin)
    Returns:
        Process exit code
    """
    mode = invocation.select_mode(stdin_is_tty() if is_tty is None else is_tty)
    logger.debug("Selected %s mode for %s", mode.value, invocation)
    if mode == Mode.STREAM:
        return di.stream().run(invocation)
    if mode == Mode.PREVIEW:
        return di.preview().run(invocation)
    return di.replace().run(invocation)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main CLI entry point"""
    invocation = parse_invocation(sys.argv[1:] if argv is None else argv)
    try:
        cfg = load_config()
        init_logger(level=cfg.log_level, log_file=cfg.log_file)
    except (ConfigError, ValueError, OSError) as err:
        sys.stderr.write(f"{PROG}: error: {err}\n")
        return 2
    di = build_container(cfg)
    try:
        return dispatch(invocation, di)
    except SearchEngineError as err:
        logger.debug("Search engine command failed: %s", err.command)
        sys.stderr.write(f"{PROG}: error: {err}\n")
        return 2


def run() -> None:
    """Console script entry point"""
    sys.exit(main())


if __name__ == "__main__":
    run()
