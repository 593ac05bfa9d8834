"""
Command-line interface for git-helper.

This module is responsible for argument parsing, loading the
configuration and running preflight before delegating to the command
handlers.

Everything after the command name is handed to the command unchanged,
so messages and paths may start with a dash (``commit -wip``). The
only exception is the exact flags in TRAILING_FLAGS, which may also be
given after the command; put ``--`` first to pass one of them through
as an argument.
"""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional, Tuple

from .commands import Command, Context, dispatch, prompt_confirm
from .config import CONFIG_ENV_VAR, DEFAULT_CONFIG_NAME, load_config, resolve_config_path
from .errors import GitHelperError, UsageError
from .logging_utils import configure_logging
from .preflight import configure_identity, prepare_repo

PROG = "git-helper"

TRAILING_FLAGS = ("-y", "--yes", "-n", "--no", "-v", "--verbose")


def _add_global_flags(parser: argparse.ArgumentParser) -> None:
    answers = parser.add_mutually_exclusive_group()
    answers.add_argument(
        "-y",
        "--yes",
        dest="answer",
        action="store_const",
        const=True,
        help="Answer yes to force-push confirmations without prompting.",
    )
    answers.add_argument(
        "-n",
        "--no",
        dest="answer",
        action="store_const",
        const=False,
        help="Answer no to force-push confirmations without prompting.",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (can be specified multiple times).",
    )


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PROG,
        description=(
            "Stage, commit, push, pull and undo changes in the repository "
            "named by the git-helper configuration file."
        ),
        epilog=(
            f"Run '{PROG} help' for the list of commands. The configuration "
            f"file is taken from --config, then ${CONFIG_ENV_VAR}, then "
            f"{DEFAULT_CONFIG_NAME} next to the program; when running with "
            f"'python -m', pass --config or set ${CONFIG_ENV_VAR}. Use '--' "
            "after the command to pass -y, -n or -v through as an argument."
        ),
    )

    parser.add_argument(
        "command",
        nargs="?",
        help="Command to run (add, commit, push, pull, status, auto, sync, ...).",
    )
    parser.add_argument(
        "args",
        nargs=argparse.REMAINDER,
        help="Arguments for the command, such as a path or commit message.",
    )
    parser.add_argument(
        "-c",
        "--config",
        help=(
            "Path to the configuration file "
            f"(default: ${CONFIG_ENV_VAR} or {DEFAULT_CONFIG_NAME} next to the program)."
        ),
    )
    _add_global_flags(parser)

    return parser


def build_trailing_flag_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=PROG, add_help=False)
    _add_global_flags(parser)
    return parser


def split_trailing_flags(tokens: List[str]) -> Tuple[List[str], List[str]]:
    """
    Separate global flags given after the command from its arguments.

    Only exact TRAILING_FLAGS spellings are taken; ``--`` stops the
    search and is dropped.
    """

    flags: List[str] = []
    rest: List[str] = []
    remaining = iter(tokens)
    for token in remaining:
        if token == "--":
            rest.extend(remaining)
            break
        if token in TRAILING_FLAGS:
            flags.append(token)
        else:
            rest.append(token)
    return flags, rest


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    args = build_arg_parser().parse_args(argv)
    flags, args.args = split_trailing_flags(args.args)
    if flags:
        build_trailing_flag_parser().parse_args(flags, namespace=args)
    return args


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    configure_logging(verbosity=args.verbose)

    if args.answer is None:
        confirm = prompt_confirm
    else:
        answer = args.answer
        confirm = lambda question: answer  # noqa: E731

    command = Command.from_selector(args.command)

    try:
        config = load_config(resolve_config_path(args.config))
        configure_identity(config)
        if command.touches_repo:
            prepare_repo(config)
        ctx = Context(config=config, confirm=confirm, prog=PROG)
        return dispatch(command, args.args, ctx)
    except UsageError as exc:
        print(exc)
        return 1
    except KeyboardInterrupt:
        # Graceful shutdown on Ctrl+C
        return 130
    except GitHelperError as exc:
        print(f"{PROG}: error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":  # pragma: no cover - manual invocation
    raise SystemExit(main())
