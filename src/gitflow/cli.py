"""CLI entry point and argument parsing."""

import argparse
import sys
from enum import Enum
from importlib.metadata import version as get_version
from typing import Callable, Optional

try:
    __version__ = get_version("gitflow")
except Exception:
    __version__ = "dev"

from gitflow.config.settings import finish_default, get_config, get_config_loaded_sources
from gitflow.config.store import load_settings
from gitflow.errors import FlowError
from gitflow.flows import (
    run_checkout,
    run_diff,
    run_finish,
    run_list,
    run_publish,
    run_pull,
    run_rebase,
    run_start,
    run_track,
)
from gitflow.git.runner import DEBUG, QUIET, SHOW, Git
from gitflow.init import run_init
from gitflow.models.kinds import BranchKind, KindSpec, get_spec
from gitflow.models.state import FinishOptions, FlowContext, StartOptions
from gitflow.preconditions import require_git_repo, require_initialized
from gitflow.ui.output import error, trace


class Subcommand(Enum):
    INIT = "init"
    FEATURE = "feature"
    RELEASE = "release"
    HOTFIX = "hotfix"
    SUPPORT = "support"
    VERSION = "version"


class Action(Enum):
    LIST = "list"
    START = "start"
    FINISH = "finish"
    PUBLISH = "publish"
    TRACK = "track"
    DIFF = "diff"
    REBASE = "rebase"
    CHECKOUT = "checkout"
    PULL = "pull"


KIND_ACTIONS: dict[BranchKind, tuple[Action, ...]] = {
    BranchKind.FEATURE: tuple(Action),
    BranchKind.RELEASE: (Action.LIST, Action.START, Action.FINISH, Action.PUBLISH, Action.TRACK),
    BranchKind.HOTFIX: (Action.LIST, Action.START, Action.FINISH, Action.PUBLISH, Action.TRACK),
    BranchKind.SUPPORT: (Action.LIST, Action.START, Action.PUBLISH, Action.TRACK),
}

VERBOSITY_FLAGS = {"-show": SHOW, "--show": SHOW, "-debug": DEBUG, "--debug": DEBUG}


def pop_verbosity(argv: list[str]) -> tuple[Optional[int], list[str]]:
    """Strip -show/-debug from anywhere on the command line."""
    level: Optional[int] = None
    rest = []
    for arg in argv:
        if arg in VERBOSITY_FLAGS:
            level = max(level or QUIET, VERBOSITY_FLAGS[arg])
        else:
            rest.append(arg)
    return level, rest


def _add_finish_args(parser: argparse.ArgumentParser, spec: KindSpec) -> None:
    parser.add_argument("name", nargs="?", metavar=spec.arg_label, help=f"{spec.label} {spec.arg_label}")
    parser.add_argument(
        "-F", "--fetch", action="store_true", default=None, help="fetch from origin before finishing"
    )
    parser.add_argument(
        "-k", "--keep", action="store_true", default=None, help="keep the branch after finishing"
    )
    if spec.kind is BranchKind.FEATURE:
        parser.add_argument(
            "-r", "--rebase", action="store_true", help="rebase onto develop before merging"
        )
        return
    parser.add_argument(
        "-s", "--sign", action="store_true", default=None, help="sign the tag cryptographically"
    )
    parser.add_argument(
        "-u",
        "--signingkey",
        metavar="GPG_KEY",
        help="use the given GPG key for the digital signature (implies -s)",
    )
    parser.add_argument("-m", "--message", help="use the given tag message")
    parser.add_argument(
        "-p", "--push", action="store_true", default=None, help="push to origin after finishing"
    )
    parser.add_argument(
        "-t",
        "--tag",
        action=argparse.BooleanOptionalAction,
        default=None,
        help=f"tag this {spec.label} (default: on)",
    )


def _add_kind_parser(subparsers, kind: BranchKind) -> None:
    spec = get_spec(kind)
    kind_parser = subparsers.add_parser(kind.value, help=f"Manage your {kind.value} branches.")
    actions = kind_parser.add_subparsers(dest="action", metavar="<action>")

    for action in KIND_ACTIONS[kind]:
        aliases = ["co"] if action is Action.CHECKOUT else []
        p = actions.add_parser(action.value, aliases=aliases)
        if action is Action.LIST:
            p.add_argument("-v", "--verbose", action="store_true", help="verbose (more) output")
        elif action is Action.START:
            p.add_argument("name", nargs="?", metavar=spec.arg_label)
            p.add_argument("base", nargs="?", help="commit to branch off (default: source line)")
            p.add_argument(
                "-F", "--fetch", action="store_true", help="fetch from origin before starting"
            )
        elif action is Action.FINISH:
            _add_finish_args(p, spec)
        elif action is Action.PULL:
            p.add_argument("remote", nargs="?")
            p.add_argument("name", nargs="?", metavar=spec.arg_label)
        elif action is Action.REBASE:
            p.add_argument("-i", "--interactive", action="store_true", help="interactive rebase")
            p.add_argument("name", nargs="?", metavar=spec.arg_label)
        else:
            p.add_argument("name", nargs="?", metavar=spec.arg_label)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="git flow",
        description="High-level repository operations for the git-flow branching model.",
        epilog="""
Global flags (accepted anywhere):
  -show                              echo every git command
  -debug                             echo git commands with call site, output and status

Examples:
  %(prog)s init -d                     Initialize with default branch names
  %(prog)s feature start login         Branch feature/login off develop
  %(prog)s feature finish log          Merge feature/login back (name prefix ok)
  %(prog)s hotfix start 1.2.1          Branch hotfix/1.2.1 off master
  %(prog)s hotfix finish -p 1.2.1      Merge into master and develop, tag, push

Finishing after a merge conflict:
  Resolve with `git mergetool` and `git commit`, then run the same finish
  command again; it continues where it stopped.
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", metavar="<subcommand>")

    init = subparsers.add_parser(
        Subcommand.INIT.value, help="Initialize a new git repo with support for the branching model."
    )
    init.add_argument(
        "-f",
        "--force",
        action="store_true",
        help="force setting of gitflow branches, even if already configured",
    )
    init.add_argument(
        "-d", "--defaults", action="store_true", help="use default branch naming conventions"
    )

    for kind in BranchKind:
        _add_kind_parser(subparsers, kind)

    subparsers.add_parser(Subcommand.VERSION.value, help="Shows version information.")
    return parser


def build_context(verbosity: int) -> FlowContext:
    """Load repository settings for a lifecycle command."""
    config = get_config()
    git = Git(verbosity=verbosity)
    require_git_repo(git)
    require_initialized(git)
    return FlowContext(git=git, settings=load_settings(git), config=config)


def _finish_flag(ctx: FlowContext, args: argparse.Namespace, flag: str, fallback: bool = False) -> bool:
    value = getattr(args, flag, None)
    if value is None:
        return finish_default(ctx.config, flag, fallback)
    return bool(value)


def do_list(ctx: FlowContext, spec: KindSpec, args: argparse.Namespace) -> int:
    return run_list(ctx, spec, verbose=getattr(args, "verbose", False))


def do_start(ctx: FlowContext, spec: KindSpec, args: argparse.Namespace) -> int:
    options = StartOptions(name=args.name, base=args.base, fetch=args.fetch)
    return run_start(ctx, spec, options)


def do_finish(ctx: FlowContext, spec: KindSpec, args: argparse.Namespace) -> int:
    fetch = _finish_flag(ctx, args, "fetch")
    options = FinishOptions(
        name=args.name,
        fetch=fetch,
        rebase=getattr(args, "rebase", False),
        keep=_finish_flag(ctx, args, "keep"),
        push=_finish_flag(ctx, args, "push"),
        sign=_finish_flag(ctx, args, "sign"),
        signingkey=getattr(args, "signingkey", None),
        message=getattr(args, "message", None),
        tag=_finish_flag(ctx, args, "tag", fallback=True),
        delete_remote=spec.kind is BranchKind.FEATURE and fetch,
    )
    return run_finish(ctx, spec, options)


def do_publish(ctx: FlowContext, spec: KindSpec, args: argparse.Namespace) -> int:
    return run_publish(ctx, spec, args.name)


def do_track(ctx: FlowContext, spec: KindSpec, args: argparse.Namespace) -> int:
    return run_track(ctx, spec, args.name)


def do_diff(ctx: FlowContext, spec: KindSpec, args: argparse.Namespace) -> int:
    return run_diff(ctx, spec, args.name)


def do_rebase(ctx: FlowContext, spec: KindSpec, args: argparse.Namespace) -> int:
    return run_rebase(ctx, spec, args.name, interactive=args.interactive)


def do_checkout(ctx: FlowContext, spec: KindSpec, args: argparse.Namespace) -> int:
    return run_checkout(ctx, spec, args.name)


def do_pull(ctx: FlowContext, spec: KindSpec, args: argparse.Namespace) -> int:
    return run_pull(ctx, spec, args.remote, args.name)


ACTION_HANDLERS: dict[Action, Callable[[FlowContext, KindSpec, argparse.Namespace], int]] = {
    Action.LIST: do_list,
    Action.START: do_start,
    Action.FINISH: do_finish,
    Action.PUBLISH: do_publish,
    Action.TRACK: do_track,
    Action.DIFF: do_diff,
    Action.REBASE: do_rebase,
    Action.CHECKOUT: do_checkout,
    Action.PULL: do_pull,
}


def cmd_kind(args: argparse.Namespace, verbosity: int) -> int:
    spec = get_spec(BranchKind(args.command))
    # "co" is parsed under its own name
    action_name = "checkout" if args.action == "co" else (args.action or Action.LIST.value)
    action = Action(action_name)
    ctx = build_context(verbosity)
    return ACTION_HANDLERS[action](ctx, spec, args)


def cmd_init(args: argparse.Namespace, verbosity: int) -> int:
    return run_init(Git(verbosity=verbosity), get_config(), force=args.force, use_defaults=args.defaults)


def cmd_version(args: argparse.Namespace, verbosity: int) -> int:
    print(__version__)
    return 0


SUBCOMMAND_HANDLERS: dict[Subcommand, Callable[[argparse.Namespace, int], int]] = {
    Subcommand.INIT: cmd_init,
    Subcommand.FEATURE: cmd_kind,
    Subcommand.RELEASE: cmd_kind,
    Subcommand.HOTFIX: cmd_kind,
    Subcommand.SUPPORT: cmd_kind,
    Subcommand.VERSION: cmd_version,
}


def main(argv: Optional[list[str]] = None) -> None:
    level, rest = pop_verbosity(sys.argv[1:] if argv is None else argv)
    parser = build_parser()
    args = parser.parse_args(rest)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    try:
        config = get_config()
        verbosity = level if level is not None else int(config.get("verbosity") or QUIET)
        if verbosity >= DEBUG:
            trace(f"config sources: {', '.join(get_config_loaded_sources())}")
        handler = SUBCOMMAND_HANDLERS[Subcommand(args.command)]
        code = handler(args, verbosity)
    except FlowError as e:
        error(e.message)
        sys.exit(e.exit_code)
    sys.exit(code)


if __name__ == "__main__":
    main()
