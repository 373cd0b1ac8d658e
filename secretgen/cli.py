"""CLI for secretgen — generate secrets, show/set persisted defaults."""

import argparse
import logging
import sys

from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .config import DEFAULTS, coerce_value, config_path, load_config, save_config
from .errors import Severity
from .generator import SecretGenerator
from .logging import console, err_console, set_level


def _pick(value, cfg, key):
    return cfg[key] if value is None else value


def cmd_generate(args) -> int:
    cfg = load_config()
    length = _pick(args.length, cfg, "length")
    charlists = args.charlist if args.charlist else cfg["charlists"]
    no_default = _pick(args.no_default, cfg, "no_default")
    rndsrc = _pick(args.rndsrc, cfg, "rndsrc")
    level_fail = _pick(args.error_level_fail, cfg, "error_level_fail")
    copies = _pick(args.copies, cfg, "copies")

    try:
        gen = SecretGenerator(
            length=length,
            charlists=charlists,
            no_default=no_default,
            rndsrc=rndsrc,
            error_level_fail=level_fail,
        )
    except ValueError as e:
        err_console().print(f"[red]{escape(str(e))}[/red]")
        return 2

    status = 0
    with gen:
        for i in range(copies):
            result = gen.get_secret()
            # printed even on failure; the failure itself goes to stderr
            if result.attempted is not None:
                console().out(result.attempted, highlight=False)
            if result.failed:
                status = 1
                title = f"[bold red]Secret #{i + 1} failed[/bold red]"
                err_console().print(Panel(escape(result.report.rstrip() or "no diagnostics"), title=title))
    return status


def cmd_config_show(args) -> int:
    cfg = load_config()
    table = Table(show_header=True, header_style="bold cyan", title=config_path())
    table.add_column("Key")
    table.add_column("Value")
    table.add_column("Default")
    for key, default in DEFAULTS.items():
        table.add_row(key, escape(repr(cfg[key])), escape(repr(default)))
    console().print(table)
    return 0


def cmd_config_set(args) -> int:
    cfg = load_config()
    try:
        cfg[args.key] = coerce_value(args.key, args.value)
    except ValueError as e:
        err_console().print(f"[red]{escape(str(e))}[/red]")
        return 2
    path = save_config(cfg)
    console().print(f"[green]Saved {escape(args.key)} to[/green] {escape(path)}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="secretgen")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log debug output to stderr")
    sub = parser.add_subparsers(dest="cmd", required=True)

    gen = sub.add_parser("generate", help="Generate one or more secrets")
    gen.add_argument("--length", "-l", type=int, help="Secret length (default 12)")
    gen.add_argument(
        "--charlist", "-c", action="append", metavar="SPEC",
        help='Character list, e.g. "a-z" or "3:#$%%" (repeatable; "N:" makes N characters required)',
    )
    gen.add_argument("--no-default", action="store_true", default=None,
                     help="Do not add the default 0-9a-zA-Z optional list")
    gen.add_argument("--rndsrc", type=str, help="Entropy file or device ('-' for stdin)")
    gen.add_argument("--error-level-fail", type=int, choices=[int(s) for s in Severity],
                     help="Severity at which the secret is withheld (default 3, critical)")
    gen.add_argument("--copies", type=int, help="How many secrets to generate")
    gen.set_defaults(func=cmd_generate)

    cf = sub.add_parser("config", help="Show or change persisted defaults")
    csub = cf.add_subparsers(dest="ccmd", required=True)

    cf_show = csub.add_parser("show", help="Print current settings")
    cf_show.set_defaults(func=cmd_config_show)

    cf_set = csub.add_parser("set", help="Persist a setting")
    cf_set.add_argument("key", choices=list(DEFAULTS), help="Setting name")
    cf_set.add_argument("value", nargs="+", help="New value (several for charlists)")
    cf_set.set_defaults(func=cmd_config_set)
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.verbose:
        set_level(logging.DEBUG)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
