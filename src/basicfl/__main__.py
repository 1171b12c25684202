## basicfl — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘
#
# basicfl — Builtin-function registry for a small BASIC runtime, with a Python extension boundary.
#

import os
import re
import sys
import time
import logging
import traceback
from pathlib import Path
from dataclasses import dataclass

import click

from .errors import BasicError, BasicParseError, BasicNameError, BasicArityError, BasicRuntimeError, BasicImportError
from .parser import format_parse_error_context
from .formatting import write_without_ansi, format_object
from .runtime import Runtime


logger = logging.getLogger("basicfl")


@dataclass(frozen=True)
class RuntimeConfig:
    verbose: int
    ignore: bool
    stats: bool
    plain: bool
    line_ending: str
    extensions: tuple[str, ...]


def _configure_logging(verbose: int) -> None:
    level = logging.WARNING
    if verbose == 1: level = logging.INFO
    if verbose >= 2 or os.environ.get('BASIC_DEBUG'): level = logging.DEBUG
    logging.basicConfig(stream=sys.stderr, level=level, format="%(levelname)s %(name)s: %(message)s")


def _token(exc: BasicError) -> str:
    return f"`\033[1;97m{exc.basic_token}\033[0m`"


class BasicRunner:
    def __init__(self, config: RuntimeConfig):
        self.ignore = config.ignore

        if config.plain:
            writer = write_without_ansi(sys.stdout.write)
            sys.stdout.write, sys.stderr.write = writer, writer

        self.runtime = Runtime(line_ending=config.line_ending)
        self.stats = {'expressions': 0} if config.stats else None
        self.started = time.time()
        self.failure = False
        self.executed = 0

        for ns in config.extensions:
            try:
                names = self.runtime.load_extension(ns)
                logger.info("Extension `%s` registered %s.", ns, ', '.join(names))
            except BasicImportError as exc:
                self._report(exc, f'<EXT:{ns}>', '')

    # Error reporting ─────────────────────────────────────────────────────────────────────────
    def _context(self, exc: BasicError, filename: str, source: str) -> str:
        if isinstance(exc, BasicParseError):
            return format_parse_error_context(filename, exc.line, exc.column, exc.token, source)
        meta = exc.basic_meta or {}
        if not source or meta.get('line') is None: return ''
        return format_parse_error_context(filename, meta['line'], meta.get('column'), exc.basic_token, source)

    def _describe(self, exc: Exception, filename: str) -> tuple[str, str]:
        match exc:
            case BasicParseError():
                return "SYNTAX ERROR.", f"Parsing `\033[97m{filename}\033[0m` failed: {' '.join(str(exc).split())}"
            case BasicNameError():
                return "UNKNOWN BUILTIN.", f"Builtin {_token(exc)} from `\033[97m{filename}\033[0m` is not registered!"
            case BasicArityError():
                return "ARITY ERROR.", f"Builtin {_token(exc)} expects {exc.expected} argument(s), got {exc.supplied}."
            case BasicRuntimeError():
                return "RUNTIME ERROR.", f"Builtin {_token(exc)} returned an error: {exc}"
            case BasicImportError():
                return "IMPORT ERROR.", f"Extension {_token(exc)} could not be loaded: {exc}"
        return "INTERNAL ERROR.", f"Evaluating `\033[97m{filename}\033[0m` failed! (Exception: \033[33m{type(exc).__name__}\033[0m)"

    def _report(self, exc: Exception, filename: str, source: str, is_repl: bool = False) -> None:
        banner, detail = self._describe(exc, filename)
        print(f'\033[30;43m {banner} \033[0m {detail}', file=sys.stderr)
        if isinstance(exc, BasicError):
            print(self._context(exc, filename, source), file=sys.stderr)
        else:
            traceback.print_exception(exc, file=sys.stderr)

        if is_repl: return
        self.failure = True
        if not self.ignore: sys.exit(1)

    # Execution ───────────────────────────────────────────────────────────────────────────────
    def execute(self, source: str, filename: str, is_repl: bool = False, show_result: bool = False) -> None:
        try:
            result = self.runtime.run_for_display(source, filename=filename, stats=self.stats)
        except Exception as exc:
            self._report(exc, filename, source, is_repl=is_repl)
            return
        self.executed += 1
        if show_result and result is not None:
            print(format_object(result, quote=True))

    def repl(self) -> None:
        if sys.platform != "win32": import readline

        print('basicfl - BASIC builtin REPL; type BYE or Ctrl+D to exit.')
        while True:
            try:
                line = input("\033[36mREADY \033[0m").strip()
            except (KeyboardInterrupt, EOFError):
                print(""); break
            if line.upper() in ('BYE', 'QUIT', 'EXIT'): break
            if line: self.execute(line, '<REPL>', is_repl=True, show_result=True)

    def finalize(self) -> int:
        if self.stats is not None and self.executed > 0:
            print(f"\n\033[97m\033[48;5;30m STATISTICS. \033[0m")
            print(f"expr\t\033[97m{self.stats['expressions']:,}\033[0m")
            print(f"time\t\033[97m{time.time() - self.started:.3f}s\033[0m")
        return 1 if self.failure else 0


def _parse_dev_tokens(tokens: list[str]) -> list[tuple[str, Path | str | None]]:
    """Turn `-c EXPR`, `-r` and file paths into an ordered list of actions."""
    actions, it = [], iter(tokens)
    for token in it:
        if token in ('-c', '--command'):
            expr = next(it, None)
            if expr is None: raise click.BadParameter(f"Missing expression after `{token}`.")
            actions.append(('command', expr))
        elif token.startswith(('-c=', '--command=')):
            actions.append(('command', token.split('=', 1)[1]))
        elif token in ('-r', '--repl'):
            actions.append(('repl', None))
        elif token == '--':
            continue
        elif token.startswith('-'):
            raise click.BadParameter(f"Unknown option `{token}`.")
        elif not Path(token).is_file():
            raise click.BadParameter(f"File `{token}` not found.")
        else:
            actions.append(('file', Path(token)))
    return actions


_ESCAPES = {'n': '\n', 'r': '\r', 't': '\t', '\\': '\\'}

def _decode_line_ending(value: str) -> str:
    return re.sub(r'\\([nrt\\])', lambda m: _ESCAPES[m.group(1)], value)


@click.group(invoke_without_command=True, context_settings={'ignore_unknown_options': True, 'allow_extra_args': True})
@click.option('--verbose', '-v', default=0, count=True, help='Log registrations (-v) and every builtin call (-vv).')
@click.option('--ignore', '-i', is_flag=True, help='Ignore errors and continue executing.')
@click.option('--stats', is_flag=True, help='Display execution statistics (e.g., number of expressions).')
@click.option('--plain', '-p', is_flag=True, help='Strip ANSI color codes and redirect stderr to stdout.')
@click.option('--line-ending', default='\\n', envvar='BASIC_LINE_ENDING', show_default=True,
              help='Characters appended by PRINT; escapes such as \\n and \\r\\n are decoded.')
@click.option('--ext', 'extensions', multiple=True, envvar='BASIC_EXT', help='Load builtins from an extension module (repeatable).')
@click.pass_context
def cli(ctx: click.Context, verbose: int, ignore: bool, stats: bool, plain: bool, line_ending: str, extensions: tuple[str, ...]) -> None:
    _configure_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj['config'] = RuntimeConfig(verbose=verbose, ignore=ignore, stats=stats, plain=plain,
                                      line_ending=_decode_line_ending(line_ending), extensions=tuple(extensions))


@cli.command('run-file')
@click.argument('script', type=click.File('r', encoding='utf-8'))
@click.pass_context
def run_file(ctx: click.Context, script) -> None:
    runner = BasicRunner(ctx.obj['config'])
    runner.execute(script.read(), script.name or '<STDIN>')
    ctx.exit(runner.finalize())


@cli.command('run-dev', context_settings={'ignore_unknown_options': True, 'allow_extra_args': True})
@click.argument('tokens', nargs=-1)
@click.pass_context
def run_dev(ctx: click.Context, tokens: tuple[str, ...]) -> None:
    runner = BasicRunner(ctx.obj['config'])
    actions = _parse_dev_tokens(list(tokens))

    for index, (action, payload) in enumerate(actions, start=1):
        match action:
            case 'file': runner.execute(payload.read_text(encoding='utf-8'), str(payload))
            case 'command': runner.execute(payload, f'<INPUT_{index}>', show_result=True)
            case 'repl': runner.repl()

    if not actions:
        runner.repl()
    ctx.exit(runner.finalize())


@cli.command('run-repl')
@click.pass_context
def run_repl(ctx: click.Context) -> None:
    runner = BasicRunner(ctx.obj['config'])
    runner.repl()
    ctx.exit(runner.finalize())


@cli.command('list-builtins')
@click.pass_context
def list_builtins(ctx: click.Context) -> None:
    runner = BasicRunner(ctx.obj['config'])
    for name, arity in runner.runtime.list_builtins().items():
        click.echo(f"{name:<10} {'*' if arity < 0 else arity}")
    ctx.exit(runner.finalize())


_COMMANDS = ('run-file', 'run-dev', 'run-repl', 'list-builtins')
_GLOBAL_FLAGS = ('--ignore', '--stats', '--plain', '-i', '-p')
_GLOBAL_VALUES = ('--line-ending', '--ext')


def _split_global_options(args: list[str]) -> tuple[list[str], list[str]]:
    g, r, index = [], [], 0
    while index < len(args):
        t = args[index]
        if t in _GLOBAL_FLAGS or (t.startswith('-v') and set(t[1:]) == {'v'}) or t == '--verbose':
            g.append(t)
        elif t in _GLOBAL_VALUES and index + 1 < len(args):
            g.extend(args[index:index+2])
            index += 1
        elif any(t.startswith(o + '=') for o in _GLOBAL_VALUES):
            g.append(t)
        else:
            r.append(t)
        index += 1
    return g, r


def main(argv: list[str] | None = None) -> None:
    g, r = _split_global_options(list(sys.argv[1:] if argv is None else argv))

    if len(r) == 0:
        # No args: if stdin has data, treat as file '-', else REPL
        cmd, tail = ('run-file', ['-']) if not sys.stdin.isatty() else ('run-repl', [])
    elif r[0] in _COMMANDS:
        cmd, tail = r[0], r[1:]
    elif r == ['-'] or (len(r) == 1 and not r[0].startswith('-') and Path(r[0]).is_file()):
        cmd, tail = 'run-file', r
    else:
        cmd, tail = 'run-dev', r

    cli.main(args=[*g, cmd, *tail], prog_name='basicfl')


if __name__ == "__main__":
    main()
