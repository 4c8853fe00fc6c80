## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘
#
# fluxo — Line-oriented scripting language for driving desktop window records.
#

import os
import sys
import time
import traceback
from dataclasses import dataclass

import click

from .errors import FluxoError, FluxoParseError, FluxoNameError, FluxoTypeError
from .parser import format_parse_error_context
from .formatting import write_without_ansi
from .windows import load_windows
from .runtime import Runtime, NO_OUTPUT


@dataclass(frozen=True)
class RuntimeConfig:
    verbose: int
    ignore: bool
    stats: bool
    plain: bool
    windows: str | None


@dataclass
class ExecutionItem:
    source: str
    filename: str


class FluxoRunner:
    def __init__(self, config: RuntimeConfig):
        self.verbose = config.verbose
        self.ignore = config.ignore
        self.stats_enabled = config.stats
        self.plain = config.plain

        if self.plain:
            writer = write_without_ansi(sys.stdout.write)
            sys.stdout.write, sys.stderr.write = writer, writer

        windows_path = config.windows or os.environ.get('FLUXO_WINDOWS')
        self.runtime = Runtime(load_windows(windows_path) if windows_path else [])
        self.total_stats = {'statements': 0, 'start': time.time()} if self.stats_enabled else None
        self.failure = False
        self.executed_items = 0

    def _maybe_fatal_error(self, message: str, detail: str, exc_type: str = None, context: str = '', is_repl: bool = False) -> None:
        header = detail if not exc_type else f"{detail} (Exception: \033[33m{exc_type}\033[0m)"
        print(f'\033[30;43m {message} \033[0m {header}\n{context}', file=sys.stderr)
        if is_repl: return
        self.failure = True
        if not self.ignore: sys.exit(1)

    def _source_context(self, exc: FluxoError, filename: str, source: str) -> str:
        if exc.lineno is None: return ''
        return format_parse_error_context(filename, exc.lineno, exc.fluxo_token, source=source)

    def _handle_exception(self, exc, filename: str, source: str, is_repl: bool = False) -> None:
        if isinstance(exc, FluxoParseError):
            context = self._source_context(exc, filename, source)
            context += f"\n\033[90m{str(exc).replace(chr(10), ' ').replace(chr(9), ' ')}\033[0m\n"
            self._maybe_fatal_error("SYNTAX ERROR.", f"Parsing `\033[97m{filename}\033[0m` caused a problem!", type(exc).__name__, context, is_repl)
        elif isinstance(exc, FluxoNameError):
            detail = f"Window `\033[1;97m{exc.fluxo_token}\033[0m` from `\033[97m{filename}\033[0m` was not found in registry!"
            self._maybe_fatal_error("NAME ERROR.", detail, type(exc).__name__, '', is_repl)
        elif isinstance(exc, FluxoTypeError):
            detail = f"Name `\033[1;97m{exc.fluxo_token}\033[0m` from `\033[97m{filename}\033[0m` is not a window object!"
            self._maybe_fatal_error("TYPE ERROR.", detail, type(exc).__name__, '', is_repl)
        else:
            detail = f"Executing `\033[97m{filename}\033[0m` caused an error!"
            context = ''.join(traceback.format_exception(exc, chain=False))
            self._maybe_fatal_error("RUNTIME ERROR.", detail, type(exc).__name__, context, is_repl)

    def execute_items(self, items: list[ExecutionItem]) -> None:
        for item in items:
            self._execute_script(item.source, item.filename)

    def _execute_script(self, source: str, filename: str, is_repl: bool = False) -> None:
        try:
            output = self.runtime.run(source, filename=filename, verbosity=self.verbose, stats=self.total_stats)
            print('\n'.join(output) or NO_OUTPUT)
        except (FluxoError, Exception) as exc:
            self._handle_exception(exc, filename, source, is_repl=is_repl)
        else:
            self.executed_items += 1

    def repl(self) -> None:
        if sys.platform != "win32": import readline

        print('fluxo - Window scripting REPL; finish a script with an empty line, Ctrl+C to exit.')
        source = ""

        while True:
            try:
                prompt = "\033[36m<<< \033[0m" if not source else "\033[36m... \033[0m"
                line = input(prompt)
                if not source and line.strip() in ('quit', 'exit'): break
                if line.strip():
                    source += line + "\n"
                    continue
                if source:
                    self._execute_script(source, '<REPL>', is_repl=True)
                    source = ""

            except (KeyboardInterrupt, EOFError):
                print(""); break

    def finalize(self) -> int:
        if self.total_stats and self.executed_items > 0:
            elapsed_time = time.time() - self.total_stats['start']
            print(f"\n\033[97m\033[48;5;30m STATISTICS. \033[0m")
            print(f"stmt\t\033[97m{self.total_stats['statements']:,}\033[0m")
            print(f"time\t\033[97m{elapsed_time:.3f}s\033[0m")
        return 1 if self.failure else 0


@click.group(invoke_without_command=True)
@click.option('--verbose', '-v', default=0, count=True, help='Trace statements as the interpreter dispatches them.')
@click.option('--ignore', '-i', is_flag=True, help='Ignore errors and continue executing.')
@click.option('--stats', is_flag=True, help='Display execution statistics (e.g., number of statements).')
@click.option('--plain', '-p', is_flag=True, help='Strip ANSI color codes and redirect stderr to stdout.')
@click.option('--windows', '-w', type=click.Path(exists=True, dir_okay=False), default=None,
              help='JSON file with the window records scripts can access.')
@click.pass_context
def cli(ctx: click.Context, verbose: int, ignore: bool, stats: bool, plain: bool, windows: str | None) -> None:
    ctx.ensure_object(dict)
    ctx.obj['config'] = RuntimeConfig(verbose=verbose, ignore=ignore, stats=stats, plain=plain, windows=windows)


@cli.command('run-file')
@click.argument('scripts', nargs=-1, required=True, type=click.File('r', encoding='utf-8'))
@click.pass_context
def run_file(ctx: click.Context, scripts) -> None:
    runner = FluxoRunner(ctx.obj['config'])
    runner.execute_items([ExecutionItem(s.read(), s.name or '<STDIN>') for s in scripts])
    ctx.exit(runner.finalize())


@cli.command('run-repl')
@click.pass_context
def run_repl(ctx: click.Context) -> None:
    runner = FluxoRunner(ctx.obj['config'])
    runner.repl()
    ctx.exit(runner.finalize())


def main(argv: list[str] | None = None) -> None:
    a = list(sys.argv[1:] if argv is None else argv)
    g, r, i = [], [], 0
    while i < len(a):
        t = a[i]
        if t in ('--windows', '-w') and i + 1 < len(a):
            g += [t, a[i+1]]; i += 2; continue
        if t in ('--ignore', '--stats', '--plain', '--verbose', '-i', '-p') or t.startswith('-v') or t.startswith('--windows='):
            g.append(t)
        else:
            r.append(t)
        i += 1

    if r and r[0] in ('run-file', 'run-repl'):
        cmd, tail = r[0], r[1:]
    elif len(r) == 0:
        # No args: if stdin has data, treat as file '-', else REPL
        cmd, tail = ('run-file', ['-']) if not sys.stdin.isatty() else ('run-repl', [])
    elif '--repl' in r:
        cmd, tail = 'run-repl', []
    else:
        cmd, tail = 'run-file', r

    cli.main(args=[*g, cmd, *tail], prog_name='fluxo')


if __name__ == "__main__":
    main()
