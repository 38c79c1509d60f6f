"""tsgen command line: serialized IR in, TypeScript declarations out."""

from __future__ import annotations

import json
import logging
import sys

from .backend import TaggingError, TypeMappingError, emit_typescript
from .backend.lowering import lower_all
from .frontend import LoadError, load_containers
from .serialize import serialize

logger = logging.getLogger(__name__)

PHASES: list[str] = [
    "load",
    "lower",
]

USAGE: str = """\
tsgen [OPTIONS] [INPUT] [-o OUTPUT]

Translate type definitions (JSON IR) into TypeScript declarations.
Reads INPUT, or stdin when INPUT is omitted.

Options:
  --stop-at PHASE     Stop after phase and print it as JSON: load, lower
  -o, --output FILE   Write output to FILE instead of stdout
  -v, --verbose       Log pipeline progress to stderr
  -h, --help          Show this help message
"""


def read_source(input_file: str | None) -> tuple[str, int]:
    """Read source from file or stdin. Returns (source, exit_code) where exit_code 0 means OK."""
    if input_file is not None:
        try:
            with open(input_file, "rb") as f:
                raw = f.read()
        except OSError:
            print("error: cannot open '" + input_file + "'", file=sys.stderr)
            return ("", 1)
    else:
        raw = sys.stdin.buffer.read()
    try:
        source = raw.decode("utf-8")
    except ValueError:
        print("error: invalid utf-8 in input", file=sys.stderr)
        return ("", 1)
    return (source, 0)


def write_output(output: str, output_file: str | None) -> int:
    """Write output to file or stdout. Returns 0 on success, 1 on error."""
    if output_file is not None:
        try:
            with open(output_file, "w", encoding="utf-8") as f:
                f.write(output)
        except OSError:
            print("error: cannot write '" + output_file + "'", file=sys.stderr)
            return 1
        return 0
    sys.stdout.write(output)
    return 0


def to_json(obj: object) -> str:
    """Serialize a tree to pretty-printed JSON, newline-terminated."""
    return json.dumps(serialize(obj), indent=2) + "\n"


def run_pipeline(source: str, stop_at: str | None) -> tuple[int, str]:
    """Run load -> lower -> emit. Returns (exit_code, output)."""
    try:
        containers = load_containers(source)
    except LoadError as e:
        print("error: " + str(e), file=sys.stderr)
        return (1, "")
    if stop_at == "load":
        return (0, to_json(containers))
    try:
        definitions = lower_all(containers)
    except (TypeMappingError, TaggingError) as e:
        print("error: " + str(e), file=sys.stderr)
        return (1, "")
    if stop_at == "lower":
        return (0, to_json(definitions))
    logger.debug("emitting %d definition(s)", len(definitions))
    return (0, emit_typescript(definitions))


def parse_args(args: list[str]) -> tuple[str | None, bool, str | None, str | None]:
    """Parse command-line arguments. Returns (stop_at, verbose, input_file, output_file)."""
    stop_at: str | None = None
    verbose = False
    input_file: str | None = None
    output_file: str | None = None
    i = 0
    while i < len(args):
        arg = args[i]
        if arg == "--help" or arg == "-h":
            print(USAGE, end="")
            sys.exit(0)
        elif arg == "--stop-at":
            if i + 1 >= len(args):
                print("error: --stop-at requires an argument", file=sys.stderr)
                sys.exit(2)
            stop_at = args[i + 1]
            i += 2
        elif arg == "-o" or arg == "--output":
            if i + 1 >= len(args):
                print("error: " + arg + " requires an argument", file=sys.stderr)
                sys.exit(2)
            output_file = args[i + 1]
            i += 2
        elif arg == "-v" or arg == "--verbose":
            verbose = True
            i += 1
        elif arg.startswith("-") and arg != "-":
            print("error: unknown flag '" + arg + "'", file=sys.stderr)
            sys.exit(2)
        else:
            if input_file is not None:
                print("error: unexpected argument '" + arg + "'", file=sys.stderr)
                sys.exit(2)
            if arg != "-":
                input_file = arg
            i += 1
    if stop_at is not None and stop_at not in PHASES:
        print("error: unknown phase '" + stop_at + "'", file=sys.stderr)
        sys.exit(2)
    return (stop_at, verbose, input_file, output_file)


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = argv if argv is not None else sys.argv[1:]
    stop_at, verbose, input_file, output_file = parse_args(args)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    source, err = read_source(input_file)
    if err != 0:
        return err
    if len(source.strip()) == 0:
        print("error: no input provided", file=sys.stderr)
        return 2
    exit_code, output = run_pipeline(source, stop_at)
    if exit_code != 0:
        return exit_code
    return write_output(output, output_file)


if __name__ == "__main__":
    sys.exit(main())
