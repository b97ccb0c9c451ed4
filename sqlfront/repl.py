"""
REPL (Read-Eval-Print Loop) for interactive SQL parsing.

Parses each statement typed at the prompt and prints its canonical SQL, its
syntax tree or its tokens. Also usable non-interactively: ``sqlfront -e SQL``.
"""

import argparse
import logging
import select
import sys
from typing import Callable, Optional

from .formatter import format_error, format_statement, format_tokens, format_tree
from .parser.options import DecimalLiteralTreatment, ParsingOptions
from .parser.parser import SqlParser
from .parser.splitter import split_statements
from .utils.exceptions import SQLFrontError, SQLSyntaxError

logger = logging.getLogger(__name__)

MODES = ('format', 'ast', 'tokens')


def has_pending_input():
    """Check if there's input waiting in stdin (indicates paste)."""
    if not sys.stdin.isatty():
        return True
    try:
        r, _, _ = select.select([sys.stdin], [], [], 0)
        return bool(r)
    except (ValueError, OSError, TypeError):
        return False


def read_line_raw(prompt, suppress_if_pending=False):
    """
    Read a line using raw stdin to avoid readline interference.

    This prevents issues with paste operations where prompts
    can get mixed into the input buffer.
    """
    # Suppress prompt during paste operations
    if suppress_if_pending and has_pending_input():
        prompt = ""
    sys.stdout.write(prompt)
    sys.stdout.flush()
    line = sys.stdin.readline()
    if not line:  # EOF
        raise EOFError()
    return line.rstrip('\n\r')


def print_banner(mode: str):
    """Print welcome banner."""
    print("=" * 60)
    print("  sqlfront - Interactive SQL Parser")
    print("=" * 60)
    print("Type SQL statements or special commands:")
    print("  Multi-line input supported - end with semicolon (;)")
    print("  .format / .ast / .tokens - Choose what is printed")
    print("  .help     - Show help")
    print("  .exit or .quit - Exit REPL")
    print(f"Output mode: {mode}")
    print("=" * 60)
    print()


def print_help():
    """Print help message."""
    print("\n--- Help ---")
    print("Any statement of the dialect is accepted, for example:")
    print("  SELECT a, count(*) FROM t WHERE b > 1 GROUP BY a ORDER BY 2 DESC LIMIT 10")
    print("  CREATE TABLE t (x bigint, y varchar COMMENT 'text') WITH (format = 'ORC')")
    print("  CREATE TABLE t AS SELECT * FROM u WITH NO DATA")
    print("  INSERT INTO t (x, y) VALUES (1, 'a')")
    print("  EXPLAIN (TYPE DISTRIBUTED) SELECT * FROM t")
    print("  SHOW TABLES FROM catalog.schema LIKE 'a%'")
    print("\nSpecial Commands:")
    print("  .format   - Print canonical SQL (default)")
    print("  .ast      - Print the syntax tree")
    print("  .tokens   - Print the token stream")
    print("  .mode     - Show the current output mode")
    print("  .help     - Show this help")
    print("  .exit / .quit - Exit REPL")
    print()


def render(sql: str, parser: SqlParser, mode: str) -> str:
    """
    Parse one statement and render it in the given output mode.

    Raises:
        SQLSyntaxError: If the statement does not parse
    """
    if mode == 'tokens':
        return format_tokens(parser.tokenize(sql))
    statement = parser.parse_statement(sql)
    if mode == 'ast':
        return format_tree(statement)
    return format_statement(statement)


def run_statements(sql: str, parser: SqlParser, mode: str, out: Callable[[str], None] = print) -> bool:
    """
    Parse every statement in ``sql`` and print the results.

    Returns:
        True if every statement parsed
    """
    ok = True
    for statement in split_statements(sql):
        try:
            out(render(statement, parser, mode))
        except SQLSyntaxError as e:
            logger.debug("Rejected statement: %s", statement)
            out(format_error(e, statement))
            ok = False
    return ok


def handle_special_command(command: str, state: dict) -> bool:
    """
    Handle special REPL commands (starting with .).

    Args:
        command: Command string
        state: Mutable REPL settings (currently the output mode)

    Returns:
        True if should continue REPL, False to exit
    """
    command = command.strip().rstrip(';').lower()

    if command in ['.exit', '.quit']:
        print("Goodbye!")
        return False

    elif command == '.help':
        print_help()

    elif command[1:] in MODES:
        state['mode'] = command[1:]
        print(f"Output mode: {state['mode']}\n")

    elif command == '.mode':
        print(f"Output mode: {state['mode']}\n")

    else:
        print(f"Unknown command: {command}")
        print("Type .help for available commands\n")

    return True


def repl(parser: Optional[SqlParser] = None, mode: str = 'format'):
    """
    Run the interactive REPL.

    Reads SQL statements, parses them, and displays the results.
    Supports multi-line input - continues reading until semicolon is found.
    """
    parser = parser or SqlParser()
    state = {'mode': mode}
    print_banner(mode)

    # Main loop
    while True:
        try:
            # Read command (possibly multi-line)
            sql_lines = []
            is_continuation = False

            while True:
                try:
                    if is_continuation:
                        # Suppress continuation prompt during paste
                        line = read_line_raw("    -> ", suppress_if_pending=True).rstrip()
                    else:
                        line = read_line_raw("sql> ").rstrip()
                except EOFError:
                    print("\nGoodbye!")
                    return

                # Accumulate non-empty lines
                if line.strip():
                    sql_lines.append(line)

                    # Check if this is a special command
                    if not is_continuation and line.lstrip().startswith('.'):
                        break

                    # Check if statement is complete (ends with semicolon)
                    if line.endswith(';'):
                        break

                    # Continue reading
                    is_continuation = True
                else:
                    # Empty line with no accumulated content
                    if not sql_lines:
                        break
                    # Empty line in middle of statement, continue
                    is_continuation = True

            # Keep line breaks so error positions match the input
            sql = '\n'.join(sql_lines)

            if not sql:
                continue

            # Handle special commands
            if sql.lstrip().startswith('.'):
                if not handle_special_command(sql, state):
                    break
                continue

            run_statements(sql, parser, state['mode'])
            print()

        except KeyboardInterrupt:
            print("\n\nInterrupted. Type .exit to quit.\n")
            continue
        except SQLFrontError as e:
            print(f"Error: {e}\n")


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser."""
    parser = argparse.ArgumentParser(
        prog="sqlfront",
        description="sqlfront - SQL parser for an analytic query dialect",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  sqlfront                                   # Interactive mode
  sqlfront -e "SELECT 1 + 2 * 3"
  sqlfront -e "SELECT a FROM t; SHOW TABLES" --mode ast
        """,
    )
    parser.add_argument("--execute", "-e", metavar="SQL", help="Parse the given SQL and exit")
    parser.add_argument("--mode", "-m", default="format", choices=MODES, help="Output mode")
    parser.add_argument(
        "--max-depth", type=int, default=ParsingOptions.max_depth,
        help=f"Maximum nesting depth (default: {ParsingOptions.max_depth})"
    )
    parser.add_argument(
        "--decimal-literals", default=DecimalLiteralTreatment.AS_DOUBLE.value,
        choices=[t.value for t in DecimalLiteralTreatment],
        help="How decimal literals such as 1.5 are represented"
    )
    parser.add_argument(
        "--log-level", default="warning",
        choices=["debug", "info", "warning", "error"],
        help="Logging level"
    )
    return parser


def main(argv=None) -> int:
    """Main entry point."""
    args = create_parser().parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper()),
        format="%(asctime)s %(name)s %(levelname)s %(message)s"
    )

    try:
        options = ParsingOptions(
            max_depth=args.max_depth,
            decimal_literal_treatment=DecimalLiteralTreatment(args.decimal_literals)
        )
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    parser = SqlParser(options)

    if args.execute is not None:
        return 0 if run_statements(args.execute, parser, args.mode) else 1

    repl(parser, args.mode)
    return 0


# Entry point for running as module
if __name__ == "__main__":
    sys.exit(main())
