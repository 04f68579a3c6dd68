"""
Belalang Language Interpreter

This is the main entry point for the Belalang interpreter.

Workflow:
1. The source script is read from the file specified on the command line.
2. The Lexer tokenizes the source code into meaningful tokens.
3. The Parser processes tokens into an AST following the language grammar.
4. The Evaluator walks the AST, evaluating expressions and executing statements.

Environment:
    BELADEBUG       Log to stderr at DEBUG level and dump tokens and AST.
    BELA_MAX_DEPTH  Override the parser and evaluator nesting limits.
"""
import logging
import os
import sys

from belalang.evaluator import DEFAULT_MAX_DEPTH, Evaluator
from belalang.exceptions import EvaluatorError, ParserErrors
from belalang.lexer import tokenize
from belalang.parser import Parser

logger = logging.getLogger("bela")

# Each nested Belalang call costs several Python frames.
RECURSION_LIMIT = 20000


def print_usage():
    """
    Print usage.
    """
    print()
    print("Belalang Language Interpreter")
    print()
    print("Usage:")
    print("    bela <script.bl>")
    print()
    print("Arguments:")
    print("    <script.bl>")
    print("        Path to a Belalang source file to execute.")
    print()
    print("Example:")
    print("    bela hello.bl")
    print()
    print("Or run with no arguments to enter interactive mode (REPL).")
    print()
    print("Options:")
    print("    -h, --help")
    print("        Show this help message and exit.")


def debug_enabled() -> bool:
    return bool(os.environ.get('BELADEBUG'))


def max_depth() -> int:
    """
    Nesting limit from BELA_MAX_DEPTH, falling back to the default.
    """
    value = os.environ.get('BELA_MAX_DEPTH')
    if not value:
        return DEFAULT_MAX_DEPTH
    try:
        depth = int(value)
    except ValueError:
        logger.warning("ignoring BELA_MAX_DEPTH=%r: not an integer", value)
        return DEFAULT_MAX_DEPTH
    if depth < 1:
        logger.warning("ignoring BELA_MAX_DEPTH=%r: must be positive", value)
        return DEFAULT_MAX_DEPTH
    return depth


def debug_print_tokens_ast(tokens, ast):
    """
    Print tokenized source and AST
    """
    print("\nTokens:\n")
    print(tokens)
    print("\nAST:\n")
    print(ast)
    print(" ")


def run_script(script_name: str) -> int:
    """
    Run a Belalang script.

    Returns:
        int: Exit status, 1 when reading, parsing or evaluation failed.
    """
    try:
        with open(script_name, "r", encoding="utf-8") as f:
            code = f.read()
    except OSError as e:
        print(f"{type(e).__name__}: {e}")
        return 1

    depth = max_depth()
    try:
        ast = Parser(code, script_name, depth).parse_program()
        if debug_enabled():
            debug_print_tokens_ast(tokenize(code), ast)
        Evaluator(file=script_name, max_depth=depth).evaluate(ast)
    except (ParserErrors, EvaluatorError) as e:
        print(f"{type(e).__name__}: {e}")
        return 1
    return 0


def run_repl():
    """
    Run the interactive REPL
    """
    print("Belalang Language Interpreter - REPL")
    print("Type `exit` or `quit` to leave.")
    depth = max_depth()
    evaluator = Evaluator(file="<stdin>", max_depth=depth)
    buffer: list[str] = []
    while True:
        try:
            prompt = ">>> " if not buffer else "... "
            line = input(prompt)
            if not buffer and line.strip() in {"exit", "quit"}:
                break
            buffer.append(line)
            source = "\n".join(buffer)
            try:
                ast = Parser(source, "<stdin>", depth).parse_program()
            except ParserErrors as e:
                # Input stopped mid-construct; keep reading.
                if e.incomplete:
                    continue
                for error in e.errors:
                    print(error)
                buffer.clear()
                continue
            buffer.clear()

            if debug_enabled():
                debug_print_tokens_ast(tokenize(source), ast)
            try:
                result = evaluator.evaluate(ast)
            except EvaluatorError as e:
                print(f"{type(e).__name__}: {e}")
                continue
            if result.type_name != 'Null':
                print(result.inspect())
        except KeyboardInterrupt:
            print("\nInterrupted.")
            break
        except EOFError:
            print()
            break


def main(argv: list[str]) -> int:
    """
    Entry point for the CLI.

    Behaviour:
    - No arguments: enter the REPL.
    - One argument equal to ``-h`` or ``--help``: print usage and exit.
    - One argument that is not an option: treat it as the path to a script and run it.
    - Any other pattern: print usage and return a non-zero exit code.
    """
    if debug_enabled():
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(name)s %(levelname)s: %(message)s",
        )
    sys.setrecursionlimit(max(sys.getrecursionlimit(), RECURSION_LIMIT))

    args = argv[1:]
    if not args:
        run_repl()
        return 0
    if len(args) == 1 and args[0] in ('-h', '--help'):
        print_usage()
        return 0
    if len(args) == 1:
        return run_script(args[0])
    print_usage()
    return 1


def run():
    """
    Console script entry point.
    """
    sys.exit(main(sys.argv))


if __name__ == "__main__":
    run()
