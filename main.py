"""
Monkey Programming Language - Main Entry Point
Script runner, debugging views and interactive read-eval-print loop
"""

import sys
import argparse
from pathlib import Path
import os

# Readline support for history and auto-completion
try:
  import readline
  READLINE_AVAILABLE = True
except ImportError:
  READLINE_AVAILABLE = False

from parsing import create_parser, create_debug_parser, MonkeyParser
from interpreter import create_interpreter, create_debug_interpreter, MonkeyInterpreter
from error_handling import MonkeyParseError, MonkeyRuntimeError
from syntax_tree import pretty_print_ast
from lexing import KEYWORDS


VERSION = "Monkey v1.0.0 (Tree-walking Interpreter)"
PROMPT = ">> "
HISTORY_FILE = "~/.monkey_history"

REPL_COMMANDS = [":tokens", ":parse", ":env", ":help", "exit"]


def create_arg_parser() -> argparse.ArgumentParser:
  """Create command line argument parser"""
  parser = argparse.ArgumentParser(
      description='Monkey Programming Language - integers, booleans, closures',
      formatter_class=argparse.RawDescriptionHelpFormatter,
      epilog="""
Examples:
  %(prog)s script.mk              # Run a Monkey script
  %(prog)s -i                     # Interactive mode
  %(prog)s --tokens script.mk     # Show the token stream
  %(prog)s --parse script.mk      # Parse and show the AST
  %(prog)s --debug script.mk      # Run with parser and evaluator tracing
        """
  )

  parser.add_argument(
      'script',
      nargs='?',
      help='Monkey script file to execute'
  )

  parser.add_argument(
      '-i', '--interactive',
      action='store_true',
      help='Start interactive mode'
  )

  parser.add_argument(
      '--tokens',
      action='store_true',
      help='Tokenize file and show the tokens (for debugging)'
  )

  parser.add_argument(
      '--parse',
      action='store_true',
      help='Parse file and show the AST (for debugging)'
  )

  parser.add_argument(
      '--debug',
      action='store_true',
      help='Enable debug output for all stages'
  )

  parser.add_argument(
      '--version',
      action='version',
      version=VERSION
  )

  return parser


def read_script(script_path: str) -> str:
  """Read a script, exiting with a hint when it cannot be read"""
  try:
    with open(script_path, 'r', encoding='utf-8') as f:
      return f.read()
  except FileNotFoundError:
    print(f"Error: Script file '{script_path}' not found")
    print("  Hint: Check the file path and make sure the file exists")
    sys.exit(1)
  except PermissionError:
    print(f"Error: Permission denied reading '{script_path}'")
    print("  Hint: Make sure you have read permissions for this file")
    sys.exit(1)
  except UnicodeDecodeError as e:
    print(f"Error: Cannot decode file '{script_path}': {e}")
    print("  Hint: Make sure the file is a text file with UTF-8 encoding")
    sys.exit(1)


def tokenize_file(script_path: str, debug: bool = False) -> None:
  """Tokenize a Monkey script file and show the tokens"""
  parser = create_debug_parser() if debug else create_parser()
  content = read_script(script_path)

  tokens = parser.tokenize(content, script_path)
  print(f"{len(tokens)} tokens:")
  for token in tokens:
    print(f"  {token.span.start_line}:{token.span.start_col}\t{token}")


def parse_file(script_path: str, debug: bool = False) -> None:
  """Parse a Monkey script file and show the AST"""
  parser = create_debug_parser() if debug else create_parser()
  content = read_script(script_path)

  try:
    program = parser.parse_string(content, script_path)
  except MonkeyParseError as e:
    print(f"Parse error in '{script_path}':\n{e}")
    sys.exit(1)

  print(f"Parsed {len(program.statements)} top-level statements:")
  print("=" * 50)
  print(pretty_print_ast(program))
  print(f"Source form: {program}")


def run_script_file(script_path: str, debug: bool = False) -> None:
  """Run a Monkey script file with full interpretation"""
  parser = create_debug_parser() if debug else create_parser()
  interpreter = create_debug_interpreter() if debug else create_interpreter()
  content = read_script(script_path)

  try:
    program = parser.parse_string(content, script_path)
    if debug:
      print(f"Parsed {len(program.statements)} statements")

    result = interpreter.interpret_program(program)
    if result is not None:
      print(result.inspect())

  except MonkeyParseError as e:
    print(f"Parse error in '{script_path}':\n{e}")
    sys.exit(1)
  except MonkeyRuntimeError as e:
    print(f"\n{'='*70}")
    print(f"Runtime Error in '{script_path}'")
    print(f"{'='*70}")
    print(f"\nError: {e.message}")

    if debug:
      print("\nGlobal environment at error:")
      show_environment(interpreter)

    print(f"\n{'='*70}\n")
    sys.exit(1)


def setup_readline():
  """Setup readline with history and auto-completion"""
  if not READLINE_AVAILABLE:
    return

  history_file = os.path.expanduser(HISTORY_FILE)
  try:
    readline.read_history_file(history_file)
  except OSError:
    pass  # First time, no history yet, or permission denied

  readline.set_history_length(1000)

  completions = sorted(KEYWORDS) + REPL_COMMANDS

  def completer(text, state):
    options = [cmd for cmd in completions if cmd.startswith(text)]
    if state < len(options):
      return options[state]
    return None

  readline.set_completer(completer)
  readline.parse_and_bind("tab: complete")

  import atexit
  atexit.register(readline.write_history_file, history_file)


def show_environment(interpreter: MonkeyInterpreter) -> None:
  bindings = interpreter.global_env.bindings()
  if not bindings:
    print("  (no user-defined bindings)")
    return
  for name, value in bindings.items():
    val_str = value.inspect().replace('\n', ' ')
    if len(val_str) > 60:
      val_str = val_str[:57] + "..."
    print(f"  {name} = {val_str}")


def show_help() -> None:
  print("REPL Commands:")
  print("  :tokens <src>     - Show the token stream")
  print("  :parse <src>      - Show the parsed AST")
  print("  :env              - Show current bindings")
  print("  :help             - Show this help")
  print("  exit              - Exit REPL")
  print()
  print("Language features:")
  print("  let x = 5;                        - Binding")
  print("  let add = fn(a, b) { a + b };     - Function literal")
  print("  add(1, 2 * 3)                     - Call")
  print("  if (x > 1) { x } else { 0 }       - Conditional")
  print("  return x;                         - Early return")


def handle_input(code: str, parser: MonkeyParser, interpreter: MonkeyInterpreter) -> bool:
  """
  Handle one line of REPL input.
  Returns False when the session should end.
  """
  stripped = code.strip()

  if stripped == "exit":
    return False

  if not stripped:
    return True

  if stripped.startswith(":tokens "):
    for token in parser.tokenize(stripped[len(":tokens "):]):
      print(f"  {token}")
    return True

  if stripped.startswith(":parse "):
    try:
      program = parser.parse_string(stripped[len(":parse "):])
      print(pretty_print_ast(program), end="")
    except MonkeyParseError as e:
      print(f"Parse error: {e}")
    return True

  if stripped == ":env":
    print("Current environment:")
    show_environment(interpreter)
    return True

  if stripped == ":help":
    show_help()
    return True

  try:
    program = parser.parse_string(code)
  except MonkeyParseError as e:
    print(f"Parse error: {e}")
    return True

  result = interpreter.evaluate(program)
  if result is not None:
    print(result.inspect())
  return True


def run_interactive_mode(debug: bool = False) -> None:
  """Run Monkey in interactive mode with one persistent environment"""
  print(f"{VERSION} - Interactive Mode")
  print("Type 'exit' to quit, ':help' for commands")
  if READLINE_AVAILABLE:
    print("Readline enabled: Use ↑/↓ for history, Tab for completion")
  if debug:
    print("Debug mode enabled")
  print()

  setup_readline()

  parser = create_debug_parser() if debug else create_parser()
  interpreter = create_debug_interpreter() if debug else create_interpreter()

  while True:
    try:
      code = input(PROMPT)
      if not handle_input(code, parser, interpreter):
        break

    except KeyboardInterrupt:
      print("\nGoodbye!")
      break
    except EOFError:
      print("\nGoodbye!")
      break
    except Exception as e:
      print(f"Unexpected error: {e}")
      if debug:
        import traceback
        traceback.print_exc()
      print("  Hint: If this keeps happening, try restarting or use --debug for more details")


def show_language_info() -> None:
  """Show Monkey language information"""
  print("Monkey Programming Language")
  print("=" * 50)
  print("A small dynamically typed expression language with:")
  print("• Integers and booleans")
  print("• Prefix and infix operators")
  print("• if/else expressions")
  print("• First-class functions and closures")
  print()


def main(argv=None) -> None:
  """Main entry point for Monkey"""
  if argv is None:
    argv = sys.argv[1:]

  arg_parser = create_arg_parser()
  args = arg_parser.parse_args(argv)

  if not argv:
    # No arguments - show info and start interactive mode
    show_language_info()
    run_interactive_mode(debug=False)
    return

  if args.script:
    if not Path(args.script).exists():
      print(f"Error: Script file '{args.script}' does not exist")
      sys.exit(1)

    if args.tokens:
      tokenize_file(args.script, debug=args.debug)
    elif args.parse:
      parse_file(args.script, debug=args.debug)
    else:
      run_script_file(args.script, debug=args.debug)

  elif args.interactive:
    run_interactive_mode(debug=args.debug)

  else:
    arg_parser.print_help()
    print()
    show_language_info()


if __name__ == "__main__":
  main()
