"""
arrayproto.cli - arrayproto Command Line Interface

This module runs the iteration operations on array literals from the shell:

- arrayproto map LITERAL EXPR        Map EXPR over the array
- arrayproto for-each LITERAL EXPR   Print EXPR for each present element
- arrayproto filter LITERAL EXPR     Keep the elements for which EXPR is truthy
- arrayproto reduce LITERAL EXPR     Fold the array with EXPR
- arrayproto demo                    Run the operations on sample arrays

EXPR is a Python expression over the names value, index and array. reduce
adds acc, and map/for-each add this when --this is given.
"""

import argparse
import builtins
import sys
import traceback
from typing import Any, Callable, Optional

from arrayproto.reader import format_array, format_value, read_array, read_literal
from arrayproto.runtime import (
    HOLE,
    SparseArray,
    array_filter,
    array_for_each,
    array_map,
    array_reduce,
)
from arrayproto.runtime.types import _MISSING

ELEMENT_PARAMS = ("value", "index", "array")


def compile_callback(expr: str, params: tuple[str, ...]) -> Callable:
    """Compile EXPR into a function of params."""
    env = {
        "__name__": "__main__",
        "__builtins__": builtins,
        "HOLE": HOLE,
    }
    code = compile(f"lambda {', '.join(params)}: ({expr})", "<expression>", "eval")
    return eval(code, env, env)


def _read_this(args: argparse.Namespace) -> Any:
    if args.this is None:
        return None
    return read_literal(args.this)


def _params_for(this_arg: Any) -> tuple[str, ...]:
    if this_arg is None:
        return ELEMENT_PARAMS
    return ("this",) + ELEMENT_PARAMS


def _report(e: Exception, args: argparse.Namespace) -> int:
    print(f"Error: {e}", file=sys.stderr)
    if getattr(args, "traceback", False):
        traceback.print_exc(file=sys.stderr)
    return 1


def cmd_map(args: argparse.Namespace) -> int:
    """Print the mapped array."""
    try:
        arr = read_array(args.literal)
        this_arg = _read_this(args)
        fn = compile_callback(args.expr, _params_for(this_arg))
        print(format_array(array_map(arr, fn, this_arg)))
    except Exception as e:
        return _report(e, args)
    return 0


def cmd_for_each(args: argparse.Namespace) -> int:
    """Print EXPR for every present element."""
    try:
        arr = read_array(args.literal)
        this_arg = _read_this(args)
        fn = compile_callback(args.expr, _params_for(this_arg))

        def show(*call_args):
            print(format_value(fn(*call_args)))

        array_for_each(arr, show, this_arg)
    except Exception as e:
        return _report(e, args)
    return 0


def cmd_filter(args: argparse.Namespace) -> int:
    """Print the filtered array."""
    try:
        arr = read_array(args.literal)
        fn = compile_callback(args.expr, ELEMENT_PARAMS)
        print(format_array(array_filter(arr, fn)))
    except Exception as e:
        return _report(e, args)
    return 0


def cmd_reduce(args: argparse.Namespace) -> int:
    """Print the folded value."""
    try:
        arr = read_array(args.literal)
        initial = _MISSING if args.initial is None else read_literal(args.initial)
        fn = compile_callback(args.expr, ("acc",) + ELEMENT_PARAMS)
        print(format_value(array_reduce(arr, fn, initial)))
    except Exception as e:
        return _report(e, args)
    return 0


def cmd_demo(args: argparse.Namespace) -> int:
    """Run each operation on the sample arrays and print what happens."""
    sample = SparseArray([1, 2, HOLE, 4])
    numbers = SparseArray([10, 2, HOLE, 4])

    def log_item(value, index, array):
        print(value, "item")

    print(f"map {format_array(sample)} with a logging callback:")
    result = array_map(sample, log_item)
    print(f"=> {format_array(result)}")
    print("=" * 8)

    print(f"for-each {format_array(sample)} with a logging callback:")
    result = array_for_each(sample, log_item)
    print(f"=> {result!r}")
    print("=" * 8)

    print(f"filter {format_array(numbers)} keeping even values:")
    evens = array_filter(numbers, lambda value, index, array: value % 2 == 0)
    print(f"=> {format_array(evens)}")
    print("=" * 8)

    print(f"reduce {format_array(numbers)} by addition:")
    total = array_reduce(numbers, lambda acc, value, index, array: acc + value)
    print(f"=> {total!r}")
    return 0


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="arrayproto",
        description="arrayproto - JavaScript array iteration semantics for Python",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
examples:
  arrayproto map "[10, 2, , 4]" "value * 2"
  arrayproto filter "[10, 2, , 4]" "value % 2 == 0"
  arrayproto reduce "[10, 2, , 4]" "acc + value"
  arrayproto reduce "[]" "acc + value" --initial 0
  arrayproto map "[1, 2]" "value * this" --this 10
  arrayproto demo
        """,
    )

    parser.add_argument(
        "--traceback",
        action="store_true",
        help="Print the full traceback when a command fails",
    )

    subparsers = parser.add_subparsers(dest="subcommand", help="Available commands")

    # map subcommand
    map_parser = subparsers.add_parser("map", help="Map an expression over an array")
    map_parser.add_argument("literal", help="Array literal, e.g. '[1, 2, , 4]'")
    map_parser.add_argument("expr", help="Expression over value, index, array")
    map_parser.add_argument(
        "--this",
        metavar="LITERAL",
        help="Literal bound as `this` for the expression",
    )

    # for-each subcommand
    for_each_parser = subparsers.add_parser(
        "for-each", help="Print an expression for each present element"
    )
    for_each_parser.add_argument("literal", help="Array literal")
    for_each_parser.add_argument("expr", help="Expression over value, index, array")
    for_each_parser.add_argument(
        "--this",
        metavar="LITERAL",
        help="Literal bound as `this` for the expression",
    )

    # filter subcommand
    filter_parser = subparsers.add_parser(
        "filter", help="Keep the elements for which an expression is truthy"
    )
    filter_parser.add_argument("literal", help="Array literal")
    filter_parser.add_argument("expr", help="Expression over value, index, array")

    # reduce subcommand
    reduce_parser = subparsers.add_parser("reduce", help="Fold an array")
    reduce_parser.add_argument("literal", help="Array literal")
    reduce_parser.add_argument(
        "expr", help="Expression over acc, value, index, array"
    )
    reduce_parser.add_argument(
        "--initial",
        metavar="LITERAL",
        help="Initial accumulator (default: the first present element)",
    )

    # demo subcommand
    subparsers.add_parser("demo", help="Run the operations on sample arrays")

    return parser


def main(argv: Optional[list[str]] = None) -> None:
    """Main entry point for the arrayproto CLI. Calls sys.exit with return code."""
    sys.exit(_main(argv))


def _main(argv: Optional[list[str]] = None) -> int:
    """Internal main that returns exit code."""
    if argv is None:
        argv = sys.argv[1:]

    parser = create_parser()
    args = parser.parse_args(argv)

    if args.subcommand == "map":
        return cmd_map(args)
    elif args.subcommand == "for-each":
        return cmd_for_each(args)
    elif args.subcommand == "filter":
        return cmd_filter(args)
    elif args.subcommand == "reduce":
        return cmd_reduce(args)
    elif args.subcommand == "demo":
        return cmd_demo(args)

    parser.print_help()
    return 1


if __name__ == "__main__":
    main()
