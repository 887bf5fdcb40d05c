import argparse
import json
import logging
import os
import sys
from typing import List, Optional

from . import __version__
from .compiler import Compiler, handle_request
from .dump import dump_program
from .lexer import Lexer
from .parser import Parser

logger = logging.getLogger('blockc')

LOG_LEVEL_ENV = 'BLOCKC_LOG_LEVEL'


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='blockc',
        description='Compile block-style sprite scripts to JavaScript.',
    )
    parser.add_argument('file', nargs='?', help='source file, stdin when omitted')
    parser.add_argument('-o', '--output', help='write the result here instead of stdout')
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument('--tokens', action='store_true', help='print the token list as JSON')
    mode.add_argument('--ast', action='store_true', help='print the parsed program as JSON')
    mode.add_argument('--json', action='store_true',
                      help='read a {"code": ...} request and print a {"js"|"error": ...} response')
    parser.add_argument('-v', '--verbose', action='store_true', help='log compilation steps')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    return parser


def configure_logging(verbose: bool):
    if verbose:
        level = logging.DEBUG
    else:
        level = getattr(logging, os.environ.get(LOG_LEVEL_ENV, 'WARNING').upper(), logging.WARNING)
    logging.basicConfig(level=level, format='%(levelname)s %(name)s: %(message)s')


def read_source(path: Optional[str]) -> str:
    if path is None:
        return sys.stdin.read()
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()


def write_output(text: str, path: Optional[str]):
    if path is None:
        sys.stdout.write(text)
        return
    with open(path, 'w', encoding='utf-8') as f:
        f.write(text)


def main(argv: List[str] = None) -> int:
    args = build_arg_parser().parse_args(argv)
    configure_logging(args.verbose)

    try:
        source = read_source(args.file)
    except OSError as e:
        print(f'Error: cannot read {args.file}: {e.strerror}', file=sys.stderr)
        return 1

    if args.json:
        try:
            payload = json.loads(source)
        except ValueError:
            payload = None
        response = handle_request(payload, logger)
        write_output(json.dumps(response) + '\n', args.output)
        return 0 if 'js' in response else 1

    if args.tokens:
        write_output(json.dumps(Lexer(source, logger).tokenize()) + '\n', args.output)
        return 0

    if args.ast:
        program = Parser(Lexer(source, logger).tokenize(), logger).parse()
        write_output(json.dumps(dump_program(program), indent=2) + '\n', args.output)
        return 0

    result = Compiler(logger).compile(source)
    for warning in result.warnings:
        print(f'warning: {warning}', file=sys.stderr)
    if not result.ok:
        print(f'Error: {result.error}', file=sys.stderr)
        return 1
    write_output(result.js, args.output)
    return 0


if __name__ == '__main__':
    sys.exit(main())
