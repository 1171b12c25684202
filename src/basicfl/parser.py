## basicfl — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import re
from dataclasses import dataclass, field

import lark
from .objects import Object, NumberObject, StringObject
from .errors import BasicParseError, BasicIncompleteParse


# Call expressions only, e.g. `PRINT("X=", STR$(SQR(2)))`; statements belong to the evaluator.
GRAMMAR = r"""start: _SEP? (expr (_SEP expr)* _SEP?)?

?expr: call | NAME | NUMBER | STRING
call: NAME "(" (expr ("," expr)*)? ")"

NAME: /[A-Za-z][A-Za-z0-9_]*\$?/
NUMBER: /-?(?:\d+\.\d*|\.\d+|\d+)(?:[eE][+-]?\d+)?/
STRING: /"(?:[^"\\]|\\.)*"/
_SEP: /[:\r\n][:\s]*/

%ignore /[ \t\f]+/
"""

_PARSER = lark.Lark(GRAMMAR, parser="lalr", lexer="contextual", propagate_positions=True)


@dataclass
class Literal:
    value: Object
    meta: dict = field(default_factory=dict)


@dataclass
class Call:
    name: str
    args: list
    meta: dict = field(default_factory=dict)


def _unescape(text: str) -> str:
    return re.sub(r'\\(.)', lambda m: {'n': '\n', 't': '\t'}.get(m.group(1), m.group(1)), text)


def parse(source: str, filename=None) -> list[Literal | Call]:
    """Parse call expressions separated by `:` or newlines into `Literal` and `Call` nodes."""

    def _meta(node) -> dict:
        if isinstance(node, lark.Tree):
            node = node.meta
        if getattr(node, 'line', None) is None: return {'filename': filename}
        return {'filename': filename, 'line': node.line, 'column': node.column}

    def _convert(node):
        if isinstance(node, lark.Tree):
            assert node.data == 'call'
            name, *args = node.children
            return Call(name.value, [_convert(a) for a in args], _meta(name))
        match node.type:
            case 'NAME':   # bare name, calls a builtin without arguments like PI
                return Call(node.value, [], _meta(node))
            case 'NUMBER':
                return Literal(NumberObject(float(node.value)), _meta(node))
            case 'STRING':
                return Literal(StringObject(_unescape(node.value[1:-1])), _meta(node))
        raise NotImplementedError(f"Unexpected token {node.type} from parser.")

    try:
        tree = _PARSER.parse(source)
    except lark.exceptions.UnexpectedCharacters as exc:
        raise BasicParseError(str(exc), filename=filename, line=exc.line, column=exc.column, token=exc.char) from None
    except lark.exceptions.UnexpectedInput as exc:
        token = getattr(exc, 'token', None)
        at_end = isinstance(exc, lark.exceptions.UnexpectedEOF) or getattr(token, 'type', None) == '$END'
        error_class = BasicIncompleteParse if at_end else BasicParseError
        token_val = getattr(token, 'value', '') if token is not None else ''
        raise error_class(str(exc), filename=filename, line=getattr(exc, 'line', None),
                          column=getattr(exc, 'column', None), token=token_val) from None
    return [_convert(ch) for ch in tree.children]


def format_parse_error_context(filename, line, column, token_value, source):
    lines = source.splitlines()
    if not line or line < 1 or line > len(lines):
        return f"\033[97m  File \"{filename}\"\033[0m\n"
    start_line, end_line = max(0, line - 3), min(len(lines), line + 2)
    result = [f"\033[97m  File \"{filename}\", line {line}\033[0m"]

    for i in range(start_line, end_line):
        line_content = lines[i]
        line_color = '\033[90m'
        if i+1 == line:
            line_color = '\033[97m'
            width = max(len(token_value or ''), 1)
            if column and 0 < column <= len(line_content):
                line_content = (
                    line_content[:column-1] +
                    f"\033[48;5;30m\033[1;97m{line_content[column-1:column+width-1]}\033[0m" +
                    line_content[column+width-1:]
                )
        result.append(f"{line_color}{i+1:>5} |\033[0m {line_content}")
    return '\n' + '\n'.join(result) + '\n'
