# Copyright 2014-2017 The Meson development team

# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at

#     http://www.apache.org/licenses/LICENSE-2.0

# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

import re
import typing as T

from .mesonlib import MesonException

class ParseException(MesonException):
    def __init__(self, text: str, line: str, lineno: int, colno: int):
        # Format as error message, followed by the line with the error, followed by a caret to show the error column.
        super().__init__("%s\n%s\n%s" % (text, line, '%s^' % (' ' * colno)))
        self.lineno = lineno
        self.colno = colno

class UnexpectedToken(ParseException):
    pass

class BlockParseException(UnexpectedToken):
    def __init__(self, text: str, line: str, lineno: int, colno: int,
                 start_line: str, start_lineno: int, start_colno: int):
        if lineno == start_lineno:
            # Error message, the line, then a caret at the block start and
            # one at the block end joined by underscores.
            MesonException.__init__(self, "%s\n%s\n%s" % (text, line, '%s^%s^' % (' ' * start_colno, '_' * (colno - start_colno - 1))))
        else:
            MesonException.__init__(self, "%s\n%s\n%s\nFor a block that started at %d,%d\n%s\n%s" % (
                text, line, '%s^' % (' ' * colno), start_lineno, start_colno, start_line, "%s^" % (' ' * start_colno)))
        self.lineno = lineno
        self.colno = colno

class Token:
    def __init__(self, tid: str, filename: str, line_start: int, lineno: int, colno: int,
                 bytespan: T.Tuple[int, int], value: T.Any):
        self.tid = tid
        self.filename = filename
        self.line_start = line_start
        self.lineno = lineno
        self.colno = colno
        self.bytespan = bytespan
        self.value = value

    def __eq__(self, other: object) -> bool:
        if isinstance(other, str):
            return self.tid == other
        if isinstance(other, Token):
            return self.tid == other.tid and self.value == other.value
        return NotImplemented

    def __repr__(self) -> str:
        if self.value is None:
            return '<Token {}>'.format(self.tid)
        return '<Token {} {!r}>'.format(self.tid, self.value)

ESCAPE_SEQUENCE_REGEX = re.compile(r'''\\(x[0-9a-fA-F]{0,2}|u[0-9a-fA-F]{0,4}|U[0-9a-fA-F]{0,8}|[0-9][0-7]{0,2}|[\s\S])''')

SIMPLE_ESCAPES = {
    'n': '\n',
    'r': '\r',
    't': '\t',
    '\\': '\\',
    "'": "'",
    '"': '"',
    'a': '\a',
    'b': '\b',
    'f': '\f',
    'v': '\v',
}

def decode_match(match: T.Match[str]) -> str:
    seq = match.group(1)
    kind = seq[0]
    if kind in SIMPLE_ESCAPES:
        return SIMPLE_ESCAPES[kind]
    if kind in 'xuU' and len(seq) > 1:
        code = int(seq[1:], 16)
        # lone surrogates and out of range code points keep the letter
        if code > 0x10FFFF or 0xD800 <= code <= 0xDFFF:
            return kind
        return chr(code)
    if kind.isdigit():
        try:
            code = int(seq, 8)
        except ValueError:
            return kind
        if code > 0xFF:
            return kind
        return chr(code)
    return kind

def unescape(text: str) -> str:
    return ESCAPE_SEQUENCE_REGEX.sub(decode_match, text)

def parse_number(text: str) -> int:
    text = text.replace('_', '')
    prefix = text[:2].lower()
    if prefix in ('0x', '0o', '0b'):
        digits = text[2:]
        if not digits:
            return 0
        value = int(digits, {'0x': 16, '0o': 8, '0b': 2}[prefix])
    else:
        value = int(text)
    # literals that do not fit a signed 64 bit integer read as 0
    if value >= 2 ** 63:
        return 0
    return value

class Lexer:
    def __init__(self, code: str):
        self.code = code
        self.keywords = {'true', 'false', 'if', 'else', 'elif', 'endif', 'and', 'or', 'not',
                         'foreach', 'endforeach', 'in', 'break', 'continue'}
        self.token_specification = [
            # Need to be sorted longest to shortest.
            ('ignore', re.compile(r'[ \t\r]')),
            ('multiline_string', re.compile(r"""('''|\"\"\")[\s\S]*?(\1|\Z)""")),
            ('fstring', re.compile(r"""f('([^'\\]|\\[\s\S]?)*('|\Z)|"([^"\\]|\\[\s\S]?)*("|\Z))""")),
            ('rawstring', re.compile(r"""r('[^']*('|\Z)|"[^"]*("|\Z))""")),
            ('string', re.compile(r"""'([^'\\]|\\[\s\S]?)*('|\Z)|"([^"\\]|\\[\s\S]?)*("|\Z)""")),
            ('id', re.compile(r'[_a-zA-Z]\w*')),
            ('number', re.compile(r'0[xX][0-9a-fA-F_]*|0[oO][0-7_]*|0[bB][01_]*|[0-9][0-9_]*')),
            ('eol', re.compile(r'\n')),
            ('comment', re.compile(r'#[^\n]*')),
            ('lparen', re.compile(r'\(')),
            ('rparen', re.compile(r'\)')),
            ('lbracket', re.compile(r'\[')),
            ('rbracket', re.compile(r'\]')),
            ('lcurl', re.compile(r'\{')),
            ('rcurl', re.compile(r'\}')),
            ('comma', re.compile(r',')),
            ('plusassign', re.compile(r'\+=')),
            ('dot', re.compile(r'\.')),
            ('plus', re.compile(r'\+')),
            ('dash', re.compile(r'-')),
            ('star', re.compile(r'\*')),
            ('percent', re.compile(r'%')),
            ('fslash', re.compile(r'/')),
            ('colon', re.compile(r':')),
            ('equal', re.compile(r'==')),
            ('nequal', re.compile(r'!=')),
            ('assign', re.compile(r'=')),
            ('le', re.compile(r'<=')),
            ('lt', re.compile(r'<')),
            ('ge', re.compile(r'>=')),
            ('gt', re.compile(r'>')),
            ('questionmark', re.compile(r'\?')),
            ('unknown', re.compile(r'[\s\S]')),
        ]

    def getline(self, line_start: int) -> str:
        end = self.code.find('\n', line_start)
        if end == -1:
            return self.code[line_start:]
        return self.code[line_start:end]

    def lex(self, filename: str) -> T.Generator[Token, None, None]:
        line_start = 0
        lineno = 1
        loc = 0
        par_count = 0
        bracket_count = 0
        curl_count = 0
        last_tid = 'eol'
        last_token = None  # type: T.Optional[Token]
        while loc < len(self.code):
            for (tid, reg) in self.token_specification:
                mo = reg.match(self.code, loc)
                if not mo:
                    continue
                curline = lineno
                curline_start = line_start
                col = mo.start() - line_start
                span_start = loc
                loc = mo.end()
                bytespan = (span_start, loc)
                match_text = mo.group()
                value = None  # type: T.Any
                if tid in {'ignore', 'comment', 'unknown'}:
                    break
                elif tid == 'lparen':
                    par_count += 1
                elif tid == 'rparen':
                    par_count -= 1
                elif tid == 'lbracket':
                    bracket_count += 1
                elif tid == 'rbracket':
                    bracket_count -= 1
                elif tid == 'lcurl':
                    curl_count += 1
                elif tid == 'rcurl':
                    curl_count -= 1
                elif tid == 'string':
                    value = unescape(self._strip_quotes(match_text, 1))
                elif tid == 'fstring':
                    value = unescape(self._strip_quotes(match_text[1:], 1))
                elif tid == 'rawstring':
                    tid = 'string'
                    value = self._strip_quotes(match_text[1:], 1, raw=True)
                elif tid == 'multiline_string':
                    tid = 'string'
                    value = self._strip_quotes(match_text, 3)
                    # a backslash-newline pair joins lines, eating the indentation after it
                    value = re.sub(r'\\\n[ \t]*', '', value)
                elif tid == 'number':
                    value = parse_number(match_text)
                elif tid == 'eol':
                    lineno += 1
                    line_start = loc
                    if par_count > 0 or bracket_count > 0 or curl_count > 0:
                        break
                    if last_tid == 'eol':
                        break
                elif tid == 'id':
                    if match_text in self.keywords:
                        tid = match_text
                    else:
                        value = match_text
                if tid == 'string' or tid == 'fstring':
                    newlines = match_text.count('\n')
                    if newlines:
                        lineno += newlines
                        line_start = span_start + match_text.rfind('\n') + 1
                last_tid = tid
                last_token = Token(tid, filename, curline_start, curline, col, bytespan, value)
                yield last_token
                break
        if last_token is None:
            yield Token('eof', filename, 0, 1, 0, (0, 0), None)
        else:
            end_col = last_token.colno + last_token.bytespan[1] - last_token.bytespan[0]
            yield Token('eof', filename, last_token.line_start, last_token.lineno, end_col,
                        (len(self.code), len(self.code)), None)

    @staticmethod
    def _strip_quotes(text: str, width: int, raw: bool = False) -> str:
        quote = text[:width]
        body = text[width:]
        if len(body) >= width and body.endswith(quote):
            # the closing quote is part of the body only when it is escaped
            if width == 1 and not raw:
                trailing = len(body[:-1]) - len(body[:-1].rstrip('\\'))
                if trailing % 2 == 0:
                    return body[:-1]
                return body
            return body[:-width]
        return body

class BaseNode:
    def __init__(self, lineno: int, colno: int, filename: str):
        self.lineno = lineno
        self.colno = colno
        self.filename = filename

class ElementaryNode(BaseNode):
    def __init__(self, token: Token):
        super().__init__(token.lineno, token.colno, token.filename)
        self.value = token.value
        self.bytespan = token.bytespan

class BooleanNode(ElementaryNode):
    def __init__(self, token: Token, value: bool):
        super().__init__(token)
        self.value = value
        assert isinstance(self.value, bool)

class IdNode(ElementaryNode):
    def __init__(self, token: Token):
        super().__init__(token)
        assert isinstance(self.value, str)

    def __str__(self) -> str:
        return "Id node: '%s' (%d, %d)." % (self.value, self.lineno, self.colno)

class NumberNode(ElementaryNode):
    def __init__(self, token: Token):
        super().__init__(token)
        assert isinstance(self.value, int)

class StringNode(ElementaryNode):
    def __init__(self, token: Token):
        super().__init__(token)
        assert isinstance(self.value, str)

    def __str__(self) -> str:
        return "String node: '%s' (%d, %d)." % (self.value, self.lineno, self.colno)

class FormatStringNode(ElementaryNode):
    def __init__(self, token: Token):
        super().__init__(token)
        assert isinstance(self.value, str)

class BreakNode(ElementaryNode):
    pass

class ContinueNode(ElementaryNode):
    pass

class EmptyNode(BaseNode):
    def __init__(self, lineno: int, colno: int, filename: str):
        super().__init__(lineno, colno, filename)
        self.value = None

class ArgumentNode(BaseNode):
    def __init__(self, token: Token):
        super().__init__(token.lineno, token.colno, token.filename)
        self.arguments = []  # type: T.List[BaseNode]
        self.kwargs = {}     # type: T.Dict[str, BaseNode]

    def append(self, statement: BaseNode) -> None:
        self.arguments.append(statement)

    def set_kwarg(self, name: str, value: BaseNode) -> None:
        self.kwargs[name] = value

    def num_args(self) -> int:
        return len(self.arguments)

    def num_kwargs(self) -> int:
        return len(self.kwargs)

    def __len__(self) -> int:
        return self.num_args()

class ArrayNode(BaseNode):
    def __init__(self, args: ArgumentNode):
        super().__init__(args.lineno, args.colno, args.filename)
        self.args = args

class DictNode(BaseNode):
    def __init__(self, token: Token, entries: T.List[T.Tuple[BaseNode, BaseNode]]):
        super().__init__(token.lineno, token.colno, token.filename)
        self.entries = entries

class OrNode(BaseNode):
    def __init__(self, left: BaseNode, right: BaseNode):
        super().__init__(left.lineno, left.colno, left.filename)
        self.left = left
        self.right = right

class AndNode(BaseNode):
    def __init__(self, left: BaseNode, right: BaseNode):
        super().__init__(left.lineno, left.colno, left.filename)
        self.left = left
        self.right = right

class ComparisonNode(BaseNode):
    def __init__(self, ctype: str, left: BaseNode, right: BaseNode):
        super().__init__(left.lineno, left.colno, left.filename)
        self.left = left
        self.right = right
        self.ctype = ctype

class ArithmeticNode(BaseNode):
    def __init__(self, operation: str, left: BaseNode, right: BaseNode):
        super().__init__(left.lineno, left.colno, left.filename)
        self.left = left
        self.right = right
        self.operation = operation

class NotNode(BaseNode):
    def __init__(self, location: Token, value: BaseNode):
        super().__init__(location.lineno, location.colno, location.filename)
        self.value = value

class UMinusNode(BaseNode):
    def __init__(self, location: Token, value: BaseNode):
        super().__init__(location.lineno, location.colno, location.filename)
        self.value = value

class CodeBlockNode(BaseNode):
    def __init__(self, location: Token):
        super().__init__(location.lineno, location.colno, location.filename)
        self.lines = []  # type: T.List[BaseNode]

class IndexNode(BaseNode):
    def __init__(self, iobject: BaseNode, index: BaseNode):
        super().__init__(iobject.lineno, iobject.colno, iobject.filename)
        self.iobject = iobject
        self.index = index

class MethodNode(BaseNode):
    def __init__(self, filename: str, lineno: int, colno: int, source_object: BaseNode,
                 name: str, args: ArgumentNode):
        super().__init__(lineno, colno, filename)
        self.source_object = source_object
        self.name = name
        assert isinstance(self.name, str)
        self.args = args

class FunctionNode(BaseNode):
    def __init__(self, filename: str, lineno: int, colno: int, func_name: str, args: ArgumentNode):
        super().__init__(lineno, colno, filename)
        self.func_name = func_name
        assert isinstance(func_name, str)
        self.args = args

class AssignmentNode(BaseNode):
    def __init__(self, filename: str, lineno: int, colno: int, var_name: str, value: BaseNode):
        super().__init__(lineno, colno, filename)
        self.var_name = var_name
        assert isinstance(var_name, str)
        self.value = value

class PlusAssignmentNode(BaseNode):
    def __init__(self, filename: str, lineno: int, colno: int, var_name: str, value: BaseNode):
        super().__init__(lineno, colno, filename)
        self.var_name = var_name
        assert isinstance(var_name, str)
        self.value = value

class ForeachClauseNode(BaseNode):
    def __init__(self, token: Token, varname: str, items: BaseNode, block: CodeBlockNode):
        super().__init__(token.lineno, token.colno, token.filename)
        self.varname = varname
        self.items = items
        self.block = block

class IfNode(BaseNode):
    def __init__(self, linenode: BaseNode, condition: BaseNode, block: CodeBlockNode):
        super().__init__(linenode.lineno, linenode.colno, linenode.filename)
        self.condition = condition
        self.block = block

class IfClauseNode(BaseNode):
    def __init__(self, linenode: BaseNode):
        super().__init__(linenode.lineno, linenode.colno, linenode.filename)
        self.ifs = []  # type: T.List[IfNode]
        self.elseblock = None  # type: T.Optional[CodeBlockNode]

class TernaryNode(BaseNode):
    def __init__(self, condition: BaseNode, trueblock: BaseNode, falseblock: BaseNode):
        super().__init__(condition.lineno, condition.colno, condition.filename)
        self.condition = condition
        self.trueblock = trueblock
        self.falseblock = falseblock

comparison_map = {'equal': '==',
                  'nequal': '!=',
                  'lt': '<',
                  'le': '<=',
                  'gt': '>',
                  'ge': '>='
                  }

arithmetic_map = {'plus': 'add',
                  'dash': 'sub',
                  'star': 'mul',
                  'fslash': 'div',
                  'percent': 'mod'
                  }

# Recursive descent parser for the build definition language.
# Very basic apart from the fact that we have many precedence
# levels so there are not enough words to describe them all.
# Enter numbering:
#
# 1 ternary
# 2 or
# 3 and
# 4 membership (in, not in)
# 5 equality
# 6 relational comparison
# 7 addition, subtraction
# 8 multiplication, division, modulo
# 9 negation
# 10 funcall, method call, indexing
# 11 parentheses, plain token
#
# Binary operators on the same level associate to the left.

BLOCK_END_TOKENS = {'elif', 'else', 'endif', 'endforeach', 'eof'}

class Parser:
    def __init__(self, code: str, filename: str = ''):
        self.lexer = Lexer(code)
        self.filename = filename
        self.tokens = list(self.lexer.lex(filename))
        self.pos = 0
        self.current = self.tokens[0]

    def getsym(self) -> None:
        if self.pos < len(self.tokens) - 1:
            self.pos += 1
        self.current = self.tokens[self.pos]

    def peek(self) -> Token:
        return self.tokens[min(self.pos + 1, len(self.tokens) - 1)]

    def getline(self) -> str:
        return self.lexer.getline(self.current.line_start)

    def fail(self, text: str, node: T.Optional[T.Union[BaseNode, Token]] = None) -> T.NoReturn:
        where = node if node is not None else self.current
        raise UnexpectedToken(text, self.getline(), where.lineno, where.colno)

    def accept(self, s: str) -> bool:
        if self.current.tid == s:
            self.getsym()
            return True
        return False

    def expect(self, s: str) -> bool:
        if self.accept(s):
            return True
        self.fail('Expecting %s got %s.' % (s, self.current.tid))

    def block_expect(self, s: str, block_start: Token) -> bool:
        if self.accept(s):
            return True
        raise BlockParseException('Expecting %s got %s.' % (s, self.current.tid), self.getline(),
                                  self.current.lineno, self.current.colno,
                                  self.lexer.getline(block_start.line_start), block_start.lineno, block_start.colno)

    def parse(self) -> CodeBlockNode:
        block = self.codeblock()
        self.expect('eof')
        return block

    def statement(self) -> BaseNode:
        return self.e1()

    def e1(self) -> BaseNode:
        left = self.e2()
        if self.accept('questionmark'):
            trueblock = self.e1()
            self.expect('colon')
            falseblock = self.e1()
            return TernaryNode(left, trueblock, falseblock)
        return left

    def e2(self) -> BaseNode:
        left = self.e3()
        while self.accept('or'):
            left = OrNode(left, self.e3())
        return left

    def e3(self) -> BaseNode:
        left = self.e4()
        while self.accept('and'):
            left = AndNode(left, self.e4())
        return left

    def e4(self) -> BaseNode:
        left = self.e5()
        while True:
            if self.accept('in'):
                left = ComparisonNode('in', left, self.e5())
            elif self.current == 'not' and self.peek() == 'in':
                self.getsym()
                self.getsym()
                left = ComparisonNode('notin', left, self.e5())
            else:
                return left

    def e5(self) -> BaseNode:
        left = self.e6()
        while self.current.tid in ('equal', 'nequal'):
            ctype = comparison_map[self.current.tid]
            self.getsym()
            left = ComparisonNode(ctype, left, self.e6())
        return left

    def e6(self) -> BaseNode:
        left = self.e7()
        while self.current.tid in ('lt', 'le', 'gt', 'ge'):
            ctype = comparison_map[self.current.tid]
            self.getsym()
            left = ComparisonNode(ctype, left, self.e7())
        return left

    def e7(self) -> BaseNode:
        left = self.e8()
        while self.current.tid in ('plus', 'dash'):
            operation = arithmetic_map[self.current.tid]
            self.getsym()
            left = ArithmeticNode(operation, left, self.e8())
        return left

    def e8(self) -> BaseNode:
        left = self.e9()
        while self.current.tid in ('star', 'fslash', 'percent'):
            operation = arithmetic_map[self.current.tid]
            self.getsym()
            left = ArithmeticNode(operation, left, self.e9())
        return left

    def e9(self) -> BaseNode:
        t = self.current
        if self.accept('not'):
            return NotNode(t, self.e9())
        if self.accept('dash'):
            return UMinusNode(t, self.e9())
        return self.e10()

    def e10(self) -> BaseNode:
        left = self.e11()
        while True:
            block_start = self.current
            if self.accept('lparen'):
                if not isinstance(left, IdNode):
                    self.fail('Function call must be applied to plain id', left)
                args = self.args()
                self.block_expect('rparen', block_start)
                left = FunctionNode(left.filename, left.lineno, left.colno, left.value, args)
            elif self.accept('dot'):
                left = self.method_call(left)
            elif self.accept('lbracket'):
                left = self.index_call(left)
            else:
                return left

    def e11(self) -> BaseNode:
        block_start = self.current
        if self.accept('lparen'):
            e = self.statement()
            self.block_expect('rparen', block_start)
            return e
        elif self.accept('lbracket'):
            args = self.args()
            self.block_expect('rbracket', block_start)
            if args.num_kwargs():
                self.fail('Arrays can not contain keyword arguments', args)
            return ArrayNode(args)
        elif self.accept('lcurl'):
            entries = self.key_values()
            self.block_expect('rcurl', block_start)
            return DictNode(block_start, entries)
        t = self.current
        if self.accept('true'):
            return BooleanNode(t, True)
        if self.accept('false'):
            return BooleanNode(t, False)
        if self.accept('id'):
            return IdNode(t)
        if self.accept('number'):
            return NumberNode(t)
        if self.accept('string'):
            return StringNode(t)
        if self.accept('fstring'):
            return FormatStringNode(t)
        self.fail('Unexpected token %s.' % t.tid)

    def args(self) -> ArgumentNode:
        a = ArgumentNode(self.current)
        while self.current.tid not in ('rparen', 'rbracket'):
            s = self.statement()
            if self.accept('colon'):
                if not isinstance(s, IdNode):
                    self.fail('Keyword argument must be a plain identifier.', s)
                a.set_kwarg(s.value, self.statement())
            else:
                if a.num_kwargs() > 0:
                    self.fail('All keyword arguments must be after positional arguments.', s)
                a.append(s)
            if not self.accept('comma'):
                break
        return a

    def key_values(self) -> T.List[T.Tuple[BaseNode, BaseNode]]:
        entries = []  # type: T.List[T.Tuple[BaseNode, BaseNode]]
        while self.current.tid != 'rcurl':
            key = self.statement()
            if not isinstance(key, (StringNode, IdNode, FormatStringNode)):
                self.fail('Dictionary keys must be strings or plain identifiers.', key)
            self.expect('colon')
            entries.append((key, self.statement()))
            if not self.accept('comma'):
                break
        return entries

    def method_call(self, source_object: BaseNode) -> MethodNode:
        t = self.current
        if not self.accept('id'):
            self.fail('Method name must be plain id')
        block_start = self.current
        self.expect('lparen')
        args = self.args()
        self.block_expect('rparen', block_start)
        return MethodNode(t.filename, t.lineno, t.colno, source_object, t.value, args)

    def index_call(self, source_object: BaseNode) -> IndexNode:
        index_statement = self.statement()
        self.expect('rbracket')
        return IndexNode(source_object, index_statement)

    def foreachblock(self, block_start: Token) -> ForeachClauseNode:
        t = self.current
        self.expect('id')
        self.expect('colon')
        items = self.statement()
        self.expect('eol')
        block = self.codeblock()
        return ForeachClauseNode(block_start, t.value, items, block)

    def ifblock(self) -> IfClauseNode:
        condition = self.statement()
        clause = IfClauseNode(condition)
        self.expect('eol')
        block = self.codeblock()
        clause.ifs.append(IfNode(clause, condition, block))
        self.elseifblock(clause)
        clause.elseblock = self.elseblock()
        return clause

    def elseifblock(self, clause: IfClauseNode) -> None:
        while self.accept('elif'):
            s = self.statement()
            self.expect('eol')
            b = self.codeblock()
            clause.ifs.append(IfNode(s, s, b))

    def elseblock(self) -> T.Optional[CodeBlockNode]:
        if self.accept('else'):
            self.expect('eol')
            return self.codeblock()
        return None

    def line(self) -> BaseNode:
        block_start = self.current
        if self.current == 'eol' or self.current.tid in BLOCK_END_TOKENS:
            return EmptyNode(self.current.lineno, self.current.colno, self.filename)
        if self.accept('if'):
            ifblock = self.ifblock()
            self.block_expect('endif', block_start)
            return ifblock
        if self.accept('foreach'):
            forblock = self.foreachblock(block_start)
            self.block_expect('endforeach', block_start)
            return forblock
        if self.accept('break'):
            return BreakNode(block_start)
        if self.accept('continue'):
            return ContinueNode(block_start)
        left = self.statement()
        if isinstance(left, IdNode):
            if self.accept('plusassign'):
                value = self.statement()
                return PlusAssignmentNode(left.filename, left.lineno, left.colno, left.value, value)
            if self.accept('assign'):
                value = self.statement()
                return AssignmentNode(left.filename, left.lineno, left.colno, left.value, value)
        return left

    def codeblock(self) -> CodeBlockNode:
        block = CodeBlockNode(self.current)
        cond = True
        while cond:
            curline = self.line()
            if not isinstance(curline, EmptyNode):
                block.lines.append(curline)
            cond = self.accept('eol')
            if not cond and not isinstance(curline, EmptyNode) and self.current.tid in BLOCK_END_TOKENS - {'eof'}:
                self.fail('%s must be on its own line.' % self.current.tid)
        return block
