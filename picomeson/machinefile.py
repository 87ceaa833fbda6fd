# Copyright 2013-2020 The Meson development team

# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at

#     http://www.apache.org/licenses/LICENSE-2.0

# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Parser for cross and native machine files.

A machine file is an INI-like document whose values are expressions in the
build language. Values may refer to entries of the ``[constants]`` section
and to earlier entries of their own section, and may span several lines as
long as the expression is not yet complete.
"""

import typing as T

from . import mparser
from .mesonlib import MesonException, EnvironmentException

MachineValue = T.Union[str, int, bool, T.List[T.Any]]

class MachineFile:
    def __init__(self, sections: T.Dict[str, T.Dict[str, MachineValue]]):
        self.sections = sections

    def get(self, section: str, key: str) -> T.Optional[MachineValue]:
        return self.sections.get(section, {}).get(key)

    def section(self, name: str) -> T.Dict[str, MachineValue]:
        return dict(self.sections.get(name, {}))

    def __repr__(self) -> str:
        return '<MachineFile: {}>'.format(', '.join(self.sections))

class MachineFileParser():
    def __init__(self, content: str, filename: str = 'machinefile') -> None:
        self.filename = filename
        # Raw expressions per section. A repeated key replaces the value
        # but keeps the position of its first definition.
        self.raw_sections = {}  # type: T.Dict[str, T.Dict[str, T.Tuple[mparser.BaseNode, str]]]
        self.sections = {}  # type: T.Dict[str, T.Dict[str, MachineValue]]
        self.read(content)

        # Parse [constants] first so they can be used in other sections
        if 'constants' in self.raw_sections:
            self.sections['constants'] = {}
            self._evaluate_section('constants')
        for s in self.raw_sections:
            if s == 'constants':
                continue
            self.sections[s] = {}
            self._evaluate_section(s)

    def read(self, content: str) -> None:
        lines = [l.strip() for l in content.splitlines()]
        current_section = None  # type: T.Optional[str]
        pos = 0
        while pos < len(lines):
            line = lines[pos]
            pos += 1
            if not line or line.startswith(('#', ';')):
                continue
            if line.startswith('[') and line.endswith(']'):
                current_section = line[1:-1].strip()
                self.raw_sections.setdefault(current_section, {})
                continue
            if '=' not in line:
                raise EnvironmentException('Malformed line {} in machine file {}: {!r}'.format(pos, self.filename, line))
            if current_section is None:
                raise EnvironmentException('Entry on line {} of machine file {} is not in a section.'.format(pos, self.filename))
            entry, value = line.split('=', 1)
            entry = entry.strip()
            if not entry or ' ' in entry or '\t' in entry or "'" in entry or '"' in entry:
                raise EnvironmentException('Malformed variable name {!r} in machine file.'.format(entry))
            value = value.strip()
            ast, error = self._try_parse(value)
            # Keep consuming lines until the expression is complete
            while ast is None and pos < len(lines):
                value += '\n' + lines[pos]
                pos += 1
                ast, error = self._try_parse(value)
            if ast is None:
                raise error
            if len(ast.lines) != 1:
                raise EnvironmentException('Machine file variable {!r} must hold exactly one expression.'.format(entry))
            self.raw_sections[current_section][entry] = (ast.lines[0], value)

    def _try_parse(self, value: str) -> T.Tuple[T.Optional[mparser.CodeBlockNode], T.Optional[MesonException]]:
        try:
            return mparser.Parser(value, self.filename).parse(), None
        except MesonException as e:
            return None, e

    def _evaluate_section(self, s: str) -> None:
        for entry, (node, text) in self.raw_sections[s].items():
            self.sections[s][entry] = self._evaluate_statement(node, s, text)

    def _error(self, msg: str, node: mparser.BaseNode, text: str) -> mparser.UnexpectedToken:
        lines = text.split('\n')
        line = lines[node.lineno - 1] if 0 < node.lineno <= len(lines) else ''
        e = mparser.UnexpectedToken(msg, line, node.lineno, node.colno)
        e.file = self.filename
        return e

    def _lookup(self, node: mparser.IdNode, section: str, text: str) -> MachineValue:
        constants = self.sections.get('constants', {})
        if node.value in constants:
            return constants[node.value]
        if node.value in self.sections[section]:
            return self.sections[section][node.value]
        raise self._error('Undefined name {!r} in section [{}] of machine file'.format(node.value, section), node, text)

    def _evaluate_statement(self, node: mparser.BaseNode, section: str, text: str) -> MachineValue:
        if isinstance(node, (mparser.StringNode, mparser.BooleanNode, mparser.NumberNode)):
            return node.value
        elif isinstance(node, mparser.ArrayNode):
            return [self._evaluate_statement(arg, section, text) for arg in node.args.arguments]
        elif isinstance(node, mparser.IdNode):
            return self._lookup(node, section, text)
        elif isinstance(node, mparser.ArithmeticNode):
            l = self._evaluate_statement(node.left, section, text)
            r = self._evaluate_statement(node.right, section, text)
            if node.operation == 'add':
                if (isinstance(l, str) and isinstance(r, str)) or \
                   (isinstance(l, list) and isinstance(r, list)):
                    return l + r
                if isinstance(l, list) and isinstance(r, str):
                    return l + [r]
                if isinstance(l, str) and isinstance(r, list):
                    return [l] + r
            elif node.operation == 'div':
                if isinstance(l, str) and isinstance(r, str):
                    return join_machine_paths(l, r)
            raise self._error('Unsupported operands for {!r} in machine file: {} and {}'.format(
                node.operation, type(l).__name__, type(r).__name__), node, text)
        raise self._error('Unsupported expression in machine file', node, text)


def join_machine_paths(left: str, right: str) -> str:
    if not left.endswith(('/', '\\')):
        left += '/'
    if right.startswith(('/', '\\')):
        right = right[1:]
    return left + right

def parse_machine_file(content: str, filename: str = 'machinefile') -> MachineFile:
    parser = MachineFileParser(content, filename)
    return MachineFile(parser.sections)

def load_machine_file(filename: str) -> MachineFile:
    try:
        with open(filename, encoding='utf-8') as f:
            content = f.read()
    except OSError as e:
        raise EnvironmentException('Could not read machine file {!r}: {}'.format(filename, e.strerror))
    return parse_machine_file(content, filename)
