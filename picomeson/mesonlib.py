# Copyright 2012-2020 The Meson development team

# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at

#     http://www.apache.org/licenses/LICENSE-2.0

# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""A library of random helper functionality."""

import os
import functools
import re
import operator
import platform
import subprocess
import typing as T

from . import mlog

if T.TYPE_CHECKING:
    from .interpreter.configdata import ConfigurationDataHolder as ConfigData


class MesonException(Exception):
    '''Exceptions thrown by picomeson'''

    file = None    # type: T.Optional[str]
    lineno = None  # type: T.Optional[int]
    colno = None   # type: T.Optional[int]


class EnvironmentException(MesonException):
    '''Exceptions thrown while talking to the host environment'''


def is_windows() -> bool:
    return platform.system().lower() == 'windows'


def default_prefix() -> str:
    return 'c:/' if is_windows() else '/usr/local'


def flatten(item: T.Any) -> T.List[T.Any]:
    '''
    Depth first, order preserving unwrapping of nested lists.
    Scalars (anything that is not a list) are returned wrapped in a list.
    '''
    if not isinstance(item, list):
        return [item]
    result = []  # type: T.List[T.Any]
    for i in item:
        if isinstance(i, list):
            result += flatten(i)
        else:
            result.append(i)
    return result


def join_paths(left: str, right: str) -> str:
    '''Join two paths with '/', an absolute right hand side wins.'''
    left = left.replace('\\', '/')
    right = right.replace('\\', '/')
    if right.startswith('/') or not left:
        return right
    return left.rstrip('/') + '/' + right


def join_many(paths: T.Iterable[str]) -> str:
    result = ''
    for p in paths:
        result = join_paths(result, p)
    return result


def replace_suffix(path: str, suffix: str) -> str:
    path = path.replace('\\', '/')
    stem_start = path.rfind('/') + 1
    dot = path.rfind('.', stem_start)
    if dot != -1:
        path = path[:dot]
    if not suffix.startswith('.'):
        path += '.'
    return path + suffix


@functools.total_ordering
class Version:
    '''A version string compared component by component.

    The string is split into runs of digits and runs of letters, anything
    else separates them. Digit runs compare as integers and sort after
    letter runs, so '1.0rc1' < '1.0.1'. When one version is a prefix of
    the other, the longer one is greater.
    '''

    def __init__(self, s: str):
        self._s = s
        self._key = tuple((1, int(part)) if part.isdigit() else (0, part)
                          for part in re.findall(r'\d+|[a-zA-Z]+', s))

    def __str__(self) -> str:
        return self._s

    def __repr__(self) -> str:
        return 'Version({!r})'.format(self._s)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._key == other._key

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._key < other._key

    def __hash__(self) -> int:
        return hash(self._key)


_CMPOPS = [
    ('>=', operator.ge),
    ('<=', operator.le),
    ('!=', operator.ne),
    ('==', operator.eq),
    ('=', operator.eq),
    ('>', operator.gt),
    ('<', operator.lt),
]  # type: T.List[T.Tuple[str, T.Callable[[T.Any, T.Any], bool]]]


def _version_extract_cmpop(vstr2: str) -> T.Tuple[T.Callable[[T.Any, T.Any], bool], str]:
    for prefix, cmpop in _CMPOPS:
        if vstr2.startswith(prefix):
            return cmpop, vstr2[len(prefix):].strip()
    return operator.eq, vstr2.strip()


def version_compare(vstr1: str, vstr2: str) -> bool:
    (cmpop, vstr2) = _version_extract_cmpop(vstr2)
    return cmpop(Version(vstr1), Version(vstr2))


# Only allow (a-z, A-Z, 0-9, _, -) as valid characters for a define,
# '\@' escapes a literal '@'
CONF_VARIABLE_REGEX = re.compile(r'(?:\\\\)+(?=\\?@)|\\@|@([-a-zA-Z0-9_]+)@')


def do_replacement(regex: T.Pattern[str], line: str,
                   confdata: 'ConfigData') -> T.Tuple[str, T.Set[str]]:
    missing_variables = set()  # type: T.Set[str]

    def variable_replace(match: T.Match[str]) -> str:
        # Pairs of escape characters before '@' or '\@'
        if match.group(0).endswith('\\'):
            num_escapes = match.end(0) - match.start(0)
            return '\\' * (num_escapes // 2)
        # Single escape character and '@'
        elif match.group(0) == '\\@':
            return '@'
        varname = match.group(1)
        if varname not in confdata:
            missing_variables.add(varname)
            return match.group(0)
        var, _ = confdata.get(varname)
        if isinstance(var, bool):
            return 'true' if var else 'false'
        elif isinstance(var, (int, str)):
            return str(var)
        raise MesonException('Tried to replace variable {!r} value with '
                             'something other than a string or int: {!r}'.format(varname, var))
    return re.sub(regex, variable_replace, line), missing_variables


def _define_line(varname: str, value: T.Any) -> str:
    if isinstance(value, bool):
        return '#define {}\n'.format(varname) if value else '#undef {}\n'.format(varname)
    if isinstance(value, (int, str)):
        return '#define {} {}\n'.format(varname, value)
    raise MesonException('Configuration value {!r} is neither a string, an integer '
                         'nor a boolean'.format(varname))


def do_define(line: str, confdata: 'ConfigData') -> str:
    arr = line.split()
    if len(arr) != 2:
        raise MesonException('#mesondefine does not contain exactly two tokens: ' + line.strip())
    varname = arr[1]
    if varname not in confdata:
        return '/* #undef {} */\n'.format(varname)
    return _define_line(varname, confdata.get(varname)[0])


def do_conf_str(data: T.List[str], confdata: 'ConfigData') -> T.Tuple[T.List[str], T.Set[str]]:
    result = []
    missing_variables = set()  # type: T.Set[str]
    for line in data:
        if line.startswith('#mesondefine'):
            line = do_define(line, confdata)
        else:
            line, missing = do_replacement(CONF_VARIABLE_REGEX, line, confdata)
            missing_variables.update(missing)
        result.append(line)
    return result, missing_variables


def dump_conf_header(cdata: 'ConfigData') -> str:
    '''Render configuration data as a C header, one entry per key in sorted order.'''
    lines = ['#pragma once\n', '\n']
    for k in sorted(cdata.keys()):
        value, desc = cdata.get(k)
        if desc:
            lines.append('// {}\n'.format(desc))
        lines.append(_define_line(k, value))
        lines.append('\n')
    return ''.join(lines)


def Popen_safe(args: T.List[str], **kwargs: T.Any) -> T.Tuple['subprocess.Popen[bytes]', str, str]:
    '''Run a command to completion and return it with its decoded output.'''
    # stdin is closed so a probed tool cannot grab the console
    kwargs.setdefault('stdin', subprocess.DEVNULL)
    p = subprocess.Popen(args, stdout=subprocess.PIPE, stderr=subprocess.PIPE, **kwargs)
    o, e = p.communicate()
    mlog.setup_console()
    return p, o.decode(errors='replace').replace('\r\n', '\n'), e.decode(errors='replace').replace('\r\n', '\n')


def relpath(path: str, start: str) -> str:
    # On Windows a relative path can't be evaluated for paths on two different
    # drives (i.e. c:\foo and f:\bar).  The only thing left to do is to use the
    # original absolute path.
    try:
        return os.path.relpath(path, start)
    except (TypeError, ValueError):
        return path
