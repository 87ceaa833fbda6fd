# Copyright 2013-2014 The Meson development team

# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at

#     http://www.apache.org/licenses/LICENSE-2.0

# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Console and log file output for picomeson.

Everything passed to log() is written to the terminal and, once
initialize() has been called, to meson-log.txt as well. debug() only
goes to the log file. Markup objects made by bold(), red() and friends
are rendered with ANSI codes on a colour capable terminal and as plain
text everywhere else.
"""

import os
import sys
import platform
import typing as T
from contextlib import contextmanager

log_dir = None               # type: T.Optional[str]
log_file = None              # type: T.Optional[T.TextIO]
log_fname = 'meson-log.txt'  # type: str
log_depth = []               # type: T.List[str]
log_fatal_warnings = False   # type: bool
log_disable_stdout = False   # type: bool

def colorize_console() -> bool:
    cached = getattr(sys.stdout, 'colorize_console', None)  # type: T.Optional[bool]
    if cached is not None:
        return cached
    try:
        result = os.isatty(sys.stdout.fileno()) and os.environ.get('TERM', 'dumb') != 'dumb'
    except (AttributeError, OSError, ValueError):
        # Captured or replaced streams have no usable descriptor
        result = False
    try:
        sys.stdout.colorize_console = result  # type: ignore[attr-defined]
    except AttributeError:
        pass
    return result

def setup_console() -> None:
    # A probed compiler may switch off ANSI processing on a Windows console;
    # forget the cached answer so the next call asks again.
    if platform.system().lower() == 'windows' and hasattr(sys.stdout, 'colorize_console'):
        delattr(sys.stdout, 'colorize_console')

def disable() -> None:
    global log_disable_stdout  # pylint: disable=global-statement
    log_disable_stdout = True

def initialize(logdir: str, fatal_warnings: bool = False) -> None:
    global log_dir, log_file, log_fatal_warnings  # pylint: disable=global-statement
    os.makedirs(logdir, exist_ok=True)
    log_dir = logdir
    log_file = open(os.path.join(logdir, log_fname), 'w', encoding='utf-8')
    log_fatal_warnings = fatal_warnings

def shutdown() -> T.Optional[str]:
    """Close the log file and return its path, if one was open."""
    global log_file  # pylint: disable=global-statement
    if log_file is None:
        return None
    closing, log_file = log_file, None
    closing.close()
    return closing.name

class Markup:
    reset = '\033[0m'

    def __init__(self, text: str, code: str, quoted: bool = False):
        self.text = text
        self.code = code
        self.quoted = quoted

    def render(self, colored: bool) -> str:
        text = self.text
        if colored:
            text = '{}{}{}'.format(self.code, text, Markup.reset)
        if self.quoted:
            text = '"{}"'.format(text)
        return text

    def __str__(self) -> str:
        return self.render(colorize_console())

def bold(text: str, quoted: bool = False) -> Markup:
    return Markup(text, '\033[1m', quoted)

def red(text: str) -> Markup:
    return Markup(text, '\033[1;31m')

def green(text: str) -> Markup:
    return Markup(text, '\033[1;32m')

def yellow(text: str) -> Markup:
    return Markup(text, '\033[1;33m')

def _render(args: T.Sequence[T.Any], colored: bool) -> T.List[str]:
    return [a.render(colored) if isinstance(a, Markup) else str(a)
            for a in args if a is not None]

def _to_file(parts: T.List[str], **kwargs: T.Any) -> None:
    if log_file is not None:
        print(*parts, file=log_file, **kwargs)
        log_file.flush()

def _to_console(parts: T.List[str], nested: bool, **kwargs: T.Any) -> None:
    if log_disable_stdout:
        return
    text = kwargs.get('sep', ' ').join(parts) + kwargs.get('end', '\n')
    if log_depth and nested:
        prefix = log_depth[-1] + '| '
        text = '\n'.join(prefix + l if l.strip() else l for l in text.split('\n'))
    try:
        sys.stdout.write(text)
    except UnicodeEncodeError:
        sys.stdout.write(text.encode('ascii', 'replace').decode('ascii'))

def debug(*args: T.Any, **kwargs: T.Any) -> None:
    _to_file(_render(args, False), **kwargs)

def log(*args: T.Any, **kwargs: T.Any) -> None:
    nested = kwargs.pop('nested', True)
    _to_file(_render(args, False), **kwargs)
    _to_console(_render(args, colorize_console()), nested, **kwargs)

def warning(*args: T.Any, location: T.Any = None, fatal: bool = True, **kwargs: T.Any) -> None:
    from .mesonlib import MesonException, relpath

    parts = [yellow('WARNING:')] + list(args)  # type: T.List[T.Any]
    if location is not None:
        parts.insert(0, '{}:{}:'.format(relpath(location.filename, os.getcwd()), location.lineno))
    log(*parts, **kwargs)
    if log_fatal_warnings and fatal:
        raise MesonException('Fatal warnings enabled, aborting')

def exception(e: Exception, prefix: T.Optional[Markup] = None) -> None:
    from .mesonlib import relpath

    parts = []  # type: T.List[T.Any]
    where = [getattr(e, a, None) for a in ('file', 'lineno', 'colno')]
    if None not in where:
        parts.append('{}:{}:{}:'.format(relpath(where[0], os.getcwd()), where[1], where[2]))
    parts.append(red('ERROR:') if prefix is None else prefix)
    parts.append(str(e))
    log()
    log(*parts)

@contextmanager
def nested(name: str = '') -> T.Generator[None, None, None]:
    log_depth.append(name)
    try:
        yield
    finally:
        log_depth.pop()
