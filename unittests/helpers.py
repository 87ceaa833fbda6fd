# Copyright 2016-2021 The Meson development team

# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at

#     http://www.apache.org/licenses/LICENSE-2.0

# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

import typing as T
from contextlib import contextmanager

from picomeson import coredata, mlog
from picomeson.interpreter import Interpreter
from picomeson.interpreter.compiler import DELIMITER
from picomeson.runtime import (
    Runtime, RuntimeException, MachineInfo, CompilerInfo, RunCommandOutput,
)
from picomeson.steps import BuildSteps

# Keep test output quiet, everything still goes through the mlog code paths
mlog.disable()

class FakeRuntime(Runtime):
    '''An in-memory host: files live in a dict and commands are Python callables.'''

    def __init__(self, files: T.Optional[T.Dict[str, T.Union[str, bytes]]] = None):
        self.files = {}  # type: T.Dict[str, bytes]
        for path, content in (files or {}).items():
            self.files[path] = content.encode('utf-8') if isinstance(content, str) else content
        self.dirs = set()  # type: T.Set[str]
        self.env = {}  # type: T.Dict[str, str]
        self.printed = []  # type: T.List[str]
        self.programs = {}  # type: T.Dict[str, str]
        self.handlers = {}  # type: T.Dict[str, T.Callable[[T.List[str]], RunCommandOutput]]
        self.commands_run = []  # type: T.List[T.List[str]]
        self.compilers = {'c': CompilerInfo('cc')}  # type: T.Dict[str, CompilerInfo]
        self.machine = MachineInfo('linux', 'x86_64', 'little')
        self.tempdir_count = 0
        self.removed_tempdirs = []  # type: T.List[str]

    def print(self, msg: str) -> None:
        self.printed.append(msg)

    def get_env(self, key: str) -> T.Optional[str]:
        return self.env.get(key)

    def build_machine(self) -> MachineInfo:
        return self.machine

    def host_machine(self) -> MachineInfo:
        return self.machine

    def default_prefix(self) -> str:
        return '/usr/local'

    def is_file(self, path: str) -> bool:
        return path in self.files

    def is_dir(self, path: str) -> bool:
        path = path.rstrip('/')
        return path in self.dirs or any(f.startswith(path + '/') for f in self.files)

    def exists(self, path: str) -> bool:
        return self.is_file(path) or self.is_dir(path)

    def read_file(self, path: str) -> bytes:
        if path not in self.files:
            raise RuntimeException('No such file: ' + path)
        return self.files[path]

    def write_file(self, path: str, data: bytes) -> None:
        self.files[path] = data

    @contextmanager
    def tempdir(self) -> T.Iterator[str]:
        self.tempdir_count += 1
        path = '/tmp/picomeson-{}'.format(self.tempdir_count)
        self.dirs.add(path)
        try:
            yield path
        finally:
            self.dirs.discard(path)
            for f in [f for f in self.files if f.startswith(path + '/')]:
                del self.files[f]
            self.removed_tempdirs.append(path)

    def get_compiler(self, lang: str) -> CompilerInfo:
        if lang not in self.compilers:
            raise RuntimeException('No compiler for ' + lang)
        return self.compilers[lang]

    def find_program(self, name: str, cwd: str) -> str:
        if name in self.programs:
            return self.programs[name]
        raise RuntimeException('Program not found: ' + name)

    def run_command(self, cmd: str, args: T.List[str]) -> RunCommandOutput:
        self.commands_run.append([cmd] + args)
        if cmd not in self.handlers:
            raise RuntimeException('Cannot execute ' + cmd)
        return self.handlers[cmd](args)

class FakeCompiler:
    '''
    Stands in for a gcc-like driver. Preprocessing writes the text after
    the delimiter, compiling writes a dummy object, and any argument in
    unsupported makes the invocation fail.
    '''

    def __init__(self, runtime: FakeRuntime, family: str = 'gcc', underscore: str = '',
                 unsupported: T.Iterable[str] = (), missing_functions: T.Iterable[str] = (),
                 linker_banner: str = 'GNU ld (GNU Binutils) 2.40'):
        self.runtime = runtime
        self.family = family
        self.underscore = underscore
        self.unsupported = set(unsupported)
        self.missing_functions = set(missing_functions)
        self.linker_banner = linker_banner
        self.invocations = []  # type: T.List[T.List[str]]

    def __call__(self, args: T.List[str]) -> RunCommandOutput:
        self.invocations.append(args)
        if '-Wl,--version' in args:
            return RunCommandOutput(self.linker_banner, '', 0)
        out = args[args.index('-o') + 1]
        src = args[args.index('-o') - 1]
        code = self.runtime.files.get(src, b'').decode()
        if any(a in self.unsupported for a in args):
            return RunCommandOutput('', 'error: unrecognized command-line option', 1)
        if '-E' in args:
            if 'MESON_COMPILER_FAMILY' in code:
                text = '# 1 "input.c"\n{} {}\n'.format(DELIMITER, self.family)
            else:
                text = '# 1 "input.c"\n{} {}\n'.format(DELIMITER, self.underscore)
            self.runtime.files[out] = text.encode()
            return RunCommandOutput('', '', 0)
        if any('({})'.format(f) in code for f in self.missing_functions):
            return RunCommandOutput('', 'error: undeclared identifier', 1)
        if 'syntax error' in code:
            return RunCommandOutput('', 'error: expected expression', 1)
        self.runtime.files[out] = b'\x7fELF'
        return RunCommandOutput('', '', 0)

class RecordingSteps(BuildSteps):
    def __init__(self) -> None:
        self.executables = []  # type: T.List[T.Any]
        self.static_libraries = []  # type: T.List[T.Any]
        self.configured_files = []  # type: T.List[T.Any]
        self.installed_headers = []  # type: T.List[T.Tuple[str, T.List[str]]]

    def build_static_library(self, target: T.Any) -> None:
        self.static_libraries.append(target)

    def build_executable(self, target: T.Any) -> None:
        self.executables.append(target)

    def configure_file(self, file: T.Any) -> None:
        self.configured_files.append(file)

    def install_headers(self, install_dir: str, headers: T.List[str]) -> None:
        self.installed_headers.append((install_dir, headers))

def make_interpreter(files: T.Optional[T.Dict[str, T.Union[str, bytes]]] = None,
                     source_dir: str = '/src', build_dir: str = '/build',
                     **kwargs: T.Any) -> T.Tuple[Interpreter, FakeRuntime, RecordingSteps]:
    runtime = FakeRuntime(files)
    steps = RecordingSteps()
    intr = Interpreter(runtime, steps, source_dir, build_dir, **kwargs)
    intr.interpret_string(coredata.BUILTIN_OPTIONS, 'builtin-options.txt')
    return intr, runtime, steps

def run_code(code: str, **kwargs: T.Any) -> Interpreter:
    intr = make_interpreter(**kwargs)[0]
    intr.interpret_string(code, 'meson.build')
    return intr
