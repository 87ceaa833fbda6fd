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

"""The boundary between the interpreter and the operating system.

Everything the interpreter needs from the outside world (files, processes,
temporary directories, compilers and machine information) goes through a
Runtime object, so that the interpreter can be driven against a real host or
against a fake one in tests.
"""

import abc
import os
import platform
import shlex
import shutil
import sys
import tempfile
import typing as T

from . import mesonlib, mlog
from .mesonlib import EnvironmentException

class RuntimeException(EnvironmentException):
    '''A request to the host environment failed'''

class MachineInfo:
    def __init__(self, system: str, cpu: str, endian: str):
        self.system = system
        self.cpu = cpu
        self.endian = endian

    def __repr__(self) -> str:
        return '<MachineInfo: {} {} {}>'.format(self.system, self.cpu, self.endian)

class CompilerInfo:
    def __init__(self, bin: str, flags: T.Optional[T.List[str]] = None):
        self.bin = bin
        self.flags = flags or []

    def get_exelist(self) -> T.List[str]:
        return [self.bin] + self.flags

class RunCommandOutput:
    def __init__(self, stdout: str, stderr: str, returncode: int):
        self.stdout = stdout
        self.stderr = stderr
        self.returncode = returncode

def detect_cpu_family(cpu: str) -> str:
    """
    Python is inconsistent in its platform module.
    It returns different values for the same cpu.
    For x86 it might return 'x86', 'i686' or somesuch.
    Do some canonicalization.
    """
    trial = cpu.lower()
    if trial.startswith('i') and trial.endswith('86'):
        trial = 'x86'
    elif trial == 'arm64':
        trial = 'aarch64'
    elif trial.startswith('arm') or trial.startswith('earm'):
        trial = 'arm'
    elif trial.startswith(('powerpc64', 'ppc64')):
        trial = 'ppc64'
    elif trial.startswith(('powerpc', 'ppc')):
        trial = 'ppc'
    elif trial in ('amd64', 'x64', 'i86pc'):
        trial = 'x86_64'
    elif trial in {'sun4u', 'sun4v'}:
        trial = 'sparc64'
    elif trial in {'mipsel', 'mips64el'}:
        trial = trial.rstrip('el')
    return trial

class Runtime(metaclass=abc.ABCMeta):
    '''Services the interpreter consumes from its host.'''

    @abc.abstractmethod
    def print(self, msg: str) -> None:
        pass

    @abc.abstractmethod
    def get_env(self, key: str) -> T.Optional[str]:
        pass

    @abc.abstractmethod
    def build_machine(self) -> MachineInfo:
        pass

    @abc.abstractmethod
    def host_machine(self) -> MachineInfo:
        pass

    @abc.abstractmethod
    def default_prefix(self) -> str:
        pass

    def join_paths(self, *paths: str) -> str:
        return mesonlib.join_many(paths)

    @abc.abstractmethod
    def is_file(self, path: str) -> bool:
        pass

    @abc.abstractmethod
    def is_dir(self, path: str) -> bool:
        pass

    @abc.abstractmethod
    def exists(self, path: str) -> bool:
        pass

    @abc.abstractmethod
    def read_file(self, path: str) -> bytes:
        pass

    @abc.abstractmethod
    def write_file(self, path: str, data: bytes) -> None:
        pass

    @abc.abstractmethod
    def tempdir(self) -> T.ContextManager[str]:
        '''A scoped temporary directory, removed when the context exits.'''

    @abc.abstractmethod
    def get_compiler(self, lang: str) -> CompilerInfo:
        pass

    @abc.abstractmethod
    def find_program(self, name: str, cwd: str) -> str:
        pass

    @abc.abstractmethod
    def run_command(self, cmd: str, args: T.List[str]) -> RunCommandOutput:
        pass

class LocalRuntime(Runtime):
    '''Runtime backed by the machine picomeson is running on.'''

    compiler_env_vars = {
        'c': ('CC', 'cc'),
        'cpp': ('CXX', 'c++'),
    }

    def print(self, msg: str) -> None:
        mlog.log(msg)

    def get_env(self, key: str) -> T.Optional[str]:
        return os.environ.get(key)

    def _machine(self) -> MachineInfo:
        return MachineInfo(platform.system().lower(), platform.machine().lower(), sys.byteorder)

    def build_machine(self) -> MachineInfo:
        return self._machine()

    def host_machine(self) -> MachineInfo:
        return self._machine()

    def default_prefix(self) -> str:
        return mesonlib.default_prefix()

    def is_file(self, path: str) -> bool:
        return os.path.isfile(path)

    def is_dir(self, path: str) -> bool:
        return os.path.isdir(path)

    def exists(self, path: str) -> bool:
        return os.path.exists(path)

    def read_file(self, path: str) -> bytes:
        try:
            with open(path, 'rb') as f:
                return f.read()
        except OSError as e:
            raise RuntimeException('Could not read file {!r}: {}'.format(path, e.strerror))

    def write_file(self, path: str, data: bytes) -> None:
        try:
            with open(path, 'wb') as f:
                f.write(data)
        except OSError as e:
            raise RuntimeException('Could not write file {!r}: {}'.format(path, e.strerror))

    def tempdir(self) -> T.ContextManager[str]:
        return tempfile.TemporaryDirectory(prefix='picomeson-')

    def get_compiler(self, lang: str) -> CompilerInfo:
        if lang not in self.compiler_env_vars:
            raise RuntimeException('Unsupported language: ' + lang)
        evar, default = self.compiler_env_vars[lang]
        exelist = shlex.split(self.get_env(evar) or default)
        if not exelist:
            raise RuntimeException('Environment variable {} is empty'.format(evar))
        return CompilerInfo(exelist[0], exelist[1:])

    def find_program(self, name: str, cwd: str) -> str:
        local = os.path.join(cwd, name)
        if os.path.isfile(local) and os.access(local, os.X_OK):
            return os.path.abspath(local)
        found = shutil.which(name)
        if found is None:
            raise RuntimeException('Program {!r} not found'.format(name))
        return found

    def run_command(self, cmd: str, args: T.List[str]) -> RunCommandOutput:
        mlog.debug('Running command:', ' '.join(shlex.quote(a) for a in [cmd] + args))
        try:
            p, out, err = mesonlib.Popen_safe([cmd] + args)
        except OSError as e:
            raise RuntimeException('Could not execute {!r}: {}'.format(cmd, e.strerror))
        mlog.debug('Return code:', str(p.returncode))
        return RunCommandOutput(out, err, p.returncode)
