# Copyright 2016-2018 The Meson development team

# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at

#     http://www.apache.org/licenses/LICENSE-2.0

# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

import argparse
import typing as T

from . import mlog, coredata
from .interpreter import Interpreter
from .machinefile import MachineFile, load_machine_file
from .runtime import Runtime, LocalRuntime, RuntimeException
from .steps import BuildSteps, LoggingSteps

options_filename = 'meson_options.txt'
build_filename = 'meson.build'

def parse_define(value: str) -> T.Tuple[str, str]:
    if '=' not in value:
        raise argparse.ArgumentTypeError('No value specified for option')
    key, val = value.split('=', 1)
    return key, val

def add_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument('--buildtype', default='debug', choices=coredata.buildtypelist,
                        help='Build type to use (default: %(default)s).')
    parser.add_argument('--prefix', default='/usr/local', metavar='DIR',
                        help='Installation prefix (default: %(default)s).')
    parser.add_argument('-D', action='append', dest='projectoptions', default=[],
                        type=parse_define, metavar='option=value',
                        help='Set the value of an option, can be used several times.')
    parser.add_argument('--cross-file', default=None,
                        help='File describing cross compilation environment.')
    parser.add_argument('--log-file-dir', default=None, metavar='DIR',
                        help='Write meson-log.txt into this directory.')
    parser.add_argument('--fatal-meson-warnings', action='store_true', dest='fatal_warnings',
                        help='Make all Meson warnings fatal')
    parser.add_argument('-v', '--version', action='version',
                        version=coredata.version)
    parser.add_argument('builddir')
    parser.add_argument('sourcedir', nargs='?', default='.')

class Meson:
    '''
    Build driver. Collects option overrides, then runs the bootstrap
    sequence against a source tree:

    1. the builtin options,
    2. the runtime's default installation prefix,
    3. the project's meson_options.txt, if any,
    4. the overrides given to option(), and finally
    5. the top level meson.build.
    '''

    def __init__(self, runtime: Runtime, steps: BuildSteps):
        self.runtime = runtime
        self.steps = steps
        self.options = {}  # type: T.Dict[str, str]
        self.machine_file = None  # type: T.Optional[MachineFile]

    def option(self, name: str, value: str) -> 'Meson':
        self.options[name] = value
        return self

    def cross_file(self, machine_file: MachineFile) -> 'Meson':
        self.machine_file = machine_file
        return self

    def _exists(self, path: str) -> bool:
        try:
            return self.runtime.exists(path)
        except RuntimeException:
            return False

    def build(self, source_dir: str, build_dir: str) -> Interpreter:
        mlog.log(mlog.bold('The Meson build system'))
        mlog.log('Version:', coredata.version)
        mlog.log('Source dir:', mlog.bold(source_dir))
        mlog.log('Build dir:', mlog.bold(build_dir))
        if self.machine_file is not None:
            mlog.log('Build type:', mlog.bold('cross build'))
        else:
            mlog.log('Build type:', mlog.bold('native build'))

        intr = Interpreter(self.runtime, self.steps, source_dir, build_dir, self.machine_file)
        build_machine = intr.variables['build_machine']
        host_machine = intr.variables['host_machine']
        mlog.debug('Build machine cpu family:', build_machine.cpu_family)
        mlog.debug('Build machine cpu:', build_machine.cpu)
        mlog.log('Host machine cpu family:', mlog.bold(host_machine.cpu_family))
        mlog.log('Host machine cpu:', mlog.bold(host_machine.cpu))

        intr.interpret_string(coredata.BUILTIN_OPTIONS, 'builtin-options.txt')
        # prefix is platform dependent, so it is only known at run time
        intr.set_option('prefix', self.runtime.default_prefix())

        options_file = self.runtime.join_paths(source_dir, options_filename)
        if self._exists(options_file):
            intr.interpret_file(options_file)

        for name, value in self.options.items():
            intr.set_option(name, value)

        intr.interpret_file(self.runtime.join_paths(source_dir, build_filename))
        return intr

def run(options: argparse.Namespace) -> int:
    if options.log_file_dir:
        mlog.initialize(options.log_file_dir, options.fatal_warnings)
    else:
        mlog.log_fatal_warnings = options.fatal_warnings
    app = Meson(LocalRuntime(), LoggingSteps())
    app.option('buildtype', options.buildtype)
    app.option('prefix', options.prefix)
    for key, value in options.projectoptions:
        app.option(key, value)
    if options.cross_file:
        app.cross_file(load_machine_file(options.cross_file))
    app.build(options.sourcedir, options.builddir)
    return 0
