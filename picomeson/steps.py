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

import abc
import typing as T

from . import mlog
from .mesonlib import join_paths

if T.TYPE_CHECKING:
    from .interpreter.configdata import ConfigureFile
    from .interpreter.interpreterobjects import BuildTargetHolder

class BuildSteps(metaclass=abc.ABCMeta):
    '''
    Receives the resolved build description. Implementations translate
    targets, configured files and install rules into their own backend
    format. Every call is a one-way notification.
    '''

    @abc.abstractmethod
    def build_static_library(self, target: 'BuildTargetHolder') -> None:
        pass

    @abc.abstractmethod
    def build_executable(self, target: 'BuildTargetHolder') -> None:
        pass

    @abc.abstractmethod
    def configure_file(self, file: 'ConfigureFile') -> None:
        pass

    @abc.abstractmethod
    def install_headers(self, install_dir: str, headers: T.List[str]) -> None:
        pass

class LoggingSteps(BuildSteps):
    '''Reports each build step through mlog instead of generating rules.'''

    def configure_file(self, file: 'ConfigureFile') -> None:
        mlog.log(' > Configuring file {}: {} bytes'.format(
            join_paths(file.build_dir, file.filename), len(file.content)))
        if file.install:
            mlog.log(' > Installing header to {}: {} header'.format(file.install_dir, file.filename))

    def install_headers(self, install_dir: str, headers: T.List[str]) -> None:
        mlog.log(' > Installing headers to {}: {} headers'.format(install_dir, len(headers)))

    def build_executable(self, target: 'BuildTargetHolder') -> None:
        mlog.log(' > Building executable {}: {} sources'.format(
            join_paths(target.install_dir, target.filename), len(target.sources)))

    def build_static_library(self, target: 'BuildTargetHolder') -> None:
        # a library built only from a placeholder source has nothing to report
        is_empty = not target.sources or \
            (len(target.sources) == 1 and target.sources[0].rsplit('/', 1)[-1] == 'empty.c')
        if target.install and not is_empty:
            mlog.log(' > Building static library {}: {} sources'.format(
                join_paths(target.install_dir, target.filename), len(target.sources)))
