#!/usr/bin/env python3
# Copyright 2016-2017 The Meson development team

# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at

#     http://www.apache.org/licenses/LICENSE-2.0

# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

import os
import sys
import unittest

from picomeson import mlog

from unittests.test_parser import LexerTests, ParserTests
from unittests.test_interpreter import ValueHelperTests, OperatorTests, ControlFlowTests, ErrorTests, BuiltinMethodTests
from unittests.test_builtins import (
    ProjectTests, OptionTests, ConfigureFileTests, BuildTargetTests, SubdirTests,
    UtilityFunctionTests, ExternalProgramTests,
)
from unittests.test_compiler import CompilerTests
from unittests.test_machinefile import MachineFileTests
from unittests.test_mesonlib import InternalTests, ConfigurationTests
from unittests.test_coredata import UserOptionTests
from unittests.test_driver import DriverTests, CommandLineTests

def unset_envs():
    # For unit tests we must fully control all command lines
    # so that there are no unexpected changes coming from the
    # environment.
    for v in ['CC', 'CXX', 'MESON_FORCE_BACKTRACE']:
        if v in os.environ:
            del os.environ[v]

def main():
    unset_envs()
    mlog.disable()
    cases = ['LexerTests', 'ParserTests',
             'ValueHelperTests', 'OperatorTests', 'ControlFlowTests', 'ErrorTests', 'BuiltinMethodTests',
             'ProjectTests', 'OptionTests', 'ConfigureFileTests', 'BuildTargetTests', 'SubdirTests',
             'UtilityFunctionTests', 'ExternalProgramTests',
             'CompilerTests', 'MachineFileTests', 'InternalTests', 'ConfigurationTests',
             'UserOptionTests', 'DriverTests', 'CommandLineTests']
    return unittest.main(defaultTest=cases, buffer=True, exit=False).result.wasSuccessful()

if __name__ == '__main__':
    sys.exit(0 if main() else 1)
