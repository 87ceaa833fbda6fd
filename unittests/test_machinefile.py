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

import os
import tempfile
import unittest

from picomeson.mesonlib import EnvironmentException
from picomeson.mparser import UnexpectedToken
from picomeson.machinefile import parse_machine_file, load_machine_file, join_machine_paths

from .helpers import make_interpreter


class MachineFileTests(unittest.TestCase):

    def test_constants_section(self):
        content = '''
[constants]
toolchain_prefix = '/usr/bin/'
gcc_name = 'gcc'
base_url = 'https://example.com'
url = base_url / '#some_hash'
array = [
    'item1',
    'item2',
    'item3'
] + 'item4'

[binaries]
c = toolchain_prefix / gcc_name # some comment here
cpp = toolchain_prefix / 'g++'
'''
        mf = parse_machine_file(content)
        self.assertEqual(mf.get('constants', 'array'), ['item1', 'item2', 'item3', 'item4'])
        self.assertEqual(mf.get('constants', 'url'), 'https://example.com/#some_hash')
        self.assertEqual(mf.get('binaries', 'c'), '/usr/bin/gcc')
        self.assertEqual(mf.get('binaries', 'cpp'), '/usr/bin/g++')

    def test_string_concatenation(self):
        content = '''
[constants]
prefix = '-D'
foo = 'FOO'

[properties]
c_args = [prefix + foo + '=1', '-DBAR=2']
'''
        mf = parse_machine_file(content)
        self.assertEqual(mf.get('properties', 'c_args'), ['-DFOO=1', '-DBAR=2'])

    def test_array_concatenation(self):
        content = '''
[constants]
base_args = ['-O2', '-g']

[properties]
c_args = base_args + ['-DFOO=1']
prepended = '-pipe' + base_args
'''
        mf = parse_machine_file(content)
        self.assertEqual(mf.get('properties', 'c_args'), ['-O2', '-g', '-DFOO=1'])
        self.assertEqual(mf.get('properties', 'prepended'), ['-pipe', '-O2', '-g'])

    def test_section_local_variables(self):
        mf = parse_machine_file("[binaries]\nprefix = '/usr/bin/'\nc = prefix / 'gcc'\ncpp = prefix / 'g++'\n")
        self.assertEqual(mf.get('binaries', 'c'), '/usr/bin/gcc')

    def test_section_locals_do_not_leak(self):
        with self.assertRaises(UnexpectedToken):
            parse_machine_file("[binaries]\nprefix = '/usr/bin/'\n[properties]\nc = prefix / 'gcc'\n")

    def test_repeated_section_keeps_first_position(self):
        content = '''
[constants]
a = 'Foo'
b = a + 'World'

[constants]
a = 'Hello'
'''
        self.assertEqual(parse_machine_file(content).get('constants', 'b'), 'HelloWorld')

    def test_forward_reference_fails(self):
        content = "[constants]\nb = a + 'World'\n\n[constants]\na = 'Hello'\n"
        with self.assertRaises(UnexpectedToken):
            parse_machine_file(content)

    def test_repeated_section_in_order(self):
        content = "[constants]\na = 'Hello'\n\n[constants]\nb = a + 'World'\n"
        self.assertEqual(parse_machine_file(content).get('constants', 'b'), 'HelloWorld')

    def test_scalar_values(self):
        mf = parse_machine_file("; comment\n# another\n[properties]\nflag = true\ncount = 3\n")
        self.assertIs(mf.get('properties', 'flag'), True)
        self.assertEqual(mf.get('properties', 'count'), 3)
        self.assertIsNone(mf.get('properties', 'missing'))
        self.assertIsNone(mf.get('nosection', 'missing'))

    def test_malformed_lines(self):
        for content in ("[a]\njust words\n",
                        "key = 'no section'\n",
                        "[a]\nbad name = 1\n"):
            with self.subTest(content=content):
                with self.assertRaises(EnvironmentException):
                    parse_machine_file(content)

    def test_malformed_values(self):
        for content in ("[a]\nv = ['unterminated'\n",
                        "[a]\nv = 1 2\n",
                        "[a]\nv = 1 + 'x'\n",
                        "[a]\nv = foo()\n"):
            with self.subTest(content=content):
                with self.assertRaises(UnexpectedToken):
                    parse_machine_file(content)

    def test_value_error_position(self):
        with self.assertRaises(UnexpectedToken) as cm:
            parse_machine_file("[a]\nv = [\n  'x',\n  y]\n", 'cross.txt')
        self.assertEqual(cm.exception.lineno, 3)
        self.assertEqual(cm.exception.file, 'cross.txt')
        self.assertIn("Undefined name 'y'", str(cm.exception))

    def test_join_machine_paths(self):
        self.assertEqual(join_machine_paths('a', 'b'), 'a/b')
        self.assertEqual(join_machine_paths('a/', '/b'), 'a/b')
        self.assertEqual(join_machine_paths('c:\\', 'b'), 'c:\\b')

    def test_load_machine_file(self):
        with tempfile.TemporaryDirectory() as d:
            path = os.path.join(d, 'cross.txt')
            with open(path, 'w', encoding='utf-8') as f:
                f.write("[host_machine]\nsystem = 'windows'\n")
            self.assertEqual(load_machine_file(path).get('host_machine', 'system'), 'windows')
            with self.assertRaises(EnvironmentException):
                load_machine_file(os.path.join(d, 'missing.txt'))

    def test_interpreter_uses_machine_file(self):
        content = '''
[host_machine]
system = 'windows'
cpu_family = 'aarch64'

[properties]
needs_exe_wrapper = true
'''
        intr, _, _ = make_interpreter(machine_file=parse_machine_file(content))
        intr.interpret_string("s = host_machine.system()\nc = host_machine.cpu_family()\n"
                              "b = build_machine.system()\n"
                              "w = meson.get_cross_property('needs_exe_wrapper')\n"
                              "d = meson.get_cross_property('missing', 'dflt')")
        self.assertEqual(intr.variables['s'], 'windows')
        self.assertEqual(intr.variables['c'], 'aarch64')
        self.assertEqual(intr.variables['b'], 'linux')
        self.assertIs(intr.variables['w'], True)
        self.assertEqual(intr.variables['d'], 'dflt')


if __name__ == '__main__':
    unittest.main()
