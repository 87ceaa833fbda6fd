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

import unittest

from picomeson.interpreterbase import InterpreterRuntimeError
from picomeson.interpreter import CompilerHolder
from picomeson.interpreter.compiler import text_after_delimiter, DELIMITER
from picomeson.machinefile import parse_machine_file
from picomeson.runtime import RunCommandOutput

from .helpers import make_interpreter, FakeCompiler


class CompilerTests(unittest.TestCase):

    def setUp(self):
        self.intr, self.runtime, self.steps = make_interpreter()
        self.compiler = FakeCompiler(self.runtime)
        self.runtime.handlers['cc'] = self.compiler

    def run_code(self, code):
        self.intr.interpret_string("cc = meson.get_compiler('c')\n" + code)
        return self.intr.variables

    def test_get_compiler(self):
        variables = self.run_code("cmd = cc.cmd_array()")
        self.assertIsInstance(variables['cc'], CompilerHolder)
        self.assertEqual(variables['cmd'], ['cc'])

    def test_get_compiler_unknown_language(self):
        with self.assertRaises(InterpreterRuntimeError) as cm:
            self.intr.interpret_string("meson.get_compiler('fortran')")
        self.assertIn('Failed to get fortran compiler', cm.exception.msg)

    def test_get_id(self):
        self.compiler.family = 'clang'
        self.assertEqual(self.run_code("id = cc.get_id()")['id'], 'clang')
        args = self.compiler.invocations[0]
        self.assertEqual(args[:2], ['-c', '-E'])
        self.assertEqual(args[-2:], ['-o', '/tmp/picomeson-1/output'])

    def test_get_linker_id(self):
        self.assertEqual(self.run_code("l = cc.get_linker_id()")['l'], 'ld.bfd')
        self.compiler.linker_banner = 'LLD 17.0.1 (compatible with GNU linkers)'
        self.assertEqual(self.run_code("l = cc.get_linker_id()")['l'], 'ld.lld')
        self.compiler.linker_banner = 'something else'
        with self.assertRaises(InterpreterRuntimeError):
            self.run_code("cc.get_linker_id()")

    def test_has_argument(self):
        self.compiler.unsupported = {'-fbogus'}
        variables = self.run_code("good = cc.has_argument('-Wall')\nbad = cc.has_argument('-fbogus')")
        self.assertTrue(variables['good'])
        self.assertFalse(variables['bad'])
        with self.assertRaises(InterpreterRuntimeError):
            self.run_code("cc.has_argument('-fbogus', required: true)")

    def test_get_supported_arguments(self):
        self.compiler.unsupported = {'-fbogus'}
        variables = self.run_code("s = cc.get_supported_arguments('-Wall', '-fbogus', ['-Wextra'])")
        self.assertEqual(variables['s'], ['-Wall', '-Wextra'])

    def test_has_function(self):
        self.compiler.missing_functions = {'no_such_func'}
        variables = self.run_code("a = cc.has_function('printf', prefix: '#include <stdio.h>')\n"
                                  "b = cc.has_function('no_such_func')")
        self.assertTrue(variables['a'])
        self.assertFalse(variables['b'])

    def test_compiles_and_links(self):
        variables = self.run_code("a = cc.compiles('int x;', name: 'decl')\n"
                                  "b = cc.compiles('syntax error')\n"
                                  "c = cc.links('int main(void) { return 0; }', args: ['-static'])")
        self.assertTrue(variables['a'])
        self.assertFalse(variables['b'])
        self.assertTrue(variables['c'])
        self.assertIn('-c', self.compiler.invocations[0])
        self.assertNotIn('-c', self.compiler.invocations[2])
        self.assertIn('-static', self.compiler.invocations[2])

    def test_compiles_file_argument(self):
        self.runtime.files['/src/check.c'] = b'int y;\n'
        self.runtime.files['/src/broken.c'] = b'syntax error\n'
        variables = self.run_code("ok = cc.compiles(files('check.c')[0])\nbad = cc.compiles(files('broken.c')[0])")
        self.assertTrue(variables['ok'])
        self.assertFalse(variables['bad'])

    def test_symbols_have_underscore_prefix(self):
        self.assertFalse(self.run_code("u = cc.symbols_have_underscore_prefix()")['u'])
        self.compiler.underscore = '_'
        self.assertTrue(self.run_code("u = cc.symbols_have_underscore_prefix()")['u'])
        self.compiler.underscore = 'unknown'
        with self.assertRaises(InterpreterRuntimeError):
            self.run_code("cc.symbols_have_underscore_prefix()")

    def test_tempdirs_are_removed(self):
        self.run_code("cc.compiles('int x;')\ncc.compiles('syntax error')")
        self.assertEqual(self.runtime.removed_tempdirs, ['/tmp/picomeson-1', '/tmp/picomeson-2'])
        self.assertFalse([f for f in self.runtime.files if f.startswith('/tmp/')])

    def test_project_arguments_are_used(self):
        self.run_code("add_project_arguments('-DPROJECT', language: 'c')\ncc.compiles('int x;', args: '-DEXTRA')")
        args = self.compiler.invocations[0]
        self.assertLess(args.index('-DPROJECT'), args.index('-DEXTRA'))

    def test_compiler_from_machine_file(self):
        machine = parse_machine_file("[binaries]\nc = ['arm-none-eabi-gcc', '-mthumb']\n")
        intr, runtime, _ = make_interpreter(machine_file=machine)
        compiler = FakeCompiler(runtime)
        runtime.handlers['arm-none-eabi-gcc'] = compiler
        intr.interpret_string("cc = meson.get_compiler('c')\nok = cc.compiles('int x;')")
        self.assertTrue(intr.variables['ok'])
        self.assertEqual(compiler.invocations[0][0], '-mthumb')

    def test_compiler_that_cannot_run(self):
        del self.runtime.handlers['cc']
        with self.assertRaises(InterpreterRuntimeError) as cm:
            self.run_code("cc.compiles('int x;')")
        self.assertIn('Failed to run compiler', cm.exception.msg)

    def test_text_after_delimiter(self):
        self.assertEqual(text_after_delimiter('junk\n{} gcc\n'.format(DELIMITER)), 'gcc')
        self.assertEqual(text_after_delimiter('{} a\n{} b\n'.format(DELIMITER, DELIMITER)), 'b')
        self.assertIsNone(text_after_delimiter('no marker here'))

    def test_failed_compile_output_is_empty(self):
        self.runtime.handlers['cc'] = lambda args: RunCommandOutput('', 'boom', 1)
        with self.assertRaises(InterpreterRuntimeError):
            self.run_code("cc.get_id()")


if __name__ == '__main__':
    unittest.main()
