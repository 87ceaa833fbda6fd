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

from picomeson import coredata
from picomeson.interpreterbase import (
    InterpreterTypeError, InterpreterRuntimeError, UndefinedVariable, UndefinedOption,
)
from picomeson.interpreter import (
    FileHolder, ConfigurationDataHolder, ExternalProgramHolder, ExtractedObjectsHolder,
)
from picomeson.runtime import RunCommandOutput

from .helpers import make_interpreter, run_code


class ProjectTests(unittest.TestCase):

    def test_project_sets_name_and_version(self):
        intr = run_code("project('demo', 'c', version: '1.2.3')\n"
                        "n = meson.project_name()\nv = meson.project_version()")
        self.assertEqual(intr.variables['n'], 'demo')
        self.assertEqual(intr.variables['v'], '1.2.3')

    def test_project_version_defaults(self):
        intr = run_code("project('demo')\nv = meson.project_version()")
        self.assertEqual(intr.variables['v'], '0.0.0')

    def test_project_name_must_be_string(self):
        with self.assertRaises(InterpreterTypeError):
            run_code("project(1)")

    def test_meson_version_requirement(self):
        run_code("project('demo', meson_version: '>=0.50')")
        with self.assertRaises(InterpreterRuntimeError) as cm:
            run_code("project('demo', meson_version: '>=999.0')")
        self.assertIn('999.0', cm.exception.msg)

    def test_meson_version_object(self):
        intr = run_code("v = meson.version()\nok = v.version_compare('>=1.0')\ns = '@0@'.format(v)")
        self.assertTrue(intr.variables['ok'])
        self.assertEqual(intr.variables['s'], coredata.version)

    def test_add_project_arguments_requires_language(self):
        with self.assertRaises(InterpreterTypeError):
            run_code("add_project_arguments('-DFOO')")

    def test_add_project_arguments_accumulate(self):
        intr = run_code("add_project_arguments('-DA', language: 'c')\n"
                        "add_project_arguments(['-DB', '-DC'], language: ['c', 'cpp'])")
        self.assertEqual(intr.meson.get_project_args('c'), ['-DA', '-DB', '-DC'])
        self.assertEqual(intr.meson.get_project_args('cpp'), ['-DB', '-DC'])

    def test_add_languages(self):
        intr = run_code("ok = add_languages('c')\nmaybe = add_languages('rust', required: false)")
        self.assertTrue(intr.variables['ok'])
        self.assertFalse(intr.variables['maybe'])
        with self.assertRaises(InterpreterRuntimeError) as cm:
            run_code("add_languages('rust')")
        self.assertEqual(cm.exception.msg, 'No compiler found for language: rust')


class OptionTests(unittest.TestCase):

    def test_builtin_options(self):
        intr = run_code("p = get_option('prefix')\nb = get_option('buildtype')\nd = get_option('debug')")
        self.assertEqual(intr.variables['p'], '/usr/local')
        self.assertEqual(intr.variables['b'], 'debug')
        self.assertIs(intr.variables['d'], True)

    def test_declared_options(self):
        code = '''option('feature', type: 'boolean', value: false)
option('level', type: 'integer', min: 0, max: 5, value: 3)
option('name', type: 'string')
option('mode', type: 'combo', choices: ['fast', 'slow'])
option('langs', type: 'array', choices: ['c', 'cpp', 'rust'], value: ['c'])
f = get_option('feature')
l = get_option('level')
n = get_option('name')
m = get_option('mode')
a = get_option('langs')
'''
        intr = run_code(code)
        self.assertIs(intr.variables['f'], False)
        self.assertEqual(intr.variables['l'], 3)
        self.assertEqual(intr.variables['n'], '')
        self.assertEqual(intr.variables['m'], 'fast')
        self.assertEqual(intr.variables['a'], ['c'])

    def test_option_defaults(self):
        intr = run_code("option('b', type: 'boolean')\noption('i', type: 'integer')\n"
                        "option('a', type: 'array', choices: ['x', 'y'])")
        self.assertIs(intr.get_option_value('b'), True)
        self.assertEqual(intr.get_option_value('i'), 0)
        self.assertEqual(intr.get_option_value('a'), ['x', 'y'])

    def test_option_value_of_wrong_type(self):
        with self.assertRaises(InterpreterTypeError):
            run_code("option('b', type: 'boolean', value: 'yes')")
        with self.assertRaises(InterpreterTypeError):
            run_code("option('i', type: 'integer', value: '3')")

    def test_unsupported_option_type(self):
        with self.assertRaises(InterpreterTypeError) as cm:
            run_code("option('x', type: 'feature')")
        self.assertEqual(cm.exception.msg, 'Unsupported option type: feature')

    def test_invalid_combo_default(self):
        with self.assertRaises(InterpreterRuntimeError):
            run_code("option('mode', type: 'combo', choices: ['a', 'b'], value: 'c')")

    def test_unknown_option(self):
        with self.assertRaises(UndefinedOption) as cm:
            run_code("x = get_option('nope')")
        self.assertIsInstance(cm.exception, UndefinedVariable)

    def test_set_option_from_string(self):
        intr, _, _ = make_interpreter()
        intr.interpret_string("option('level', type: 'integer', min: 1, max: 10, value: 2)")
        intr.set_option('level', '7')
        self.assertEqual(intr.get_option_value('level'), 7)
        intr.set_option('debug', 'false')
        self.assertIs(intr.get_option_value('debug'), False)
        with self.assertRaises(coredata.OptionException):
            intr.set_option('missing', '1')
        with self.assertRaises(coredata.OptionException):
            intr.set_option('buildtype', 'fastest')

    def test_array_option_is_copied(self):
        intr = run_code("option('l', type: 'array', value: ['a'])\nx = get_option('l')\nx += 'b'")
        self.assertEqual(intr.get_option_value('l'), ['a'])


class ConfigureFileTests(unittest.TestCase):

    def test_configuration_data_methods(self):
        code = '''conf = configuration_data({'INITIAL': 'yes'})
conf.set('NAME', 'demo', description: 'Project name')
conf.set10('HAVE_FOO', true)
conf.set10('HAVE_BAR', 0)
conf.set_quoted('PATH', 'a"b')
h = conf.has('NAME')
g = conf.get('MISSING', 'fallback')
k = conf.keys()
'''
        intr = run_code(code)
        conf = intr.variables['conf']
        self.assertIsInstance(conf, ConfigurationDataHolder)
        self.assertEqual(conf.get('HAVE_FOO')[0], 1)
        self.assertEqual(conf.get('HAVE_BAR')[0], 0)
        self.assertEqual(conf.get('PATH')[0], '"a\\"b"')
        self.assertTrue(intr.variables['h'])
        self.assertEqual(intr.variables['g'], 'fallback')
        self.assertEqual(intr.variables['k'], ['HAVE_BAR', 'HAVE_FOO', 'INITIAL', 'NAME', 'PATH'])

    def test_configuration_data_get_missing(self):
        with self.assertRaises(InterpreterRuntimeError):
            run_code("conf = configuration_data()\nconf.get('X')")

    def test_merge_from(self):
        intr = run_code("a = configuration_data({'A': 1})\nb = configuration_data({'B': true})\n"
                        "a.merge_from(b)\na.merge_from({'C': 'c'})")
        self.assertEqual(intr.variables['a'].keys(), ['A', 'B', 'C'])

    def test_configuration_data_is_shared(self):
        intr = run_code("a = configuration_data()\nb = a\nb.set('X', 1)\nh = a.has('X')\n"
                        "l = [a]\nl[0].set('Y', 2)")
        self.assertIs(intr.variables['a'], intr.variables['b'])
        self.assertTrue(intr.variables['h'])
        self.assertEqual(intr.variables['a'].keys(), ['X', 'Y'])

    def test_header_generation(self):
        code = '''conf = configuration_data()
conf.set('VERSION', '"1.0"')
conf.set('ENABLED', true)
conf.set('DISABLED', false)
conf.set('COUNT', 3, description: 'How many')
out = configure_file(output: 'config.h', configuration: conf)
'''
        intr, runtime, steps = make_interpreter()
        intr.interpret_string(code)
        self.assertEqual(len(steps.configured_files), 1)
        cfile = steps.configured_files[0]
        self.assertEqual(cfile.filename, 'config.h')
        self.assertEqual(cfile.build_dir, '/build')
        self.assertEqual(cfile.content,
                         '#pragma once\n\n'
                         '// How many\n#define COUNT 3\n\n'
                         '#undef DISABLED\n\n'
                         '#define ENABLED\n\n'
                         '#define VERSION "1.0"\n\n')
        out = intr.variables['out']
        self.assertIsInstance(out, FileHolder)
        self.assertEqual(out.path, '/build/config.h')

    def test_template_substitution(self):
        files = {'/src/version.h.in': '#define V "@VERSION@"\n#mesondefine HAVE_X\n#mesondefine HAVE_Y\nkeep \\@this@\n'}
        intr, runtime, steps = make_interpreter(files)
        intr.interpret_string("conf = configuration_data({'VERSION': '2.1', 'HAVE_X': true})\n"
                              "configure_file(input: 'version.h.in', output: 'version.h', configuration: conf)")
        self.assertEqual(steps.configured_files[0].content,
                         '#define V "2.1"\n#define HAVE_X\n/* #undef HAVE_Y */\nkeep @this@\n')

    def test_template_copy_without_configuration(self):
        intr, runtime, steps = make_interpreter({'/src/data.txt': 'raw @X@\n'})
        intr.interpret_string("configure_file(input: 'data.txt', output: 'data.txt')")
        self.assertEqual(steps.configured_files[0].content, 'raw @X@\n')

    def test_template_missing_placeholder(self):
        intr, runtime, steps = make_interpreter({'/src/a.in': '@MISSING@\n'})
        with self.assertRaises(InterpreterRuntimeError) as cm:
            intr.interpret_string("configure_file(input: 'a.in', output: 'a', configuration: configuration_data())")
        self.assertIn('MISSING', cm.exception.msg)

    def test_configure_file_argument_errors(self):
        with self.assertRaises(InterpreterTypeError):
            run_code("configure_file(configuration: configuration_data())")
        with self.assertRaises(InterpreterTypeError):
            run_code("configure_file(output: 'x.h')")
        with self.assertRaises(InterpreterTypeError):
            run_code("configure_file(output: 'x.h', configuration: {})")

    def test_configure_file_install_dir(self):
        intr, runtime, steps = make_interpreter()
        intr.interpret_string("configure_file(output: 'c.h', configuration: configuration_data(), "
                              "install: true, install_dir: 'include/demo')")
        cfile = steps.configured_files[0]
        self.assertTrue(cfile.install)
        self.assertEqual(cfile.install_dir, '/usr/local/include/demo')


class BuildTargetTests(unittest.TestCase):

    def test_executable_with_nested_sources(self):
        intr, runtime, steps = make_interpreter()
        intr.interpret_string("srcs = ['a.c', ['b.c', files('c.c')]]\n"
                              "exe = executable('prog', srcs, sources: 'd.c', install: true)")
        self.assertEqual(len(steps.executables), 1)
        target = steps.executables[0]
        self.assertEqual(target.name, 'prog')
        self.assertEqual(target.sources, ['/src/a.c', '/src/b.c', '/src/c.c', '/src/d.c'])
        self.assertEqual(target.install_dir, '/usr/local/bin')
        self.assertTrue(target.install)
        self.assertEqual(runtime.printed, ['Created executable: <executable prog: 4 sources>'])

    def test_static_library(self):
        intr, runtime, steps = make_interpreter()
        intr.interpret_string("inc = include_directories('include')\n"
                              "lib = static_library('foo', 'foo.c', include_directories: inc, c_args: ['-DX'])\n"
                              "p = lib.full_path()")
        target = steps.static_libraries[0]
        self.assertEqual(target.include_directories, ['/src/include'])
        self.assertEqual(target.extra_args, {'c': ['-DX']})
        self.assertEqual(target.install_dir, '/usr/local/lib')
        self.assertEqual(intr.variables['p'], '/build/libfoo.a')

    def test_target_name_must_be_string(self):
        with self.assertRaises(InterpreterTypeError) as cm:
            run_code("executable(1, 'a.c')")
        self.assertEqual(cm.exception.msg, 'First argument to executable must be a string (name)')

    def test_extract_objects(self):
        intr, runtime, steps = make_interpreter()
        intr.interpret_string("lib = static_library('foo', 'a.c', 'b.c')\n"
                              "objs = lib.extract_objects('b.c')\n"
                              "exe = executable('prog', 'main.c', objects: objs)")
        objs = intr.variables['objs']
        self.assertIsInstance(objs, ExtractedObjectsHolder)
        self.assertEqual(objs.objects, ['/build/foo.p/b.c.o'])
        self.assertEqual(steps.executables[0].objects, ['/build/foo.p/b.c.o'])
        with self.assertRaises(InterpreterRuntimeError):
            intr.interpret_string("lib.extract_objects('zzz.c')")

    def test_install_headers(self):
        intr, runtime, steps = make_interpreter()
        intr.interpret_string("install_headers('a.h', ['b.h'], subdir: 'demo')")
        self.assertEqual(steps.installed_headers, [('/usr/local/include/demo', ['/src/a.h', '/src/b.h'])])

    def test_custom_target_and_test_are_accepted(self):
        intr = run_code("x = custom_target('gen', output: 'x.c')\ntest('t', x)")
        self.assertIsNone(intr.variables['x'])


class SubdirTests(unittest.TestCase):

    def test_subdir_moves_cursor(self):
        files = {
            '/src/lib/meson.build': "here = meson.current_source_dir()\n"
                                    "bdir = meson.current_build_dir()\n"
                                    "lib = static_library('util', 'util.c')\n",
        }
        intr, runtime, steps = make_interpreter(files)
        intr.interpret_string("subdir('lib')\nafter = meson.current_source_dir()")
        self.assertEqual(intr.variables['here'], '/src/lib')
        self.assertEqual(intr.variables['bdir'], '/build/lib')
        self.assertEqual(intr.variables['after'], '/src')
        self.assertEqual(steps.static_libraries[0].sources, ['/src/lib/util.c'])
        self.assertEqual(steps.static_libraries[0].build_dir, '/build/lib')

    def test_subdir_cursor_restored_on_error(self):
        files = {'/src/bad/meson.build': "x = undefined_thing\n"}
        intr, runtime, steps = make_interpreter(files)
        with self.assertRaises(UndefinedVariable) as cm:
            intr.interpret_string("subdir('bad')")
        self.assertEqual(cm.exception.file, '/src/bad/meson.build')
        self.assertEqual(intr.current_dir, '/src')
        self.assertEqual(intr.subdir, '')

    def test_missing_subdir(self):
        with self.assertRaises(InterpreterRuntimeError):
            run_code("subdir('nowhere')")


class UtilityFunctionTests(unittest.TestCase):

    def test_message(self):
        intr, runtime, _ = make_interpreter()
        intr.interpret_string("message('value:', 1, true, ['a', 2], {'k': 'v'})")
        self.assertEqual(runtime.printed, ['value: 1 true [a, 2] {k: v}'])

    def test_warning_does_not_stop(self):
        intr = run_code("warning('careful')\nx = 1")
        self.assertEqual(intr.variables['x'], 1)

    def test_error(self):
        with self.assertRaises(InterpreterRuntimeError) as cm:
            run_code("error('bad', 'thing')")
        self.assertEqual(cm.exception.msg, 'bad thing')

    def test_assert(self):
        run_code("assert(1 == 1, 'math works')")
        with self.assertRaises(InterpreterRuntimeError) as cm:
            run_code("assert(false, 'broken')")
        self.assertEqual(cm.exception.msg, 'Assertion failed: broken')
        with self.assertRaises(InterpreterRuntimeError) as cm:
            run_code("assert(false)")
        self.assertEqual(cm.exception.msg, 'Assertion failed')
        with self.assertRaises(InterpreterTypeError):
            run_code("assert(1)")

    def test_variable_functions(self):
        intr = run_code("set_variable('x', [1, 2])\ny = get_variable('x')\n"
                        "z = get_variable('nope', 'default')\nhas = is_variable('x')\nnot_has = is_variable('nope')")
        self.assertEqual(intr.variables['y'], [1, 2])
        self.assertEqual(intr.variables['z'], 'default')
        self.assertTrue(intr.variables['has'])
        self.assertFalse(intr.variables['not_has'])
        with self.assertRaises(UndefinedVariable):
            run_code("get_variable('nope')")

    def test_join_paths(self):
        intr = run_code("a = join_paths('usr', 'local', 'lib')\nb = join_paths('a', '/abs', 'c')")
        self.assertEqual(intr.variables['a'], 'usr/local/lib')
        self.assertEqual(intr.variables['b'], '/abs/c')
        with self.assertRaises(InterpreterTypeError):
            run_code("join_paths('a', 1)")

    def test_files(self):
        intr = run_code("f = files('a.c', 'sub/b.c')\np = f[1].full_path()")
        self.assertEqual([f.path for f in intr.variables['f']], ['/src/a.c', '/src/sub/b.c'])
        self.assertEqual(intr.variables['p'], '/src/sub/b.c')

    def test_environment(self):
        intr = run_code("env = environment({'A': 'x'})\nenv.append('A', 'y')\nenv.prepend('A', 'w')\n"
                        "env.set('B', 'p', 'q', separator: ';')")
        self.assertEqual(intr.variables['env'].envvars, {'A': 'w:x:y', 'B': 'p;q'})

    def test_import(self):
        intr, runtime, _ = make_interpreter({'/src/present.txt': ''})
        intr.interpret_string("fs2 = import('fs')\na = fs2.exists('present.txt')\nb = fs.is_dir('present.txt')\n"
                              "c = fs.replace_suffix('dir/foo.c', '.o')")
        self.assertTrue(intr.variables['a'])
        self.assertFalse(intr.variables['b'])
        self.assertEqual(intr.variables['c'], 'dir/foo.o')
        with self.assertRaises(InterpreterRuntimeError):
            intr.interpret_string("import('gnome')")

    def test_machine_objects(self):
        intr = run_code("s = host_machine.system()\nc = build_machine.cpu_family()\n"
                        "e = target_machine.endian()")
        self.assertEqual(intr.variables['s'], 'linux')
        self.assertEqual(intr.variables['c'], 'x86_64')
        self.assertEqual(intr.variables['e'], 'little')


class ExternalProgramTests(unittest.TestCase):

    def test_find_program(self):
        intr, runtime, _ = make_interpreter()
        runtime.programs['python3'] = '/usr/bin/python3'
        intr.interpret_string("p = find_program('python', 'python3')\nfound = p.found()\npath = p.full_path()\n"
                              "q = find_program('nope', required: false)\nqf = q.found()")
        self.assertIsInstance(intr.variables['p'], ExternalProgramHolder)
        self.assertTrue(intr.variables['found'])
        self.assertEqual(intr.variables['path'], '/usr/bin/python3')
        self.assertFalse(intr.variables['qf'])

    def test_find_program_required_by_default(self):
        with self.assertRaises(InterpreterRuntimeError) as cm:
            run_code("find_program('nope')")
        self.assertEqual(cm.exception.msg, "Program 'nope' not found")

    def test_run_command(self):
        intr, runtime, _ = make_interpreter()
        runtime.programs['echo'] = '/bin/echo'
        runtime.handlers['/bin/echo'] = lambda args: RunCommandOutput(' '.join(args) + '\n', '', 0)
        intr.interpret_string("r = run_command(find_program('echo'), 'hi', 'there', check: true)\n"
                              "out = r.stdout().strip()\nrc = r.returncode()")
        self.assertEqual(intr.variables['out'], 'hi there')
        self.assertEqual(intr.variables['rc'], 0)
        self.assertEqual(runtime.commands_run, [['/bin/echo', 'hi', 'there']])

    def test_run_command_check(self):
        intr, runtime, _ = make_interpreter()
        runtime.handlers['false'] = lambda args: RunCommandOutput('', 'oops', 1)
        intr.interpret_string("r = run_command('false')\nrc = r.returncode()\nerr = r.stderr()")
        self.assertEqual(intr.variables['rc'], 1)
        self.assertEqual(intr.variables['err'], 'oops')
        with self.assertRaises(InterpreterRuntimeError):
            intr.interpret_string("run_command('false', check: true)")

    def test_run_command_failures(self):
        with self.assertRaises(InterpreterRuntimeError) as cm:
            run_code("run_command()")
        self.assertEqual(cm.exception.msg, 'Expected at least one argument')
        with self.assertRaises(InterpreterRuntimeError):
            run_code("run_command('not-a-handler')")


if __name__ == '__main__':
    unittest.main()
