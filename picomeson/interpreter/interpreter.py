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

import typing as T

from .. import mparser, mesonlib, mlog, coredata
from ..runtime import Runtime, RuntimeException, detect_cpu_family
from ..steps import BuildSteps
from ..interpreterbase import (
    InterpreterBase, InterpreterObject, InterpreterTypeError, InterpreterRuntimeError,
    UndefinedVariable, UndefinedOption, TYPE_var, TYPE_kwargs,
    noArgsFlattening, noKwargs, stringArgs, permittedKwargs,
    coerce_string, first_string_arg, is_int, type_name,
)
from .interpreterobjects import (
    FileHolder, IncludeDirsHolder, ExtractedObjectsHolder, BuildTargetHolder,
    EnvironmentVariablesHolder, ExternalProgramHolder, RunResultHolder,
    MachineHolder, FSModule, MesonMain, object_to_path,
)
from .compiler import CompilerHolder
from .configdata import (
    ConfigurationDataHolder, ConfigureFile, generate_config_header, substitute_template,
)

if T.TYPE_CHECKING:
    from ..machinefile import MachineFile

permitted_kwargs = {'add_languages': {'required', 'native'},
                    'add_project_arguments': {'language', 'native'},
                    'build_target': {'sources', 'objects', 'install', 'install_dir',
                                     'include_directories', 'c_args', 'cpp_args',
                                     'link_with', 'dependencies', 'native'},
                    'configure_file': {'input', 'output', 'configuration', 'install',
                                       'install_dir', 'encoding'},
                    'find_program': {'required', 'native', 'dirs'},
                    'install_headers': {'install_dir', 'subdir'},
                    'option': {'type', 'value', 'choices', 'min', 'max', 'description',
                               'yield', 'deprecated'},
                    'project': {'version', 'meson_version', 'license', 'default_options'},
                    'run_command': {'check', 'env'},
                    }

class Interpreter(InterpreterBase):

    def __init__(self, runtime: Runtime, steps: BuildSteps, source_dir: str = '.',
                 build_dir: str = 'build', machine_file: T.Optional['MachineFile'] = None):
        super().__init__()
        self.runtime = runtime
        self.steps = steps
        self.source_dir = source_dir
        self.build_dir = build_dir
        # Cursor used to resolve relative paths, moved by subdir()
        self.current_dir = source_dir
        self.subdir = ''
        self.options = {}  # type: T.Dict[str, coredata.UserOption[T.Any]]
        self.machine_file = machine_file
        self.properties = machine_file.section('properties') if machine_file else {}
        self.meson = MesonMain(self, source_dir, build_dir)
        self.build_func_dict()
        self.builtin_variables()

    def build_func_dict(self) -> None:
        self.funcs.update({'add_languages': self.func_add_languages,
                           'add_project_arguments': self.func_add_project_arguments,
                           'assert': self.func_assert,
                           'configuration_data': self.func_configuration_data,
                           'configure_file': self.func_configure_file,
                           'custom_target': self.func_custom_target,
                           'environment': self.func_environment,
                           'error': self.func_error,
                           'executable': self.func_executable,
                           'files': self.func_files,
                           'find_program': self.func_find_program,
                           'get_option': self.func_get_option,
                           'get_variable': self.func_get_variable,
                           'import': self.func_import,
                           'include_directories': self.func_include_directories,
                           'install_headers': self.func_install_headers,
                           'is_variable': self.func_is_variable,
                           'join_paths': self.func_join_paths,
                           'message': self.func_message,
                           'option': self.func_option,
                           'project': self.func_project,
                           'run_command': self.func_run_command,
                           'set_variable': self.func_set_variable,
                           'static_library': self.func_static_lib,
                           'subdir': self.func_subdir,
                           'test': self.func_test,
                           'warning': self.func_warning,
                           })

    def builtin_variables(self) -> None:
        host = self.host_machine()
        self.variables['meson'] = self.meson
        self.variables['build_machine'] = self.make_machine(self.runtime_call(self.runtime.build_machine, 'build machine'))
        self.variables['host_machine'] = host
        # Cross compiling to a third machine is not supported, so the
        # target is always the host.
        self.variables['target_machine'] = host
        self.variables['fs'] = FSModule(self)

    def runtime_call(self, func: T.Callable[[], T.Any], what: str) -> T.Any:
        try:
            return func()
        except RuntimeException as e:
            raise InterpreterRuntimeError('Failed to get {} info: {}'.format(what, e))

    def make_machine(self, info: T.Any) -> MachineHolder:
        return MachineHolder(info.system, detect_cpu_family(info.cpu), info.cpu, info.endian)

    def host_machine(self) -> MachineHolder:
        machine = self.make_machine(self.runtime_call(self.runtime.host_machine, 'host machine'))
        if self.machine_file is not None:
            section = self.machine_file.section('host_machine')
            for key in ('system', 'cpu_family', 'cpu', 'endian'):
                if key in section:
                    if not isinstance(section[key], str):
                        raise InterpreterTypeError('host_machine entry {!r} must be a string'.format(key))
                    setattr(machine, key, section[key])
        return machine

    # Entry points used by the build driver.

    def read_text(self, path: str) -> str:
        try:
            return self.runtime.read_file(path).decode('utf-8')
        except RuntimeException as e:
            raise InterpreterRuntimeError('Could not read file {!r}: {}'.format(path, e))
        except UnicodeDecodeError as e:
            raise InterpreterRuntimeError('File {!r} is not valid UTF-8: {}'.format(path, e))

    def interpret_file(self, path: str) -> None:
        mlog.debug('Interpreting', path)
        self.interpret_string(self.read_text(path), path)

    def set_option(self, name: str, value: str) -> None:
        if name not in self.options:
            raise coredata.OptionException('Unknown option: "{}".'.format(name))
        self.options[name].set_value(value)

    def join_paths(self, left: str, right: str) -> str:
        return self.runtime.join_paths(left, right)

    def get_option_value(self, name: str) -> T.Any:
        if name not in self.options:
            raise UndefinedOption(name)
        value = self.options[name].value
        if isinstance(value, list):
            return list(value)
        return value

    def current_build_dir(self) -> str:
        if not self.subdir:
            return self.build_dir
        return mesonlib.join_paths(self.build_dir, self.subdir)

    def get_compiler(self, lang: str) -> CompilerHolder:
        binaries = self.machine_file.section('binaries') if self.machine_file else {}
        if lang in binaries:
            command = mesonlib.flatten(binaries[lang])
            if not command or not all(isinstance(c, str) for c in command):
                raise InterpreterTypeError('Machine file entry for {!r} must be a string or an array of strings'.format(lang))
            return CompilerHolder(self, lang, command)
        try:
            info = self.runtime.get_compiler(lang)
        except RuntimeException as e:
            raise InterpreterRuntimeError('Failed to get {} compiler: {}'.format(lang, e))
        return CompilerHolder(self, lang, info.get_exelist())

    def source_strings_to_files(self, sources: T.List[TYPE_var]) -> T.List[str]:
        results = []
        for s in mesonlib.flatten(sources):
            if isinstance(s, str):
                results.append(mesonlib.join_paths(self.current_dir, s))
            elif isinstance(s, FileHolder):
                results.append(s.path)
            else:
                raise InterpreterTypeError('Expected arguments to be strings or File objects, got {}'.format(type_name(s)))
        return results

    def _kwarg_bool(self, kwargs: TYPE_kwargs, name: str, default: bool) -> bool:
        value = kwargs.get(name, default)
        if not isinstance(value, bool):
            raise InterpreterTypeError("'{}' keyword argument must be of type bool".format(name))
        return value

    def _kwarg_string(self, kwargs: TYPE_kwargs, name: str) -> T.Optional[str]:
        value = kwargs.get(name)
        if value is not None and not isinstance(value, str):
            raise InterpreterTypeError("'{}' keyword argument must be of type string".format(name))
        return value

    def _kwarg_stringlist(self, kwargs: TYPE_kwargs, name: str) -> T.List[str]:
        values = mesonlib.flatten(kwargs.get(name, []))
        if not all(isinstance(v, str) for v in values):
            raise InterpreterTypeError("'{}' keyword argument must be a string or an array of strings".format(name))
        return T.cast(T.List[str], values)

    def install_dir_for(self, kwargs: TYPE_kwargs, default_option: T.Optional[str]) -> str:
        prefix = self.get_option_value('prefix')
        install_dir = self._kwarg_string(kwargs, 'install_dir')
        if install_dir is None:
            if default_option is None:
                return ''
            install_dir = self.get_option_value(default_option)
        return mesonlib.join_paths(prefix, install_dir)

    # Builtin functions.

    @permittedKwargs(permitted_kwargs['project'])
    def func_project(self, node: mparser.BaseNode, args: T.List[TYPE_var], kwargs: TYPE_kwargs) -> None:
        if not args or not isinstance(args[0], str):
            raise InterpreterTypeError('First argument to project must be a string')
        version = kwargs.get('version')
        if version is None:
            version = '0.0.0'
        if not isinstance(version, str):
            raise InterpreterTypeError("Expected 'version' keyword argument to be a string")
        required_version = self._kwarg_string(kwargs, 'meson_version')
        if required_version is not None and not mesonlib.version_compare(coredata.version, required_version):
            raise InterpreterRuntimeError('Meson version is {} but project requires {}'.format(
                coredata.version, required_version))
        self.meson.project_name = args[0]
        self.meson.project_version = version
        mlog.log('Project name:', mlog.bold(args[0]))
        mlog.log('Project version:', mlog.bold(version))

    @permittedKwargs(permitted_kwargs['add_project_arguments'])
    def func_add_project_arguments(self, node: mparser.BaseNode, args: T.List[TYPE_var], kwargs: TYPE_kwargs) -> None:
        if 'language' not in kwargs:
            raise InterpreterTypeError('Missing language definition in add_project_arguments')
        languages = self._kwarg_stringlist(kwargs, 'language')
        if not all(isinstance(a, str) for a in args):
            raise InterpreterTypeError('Project arguments must be strings')
        for lang in languages:
            self.meson.add_project_arguments(lang.lower(), T.cast(T.List[str], args))

    @permittedKwargs(permitted_kwargs['add_languages'])
    def func_add_languages(self, node: mparser.BaseNode, args: T.List[TYPE_var], kwargs: TYPE_kwargs) -> bool:
        if not args or not all(isinstance(a, str) for a in args):
            raise InterpreterTypeError('add_languages requires string arguments')
        required = self._kwarg_bool(kwargs, 'required', True)
        success = True
        for lang in T.cast(T.List[str], args):
            try:
                self.get_compiler(lang.lower())
            except InterpreterRuntimeError:
                if required:
                    raise InterpreterRuntimeError('No compiler found for language: ' + lang)
                mlog.log('Compiler for language', mlog.bold(lang), 'not found, skipping')
                success = False
        return success

    @permittedKwargs(permitted_kwargs['option'])
    def func_option(self, node: mparser.BaseNode, args: T.List[TYPE_var], kwargs: TYPE_kwargs) -> None:
        if len(args) != 1 or not isinstance(args[0], str):
            raise InterpreterTypeError('First argument to option must be a string')
        name = args[0]
        opt_type = kwargs.get('type')
        if opt_type is None:
            raise InterpreterTypeError("Option requires a 'type' keyword argument")
        if not isinstance(opt_type, str):
            raise InterpreterTypeError("Option 'type' keyword argument must be a string")
        description = self._kwarg_string(kwargs, 'description') or ''
        choices = self._kwarg_stringlist(kwargs, 'choices')
        min_value = kwargs.get('min')
        max_value = kwargs.get('max')
        for bound in (min_value, max_value):
            if bound is not None and not is_int(bound):
                raise InterpreterTypeError("Option 'min' and 'max' keyword arguments must be integers")
        value = kwargs.get('value')

        def check_value(check: T.Callable[[T.Any], bool], kind: str) -> None:
            if value is not None and not check(value):
                raise InterpreterTypeError('Value of option {!r} must be {}, not {}'.format(name, kind, type_name(value)))

        try:
            if opt_type == 'boolean':
                check_value(lambda v: isinstance(v, bool), 'a boolean')
                opt = coredata.UserBooleanOption(description, True if value is None else value)  # type: coredata.UserOption[T.Any]
            elif opt_type == 'integer':
                check_value(is_int, 'an integer')
                opt = coredata.UserIntegerOption(description, min_value, max_value, 0 if value is None else value)
            elif opt_type == 'string':
                check_value(lambda v: isinstance(v, str), 'a string')
                opt = coredata.UserStringOption(description, choices, value)
            elif opt_type == 'combo':
                check_value(lambda v: isinstance(v, str), 'a string')
                opt = coredata.UserComboOption(description, choices, value)
            elif opt_type == 'array':
                check_value(lambda v: isinstance(v, list) and all(isinstance(i, str) for i in v), 'an array of strings')
                opt = coredata.UserArrayOption(description, choices, value)
            else:
                raise InterpreterTypeError('Unsupported option type: ' + opt_type)
        except coredata.OptionException as e:
            raise InterpreterRuntimeError('Invalid declaration of option {!r}: {}'.format(name, e))
        self.options[name] = opt

    @stringArgs
    @noKwargs
    def func_get_option(self, node: mparser.BaseNode, args: T.List[TYPE_var], kwargs: TYPE_kwargs) -> TYPE_var:
        if len(args) != 1:
            raise InterpreterTypeError('Argument required for get_option.')
        return self.get_option_value(T.cast(str, args[0]))

    @noArgsFlattening
    @noKwargs
    def func_set_variable(self, node: mparser.BaseNode, args: T.List[TYPE_var], kwargs: TYPE_kwargs) -> None:
        if len(args) != 2:
            raise InterpreterTypeError('Set_variable takes two arguments.')
        varname = first_string_arg(args, 'set_variable')
        self.set_variable(varname, args[1])

    @noArgsFlattening
    @noKwargs
    def func_get_variable(self, node: mparser.BaseNode, args: T.List[TYPE_var], kwargs: TYPE_kwargs) -> TYPE_var:
        if len(args) < 1 or len(args) > 2:
            raise InterpreterTypeError('Get_variable takes one or two arguments.')
        varname = first_string_arg(args, 'get_variable')
        if varname in self.variables:
            return self.variables[varname]
        if len(args) == 2:
            return args[1]
        raise UndefinedVariable(varname)

    @stringArgs
    @noKwargs
    def func_is_variable(self, node: mparser.BaseNode, args: T.List[TYPE_var], kwargs: TYPE_kwargs) -> bool:
        if len(args) != 1:
            raise InterpreterTypeError('Is_variable takes one argument.')
        return self.is_variable(T.cast(str, args[0]))

    @noArgsFlattening
    @noKwargs
    def func_message(self, node: mparser.BaseNode, args: T.List[TYPE_var], kwargs: TYPE_kwargs) -> None:
        self.runtime.print(' '.join(coerce_string(a) for a in args))

    @noArgsFlattening
    @noKwargs
    def func_warning(self, node: mparser.BaseNode, args: T.List[TYPE_var], kwargs: TYPE_kwargs) -> None:
        mlog.warning(' '.join(coerce_string(a) for a in args), location=node)

    @noArgsFlattening
    @noKwargs
    def func_error(self, node: mparser.BaseNode, args: T.List[TYPE_var], kwargs: TYPE_kwargs) -> None:
        raise InterpreterRuntimeError(' '.join(coerce_string(a) for a in args))

    @noArgsFlattening
    @noKwargs
    def func_assert(self, node: mparser.BaseNode, args: T.List[TYPE_var], kwargs: TYPE_kwargs) -> None:
        if len(args) < 1 or len(args) > 2:
            raise InterpreterTypeError('Assert takes between one and two arguments')
        cond = args[0]
        if not isinstance(cond, bool):
            raise InterpreterTypeError('First argument to assert must be a boolean')
        message = None
        if len(args) == 2:
            if not isinstance(args[1], str):
                raise InterpreterTypeError('Second argument to assert must be a string')
            message = args[1]
        if not cond:
            if message:
                raise InterpreterRuntimeError('Assertion failed: ' + message)
            raise InterpreterRuntimeError('Assertion failed')

    @noArgsFlattening
    @noKwargs
    def func_configuration_data(self, node: mparser.BaseNode, args: T.List[TYPE_var], kwargs: TYPE_kwargs) -> ConfigurationDataHolder:
        if len(args) > 1:
            raise InterpreterTypeError('configuration_data takes only one optional positional arguments')
        initial_values = args[0] if args else None
        if initial_values is not None and not isinstance(initial_values, dict):
            raise InterpreterTypeError('configuration_data first argument must be a dictionary')
        return ConfigurationDataHolder(initial_values)

    @noArgsFlattening
    @noKwargs
    def func_environment(self, node: mparser.BaseNode, args: T.List[TYPE_var], kwargs: TYPE_kwargs) -> EnvironmentVariablesHolder:
        if len(args) > 1:
            raise InterpreterTypeError('environment takes only one optional positional arguments')
        initial_values = args[0] if args else None
        if initial_values is not None and not isinstance(initial_values, dict):
            raise InterpreterTypeError('Expected a dict object as the first argument')
        return EnvironmentVariablesHolder(initial_values)

    @permittedKwargs(permitted_kwargs['configure_file'])
    def func_configure_file(self, node: mparser.BaseNode, args: T.List[TYPE_var], kwargs: TYPE_kwargs) -> FileHolder:
        if args:
            raise InterpreterTypeError('configure_file takes only keyword arguments.')
        output = self._kwarg_string(kwargs, 'output')
        if output is None:
            raise InterpreterTypeError("configure_file requires an 'output' keyword argument")
        conf = kwargs.get('configuration')
        if conf is not None and not isinstance(conf, ConfigurationDataHolder):
            raise InterpreterTypeError("configure_file 'configuration' keyword argument must be a configuration_data object")
        inputs = self.source_strings_to_files(kwargs.get('input', []))
        if len(inputs) > 1:
            raise InterpreterTypeError('configure_file takes at most one input file')
        if conf is None and not inputs:
            raise InterpreterTypeError("configure_file requires a 'configuration' or an 'input' keyword argument")
        install = self._kwarg_bool(kwargs, 'install', False)
        install_dir = self.install_dir_for(kwargs, None)

        if inputs:
            template = self.read_text(inputs[0])
            content = substitute_template(template, conf) if conf is not None else template
            mlog.log('Configuring', mlog.bold(output), 'using configuration')
        else:
            content = generate_config_header(conf)
            mlog.log('Configuring', mlog.bold(output), 'with', str(len(conf.keys())), 'entries')

        cfile = ConfigureFile(self.current_build_dir(), output, content, install_dir, install)
        self.steps.configure_file(cfile)
        return FileHolder(mesonlib.join_paths(cfile.build_dir, output))

    def func_custom_target(self, node: mparser.BaseNode, args: T.List[TYPE_var], kwargs: TYPE_kwargs) -> None:
        mlog.debug('custom_target() is accepted but not built')

    def func_test(self, node: mparser.BaseNode, args: T.List[TYPE_var], kwargs: TYPE_kwargs) -> None:
        mlog.debug('test() is accepted but not run')

    @permittedKwargs(permitted_kwargs['build_target'])
    def func_executable(self, node: mparser.BaseNode, args: T.List[TYPE_var], kwargs: TYPE_kwargs) -> BuildTargetHolder:
        return self.build_target(node, args, kwargs, 'executable')

    @permittedKwargs(permitted_kwargs['build_target'])
    def func_static_lib(self, node: mparser.BaseNode, args: T.List[TYPE_var], kwargs: TYPE_kwargs) -> BuildTargetHolder:
        return self.build_target(node, args, kwargs, 'static_library')

    def build_target(self, node: mparser.BaseNode, args: T.List[TYPE_var], kwargs: TYPE_kwargs,
                     target_type: str) -> BuildTargetHolder:
        if not args or not isinstance(args[0], str):
            raise InterpreterTypeError('First argument to {} must be a string (name)'.format(target_type))
        name = args[0]
        sources = self.source_strings_to_files(args[1:])
        sources += self.source_strings_to_files(kwargs.get('sources', []))

        objects = []  # type: T.List[str]
        for o in mesonlib.flatten(kwargs.get('objects', [])):
            if isinstance(o, ExtractedObjectsHolder):
                objects += o.objects
            else:
                objects += self.source_strings_to_files([o])

        incdirs = []  # type: T.List[str]
        for i in mesonlib.flatten(kwargs.get('include_directories', [])):
            if isinstance(i, IncludeDirsHolder):
                incdirs += i.dirs
            elif isinstance(i, str):
                incdirs.append(mesonlib.join_paths(self.current_dir, i))
            else:
                raise InterpreterTypeError('Include directory to be added is not an include directory object.')

        extra_args = {}
        for lang in ('c', 'cpp'):
            lang_args = self._kwarg_stringlist(kwargs, lang + '_args')
            if lang_args:
                extra_args[lang] = lang_args

        install = self._kwarg_bool(kwargs, 'install', False)
        install_dir = self.install_dir_for(kwargs, 'bindir' if target_type == 'executable' else 'libdir')

        target = BuildTargetHolder(name, target_type, sources, objects, self.current_build_dir(),
                                   install, install_dir, incdirs, extra_args)
        self.runtime.print('Created {}: {}'.format(target_type.replace('_', ' '), target.to_string()))
        if target_type == 'executable':
            self.steps.build_executable(target)
        else:
            self.steps.build_static_library(target)
        return target

    @permittedKwargs(set())
    def func_files(self, node: mparser.BaseNode, args: T.List[TYPE_var], kwargs: TYPE_kwargs) -> T.List[FileHolder]:
        return [FileHolder(path) for path in self.source_strings_to_files(args)]

    @permittedKwargs({'is_system'})
    def func_include_directories(self, node: mparser.BaseNode, args: T.List[TYPE_var], kwargs: TYPE_kwargs) -> IncludeDirsHolder:
        return IncludeDirsHolder(self.source_strings_to_files(args))

    @permittedKwargs(permitted_kwargs['install_headers'])
    def func_install_headers(self, node: mparser.BaseNode, args: T.List[TYPE_var], kwargs: TYPE_kwargs) -> None:
        headers = self.source_strings_to_files(args)
        install_dir = self.install_dir_for(kwargs, 'includedir')
        subdir = self._kwarg_string(kwargs, 'subdir')
        if subdir:
            install_dir = mesonlib.join_paths(install_dir, subdir)
        self.steps.install_headers(install_dir, headers)

    @noKwargs
    def func_join_paths(self, node: mparser.BaseNode, args: T.List[TYPE_var], kwargs: TYPE_kwargs) -> str:
        if not all(isinstance(a, str) for a in args):
            raise InterpreterTypeError('All arguments to join_paths must be strings')
        return self.runtime.join_paths(*T.cast(T.List[str], args))

    @permittedKwargs(permitted_kwargs['find_program'])
    def func_find_program(self, node: mparser.BaseNode, args: T.List[TYPE_var], kwargs: TYPE_kwargs) -> ExternalProgramHolder:
        if not args:
            raise InterpreterTypeError('No program name specified.')
        names = [object_to_path(a, 'find_program') for a in args]
        required = self._kwarg_bool(kwargs, 'required', True)
        for name in names:
            try:
                path = self.runtime.find_program(name, self.current_dir)
            except RuntimeException:
                continue
            mlog.log('Program', mlog.bold(name), 'found:', mlog.green('YES'), '({})'.format(path))
            return ExternalProgramHolder(name, path)
        mlog.log('Program', mlog.bold(names[0]), 'found:', mlog.red('NO'))
        if required:
            raise InterpreterRuntimeError("Program '{}' not found".format(names[0]))
        return ExternalProgramHolder(names[0], None)

    @permittedKwargs(permitted_kwargs['run_command'])
    def func_run_command(self, node: mparser.BaseNode, args: T.List[TYPE_var], kwargs: TYPE_kwargs) -> RunResultHolder:
        if not args:
            raise InterpreterRuntimeError('Expected at least one argument')
        cmd = [object_to_path(a, 'run_command') for a in args]
        check = self._kwarg_bool(kwargs, 'check', False)
        try:
            result = self.runtime.run_command(cmd[0], cmd[1:])
        except RuntimeException as e:
            raise InterpreterRuntimeError('Failed to run command: {}'.format(e))
        if check and result.returncode != 0:
            raise InterpreterRuntimeError('Command "{}" failed with status {}.'.format(' '.join(cmd), result.returncode))
        return RunResultHolder(result.stdout, result.stderr, result.returncode)

    @noKwargs
    def func_import(self, node: mparser.BaseNode, args: T.List[TYPE_var], kwargs: TYPE_kwargs) -> InterpreterObject:
        modname = first_string_arg(args, 'import')
        if modname == 'fs':
            return FSModule(self)
        raise InterpreterRuntimeError("No module named '{}'".format(modname))

    @noKwargs
    def func_subdir(self, node: mparser.BaseNode, args: T.List[TYPE_var], kwargs: TYPE_kwargs) -> None:
        if len(args) != 1:
            raise InterpreterTypeError('subdir takes exactly one argument')
        subdir = first_string_arg(args, 'subdir')
        prev_dir = self.current_dir
        prev_subdir = self.subdir
        self.current_dir = self.runtime.join_paths(prev_dir, subdir)
        self.subdir = mesonlib.join_paths(prev_subdir, subdir)
        try:
            with mlog.nested(subdir):
                self.interpret_file(self.runtime.join_paths(self.current_dir, 'meson.build'))
        finally:
            self.current_dir = prev_dir
            self.subdir = prev_subdir
