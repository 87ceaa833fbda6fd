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

from .. import mesonlib
from ..runtime import RuntimeException
from ..interpreterbase import (
    InterpreterObject, InterpreterTypeError, InterpreterRuntimeError,
    TYPE_var, TYPE_kwargs, noPosargs, noKwargs, stringArgs, permittedKwargs,
    first_string_arg, coerce_string,
)

if T.TYPE_CHECKING:
    from .interpreter import Interpreter

class FileHolder(InterpreterObject):
    type_name = 'file'

    def __init__(self, path: str):
        super().__init__()
        self.path = path
        self.methods.update({'full_path': self.full_path_method})

    def to_string(self) -> str:
        return self.path

    @noPosargs
    @noKwargs
    def full_path_method(self, args: T.List[TYPE_var], kwargs: TYPE_kwargs) -> str:
        return self.path

class IncludeDirsHolder(InterpreterObject):
    type_name = 'inc'

    def __init__(self, dirs: T.List[str]):
        super().__init__()
        self.dirs = dirs

    def to_string(self) -> str:
        return '<inc: {}>'.format(', '.join(self.dirs))

class ExtractedObjectsHolder(InterpreterObject):
    type_name = 'extracted_obj'

    def __init__(self, target_name: str, objects: T.List[str]):
        super().__init__()
        self.target_name = target_name
        self.objects = objects

    def to_string(self) -> str:
        return '<extracted_obj from {}: {} objects>'.format(self.target_name, len(self.objects))

class BuildTargetHolder(InterpreterObject):
    type_name = 'build_tgt'

    def __init__(self, name: str, target_type: str, sources: T.List[str], objects: T.List[str],
                 build_dir: str, install: bool, install_dir: str,
                 include_directories: T.List[str], extra_args: T.Dict[str, T.List[str]]):
        super().__init__()
        self.name = name
        self.target_type = target_type
        self.sources = sources
        self.objects = objects
        self.build_dir = build_dir
        self.install = install
        self.install_dir = install_dir
        self.include_directories = include_directories
        self.extra_args = extra_args
        self.methods.update({'extract_objects': self.extract_objects_method,
                             'extract_all_objects': self.extract_all_objects_method,
                             'full_path': self.full_path_method,
                             'name': self.name_method,
                             })

    @property
    def filename(self) -> str:
        if self.target_type == 'static_library':
            return 'lib{}.a'.format(self.name)
        return self.name

    def to_string(self) -> str:
        return '<{} {}: {} sources>'.format(self.target_type, self.name, len(self.sources))

    def object_path(self, source: str) -> str:
        basename = source.rsplit('/', 1)[-1]
        return mesonlib.join_paths(self.build_dir, '{}.p/{}.o'.format(self.name, basename))

    @noKwargs
    def extract_objects_method(self, args: T.List[TYPE_var], kwargs: TYPE_kwargs) -> ExtractedObjectsHolder:
        objects = []
        for a in args:
            if isinstance(a, FileHolder):
                wanted = a.path
            elif isinstance(a, str):
                wanted = a
            else:
                raise InterpreterTypeError('extract_objects arguments must be strings or files')
            matches = [s for s in self.sources if s == wanted or s.endswith('/' + wanted)]
            if not matches:
                raise InterpreterRuntimeError('File {!r} is not in target {!r}'.format(wanted, self.name))
            objects += [self.object_path(s) for s in matches]
        return ExtractedObjectsHolder(self.name, objects)

    @noPosargs
    @permittedKwargs({'recursive'})
    def extract_all_objects_method(self, args: T.List[TYPE_var], kwargs: TYPE_kwargs) -> ExtractedObjectsHolder:
        return ExtractedObjectsHolder(self.name, [self.object_path(s) for s in self.sources] + self.objects)

    @noPosargs
    @noKwargs
    def full_path_method(self, args: T.List[TYPE_var], kwargs: TYPE_kwargs) -> str:
        return mesonlib.join_paths(self.build_dir, self.filename)

    @noPosargs
    @noKwargs
    def name_method(self, args: T.List[TYPE_var], kwargs: TYPE_kwargs) -> str:
        return self.name

class EnvironmentVariablesHolder(InterpreterObject):
    type_name = 'env'
    default_separator = ':'

    def __init__(self, initial_values: T.Optional[T.Dict[str, TYPE_var]] = None):
        super().__init__()
        self.envvars = {}  # type: T.Dict[str, str]
        self.methods.update({'set': self.set_method,
                             'append': self.append_method,
                             'prepend': self.prepend_method,
                             })
        if initial_values:
            for k, v in initial_values.items():
                if not isinstance(v, str):
                    raise InterpreterTypeError('Expected environment values to be strings')
                self.envvars[k] = v

    def to_string(self) -> str:
        return '<env: {}>'.format(', '.join('{}={}'.format(k, v) for k, v in sorted(self.envvars.items())))

    def _parse(self, args: T.List[TYPE_var], kwargs: TYPE_kwargs) -> T.Tuple[str, T.List[str], str]:
        separator = kwargs.get('separator', self.default_separator)
        if not isinstance(separator, str):
            raise InterpreterTypeError("Expected 'separator' keyword argument to be a string")
        if not args:
            raise InterpreterTypeError('Expected the first argument to be a string representing '
                                       'the environment variable name')
        return T.cast(str, args[0]), T.cast(T.List[str], args[1:]), separator

    @stringArgs
    @permittedKwargs({'separator'})
    def set_method(self, args: T.List[TYPE_var], kwargs: TYPE_kwargs) -> None:
        name, values, separator = self._parse(args, kwargs)
        self.envvars[name] = separator.join(values)

    @stringArgs
    @permittedKwargs({'separator'})
    def append_method(self, args: T.List[TYPE_var], kwargs: TYPE_kwargs) -> None:
        name, values, separator = self._parse(args, kwargs)
        if name in self.envvars:
            values = [self.envvars[name]] + values
        self.envvars[name] = separator.join(values)

    @stringArgs
    @permittedKwargs({'separator'})
    def prepend_method(self, args: T.List[TYPE_var], kwargs: TYPE_kwargs) -> None:
        name, values, separator = self._parse(args, kwargs)
        if name in self.envvars:
            values = values + [self.envvars[name]]
        self.envvars[name] = separator.join(values)

class ExternalProgramHolder(InterpreterObject):
    type_name = 'external_program'

    def __init__(self, name: str, full_path: T.Optional[str]):
        super().__init__()
        self.name = name
        self.full_path = full_path
        self.methods.update({'found': self.found_method,
                             'path': self.full_path_method,
                             'full_path': self.full_path_method,
                             })

    def found(self) -> bool:
        return self.full_path is not None

    def to_string(self) -> str:
        return self.full_path if self.full_path is not None else '<not found: {}>'.format(self.name)

    @noPosargs
    @noKwargs
    def found_method(self, args: T.List[TYPE_var], kwargs: TYPE_kwargs) -> bool:
        return self.found()

    @noPosargs
    @noKwargs
    def full_path_method(self, args: T.List[TYPE_var], kwargs: TYPE_kwargs) -> T.Optional[str]:
        return self.full_path

class RunResultHolder(InterpreterObject):
    type_name = 'runresult'

    def __init__(self, stdout: str, stderr: str, returncode: int):
        super().__init__()
        self.stdout = stdout
        self.stderr = stderr
        self.returncode = returncode
        self.methods.update({'returncode': self.returncode_method,
                             'stdout': self.stdout_method,
                             'stderr': self.stderr_method,
                             })

    def to_string(self) -> str:
        return '<runresult: {}>'.format(self.returncode)

    @noPosargs
    @noKwargs
    def returncode_method(self, args: T.List[TYPE_var], kwargs: TYPE_kwargs) -> int:
        return self.returncode

    @noPosargs
    @noKwargs
    def stdout_method(self, args: T.List[TYPE_var], kwargs: TYPE_kwargs) -> str:
        return self.stdout

    @noPosargs
    @noKwargs
    def stderr_method(self, args: T.List[TYPE_var], kwargs: TYPE_kwargs) -> str:
        return self.stderr

class VersionHolder(InterpreterObject):
    type_name = 'version'

    def __init__(self, version: str):
        super().__init__()
        self.version = version
        self.methods.update({'version_compare': self.version_compare_method})

    def to_string(self) -> str:
        return self.version

    @noKwargs
    def version_compare_method(self, args: T.List[TYPE_var], kwargs: TYPE_kwargs) -> bool:
        req = first_string_arg(args, 'version_compare')
        return mesonlib.version_compare(self.version, req)

class MachineHolder(InterpreterObject):
    type_name = 'machine'

    def __init__(self, system: str, cpu_family: str, cpu: str, endian: str):
        super().__init__()
        self.system = system
        self.cpu_family = cpu_family
        self.cpu = cpu
        self.endian = endian
        self.methods.update({'system': self.system_method,
                             'cpu_family': self.cpu_family_method,
                             'cpu': self.cpu_method,
                             'endian': self.endian_method,
                             })

    def to_string(self) -> str:
        return '<machine: {} {}>'.format(self.system, self.cpu_family)

    @noPosargs
    @noKwargs
    def system_method(self, args: T.List[TYPE_var], kwargs: TYPE_kwargs) -> str:
        return self.system

    @noPosargs
    @noKwargs
    def cpu_family_method(self, args: T.List[TYPE_var], kwargs: TYPE_kwargs) -> str:
        return self.cpu_family

    @noPosargs
    @noKwargs
    def cpu_method(self, args: T.List[TYPE_var], kwargs: TYPE_kwargs) -> str:
        return self.cpu

    @noPosargs
    @noKwargs
    def endian_method(self, args: T.List[TYPE_var], kwargs: TYPE_kwargs) -> str:
        return self.endian

class FSModule(InterpreterObject):
    type_name = 'fs'

    def __init__(self, interpreter: 'Interpreter'):
        super().__init__()
        self.interpreter = interpreter
        self.methods.update({'exists': self.exists_method,
                             'is_file': self.is_file_method,
                             'is_dir': self.is_dir_method,
                             'replace_suffix': self.replace_suffix_method,
                             })

    def to_string(self) -> str:
        return '<fs module>'

    def _check(self, args: T.List[TYPE_var], check: str) -> bool:
        path = first_string_arg(args, check)
        path = mesonlib.join_paths(self.interpreter.current_dir, path)
        runtime = self.interpreter.runtime
        try:
            return {'exists': runtime.exists,
                    'is_file': runtime.is_file,
                    'is_dir': runtime.is_dir}[check](path)
        except RuntimeException as e:
            raise InterpreterRuntimeError('Failed to check {} for {!r}: {}'.format(check, path, e))

    @noKwargs
    def exists_method(self, args: T.List[TYPE_var], kwargs: TYPE_kwargs) -> bool:
        return self._check(args, 'exists')

    @noKwargs
    def is_file_method(self, args: T.List[TYPE_var], kwargs: TYPE_kwargs) -> bool:
        return self._check(args, 'is_file')

    @noKwargs
    def is_dir_method(self, args: T.List[TYPE_var], kwargs: TYPE_kwargs) -> bool:
        return self._check(args, 'is_dir')

    @noKwargs
    def replace_suffix_method(self, args: T.List[TYPE_var], kwargs: TYPE_kwargs) -> str:
        if len(args) != 2 or not all(isinstance(a, str) for a in args):
            raise InterpreterTypeError('replace_suffix takes a path and a suffix')
        return mesonlib.replace_suffix(T.cast(str, args[0]), T.cast(str, args[1]))

class MesonMain(InterpreterObject):
    type_name = 'meson'

    def __init__(self, interpreter: 'Interpreter', source_dir: str, build_dir: str):
        super().__init__()
        self.interpreter = interpreter
        self.source_dir = source_dir
        self.build_dir = build_dir
        self.project_name = ''
        self.project_version = '0.0.0'
        self.project_args = {}  # type: T.Dict[str, T.List[str]]
        self.methods.update({'version': self.version_method,
                             'is_subproject': self.is_subproject_method,
                             'get_compiler': self.get_compiler_method,
                             'get_cross_property': self.get_cross_property_method,
                             'project_version': self.project_version_method,
                             'project_name': self.project_name_method,
                             'current_build_dir': self.current_build_dir_method,
                             'current_source_dir': self.current_source_dir_method,
                             'source_root': self.source_root_method,
                             'build_root': self.build_root_method,
                             })

    def to_string(self) -> str:
        return '<meson: {} {}>'.format(self.project_name, self.project_version)

    def add_project_arguments(self, lang: str, args: T.List[str]) -> None:
        self.project_args.setdefault(lang, []).extend(args)

    def get_project_args(self, lang: str) -> T.List[str]:
        return self.project_args.get(lang, [])

    @noPosargs
    @noKwargs
    def version_method(self, args: T.List[TYPE_var], kwargs: TYPE_kwargs) -> VersionHolder:
        from ..coredata import version
        return VersionHolder(version)

    @noPosargs
    @noKwargs
    def is_subproject_method(self, args: T.List[TYPE_var], kwargs: TYPE_kwargs) -> bool:
        return False

    @permittedKwargs({'native'})
    def get_compiler_method(self, args: T.List[TYPE_var], kwargs: TYPE_kwargs) -> InterpreterObject:
        lang = first_string_arg(args, 'get_compiler')
        return self.interpreter.get_compiler(lang)

    @noKwargs
    def get_cross_property_method(self, args: T.List[TYPE_var], kwargs: TYPE_kwargs) -> TYPE_var:
        if len(args) < 1 or len(args) > 2:
            raise InterpreterTypeError('Must have one or two arguments.')
        propname = first_string_arg(args, 'get_cross_property')
        props = self.interpreter.properties
        if propname in props:
            return props[propname]
        if len(args) == 2:
            return args[1]
        raise InterpreterRuntimeError('Unknown cross property: {}.'.format(propname))

    @noPosargs
    @noKwargs
    def project_version_method(self, args: T.List[TYPE_var], kwargs: TYPE_kwargs) -> str:
        return self.project_version

    @noPosargs
    @noKwargs
    def project_name_method(self, args: T.List[TYPE_var], kwargs: TYPE_kwargs) -> str:
        return self.project_name

    @noPosargs
    @noKwargs
    def current_build_dir_method(self, args: T.List[TYPE_var], kwargs: TYPE_kwargs) -> str:
        return self.interpreter.current_build_dir()

    @noPosargs
    @noKwargs
    def current_source_dir_method(self, args: T.List[TYPE_var], kwargs: TYPE_kwargs) -> str:
        return self.interpreter.current_dir

    @noPosargs
    @noKwargs
    def source_root_method(self, args: T.List[TYPE_var], kwargs: TYPE_kwargs) -> str:
        return self.source_dir

    @noPosargs
    @noKwargs
    def build_root_method(self, args: T.List[TYPE_var], kwargs: TYPE_kwargs) -> str:
        return self.build_dir

def object_to_path(value: TYPE_var, what: str) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, FileHolder):
        return value.path
    if isinstance(value, ExternalProgramHolder):
        if value.full_path is None:
            raise InterpreterRuntimeError('Program {!r} was not found'.format(value.name))
        return value.full_path
    raise InterpreterTypeError('{} arguments must be strings, files or programs, not {}'.format(what, coerce_string(value)))
