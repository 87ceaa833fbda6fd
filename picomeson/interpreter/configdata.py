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
from ..interpreterbase import (
    InterpreterObject, InterpreterTypeError, InterpreterRuntimeError,
    TYPE_var, TYPE_kwargs, is_int, noArgsFlattening, noKwargs, type_name,
)

ConfigValue = T.Union[str, int, bool]

class ConfigurationDataHolder(InterpreterObject):
    type_name = 'cfg_data'

    def __init__(self, initial_values: T.Optional[T.Dict[str, TYPE_var]] = None):
        super().__init__()
        self.values = {}  # type: T.Dict[str, T.Tuple[ConfigValue, str]]
        self.methods.update({'set': self.set_method,
                             'set10': self.set10_method,
                             'set_quoted': self.set_quoted_method,
                             'has': self.has_method,
                             'get': self.get_method,
                             'keys': self.keys_method,
                             'merge_from': self.merge_from_method,
                             })
        if initial_values:
            for k, v in initial_values.items():
                self.set_method([k, v], {})

    # Plain access used by configure_file() and the template helpers.

    def __contains__(self, name: str) -> bool:
        return name in self.values

    def get(self, name: str) -> T.Tuple[ConfigValue, str]:
        return self.values[name]

    def keys(self) -> T.List[str]:
        return list(self.values.keys())

    def to_string(self) -> str:
        return '<cfg_data: {} entries>'.format(len(self.values))

    def validate_args(self, args: T.List[TYPE_var], kwargs: TYPE_kwargs) -> T.Tuple[str, ConfigValue, str]:
        if len(args) != 2:
            raise InterpreterTypeError('Configuration set requires 2 arguments.')
        name, val = args
        if not isinstance(name, str):
            raise InterpreterTypeError('Expected a string as the first argument')
        if not isinstance(val, (str, int, bool)):
            raise InterpreterTypeError('Expected a str, int or bool as the second argument')
        desc = kwargs.get('description', '')
        if desc is None:
            desc = ''
        if not isinstance(desc, str):
            raise InterpreterTypeError("Expected a string for the 'description' keyword argument")
        return name, val, desc

    @noArgsFlattening
    def set_method(self, args: T.List[TYPE_var], kwargs: TYPE_kwargs) -> None:
        (name, val, desc) = self.validate_args(args, kwargs)
        self.values[name] = (val, desc)

    @noArgsFlattening
    def set_quoted_method(self, args: T.List[TYPE_var], kwargs: TYPE_kwargs) -> None:
        (name, val, desc) = self.validate_args(args, kwargs)
        if not isinstance(val, str):
            raise InterpreterTypeError('Second argument to set_quoted must be a string.')
        escaped_val = '\\"'.join(val.split('"'))
        self.values[name] = ('"' + escaped_val + '"', desc)

    @noArgsFlattening
    def set10_method(self, args: T.List[TYPE_var], kwargs: TYPE_kwargs) -> None:
        (name, val, desc) = self.validate_args(args, kwargs)
        if isinstance(val, bool):
            self.values[name] = (1 if val else 0, desc)
        elif is_int(val):
            self.values[name] = (1 if val > 0 else 0, desc)
        else:
            raise InterpreterTypeError('Expected int or bool as the second argument')

    @noKwargs
    def has_method(self, args: T.List[TYPE_var], kwargs: TYPE_kwargs) -> bool:
        if len(args) != 1 or not isinstance(args[0], str):
            raise InterpreterTypeError('has() requires a single string argument')
        return args[0] in self.values

    @noArgsFlattening
    @noKwargs
    def get_method(self, args: T.List[TYPE_var], kwargs: TYPE_kwargs) -> TYPE_var:
        if len(args) < 1 or len(args) > 2:
            raise InterpreterTypeError('Get method takes one or two arguments.')
        name = args[0]
        if not isinstance(name, str):
            raise InterpreterTypeError('Expected a string as the first argument')
        if name in self.values:
            return self.values[name][0]
        if len(args) > 1:
            return args[1]
        raise InterpreterRuntimeError("Key '{}' not found in ConfigData".format(name))

    @noKwargs
    def keys_method(self, args: T.List[TYPE_var], kwargs: TYPE_kwargs) -> T.List[str]:
        return sorted(self.values.keys())

    @noKwargs
    def merge_from_method(self, args: T.List[TYPE_var], kwargs: TYPE_kwargs) -> None:
        if len(args) != 1:
            raise InterpreterTypeError('merge_from takes one positional argument.')
        from_object = args[0]
        if isinstance(from_object, ConfigurationDataHolder):
            self.values.update(from_object.values)
        elif isinstance(from_object, dict):
            for k, v in from_object.items():
                self.set_method([k, v], {})
        else:
            raise InterpreterTypeError('merge_from requires a ConfigData object or a dict, not {}'.format(type_name(from_object)))

class ConfigureFile:
    '''A file to be written into the build directory.'''

    def __init__(self, build_dir: str, filename: str, content: str, install_dir: str, install: bool):
        self.build_dir = build_dir
        self.filename = filename
        self.content = content
        self.install_dir = install_dir
        self.install = install

    def __repr__(self) -> str:
        return '<ConfigureFile {!r}: {} bytes>'.format(mesonlib.join_paths(self.build_dir, self.filename), len(self.content))

def generate_config_header(cdata: ConfigurationDataHolder) -> str:
    try:
        return mesonlib.dump_conf_header(cdata)
    except mesonlib.MesonException as e:
        raise InterpreterTypeError(str(e))

def substitute_template(template: str, cdata: ConfigurationDataHolder) -> str:
    try:
        lines, missing = mesonlib.do_conf_str(template.splitlines(keepends=True), cdata)
    except mesonlib.MesonException as e:
        raise InterpreterRuntimeError(str(e))
    if missing:
        raise InterpreterRuntimeError('Unresolved configuration placeholders: ' + ', '.join(sorted(missing)))
    return ''.join(lines)
