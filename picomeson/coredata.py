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

from .mesonlib import MesonException

version = '1.3.0'

class OptionException(MesonException):
    pass

_T = T.TypeVar('_T')

class UserOption(T.Generic[_T]):
    type_name = ''

    def __init__(self, description: str, choices: T.List[str]):
        super().__init__()
        self.choices = choices
        self.description = description
        self.value = None  # type: T.Any

    def printable_value(self) -> str:
        if isinstance(self.value, bool):
            return 'true' if self.value else 'false'
        if isinstance(self.value, list):
            return ','.join(self.value)
        return str(self.value)

    # Check that the input is a valid value and return the
    # "cleaned" or "native" version. For example the Boolean
    # option could take the string "true" and return True.
    def validate_value(self, value: T.Any) -> _T:
        raise RuntimeError('Derived option class did not override validate_value.')

    def set_value(self, newvalue: T.Any) -> None:
        self.value = self.validate_value(newvalue)

    def __repr__(self) -> str:
        return '<{} {}>'.format(type(self).__name__, self.printable_value())

class UserBooleanOption(UserOption[bool]):
    type_name = 'boolean'

    def __init__(self, description: str, value: T.Any = True):
        super().__init__(description, [])
        self.set_value(value)

    def __bool__(self) -> bool:
        return self.value

    def validate_value(self, value: T.Any) -> bool:
        if isinstance(value, bool):
            return value
        if not isinstance(value, str):
            raise OptionException('Value {} cannot be converted to a boolean'.format(value))
        if value.lower() == 'true':
            return True
        if value.lower() == 'false':
            return False
        raise OptionException('Value %s is not boolean (true or false).' % value)

class UserIntegerOption(UserOption[int]):
    type_name = 'integer'

    def __init__(self, description: str, min_value: T.Optional[int], max_value: T.Optional[int], value: T.Any = 0):
        self.min_value = min_value
        self.max_value = max_value
        super().__init__(description, [])
        self.set_value(value)

    def validate_value(self, value: T.Any) -> int:
        if isinstance(value, str):
            value = self.toint(value)
        if not isinstance(value, int) or isinstance(value, bool):
            raise OptionException('New value for integer option is not an integer.')
        if self.min_value is not None and value < self.min_value:
            value = self.min_value
        if self.max_value is not None and value > self.max_value:
            value = self.max_value
        return value

    def toint(self, valuestring: str) -> int:
        try:
            return int(valuestring, 10)
        except ValueError:
            raise OptionException('Value string "%s" is not convertible to an integer.' % valuestring)

class UserStringOption(UserOption[str]):
    type_name = 'string'

    def __init__(self, description: str, choices: T.List[str], value: T.Optional[str] = None):
        super().__init__(description, choices)
        if value is None:
            value = choices[0] if choices else ''
        self.set_value(value)

    def validate_value(self, value: T.Any) -> str:
        if not isinstance(value, str):
            raise OptionException('Value "%s" for string option is not a string.' % str(value))
        return value

class UserComboOption(UserStringOption):
    type_name = 'combo'

    def validate_value(self, value: T.Any) -> str:
        value = super().validate_value(value)
        if self.choices and value not in self.choices:
            optionsstring = ', '.join(['"%s"' % (item,) for item in self.choices])
            raise OptionException('Value "{}" for combo option "{}" is not one of the choices.'
                                  ' Possible choices are: {}.'.format(value, self.description, optionsstring))
        return value

class UserArrayOption(UserOption[T.List[str]]):
    type_name = 'array'

    def __init__(self, description: str, choices: T.List[str], value: T.Optional[T.List[str]] = None):
        super().__init__(description, choices)
        self.set_value(list(choices) if value is None else value)

    def validate_value(self, value: T.Any) -> T.List[str]:
        # Users can put their input in as a comma separated string on
        # the command line, build files pass real arrays.
        if isinstance(value, str):
            newvalue = [v.strip() for v in value.split(',')] if value else []
        elif isinstance(value, list):
            newvalue = list(value)
        else:
            raise OptionException('"{}" should be a string array, but it is not'.format(value))
        for i in newvalue:
            if not isinstance(i, str):
                raise OptionException('String array element "{0}" is not a string.'.format(str(newvalue)))
        if self.choices:
            bad = [x for x in newvalue if x not in self.choices]
            if bad:
                raise OptionException('Options "{}" are not in allowed choices: "{}"'.format(
                    ', '.join(bad), ', '.join(self.choices)))
        return newvalue

option_types = {
    'boolean': UserBooleanOption,
    'integer': UserIntegerOption,
    'string': UserStringOption,
    'combo': UserComboOption,
    'array': UserArrayOption,
}  # type: T.Dict[str, T.Type[UserOption[T.Any]]]

buildtypelist = ['plain', 'debug', 'debugoptimized', 'release', 'minsize', 'custom']

# Interpreted before any user file so that every project sees the same
# set of options. The prefix is replaced by the runtime's default.
BUILTIN_OPTIONS = '''
option('buildtype', type: 'combo', value: 'debug',
       choices: ['plain', 'debug', 'debugoptimized', 'release', 'minsize', 'custom'],
       description: 'Build type to use')
option('prefix', type: 'string', value: '/usr/local', description: 'Installation prefix')
option('bindir', type: 'string', value: 'bin', description: 'Executable directory')
option('libdir', type: 'string', value: 'lib', description: 'Library directory')
option('includedir', type: 'string', value: 'include', description: 'Header file directory')
option('datadir', type: 'string', value: 'share', description: 'Data file directory')
option('sysconfdir', type: 'string', value: 'etc', description: 'Sysconf data directory')
option('libexecdir', type: 'string', value: 'libexec', description: 'Library executable directory')
option('localstatedir', type: 'string', value: 'var', description: 'Localstate data directory')
option('mandir', type: 'string', value: 'share/man', description: 'Manual page directory')
option('infodir', type: 'string', value: 'share/info', description: 'Info page directory')
option('localedir', type: 'string', value: 'share/locale', description: 'Locale data directory')
option('sbindir', type: 'string', value: 'sbin', description: 'System executable directory')
option('sharedstatedir', type: 'string', value: 'com', description: 'Architecture-independent data directory')
option('debug', type: 'boolean', value: true, description: 'Debug')
option('optimization', type: 'combo', value: '0',
       choices: ['plain', '0', 'g', '1', '2', '3', 's'],
       description: 'Optimization level')
option('warning_level', type: 'combo', value: '1',
       choices: ['0', '1', '2', '3', 'everything'],
       description: 'Compiler warning level to use')
option('werror', type: 'boolean', value: false, description: 'Treat warnings as errors')
option('default_library', type: 'combo', value: 'shared',
       choices: ['shared', 'static', 'both'],
       description: 'Default library type')
'''
