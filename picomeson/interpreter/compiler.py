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

from .. import mesonlib, mlog
from ..runtime import RuntimeException
from ..interpreterbase import (
    InterpreterObject, InterpreterTypeError, InterpreterRuntimeError,
    TYPE_var, TYPE_kwargs, noPosargs, noKwargs, permittedKwargs, first_string_arg,
)
from .interpreterobjects import FileHolder

if T.TYPE_CHECKING:
    from .interpreter import Interpreter

DELIMITER = '"MESON_DELIMITER"'

COMPILER_ID_CODE = '''#if defined(__EMSCRIPTEN__)
#define MESON_COMPILER_FAMILY emscripten
#elif defined(__clang__)
#define MESON_COMPILER_FAMILY clang
#elif defined(__GNUC__)
#define MESON_COMPILER_FAMILY gcc
#elif defined(_MSC_VER)
#define MESON_COMPILER_FAMILY msvc
#endif
''' + DELIMITER + ''' MESON_COMPILER_FAMILY
'''

UNDERSCORE_PREFIX_CODE = '''#ifndef __USER_LABEL_PREFIX__
#define MESON_UNDERSCORE_PREFIX unknown
#else
#define MESON_UNDERSCORE_PREFIX __USER_LABEL_PREFIX__
#endif
''' + DELIMITER + ''' MESON_UNDERSCORE_PREFIX
'''

LINK_CHECK_CODE = 'int main(void) { return 0; }\n'

source_suffixes = {
    'c': 'c',
    'cpp': 'cpp',
}

class CompileResult:
    def __init__(self, success: bool, artifact: bytes, command: T.List[str]):
        self.success = success
        self.artifact = artifact
        self.command = command

    def output_text(self) -> str:
        return self.artifact.decode(errors='replace')

def text_after_delimiter(output: str) -> T.Optional[str]:
    '''Return what follows the last delimiter in preprocessor output.'''
    if DELIMITER not in output:
        return None
    return output.rsplit(DELIMITER, 1)[1].strip()

class CompilerHolder(InterpreterObject):
    type_name = 'compiler'

    def __init__(self, interpreter: 'Interpreter', lang: str, command: T.List[str]):
        super().__init__()
        self.interpreter = interpreter
        self.lang = lang
        self.command = command
        self.methods.update({'get_id': self.get_id_method,
                             'get_linker_id': self.get_linker_id_method,
                             'cmd_array': self.cmd_array_method,
                             'compiles': self.compiles_method,
                             'links': self.links_method,
                             'has_argument': self.has_argument_method,
                             'get_supported_arguments': self.get_supported_arguments_method,
                             'has_function': self.has_function_method,
                             'has_link_argument': self.has_link_argument_method,
                             'has_multi_link_arguments': self.has_multi_link_arguments_method,
                             'symbols_have_underscore_prefix': self.symbols_have_underscore_prefix_method,
                             })

    def to_string(self) -> str:
        return '<compiler {}: {}>'.format(self.lang, ' '.join(self.command))

    def try_compile(self, args: T.List[str], extra_args: T.List[str], code: str) -> CompileResult:
        '''
        Write code into a fresh temporary directory and run the compiler on it.

        The command line is the compiler invocation followed by the project
        arguments, the probe arguments and the caller's extra arguments, then
        the input file and an output path. The temporary directory is removed
        before returning, whatever the outcome.
        '''
        if self.lang not in source_suffixes:
            raise InterpreterRuntimeError('Unsupported language: ' + self.lang)
        runtime = self.interpreter.runtime
        all_args = self.interpreter.meson.get_project_args(self.lang) + args + extra_args
        try:
            with runtime.tempdir() as tmpdirname:
                srcname = runtime.join_paths(tmpdirname, 'input.' + source_suffixes[self.lang])
                outname = runtime.join_paths(tmpdirname, 'output')
                runtime.write_file(srcname, code.encode('utf-8'))
                command = self.command + all_args + [srcname, '-o', outname]
                mlog.debug('Running compile:')
                mlog.debug('Command line: ', ' '.join(command))
                mlog.debug('Code:\n', code)
                result = runtime.run_command(command[0], command[1:])
                mlog.debug('Compiler stdout:\n', result.stdout)
                mlog.debug('Compiler stderr:\n', result.stderr)
                try:
                    artifact = runtime.read_file(outname)
                except RuntimeException:
                    artifact = b''
        except RuntimeException as e:
            raise InterpreterRuntimeError('Failed to run compiler: {}'.format(e))
        return CompileResult(result.returncode == 0, artifact, command)

    def _extra_args(self, kwargs: TYPE_kwargs) -> T.List[str]:
        args = mesonlib.flatten(kwargs.get('args', []))
        if not all(isinstance(a, str) for a in args):
            raise InterpreterTypeError("The 'args' keyword argument must be an array of strings")
        return T.cast(T.List[str], args)

    def _code(self, args: T.List[TYPE_var], what: str) -> str:
        if len(args) != 1:
            raise InterpreterTypeError('{} takes exactly one argument'.format(what))
        code = args[0]
        if isinstance(code, FileHolder):
            return self.interpreter.read_text(code.path)
        if not isinstance(code, str):
            raise InterpreterTypeError('{} requires a string or file argument'.format(what))
        return code

    def _required(self, kwargs: TYPE_kwargs) -> bool:
        required = kwargs.get('required', False)
        if not isinstance(required, bool):
            raise InterpreterTypeError("The 'required' keyword argument must be a boolean")
        return required

    def _log_check(self, what: str, result: bool) -> None:
        if result:
            h = mlog.green('YES')
        else:
            h = mlog.red('NO')
        mlog.log('Compiler for language', mlog.bold(self.lang), what, h)

    @noPosargs
    @noKwargs
    def get_id_method(self, args: T.List[TYPE_var], kwargs: TYPE_kwargs) -> str:
        result = self.try_compile(['-c', '-E'], [], COMPILER_ID_CODE)
        family = text_after_delimiter(result.output_text())
        if not family:
            raise InterpreterRuntimeError('Failed to detect compiler family')
        return family

    @noPosargs
    @noKwargs
    def get_linker_id_method(self, args: T.List[TYPE_var], kwargs: TYPE_kwargs) -> str:
        try:
            result = self.interpreter.runtime.run_command(self.command[0], self.command[1:] + ['-Wl,--version'])
        except RuntimeException as e:
            raise InterpreterRuntimeError('Failed to run linker: {}'.format(e))
        output = result.stdout + result.stderr
        if 'LLD' in output:
            return 'ld.lld'
        if 'GNU gold' in output:
            return 'ld.gold'
        if 'mold' in output:
            return 'ld.mold'
        if 'GNU ld' in output:
            return 'ld.bfd'
        if 'PROJECT:ld' in output or 'PROJECT:dyld' in output:
            return 'ld64'
        raise InterpreterRuntimeError('Unable to detect linker for compiler ' + ' '.join(self.command))

    @noPosargs
    @noKwargs
    def cmd_array_method(self, args: T.List[TYPE_var], kwargs: TYPE_kwargs) -> T.List[str]:
        return list(self.command)

    @permittedKwargs({'args', 'name'})
    def compiles_method(self, args: T.List[TYPE_var], kwargs: TYPE_kwargs) -> bool:
        code = self._code(args, 'compiles')
        result = self.try_compile(['-c'], self._extra_args(kwargs), code).success
        if isinstance(kwargs.get('name'), str):
            self._log_check('checking if "{}" compiles:'.format(kwargs['name']), result)
        return result

    @permittedKwargs({'args', 'name'})
    def links_method(self, args: T.List[TYPE_var], kwargs: TYPE_kwargs) -> bool:
        code = self._code(args, 'links')
        result = self.try_compile([], self._extra_args(kwargs), code).success
        if isinstance(kwargs.get('name'), str):
            self._log_check('checking if "{}" links:'.format(kwargs['name']), result)
        return result

    @permittedKwargs({'required'})
    def has_argument_method(self, args: T.List[TYPE_var], kwargs: TYPE_kwargs) -> bool:
        argument = first_string_arg(args, 'has_argument')
        required = self._required(kwargs)
        result = self.try_compile(['-c'], [argument], '').success
        self._log_check('supports argument {}:'.format(argument), result)
        if not result and required:
            raise InterpreterRuntimeError('Compiler does not support argument: ' + argument)
        return result

    @noKwargs
    def get_supported_arguments_method(self, args: T.List[TYPE_var], kwargs: TYPE_kwargs) -> T.List[str]:
        if not all(isinstance(a, str) for a in args):
            raise InterpreterTypeError('Expected arguments to be strings')
        supported = []
        for arg in T.cast(T.List[str], args):
            if self.try_compile(['-c'], [arg], '').success:
                supported.append(arg)
        return supported

    @permittedKwargs({'args', 'prefix'})
    def has_function_method(self, args: T.List[TYPE_var], kwargs: TYPE_kwargs) -> bool:
        funcname = first_string_arg(args, 'has_function')
        prefix = kwargs.get('prefix', '')
        if not isinstance(prefix, str):
            raise InterpreterTypeError('Prefix argument of has_function must be a string.')
        # Casting to a function pointer makes an unknown symbol a hard error
        code = '{}\nint main(void) {{ void *p = (void*)({}); (void)p; return 0; }}\n'.format(prefix, funcname)
        result = self.try_compile([], self._extra_args(kwargs), code).success
        self._log_check('has function {}:'.format(funcname), result)
        return result

    @noKwargs
    def has_link_argument_method(self, args: T.List[TYPE_var], kwargs: TYPE_kwargs) -> bool:
        argument = first_string_arg(args, 'has_link_argument')
        return self.try_compile([], [argument], LINK_CHECK_CODE).success

    @noKwargs
    def has_multi_link_arguments_method(self, args: T.List[TYPE_var], kwargs: TYPE_kwargs) -> bool:
        if not all(isinstance(a, str) for a in args):
            raise InterpreterTypeError('Expected arguments to be strings')
        return self.try_compile([], T.cast(T.List[str], args), LINK_CHECK_CODE).success

    @noPosargs
    @noKwargs
    def symbols_have_underscore_prefix_method(self, args: T.List[TYPE_var], kwargs: TYPE_kwargs) -> bool:
        result = self.try_compile(['-c', '-E'], [], UNDERSCORE_PREFIX_CODE)
        output = result.output_text()
        prefix = text_after_delimiter(output)
        if prefix is None:
            raise InterpreterRuntimeError('Failed to find underscore prefix, {}'.format(output))
        if prefix == '_':
            return True
        if prefix == '':
            return False
        raise InterpreterRuntimeError('Found unexpected underscore prefix {!r}'.format(prefix))
