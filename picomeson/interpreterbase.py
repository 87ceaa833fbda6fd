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

# This class contains the basic functionality needed to run any interpreter
# or an interpreter-based tool.

from . import mparser, mesonlib, mlog

import re
import enum
from functools import wraps
import typing as T

class InterpreterException(mesonlib.MesonException):
    pass

class UndefinedVariable(InterpreterException):
    def __init__(self, name: str):
        super().__init__('Undefined variable: ' + name)
        self.name = name

class UndefinedOption(UndefinedVariable):
    def __init__(self, name: str):
        InterpreterException.__init__(self, 'Unknown option: ' + name)
        self.name = name

class UndefinedFunction(InterpreterException):
    def __init__(self, name: str):
        super().__init__('Undefined function: ' + name)
        self.name = name

class InterpreterTypeError(InterpreterException):
    def __init__(self, msg: str):
        super().__init__('Type error: ' + msg)
        self.msg = msg

class InterpreterRuntimeError(InterpreterException):
    def __init__(self, msg: str):
        super().__init__('Runtime error: ' + msg)
        self.msg = msg

class ControlFlow(enum.Enum):
    PROCEED = 0
    BREAK = 1
    CONTINUE = 2

class InterpreterObject:
    type_name = 'object'

    def __init__(self) -> None:
        self.methods = {}  # type: T.Dict[str, T.Callable[[T.List[T.Any], T.Dict[str, T.Any]], T.Any]]

    def method_call(self, method_name: str, args: T.List['TYPE_var'], kwargs: T.Dict[str, 'TYPE_var']) -> 'TYPE_var':
        if method_name == 'to_string':
            return self.to_string()
        if method_name in self.methods:
            method = self.methods[method_name]
            if not getattr(method, 'no-args-flattening', False):
                args = mesonlib.flatten(args)
            return method(args, kwargs)
        raise InterpreterRuntimeError("Unknown method '{}' for {} object".format(method_name, self.type_name))

    def to_string(self) -> str:
        return '<{}>'.format(self.type_name)

    def equality_fields(self) -> T.Dict[str, T.Any]:
        return {k: v for k, v in vars(self).items() if k != 'methods'}

    def is_equal(self, other: 'InterpreterObject') -> bool:
        if type(self) is not type(other):
            return False
        return self.equality_fields() == other.equality_fields()

    def __repr__(self) -> str:
        return '<{} {}>'.format(type(self).__name__, self.to_string())

TYPE_elementary = T.Union[str, int, bool, None]
TYPE_var = T.Union[TYPE_elementary, list, dict, InterpreterObject]
TYPE_kwargs = T.Dict[str, TYPE_var]

def is_int(value: T.Any) -> bool:
    # bool is an int subclass in Python but a distinct kind in the language
    return isinstance(value, int) and not isinstance(value, bool)

def type_name(value: TYPE_var) -> str:
    if isinstance(value, bool):
        return 'boolean'
    if isinstance(value, int):
        return 'integer'
    if isinstance(value, str):
        return 'string'
    if isinstance(value, list):
        return 'array'
    if isinstance(value, dict):
        return 'dict'
    if value is None:
        return 'none'
    if isinstance(value, InterpreterObject):
        return value.type_name
    return type(value).__name__

def coerce_string(value: TYPE_var) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, int):
        return str(value)
    if isinstance(value, list):
        return '[' + ', '.join(coerce_string(v) for v in value) + ']'
    if isinstance(value, dict):
        return '{' + ', '.join('{}: {}'.format(k, coerce_string(value[k])) for k in sorted(value)) + '}'
    if value is None:
        return 'none'
    if isinstance(value, InterpreterObject):
        return value.to_string()
    raise InterpreterTypeError('Cannot convert {!r} to a string'.format(value))

def coerce_bool(value: TYPE_var) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value != 0
    if isinstance(value, (str, list, dict)):
        return len(value) > 0
    if value is None:
        return False
    return True

def values_equal(left: TYPE_var, right: TYPE_var) -> bool:
    if isinstance(left, str) and isinstance(right, str):
        return left == right
    if isinstance(left, str):
        return left == coerce_string(right)
    if isinstance(right, str):
        return coerce_string(left) == right
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left == right
    if isinstance(left, InterpreterObject) and isinstance(right, InterpreterObject):
        return left.is_equal(right)
    if isinstance(left, list) and isinstance(right, list):
        return len(left) == len(right) and all(values_equal(a, b) for a, b in zip(left, right))
    if isinstance(left, dict) and isinstance(right, dict):
        return left.keys() == right.keys() and all(values_equal(left[k], right[k]) for k in left)
    if is_int(left) and is_int(right):
        return left == right
    return left is None and right is None

def wrap_int(value: int) -> int:
    # Integers are 64 bit two's complement
    return (value + 2 ** 63) % 2 ** 64 - 2 ** 63

def truncating_divmod(l: int, r: int) -> T.Tuple[int, int]:
    # Division rounds towards zero and the remainder takes the sign of the dividend
    q = abs(l) // abs(r)
    if (l < 0) != (r < 0):
        q = -q
    return q, l - r * q

def format_string(templ: str, args: T.List[TYPE_var]) -> str:
    arg_strings = [coerce_string(a) for a in args]

    def arg_replace(match: T.Match[str]) -> str:
        idx = int(match.group(1))
        if idx >= len(arg_strings):
            return match.group(0)
        return arg_strings[idx]

    return re.sub(r'@(\d+)@', arg_replace, templ)

def substring(s: str, start: T.Optional[int], end: T.Optional[int]) -> str:
    if not s:
        return ''
    length = len(s)
    start = 0 if start is None else start
    end = length if end is None else end
    if start < 0:
        start += length - 1
    if end < 0:
        end += length - 1
    start = min(max(start, 0), length - 1)
    end = min(max(end, start), length - 1)
    return s[start:end]

# Decorators for method calls.

def noPosargs(f: T.Callable[..., T.Any]) -> T.Callable[..., T.Any]:
    @wraps(f)
    def wrapped(*wrapped_args: T.Any, **wrapped_kwargs: T.Any) -> T.Any:
        args = wrapped_args[-2]
        if args:
            raise InterpreterTypeError('Function does not take positional arguments.')
        return f(*wrapped_args, **wrapped_kwargs)
    return wrapped

def noKwargs(f: T.Callable[..., T.Any]) -> T.Callable[..., T.Any]:
    @wraps(f)
    def wrapped(*wrapped_args: T.Any, **wrapped_kwargs: T.Any) -> T.Any:
        kwargs = wrapped_args[-1]
        if kwargs:
            raise InterpreterTypeError('Function does not take keyword arguments.')
        return f(*wrapped_args, **wrapped_kwargs)
    return wrapped

def stringArgs(f: T.Callable[..., T.Any]) -> T.Callable[..., T.Any]:
    @wraps(f)
    def wrapped(*wrapped_args: T.Any, **wrapped_kwargs: T.Any) -> T.Any:
        args = wrapped_args[-2]
        if not all(isinstance(s, str) for s in args):
            raise InterpreterTypeError('Arguments must be strings.')
        return f(*wrapped_args, **wrapped_kwargs)
    return wrapped

def noArgsFlattening(f: T.Callable[..., T.Any]) -> T.Callable[..., T.Any]:
    setattr(f, 'no-args-flattening', True)
    return f

class permittedKwargs:

    def __init__(self, permitted: T.Set[str]):
        self.permitted = permitted  # type: T.Set[str]

    def __call__(self, f: T.Callable[..., T.Any]) -> T.Callable[..., T.Any]:
        @wraps(f)
        def wrapped(*wrapped_args: T.Any, **wrapped_kwargs: T.Any) -> T.Any:
            node = wrapped_args[-3] if len(wrapped_args) >= 4 else None
            kwargs = wrapped_args[-1]
            for k in kwargs:
                if k not in self.permitted:
                    mlog.warning('Passed invalid keyword argument "{}".'.format(k), location=node)
            return f(*wrapped_args, **wrapped_kwargs)
        return wrapped

def first_string_arg(args: T.List[TYPE_var], what: str) -> str:
    if not args or not isinstance(args[0], str):
        raise InterpreterTypeError('{} requires a string argument'.format(what))
    return args[0]

def optional_int_arg(args: T.List[TYPE_var], idx: int, what: str) -> T.Optional[int]:
    if len(args) <= idx:
        return None
    if not is_int(args[idx]):
        raise InterpreterTypeError('{} arguments must be integers'.format(what))
    return T.cast(int, args[idx])

class InterpreterBase:
    def __init__(self) -> None:
        self.funcs = {}  # type: T.Dict[str, T.Callable[[mparser.BaseNode, T.List[TYPE_var], TYPE_kwargs], TYPE_var]]
        self.variables = {}  # type: T.Dict[str, TYPE_var]
        # Current node set during a function call. This can be used as location
        # when printing a warning message during a method call.
        self.current_node = None  # type: T.Optional[mparser.BaseNode]

    def parse(self, code: str, filename: str = '') -> mparser.CodeBlockNode:
        try:
            return mparser.Parser(code, filename).parse()
        except mesonlib.MesonException as me:
            me.file = filename
            raise

    def interpret_string(self, code: str, filename: str = '') -> None:
        self.evaluate_codeblock(self.parse(code, filename))

    def evaluate_codeblock(self, node: mparser.CodeBlockNode) -> ControlFlow:
        for cur in node.lines:
            try:
                flow = self.execute_statement(cur)
            except Exception as e:
                if getattr(e, 'lineno', None) is None:
                    # We are doing the equivalent to setattr here and mypy does not like it
                    e.lineno = cur.lineno    # type: ignore
                    e.colno = cur.colno      # type: ignore
                    e.file = cur.filename    # type: ignore
                raise e
            if flow is not ControlFlow.PROCEED:
                return flow
        return ControlFlow.PROCEED

    def execute_statement(self, cur: mparser.BaseNode) -> ControlFlow:
        self.current_node = cur
        if isinstance(cur, mparser.BreakNode):
            return ControlFlow.BREAK
        elif isinstance(cur, mparser.ContinueNode):
            return ControlFlow.CONTINUE
        elif isinstance(cur, mparser.IfClauseNode):
            return self.evaluate_if(cur)
        elif isinstance(cur, mparser.ForeachClauseNode):
            self.evaluate_foreach(cur)
        elif isinstance(cur, mparser.AssignmentNode):
            self.assignment(cur)
        elif isinstance(cur, mparser.PlusAssignmentNode):
            self.evaluate_plusassign(cur)
        else:
            self.evaluate_statement(cur)
        return ControlFlow.PROCEED

    def evaluate_statement(self, cur: mparser.BaseNode) -> TYPE_var:
        if isinstance(cur, mparser.FunctionNode):
            return self.function_call(cur)
        elif isinstance(cur, mparser.MethodNode):
            return self.method_call(cur)
        elif isinstance(cur, (mparser.StringNode, mparser.BooleanNode, mparser.NumberNode)):
            return cur.value
        elif isinstance(cur, mparser.FormatStringNode):
            return self.evaluate_fstring(cur)
        elif isinstance(cur, mparser.IdNode):
            return self.get_variable(cur.value)
        elif isinstance(cur, mparser.ComparisonNode):
            return self.evaluate_comparison(cur)
        elif isinstance(cur, mparser.ArrayNode):
            return self.evaluate_arraystatement(cur)
        elif isinstance(cur, mparser.DictNode):
            return self.evaluate_dictstatement(cur)
        elif isinstance(cur, mparser.AndNode):
            return self.evaluate_andstatement(cur)
        elif isinstance(cur, mparser.OrNode):
            return self.evaluate_orstatement(cur)
        elif isinstance(cur, mparser.NotNode):
            return not coerce_bool(self.evaluate_statement(cur.value))
        elif isinstance(cur, mparser.UMinusNode):
            return self.evaluate_uminusstatement(cur)
        elif isinstance(cur, mparser.ArithmeticNode):
            return self.evaluate_arithmeticstatement(cur)
        elif isinstance(cur, mparser.IndexNode):
            return self.evaluate_indexing(cur)
        elif isinstance(cur, mparser.TernaryNode):
            return self.evaluate_ternary(cur)
        raise InterpreterRuntimeError('Unknown statement.')

    def evaluate_arraystatement(self, cur: mparser.ArrayNode) -> T.List[TYPE_var]:
        return [self.evaluate_statement(arg) for arg in cur.args.arguments]

    def evaluate_dictstatement(self, cur: mparser.DictNode) -> T.Dict[str, TYPE_var]:
        result = {}  # type: T.Dict[str, TYPE_var]
        for key, value in cur.entries:
            if isinstance(key, mparser.IdNode):
                str_key = key.value
            else:
                str_key = self.evaluate_statement(key)
            # on duplicate keys the last one wins
            result[str_key] = self.evaluate_statement(value)
        return result

    def evaluate_fstring(self, node: mparser.FormatStringNode) -> str:
        def replace(match: T.Match[str]) -> str:
            var = match.group(1)
            if var not in self.variables:
                # left for a later format() call
                return match.group(0)
            return coerce_string(self.variables[var])

        return re.sub(r'@([_a-zA-Z][_0-9a-zA-Z]*)@', replace, node.value)

    def evaluate_if(self, node: mparser.IfClauseNode) -> ControlFlow:
        for i in node.ifs:
            if coerce_bool(self.evaluate_statement(i.condition)):
                return self.evaluate_codeblock(i.block)
        if node.elseblock is not None:
            return self.evaluate_codeblock(node.elseblock)
        return ControlFlow.PROCEED

    def evaluate_in(self, val1: TYPE_var, val2: TYPE_var) -> bool:
        if isinstance(val2, list):
            return any(values_equal(val1, v) for v in val2)
        if isinstance(val2, str):
            return isinstance(val1, str) and val1 in val2
        if isinstance(val2, dict):
            return isinstance(val1, str) and val1 in val2
        return False

    def evaluate_comparison(self, node: mparser.ComparisonNode) -> bool:
        val1 = self.evaluate_statement(node.left)
        val2 = self.evaluate_statement(node.right)
        if node.ctype == 'in':
            return self.evaluate_in(val1, val2)
        elif node.ctype == 'notin':
            return not self.evaluate_in(val1, val2)
        elif node.ctype == '==':
            return values_equal(val1, val2)
        elif node.ctype == '!=':
            return not values_equal(val1, val2)
        if not ((is_int(val1) and is_int(val2)) or (isinstance(val1, str) and isinstance(val2, str))):
            raise InterpreterTypeError('Cannot compare incompatible types')
        if node.ctype == '<':
            return val1 < val2   # type: ignore
        elif node.ctype == '<=':
            return val1 <= val2  # type: ignore
        elif node.ctype == '>':
            return val1 > val2   # type: ignore
        elif node.ctype == '>=':
            return val1 >= val2  # type: ignore
        raise InterpreterRuntimeError('Unknown comparison operator ' + node.ctype)

    def evaluate_andstatement(self, cur: mparser.AndNode) -> bool:
        if not coerce_bool(self.evaluate_statement(cur.left)):
            return False
        return coerce_bool(self.evaluate_statement(cur.right))

    def evaluate_orstatement(self, cur: mparser.OrNode) -> bool:
        if coerce_bool(self.evaluate_statement(cur.left)):
            return True
        return coerce_bool(self.evaluate_statement(cur.right))

    def evaluate_uminusstatement(self, cur: mparser.UMinusNode) -> int:
        v = self.evaluate_statement(cur.value)
        if not is_int(v):
            raise InterpreterTypeError('Cannot negate non-integer')
        return wrap_int(-T.cast(int, v))

    def evaluate_addition(self, l: TYPE_var, r: TYPE_var) -> TYPE_var:
        if is_int(l) and is_int(r):
            return wrap_int(l + r)  # type: ignore
        if isinstance(l, str) and isinstance(r, str):
            return l + r
        if isinstance(l, list):
            if isinstance(r, list):
                return l + r
            return l + [r]
        raise InterpreterTypeError('Cannot add incompatible types {} + {}'.format(type_name(l), type_name(r)))

    def evaluate_division(self, l: TYPE_var, r: TYPE_var) -> TYPE_var:
        if isinstance(l, str) and isinstance(r, str):
            return self.join_paths(l, r)
        if is_int(l) and is_int(r):
            if r == 0:
                raise InterpreterRuntimeError('Division by zero')
            return wrap_int(truncating_divmod(T.cast(int, l), T.cast(int, r))[0])
        raise InterpreterTypeError('Invalid operands for division')

    def evaluate_arithmeticstatement(self, cur: mparser.ArithmeticNode) -> TYPE_var:
        l = self.evaluate_statement(cur.left)
        r = self.evaluate_statement(cur.right)

        if cur.operation == 'add':
            return self.evaluate_addition(l, r)
        elif cur.operation == 'sub':
            if not is_int(l) or not is_int(r):
                raise InterpreterTypeError('Cannot subtract non-integers')
            return wrap_int(l - r)  # type: ignore
        elif cur.operation == 'mul':
            if is_int(l) and is_int(r):
                return wrap_int(l * r)  # type: ignore
            if isinstance(l, str) and is_int(r):
                return l * max(T.cast(int, r), 0)
            if is_int(l) and isinstance(r, str):
                return r * max(T.cast(int, l), 0)
            raise InterpreterTypeError('Invalid operands for multiplication')
        elif cur.operation == 'div':
            return self.evaluate_division(l, r)
        elif cur.operation == 'mod':
            if not is_int(l) or not is_int(r):
                raise InterpreterTypeError('Cannot modulo non-integers')
            if r == 0:
                raise InterpreterRuntimeError('Modulo by zero')
            return wrap_int(truncating_divmod(T.cast(int, l), T.cast(int, r))[1])
        raise InterpreterRuntimeError('Unknown arithmetic operator ' + cur.operation)

    def evaluate_ternary(self, node: mparser.TernaryNode) -> TYPE_var:
        if coerce_bool(self.evaluate_statement(node.condition)):
            return self.evaluate_statement(node.trueblock)
        return self.evaluate_statement(node.falseblock)

    def evaluate_foreach(self, node: mparser.ForeachClauseNode) -> None:
        items = self.evaluate_statement(node.items)
        if isinstance(items, str):
            items = list(items)
        elif not isinstance(items, list):
            raise InterpreterTypeError('Cannot iterate over non-iterable')
        for item in items:
            self.set_variable(node.varname, item)
            if self.evaluate_codeblock(node.block) is ControlFlow.BREAK:
                break

    def evaluate_plusassign(self, node: mparser.PlusAssignmentNode) -> None:
        addition = self.evaluate_statement(node.value)
        if node.var_name not in self.variables:
            self.set_variable(node.var_name, addition)
            return
        old_variable = self.variables[node.var_name]
        self.set_variable(node.var_name, self.evaluate_addition(old_variable, addition))

    def evaluate_indexing(self, node: mparser.IndexNode) -> TYPE_var:
        iobject = self.evaluate_statement(node.iobject)
        index = self.evaluate_statement(node.index)

        if isinstance(iobject, dict):
            if not isinstance(index, str):
                raise InterpreterTypeError('Dictionary key must be string')
            if index not in iobject:
                raise InterpreterRuntimeError("Key '{}' not found".format(index))
            return iobject[index]
        elif isinstance(iobject, (list, str)):
            what = 'Array' if isinstance(iobject, list) else 'String'
            if not is_int(index):
                raise InterpreterTypeError('{} index must be integer'.format(what))
            idx = T.cast(int, index)
            if idx < 0:
                idx += len(iobject)
            if not 0 <= idx < len(iobject):
                raise InterpreterRuntimeError('Index {} out of bounds'.format(index))
            return iobject[idx]
        raise InterpreterTypeError('Cannot subscript this type')

    def reduce_arguments(self, args: mparser.ArgumentNode) -> T.Tuple[T.List[TYPE_var], TYPE_kwargs]:
        reduced_pos = [self.evaluate_statement(arg) for arg in args.arguments]
        reduced_kw = {}  # type: TYPE_kwargs
        for key, val in args.kwargs.items():
            reduced_kw[key] = self.evaluate_statement(val)
        return reduced_pos, reduced_kw

    def function_call(self, node: mparser.FunctionNode) -> TYPE_var:
        func_name = node.func_name
        (posargs, kwargs) = self.reduce_arguments(node.args)
        if func_name not in self.funcs:
            raise UndefinedFunction(func_name)
        func = self.funcs[func_name]
        if not getattr(func, 'no-args-flattening', False):
            posargs = mesonlib.flatten(posargs)
        self.current_node = node
        return func(node, posargs, kwargs)

    def method_call(self, node: mparser.MethodNode) -> TYPE_var:
        obj = self.evaluate_statement(node.source_object)
        method_name = node.name
        (args, kwargs) = self.reduce_arguments(node.args)
        if isinstance(obj, str):
            return self.string_method_call(obj, method_name, args, kwargs)
        if isinstance(obj, list):
            return self.array_method_call(obj, method_name, args, kwargs)
        if isinstance(obj, dict):
            return self.dict_method_call(obj, method_name, args, kwargs)
        if isinstance(obj, InterpreterObject):
            return obj.method_call(method_name, args, kwargs)
        raise InterpreterTypeError("Cannot call method '{}' on {}".format(method_name, type_name(obj)))

    def string_method_call(self, obj: str, method_name: str, posargs: T.List[TYPE_var], kwargs: TYPE_kwargs) -> TYPE_var:
        if method_name == 'format':
            return format_string(obj, posargs)
        elif method_name == 'split':
            sep = first_string_arg(posargs, 'split') if posargs else ' '
            if sep == '':
                return [''] + list(obj) + ['']
            return obj.split(sep)
        elif method_name == 'join':
            return obj.join(coerce_string(a) for a in mesonlib.flatten(posargs))
        elif method_name == 'strip':
            if posargs:
                return obj.strip(first_string_arg(posargs, 'strip'))
            return obj.strip()
        elif method_name == 'startswith':
            return obj.startswith(first_string_arg(posargs, 'startswith'))
        elif method_name == 'endswith':
            return obj.endswith(first_string_arg(posargs, 'endswith'))
        elif method_name == 'contains':
            return first_string_arg(posargs, 'contains') in obj
        elif method_name == 'substring':
            start = optional_int_arg(posargs, 0, 'substring')
            end = optional_int_arg(posargs, 1, 'substring')
            return substring(obj, start, end)
        elif method_name == 'underscorify':
            return re.sub(r'[^a-zA-Z0-9]', '_', obj)
        elif method_name == 'to_upper':
            return obj.upper()
        elif method_name == 'to_lower':
            return obj.lower()
        raise InterpreterRuntimeError("Unknown method '{}' for string".format(method_name))

    def array_method_call(self, obj: T.List[TYPE_var], method_name: str, posargs: T.List[TYPE_var], kwargs: TYPE_kwargs) -> TYPE_var:
        if method_name == 'contains':
            if len(posargs) != 1:
                raise InterpreterTypeError('contains() takes exactly one argument')
            return any(values_equal(element, posargs[0]) for element in obj)
        elif method_name == 'length':
            return len(obj)
        elif method_name == 'get':
            if not posargs or len(posargs) > 2:
                raise InterpreterTypeError('get() takes an index and an optional fallback value')
            index = posargs[0]
            if not is_int(index):
                raise InterpreterTypeError('Array index must be integer')
            idx = T.cast(int, index)
            if idx < 0:
                idx += len(obj)
            if 0 <= idx < len(obj):
                return obj[idx]
            if len(posargs) == 2:
                return posargs[1]
            raise InterpreterRuntimeError('Index out of range and no fallback value provided')
        raise InterpreterRuntimeError("Unknown method '{}' for array".format(method_name))

    def dict_method_call(self, obj: T.Dict[str, TYPE_var], method_name: str, posargs: T.List[TYPE_var], kwargs: TYPE_kwargs) -> TYPE_var:
        if method_name in ('has_key', 'get'):
            key = first_string_arg(posargs, method_name)
            if method_name == 'has_key':
                return key in obj
            if key in obj:
                return obj[key]
            if len(posargs) == 2:
                return posargs[1]
            raise InterpreterRuntimeError('Key not found and no fallback value provided')
        elif method_name == 'keys':
            return sorted(obj.keys())
        elif method_name == 'values':
            return [obj[k] for k in sorted(obj.keys())]
        raise InterpreterRuntimeError("Unknown method '{}' for dict".format(method_name))

    def assignment(self, node: mparser.AssignmentNode) -> None:
        value = self.evaluate_statement(node.value)
        self.set_variable(node.var_name, value)

    def set_variable(self, varname: str, variable: TYPE_var) -> None:
        self.variables[varname] = variable

    def get_variable(self, varname: str) -> TYPE_var:
        if varname in self.variables:
            return self.variables[varname]
        raise UndefinedVariable(varname)

    def is_variable(self, varname: str) -> bool:
        return varname in self.variables

    def join_paths(self, left: str, right: str) -> str:
        return mesonlib.join_paths(left, right)
