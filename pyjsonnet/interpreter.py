"""Interpreter.

This is a tree-walk interpreter for evaluating AST nodes produced by the parser.

1. Execution Model
The interpreter evaluates the AST recursively with `_eval()`. Each node is a
tuple whose first element names the construct and whose last element is its
source Location, used in error messages and stack traces.

2. Environment
Environments are plain dictionaries mapping names to values or Thunks.
`local` bindings are lazy and mutually recursive: every binding of one
`local` shares a single new environment, and a Thunk is only evaluated the
first time its name is read. Function calls bind their parameters as Thunks
over the caller's environment.

3. Call Stack
Each function call pushes a TraceFrame before its body runs. The stack is
limited to `max_stack` active calls. When evaluation fails the trace is built
innermost first: the failing expression, then each call site, ending at the
top level.

4. Heap Accounting
Closures, thunks, arrays and objects are counted as they are created. Once the
count passes `gc_min_objects` and has grown by `gc_growth_trigger` times since
the last sweep, Python's cycle collector is asked to run.

5. Output
The final value is manifested as JSON with three-space indentation and sorted
keys. Integral numbers are printed without a fractional part.


File: interpreter.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""
import gc
import json
import math
import sys
from contextlib import contextmanager

from pyjsonnet.exceptions import EvaluationError, TraceFrame

# Python frames allowed per language call frame.
PY_FRAMES_PER_CALL = 40
MAX_RECURSION_LIMIT = 200000


class Thunk:
    """A lazily evaluated binding."""

    def __init__(self, node, env):
        self.node = node
        self.env = env
        self.evaluated = False
        self.value = None

    def force(self, interpreter: 'Interpreter'):
        if not self.evaluated:
            self.value = interpreter._eval(self.node, self.env)
            self.evaluated = True
            self.node = self.env = None
        return self.value


class Closure:
    """Runtime representation of a function value."""

    def __init__(self, params, body, env, name=None):
        self.params = params
        self.body = body
        self.env = env
        self.name = name


class Heap:
    """Allocation counter that decides when to request a collection."""

    def __init__(self, min_objects: int, growth_trigger: float):
        self.min_objects = min_objects
        self.growth_trigger = growth_trigger
        self.allocated = 0
        self.last_sweep = 0
        self.sweeps = 0

    def allocate(self, count: int = 1) -> None:
        self.allocated += count
        if (self.allocated > self.min_objects
                and self.allocated > self.growth_trigger * self.last_sweep):
            gc.collect()
            self.sweeps += 1
            self.last_sweep = self.allocated


def type_name(value) -> str:
    """
    Return the language-level name of a runtime value's type.
    """
    if value is None:
        return 'null'
    if isinstance(value, bool):
        return 'boolean'
    if isinstance(value, float):
        return 'number'
    if isinstance(value, str):
        return 'string'
    if isinstance(value, list):
        return 'array'
    if isinstance(value, dict):
        return 'object'
    if isinstance(value, Closure):
        return 'function'
    raise TypeError(f"Not a runtime value: {value!r}")


def _to_json(value):
    if isinstance(value, float):
        if value.is_integer() and abs(value) < 2 ** 53:
            return int(value)
        return value
    if isinstance(value, list):
        return [_to_json(v) for v in value]
    if isinstance(value, dict):
        return {k: _to_json(v) for k, v in value.items()}
    if isinstance(value, Closure):
        raise ValueError("Couldn't manifest function in JSON output.")
    return value


class Interpreter:
    """Tree-walk interpreter for the Jsonnet subset."""

    def __init__(self, max_stack: int = 500, gc_min_objects: int = 1000,
                 gc_growth_trigger: float = 2.0):
        """Initialize the interpreter."""
        self.max_stack = max_stack
        self.heap = Heap(gc_min_objects, gc_growth_trigger)
        self._stack: list[TraceFrame] = []

    # ------------------------------------------------------------------
    # Errors
    # ------------------------------------------------------------------

    def _trace(self, location) -> list[TraceFrame]:
        """
        Build the stack trace for a failure at ``location``, innermost first.
        """
        locations = [location] + [frame.location for frame in reversed(self._stack)]
        names = [frame.name for frame in reversed(self._stack)] + ['']
        if location is None:
            locations, names = locations[1:], names[1:]
        return [TraceFrame(loc, name) for loc, name in zip(locations, names)]

    def _error(self, message: str, location) -> EvaluationError:
        return EvaluationError(message, self._trace(location))

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    @contextmanager
    def _recursion_limit(self):
        """
        Raise Python's recursion limit to fit `max_stack` nested calls.
        """
        limit = sys.getrecursionlimit()
        sys.setrecursionlimit(
            min(max(limit, self.max_stack * PY_FRAMES_PER_CALL + 1000), MAX_RECURSION_LIMIT)
        )
        try:
            yield
        finally:
            sys.setrecursionlimit(limit)

    def evaluate(self, ast):
        """
        Evaluate a program and return its value.

        Raises:
            EvaluationError: If evaluation fails or the stack limit is exceeded.
        """
        with self._recursion_limit():
            try:
                return self._eval(ast, {})
            except RecursionError:
                raise EvaluationError("Max stack frames exceeded.", self._trace(None)) from None

    def manifest(self, value) -> str:
        """
        Render a value as JSON.

        Raises:
            EvaluationError: If the value contains a function.
        """
        with self._recursion_limit():
            try:
                return json.dumps(_to_json(value), indent=3, sort_keys=True, ensure_ascii=False)
            except RecursionError:
                raise EvaluationError("Max stack frames exceeded.") from None
            except ValueError as e:
                raise EvaluationError(str(e)) from e

    def to_string(self, value, location=None) -> str:
        """
        Convert a value to a string the way string concatenation does.
        """
        if isinstance(value, str):
            return value
        try:
            return json.dumps(_to_json(value), sort_keys=True, ensure_ascii=False)
        except RecursionError:
            raise self._error("Max stack frames exceeded.", location) from None
        except ValueError as e:
            raise self._error(str(e), location) from e

    # ------------------------------------------------------------------
    # Evaluation
    # ------------------------------------------------------------------

    def _eval(self, node, env):
        """
        Recursively evaluate an expression node and return its value.

        Parameters:
            node (tuple): An expression node.
            env (dict): The variables in scope.

        Raises:
            EvaluationError: On any runtime failure.
        """
        op = node[0]
        loc = node[-1]

        if op in ('number', 'string', 'literal'):
            return node[1]

        elif op == 'var':
            value = env[node[1]]
            if isinstance(value, Thunk):
                return value.force(self)
            return value

        elif op == 'array':
            self.heap.allocate()
            return [self._eval(element, env) for element in node[1]]

        elif op == 'object':
            self.heap.allocate()
            result = {}
            for key_node, value_node in node[1]:
                key = self._eval(key_node, env)
                if key is None:
                    continue
                if not isinstance(key, str):
                    raise self._error(f"Field name must be string, got {type_name(key)}.", key_node[-1])
                if key in result:
                    raise self._error(f'Duplicate field name: "{key}"', key_node[-1])
                result[key] = self._eval(value_node, env)
            return result

        elif op == 'local':
            _, binds, body, _ = node
            new_env = dict(env)
            for name, value_node in binds:
                if value_node[0] == 'function':
                    new_env[name] = Closure(value_node[1], value_node[2], new_env, name)
                else:
                    new_env[name] = Thunk(value_node, new_env)
            self.heap.allocate(len(binds))
            return self._eval(body, new_env)

        elif op == 'if':
            _, cond_node, branch_true, branch_false, _ = node
            cond = self._eval(cond_node, env)
            if not isinstance(cond, bool):
                raise self._error(f"Condition must be boolean, got {type_name(cond)}.", cond_node[-1])
            if cond:
                return self._eval(branch_true, env)
            if branch_false is None:
                return None
            return self._eval(branch_false, env)

        elif op == 'function':
            self.heap.allocate()
            return Closure(node[1], node[2], env)

        elif op == 'error':
            value = self._eval(node[1], env)
            raise self._error(self.to_string(value, loc), loc)

        elif op == 'unary':
            return self._eval_unary(node[1], self._eval(node[2], env), loc)

        elif op == 'binary':
            return self._eval_binary(node, env)

        elif op == 'apply':
            return self._call(node, env)

        elif op == 'index':
            return self._eval_index(self._eval(node[1], env), self._eval(node[2], env), loc)

        raise self._error(f"Invalid expression node: {op}", loc)

    def _call(self, node, env):
        _, target_node, arg_nodes, loc = node
        func = self._eval(target_node, env)
        if not isinstance(func, Closure):
            raise self._error(f"Only functions can be called, got {type_name(func)}.", loc)
        if len(arg_nodes) != len(func.params):
            raise self._error(
                f"Function expected {len(func.params)} argument(s), but got {len(arg_nodes)}",
                loc,
            )
        if len(self._stack) >= self.max_stack:
            raise self._error("Max stack frames exceeded.", loc)

        call_env = dict(func.env)
        for param, arg in zip(func.params, arg_nodes):
            call_env[param] = Thunk(arg, env)
        self.heap.allocate(len(arg_nodes))

        name = f"function <{func.name}>" if func.name else "function <anonymous>"
        self._stack.append(TraceFrame(loc, name))
        result = self._eval(func.body, call_env)
        self._stack.pop()
        return result

    def _eval_unary(self, op: str, value, loc):
        if op == '!':
            if not isinstance(value, bool):
                raise self._error(f"Unary operator ! does not operate on type {type_name(value)}.", loc)
            return not value
        if not isinstance(value, float) or isinstance(value, bool):
            raise self._error(f"Unary operator {op} does not operate on type {type_name(value)}.", loc)
        return -value if op == '-' else value

    def _eval_binary(self, node, env):
        _, op, left_node, right_node, loc = node

        if op in ('&&', '||'):
            left = self._eval(left_node, env)
            if not isinstance(left, bool):
                raise self._error(f"Binary operator {op} requires boolean, got {type_name(left)}.", loc)
            if (op == '&&' and not left) or (op == '||' and left):
                return left
            right = self._eval(right_node, env)
            if not isinstance(right, bool):
                raise self._error(f"Binary operator {op} requires boolean, got {type_name(right)}.", loc)
            return right

        left = self._eval(left_node, env)
        right = self._eval(right_node, env)

        if op == '==':
            return self._equals(left, right, loc)
        if op == '!=':
            return not self._equals(left, right, loc)

        if op == '+':
            if isinstance(left, str) or isinstance(right, str):
                return self.to_string(left, loc) + self.to_string(right, loc)
            if isinstance(left, list) and isinstance(right, list):
                self.heap.allocate()
                return left + right
            if isinstance(left, dict) and isinstance(right, dict):
                self.heap.allocate()
                return {**left, **right}

        left_type, right_type = type_name(left), type_name(right)
        if left_type != right_type:
            raise self._error(
                f"Binary operator {op} requires matching types, got {left_type} and {right_type}.",
                loc,
            )

        if op in ('<', '<=', '>', '>='):
            if left_type not in ('number', 'string'):
                raise self._error(f"Binary operator {op} does not operate on {left_type}s.", loc)
            match op:
                case '<':
                    return left < right
                case '<=':
                    return left <= right
                case '>':
                    return left > right
                case '>=':
                    return left >= right

        if left_type != 'number':
            raise self._error(f"Binary operator {op} does not operate on {left_type}s.", loc)

        match op:
            case '+':
                result = left + right
            case '-':
                result = left - right
            case '*':
                result = left * right
            case '/':
                if right == 0:
                    raise self._error("Division by zero.", loc)
                result = left / right
            case '%':
                if right == 0:
                    raise self._error("Division by zero.", loc)
                result = math.fmod(left, right)
            case _:
                raise self._error(f"Unknown binary operator {op}", loc)
        if not math.isfinite(result):
            raise self._error("Overflow", loc)
        return result

    def _equals(self, left, right, loc) -> bool:
        left_type, right_type = type_name(left), type_name(right)
        if left_type != right_type:
            return False
        if left_type == 'function':
            raise self._error("Cannot test equality of functions", loc)
        if left_type == 'array':
            return len(left) == len(right) and all(
                self._equals(a, b, loc) for a, b in zip(left, right)
            )
        if left_type == 'object':
            return left.keys() == right.keys() and all(
                self._equals(left[k], right[k], loc) for k in left
            )
        return left == right

    def _eval_index(self, target, index, loc):
        if isinstance(target, dict):
            if not isinstance(index, str):
                raise self._error(f"Object index must be string, got {type_name(index)}.", loc)
            if index not in target:
                raise self._error(f"Field does not exist: {index}", loc)
            return target[index]
        if isinstance(target, (list, str)):
            if not isinstance(index, float) or isinstance(index, bool):
                raise self._error(f"Index must be number, got {type_name(index)}.", loc)
            if not index.is_integer():
                raise self._error(f"Index must be an integer, got {index:g}.", loc)
            i = int(index)
            if i < 0 or i >= len(target):
                raise self._error(f"Index {i} out of bounds, not within [0, {len(target)})", loc)
            return target[i]
        raise self._error(f"Cannot index {type_name(target)}.", loc)


def evaluate(ast, max_stack: int = 500, gc_min_objects: int = 1000,
             gc_growth_trigger: float = 2.0) -> str:
    """
    Evaluate a program and manifest the result as JSON text.

    Raises:
        EvaluationError: On any runtime failure.
    """
    interpreter = Interpreter(max_stack, gc_min_objects, gc_growth_trigger)
    return interpreter.manifest(interpreter.evaluate(ast))
