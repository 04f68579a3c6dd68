"""Evaluator.

This is a tree-walk evaluator for the AST produced by the parser.

1. Execution Model
The evaluator walks the tree recursively. Statements are evaluated by
`eval_statement()` and expressions by `eval_expression()`; both take the
environment to work in explicitly and dispatch on the node class with a
`match` statement.

2. Environment
The program runs in one top-level `Environment` owned by the evaluator, so a
REPL can keep feeding programs into the same scope. A function literal
captures a child of the scope it is evaluated in; a call evaluates the body
in a fresh child of that captured scope with the parameters bound.

3. Expression Evaluation
Operators are dispatched on the operand types. There is no implicit
conversion: integers and floats never mix, conditions must be booleans, and
every combination not handled explicitly raises `UnknownInfixOperatorError`
or `UnknownPrefixOperatorError` naming the operator and both operands.

4. Control Flow
`if` is an expression, `while` a statement whose value is null. A `return`
yields a `ReturnValue`. Every statement and expression that meets one stops
and hands it upward untouched, whether it came from a block, a loop body or
an `if` used as an operand, until the enclosing call unwraps it. It never
travels on the exception channel.

5. Error Handling
Runtime errors are `EvaluatorError` subclasses carrying the line number and
file name. They abort evaluation immediately.


File: evaluator.py
Version: 0.1.0
License: MIT
"""

import logging
import math

from belalang.ast import (
    BlockStatement,
    BooleanLiteral,
    CallExpression,
    ExpressionStatement,
    FloatLiteral,
    FunctionLiteral,
    Identifier,
    IfExpression,
    InfixExpression,
    IntegerLiteral,
    LetStatement,
    PrefixExpression,
    Program,
    ReturnStatement,
    StringLiteral,
    VarStatement,
    WhileStatement,
)
from belalang.builtins import Builtins
from belalang.environment import Environment
from belalang.exceptions import (
    ArityError,
    ConditionTypeError,
    DivisionByZeroError,
    EvalRecursionError,
    IntegerOverflowError,
    LogicalOperandError,
    NotAFunctionError,
    OverwriteBuiltinError,
    UnknownInfixOperatorError,
    UnknownPrefixOperatorError,
    UnknownVariableError,
    VariableRedeclarationError,
)
from belalang.objects import (
    INT_MAX,
    INT_MIN,
    NULL,
    Boolean,
    Builtin,
    Float,
    Function,
    Integer,
    Object,
    ReturnValue,
    String,
    native_bool,
)
from belalang.operations import COMPOUND_OPS, Op

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 200


class Evaluator:
    """Tree-walk evaluator for Belalang."""

    def __init__(
        self,
        builtins: Builtins | None = None,
        env: Environment | None = None,
        file: str = "<stdin>",
        max_depth: int = DEFAULT_MAX_DEPTH,
    ):
        """
        Initialize the evaluator.

        Parameters:
            builtins (Builtins): Native function registry; a default one when omitted.
            env (Environment): Top-level scope; a fresh one when omitted.
            file (str): Script name used in error messages.
            max_depth (int): Deepest chain of nested function calls allowed.
        """
        self.builtins = builtins if builtins is not None else Builtins()
        self.env = env if env is not None else Environment()
        self.file = file
        self.max_depth = max_depth
        self.depth = 0

    def evaluate(self, program: Program) -> Object:
        """
        Evaluate a whole program in the top-level environment.

        Returns:
            Object: The value of the last statement. A stray top-level
                `return` ends the program with its value.

        Raises:
            EvaluatorError: On the first runtime error.
        """
        try:
            result = self.eval_statements(program.statements, self.env)
        except RecursionError as e:
            raise EvalRecursionError(self.max_depth, file=self.file) from e
        if isinstance(result, ReturnValue):
            return result.value
        return result

    def eval_statements(self, statements, env: Environment):
        """
        Evaluate statements in order, stopping early on a `ReturnValue`.
        """
        result = NULL
        for statement in statements:
            result = self.eval_statement(statement, env)
            if isinstance(result, ReturnValue):
                return result
        return result

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------

    def eval_statement(self, node, env: Environment):
        """
        Evaluate one statement.

        Returns:
            Object | ReturnValue: The statement's value, or the signal of a
                `return` executed inside it.
        """
        match node:
            case ExpressionStatement(expression=expression):
                return self.eval_expression(expression, env)
            case BlockStatement(statements=statements):
                return self.eval_statements(statements, env)
            case ReturnStatement(value=value):
                result = self.eval_expression(value, env)
                if isinstance(result, ReturnValue):
                    return result
                return ReturnValue(result)
            case LetStatement(name=name, value=value):
                return self._declare(name, value, env)
            case VarStatement(name=name, operator=Op.DECLARE, value=value):
                return self._declare(name, value, env)
            case VarStatement(name=name, operator=Op.ASSIGN, value=value):
                if self.builtins.has(name.name):
                    raise OverwriteBuiltinError(name.name, node.line, self.file)
                result = self.eval_expression(value, env)
                if isinstance(result, ReturnValue):
                    return result
                env.set(name.name, result)
                return result
            case VarStatement():
                return self._compound_assign(node, env)
            case WhileStatement(condition=condition, body=body):
                while True:
                    test = self._condition(condition, env, 'while')
                    if isinstance(test, ReturnValue):
                        return test
                    if not test.value:
                        return NULL
                    result = self.eval_statement(body, env)
                    if isinstance(result, ReturnValue):
                        return result
        raise TypeError(f"Unknown statement node: {node!r}")

    def _declare(self, name: Identifier, value, env: Environment):
        if env.has_here(name.name):
            raise VariableRedeclarationError(name.name, name.line, self.file)
        if self.builtins.has(name.name):
            raise OverwriteBuiltinError(name.name, name.line, self.file)
        result = self.eval_expression(value, env)
        if isinstance(result, ReturnValue):
            return result
        env.set(name.name, result)
        return result

    def _compound_assign(self, node: VarStatement, env: Environment):
        name = node.name.name
        if self.builtins.has(name):
            raise OverwriteBuiltinError(name, node.line, self.file)
        current = env.get(name)
        if current is None:
            raise UnknownVariableError(name, node.line, self.file)
        right = self.eval_expression(node.value, env)
        if isinstance(right, ReturnValue):
            return right
        result = self._infix(COMPOUND_OPS[node.operator], current, right, node.line)
        env.set(name, result)
        return result

    def _condition(self, node, env: Environment, construct: str):
        """
        Evaluate a condition, which must be a Boolean. A `ReturnValue` from
        inside the condition is handed back unchecked.
        """
        value = self.eval_expression(node, env)
        if isinstance(value, ReturnValue):
            return value
        if not isinstance(value, Boolean):
            raise ConditionTypeError(construct, value, node.line, self.file)
        return value

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------

    def eval_expression(self, node, env: Environment):
        """
        Recursively evaluate an expression node and return its value.

        Returns:
            Object: The computed value, or the `ReturnValue` of a `return`
                executed anywhere inside the expression.

        Raises:
            EvaluatorError: If evaluation fails.
        """
        match node:
            # Literals
            case IntegerLiteral(value=value):
                return Integer(value)
            case FloatLiteral(value=value):
                return Float(value)
            case StringLiteral(value=value):
                return String(value)
            case BooleanLiteral(value=value):
                return native_bool(value)

            # Variables
            case Identifier(name=name):
                value = env.get(name)
                if value is not None:
                    return value
                if self.builtins.has(name):
                    return Builtin(name)
                raise UnknownVariableError(name, node.line, self.file)

            case PrefixExpression(operator=op, right=right):
                operand = self.eval_expression(right, env)
                if isinstance(operand, ReturnValue):
                    return operand
                return self._prefix(op, operand, node.line)

            case InfixExpression(operator=Op.AND | Op.OR as op, left=left, right=right):
                return self._logical(op, left, right, env, node.line)

            case InfixExpression(operator=op, left=left, right=right):
                lhs = self.eval_expression(left, env)
                if isinstance(lhs, ReturnValue):
                    return lhs
                rhs = self.eval_expression(right, env)
                if isinstance(rhs, ReturnValue):
                    return rhs
                return self._infix(op, lhs, rhs, node.line)

            case IfExpression(condition=condition, consequence=consequence, alternative=alternative):
                test = self._condition(condition, env, 'if')
                if isinstance(test, ReturnValue):
                    return test
                if test.value:
                    return self.eval_statement(consequence, env)
                if alternative is not None:
                    return self.eval_statement(alternative, env)
                return NULL

            case FunctionLiteral(params=params, body=body):
                return Function(params, body, env.capture())

            case CallExpression(function=function, args=arg_nodes):
                callee = self.eval_expression(function, env)
                if isinstance(callee, ReturnValue):
                    return callee
                args = []
                for arg in arg_nodes:
                    value = self.eval_expression(arg, env)
                    if isinstance(value, ReturnValue):
                        return value
                    args.append(value)
                return self._apply(callee, args, node.line)

        raise TypeError(f"Unknown expression node: {node!r}")

    def _apply(self, callee: Object, args: list, line) -> Object:
        """
        Call a user function or a builtin with evaluated arguments.
        """
        if isinstance(callee, Builtin):
            logger.debug("calling builtin %s with %d argument(s)", callee.name, len(args))
            return self.builtins.call(callee.name, args)
        if not isinstance(callee, Function):
            raise NotAFunctionError(callee, line, self.file)
        if len(args) != len(callee.params):
            raise ArityError(len(callee.params), len(args), line, self.file)
        if self.depth >= self.max_depth:
            raise EvalRecursionError(self.max_depth, line, self.file)

        call_env = Environment(callee.env)
        for param, arg in zip(callee.params, args):
            call_env.set(param.name, arg)

        logger.debug("calling %s at depth %d", callee, self.depth + 1)
        self.depth += 1
        try:
            result = self.eval_statement(callee.body, call_env)
        finally:
            self.depth -= 1
        if isinstance(result, ReturnValue):
            return result.value
        return result

    # ------------------------------------------------------------------
    # Operators
    # ------------------------------------------------------------------

    def _prefix(self, op: Op, right: Object, line) -> Object:
        match op, right:
            case Op.NOT, Boolean(value=value):
                return native_bool(not value)
            case Op.SUB, Integer(value=value):
                return self._checked(-value, op, line)
            case Op.SUB, Float(value=value):
                return Float(-value)
        raise UnknownPrefixOperatorError(op, right, line, self.file)

    def _logical(self, op: Op, left, right, env: Environment, line):
        """
        Short-circuiting `&&` and `||`; both sides must be booleans. A
        non-boolean left operand fails before the right one is touched.
        """
        lhs = self.eval_expression(left, env)
        if isinstance(lhs, ReturnValue):
            return lhs
        if not isinstance(lhs, Boolean):
            raise LogicalOperandError(lhs, op, line, self.file)
        if op == Op.AND and not lhs.value:
            return lhs
        if op == Op.OR and lhs.value:
            return lhs
        rhs = self.eval_expression(right, env)
        if isinstance(rhs, ReturnValue):
            return rhs
        if not isinstance(rhs, Boolean):
            raise UnknownInfixOperatorError(lhs, op, rhs, line, self.file)
        return rhs

    def _infix(self, op: Op, lhs: Object, rhs: Object, line) -> Object:
        match lhs, rhs:
            case Integer(value=l), Integer(value=r):
                return self._integer_infix(op, l, r, lhs, rhs, line)
            case Float(value=l), Float(value=r):
                return self._float_infix(op, l, r, lhs, rhs, line)
            case String(value=l), String(value=r) if op == Op.ADD:
                return String(l + r)
        match op:
            case Op.EQ:
                return native_bool(lhs == rhs)
            case Op.NE:
                return native_bool(lhs != rhs)
        raise UnknownInfixOperatorError(lhs, op, rhs, line, self.file)

    def _checked(self, value: int, op: Op, line) -> Integer:
        if not INT_MIN <= value <= INT_MAX:
            raise IntegerOverflowError(f"result of {op} does not fit in 64 bits", line, self.file)
        return Integer(value)

    def _integer_infix(self, op: Op, l: int, r: int, lhs, rhs, line) -> Object:
        match op:
            # Arithmetic
            case Op.ADD:
                return self._checked(l + r, op, line)
            case Op.SUB:
                return self._checked(l - r, op, line)
            case Op.MUL:
                return self._checked(l * r, op, line)
            case Op.DIV:
                if r == 0:
                    raise DivisionByZeroError(op, line, self.file)
                quotient = abs(l) // abs(r)
                return self._checked(quotient if (l < 0) == (r < 0) else -quotient, op, line)
            case Op.MOD:
                if r == 0:
                    raise DivisionByZeroError(op, line, self.file)
                remainder = abs(l) % abs(r)
                return Integer(-remainder if l < 0 else remainder)
            # Bitwise
            case Op.AND_BITS:
                return Integer(l & r)
            case Op.OR_BITS:
                return Integer(l | r)
            case Op.XOR_BITS:
                return Integer(l ^ r)
            case Op.SHL | Op.SHR:
                if not 0 <= r < 64:
                    raise IntegerOverflowError(f"shift amount {r} out of range", line, self.file)
                if op == Op.SHR:
                    return Integer(l >> r)
                wrapped = (l << r) & 0xFFFFFFFFFFFFFFFF
                return Integer(wrapped - (1 << 64) if wrapped > INT_MAX else wrapped)
            # Comparison
            case Op.EQ:
                return native_bool(l == r)
            case Op.NE:
                return native_bool(l != r)
            case Op.GT:
                return native_bool(l > r)
            case Op.LT:
                return native_bool(l < r)
            case Op.GE:
                return native_bool(l >= r)
            case Op.LE:
                return native_bool(l <= r)
        raise UnknownInfixOperatorError(lhs, op, rhs, line, self.file)

    def _float_infix(self, op: Op, l: float, r: float, lhs, rhs, line) -> Object:
        match op:
            case Op.ADD:
                return Float(l + r)
            case Op.SUB:
                return Float(l - r)
            case Op.MUL:
                return Float(l * r)
            case Op.DIV:
                if r == 0.0:
                    if l == 0.0 or math.isnan(l):
                        return Float(math.nan)
                    return Float(math.copysign(math.inf, l) * math.copysign(1.0, r))
                return Float(l / r)
            case Op.MOD:
                if r == 0.0 or math.isinf(l):
                    return Float(math.nan)
                return Float(math.fmod(l, r))
            case Op.EQ:
                return native_bool(l == r)
            case Op.NE:
                return native_bool(l != r)
            case Op.GT:
                return native_bool(l > r)
            case Op.LT:
                return native_bool(l < r)
            case Op.GE:
                return native_bool(l >= r)
            case Op.LE:
                return native_bool(l <= r)
        raise UnknownInfixOperatorError(lhs, op, rhs, line, self.file)


def evaluate(program: Program, **kwargs) -> Object:
    """
    Evaluate `program` with a fresh evaluator.
    """
    return Evaluator(**kwargs).evaluate(program)
