import ast
import asyncio
import operator
from typing import Annotated, Any, Callable, Dict, Type, Union

from pydantic import Field

from ..core.exceptions import ToolExecutionError
from ..core.logger import get_logger
from .latency import SIMULATED_LATENCY

logger = get_logger(__name__)

Number = Union[int, float]

_BINARY_OPERATORS: Dict[Type[ast.operator], Callable[[Any, Any], Any]] = {
    ast.Add: operator.add,
    ast.Sub: operator.sub,
    ast.Mult: operator.mul,
    ast.Div: operator.truediv,
    ast.FloorDiv: operator.floordiv,
    ast.Mod: operator.mod,
    ast.Pow: operator.pow,
}

_UNARY_OPERATORS: Dict[Type[ast.unaryop], Callable[[Any], Any]] = {
    ast.UAdd: operator.pos,
    ast.USub: operator.neg,
}

# Largest integer result; its decimal form stays below the interpreter's int-to-str digit limit
_MAX_RESULT_BITS = 13_000


def evaluate_expression(expression: str) -> Number:
    """Evaluate an arithmetic expression without executing arbitrary code.

    Integer results are bounded in size before they are computed, so a short
    expression cannot stall the event loop with a huge power or product.

    Raises:
        ToolExecutionError: If the expression is not plain arithmetic or cannot be computed.
    """
    try:
        tree = ast.parse(expression, mode="eval")
    except SyntaxError as exc:
        raise ToolExecutionError(f"Invalid expression '{expression}': {exc.msg}") from exc

    try:
        return _eval_node(tree.body)
    except ZeroDivisionError as exc:
        raise ToolExecutionError(f"Division by zero in '{expression}'") from exc
    except OverflowError as exc:
        raise ToolExecutionError(f"Result of '{expression}' is too large") from exc


def _eval_node(node: ast.AST) -> Number:
    if isinstance(node, ast.Constant) and isinstance(node.value, (int, float)) and not isinstance(node.value, bool):
        return node.value
    if isinstance(node, ast.BinOp) and type(node.op) in _BINARY_OPERATORS:
        left, right = _eval_node(node.left), _eval_node(node.right)
        _check_result_size(node.op, left, right)
        return _BINARY_OPERATORS[type(node.op)](left, right)
    if isinstance(node, ast.UnaryOp) and type(node.op) in _UNARY_OPERATORS:
        return _UNARY_OPERATORS[type(node.op)](_eval_node(node.operand))
    raise ToolExecutionError(f"Unsupported element in expression: {ast.dump(node)}")


def _check_result_size(op: ast.operator, left: Number, right: Number) -> None:
    """Reject integer powers and products whose result would exceed ``_MAX_RESULT_BITS``.

    Float arithmetic needs no check, it raises OverflowError on its own.
    """
    if not (isinstance(left, int) and isinstance(right, int)):
        return

    if isinstance(op, ast.Pow):
        if right <= 0 or abs(left) <= 1:
            return
        estimated_bits = abs(left).bit_length() * right
    elif isinstance(op, ast.Mult):
        estimated_bits = abs(left).bit_length() + abs(right).bit_length()
    else:
        return

    if estimated_bits > _MAX_RESULT_BITS:
        raise ToolExecutionError(f"Result exceeds the limit of {_MAX_RESULT_BITS} bits")


async def calculator(
    expression: Annotated[str, Field(description="Arithmetic expression to evaluate, e.g. '583 * 24'")],
) -> Dict[str, Any]:
    """Evaluate an arithmetic expression using +, -, *, /, //, % and **."""
    await asyncio.sleep(SIMULATED_LATENCY["calculator"])
    logger.debug(f"Calculator tool called for {expression}")
    return {"expression": expression, "result": evaluate_expression(expression)}
