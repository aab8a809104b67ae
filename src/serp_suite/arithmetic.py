from __future__ import annotations

import logging
import math
import operator
import random
import re
from typing import Callable

from playwright.async_api import Page
from pydantic import BaseModel

from serp_suite.config import Settings, settings as default_settings
from serp_suite.search import execute_query, read_calculator_value

logger = logging.getLogger(__name__)

OPERATORS: dict[str, Callable[[int, int], float]] = {
    "+": operator.add,
    "-": operator.sub,
    "*": operator.mul,
    "/": operator.truediv,
}

_MATH_QUERY_RE = re.compile(r"^\s*(\d+)\s*([-+*/])\s*(\d+)\s*$")


class MathQuery(BaseModel):
    left: int
    right: int
    operator: str

    @property
    def text(self) -> str:
        return f"{self.left} {self.operator} {self.right}"

    @property
    def expected(self) -> float:
        if self.operator == "/" and self.right == 0:
            if self.left == 0:
                return math.nan
            return math.inf
        return OPERATORS[self.operator](self.left, self.right)


def make_rng(seed: int | None = None) -> random.Random:
    """Return a generator for operands, logging the seed so a run can be replayed."""
    if seed is None:
        seed = random.randrange(2**32)
    logger.info("Arithmetic operand seed: %d", seed)
    return random.Random(seed)


def random_math_query(
    op: str,
    rng: random.Random,
    max_operand: int = 1000,
    exclude_zero_divisor: bool = True,
) -> MathQuery:
    if op not in OPERATORS:
        raise ValueError(f"Unsupported operator: {op!r}")
    left = rng.randrange(max_operand)
    low = 1 if op == "/" and exclude_zero_divisor else 0
    right = rng.randrange(low, max_operand)
    return MathQuery(left=left, right=right, operator=op)


def parse_math_query(text: str) -> MathQuery | None:
    match = _MATH_QUERY_RE.match(text)
    if match is None:
        return None
    left, op, right = match.groups()
    return MathQuery(left=int(left), right=int(right), operator=op)


def is_close(actual: float, expected: float, digits: int = 8) -> bool:
    """True when ``actual`` rounds to ``expected`` at ``digits`` decimal places."""
    if actual == expected:
        return True
    if math.isnan(actual) or math.isnan(expected):
        return False
    return abs(actual - expected) < 10**-digits / 2


async def check_math(
    page: Page,
    query: MathQuery,
    settings: Settings | None = None,
) -> tuple[float, float]:
    """Run ``query`` through the search form and return (calculator, expected)."""
    await execute_query(page, query.text, settings)
    actual = await read_calculator_value(page)
    logger.info("%s = %s (expected %s)", query.text, actual, query.expected)
    return actual, query.expected
