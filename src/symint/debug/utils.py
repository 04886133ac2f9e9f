from typing import List

from ..result import Step
from ..utils import wrap


def print_trace(steps: List[Step], func=print) -> None:
    """Prints the layers that produced the answer, innermost sub-integrals first.

    Sub-integrals are indented by how deep they are.
    """
    if not steps:
        func("(no steps)")
        return

    for step in steps:
        indent = "  " * step.depth
        distance = wrap(f"[{step.depth}]", 4)
        integrand = wrap(indent + repr(step.integrand), 50)
        answer = wrap(repr(step.answer), 50)
        func(f"{distance} {integrand}  {answer}  ({step.strategy})")
