import random
import string
from typing import Callable

from sympy import Expr

ExprFn = Callable[[Expr], Expr]


def random_id(length):
    # Define the pool of characters you can choose from
    characters = string.ascii_letters + string.digits
    # Use random.choices() to pick characters at random, then join them into a string
    random_string = "".join(random.choices(characters, k=length))
    return random_string


def wrap(string: str, num: int) -> str:
    """Pads or truncates a string to exactly num characters. used for printing tables."""
    if len(string) > num:
        return string[: num - 3] + "..."
    return string + " " * (num - len(string))
