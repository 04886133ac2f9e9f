"""See benchmark/benchmark-profiler.py for an example usage of the logger.

```
import symint
from symint.debug.logger import Logger
from symint.integration import Integration

logger = Logger()
Integration.logger = logger

# do some integration as normal...
x = sympy.symbols('x')
symint.integrate(x ** 2)

logger.dump()   # dumps information into integration_log.txt
logger.plot()   # creates a bar chart of integrals speeds to integration_log.png

```

Setting a class attribute on Integration is global, so remember to set it back to None after.
"""

from typing import Dict, List, NamedTuple

from sympy import Expr

from ..result import IntegrationResult, Step
from .utils import print_trace


class Datum(NamedTuple):
    expr: Expr
    time_spent: float
    steps: List[Step]
    result: IntegrationResult


class Logger:
    """Keeps track of time spent on integration, and which layers did the work."""

    _data: Dict[str, Datum] = None

    def __init__(self):
        self._data = {}

    def log(self, expr: Expr, time_spent: float, steps: List[Step], result: IntegrationResult):
        """Log an integration entry.

        expr: integrand
        time_spent: time taken to integrate expr, in seconds
        steps: the layers that were used, in the order they finished
        result: what came out (Closed / NonElementary / Unknown)
        """
        self._data[str(expr)] = Datum(expr, time_spent, list(steps), result)

    @property
    def data(self) -> Dict[str, Datum]:
        return self._data

    def sort(self):
        """sorts the data by time spent on each integral, from most time to least time."""
        self._data = dict(sorted(self._data.items(), key=lambda x: x[1].time_spent, reverse=True))

    def dump(self, filename: str = "integration_log.txt"):
        self.sort()

        with open(filename, "w") as f:
            f.write("Integrand: time taken (s), result")
            f.write("\n\n")
            for k, v in self._data.items():
                f.write(f"{k}: {v.time_spent}, {v.result!r}\n")

            if not self._data:
                return
            # For the one with the most time spent, print the trace.
            f.write("\n\n\n")
            f.write("Steps of the integral with most time spent: \n")
            print_trace(next(iter(self._data.values())).steps, func=lambda x: f.write(f"{x}\n"))

    def plot(self, filename: str = "integration_log.png"):
        import matplotlib.pyplot as plt

        self.sort()
        x = list(self._data.keys())
        y = [v.time_spent for v in self._data.values()]
        plt.bar(x, y)
        plt.ylabel("Time taken to integrate (s)")
        plt.xticks(rotation=90)  # rotate labels vertically
        plt.tight_layout()  # automatically adjust spacing (needed to show the entirety of the vertical labels)
        plt.savefig(filename)
