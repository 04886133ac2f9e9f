import statistics
import time

import symint
from suite import BENCHMARKING_SUITE, x

# import sympy as symint

time_taken = []
for _ in range(10):
    start = time.time()

    ### CODE IN BETWEEN THESE LINES IS PROFILED ###

    for integrand in BENCHMARKING_SUITE:
        ans = symint.integrate(integrand, x)

    ### CODE IN BETWEEN THESE LINES IS PROFILED ###

    end = time.time()
    time_taken.append(end - start)


print(
    f"Time taken: {statistics.mean(time_taken)}, averaged across {len(time_taken)} runs with stdev {statistics.stdev(time_taken)}"
)
