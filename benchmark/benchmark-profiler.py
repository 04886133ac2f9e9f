import cProfile
import warnings

from suite import BENCHMARKING_SUITE, x

from symint import integrate
from symint.debug.logger import Logger
from symint.integration import Integration

logger = Logger()
Integration.logger = logger

# Create a Profile object
profiler = cProfile.Profile()

# Start profiling
profiler.enable()

### CODE IN BETWEEN THESE LINES IS PROFILED ###

with warnings.catch_warnings():
    # the non-elementary ones warn every time
    warnings.simplefilter("ignore")
    for integrand in BENCHMARKING_SUITE:
        integrate(integrand, x)


### CODE IN BETWEEN THESE LINES IS PROFILED ###


profiler.disable()


logger.dump()
logger.plot()

# Print stats sorted by cumulative time
profiler.print_stats(sort="cumtime")
