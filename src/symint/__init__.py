from .integration import Integration, definite_integrate, integrate, integrate_result
from .result import Closed, IntegrationResult, NonElementary, Unknown

__all__ = [
    "Closed",
    "Integration",
    "IntegrationResult",
    "NonElementary",
    "Unknown",
    "definite_integrate",
    "integrate",
    "integrate_result",
]
