from .random_graphs import (
    erdos_renyi,
    configurational,
    watts_strogatz,
    barabasi_albert,
    power_law_degrees,
)

__all__ = [
    "erdos_renyi",
    "configurational",
    "watts_strogatz",
    "barabasi_albert",
    "power_law_degrees",
]
