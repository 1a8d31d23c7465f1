# complexnet/__init__.py
"""complexnet: mutable complex networks, metrics and random models."""
from __future__ import annotations

from importlib import import_module
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _pkg_version
from typing import Any

from .core.network import Network
from .core.exceptions import (
    CapacityExceeded,
    CapacityWarning,
    ComplexNetException,
    IndexOutOfRange,
    MalformedInputError,
)

# Lazily exposed submodules (imported on first attribute access)
_lazy_submodules = {
    "core": "complexnet.core",
    "algorithms": "complexnet.algorithms",
    "generators": "complexnet.generators",
    "adapters": "complexnet.adapters",
    "io": "complexnet.io",
    "utils": "complexnet.utils",
}

# Curated top-level symbols (lazy). name -> (module, attribute)
_lazy_symbols: dict[str, tuple[str, str]] = {
    # Generators
    "erdos_renyi": ("complexnet.generators.random_graphs", "erdos_renyi"),
    "configurational": ("complexnet.generators.random_graphs", "configurational"),
    "watts_strogatz": ("complexnet.generators.random_graphs", "watts_strogatz"),
    "barabasi_albert": ("complexnet.generators.random_graphs", "barabasi_albert"),

    # NetworkX adapter
    "to_nx": ("complexnet.adapters.networkx", "to_nx"),
    "from_nx": ("complexnet.adapters.networkx", "from_nx"),

    # GraphML
    "to_graphml": ("complexnet.io.graphml", "to_graphml"),
    "from_graphml": ("complexnet.io.graphml", "from_graphml"),

    # Matrix Market
    "write_mtx": ("complexnet.io.mtx", "write_mtx"),
    "read_mtx": ("complexnet.io.mtx", "read_mtx"),
}

__all__ = sorted(
    set(list(_lazy_submodules) + list(_lazy_symbols))
    | {"Network", "CapacityExceeded", "CapacityWarning", "ComplexNetException",
       "IndexOutOfRange", "MalformedInputError"}
)


def __getattr__(name: str) -> Any:  # PEP 562: lazy attribute resolution
    if name in _lazy_submodules:
        return import_module(_lazy_submodules[name])
    if name in _lazy_symbols:
        mod, attr = _lazy_symbols[name]
        return getattr(import_module(mod), attr)
    raise AttributeError(name)


def __dir__() -> list[str]:
    return sorted(list(globals().keys()) + list(__all__))


try:
    __version__ = _pkg_version("complexnet")
except PackageNotFoundError:
    __version__ = "0.0.0"
