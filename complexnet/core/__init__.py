from .structure import *
from .exceptions import *
from .properties import PropertyTable
from .triplets import TripletStore
from .history import MutationHistory
from .network import Network

__all__ = [
    "structure", "exceptions", "Network", "PropertyTable", "TripletStore", "MutationHistory",
    "Scope", "PropertyKind",
    "ComplexNetException", "IndexOutOfRange", "CapacityExceeded",
    "MalformedInputError", "CapacityWarning",
]
