from .construction import Construction
from .instantiation import Instantiation
from .preinit import PreInit

__all__ = [
    "Construction",
    "Instantiation",
    "PreInit",
]
