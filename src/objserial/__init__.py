"""Objserial: General purpose object serializer for nested runtime object graphs."""

__version__ = "0.1.0"

from . import settings
from .exceptions import ObjSerialError
from .exceptions import ReconstructionError
from .exceptions import ReflectionError
from .exceptions import StrategyError
from .plugins.manager import _initialize_plugin_system
from .reflection import Reflectable
from .reflection import reflect
from .registry import GLOBAL_NAMESPACE
from .registry import Strategy
from .registry import StrategyRegistry
from .registry import default_registry
from .registry import register_strategy
from .serializer import Serializer
from .serializer import deserialize
from .serializer import serialize

# Initialize hooks system on module import
_initialize_plugin_system()

__all__ = [
    "GLOBAL_NAMESPACE",
    "ObjSerialError",
    "ReconstructionError",
    "Reflectable",
    "ReflectionError",
    "Serializer",
    "Strategy",
    "StrategyError",
    "StrategyRegistry",
    "default_registry",
    "deserialize",
    "reflect",
    "register_strategy",
    "serialize",
    "settings",
]
