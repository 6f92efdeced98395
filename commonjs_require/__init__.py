"""CommonJS ``require`` for Python hosts.

Resolves module specifiers against a folder tree (relative paths, hierarchical
``node_modules`` lookup, ``package.json`` main and index fallbacks), loads each
unit once through an evaluation bridge and caches it per installation.
"""

from .cache import ModuleCache
from .errors import MODULE_NOT_FOUND
from .errors import ModuleNotFound
from .errors import NavigationError
from .errors import RequireError
from .evaluation import Evaluator
from .evaluation import PythonScriptEvaluator
from .evaluation import ScriptObject
from .folders import FilesystemFolder
from .folders import Folder
from .folders import ResourceFolder
from .handlers import HandlerRegistry
from .handlers import YamlHandler
from .module import Module
from .module import RequireFunction
from .runtime import Installation
from .runtime import install

__all__ = [
    "MODULE_NOT_FOUND",
    "Evaluator",
    "FilesystemFolder",
    "Folder",
    "HandlerRegistry",
    "Installation",
    "Module",
    "ModuleCache",
    "ModuleNotFound",
    "NavigationError",
    "PythonScriptEvaluator",
    "RequireError",
    "RequireFunction",
    "ResourceFolder",
    "ScriptObject",
    "YamlHandler",
    "install",
]
