from importlib.metadata import version

from .errors import DuplicateRoute, InvalidPattern, PathmuxError
from .paths import map_values, sanitize_path
from .router import Router
from .types import RouteMatch

__all__ = [
    "DuplicateRoute",
    "InvalidPattern",
    "PathmuxError",
    "Router",
    "RouteMatch",
    "__version__",
    "map_values",
    "sanitize_path",
]

__version__ = version("pathmux")
