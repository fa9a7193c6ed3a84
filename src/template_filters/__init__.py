"""Template Filters - the filter library of a text-template engine.

Pure, named value transformations applied from template expressions such as
``{{ value|round(2) }}``. The evaluator looks filters up by name in a
FilterRegistry and calls them as ``func(ctx, primary, *args)``.
"""

from template_filters.config import ConfigLoader, FiltersConfig
from template_filters.errors import FilterError
from template_filters.filters import FILTERS, FilterRegistry, FilterSpec, create_default_registry
from template_filters.values import SafeString

__version__ = "0.1.0"
__all__ = [
    "__version__",
    "FILTERS",
    "FilterRegistry",
    "FilterSpec",
    "create_default_registry",
    "FilterError",
    "FiltersConfig",
    "ConfigLoader",
    "SafeString",
]
