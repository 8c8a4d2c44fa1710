"""
fast-constraints - callback constraints for fast-app style validation

Attach callbacks to data classes (or their fields). During validation each
callback inspects the object and reports violations through an execution
context:

    class Author:
        @callback
        def validate(self, context):
            if self.first_name in FAKE_NAMES:
                context.build_violation("This name sounds totally fake!") \\
                    .at_path("first_name") \\
                    .add_violation()

    result = await validate(author)

Provides:
- Callback declarations (method names, external static methods, closures)
- Resolution into typed invocables with per-type caching
- Append-only execution contexts with property paths
- The validation driver, request schemas and Quart helpers
"""

__version__ = "0.1.0"
__author__ = "Patrik Mojzis"
__email__ = "patrikm53@gmail.com"
__license__ = "MIT"
__url__ = "https://github.com/patrikmojzis/fast-constraints"

from .contracts import *  # noqa: F401,F403
from .core import *  # noqa: F401,F403
from .decorators import *  # noqa: F401,F403
from .exceptions import *  # noqa: F401,F403
from .app_provider import boot  # noqa: F401
