"""previewctl - Tear down per-pull-request preview environments.

previewctl runs inside a GitHub Actions workflow. When a pull request is
closed, or someone comments `/destroy` on it, previewctl terminates the
pull request's Elastic Beanstalk environment, retires its GitHub deployment
record and reports the outcome on the pull request.
"""

from previewctl.lib.errors import ConfigError, PreviewCtlError, ValidationError

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "ConfigError",
    "PreviewCtlError",
    "ValidationError",
]
