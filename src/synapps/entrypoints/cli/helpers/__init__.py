"""CLI helpers for SYNAPPS.

Message emitters that write to stderr with emoji→ASCII fallbacks, and the
decorator that turns library errors into a clean failure exit.
"""

from .errors import report_errors
from .messages import error, success, warn

__all__ = ["error", "report_errors", "success", "warn"]
