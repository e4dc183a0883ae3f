"""Production environment detection.

The provider refuses to enter override mode in production unless its
options say otherwise. "Non-production" means a debugger is attached or a
recognized environment variable names a development or test environment.
"""

from __future__ import annotations

import os
import sys
from typing import Iterable, Mapping

# Recognized environment variables, all inspected.
ENVIRONMENT_VARIABLES: tuple[str, ...] = (
    "DEPLOYMENT_ENVIRONMENT",
    "RUNTIME_ENVIRONMENT",
    "ENVIRONMENT",
)

NON_PRODUCTION_NAMES: tuple[str, ...] = ("Development", "Test", "Testing")


def is_debugger_attached() -> bool:
    """Return True if a debugger or tracing inspector is active.

    Checks the legacy ``sys.settrace`` hook and, on Python 3.12+, the
    ``sys.monitoring`` debugger tool slot.
    """
    if sys.gettrace() is not None:
        return True
    monitoring = getattr(sys, "monitoring", None)
    if monitoring is not None:
        return monitoring.get_tool(monitoring.DEBUGGER_ID) is not None
    return False


def is_non_production_environment(
    environ: Mapping[str, str] | None = None,
    variables: Iterable[str] = ENVIRONMENT_VARIABLES,
    names: Iterable[str] = NON_PRODUCTION_NAMES,
) -> bool:
    """Return True if the process is running outside production.

    Every listed variable is considered, not just the first one set: any
    of them matching one of ``names`` is enough. Values are compared
    case-insensitively but otherwise exactly, so " Test " does not match.

    Args:
        environ: Environment mapping. Defaults to ``os.environ``.
        variables: Environment variable names to inspect.
        names: Values that mark a non-production environment.

    Returns:
        True if a debugger is attached or any variable matches.
    """
    if is_debugger_attached():
        return True
    environ = os.environ if environ is None else environ
    accepted = {n.casefold() for n in names}
    return any(
        environ[variable].casefold() in accepted
        for variable in variables
        if environ.get(variable)
    )
