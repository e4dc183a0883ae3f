"""Configuration for FileSystemProvider.

Provides the ProviderOptions dataclass and the connect_provider factory
function used to build validated options.
"""

from dataclasses import dataclass, fields

from .environment import ENVIRONMENT_VARIABLES, NON_PRODUCTION_NAMES


@dataclass(frozen=True)
class ProviderOptions:
    """Options fixed at provider construction.

    Attributes:
        throw_on_test_mode_in_production: Refuse set_filesystem_factory()
            when the environment looks like production (default: True).
            When False, no environment check is performed at all.
        environment_variables: Environment variables inspected to decide
            whether the process runs outside production.
        non_production_names: Variable values (case-insensitive) that mark
            a development or test environment.
    """

    throw_on_test_mode_in_production: bool = True
    environment_variables: tuple[str, ...] = ENVIRONMENT_VARIABLES
    non_production_names: tuple[str, ...] = NON_PRODUCTION_NAMES


def connect_provider(**kwargs) -> ProviderOptions:
    """Configure a filesystem provider.

    Args:
        **kwargs: ProviderOptions fields.
            - throw_on_test_mode_in_production (bool): Guard override mode
              in production (default: True).
            - environment_variables (Iterable[str]): Variables to inspect.
            - non_production_names (Iterable[str]): Non-production values.

    Returns:
        ProviderOptions for FileSystemProvider construction.

    Examples:
        >>> connect_provider()
        ProviderOptions(throw_on_test_mode_in_production=True, environment_variables=('DEPLOYMENT_ENVIRONMENT', 'RUNTIME_ENVIRONMENT', 'ENVIRONMENT'), non_production_names=('Development', 'Test', 'Testing'))

        >>> connect_provider(throw_on_test_mode_in_production=False).throw_on_test_mode_in_production
        False
    """
    known = {f.name for f in fields(ProviderOptions)}
    unexpected = sorted(set(kwargs) - known)
    if unexpected:
        raise ValueError(f"Unexpected arguments for provider options: {unexpected}")

    guard = kwargs.get("throw_on_test_mode_in_production", True)
    if not isinstance(guard, bool):
        raise ValueError(
            f"throw_on_test_mode_in_production must be a bool, got {type(guard).__name__}"
        )

    for key in ("environment_variables", "non_production_names"):
        if key in kwargs:
            value = kwargs[key]
            if isinstance(value, str):
                raise ValueError(f"{key} must be a sequence of strings, not a string")
            kwargs[key] = tuple(value)

    return ProviderOptions(**kwargs)
