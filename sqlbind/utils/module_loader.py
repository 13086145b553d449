"""General utility functions."""

from importlib.util import find_spec

__all__ = ("ensure_dependency", "module_available")


def module_available(dotted_path: str) -> bool:
    """Check whether a module can be imported without importing it.

    Args:
        dotted_path: The module path, e.g. ``"pydantic"``.

    Returns:
        bool
    """
    try:
        return find_spec(dotted_path) is not None
    except (ModuleNotFoundError, ValueError):
        return False


def ensure_dependency(package: str, install_package: "str | None" = None) -> None:
    """Raise if an optional dependency is missing.

    Args:
        package: Importable module name.
        install_package: Extra / distribution name when it differs from ``package``.

    Raises:
        MissingDependencyError: The package is not installed.
    """
    if not module_available(package):
        from sqlbind.exceptions import MissingDependencyError

        raise MissingDependencyError(package=package, install_package=install_package)
