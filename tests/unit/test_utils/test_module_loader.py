import pytest

from sqlbind.exceptions import MissingDependencyError
from sqlbind.utils.module_loader import ensure_dependency, module_available


def test_module_available() -> None:
    assert module_available("msgspec")
    assert module_available("sqlbind.parameters")
    assert not module_available("sqlbind_missing_module")
    assert not module_available("sqlbind_missing_module.child")


def test_ensure_dependency_passes_for_installed_package() -> None:
    ensure_dependency("msgspec")


def test_ensure_dependency_raises() -> None:
    with pytest.raises(MissingDependencyError, match="pip install sqlbind\\[missing-extra\\]"):
        ensure_dependency("sqlbind_missing_module", install_package="missing-extra")
