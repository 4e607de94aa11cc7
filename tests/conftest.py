import os
import pathlib
import sys
import pytest


# Ensure repo root is on PYTHONPATH for direct package imports (e.g. `import addressbook`).
_REPO_ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(_REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(_REPO_ROOT))


def _env_flag(name: str) -> bool:
    v = (os.environ.get(name) or '').strip().lower()
    return v in {'1', 'true', 'yes', 'y', 'on'}


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers",
        "slow: slow correctness tests (skipped unless ADDRESSBOOK_RUN_SLOW=1)",
    )


def pytest_collection_modifyitems(config: pytest.Config, items: list) -> None:
    run_slow = _env_flag('ADDRESSBOOK_RUN_SLOW')

    for item in items:
        if 'slow' in item.keywords and not run_slow:
            item.add_marker(pytest.mark.skip(reason='slow tests skipped; set ADDRESSBOOK_RUN_SLOW=1 to enable'))


@pytest.fixture(autouse=True)
def reset_config(monkeypatch, tmp_path_factory):
    """Fresh configuration singleton, no ADDRESSBOOK_* overrides, no config files."""
    from addressbook.config import ConfigManager

    for name in list(os.environ):
        if name.startswith("ADDRESSBOOK_") and name != "ADDRESSBOOK_RUN_SLOW":
            monkeypatch.delenv(name, raising=False)
    # Default config search looks in $HOME and the working directory
    monkeypatch.setenv("HOME", str(tmp_path_factory.mktemp("home")))
    monkeypatch.chdir(tmp_path_factory.mktemp("cwd"))
    ConfigManager._instance = None
    yield
    ConfigManager._instance = None


@pytest.fixture
def registry():
    """Empty registry."""
    from addressbook.registry import AddressRegistry

    return AddressRegistry()


@pytest.fixture
def plain_styler():
    """Styler that leaves text unchanged."""
    from addressbook.styles import Styler

    return Styler(enabled=False)
