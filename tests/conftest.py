"""Global pytest fixtures for SYNAPPS.

- Tests are marked after the top-level directory holding them
  (``unit``, ``contract``, ``integration``, ``e2e``) unless they already
  carry that mark.
- Host fixtures build descriptors for each platform family so that
  encoding and separator rules can be checked on any machine.
"""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from synapps.domain.host import HostDescriptor

# pylint: disable=unused-argument

TESTS_ROOT = Path(__file__).parent.resolve()
DIRECTORY_MARKERS = ("unit", "contract", "integration", "e2e")


@pytest.hookimpl(tryfirst=True)
def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Add the default mark of the test directory to each collected item."""
    for item in items:
        path = item.path.resolve()  # pytest>=8: pathlib.Path
        try:
            top = path.relative_to(TESTS_ROOT).parts[0]
        except (ValueError, IndexError):
            continue
        if top in DIRECTORY_MARKERS and not any(
            marker.name == top for marker in item.iter_markers()
        ):
            item.add_marker(getattr(pytest.mark, top))


@pytest.fixture
def windows_host() -> HostDescriptor:
    """Descriptor of a Windows-family host."""
    return HostDescriptor("win32")


@pytest.fixture
def mac_host() -> HostDescriptor:
    """Descriptor of a Macintosh host."""
    return HostDescriptor("darwin")


@pytest.fixture
def linux_host() -> HostDescriptor:
    """Descriptor of a host that is neither Windows nor Macintosh."""
    return HostDescriptor("linux")


@pytest.fixture
def symlinks_supported(tmp_path: Path) -> None:
    """Skip the test when the platform refuses to create symbolic links."""
    probe = tmp_path / ".symlink-probe"
    try:
        os.symlink(tmp_path, probe, target_is_directory=True)
    except (OSError, NotImplementedError):
        pytest.skip("symbolic links are not supported here")
    else:
        os.unlink(probe)
