"""Pytest configuration for ora-tools tests."""

import pytest

from ora_tools.ora.manifest import StackTree

from .ora_tools.utils import body_eyes_entries, body_eyes_manifest, make_ora


@pytest.fixture
def body_eyes_tree() -> StackTree:
    return StackTree.frombytes(body_eyes_manifest())


@pytest.fixture
def body_eyes_ora(tmp_path) -> str:
    path = tmp_path / "body-eyes.ora"
    path.write_bytes(
        make_ora(body_eyes_manifest(("Eyes", "Body")), body_eyes_entries())
    )
    return str(path)
