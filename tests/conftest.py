from __future__ import annotations

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
for entry in (ROOT, ROOT / "src"):
    if str(entry) not in sys.path:
        sys.path.insert(0, str(entry))


import pytest

import structure_id
from structure_id import StructureIdContext
from tests.env_helpers import restore_env as _restore_env
from tests.env_helpers import set_env as _set_env
from structure_id.runtime.env_policy import CONFIG_ENV_KEYS


@pytest.fixture(autouse=True)
def _default_context_fixture():
    previous_env = _set_env({key: None for key in CONFIG_ENV_KEYS})
    previous = structure_id.use_context(StructureIdContext())
    try:
        yield
    finally:
        if previous is not None:
            structure_id.use_context(previous)
        _restore_env(previous_env)


@pytest.fixture
def context() -> StructureIdContext:
    return StructureIdContext()


@pytest.fixture
def collision_context() -> StructureIdContext:
    return StructureIdContext(structure_id.StructureIdConfig(collision_mode=True))


@pytest.fixture
def env_scope():
    return _set_env


@pytest.fixture
def restore_env():
    return _restore_env
