"""Shared fixtures: keep configuration and CI detection independent of the host."""
from pathlib import Path

import pytest

from stylesweep.config import reset_config

FIXTURES_DIR = Path(__file__).parent / 'fixtures' / 'components'

CI_INDICATORS = ['GITHUB_ACTIONS', 'CI', 'GITLAB_CI', 'CIRCLECI', 'TRAVIS', 'JENKINS_HOME']
STYLESWEEP_VARIABLES = ['STYLESWEEP_LOCALE', 'STYLESWEEP_EXCLUDE_DIRS', 'STYLESWEEP_FAIL_ON_FINDINGS']


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path):
    """Run every test outside CI, without stylesweep variables or a stray .env."""
    for name in CI_INDICATORS + STYLESWEEP_VARIABLES:
        # setenv first so teardown also removes values a .env file loaded later
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR
