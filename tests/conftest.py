from pathlib import Path

import pytest

from git_helper.config import Config


@pytest.fixture
def config(tmp_path) -> Config:
    return Config(
        user_name="Ada Lovelace",
        user_email="ada@example.com",
        github_username="ada",
        github_token="secret-token",
        repo_dir=Path(tmp_path),
        repo_name="engine",
    )
