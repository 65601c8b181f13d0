"""
Tests for profile persistence
File: cowboy/services/profile_service.py
"""

import json

import pytest

from cowboy.constants import PROFILE_FILENAME
from cowboy.exceptions import ConfigurationError, ProfileNotFoundError
from cowboy.services import ProfileStore
from tests.conftest import make_profile


class TestProfileStore:
    def test_path_is_in_project_root(self, project_dir):
        assert ProfileStore(project_dir).path == project_dir / PROFILE_FILENAME

    def test_missing_profile(self, store):
        assert not store.exists()
        with pytest.raises(ProfileNotFoundError) as exc:
            store.load()
        assert "cowboy init" in exc.value.context

    def test_invalid_json(self, store):
        store.path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ConfigurationError):
            store.load()

    def test_non_object_document(self, store):
        store.path.write_text("[]", encoding="utf-8")
        with pytest.raises(ConfigurationError):
            store.load()

    def test_save_writes_indented_json(self, store):
        store.save(make_profile(1))
        content = store.path.read_text(encoding="utf-8")

        assert content.endswith("\n")
        assert '\n    "project"' in content
        assert json.loads(content)["history"][0]["type"] == "full"

    def test_save_then_load(self, store):
        store.save(make_profile(2))
        profile = store.load()

        assert profile.ftp.password == "s3cret"
        assert [record.git_commit for record in profile.history] == ["c1", "c2"]

    def test_loads_hand_written_profile(self, store):
        store.path.write_text(
            json.dumps(
                {
                    "project": {"type": "statamic", "name": "blog"},
                    "ftp": {"host": "h", "username": "u", "password": "p", "port": 21},
                    "history": [{"timestamp": "t", "user": "u", "type": "full"}],
                }
            ),
            encoding="utf-8",
        )
        profile = store.load()

        assert profile.project.name == "blog"
        assert profile.history[0].git_commit is None
