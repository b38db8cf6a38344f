"""
Tests for configuration, identity and small app-state keys.
"""

import pytest
from pathlib import Path

from flowforge.models.app_state import AppStateStore
from flowforge.models.auth import AuthenticationRequiredError, get_current_user
from flowforge.models.config import FlowForgeConfig, apply_environment_overrides, resolve_api_key
from flowforge.models.config_manager import ConfigManager
from flowforge.models.storage import InMemoryBackend


class TestConfigManager:
    """Test cases for YAML configuration files."""

    def test_save_and_load(self, tmp_path: Path) -> None:
        """Test a configuration round trip through YAML."""
        manager = ConfigManager(tmp_path / "config.yaml")
        config = FlowForgeConfig(data_dir=tmp_path / "data", work_minutes=50, default_model="gpt-4o")
        
        assert manager.config_exists() is False
        assert manager.save_config(config) is True
        assert manager.config_exists() is True
        
        loaded = manager.load_config()
        assert loaded.data_dir == tmp_path / "data"
        assert loaded.work_minutes == 50
        assert loaded.default_model == "gpt-4o"
        assert loaded.openai_key_path is None

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test loading when nothing was saved."""
        assert ConfigManager(tmp_path / "none.yaml").load_config() is None

    def test_invalid_file(self, tmp_path: Path) -> None:
        """Test that an invalid config loads as None instead of raising."""
        path = tmp_path / "config.yaml"
        path.write_text("data_dir: /tmp/x\nwork_minutes: -5\n")
        assert ConfigManager(path).load_config() is None


class TestFlowForgeConfig:
    """Test cases for FlowForgeConfig validation."""

    def test_empty_model_rejected(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError):
            FlowForgeConfig(data_dir=tmp_path, default_model="  ")

    def test_demo_auth_env_override(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test switching the demo identity off and on from the environment."""
        config = FlowForgeConfig(data_dir=tmp_path)
        
        monkeypatch.setenv("FLOWFORGE_DEMO_AUTH", "0")
        assert apply_environment_overrides(config).demo_auth_enabled is False
        
        monkeypatch.setenv("FLOWFORGE_DEMO_AUTH", "yes")
        assert apply_environment_overrides(config).demo_auth_enabled is True


class TestResolveApiKey:
    """Test cases for API key lookup."""

    def test_environment_wins(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        key_file = tmp_path / "key.txt"
        key_file.write_text("sk-from-file-000000000")
        monkeypatch.setenv("OPENAI_API_KEY", "sk-from-env-000000000")
        
        config = FlowForgeConfig(data_dir=tmp_path, openai_key_path=key_file)
        assert resolve_api_key(config) == "sk-from-env-000000000"

    def test_key_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        key_file = tmp_path / "key.txt"
        key_file.write_text("sk-from-file-000000000\n")
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)
        
        config = FlowForgeConfig(data_dir=tmp_path, openai_key_path=key_file)
        assert resolve_api_key(config) == "sk-from-file-000000000"

    def test_no_key(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)
        config = FlowForgeConfig(data_dir=tmp_path, openai_key_path=tmp_path / "missing.txt")
        with pytest.raises(FileNotFoundError):
            resolve_api_key(config)


class TestIdentity:
    """Test cases for the demo identity."""

    def test_demo_user(self, config: FlowForgeConfig) -> None:
        """Test the fixed demo user."""
        user = get_current_user(config)
        assert user.uid == "dummy-user-uid-123"
        assert user.display_name == "Dummy User"
        assert user.first_name == "Dummy"

    def test_demo_auth_disabled(self, config: FlowForgeConfig) -> None:
        """Test that no identity is available without demo auth."""
        config.demo_auth_enabled = False
        with pytest.raises(AuthenticationRequiredError):
            get_current_user(config)


class TestAppStateStore:
    """Test cases for the onboarding flag and discovery hand-off."""

    def test_onboarding_flag(self, backend: InMemoryBackend) -> None:
        state = AppStateStore(backend)
        assert state.is_onboarding_completed() is False
        state.mark_onboarding_completed()
        assert state.is_onboarding_completed() is True
        assert "flowforge_onboarding_completed_v1" in backend.keys()

    def test_discovery_hand_off_is_consumed_once(self, backend: InMemoryBackend) -> None:
        """Test that stashed answers can be read exactly once."""
        state = AppStateStore(backend)
        answers = {"energizingActivities": "Drawing"}
        
        assert state.stash_discovery_input(answers) is True
        assert state.consume_discovery_input() == answers
        assert state.consume_discovery_input() is None

    def test_corrupt_discovery_data_is_removed(self) -> None:
        """Test that unreadable hand-off data is dropped."""
        backend = InMemoryBackend({"flowforge_discovery_data_v1": "{oops"})
        state = AppStateStore(backend)
        
        assert state.consume_discovery_input() is None
        assert backend.get_item("flowforge_discovery_data_v1") is None
