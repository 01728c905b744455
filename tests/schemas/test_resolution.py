"""Test config resolution and validation with Pydantic."""

import pytest
from pydantic import ValidationError

from nna_taxonomy.schemas import CLIConfig, InternalConfig, ParamConfig, UserConfig, resolve_config
from nna_taxonomy.schemas.resolve import deep_merge

pytestmark = pytest.mark.unit


class TestConfigResolution:
    """Test resolve_config() precedence and merging."""

    def test_resolve_config_all_defaults(self):
        """Resolving with no user/CLI overrides uses all ParamConfig defaults."""
        config = resolve_config(ParamConfig(), None, None)

        assert isinstance(config, InternalConfig)
        assert config.taxonomy.source is None
        assert config.taxonomy.collision_policy == "fail_fast"
        assert config.resolver.default_code == "001"
        assert config.resolver.code_width == 3
        assert config.overrides == {"S.POP.HPM": "007", "W.BCH.SUN": "003"}
        assert config.cache.enabled is True
        assert config.logging.level == "INFO"

    def test_no_arguments_uses_param_defaults(self):
        assert resolve_config() == resolve_config(ParamConfig(), UserConfig(), CLIConfig())

    def test_user_config_overrides_param_config(self):
        user = UserConfig(DEFAULT_CODE=0, COLLISION_POLICY="WARN_ONLY")
        config = resolve_config(ParamConfig(), user, None)

        assert config.resolver.default_code == "0"
        assert config.taxonomy.collision_policy == "warn_only"

    def test_user_overrides_are_merged_not_replaced(self):
        user = UserConfig(OVERRIDES={"g.pop.tsw": 12})
        config = resolve_config(ParamConfig(), user, None)

        assert config.overrides == {"S.POP.HPM": "007", "W.BCH.SUN": "003", "G.POP.TSW": "12"}

    def test_user_override_replaces_packaged_value(self):
        config = resolve_config(ParamConfig(), UserConfig(OVERRIDES={"s.pop.hpm": "009"}), None)
        assert config.overrides["S.POP.HPM"] == "009"

    def test_param_overrides_can_be_emptied(self):
        config = resolve_config(ParamConfig(overrides={}), None, None)
        assert config.overrides == {}

    def test_user_none_removes_packaged_override(self):
        config = resolve_config(ParamConfig(), UserConfig(OVERRIDES={"w.bch.sun": None}), None)
        assert config.overrides == {"S.POP.HPM": "007"}

    def test_empty_user_overrides_change_nothing(self):
        config = resolve_config(ParamConfig(), UserConfig(OVERRIDES={}), None)
        assert config.overrides == {"S.POP.HPM": "007", "W.BCH.SUN": "003"}

    def test_cli_wins_over_user(self):
        user = UserConfig(LOG_LEVEL="debug", TAXONOMY_PATH="user.json", CACHE_ENABLED=True)
        cli = CLIConfig(log_level="WARNING", taxonomy_path="cli.json", no_cache=True)
        config = resolve_config(ParamConfig(), user, cli)

        assert config.logging.level == "WARNING"
        assert config.taxonomy.source == "cli.json"
        assert config.cache.enabled is False

    def test_cli_without_no_cache_keeps_user_value(self):
        config = resolve_config(ParamConfig(), UserConfig(CACHE_ENABLED=False), CLIConfig())
        assert config.cache.enabled is False

    def test_dict_inputs(self):
        config = resolve_config({"resolver": {"code_width": 4}}, {"LOG_LEVEL": "error"}, {"no_cache": True})

        assert config.resolver.code_width == 4
        assert config.logging.level == "ERROR"
        assert config.cache.enabled is False

    def test_internal_config_is_frozen(self, internal_config):
        with pytest.raises(ValidationError):
            internal_config.cache = None


class TestValidation:
    """Invalid values fail loudly at resolution time."""

    def test_invalid_override_key(self):
        with pytest.raises(ValidationError, match="Invalid override key"):
            resolve_config(ParamConfig(), UserConfig(OVERRIDES={"POP.HPM": "007"}), None)

    def test_invalid_override_code(self):
        with pytest.raises(ValidationError, match="Invalid override code"):
            ParamConfig(overrides={"S.POP.HPM": "seven"})

    def test_invalid_default_code(self):
        with pytest.raises(ValidationError):
            resolve_config(ParamConfig(), UserConfig(DEFAULT_CODE="abc"), None)

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            UserConfig(LOG_LEVEL="chatty")

    def test_invalid_collision_policy(self):
        with pytest.raises(ValidationError):
            UserConfig(COLLISION_POLICY="ignore")

    def test_code_width_bounds(self):
        with pytest.raises(ValidationError):
            ParamConfig(resolver={"code_width": 0})

    def test_param_config_rejects_unknown_fields(self):
        with pytest.raises(ValidationError):
            ParamConfig(segmenter={})


class TestUserConfigAliases:
    """UserConfig accepts uppercase aliases and ignores unknown keys."""

    def test_uppercase_keys(self):
        raw = {
            "TAXONOMY_PATH": "/data/taxonomy.json",
            "LOG_LEVEL": "debug",
            "CACHE_ENABLED": False,
        }
        user = UserConfig.model_validate(raw)

        assert user.taxonomy_path == "/data/taxonomy.json"
        assert user.log_level == "DEBUG"
        assert user.cache_enabled is False

    def test_field_names_also_accepted(self):
        user = UserConfig(taxonomy_path="t.json")
        assert user.taxonomy_path == "t.json"

    def test_unknown_keys_are_ignored(self):
        user = UserConfig.model_validate({"LOG_LEVEL": "INFO", "UNKNOWN_LEGACY": 12345})

        assert user.log_level == "INFO"
        assert not hasattr(user, "UNKNOWN_LEGACY")

    def test_empty_user_config_has_no_overrides(self):
        assert UserConfig().to_internal_overrides() == {}


class TestDeepMerge:

    def test_nested_merge(self):
        base = {"cache": {"enabled": True}, "logging": {"level": "INFO"}}
        merged = deep_merge(base, {"cache": {"enabled": False}}, {"logging": {"level": "DEBUG"}})

        assert merged == {"cache": {"enabled": False}, "logging": {"level": "DEBUG"}}
        assert base["cache"]["enabled"] is True
