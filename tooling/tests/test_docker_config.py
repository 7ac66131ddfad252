"""Tests for relay_tooling.docker.config (defaults < relay-build.yaml < env < flags)."""

from pathlib import Path
from unittest.mock import patch

import pytest

from relay_tooling.docker.config import (
    BuildConfig,
    ConfigError,
    load_config_file,
    parse_platforms,
    resolve_build_config,
)


class TestParsePlatforms:
    def test_splits_and_strips(self) -> None:
        assert parse_platforms("linux/amd64, linux/arm64") == ("linux/amd64", "linux/arm64")

    def test_drops_empty_and_duplicates_keeping_order(self) -> None:
        assert parse_platforms("linux/arm64,,linux/amd64,linux/arm64") == (
            "linux/arm64",
            "linux/amd64",
        )

    def test_accepts_list(self) -> None:
        assert parse_platforms(["linux/amd64"]) == ("linux/amd64",)

    def test_empty_raises(self) -> None:
        with pytest.raises(ConfigError):
            parse_platforms(" , ")

    def test_non_string_raises(self) -> None:
        with pytest.raises(ConfigError, match="Platforms must be"):
            parse_platforms(5)  # type: ignore[arg-type]
        with pytest.raises(ConfigError):
            parse_platforms(["linux/amd64", 64])  # type: ignore[list-item]


class TestResolveBuildConfig:
    def test_defaults(self) -> None:
        cfg = resolve_build_config({})
        assert cfg.namespace == "klause"
        assert cfg.image_name == "claude-relay-service"
        assert cfg.version == "latest"
        assert cfg.platforms == ("linux/amd64", "linux/arm64")
        assert cfg.extra_tags == ()
        assert cfg.push is True
        assert cfg.use_cache is True
        assert cfg.dockerfile == "Dockerfile"
        assert cfg.context == "."
        assert cfg.full_image_name == "klause/claude-relay-service"

    def test_env_overrides_defaults(self) -> None:
        env = {
            "DOCKER_USERNAME": "acme",
            "IMAGE_NAME": "relay",
            "VERSION": "v2.0.0",
            "PLATFORMS": "linux/arm64",
        }
        cfg = resolve_build_config(env)
        assert cfg.full_image_name == "acme/relay"
        assert cfg.version == "v2.0.0"
        assert cfg.platforms == ("linux/arm64",)

    def test_empty_env_value_ignored(self) -> None:
        assert resolve_build_config({"VERSION": ""}).version == "latest"

    def test_flags_override_env(self) -> None:
        env = {"DOCKER_USERNAME": "acme", "VERSION": "v2.0.0"}
        cfg = resolve_build_config(env, username="me", version="v3.0.0", platforms="linux/amd64")
        assert cfg.namespace == "me"
        assert cfg.version == "v3.0.0"
        assert cfg.platform_arg == "linux/amd64"

    def test_env_overrides_file(self) -> None:
        cfg = resolve_build_config(
            {"IMAGE_NAME": "from-env"}, {"image": "from-file", "version": "v0.9.0"}
        )
        assert cfg.image_name == "from-env"
        assert cfg.version == "v0.9.0"

    def test_tags_keep_command_line_order(self) -> None:
        cfg = resolve_build_config({}, tags=["stable", "latest", "edge"])
        assert cfg.extra_tags == ("stable", "latest", "edge")

    def test_cli_tags_replace_file_tags(self) -> None:
        assert resolve_build_config({}, {"tags": ["nightly"]}).extra_tags == ("nightly",)
        assert resolve_build_config({}, {"tags": ["nightly"]}, tags=["x"]).extra_tags == ("x",)

    def test_non_list_file_tags_raise(self) -> None:
        with pytest.raises(ConfigError, match="Tags must be"):
            resolve_build_config({}, {"tags": 7})

    def test_push_and_cache_flags(self) -> None:
        cfg = resolve_build_config({}, push=False, use_cache=False)
        assert cfg.push is False
        assert cfg.use_cache is False

    def test_is_frozen(self) -> None:
        cfg = resolve_build_config({})
        with pytest.raises(AttributeError):
            cfg.version = "x"  # type: ignore[misc]
        assert isinstance(cfg, BuildConfig)


class TestLoadConfigFile:
    def test_missing_file_is_empty(self, tmp_path: Path) -> None:
        assert load_config_file(tmp_path) == {}

    def test_loads_known_keys(self, tmp_path: Path) -> None:
        (tmp_path / "relay-build.yaml").write_text(
            "username: acme\nplatforms:\n  - linux/amd64\ntags: [stable]\n"
        )
        values = load_config_file(tmp_path)
        assert values == {"username": "acme", "platforms": ["linux/amd64"], "tags": ["stable"]}
        cfg = resolve_build_config({}, values)
        assert cfg.platforms == ("linux/amd64",)

    def test_unknown_keys_dropped(self, tmp_path: Path) -> None:
        (tmp_path / "relay-build.yaml").write_text("image: relay\nregistry: ghcr.io\n")
        assert load_config_file(tmp_path) == {"image": "relay"}

    def test_non_mapping_raises(self, tmp_path: Path) -> None:
        (tmp_path / "relay-build.yaml").write_text("- a\n- b\n")
        with pytest.raises(ConfigError, match="must contain a mapping"):
            load_config_file(tmp_path)

    def test_invalid_yaml_raises(self, tmp_path: Path) -> None:
        (tmp_path / "relay-build.yaml").write_text("image: [unclosed\n")
        with pytest.raises(ConfigError, match="Could not parse"):
            load_config_file(tmp_path)

    def test_unquoted_numeric_version_raises(self, tmp_path: Path) -> None:
        (tmp_path / "relay-build.yaml").write_text("version: 1.10\n")
        with pytest.raises(ConfigError, match="quote it"):
            load_config_file(tmp_path)

    def test_quoted_version_kept_verbatim(self, tmp_path: Path) -> None:
        (tmp_path / "relay-build.yaml").write_text('version: "1.10"\ntags: ["2.0"]\n')
        cfg = resolve_build_config({}, load_config_file(tmp_path))
        assert cfg.version == "1.10"
        assert cfg.extra_tags == ("2.0",)

    def test_numeric_tag_entry_raises(self, tmp_path: Path) -> None:
        (tmp_path / "relay-build.yaml").write_text('version: "1.10"\ntags: [2.0]\n')
        with pytest.raises(ConfigError, match="tags"):
            load_config_file(tmp_path)

    def test_scalar_non_string_lists_raise(self, tmp_path: Path) -> None:
        for body in ("platforms: 5\n", "tags: 7\n", "image: [a, b]\n"):
            (tmp_path / "relay-build.yaml").write_text(body)
            with pytest.raises(ConfigError):
                load_config_file(tmp_path)

    def test_unreadable_file_raises(self, tmp_path: Path) -> None:
        (tmp_path / "relay-build.yaml").write_text("image: relay\n")
        with patch.object(Path, "open", side_effect=PermissionError("denied")):
            with pytest.raises(ConfigError, match="Could not read"):
                load_config_file(tmp_path)
