"""Tests for src/seolab/config.py — SeoLabConfig, TOML loading, CLI overrides."""

import pytest

from seolab.config import SeoLabConfig, load_config, merge_cli_overrides

_ENV_VARS = (
    "SITE_URL",
    "CONTENTFUL_SPACE_ID",
    "CONTENTFUL_ENVIRONMENT",
    "CONTENTFUL_DELIVERY_TOKEN",
    "CONTENTFUL_PREVIEW_TOKEN",
    "CONTENTFUL_HOST",
    "SEOLAB_OUTPUT_DIR",
)


@pytest.fixture(autouse=True)
def _isolated(tmp_path, monkeypatch):
    """Keep the real env, CWD and home config out of every test."""
    for key in _ENV_VARS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("seolab.config.GLOBAL_CONFIG_PATH", tmp_path / "global" / "config.toml")


class TestSeoLabConfigDefaults:
    def test_site(self):
        cfg = SeoLabConfig()
        assert cfg.site.url == ""
        assert cfg.site.name == "Technical SEO CWV Astro Lab"
        assert cfg.site.default_og_image == "/images/default-og.jpg"
        assert len(cfg.site.social_links) == 3

    def test_contentful(self):
        cfg = SeoLabConfig()
        assert cfg.contentful.environment == "master"
        assert cfg.contentful.is_configured is False

    def test_build(self):
        cfg = SeoLabConfig()
        assert cfg.build.output_dir == "./dist"
        assert cfg.build.blog_limit == 1000
        assert cfg.build.guide_limit == 1000


class TestLoadConfig:
    def test_load_from_explicit_path(self, tmp_path):
        toml_path = tmp_path / "custom.toml"
        toml_path.write_text(
            '[site]\nurl = "https://example.com"\nname = "Example"\n'
            "[build]\nblog_limit = 50\n"
        )
        cfg = load_config(toml_path)
        assert cfg.site.url == "https://example.com"
        assert cfg.site.name == "Example"
        assert cfg.build.blog_limit == 50
        assert cfg.build.guide_limit == 1000

    def test_load_missing_path_returns_defaults(self, tmp_path):
        cfg = load_config(tmp_path / "nonexistent.toml")
        assert cfg.site.url == ""

    def test_load_searches_cwd(self, tmp_path):
        (tmp_path / ".seolab.toml").write_text('[site]\nurl = "https://cwd.example.com"\n')
        assert load_config().site.url == "https://cwd.example.com"

    def test_load_global_config(self, tmp_path):
        global_path = tmp_path / "global" / "config.toml"
        global_path.parent.mkdir()
        global_path.write_text('[site]\nname = "Global"\n')
        assert load_config().site.name == "Global"

    def test_cwd_wins_over_global(self, tmp_path):
        global_path = tmp_path / "global" / "config.toml"
        global_path.parent.mkdir()
        global_path.write_text('[site]\nname = "Global"\n')
        (tmp_path / ".seolab.toml").write_text('[site]\nname = "Local"\n')
        assert load_config().site.name == "Local"

    def test_malformed_toml_returns_defaults(self, tmp_path):
        toml_path = tmp_path / "bad.toml"
        toml_path.write_text("[site\nurl = ")
        cfg = load_config(toml_path)
        assert cfg.site.url == ""

    def test_contentful_section(self, tmp_path):
        toml_path = tmp_path / "c.toml"
        toml_path.write_text(
            '[contentful]\nspace_id = "space"\ndelivery_token = "d"\npreview_token = "p"\n'
        )
        assert load_config(toml_path).contentful.is_configured is True


class TestEnvOverrides:
    def test_site_url(self, monkeypatch):
        monkeypatch.setenv("SITE_URL", "https://env.example.com")
        assert load_config().site.url == "https://env.example.com"

    def test_env_wins_over_toml(self, tmp_path, monkeypatch):
        (tmp_path / ".seolab.toml").write_text('[site]\nurl = "https://toml.example.com"\n')
        monkeypatch.setenv("SITE_URL", "https://env.example.com")
        assert load_config().site.url == "https://env.example.com"

    def test_contentful_credentials(self, monkeypatch):
        monkeypatch.setenv("CONTENTFUL_SPACE_ID", "space")
        monkeypatch.setenv("CONTENTFUL_DELIVERY_TOKEN", "delivery")
        monkeypatch.setenv("CONTENTFUL_PREVIEW_TOKEN", "preview")
        monkeypatch.setenv("CONTENTFUL_ENVIRONMENT", "staging")
        cfg = load_config()
        assert cfg.contentful.is_configured is True
        assert cfg.contentful.environment == "staging"

    def test_empty_env_value_ignored(self, tmp_path, monkeypatch):
        (tmp_path / ".seolab.toml").write_text('[site]\nurl = "https://toml.example.com"\n')
        monkeypatch.setenv("SITE_URL", "")
        assert load_config().site.url == "https://toml.example.com"

    def test_output_dir(self, monkeypatch):
        monkeypatch.setenv("SEOLAB_OUTPUT_DIR", "/tmp/site")
        assert load_config().build.output_dir == "/tmp/site"


class TestMergeCliOverrides:
    def test_overrides_applied(self):
        cfg = merge_cli_overrides(
            SeoLabConfig(), site_url="https://cli.example.com", output_dir="out", blog_limit=5
        )
        assert cfg.site.url == "https://cli.example.com"
        assert cfg.build.output_dir == "out"
        assert cfg.build.blog_limit == 5

    def test_none_values_ignored(self):
        base = SeoLabConfig.model_validate({"site": {"url": "https://base.example.com"}})
        cfg = merge_cli_overrides(base, site_url=None)
        assert cfg.site.url == "https://base.example.com"

    def test_unknown_keys_ignored(self):
        cfg = merge_cli_overrides(SeoLabConfig(), nonsense="x")
        assert cfg == SeoLabConfig()
