from pathlib import Path
from sortimport.support.config import SortImportConfig, load_config


def test_default_config():
    cfg = SortImportConfig()
    assert cfg.local == ""
    assert cfg.second == ""
    assert cfg.cache_dir is None
    assert cfg.go_binary == "go"
    assert "vendor" in cfg.exclude_dirs


def test_load_config_defaults(tmp_path):
    # No .sortimport.toml
    cfg = load_config(tmp_path)
    assert cfg == SortImportConfig()


def test_load_config_from_section(tmp_path):
    config_file = tmp_path / ".sortimport.toml"
    config_file.write_text("""
[sortimport]
local = "github.com/org/proj"
second = "github.com/org/shared"
exclude_dirs = ["third_party"]
unknown = 1
""", encoding="utf-8")

    cfg = load_config(tmp_path)
    assert cfg.local == "github.com/org/proj"
    assert cfg.second == "github.com/org/shared"
    assert cfg.exclude_dirs == ["third_party"]


def test_load_config_top_level_file(tmp_path):
    config_file = tmp_path / "custom.toml"
    config_file.write_text('local = "example.com/me"\ncache_dir = "/tmp/cache"\n', encoding="utf-8")

    cfg = load_config(config_file)
    assert cfg.local == "example.com/me"
    assert cfg.cache_dir == "/tmp/cache"


def test_load_config_malformed(tmp_path):
    (tmp_path / ".sortimport.toml").write_text("local = [unclosed", encoding="utf-8")
    assert load_config(tmp_path) == SortImportConfig()


def test_load_config_cwd(tmp_path, monkeypatch):
    (tmp_path / ".sortimport.toml").write_text('second = "corp.example"\n', encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    assert load_config().second == "corp.example"
