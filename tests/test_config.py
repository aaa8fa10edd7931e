import pytest

from partsplit.config import Settings, SettingsError, get_settings, load_settings
from partsplit.libs.file_parts import ExtraBytesPolicy


def test_load_settings_normalizes_keys(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text(
        "CHUNK_SIZE: 4096\nDefault_Checksum: sha3-256\nextra_bytes: new_file\nlog_level: warning\n",
        encoding="utf-8",
    )

    settings = load_settings(path)

    assert settings.chunk_size == 4096
    assert settings.default_checksum == "sha3-256"
    assert settings.extra_bytes is ExtraBytesPolicy.NEW_FILE
    assert settings.log_level == "WARNING"


def test_missing_settings_file(tmp_path):
    with pytest.raises(SettingsError, match="not found"):
        load_settings(tmp_path / "missing.yaml")


def test_settings_must_be_a_mapping(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text("- chunk_size\n- 10\n", encoding="utf-8")
    with pytest.raises(SettingsError, match="mapping"):
        load_settings(path)


def test_malformed_yaml(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text("chunk_size: [1, 2\n", encoding="utf-8")
    with pytest.raises(SettingsError, match="parse"):
        load_settings(path)


@pytest.mark.parametrize("content", ["chunk_size: 0\n", "default_checksum: crc32\n"])
def test_invalid_values(tmp_path, content):
    path = tmp_path / "settings.yaml"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(SettingsError, match="Invalid settings"):
        load_settings(path)


def test_empty_file_gives_defaults(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text("", encoding="utf-8")
    settings = load_settings(path)
    assert settings.chunk_size == 1024 * 1024
    assert settings.default_checksum is None


def test_get_settings_uses_override_file(isolated_settings):
    settings = get_settings()
    assert settings.chunk_size == 7
    assert get_settings() is settings


def test_environment_variables_without_file(tmp_path, monkeypatch):
    monkeypatch.delenv("PARTSPLIT_SETTINGS_FILE")
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("PARTSPLIT_CHUNK_SIZE", "512")
    monkeypatch.setenv("PARTSPLIT_DEFAULT_CHECKSUM", "md5")
    get_settings.cache_clear()

    settings = get_settings()

    assert settings.chunk_size == 512
    assert settings.default_checksum == "md5"
    assert Settings().chunk_size == 512
