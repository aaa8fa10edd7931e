from pathlib import Path

import pytest

from partsplit.config import get_settings


def make_payload(size: int) -> bytes:
    """Deterministic, non-repeating-looking content of ``size`` bytes."""
    return bytes((index * 7 + index // 251 + 3) % 256 for index in range(size))


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path_factory, monkeypatch):
    settings_file = tmp_path_factory.mktemp("conf") / "settings.yaml"
    settings_file.write_text(
        "chunk_size: 7\ndefault_checksum: null\nlog_level: debug\n", encoding="utf-8"
    )
    monkeypatch.setenv("PARTSPLIT_SETTINGS_FILE", str(settings_file))
    get_settings.cache_clear()
    yield settings_file
    get_settings.cache_clear()


@pytest.fixture
def make_file(tmp_path):
    def _make(size: int, name: str = "data.bin") -> Path:
        path = tmp_path / "input" / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(make_payload(size))
        return path

    return _make
