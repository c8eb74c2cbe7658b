from pathlib import Path

import pytest

from ensembl_dictionary.platform.config import CONFIG_FILE_NAME, Settings
from ensembl_dictionary.services.dictionary import (
    EnsemblDictionary,
    EnsemblDictionaryConfig,
)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    monkeypatch.chdir(tmp_path)
    for name in (
        "EBI_SEARCH_BASE_URL",
        "EBI_SEARCH_FORMAT",
        "EBI_SEARCH_TIMEOUT_SECONDS",
        "DICTIONARY_OPTIMAP",
        "DICTIONARY_LOG_URLS",
        "LOG_FORMAT",
    ):
        monkeypatch.delenv(name, raising=False)
    return tmp_path


def test_defaults(clean_env: Path) -> None:
    settings = Settings()
    assert settings.ebi_search_base_url is None
    assert settings.ebi_search_format == "json"
    assert settings.dictionary_optimap is False
    assert settings.log_format == "json"


def test_toml_file_is_read(clean_env: Path) -> None:
    (clean_env / CONFIG_FILE_NAME).write_text(
        'ebi_search_base_url = "http://from-toml"\ndictionary_optimap = true\n',
        encoding="utf-8",
    )
    settings = Settings()
    assert settings.ebi_search_base_url == "http://from-toml"
    assert settings.dictionary_optimap is True


def test_toml_tables_prefix_setting_names(clean_env: Path) -> None:
    (clean_env / CONFIG_FILE_NAME).write_text(
        "[ebi_search]\nbase_url = \"http://from-table\"\ntimeout_seconds = 4.0\n"
        "[dictionary]\nlog_urls = true\n[unrelated]\nkey = 1\n",
        encoding="utf-8",
    )
    settings = Settings()
    assert settings.ebi_search_base_url == "http://from-table"
    assert settings.ebi_search_timeout_seconds == 4.0
    assert settings.dictionary_log_urls is True


def test_env_wins_over_toml(clean_env: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (clean_env / CONFIG_FILE_NAME).write_text(
        'ebi_search_base_url = "http://from-toml"\n', encoding="utf-8"
    )
    monkeypatch.setenv("EBI_SEARCH_BASE_URL", "http://from-env")
    assert Settings().ebi_search_base_url == "http://from-env"


def test_dictionary_config_from_settings(clean_env: Path) -> None:
    settings = Settings(
        ebi_search_base_url="http://x",
        dictionary_log_urls=True,
        ebi_search_timeout_seconds=3.5,
    )
    config = EnsemblDictionaryConfig.from_settings(settings)
    assert config.base_url == "http://x"
    assert config.log is True
    assert config.timeout_seconds == 3.5

    dictionary = EnsemblDictionary(config)
    assert dictionary.urls.matches_url == "http://x?query=$queryString"
    assert dictionary.urls.entries_url == "http://x/entry/$ids"


def test_dictionary_config_accepts_camel_case_keys() -> None:
    config = EnsemblDictionaryConfig.model_validate(
        {"baseURL": "http://y", "urlGetMatches": "http://m?q=$queryString"}
    )
    dictionary = EnsemblDictionary(config)
    assert dictionary.urls.matches_url == "http://m?q=$queryString"
    assert dictionary.urls.entries_url == "http://y/entry/$ids"
