import json

import pytest

from osmbound.config.countries import CountryCatalog, get_qnumber
from osmbound.config.settings import BUNDLED_COUNTRY_LIST, Config, ConfigurationError
from osmbound.config_loader import load_config, load_settings_file
from osmbound.types import CatalogError


def test_defaults():
    config = Config()

    assert config.overpass.url == "https://overpass-api.de/api/interpreter"
    assert config.overpass.query_timeout == 90
    assert config.overpass.http_timeout is None
    assert str(config.output.root) == "geojson"
    assert config.output.filename == "boundary.geojson"
    assert config.output.country_list == BUNDLED_COUNTRY_LIST


def test_environment_overrides_defaults(monkeypatch):
    monkeypatch.setenv("OVERPASS_URL", "https://overpass.example/api/interpreter")
    monkeypatch.setenv("OVERPASS_QUERY_TIMEOUT", "180")
    monkeypatch.setenv("OVERPASS_HTTP_TIMEOUT", "300")
    monkeypatch.setenv("OSMBOUND_OUTPUT_ROOT", "/data/boundaries")

    config = Config()

    assert config.overpass.url == "https://overpass.example/api/interpreter"
    assert config.overpass.query_timeout == 180
    assert config.overpass.http_timeout == 300.0
    assert str(config.output.root) == "/data/boundaries"


def test_settings_take_precedence_over_environment(monkeypatch):
    monkeypatch.setenv("OVERPASS_QUERY_TIMEOUT", "180")

    config = Config(settings={"query_timeout": 30})

    assert config.overpass.query_timeout == 30


def test_invalid_url_raises_configuration_error():
    with pytest.raises(ConfigurationError):
        Config(settings={"overpass_url": "overpass-api.de/api/interpreter"})


def test_invalid_timeout_raises_configuration_error(monkeypatch):
    monkeypatch.setenv("OVERPASS_QUERY_TIMEOUT", "zero")

    with pytest.raises(ConfigurationError):
        Config()


def test_missing_env_file_raises(tmp_path):
    with pytest.raises(ConfigurationError):
        Config(env_file=tmp_path / "missing.env")


def test_yaml_settings_file(tmp_path):
    settings_file = tmp_path / "osmbound.yml"
    settings_file.write_text("output_root: out\nquery_timeout: 60\n")

    settings = load_settings_file(settings_file)

    assert settings["query_timeout"] == 60
    assert settings["output_root"] == str(tmp_path / "out")


def test_yaml_rejects_unknown_keys(tmp_path):
    settings_file = tmp_path / "osmbound.yml"
    settings_file.write_text("output_dir: out\n")

    with pytest.raises(ConfigurationError):
        load_settings_file(settings_file)


def test_yaml_missing_file(tmp_path):
    with pytest.raises(ConfigurationError):
        load_settings_file(tmp_path / "nope.yml")


def test_no_settings_file_is_empty():
    assert load_settings_file(None) == {}


def test_load_config_reads_catalog(tmp_path):
    country_list = tmp_path / "countries.json"
    country_list.write_text(json.dumps([
        {"country": "http://www.wikidata.org/entity/Q30", "countryLabel": "United States of America",
         "countryID": "http://www.wikidata.org/entity/Q30"},
    ]))
    settings_file = tmp_path / "osmbound.yml"
    settings_file.write_text(f"country_list: {country_list.name}\n")

    config, catalog = load_config(settings_file)

    assert len(catalog) == 1
    assert catalog.label_for("Q30") == "United States of America"


def test_bundled_catalog_loads():
    catalog = CountryCatalog.load(BUNDLED_COUNTRY_LIST)

    assert len(catalog) > 0
    assert catalog.label_for("Q142") == "France"


def test_get_qnumber():
    assert get_qnumber("http://www.wikidata.org/entity/Q30") == "Q30"
    assert get_qnumber("Q30") == "Q30"


def test_catalog_missing_file_raises(tmp_path):
    with pytest.raises(CatalogError):
        CountryCatalog.load(tmp_path / "country-list.json")


def test_catalog_malformed_file_raises(tmp_path):
    path = tmp_path / "country-list.json"
    path.write_text("[{")

    with pytest.raises(CatalogError):
        CountryCatalog.load(path)


def test_catalog_record_without_id_raises():
    with pytest.raises(CatalogError):
        CountryCatalog.from_records([{"countryLabel": "Nowhere"}])


def test_catalog_record_with_null_label_raises():
    with pytest.raises(CatalogError):
        CountryCatalog.from_records([
            {"country": "http://www.wikidata.org/entity/Q30", "countryLabel": None,
             "countryID": "http://www.wikidata.org/entity/Q30"},
        ])


def test_catalog_label_fallback(catalog):
    assert catalog.label_for("Q142") == "France"
    assert catalog.label_for("Q0") == "Q0"


def test_catalog_resolve(catalog):
    assert catalog.resolve("Q183").label == "Germany"
    assert catalog.resolve("q183").label == "Germany"
    assert catalog.resolve("france").code == "Q142"
    assert catalog.resolve("papua").code == "Q691"
    # Exact label wins over the partial match in 'Papua New Guinea'
    assert catalog.resolve("Guinea").code == "Q1006"
    assert catalog.resolve("an") is None
