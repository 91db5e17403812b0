"""Unit tests for configuration defaults, layering and validation."""

import pytest

from menumine.config import CompactionProfile, ExtractionConfig, config_from_dict, load_config
from menumine.config.config_resolver import ENV_OVERRIDES


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep host environment variables out of the layering under test."""
    for name in ENV_OVERRIDES:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.delenv("MENUMINE_CONFIG_PATH", raising=False)


@pytest.mark.unit
def test_defaults():
    config = load_config(use_env=False)
    assert config == ExtractionConfig()
    assert config.byte_budget == 1900
    assert config.min_group_pairs == 3
    assert len(config.profiles) == 5
    assert config.profiles[0] == CompactionProfile(6, 3, 12, 24, 48, 220)
    assert config.profiles[-1] == CompactionProfile(2, 1, 4, 14, 20, 80)


@pytest.mark.unit
def test_keyword_is_case_insensitive():
    config = ExtractionConfig(keyword_pattern=r"\bdinner\b")
    assert config.keyword.search("DINNER menu")
    assert not config.keyword.search("dinnertime")


@pytest.mark.unit
def test_yaml_layer(tmp_path):
    path = tmp_path / "menumine.yaml"
    path.write_text(
        "keyword_pattern: '\\bdinner\\b'\n"
        "byte_budget: 1500\n"
        "date_keys: [serviceDate, date]\n"
        "section_aliases:\n"
        "  Grill Station: Grill\n",
        encoding="utf-8",
    )
    config = load_config(path, use_env=False)

    assert config.keyword_pattern == r"\bdinner\b"
    assert config.byte_budget == 1500
    assert config.date_keys == ("serviceDate", "date")
    # Aliases merge key by key with the defaults and are matched lowercased
    assert config.section_aliases["grill station"] == "Grill"
    assert config.section_aliases["entree"] == "Entrees"


@pytest.mark.unit
def test_env_layer_overrides_yaml(tmp_path, monkeypatch):
    path = tmp_path / "menumine.yaml"
    path.write_text("byte_budget: 1500\ntimezone: America/New_York\n", encoding="utf-8")
    monkeypatch.setenv("MENUMINE_BYTE_BUDGET", "1200")
    monkeypatch.setenv("MEAL_REGEX", r"\bbrunch\b")

    config = load_config(path)

    assert config.byte_budget == 1200
    assert config.keyword_pattern == r"\bbrunch\b"
    assert config.timezone == "America/New_York"


@pytest.mark.unit
def test_explicit_overrides_win(monkeypatch):
    monkeypatch.setenv("MENUMINE_BYTE_BUDGET", "1200")
    config = load_config(overrides={"byte_budget": 900, "fallback_offsets": (0, 1)})
    assert config.byte_budget == 900
    assert config.fallback_offsets == (0, 1)


@pytest.mark.unit
def test_invalid_env_number(monkeypatch):
    monkeypatch.setenv("MENUMINE_MIN_GROUP_PAIRS", "three")
    with pytest.raises(ValueError, match="MENUMINE_MIN_GROUP_PAIRS"):
        load_config()


@pytest.mark.unit
def test_unknown_keys_rejected():
    with pytest.raises(ValueError, match="Unknown config keys"):
        config_from_dict({"bytes_budget": 10})


@pytest.mark.unit
def test_profiles_from_dicts():
    config = config_from_dict(
        {
            "profiles": [
                {"section_limit": 2, "items_per_section": 2, "fallback_limit": 2,
                 "section_name_max_chars": 10, "item_max_chars": 10, "error_max_chars": 50},
            ]
        }
    )
    assert config.profiles == (CompactionProfile(2, 2, 2, 10, 10, 50),)


@pytest.mark.unit
def test_profile_missing_field_rejected():
    with pytest.raises(ValueError, match="Invalid compaction profile"):
        config_from_dict({"profiles": [{"section_limit": 2}]})


@pytest.mark.unit
def test_loosening_ladder_rejected():
    with pytest.raises(ValueError, match="loosens"):
        ExtractionConfig(
            profiles=(CompactionProfile(2, 1, 4, 14, 20, 80), CompactionProfile(3, 1, 4, 14, 20, 80))
        )


@pytest.mark.unit
def test_empty_ladder_rejected():
    with pytest.raises(ValueError):
        ExtractionConfig(profiles=())


@pytest.mark.unit
@pytest.mark.parametrize(
    "kwargs",
    [
        {"keyword_pattern": "(unclosed"},
        {"min_group_pairs": 0},
        {"byte_budget": 0},
        {"fallback_offsets": (-1, 0)},
        {"name_min_chars": 10, "name_max_chars": 5},
    ],
)
def test_invalid_values_rejected(kwargs):
    with pytest.raises(ValueError):
        ExtractionConfig(**kwargs)


@pytest.mark.unit
def test_negative_profile_limit_rejected():
    with pytest.raises(ValueError, match="non-negative"):
        CompactionProfile(-1, 1, 1, 1, 1, 1)


@pytest.mark.unit
@pytest.mark.parametrize(
    "caps",
    [(1, 10, 10), (10, 1, 10), (10, 10, 0)],
)
def test_char_caps_leave_room_for_ellipsis(caps):
    with pytest.raises(ValueError, match="at least 2"):
        CompactionProfile(2, 1, 1, *caps)


@pytest.mark.unit
def test_section_label_cap_leaves_room_for_ellipsis():
    with pytest.raises(ValueError, match="section_label_max_chars"):
        ExtractionConfig(section_label_max_chars=1)


@pytest.mark.unit
def test_fallback_template_accepts_known_placeholders():
    template = "https://m.test/w?id={menu_id}&d={iso_date}&u={us_date}"
    config = ExtractionConfig(fallback_url_template=template)
    assert "{menu_id}" in config.fallback_url_template
    assert ExtractionConfig(fallback_url_template=None).fallback_url_template is None


@pytest.mark.unit
@pytest.mark.parametrize(
    "template, message",
    [
        ("https://m.test/w?id={menuId}", "'menuId'"),
        ("https://m.test/w?id={0}", "'0'"),
        ("https://m.test/w?id={}", "Unknown"),
        ("https://m.test/w?id={menu_id", "Malformed"),
        ("https://m.test/w?id={menu_id:d}", "Malformed"),
    ],
)
def test_fallback_template_rejected_at_load(template, message):
    with pytest.raises(ValueError, match=message):
        config_from_dict({"fallback_url_template": template})
