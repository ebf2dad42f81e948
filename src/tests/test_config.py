import pytest

from src.todo_highlight.config import (
    DEFAULT_KEYWORDS, HighlightConfig, KeywordRule, StyleSpec, dump_config, load_config
)
from src.todo_highlight.errors import ConfigurationError


def test_defaults_match_extension_settings():
    cfg = HighlightConfig()
    assert cfg.is_enable is True
    assert cfg.is_case_sensitive is True
    assert cfg.keywords_pattern == ""
    assert [k.keyword for k in cfg.keywords] == ["TODO:", "FIXME:"]
    assert cfg.max_files_for_search == 5120
    assert not cfg.single_pattern_mode


def test_camel_case_settings_shape_loads():
    result = load_config({
        "isEnable": False,
        "isCaseSensitive": False,
        "keywordsPattern": "  ",
        "defaultStyle": {"backgroundColor": "#eee", "isWholeLine": True},
        "keywords": [
            "NOTE",
            {"text": "BUG", "color": "#f00", "overviewRulerColor": "grey"},
            {"keyword": "HACK", "style": {"fontWeight": "bold"}, "literal": True},
        ],
    })
    cfg = result.config
    assert result.errors == []
    assert cfg.is_enable is False
    assert cfg.is_case_sensitive is False
    assert not cfg.single_pattern_mode
    assert cfg.default_style.background_color == "#eee"
    assert cfg.default_style.is_whole_line is True
    assert [k.keyword for k in cfg.keywords] == ["NOTE", "BUG", "HACK"]
    assert cfg.keywords[1].style.color == "#f00"
    assert cfg.keywords[1].style.overview_ruler_color == "grey"
    assert cfg.keywords[2].style.font_weight == "bold"
    assert cfg.keywords[2].literal is True


def test_invalid_rules_are_dropped_and_reported():
    result = load_config({"keywords": ["TODO", {"color": "red"}, "   ", 42, {"text": 7}, "FIXME"]})
    assert [k.keyword for k in result.config.keywords] == ["TODO", "FIXME"]
    assert len(result.errors) == 4
    assert all(isinstance(e, ConfigurationError) for e in result.errors)
    assert [e.index for e in result.errors] == [1, 2, 3, 4]
    assert "keywords[1]" in str(result.errors[0])


def test_keywords_not_a_list_is_reported_and_defaults_kept():
    result = load_config({"keywords": "TODO"})
    assert len(result.errors) == 1
    assert result.config.keywords == DEFAULT_KEYWORDS


def test_bad_top_level_field_raises_configuration_error():
    with pytest.raises(ConfigurationError):
        load_config({"maxFilesForSearch": -1})


def test_keyword_text_is_trimmed():
    assert KeywordRule.from_entry("  TODO  ").keyword == "TODO"


def test_with_changes_returns_new_validated_copy():
    cfg = HighlightConfig(keywords=["TODO"], default_style=StyleSpec(color="red"))
    off = cfg.with_changes(is_enable=False)
    assert off is not cfg
    assert off.is_enable is False
    assert cfg.is_enable is True
    assert off.keywords == cfg.keywords
    assert off.default_style == cfg.default_style


def test_dump_then_load_preserves_configuration():
    cfg = HighlightConfig(
        is_case_sensitive=False,
        keywords=[{"text": "BUG", "backgroundColor": "#f00"}, "NOTE"],
        default_style=StyleSpec(color="#111"),
    )
    data = dump_config(cfg)
    assert data["isCaseSensitive"] is False
    assert data["keywords"][0]["style"]["backgroundColor"] == "#f00"
    assert load_config(data).config == cfg
