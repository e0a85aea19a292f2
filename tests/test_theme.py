import json

import pytest

from skirmish.text import TextSection, TextStyle
from skirmish.theme import (
    ThemeColor,
    ThemeColorList,
    ThemeConfig,
    recolor_sections,
)


def _colors():
    return [(i / 10, i / 20, i / 40, 1.0) for i in range(len(ThemeColor))]


def test_palette_has_eleven_slots():
    assert len(ThemeColor) == 11
    assert len(ThemeColorList.from_colors(_colors())) == len(ThemeColor)


def test_index_follows_declaration_order():
    colors = _colors()
    palette = ThemeColorList.from_colors(colors)
    for position, member in enumerate(ThemeColor):
        assert palette[member] == colors[position]


def test_wrong_length_rejected():
    with pytest.raises(ValueError):
        ThemeColorList.from_colors(_colors()[:-1])


def test_bad_component_count_rejected():
    colors = _colors()
    colors[0] = (0.1, 0.2)
    with pytest.raises(ValueError):
        ThemeColorList.from_colors(colors)


def test_rgb_gets_opaque_alpha():
    colors = [c[:3] for c in _colors()]
    palette = ThemeColorList.from_colors(colors)
    assert palette[ThemeColor.WHITE][3] == 1.0
    assert palette[ThemeColor.OVERLAY][:3] == colors[-1]


def test_config_round_trip():
    config = ThemeConfig.from_dict({"colors": _colors()})
    again = ThemeConfig.from_dict(config.to_dict())
    assert again == config


def test_config_unknown_field_rejected():
    with pytest.raises(ValueError):
        ThemeConfig.from_dict({"colors": _colors(), "font": "x"})


def test_config_missing_colors_rejected():
    with pytest.raises(ValueError):
        ThemeConfig.from_dict({})


def test_clear_color_is_body():
    config = ThemeConfig.from_dict({"colors": _colors()})
    assert config.clear_color == config.colors[ThemeColor.BODY]


def test_load_from_file(tmp_path):
    path = tmp_path / ThemeConfig.FILE
    path.write_text(json.dumps({"colors": _colors()}), encoding="utf-8")
    config = ThemeConfig.load(path)
    assert list(config.colors) == [tuple(c) for c in _colors()]


def test_recolor_sections_zips():
    palette = ThemeColorList.from_colors(_colors())
    sections = [TextSection("a", TextStyle()), TextSection("b", TextStyle())]
    result = recolor_sections(sections, [ThemeColor.PRIMARY_TEXT], palette)
    assert result[0].style.color == palette[ThemeColor.PRIMARY_TEXT]
    assert result[0].value == "a"
    assert result[1] == sections[1]