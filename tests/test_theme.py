from dataclasses import astuple, replace

from shrs.theme import Color, Theme


def test_default_uses_every_color_once():
    values = astuple(Theme())
    assert len(values) == len(Color)
    assert set(values) == set(Color)


def test_light_grey_maps_to_grey():
    assert Theme().light_grey is Color.GREY


def test_override_keeps_other_slots():
    theme = Theme(red=Color.BLUE)
    assert theme.red is Color.BLUE
    assert theme.blue is Color.BLUE
    assert replace(theme, red=Color.RED) == Theme()