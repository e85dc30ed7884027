"""Tests for the editor configuration."""

import pytest

from curve_editor.ui.config import EditorConfig


class TestResolveSize:
    """Tests for EditorConfig.resolve_size."""

    def test_defaults_follow_available_width(self):
        width, height = EditorConfig().resolve_size(260)

        assert width == 260
        assert height == pytest.approx(120)

    def test_explicit_height_sets_width(self):
        width, height = EditorConfig(height=60).resolve_size(1000)

        assert width == pytest.approx(130)
        assert height == 60

    def test_explicit_size(self):
        assert EditorConfig(width=300, height=50).resolve_size(1000) == (300, 50)

    def test_min_size(self):
        width, height = EditorConfig().resolve_size(10)

        assert (width, height) == (40, 40)

    def test_min_size_floored_at_one(self):
        width, height = EditorConfig(min_size=(0, 0), view_aspect=1.0).resolve_size(0.5)

        assert (width, height) == (1.0, 1.0)

    def test_max_size(self):
        config = EditorConfig(max_size=(400, 100))

        assert config.resolve_size(600) == (400, 100)


class TestValidate:
    """Tests for EditorConfig.validate."""

    def test_defaults_are_valid(self):
        EditorConfig().validate()

    @pytest.mark.parametrize("kwargs", [
        {'view_aspect': 0},
        {'width': -1},
        {'height': 0},
        {'max_size': (100, 0)},
        {'handle_radius': 0},
        {'sample_step': 0},
        {'sample_step': 2},
    ])
    def test_invalid(self, kwargs):
        with pytest.raises(ValueError):
            EditorConfig(**kwargs).validate()
