"""Tests for drillwort.ui.colors – palette, gender colors and blending."""

from __future__ import annotations

from drillwort.ui.colors import GENDER_COLORS, DrillColors, blend_hex, color_for_class


# ===========================================================================
# DrillColors – constants exist
# ===========================================================================

class TestDrillColors:
    def test_bg_main_is_hex(self):
        assert DrillColors.BG_MAIN.startswith("#")
        assert len(DrillColors.BG_MAIN) == 7

    def test_error_is_hex(self):
        assert DrillColors.ERROR.startswith("#")

    def test_card_bg_is_rgba(self):
        assert DrillColors.CARD_BG.startswith("rgba(")


# ===========================================================================
# Gender colors
# ===========================================================================

class TestGenderColors:
    def test_all_genders_have_distinct_colors(self):
        assert set(GENDER_COLORS) == {"masculine", "feminine", "neuter"}
        assert len(set(GENDER_COLORS.values())) == 3

    def test_color_for_known_class(self):
        assert color_for_class("feminine") == GENDER_COLORS["feminine"]

    def test_no_class_uses_default(self):
        assert color_for_class(None) == DrillColors.TEXT_PRIMARY

    def test_unknown_class_uses_given_default(self):
        assert color_for_class("plural", default="#000000") == "#000000"


# ===========================================================================
# blend_hex – happy paths
# ===========================================================================

class TestBlendHexHappy:
    def test_t_zero_returns_a(self):
        assert blend_hex("#FF0000", "#0000FF", 0.0) == "#FF0000"

    def test_t_one_returns_b(self):
        assert blend_hex("#FF0000", "#0000FF", 1.0) == "#0000FF"

    def test_midpoint(self):
        result = blend_hex("#000000", "#FFFFFF", 0.5)
        r = int(result[1:3], 16)
        g = int(result[3:5], 16)
        b = int(result[5:7], 16)
        assert 126 <= r <= 128
        assert 126 <= g <= 128
        assert 126 <= b <= 128

    def test_same_color(self):
        assert blend_hex("#ABCDEF", "#ABCDEF", 0.5) == "#ABCDEF"

    def test_quarter_blend(self):
        result = blend_hex("#000000", "#FF0000", 0.25)
        r = int(result[1:3], 16)
        # 0 + (255 - 0) * 0.25 = 63.75 -> 63
        assert 63 <= r <= 64


# ===========================================================================
# blend_hex – clamping and invalid inputs
# ===========================================================================

class TestBlendHexEdgeCases:
    def test_t_negative_clamped_to_zero(self):
        assert blend_hex("#FF0000", "#0000FF", -1.0) == "#FF0000"

    def test_t_greater_than_one_clamped(self):
        assert blend_hex("#FF0000", "#0000FF", 2.0) == "#0000FF"

    def test_a_missing_hash(self):
        assert blend_hex("FF0000", "#0000FF", 0.5) == "FF0000"

    def test_b_wrong_length(self):
        assert blend_hex("#FF0000", "#FFF", 0.5) == "#FF0000"

    def test_invalid_hex_chars(self):
        assert blend_hex("#GGHHII", "#000000", 0.5) == "#GGHHII"

    def test_empty_strings(self):
        assert blend_hex("", "", 0.5) == ""

    def test_rgba_input_returned_unchanged(self):
        assert blend_hex(DrillColors.CARD_BG, "#000000", 0.5) == DrillColors.CARD_BG
