"""
Tests for the render path.

Tests:
- CURRENT_TIME substitution
- Literal (non-regex) placeholder matching
- Layout stitching
"""

from datetime import datetime

from plainweb.render import Route, apply_dynamic, format_time, stitch
from plainweb.site_model import DynamicKind, DynamicRule, Layout

NOW = datetime(2026, 10, 19, 18, 30, 5)
TIME_RULE = DynamicRule("{{CURRENT_TIME}}", DynamicKind.CURRENT_TIME)


class TestDynamicSubstitution:
    """Tests for apply_dynamic."""

    def test_replaces_placeholder(self):
        """The placeholder is replaced by a non-empty timestamp."""
        out = apply_dynamic("Now: {{CURRENT_TIME}}", [TIME_RULE], NOW)

        assert out == "Now: 2026-10-19 18:30:05"
        assert "{{CURRENT_TIME}}" not in out

    def test_replaces_every_occurrence(self):
        out = apply_dynamic("{{CURRENT_TIME}} / {{CURRENT_TIME}}", [TIME_RULE], NOW)
        assert out == f"{format_time(NOW)} / {format_time(NOW)}"

    def test_literal_special_characters(self):
        """Regex metacharacters in the placeholder are matched literally."""
        rule = DynamicRule("$(now)*[0-9]+", DynamicKind.CURRENT_TIME)
        out = apply_dynamic("at $(now)*[0-9]+ and 1234", [rule], NOW)

        assert out == f"at {format_time(NOW)} and 1234"

    def test_no_rules_is_identity(self):
        assert apply_dynamic("{{CURRENT_TIME}}", [], NOW) == "{{CURRENT_TIME}}"

    def test_rules_applied_in_order(self):
        """A later rule sees the output of an earlier one."""
        rules = [
            DynamicRule("{{A}}", DynamicKind.CURRENT_TIME),
            DynamicRule("2026", DynamicKind.CURRENT_TIME),
        ]
        out = apply_dynamic("{{A}}", rules, NOW)
        assert out.startswith(format_time(NOW))


class TestStitch:
    """Tests for layout stitching."""

    def test_header_body_footer(self):
        assert stitch(Layout("<H>", "<F>"), "B") == "<H>B<F>"

    def test_empty_layout_is_body(self):
        assert stitch(Layout(), "B") == "B"

    def test_header_only(self):
        assert stitch(Layout(header_html="<H>"), "B") == "<H>B"


class TestRoute:
    """Tests for Route.render."""

    def test_render_with_layout(self):
        route = Route(path="/", content="Now: {{CURRENT_TIME}}", dynamic=(TIME_RULE,), layout=Layout("<H>", "<F>"))
        assert route.render(NOW) == f"<H>Now: {format_time(NOW)}<F>"

    def test_render_uses_fresh_time(self):
        """Without an explicit time every render gets a timestamp."""
        route = Route(path="/", content="Now: {{CURRENT_TIME}}", dynamic=(TIME_RULE,))

        first = route.render()
        second = route.render()

        for out in (first, second):
            assert out.startswith("Now: ")
            assert len(out) > len("Now: ")
            assert "{{CURRENT_TIME}}" not in out

    def test_render_does_not_mutate_content(self):
        route = Route(path="/", content="{{CURRENT_TIME}}", dynamic=(TIME_RULE,))
        route.render(NOW)
        assert route.content == "{{CURRENT_TIME}}"
