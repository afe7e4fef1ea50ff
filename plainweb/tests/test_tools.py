"""
Tests for the site-building tools.

Tests:
- Argument validation (InvalidArgument)
- Page upsert semantics
- Asset URL normalization and placement
- Layout replacement
"""

import pytest

from plainweb.errors import InvalidArgument
from plainweb.site_model import DynamicKind, DynamicRule, Layout, SiteModel, default_registry, resolve_asset_url
from plainweb.site_model.tools import add_asset, add_dynamic_content, create_page, set_layout


@pytest.fixture
def site():
    return SiteModel()


class TestCreatePage:
    """Tests for create_page."""

    def test_creates_page(self, site):
        """A new path gets a page with the given content."""
        create_page(site, {"path": "/about", "content": "<h1>About</h1>"})

        assert site.pages["/about"].content == "<h1>About</h1>"
        assert site.pages["/about"].dynamic == []

    def test_overwrites_content_keeps_dynamic(self, site):
        """A second create_page replaces content but keeps dynamic rules."""
        add_dynamic_content(site, {"path": "/", "placeholder": "{{T}}", "type": "CURRENT_TIME"})
        create_page(site, {"path": "/", "content": "first"})
        create_page(site, {"path": "/", "content": "second"})

        assert site.pages["/"].content == "second"
        assert len(site.pages["/"].dynamic) == 1

    def test_empty_content_allowed(self, site):
        """Empty string is valid content."""
        create_page(site, {"path": "/", "content": ""})
        assert site.pages["/"].content == ""

    @pytest.mark.parametrize("path", ["about", "", None, 42])
    def test_invalid_path_fails(self, site, path):
        """Paths must be strings starting with '/'."""
        with pytest.raises(InvalidArgument):
            create_page(site, {"path": path, "content": "x"})
        assert site.is_empty

    @pytest.mark.parametrize("content", [None, 5, ["a"], {"html": "x"}])
    def test_non_string_content_fails(self, site, content):
        """Content must be a string."""
        with pytest.raises(InvalidArgument):
            create_page(site, {"path": "/", "content": content})


class TestAddDynamicContent:
    """Tests for add_dynamic_content."""

    def test_appends_rules_in_order(self, site):
        """Rules accumulate in the order they were added."""
        add_dynamic_content(site, {"path": "/", "placeholder": "{{A}}", "type": "CURRENT_TIME"})
        add_dynamic_content(site, {"path": "/", "placeholder": "{{B}}", "type": "CURRENT_TIME"})

        assert site.pages["/"].dynamic == [
            DynamicRule("{{A}}", DynamicKind.CURRENT_TIME),
            DynamicRule("{{B}}", DynamicKind.CURRENT_TIME),
        ]

    def test_materializes_page(self, site):
        """Targeting an unknown path creates an empty page."""
        add_dynamic_content(site, {"path": "/later", "placeholder": "{{T}}", "type": "CURRENT_TIME"})
        assert site.pages["/later"].content == ""

    def test_kind_alias(self, site):
        """'kind' is accepted in place of 'type'."""
        add_dynamic_content(site, {"path": "/", "placeholder": "{{T}}", "kind": "CURRENT_TIME"})
        assert site.pages["/"].dynamic[0].kind == DynamicKind.CURRENT_TIME

    @pytest.mark.parametrize("kind", ["CURRENT_DATE", "current_time", None, ""])
    def test_unsupported_kind_fails(self, site, kind):
        """Only CURRENT_TIME is supported; anything else fails loudly."""
        with pytest.raises(InvalidArgument, match="unsupported type"):
            add_dynamic_content(site, {"path": "/", "placeholder": "{{T}}", "type": kind})
        assert site.is_empty

    def test_empty_placeholder_fails(self, site):
        """Placeholder must be non-empty."""
        with pytest.raises(InvalidArgument):
            add_dynamic_content(site, {"path": "/", "placeholder": "", "type": "CURRENT_TIME"})

    def test_invalid_path_fails(self, site):
        with pytest.raises(InvalidArgument):
            add_dynamic_content(site, {"path": "x", "placeholder": "{{T}}", "type": "CURRENT_TIME"})


class TestResolveAssetUrl:
    """Tests for asset URL normalization."""

    @pytest.mark.parametrize("asset", [
        "test.png",
        "images/test.png",
        "assets/images/test.png",
        "/assets/images/test.png",
        "\\images\\test.png",
    ])
    def test_normalizes_to_images_mount(self, asset):
        """All reference styles resolve to the same public URL."""
        assert resolve_asset_url(asset) == "/assets/images/test.png"

    def test_other_asset_folder_kept(self):
        """References already under assets/ are used as-is."""
        assert resolve_asset_url("assets/docs/guide.pdf") == "/assets/docs/guide.pdf"

    def test_nested_bare_path_goes_under_images(self):
        assert resolve_asset_url("icons/logo.svg") == "/assets/images/icons/logo.svg"


class TestAddAsset:
    """Tests for add_asset."""

    def test_append_by_default(self, site):
        """Without placement the image is appended."""
        create_page(site, {"path": "/", "content": "<p>Hi</p>"})
        add_asset(site, {"path": "/", "asset": "test.png", "alt": "Test"})

        assert site.pages["/"].content == '<p>Hi</p><img src="/assets/images/test.png" alt="Test" />'

    def test_prepend(self, site):
        create_page(site, {"path": "/", "content": "<p>Hi</p>"})
        add_asset(site, {"path": "/", "asset": "test.png", "placement": "prepend"})

        assert site.pages["/"].content == '<img src="/assets/images/test.png" alt="" /><p>Hi</p>'

    def test_replace_first_placeholder_only(self, site):
        """replace_placeholder substitutes the first occurrence only."""
        create_page(site, {"path": "/", "content": "[IMG] and [IMG]"})
        add_asset(site, {
            "path": "/", "asset": "a.png", "placement": "replace_placeholder", "placeholder": "[IMG]",
        })

        assert site.pages["/"].content == '<img src="/assets/images/a.png" alt="" /> and [IMG]'

    def test_missing_placeholder_is_noop(self, site):
        """An absent placeholder leaves the content untouched."""
        create_page(site, {"path": "/", "content": "<p>Hi</p>"})
        add_asset(site, {
            "path": "/", "asset": "a.png", "placement": "replace_placeholder", "placeholder": "{{NOPE}}",
        })

        assert site.pages["/"].content == "<p>Hi</p>"

    def test_optional_attributes(self, site):
        """class/width/height appear only when provided."""
        add_asset(site, {
            "path": "/", "asset": "a.png", "alt": "A", "className": "hero", "width": 600, "height": "400",
        })

        assert site.pages["/"].content == (
            '<img src="/assets/images/a.png" alt="A" class="hero" width="600" height="400" />'
        )

    def test_attribute_values_are_html_escaped(self, site):
        """Quotes and markup in alt and class are escaped rather than inserted raw."""
        add_asset(site, {"path": "/", "asset": "a.png", "alt": 'Say "hi"', "className": "<b>"})

        content = site.pages["/"].content
        assert 'alt="Say &quot;hi&quot;"' in content
        assert 'class="&lt;b&gt;"' in content

    def test_creates_page_when_missing(self, site):
        add_asset(site, {"path": "/gallery", "asset": "a.png"})
        assert site.pages["/gallery"].content.startswith("<img ")

    @pytest.mark.parametrize("args", [
        {"path": "gallery", "asset": "a.png"},
        {"path": "/", "asset": ""},
        {"path": "/", "asset": None},
        {"path": "/"},
    ])
    def test_invalid_arguments_fail(self, site, args):
        with pytest.raises(InvalidArgument):
            add_asset(site, args)


class TestSetLayout:
    """Tests for set_layout."""

    def test_sets_layout(self, site):
        set_layout(site, {"header_html": "<H>", "footer_html": "<F>"})
        assert site.layout == Layout("<H>", "<F>")

    def test_replaces_wholesale(self, site):
        """A second call replaces both fields, missing ones become empty."""
        set_layout(site, {"header_html": "<H>", "footer_html": "<F>"})
        set_layout(site, {"header_html": "<H2>"})

        assert site.layout == Layout("<H2>", "")

    def test_no_arguments(self, site):
        set_layout(site, {})
        assert site.layout.is_empty


class TestRegistry:
    """Tests for the default tool registry."""

    def test_four_tools(self):
        registry = default_registry()
        assert registry.list_tools() == ["create_page", "add_dynamic_content", "add_asset", "set_layout"]

    def test_definitions_are_function_tools(self):
        """Definitions use the OpenAI function-tool shape."""
        for definition in default_registry().definitions():
            assert definition["type"] == "function"
            function = definition["function"]
            assert function["name"]
            assert function["parameters"]["type"] == "object"

    def test_dynamic_kind_enum_in_schema(self):
        definitions = {d["function"]["name"]: d["function"] for d in default_registry().definitions()}
        params = definitions["add_dynamic_content"]["parameters"]
        assert params["properties"]["type"]["enum"] == ["CURRENT_TIME"]
        assert definitions["set_layout"]["parameters"]["required"] == []
