"""Tests for PageFactory and DocumentLayout."""

import pytest

from pagequill.config import PageSize, PageTemplate
from pagequill.engine import LAST_PAGE_EPSILON, DocumentLayout, FixedHeightOracle, PageFactory
from pagequill.exceptions import LayoutError
from pagequill.model import Box

from tests.conftest import make_template, target


class TestPageFactory:
    """Test suite for PageFactory."""

    @pytest.fixture
    def factory(self):
        template = PageTemplate(width=300.0, height=500.0, header_height=40.0, footer_height=60.0)
        return PageFactory(Box("div"), 300.0, 500.0, template, FixedHeightOracle())

    def test_create_page_locks_heights(self, factory):
        page = factory.create_page()

        assert page.width == 300.0
        assert page.height == 500.0
        assert page.header_height == 40.0
        assert page.footer_height == 60.0
        assert page.content_height == 400.0
        assert page.content.style.max_height == 400.0

    def test_page_structure(self, factory):
        page = factory.create_page()

        assert page.box.parent is factory.container
        assert [region.get("class") for region in page.box.children] == ["header", "content", "footer"]
        assert page.regions == [page.header, page.content, page.footer]
        assert page.box.has_class("page")
        assert page.box.has_class("default")

    def test_page_classes(self, factory):
        page = factory.create_page(["landscape", "cover"])

        assert page.classes == ("landscape", "cover")
        assert page.box.get("class") == "page landscape cover"

    def test_pages_are_numbered(self, factory):
        pages = [factory.create_page() for _ in range(3)]

        assert [page.number for page in pages] == [1, 2, 3]
        assert factory.pages == pages

    def test_content_height_never_negative(self):
        template = PageTemplate(width=100.0, height=50.0, header_height=40.0, footer_height=40.0)
        factory = PageFactory(Box("div"), 100.0, 50.0, template, FixedHeightOracle())

        assert factory.create_page().content_height == 0.0

    def test_template_regions_are_cloned(self):
        header = Box("div", children=[Box.text_node("Report "), target("pageNumber")])
        template = make_template(100.0, header=header)
        factory = PageFactory(Box("div"), 400.0, template.height, template, FixedHeightOracle())

        first = factory.create_page()
        second = factory.create_page()

        assert first.header.inner_text() == "Report "
        assert first.header.children[1] is not second.header.children[1]
        assert header.children[1].parent is header

    def test_adjust_last_page(self, factory):
        first = factory.create_page()
        last = factory.create_page()

        factory.adjust_last_page()

        assert first.height == 500.0
        assert last.height == pytest.approx(500.0 - LAST_PAGE_EPSILON)
        assert last.box.style.max_height == pytest.approx(500.0 - LAST_PAGE_EPSILON)

    def test_adjust_last_page_without_pages(self, factory):
        factory.adjust_last_page()

        assert factory.pages == []


class TestDocumentLayout:
    """Test suite for DocumentLayout."""

    def test_insert_page_requires_prepare(self):
        layout = DocumentLayout(FixedHeightOracle())

        with pytest.raises(LayoutError):
            layout.insert_page()

    def test_finish_layout_requires_prepare(self):
        with pytest.raises(LayoutError):
            DocumentLayout(FixedHeightOracle()).finish_layout()

    def test_prepare_measures_template(self):
        template = PageTemplate.from_page_size(PageSize.LETTER)
        layout = DocumentLayout(FixedHeightOracle(), template)

        wrapper = layout.prepare()

        assert layout.page_width == 612.0
        assert layout.page_height == 792.0
        assert wrapper.has_class("pagequill")
        assert wrapper.children == []

    def test_insert_page_appends_to_wrapper(self):
        layout = DocumentLayout(FixedHeightOracle(), make_template(100.0))
        wrapper = layout.prepare()

        page = layout.insert_page(["default"])

        assert page.box.parent is wrapper
        assert page.content_height == 100.0
        assert layout.pages == [page]

    def test_default_template_is_a4(self):
        layout = DocumentLayout(FixedHeightOracle())
        layout.prepare()

        assert layout.page_width == PageSize.A4.value[0]
        assert layout.page_height == PageSize.A4.value[1]
