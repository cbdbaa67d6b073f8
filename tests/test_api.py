import pytest

from outliner_lib.api import extract_outline, find_outline
from outliner_lib.errors import EmptyDocumentError, NoColumnsError
from outliner_lib.models import FontStyle, OutlineItem, PageModel

from conftest import HEADING_FONT, heading_block


def test_two_page_document(two_page_document, params):
    outline = find_outline(two_page_document, params)
    assert outline == [
        OutlineItem(1, "Introduction", 1, 200, 100),
        OutlineItem(1, "Methods", 2, 200, 400),
    ]


def test_default_params_are_used(two_page_document):
    assert [item.text for item in find_outline(two_page_document)] == ["Introduction", "Methods"]


def test_sub_headings_get_second_level(two_page_document, params):
    sub_font = FontStyle(HEADING_FONT.name, weight="bold", size=14)
    page1, page2 = two_page_document
    page1.blocks.append(heading_block("Background", 72, 220, font=sub_font, width=120, h=16))
    page1.blocks.append(heading_block("Motivation", 72, 320, font=sub_font, width=120, h=16))
    page2.blocks.append(heading_block("Data sources", 72, 480, font=sub_font, width=140, h=16))

    outline = find_outline(two_page_document, params)
    assert [(i.level, i.text, i.page) for i in outline] == [
        (1, "Introduction", 1),
        (2, "Background", 1),
        (2, "Motivation", 1),
        (1, "Methods", 2),
        (2, "Data sources", 2),
    ]


def test_document_without_headings_gives_empty_outline(two_page_document, params):
    for page in two_page_document:
        page.blocks = [b for b in page.blocks if len(b.raw_spans) > 1]
    assert find_outline(two_page_document, params) == []


def test_precondition_failures(params):
    with pytest.raises(EmptyDocumentError):
        find_outline([], params)
    pages = [PageModel(600, 800, [heading_block("Lonely title", 200, 100)])]
    with pytest.raises(NoColumnsError):
        find_outline(pages, params)


def test_extract_outline_missing_file():
    with pytest.raises(FileNotFoundError):
        extract_outline("does-not-exist.pdf")


def test_extract_outline_uses_span_extractor(mocker, two_page_document):
    mocker.patch("outliner_lib.api.os.path.exists", return_value=True)
    extractor_cls = mocker.patch("outliner_lib.api.SpanExtractor")
    extractor_cls.return_value.load_page_models.return_value = two_page_document

    outline = extract_outline("paper.pdf")
    extractor_cls.assert_called_once_with("paper.pdf")
    assert [item.page for item in outline] == [1, 2]
