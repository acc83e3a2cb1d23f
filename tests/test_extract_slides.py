"""
End-to-end tests for extract_slides.
"""

import pytest

from md2slides import ExtractionSettings, MarkdownParseError, extract_slides
from md2slides.pipeline import SlideExtractionPipeline


def test_title_slide():
    """Title and subtitle with no body."""
    slides = extract_slides("# Title\n## Subtitle\n")

    assert len(slides) == 1
    assert slides[0].title.raw_text == "Title"
    assert slides[0].subtitle.raw_text == "Subtitle"
    assert slides[0].bodies == []


def test_title_and_body():
    slides = extract_slides("# Title\nhello world\n")

    assert slides[0].title.raw_text == "Title"
    assert len(slides[0].bodies) == 1
    assert slides[0].bodies[0].raw_text == "hello world\n"


def test_slides_split_on_thematic_breaks():
    markdown = "# One\n\n---\n\n# Two\n\n***\n\n# Three\n"
    slides = extract_slides(markdown)

    assert [s.title.raw_text for s in slides] == ["One", "Two", "Three"]
    assert [s.index for s in slides] == [0, 1, 2]


def test_leading_break_gives_empty_slide():
    slides = extract_slides("---\n\n# Title\n")

    assert len(slides) == 2
    assert slides[0].title is None
    assert slides[0].bodies == []
    assert slides[1].title.raw_text == "Title"


def test_empty_document():
    slides = extract_slides("")

    assert len(slides) == 1
    assert slides[0].title is None
    assert slides[0].bodies == []
    assert slides[0].notes is None


def test_two_columns():
    slides = extract_slides("# Title\nhello\n\n{.column}\n\nworld\n")

    assert slides[0].title.raw_text == "Title"
    assert len(slides[0].bodies) == 2
    assert slides[0].bodies[0].raw_text == "hello\n"
    assert slides[0].bodies[1].raw_text == "world\n"


def test_background_image():
    markdown = (
        "# Title\n"
        "![](https://example.com/image.jpg){.background}\n"
        "hello world\n"
    )
    slide = extract_slides(markdown)[0]

    assert slide.background_image.url == "https://example.com/image.jpg"
    assert slide.images == []
    assert slide.bodies[0].raw_text == "hello world\n"


def test_inline_image():
    markdown = "# Title\n\n![](https://example.com/image.jpg)\nhello world\n"
    slide = extract_slides(markdown)[0]

    assert slide.images[0].url == "https://example.com/image.jpg"
    assert slide.background_image is None
    assert slide.bodies[0].raw_text == "hello world\n"


def test_video():
    slide = extract_slides("# Title\n\n@[youtube](12345)\nhello world\n")[0]

    assert slide.videos[0].id == "12345"
    assert slide.videos[0].provider == "youtube"
    assert slide.bodies[0].raw_text == "hello world\n"


def test_table():
    markdown = (
        "# Title\n"
        "\n"
        "H1 | H2\n"
        "---|---\n"
        " a | b\n"
        " c | d\n"
        " e | f\n"
        "\n"
    )
    slide = extract_slides(markdown)[0]

    assert len(slide.tables) == 1
    assert slide.tables[0].rows == 4
    assert slide.tables[0].columns == 2
    assert slide.bodies[0].raw_text == ""


def test_unordered_list():
    body = extract_slides("# Title\n* item 1\n* item 2\n")[0].bodies[0]

    assert len(body.list_markers) == 1
    assert body.list_markers[0].start == 0
    assert body.list_markers[0].end == 14
    assert body.list_markers[0].type == "unordered"


def test_ordered_list():
    body = extract_slides("# Title\n1. item 1\n1. item 2\n")[0].bodies[0]

    assert len(body.list_markers) == 1
    assert body.list_markers[0].start == 0
    assert body.list_markers[0].end == 14
    assert body.list_markers[0].type == "ordered"


def test_text_formats():
    runs = extract_slides("*italic*, **bold**, ~~strikethrough~~\n")[0].bodies[0].text_runs

    assert len(runs) == 3
    assert (runs[0].start, runs[0].end, runs[0].italic) == (0, 6, True)
    assert (runs[1].start, runs[1].end, runs[1].bold) == (8, 12, True)
    assert (runs[2].start, runs[2].end, runs[2].strikethrough) == (14, 27, True)


def test_emoji():
    body = extract_slides(":heart:\n")[0].bodies[0]

    assert body.raw_text == "❤️\n"


def test_inline_html_span():
    runs = extract_slides('<span style="color: #EFEFEF">hello</span>\n')[0].bodies[0].text_runs

    assert len(runs) == 1
    assert (runs[0].start, runs[0].end) == (0, 5)
    assert runs[0].foreground_color == "#EFEFEF"


def test_inline_html_subscript():
    runs = extract_slides("H<sub>2</sub>O\n")[0].bodies[0].text_runs

    assert len(runs) == 1
    assert (runs[0].start, runs[0].end) == (1, 2)
    assert runs[0].baseline_offset == "SUBSCRIPT"


def test_inline_html_superscript():
    runs = extract_slides("Hello<sup>1</sup>\n")[0].bodies[0].text_runs

    assert len(runs) == 1
    assert (runs[0].start, runs[0].end) == (5, 6)
    assert runs[0].baseline_offset == "SUPERSCRIPT"


def test_speaker_notes():
    slide = extract_slides("# Title\n<!-- Hello **world** -->\n")[0]

    assert slide.notes.raw_text == "Hello world\n"
    assert len(slide.notes.text_runs) == 1
    assert (slide.notes.text_runs[0].start, slide.notes.text_runs[0].end) == (6, 11)
    assert slide.bodies == []


def test_none_document_rejected():
    with pytest.raises(TypeError):
        extract_slides(None)


def test_bytes_document_rejected():
    with pytest.raises(TypeError):
        extract_slides(b"# Title\n")


def test_parser_failure_propagates(monkeypatch):
    pipeline = SlideExtractionPipeline()

    def broken_parse(text):
        raise RuntimeError("tokenizer exploded")

    monkeypatch.setattr(pipeline.parser.md, "parse", broken_parse)

    with pytest.raises(MarkdownParseError):
        pipeline.extract("# Title\n")


def test_extraction_is_deterministic():
    markdown = "# A\n**b** <sup>c</sup>\n\n---\n\n* d\n* e\n"
    first = [s.to_dict() for s in extract_slides(markdown)]
    second = [s.to_dict() for s in extract_slides(markdown)]

    assert first == second


def test_debug_output(capsys):
    SlideExtractionPipeline(debug=True).extract("# A\n\n---\n\n# B\n")

    out = capsys.readouterr().out
    assert "[Segmenter] Found 2 slides" in out
    assert "[Slide 2]" in out


def test_silent_by_default(capsys):
    extract_slides("# A\n")

    assert capsys.readouterr().out == ""


def test_settings_are_applied():
    settings = ExtractionSettings(column_class="col", background_class="bg")
    markdown = "![](https://example.com/bg.png){.bg}\nleft\n\n{.col}\n\nright\n"
    slide = extract_slides(markdown, settings=settings)[0]

    assert slide.background_image.url == "https://example.com/bg.png"
    assert [b.raw_text for b in slide.bodies] == ["left\n", "right\n"]


def test_slide_to_dict_uses_camel_case():
    data = extract_slides("# Title\n![](https://example.com/x.png){.background}\n**hi**\n")[0].to_dict()

    assert data["title"]["rawText"] == "Title"
    assert data["backgroundImage"] == {"url": "https://example.com/x.png"}
    assert data["bodies"][0]["textRuns"] == [{"bold": True, "start": 0, "end": 2}]
    assert "notes" not in data


def _assert_valid_text(node):
    length = len(node.raw_text)
    previous = None
    for run in node.text_runs:
        assert 0 <= run.start < run.end <= length
        if previous is not None:
            assert previous.end <= run.start
            if previous.end == run.start:
                assert previous.style != run.style
        previous = run
    for marker in node.list_markers:
        assert 0 <= marker.start < marker.end <= length


def test_offsets_are_valid_across_a_deck():
    markdown = (
        "# *Deck* :tada:\n"
        "## with **style**\n"
        "\n"
        "Intro with ***both*** and <span style=\"color: rgb(10, 20, 30)\">**color**</span>\n"
        "\n"
        "* one **b**\n"
        "  * nested ~~s~~\n"
        "* two\n"
        "\n"
        "1. first\n"
        "\n"
        "{.column}\n"
        "\n"
        "H<sub>2</sub>O and x<sup>**2**</sup> <b>raw</b>\n"
        "\n"
        "Col | Val\n"
        "---|---\n"
        "*a* | <sup>b</sup>\n"
        "\n"
        "<!-- notes with *emphasis* -->\n"
        "\n"
        "---\n"
        "\n"
        "plain :heart: text\n"
    )
    slides = extract_slides(markdown)
    assert len(slides) == 2

    for slide in slides:
        nodes = [slide.title, slide.subtitle, slide.notes, *slide.bodies]
        nodes += [cell for table in slide.tables for row in table.cells for cell in row]
        for node in nodes:
            if node is not None:
                _assert_valid_text(node)
