"""
Tag-balancing line wrapper.
"""

import re
from collections import Counter

import pytest

from engine.markdown.support.highlight import highlight_code
from engine.markdown.support.line_wrapper import (
    LINE_CLASS,
    LineFeatures,
    line_classes,
    split_lines,
    wrap_lines,
)
from engine.markdown.support.markers import ADDITION, DELETION

TAG = re.compile(r"<(/?)([a-zA-Z][\w-]*)[^>]*?(/?)>")


def visible_text(html):
    return re.sub(r"<[^>]+>", "", html)


def is_balanced(fragment):
    opened = Counter()
    closed = Counter()
    for closing, name, self_closing in TAG.findall(fragment):
        if self_closing or name in ("br", "img"):
            continue
        (closed if closing else opened)[name] += 1
    return opened == closed


class TestSplitLines:
    """Splitting highlighted HTML into per-line fragments"""

    def test_simple_tokens(self):
        html = '<span class="k">if</span> x\n<span>y</span>'
        lines = split_lines(html)

        assert lines == ['<span class="k">if</span> x', "<span>y</span>"]
        assert "\n".join(visible_text(line) for line in lines) == "if x\ny"

    def test_token_spanning_lines_is_closed_and_reopened(self):
        html = '<span class="s">"""a\nb"""</span>'

        assert split_lines(html) == [
            '<span class="s">"""a</span>',
            '<span class="s">b"""</span>',
        ]

    def test_nested_tags_across_three_lines(self):
        html = '<span class="a"><span class="b">1\n2\n3</span></span>'

        assert split_lines(html) == [
            '<span class="a"><span class="b">1</span></span>',
            '<span class="a"><span class="b">2</span></span>',
            '<span class="a"><span class="b">3</span></span>',
        ]

    def test_empty_input_gives_one_line(self):
        assert split_lines("") == [""]

    def test_trailing_newline_is_not_a_line(self):
        assert split_lines("a\n") == ["a"]

    def test_blank_lines_are_kept(self):
        assert split_lines("a\n\nb") == ["a", "", "b"]

    def test_void_elements_are_not_reopened(self):
        assert split_lines("a<br>b\nc") == ["a<br>b", "c"]

    def test_self_closing_tags(self):
        assert split_lines('a<img src="x"/>\nb') == ['a<img src="x"/>', "b"]

    def test_markup_after_final_newline_stays_on_last_line(self):
        assert split_lines('<span class="c">a\n</span>') == [
            '<span class="c">a</span><span class="c"></span>'
        ]


class TestLineBalance:
    """Every line is balanced and the visible text is preserved"""

    SAMPLES = [
        '<span class="k">def</span> <span class="nf">f</span>():\n    <span class="k">return</span> 1',
        '<span class="s">"""doc\nstring\n"""</span>\nx',
        '<span class="a"><span class="b">x\n</span>y\n</span>z',
        "plain\ntext\n\n",
        "",
    ]

    @pytest.mark.parametrize("html", SAMPLES)
    def test_lines_are_balanced(self, html):
        for line in split_lines(html):
            assert is_balanced(line), line

    @pytest.mark.parametrize("html", SAMPLES)
    def test_visible_text_round_trips(self, html):
        joined = "\n".join(visible_text(line) for line in split_lines(html))

        assert joined == visible_text(html).removesuffix("\n")

    @pytest.mark.parametrize(
        "code, language",
        [
            ('def f():\n    """Doc\n    string."""\n    return 1', "python"),
            ("/* a\n * b\n */\nconst x = `t\n${y}`;", "javascript"),
            ("puts <<~EOS\n  hi\nEOS", "ruby"),
        ],
    )
    def test_real_highlighter_output(self, code, language):
        highlighted = highlight_code(code, language)
        lines = split_lines(highlighted)

        assert len(lines) == code.count("\n") + 1
        assert all(is_balanced(line) for line in lines)


class TestLineClasses:
    """Per-line CSS classes"""

    def test_fixed_class_order(self):
        features = LineFeatures(
            highlights={1},
            diff_lines={1: ADDITION},
            focus_lines={1},
            error_lines={1},
            warning_lines={1},
        )

        assert line_classes(1, features) == [
            LINE_CLASS,
            f"{LINE_CLASS}--highlighted",
            f"{LINE_CLASS}--diff-add",
            f"{LINE_CLASS}--focus",
            f"{LINE_CLASS}--error",
            f"{LINE_CLASS}--warning",
        ]

    def test_diff_and_focus_on_same_line(self):
        features = LineFeatures(diff_lines={2: DELETION}, focus_lines={2})

        assert line_classes(2, features) == [
            LINE_CLASS,
            f"{LINE_CLASS}--diff-remove",
            f"{LINE_CLASS}--focus",
        ]

    def test_highlights_use_display_line(self):
        features = LineFeatures(highlights={11}, diff_lines={2: ADDITION}, start_line=10)

        assert f"{LINE_CLASS}--highlighted" in line_classes(2, features)
        assert f"{LINE_CLASS}--highlighted" not in line_classes(1, features)
        assert f"{LINE_CLASS}--diff-add" in line_classes(2, features)

    def test_plain_line(self):
        assert line_classes(1, LineFeatures()) == [LINE_CLASS]


class TestWrapLines:
    """Wrapping fragments in classed spans"""

    def test_highlighted_second_line(self):
        wrapped = wrap_lines("one\ntwo\nthree", LineFeatures(highlights={2}))

        assert wrapped.split("\n") == [
            f'<span class="{LINE_CLASS}">one</span>',
            f'<span class="{LINE_CLASS} {LINE_CLASS}--highlighted">two</span>',
            f'<span class="{LINE_CLASS}">three</span>',
        ]

    def test_annotation_button(self):
        wrapped = wrap_lines("connect()", LineFeatures(annotation_markers={1: 3}))

        assert 'data-annotation="3"' in wrapped
        assert wrapped.startswith(f'<span class="{LINE_CLASS}">connect()<button')

    def test_without_features(self):
        assert wrap_lines("") == f'<span class="{LINE_CLASS}"></span>'
