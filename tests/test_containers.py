"""
Tabs and code-group parsing and rendering.
"""

import logging
import re

from engine.markdown.support.code_group import extract_blocks, parse_code_group
from engine.markdown.support.icons import LANGUAGE, PHOSPHOR
from engine.markdown.support.tabs import (
    detect_code_language,
    parse_tabs,
    split_sections,
)

RUBY_JS_TABS = (
    ":::tabs\n"
    "== Ruby\n"
    "```ruby\n"
    "puts 1\n"
    "```\n"
    "== JS\n"
    "```js\n"
    "console.log(1)\n"
    "```\n"
    ":::\n"
)

CODE_GROUP = (
    ":::code-group\n"
    "```js [config.js]\n"
    "export default {}\n"
    "```\n"
    "```ts [config.ts]\n"
    "export default {} // [!code focus]\n"
    "```\n"
    ":::\n"
)


def echo(markdown):
    return f"<rendered>{markdown}</rendered>"


def container_body(text):
    return text.split("\n", 1)[1].rsplit(":::", 1)[0]


def count_code_blocks(html):
    return len(re.findall(r'class="folio-code-block[" ]', html))


class TestTabsParser:
    """Splitting == sections and picking icons"""

    def test_sections_with_language_icons(self):
        panels = parse_tabs(container_body(RUBY_JS_TABS), echo)

        assert [panel.name for panel in panels] == ["Ruby", "JS"]
        assert [panel.icon for panel in panels] == ["ruby", "js"]
        assert all(panel.icon_source == LANGUAGE for panel in panels)
        assert [panel.is_first for panel in panels] == [True, False]
        assert panels[0].html == "<rendered>```ruby\nputs 1\n```</rendered>"

    def test_manual_icon_prefix(self):
        panels = parse_tabs("== :package: npm\n```bash\nnpm i\n```\n", echo)

        assert panels[0].name == "npm"
        assert panels[0].icon == "package"
        assert panels[0].icon_source == PHOSPHOR

    def test_mixed_content_has_no_icon(self):
        panels = parse_tabs("== Setup\nRun this:\n```bash\nmake\n```\n", echo)

        assert panels[0].icon is None

    def test_header_lines_inside_fences_do_not_split(self):
        sections = split_sections("== One\n```md\n== not a tab\n```\n== Two\nx\n")

        assert [section.name for section in sections] == ["One", "Two"]

    def test_no_sections(self):
        assert parse_tabs("just text\n", echo) == []

    def test_nameless_sections_are_dropped(self):
        panels = parse_tabs("==  \nx\n== Real\ny\n", echo)

        assert [panel.name for panel in panels] == ["Real"]
        assert panels[0].is_first

    def test_detect_code_language(self):
        assert detect_code_language("```Ruby\nputs 1\n```") == "ruby"
        assert detect_code_language("```\nplain\n```") is None
        assert detect_code_language("```js\na\n```\n\n```py\nb\n```") is None
        assert detect_code_language("text") is None


class TestCodeGroupParser:
    """Labelled fences inside :::code-group"""

    def test_blocks(self):
        blocks = extract_blocks(container_body(CODE_GROUP))

        assert [block.label for block in blocks] == ["config.js", "config.ts"]
        assert [block.lang for block in blocks] == ["js", "ts"]
        assert blocks[1].code_text == "export default {}"
        assert blocks[0].markdown == "```js\nexport default {}\n```\n"

    def test_panels_keep_options_but_drop_label(self):
        blocks = extract_blocks("```py [app.py]:line-numbers {2}\na\nb\n```\n")

        assert blocks[0].markdown == "```py:line-numbers {2}\na\nb\n```\n"

    def test_first_panel_is_selected(self):
        panels = parse_code_group(container_body(CODE_GROUP), echo)

        assert [panel.is_first for panel in panels] == [True, False]

    def test_unlabeled_fence_warns_and_renders(self, caplog):
        with caplog.at_level(logging.WARNING, logger="engine.markdown.support.code_group"):
            panels = parse_code_group("```js\nx\n```\n", echo)

        assert panels[0].label == ""
        assert "no [label]" in caplog.text

    def test_language_icons(self):
        blocks = extract_blocks(container_body(CODE_GROUP))

        assert [block.icon for block in blocks] == ["js", "ts"]
        assert all(block.icon_source == LANGUAGE for block in blocks)

    def test_manual_icon_label(self):
        (block,) = extract_blocks("```bash [:package: npm]\nnpm i\n```\n")

        assert block.label == "npm"
        assert block.icon == "package"
        assert block.icon_source == PHOSPHOR

    def test_annotation_markers_are_dropped(self):
        (block,) = extract_blocks("```py [app.py]\nconnect(host)  # (1)\nrun()\n```\n")

        assert block.code_text == "connect(host)\nrun()"
        assert block.markdown == "```py\nconnect(host)\nrun()\n```\n"

    def test_empty_group(self):
        assert parse_code_group("no fences here\n", echo) == []


class TestTabsRendering:
    """:::tabs through the full pipeline"""

    def test_ruby_and_js_tabs(self, renderer):
        html = renderer.render(RUBY_JS_TABS)

        assert html.count('class="folio-tabs"') == 1
        assert html.count('role="tab"') == 2
        assert html.count('aria-selected="true"') == 1
        assert "devicon-ruby-plain" in html
        assert "devicon-javascript-plain" in html
        assert '<span class="folio-tabs__label">Ruby</span>' in html

    def test_panels_hold_processed_code_blocks(self, renderer):
        html = renderer.render(RUBY_JS_TABS)

        assert count_code_blocks(html) == 2
        assert "```" not in html

    def test_markers_inside_tabs_are_processed_once(self, renderer):
        text = ":::tabs\n== A\n```js\nx // [!code ++]\n```\n:::\n"
        html = renderer.render(text)

        assert "[!code" not in html
        assert html.count("folio-code-line--diff-add") == 1

    def test_empty_tabs_render_nothing(self, renderer):
        html = renderer.render("Before\n\n:::tabs\n:::\n\nAfter\n")

        assert "folio-tabs" not in html
        assert "<p>Before</p>" in html
        assert "<p>After</p>" in html

    def test_unterminated_tabs_stay_literal(self, renderer):
        html = renderer.render(":::tabs\n== A\ntext\n")

        assert "folio-tabs" not in html
        assert ":::tabs" in html

    def test_ids_are_deterministic(self, renderer):
        text = RUBY_JS_TABS + "\n" + RUBY_JS_TABS

        first = renderer.render(text)
        second = renderer.render(text)

        assert first == second
        assert 'id="tabs-1"' in first
        assert 'id="tabs-2"' in first


class TestCodeGroupRendering:
    """:::code-group through the full pipeline"""

    def test_tablist(self, renderer):
        html = renderer.render(CODE_GROUP)

        assert html.count('class="folio-code-group"') == 1
        assert html.count('role="tab"') == 2
        assert html.count('role="tabpanel"') == 2
        assert html.count('aria-selected="true"') == 1
        assert 'aria-hidden="true"' in html
        assert ">config.js</button>" in html

    def test_copy_text_per_panel(self, renderer):
        html = renderer.render(CODE_GROUP)

        copy_button = re.search(r'class="folio-code-group__copy" data-code="([^"]*)"', html)
        assert copy_button.group(1) == "export default {}"
        assert html.count('data-code="export default {}"') >= 3

    def test_tab_icons(self, renderer):
        html = renderer.render(CODE_GROUP)

        assert "devicon-javascript-plain" in html
        assert "devicon-typescript-plain" in html

    def test_manual_tab_icon(self, renderer):
        html = renderer.render(":::code-group\n```bash [:package: npm]\nnpm i\n```\n:::\n")

        assert '<i class="ph ph-package" aria-hidden="true"></i>npm</button>' in html

    def test_annotated_panel(self, renderer):
        html = renderer.render(":::code-group\n```py [app.py]\nconnect()  # (1)\n```\n:::\n")

        assert "(1)" not in html
        assert 'data-code="connect()"' in html

    def test_panel_markers(self, renderer):
        html = renderer.render(CODE_GROUP)

        assert "folio-code-line--focus" in html
        assert "[!code" not in html

    def test_code_group_inside_tabs(self, renderer):
        text = ":::tabs\n== Config\n" + CODE_GROUP + "== Other\nText\n:::\n"
        html = renderer.render(text)

        assert html.count('class="folio-tabs"') == 1
        assert html.count('class="folio-code-group"') == 1
        assert count_code_blocks(html) == 2
