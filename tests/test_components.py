"""
Callout, details and steps containers, badges and abbreviations.
"""

from engine.markdown.pipeline import RenderContext
from engine.markdown.postprocessors import AbbreviationPostprocessor
from engine.markdown.preprocessors import AbbreviationPreprocessor, BadgePreprocessor
from engine.markdown.preprocessors.accordion import parse_attributes, parse_details_header
from engine.markdown.preprocessors.badges import badge_type
from engine.markdown.preprocessors.callouts import callout_title
from engine.markdown.support.callouts import CALLOUT_STYLES
from engine.markdown.support.regions import CALLOUT_KINDS


class TestCallouts:
    """:::note and friends"""

    def test_default_title_and_icon(self, renderer):
        html = renderer.render(":::note\nRemember this.\n:::\n")

        assert 'class="folio-callout folio-callout--note"' in html
        assert "<span>Note</span>" in html
        assert '<i class="ph ph-info" aria-hidden="true"></i>' in html
        assert "<p>Remember this.</p>" in html
        assert ":::" not in html

    def test_custom_title(self, renderer):
        html = renderer.render(":::warning Before you upgrade\nBack up first.\n:::\n")

        assert "folio-callout--warning" in html
        assert "<span>Before you upgrade</span>" in html

    def test_every_kind_has_a_style(self):
        assert set(CALLOUT_KINDS) == set(CALLOUT_STYLES)

    def test_code_inside_is_processed_once(self, renderer):
        html = renderer.render(":::tip\n```js {1}\nx // [!code ++]\n```\n:::\n")

        assert html.count('class="folio-code-block"') == 1
        assert html.count("folio-code-line--diff-add") == 1
        assert "folio-code-line--highlighted" in html
        assert "[!code" not in html

    def test_empty_callout(self, renderer):
        html = renderer.render(":::danger\n:::\n")

        assert "folio-callout--danger" in html
        assert "<span>Danger</span>" in html

    def test_unknown_kind_stays_literal(self, renderer):
        html = renderer.render(":::custom\ntext\n:::\n")

        assert "folio-callout" not in html
        assert ":::custom" in html

    def test_container_inside_fence_is_code(self, renderer):
        html = renderer.render("```md\n:::note\nx\n:::\n```\n")

        assert "folio-callout" not in html
        assert ":::note" in html

    def test_callout_inside_tabs(self, renderer):
        html = renderer.render(":::tabs\n== A\n:::note\nInside\n:::\n:::\n")

        assert html.count('class="folio-tabs"') == 1
        assert html.index("folio-tabs") < html.index("folio-callout--note")

    def test_tabs_inside_callout(self, renderer):
        html = renderer.render(":::note\n:::tabs\n== A\nx\n:::\n:::\n")

        assert html.index("folio-callout--note") < html.index('class="folio-tabs"')

    def test_title_parsing(self):
        assert callout_title(":::tip") == ""
        assert callout_title(":::tip  Faster builds ") == "Faster builds"


class TestAccordion:
    """:::details"""

    def test_title_and_open(self, renderer):
        html = renderer.render(':::details{title="Advanced options" open}\nHidden text.\n:::\n')

        assert '<details class="folio-accordion" open>' in html
        assert '<span class="folio-accordion__title">Advanced options</span>' in html
        assert "ph-caret-right" in html
        assert "<p>Hidden text.</p>" in html

    def test_defaults(self, renderer):
        html = renderer.render(":::details\nx\n:::\n")

        assert '<details class="folio-accordion">' in html
        assert '<span class="folio-accordion__title">Details</span>' in html

    def test_title_is_escaped(self, renderer):
        html = renderer.render(':::details{title="<b>x</b>"}\ny\n:::\n')

        assert "<b>x</b>" not in html
        assert "&lt;b&gt;x&lt;/b&gt;" in html

    def test_header_forms(self):
        assert parse_details_header(":::details") == ("Details", False)
        assert parse_details_header(":::details Click me") == ("Click me", False)
        assert parse_details_header(':::details{title="Setup" open}') == ("Setup", True)
        assert parse_details_header(":::details{open}") == ("Details", True)

    def test_attributes(self):
        assert parse_attributes('title="Setup" open') == {"title": "Setup", "open": True}
        assert parse_attributes("") == {}


class TestBadges:
    """:badge[text]{type=...}"""

    def test_typed_badge(self, renderer):
        html = renderer.render('Status :badge[Beta]{type="warning"}\n')

        assert '<p>Status <span class="folio-badge folio-badge--warning">Beta</span></p>' in html

    def test_default_and_unknown_types(self):
        assert badge_type(None) == "default"
        assert badge_type('type="danger"') == "danger"
        assert badge_type("type=“success”") == "success"
        assert badge_type('type="loud"') == "default"

    def test_text_is_escaped(self, renderer):
        html = renderer.render(":badge[<b>]\n")

        assert '<span class="folio-badge folio-badge--default">&lt;b&gt;</span>' in html

    def test_code_is_left_alone(self, context):
        text = "Use `:badge[New]` inline.\n\n```md\n:badge[New]\n```\n"

        assert BadgePreprocessor().preprocess(text, context) == text


class TestAbbreviations:
    """*[TERM]: definition"""

    def test_terms_are_wrapped(self, renderer):
        html = renderer.render("*[HTML]: Hyper Text Markup Language\n\nWrite HTML, not XHTML or HTML5.\n")

        assert html.count('<abbr class="folio-abbr" title="Hyper Text Markup Language">HTML</abbr>') == 1
        assert "*[HTML]" not in html

    def test_longest_term_wins(self, renderer):
        text = "*[API]: Interface\n*[REST API]: Web interface\n\nCall the REST API.\n"
        html = renderer.render(text)

        assert '<abbr class="folio-abbr" title="Web interface">REST API</abbr>' in html
        assert 'title="Interface"' not in html

    def test_definitions_in_fences_are_code(self, context):
        text = "```md\n*[X]: y\n```\n"

        assert AbbreviationPreprocessor().preprocess(text, context) == text
        assert "abbreviations" not in context

    def test_code_is_not_wrapped(self):
        context = RenderContext(abbreviations={"CSS": "Cascading Style Sheets"})
        html = "<p>CSS</p><pre><code>CSS</code></pre><p><code>CSS</code></p>"

        result = AbbreviationPostprocessor().postprocess(html, context)

        assert result.count("<abbr") == 1
        assert result.startswith('<p><abbr class="folio-abbr" title="Cascading Style Sheets">CSS</abbr></p>')

    def test_nothing_collected(self):
        html = "<p>HTML</p>"

        assert AbbreviationPostprocessor().postprocess(html, RenderContext()) == html


class TestSteps:
    """:::steps with ### headings"""

    STEPS = ":::steps\n### Install\nRun the installer.\n### Configure\nEdit the file.\n:::\n"

    def test_numbered_steps(self, renderer):
        html = renderer.render(self.STEPS)

        assert html.count('<div class="folio-steps">') == 1
        assert '<div class="folio-step__marker" aria-hidden="true">1</div>' in html
        assert '<div class="folio-step__marker" aria-hidden="true">2</div>' in html
        assert '<div class="folio-step__title">Install</div>' in html
        assert "<p>Run the installer.</p>" in html
        assert html.count("folio-step--last") == 1
        assert html.index("Configure") > html.index("folio-step--last") > html.index("Install")

    def test_step_titles_are_not_page_headings(self, renderer):
        context = {}
        html = renderer.render(self.STEPS, context)

        assert "<h3" not in html
        assert context["toc"] == []

    def test_headings_inside_fences_do_not_split(self, renderer):
        html = renderer.render(":::steps\n### One\n```md\n### not a step\n```\n:::\n")

        assert html.count("folio-step__title") == 1
        assert "### not a step" in html

    def test_without_steps(self, renderer):
        html = renderer.render("Before\n\n:::steps\nNo headings here.\n:::\n")

        assert "folio-steps" not in html
        assert "<p>Before</p>" in html
