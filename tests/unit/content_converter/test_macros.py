"""Unit tests for content_converter.macros package."""

import pytest

from confluence_md.content_converter.macros.admonitions import panel_label
from confluence_md.content_converter.markdown_converter import MarkdownConverter
from confluence_md.models import ConversionOptions


def macro(name: str, body: str = "", **params) -> str:
    """Build a structured macro element."""
    parameters = "".join(
        f'<ac:parameter ac:name="{key}">{value}</ac:parameter>'
        for key, value in params.items()
    )
    return f'<ac:structured-macro ac:name="{name}">{parameters}{body}</ac:structured-macro>'


def rich(content: str) -> str:
    return f"<ac:rich-text-body>{content}</ac:rich-text-body>"


@pytest.fixture
def convert():
    converter = MarkdownConverter()
    return lambda xhtml: converter.convert(xhtml).markdown


class TestAdmonitions:
    """Test cases for info, note, tip, warning and panel macros."""

    @pytest.mark.parametrize("name,label", [
        ("info", "Info"),
        ("note", "Note"),
        ("tip", "Tip"),
        ("warning", "Warning"),
    ])
    def test_admonition_label(self, convert, name, label):
        """Each admonition macro is a labelled block quote."""
        xhtml = macro(name, rich("<p>This is a note block.</p>"))

        assert convert(xhtml) == f"> **{label}:** This is a note block.\n"

    def test_admonition_with_title(self, convert):
        """A title goes into the label line, the body follows."""
        xhtml = macro("warning", rich("<p>Body</p>"), title="Heads up")

        assert convert(xhtml) == "> **Warning: Heads up**\n>\n> Body\n"

    def test_multi_paragraph_body(self, convert):
        """Every body line stays inside the quote."""
        xhtml = macro("note", rich("<p>one</p><p>two</p>"))

        assert convert(xhtml) == "> **Note:** one\n>\n> two\n"

    def test_body_starting_with_list(self, convert):
        """A list body starts below the label so it stays a list."""
        xhtml = macro("tip", rich("<ul><li>a</li><li>b</li></ul>"))

        assert convert(xhtml) == "> **Tip:**\n>\n> - a\n> - b\n"

    def test_legacy_admonition_element(self, convert):
        """Old ac:note elements render like the note macro."""
        xhtml = "<ac:note><ac:rich-text-body><p>Old</p></ac:rich-text-body></ac:note>"

        assert convert(xhtml) == "> **Note:** Old\n"

    def test_panel_classified_by_colour(self, convert):
        """A panel with a known background colour gets its label."""
        xhtml = macro("panel", rich("<p>Mind the gap</p>"), bgColor="#FFFAE6")

        assert convert(xhtml) == "> **Warning:** Mind the gap\n"

    def test_plain_panel(self, convert):
        """A panel without hints is labelled Panel."""
        xhtml = macro("panel", rich("<p>Body</p>"), title="Facts")

        assert convert(xhtml) == "> **Panel: Facts**\n>\n> Body\n"

    @pytest.mark.parametrize("parameters,label", [
        ({"panelIcon": ":info:"}, "Info"),
        ({"icon": "warning"}, "Warning"),
        ({"borderColor": "#E3FCEF"}, "Tip"),
        ({"panelIcon": ":unknown:", "bgColor": "#ffebe6"}, "Error"),
        ({"bgColor": "#123456"}, "Panel"),
    ])
    def test_panel_label(self, parameters, label):
        """Icons win over colours; unknown hints fall back to Panel."""
        assert panel_label(parameters) == label


class TestCodeMacro:
    """Test cases for code macros."""

    def test_code_with_language(self, convert):
        """The language parameter becomes the fence info string."""
        xhtml = macro("code", '<ac:plain-text-body><![CDATA[print("hi")]]></ac:plain-text-body>', language="python")

        assert convert(xhtml) == '```python\nprint("hi")\n```\n'

    def test_code_without_language(self, convert):
        """Without a language the fence has no info string."""
        xhtml = macro("noformat", "<ac:plain-text-body><![CDATA[raw <text>]]></ac:plain-text-body>")

        assert convert(xhtml) == "```\nraw <text>\n```\n"

    def test_code_containing_fence(self, convert):
        """Code containing ``` gets a longer fence."""
        xhtml = macro("code", "<ac:plain-text-body><![CDATA[```\nx\n```]]></ac:plain-text-body>")

        assert convert(xhtml) == "````\n```\nx\n```\n````\n"

    def test_code_keeps_entity_text_literal(self, convert):
        """Entity references inside a code body are source text, not markup."""
        xhtml = macro("code", '<ac:plain-text-body><![CDATA[html = "&copy; &nbsp;"]]></ac:plain-text-body>')

        assert convert(xhtml) == '```\nhtml = "&copy; &nbsp;"\n```\n'

    def test_code_in_list_item(self, convert):
        """Code inside a list item is indented with the item."""
        xhtml = (
            "<ul><li>Run:"
            + macro("code", "<ac:plain-text-body><![CDATA[make\n  test]]></ac:plain-text-body>")
            + "</li></ul>"
        )

        assert convert(xhtml) == "- Run:\n  ```\n  make\n    test\n  ```\n"


class TestInlineMacros:
    """Test cases for status, anchor and emoji macros."""

    def test_status_with_unknown_colour(self, convert):
        """Status renders its title; the colour is ignored."""
        xhtml = "<p>State: " + macro("status", title="new", colour="Purplish") + "</p>"

        assert convert(xhtml) == "State: [new]\n"

    def test_status_without_title(self, convert):
        """Without a title the colour name is shown."""
        assert convert("<p>" + macro("status", colour="Green") + "</p>") == "[Green]\n"

    def test_anchor_dropped_by_default(self, convert):
        """Anchors are not rendered unless requested."""
        xhtml = '<ac:structured-macro ac:name="anchor"><ac:parameter ac:name="">top</ac:parameter></ac:structured-macro><p>x</p>'

        assert convert(xhtml) == "x\n"

    def test_anchor_preserved(self):
        """With preserve_anchors the anchor becomes an HTML anchor."""
        xhtml = '<p><ac:structured-macro ac:name="anchor"><ac:parameter ac:name="">top</ac:parameter></ac:structured-macro>Text</p>'

        result = MarkdownConverter(ConversionOptions(preserve_anchors=True)).convert(xhtml)

        assert result.markdown == '<a id="top"></a>Text\n'

    def test_emoji_macro_by_id(self, convert):
        """The emoji macro decodes its emoji-id parameter."""
        xhtml = "<p>" + macro("emoji", **{"emoji-id": "1f600", "shortname": ":grinning:"}) + "</p>"

        assert convert(xhtml) == "\U0001F600\n"

    def test_emoji_macro_by_shortcode(self, convert):
        """Without an id the shortcode parameter is resolved."""
        xhtml = "<p>" + macro("emoji", shortname=":thumbsup:") + "</p>"

        assert convert(xhtml) == "\U0001F44D\n"


class TestBlockMacros:
    """Test cases for expand, task list, layout, excerpt, jira and ADF."""

    def test_expand_uses_title(self, convert):
        """Expand renders its title in bold above the body."""
        xhtml = macro("expand", rich("<p>Hidden</p>"), title="More")

        assert convert(xhtml) == "**More**\n\nHidden\n"

    def test_expand_default_title(self, convert):
        """Expand without a title is labelled Details."""
        assert convert(macro("expand", rich("<p>Hidden</p>"))) == "**Details**\n\nHidden\n"

    def test_task_list(self, convert):
        """Tasks become checklist items, completed ones checked."""
        xhtml = (
            "<ac:task-list>"
            "<ac:task><ac:task-id>1</ac:task-id><ac:task-status>incomplete</ac:task-status>"
            "<ac:task-body>Task 1</ac:task-body></ac:task>"
            "<ac:task><ac:task-id>2</ac:task-id><ac:task-status>complete</ac:task-status>"
            "<ac:task-body>Task 2</ac:task-body></ac:task>"
            "</ac:task-list>"
        )

        assert convert(xhtml) == "- [ ] Task 1\n- [x] Task 2\n"

    def test_layout_is_linearised(self, convert):
        """Layout cells follow each other in document order."""
        xhtml = (
            "<ac:layout><ac:layout-section ac:type=\"two_equal\">"
            "<ac:layout-cell><p>Left</p></ac:layout-cell>"
            "<ac:layout-cell><p>Right</p></ac:layout-cell>"
            "</ac:layout-section></ac:layout>"
        )

        assert convert(xhtml) == "Left\n\nRight\n"

    def test_hidden_excerpt_is_dropped(self, convert):
        """A hidden excerpt renders nothing."""
        xhtml = macro("excerpt", rich("<p>Secret</p>"), hidden="true") + "<p>Visible</p>"

        assert convert(xhtml) == "Visible\n"

    def test_excerpt_without_panel(self, convert):
        """nopanel renders the plain body."""
        assert convert(macro("excerpt", rich("<p>Body</p>"), nopanel="true")) == "Body\n"

    def test_excerpt_panel(self, convert):
        """By default an excerpt is a labelled quote."""
        assert convert(macro("excerpt", rich("<p>Body</p>"))) == "> **Excerpt:** Body\n"

    def test_jira_issue_link(self, convert):
        """A single issue links to the issue on its server."""
        xhtml = "<p>" + macro(
            "jira",
            key="ABC-123",
            server="https://jira.example.com/",
            summary="Fix the login flow",
        ) + "</p>"

        assert convert(xhtml) == "[ABC-123](https://jira.example.com/browse/ABC-123): Fix the login flow\n"

    def test_jira_issue_without_server(self, convert):
        """Without a server only the key is shown."""
        assert convert("<p>" + macro("jira", key="ABC-123") + "</p>") == "ABC-123\n"

    def test_jira_query_notice(self, convert):
        """JQL queries leave a notice since their content is dynamic."""
        xhtml = macro("jira", jql="project = ABC")

        assert convert(xhtml) == "> _Jira issues macro (JQL: project = ABC). Dynamic content not exported._\n"

    def test_adf_extension_prefers_fallback(self, convert):
        """Only the fallback of an ADF extension is rendered."""
        xhtml = (
            "<ac:adf-extension>"
            '<ac:adf-node type="panel"><ac:adf-attribute key="panel-type">note</ac:adf-attribute>'
            "<ac:adf-content><p>Inside</p></ac:adf-content></ac:adf-node>"
            "<ac:adf-fallback><p>Fallback</p></ac:adf-fallback>"
            "</ac:adf-extension>"
        )

        assert convert(xhtml) == "Fallback\n"

    def test_adf_extension_without_fallback(self, convert):
        """Without a fallback the node content is rendered, attributes dropped."""
        xhtml = (
            "<ac:adf-extension>"
            '<ac:adf-node type="panel"><ac:adf-attribute key="panel-type">note</ac:adf-attribute>'
            "<ac:adf-content><p>Inside</p></ac:adf-content></ac:adf-node>"
            "</ac:adf-extension>"
        )

        assert convert(xhtml) == "Inside\n"


class TestDecisionMacros:
    """Test cases for decision, decision-list and decisionreport."""

    def test_decision_with_metadata(self, convert):
        """Set metadata is summarised after the title, the body follows."""
        xhtml = macro("decision", rich("<p>We chose it.</p>"), title="Use Postgres", status="Decided", owner="Ana")

        assert convert(xhtml) == "**Decision:** Use Postgres (Status: Decided; Owner: Ana)\n\nWe chose it.\n"

    def test_untitled_decision_with_user_owner(self, convert):
        """An owner given as a user reference is shown as a mention."""
        xhtml = macro("decision", '<ac:parameter ac:name="owner"><ri:user ri:account-id="42"/></ac:parameter>')

        assert convert(xhtml) == "**Decision:** Untitled decision (Owner: @user:42)\n"

    def test_decision_list(self, convert):
        """Each decision becomes a list item with its body indented."""
        decisions = (
            macro("decision", rich("<p>Because</p>"), title="A", status="Decided")
            + macro("decision", title="B")
        )

        result = convert(macro("decision-list", rich(decisions)))

        assert result == "- **Decision:** A (Status: Decided)\n\n  Because\n- **Decision:** B\n"

    def test_decision_list_without_decisions(self, convert):
        """A list without decision macros renders its body."""
        assert convert(macro("decision-list", rich("<p>Nothing yet</p>"))) == "Nothing yet\n"

    def test_decision_report_notice(self, convert):
        xhtml = macro("decisionreport", cql="space = DEV")

        assert convert(xhtml) == "> _Decision report macro (CQL: space = DEV). Dynamic content not exported._\n"

    def test_adf_decision_list_preferred_over_fallback(self, convert):
        """Without a title attribute the first paragraph is the title."""
        xhtml = (
            "<ac:adf-extension>"
            '<ac:adf-node type="decision-list">'
            '<ac:adf-node type="decision-item">'
            '<ac:adf-attribute key="state">DECIDED</ac:adf-attribute>'
            "<ac:adf-content><p>Ship it</p><p>After review</p></ac:adf-content>"
            "</ac:adf-node>"
            "</ac:adf-node>"
            "<ac:adf-fallback><p>Fallback</p></ac:adf-fallback>"
            "</ac:adf-extension>"
        )

        assert convert(xhtml) == "- **Decision:** Ship it (Status: DECIDED)\n\n  After review\n"

    def test_adf_decision_list_without_items_uses_fallback(self, convert):
        """Empty decision items are skipped, leaving the fallback."""
        xhtml = (
            "<ac:adf-extension>"
            '<ac:adf-node type="decision-list"><ac:adf-node type="decision-item"/></ac:adf-node>'
            "<ac:adf-fallback><p>Fallback</p></ac:adf-fallback>"
            "</ac:adf-extension>"
        )

        assert convert(xhtml) == "Fallback\n"


class TestUnknownMacros:
    """Test cases for the default macro rendering."""

    def test_unknown_macro_keeps_title_and_body(self):
        """Unknown macros keep their name, title and body."""
        xhtml = macro("mystery", rich("<p>Keep me</p>"), title="Box")

        result = MarkdownConverter().convert(xhtml)

        assert result.markdown == "_[macro: mystery]_ Box\n\nKeep me\n"
        assert result.warnings == ("Unsupported macro 'mystery' rendered as plain content",)

    def test_unknown_macro_with_plain_body(self, convert):
        """A plain text body is kept verbatim."""
        xhtml = macro("widget", "<ac:plain-text-body><![CDATA[a *b*]]></ac:plain-text-body>")

        assert convert(xhtml) == "_[macro: widget]_\n\na *b*\n"

    def test_unknown_inline_macro(self, convert):
        """An unknown macro inside a paragraph stays inline."""
        xhtml = "<p>See " + macro("mention", rich("Bob")) + " now</p>"

        assert convert(xhtml) == "See _[macro: mention]_ Bob now\n"

    def test_warning_recorded_once_per_macro(self):
        """Repeated unknown macros produce a single warning."""
        xhtml = macro("mystery") + macro("mystery") + macro("other")

        result = MarkdownConverter().convert(xhtml)

        assert len(result.warnings) == 2
