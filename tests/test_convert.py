"""Tests for news2md.convert module."""

from news2md.convert import continuation_hint, html_to_markdown, _readability_extract


class TestHtmlToMarkdown:
    def test_unwrapped_divs_keep_paragraphs_apart(self):
        html = "<div><p>Hello <b>world</b></p><div>Bye</div></div>"
        assert html_to_markdown(html) == "Hello **world**\n\nBye"

    def test_empty_html(self):
        assert html_to_markdown("") == ""
        assert html_to_markdown("   ") == ""

    def test_links_flattened_by_default(self):
        html = '<p>Visit <a href="https://example.com">Example</a> today</p>'
        assert html_to_markdown(html) == "Visit Example today"

    def test_links_preserved(self):
        html = '<p>Visit <a href="https://example.com" class="btn">Example</a> today</p>'
        result = html_to_markdown(html, preserve_links=True)
        assert result == "Visit [Example](https://example.com) today"

    def test_strips_scripts_and_styles(self):
        html = "<p>Kept</p><script>var x = 1;</script><style>p {}</style><noscript>JS</noscript>"
        assert html_to_markdown(html) == "Kept"

    def test_comments_dropped(self):
        assert html_to_markdown("<p>a<!-- secret -->b</p>") == "ab"

    def test_heading_and_list_stay_contiguous(self):
        html = "<section><h2>Title</h2><div><ul><li>One</li><li>Two</li></ul></div></section>"
        result = html_to_markdown(html)
        assert "## Title" in result
        assert "- One\n- Two" in result
        assert "\n\n-" not in result

    def test_image_kept_without_extra_attributes(self):
        html = '<figure><img src="a.png" alt="Pic" class="wide" width="3"></figure>'
        assert html_to_markdown(html) == "![Pic](a.png)"

    def test_table(self):
        html = (
            '<div class="wrap"><table class="t"><tr><th>A</th><th>B</th></tr>'
            "<tr><td>1</td><td>2</td></tr></table></div>"
        )
        result = html_to_markdown(html)
        assert "| A | B |" in result
        assert "| 1 | 2 |" in result

    def test_no_markup_survives(self):
        html = (
            '<article><span class="icon"></span><div style="x">'
            "<font color=red>Red</font> <u>under</u></div>"
            "<aside><iframe src='x'></iframe>Side</aside></article>"
        )
        result = html_to_markdown(html)
        assert "<" not in result
        assert "Red" in result
        assert "Side" in result

    def test_css_selector(self):
        html = """
        <html><body>
            <div class="nav">Menu</div>
            <div class="l-article news-content"><p>Important content here</p></div>
        </body></html>
        """
        result = html_to_markdown(html, selector="div.l-article.news-content")
        assert result == "Important content here"

    def test_selector_without_match_uses_body(self):
        html = "<div>Everything</div>"
        assert html_to_markdown(html, selector="div.missing") == "Everything"

    def test_truncation_points_at_source(self):
        html = "<p>" + "word " * 100 + "</p>"
        full = html_to_markdown(html, max_length=0)
        result = html_to_markdown(html, url="https://example.com/a", max_length=50)
        assert result == full[:50] + continuation_hint("https://example.com/a")
        assert result.endswith("[Truncated, for full content, please visit: https://example.com/a]")

    def test_short_article_not_truncated(self):
        result = html_to_markdown("<p>Short</p>", url="https://example.com/a", max_length=50)
        assert result == "Short"

    def test_blank_runs_collapse(self):
        html = "<p>One</p><br><br><br><br><p>Two</p>"
        result = html_to_markdown(html)
        assert result.startswith("One")
        assert result.endswith("Two")
        assert "\n\n\n" not in result


class TestContinuationHint:
    def test_with_url(self):
        assert continuation_hint("http://x") == "\n\n[Truncated, for full content, please visit: http://x]"

    def test_without_url(self):
        assert continuation_hint() == "\n\n[Truncated]"


class TestReadabilityExtract:
    def test_extracts_main_content(self):
        html = """
        <html><body>
            <nav><ul><li>Menu 1</li><li>Menu 2</li></ul></nav>
            <article>
                <h1>Article Title</h1>
                <p>This is the main article content with enough text
                to be recognized as the primary content by readability.
                It needs to be reasonably long to be identified.</p>
                <p>Another paragraph of real content that helps readability
                determine this is the main content area of the page.</p>
            </article>
            <aside>Related links sidebar</aside>
        </body></html>
        """
        result = _readability_extract(html)
        assert "Article Title" in result or "article content" in result

    def test_boilerplate_option(self):
        html = """
        <html><body><article>
            <p>This is the main article content with enough text
            to be recognized as the primary content by readability.
            It needs to be reasonably long to be identified.</p>
        </article></body></html>
        """
        result = html_to_markdown(html, strip_boilerplate=True)
        assert "main article content" in result
        assert "<" not in result
