"""Unit and property-based tests for citation splitting."""
from hypothesis import given
from hypothesis import strategies as st

from kalyana.session import ReplySegments, find_links, join_segments, split_citation


class TestSplitCitation:
    """Tests for split_citation."""

    def test_reply_with_citation(self):
        """Test the common reply shape."""
        text = "Hatred is never appeased by hatred.\n\n—\n\nDhammapada 5"
        assert split_citation(text) == ReplySegments(
            "Hatred is never appeased by hatred.", "Dhammapada 5"
        )

    def test_reply_without_citation(self):
        """Test that the whole text is main when there is no separator."""
        assert split_citation("  Sit with it.  ") == ReplySegments("Sit with it.", "")

    def test_empty_text(self):
        assert split_citation("") == ReplySegments("", "")
        assert split_citation(None) == ReplySegments("", "")

    def test_separator_with_surrounding_spaces(self):
        """Test that whitespace around the dash is tolerated."""
        main, citation = split_citation("Breathe.\n   —  \nAnapanasati Sutta, MN 118")
        assert main == "Breathe."
        assert citation == "Anapanasati Sutta, MN 118"

    def test_inline_dash_is_not_a_separator(self):
        """Test that an em-dash inside a line does not split."""
        text = "Attention — not effort — is the practice."
        assert split_citation(text) == ReplySegments(text, "")

    def test_dash_at_end_without_newline_is_not_a_separator(self):
        assert split_citation("Rest.\n—") == ReplySegments("Rest.\n—", "")

    def test_multiple_separators_stay_in_citation(self):
        """Test that later separators are kept inside the citation."""
        text = "Main.\n—\nFirst source\n—\nSecond source"
        main, citation = split_citation(text)
        assert main == "Main."
        assert citation == "First source\n—\nSecond source"

    @given(st.text(alphabet="ab \n—", max_size=40))
    def test_split_is_stable_under_rejoin(self, text: str):
        """Property test: splitting a re-joined reply gives the same segments."""
        segments = split_citation(text)
        assert split_citation(join_segments(*segments)) == segments

    @given(st.text())
    def test_segments_are_stripped(self, text: str):
        """Property test: both segments carry no surrounding whitespace."""
        main, citation = split_citation(text)
        assert main == main.strip()
        assert citation == citation.strip()


class TestJoinSegments:
    """Tests for join_segments."""

    def test_join_without_citation(self):
        assert join_segments("Sit.") == "Sit."

    def test_join_with_citation(self):
        assert join_segments("Sit.", "MN 10") == "Sit.\n\n—\n\nMN 10"


class TestFindLinks:
    """Tests for find_links."""

    def test_finds_links_in_order(self):
        citation = "Ajahn Chah (https://example.org/a) and https://www.accesstoinsight.org/tipitaka/mn/mn.010"
        assert find_links(citation) == [
            "https://example.org/a",
            "https://www.accesstoinsight.org/tipitaka/mn/mn.010",
        ]

    def test_no_links(self):
        assert find_links("Dhammapada 5") == []
        assert find_links("") == []
