"""Unit tests for the tool discovery scoring strategies."""

import pytest

from mcp_tool_search.servers.discovery.scoring import (
    CategorySearchStrategy,
    DescriptionSearchStrategy,
    FuzzySearchStrategy,
    NameSearchStrategy,
    _is_ordered_prefix_match,
    _normalize_text,
    _tokenize,
    default_strategies,
    edit_similarity,
)
from mcp_tool_search.servers.discovery.types import (
    StrategyType,
    ToolCategory,
    ToolIndexEntry,
)


def make_entry(
    name: str,
    description: str = "",
    category: ToolCategory = ToolCategory.ISSUES,
    tags: set[str] | None = None,
) -> ToolIndexEntry:
    return ToolIndexEntry(
        name=name,
        description=description,
        category=category,
        tags=frozenset(tags or set()),
    )


class TestNormalizeText:
    """Tests for text normalization."""

    def test_lowercase(self):
        """Test that text is lowercased."""
        assert _normalize_text("Hello World") == "hello world"

    def test_strip_whitespace(self):
        """Test that surrounding whitespace is removed."""
        assert _normalize_text("  hello  ") == "hello"


class TestTokenize:
    """Tests for tokenization."""

    def test_underscore_separation(self):
        """Test that underscores split tokens."""
        assert _tokenize("get_issue_details") == ["get", "issue", "details"]

    def test_hyphen_and_whitespace(self):
        """Test that hyphens and whitespace split tokens."""
        assert _tokenize("url-generation  helper") == ["url", "generation", "helper"]

    def test_lowercases(self):
        """Test that tokens are lowercased."""
        assert _tokenize("Get_Tasks") == ["get", "tasks"]

    def test_empty(self):
        """Test that empty text has no tokens."""
        assert _tokenize("   ") == []
        assert _tokenize("__") == []


class TestOrderedPrefixMatch:
    """Tests for in-order prefix matching of tokens."""

    def test_in_order(self):
        """Test that query tokens prefixing name tokens in order match."""
        assert _is_ordered_prefix_match(["get", "trans"], ["get", "issue", "transitions"])

    def test_out_of_order(self):
        """Test that out-of-order prefixes do not match."""
        assert not _is_ordered_prefix_match(
            ["trans", "get"], ["get", "issue", "transitions"]
        )

    def test_each_name_token_used_once(self):
        """Test that one name token cannot serve two query tokens."""
        assert not _is_ordered_prefix_match(["get", "get"], ["get", "issues"])


class TestEditSimilarity:
    """Tests for normalized edit similarity."""

    def test_identical(self):
        """Test that identical strings are fully similar."""
        assert edit_similarity("ping", "ping") == 1.0

    def test_transposition(self):
        """Test that a transposition costs two edits."""
        # Two substitutions over four characters
        assert edit_similarity("pnig", "ping") == pytest.approx(0.5)

    def test_disjoint(self):
        """Test that disjoint strings have zero similarity."""
        assert edit_similarity("abc", "xyz") == 0.0

    def test_uses_longest_length(self):
        """Test that distance is normalized by the longer string."""
        assert edit_similarity("get", "gets") == pytest.approx(0.75)

    def test_both_empty(self):
        """Test that two empty strings are fully similar."""
        assert edit_similarity("", "") == 1.0


class TestNameSearchStrategy:
    """Tests for the name scoring ladder."""

    strategy = NameSearchStrategy()

    def test_strategy_type(self):
        """Test the strategy type."""
        assert self.strategy.strategy_type is StrategyType.NAME

    def test_exact_match(self):
        """Test that an exact name scores one."""
        assert self.strategy.score(make_entry("ping"), "ping") == 1.0

    def test_exact_match_case_and_whitespace(self):
        """Test that case and whitespace do not affect an exact match."""
        assert self.strategy.score(make_entry("ping"), "  PING ") == 1.0

    def test_exact_match_on_tokens(self):
        """Test that equal token lists count as an exact match."""
        assert self.strategy.score(make_entry("get_tasks"), "get tasks") == 1.0

    def test_prefix_tier(self):
        """Test the ordered prefix tier."""
        entry = make_entry("fr_ticktick_ping")
        assert self.strategy.score(entry, "ping") == 0.8

    def test_prefix_tier_multiple_tokens(self):
        """Test the ordered prefix tier with several tokens."""
        entry = make_entry("get_issue_transitions")
        assert self.strategy.score(entry, "get trans") == 0.8

    def test_out_of_order_tokens_fall_to_substring_tier(self):
        """Test that out-of-order tokens only reach the substring tier."""
        entry = make_entry("get_issue_transitions")
        assert self.strategy.score(entry, "trans get") == 0.5

    def test_substring_tier(self):
        """Test the substring tier."""
        assert self.strategy.score(make_entry("get_issues"), "ssue") == 0.5

    def test_token_overlap_tier(self):
        """Test the token overlap tier."""
        # "get" is shared, "users" is nowhere in the name
        assert self.strategy.score(make_entry("get_issues"), "get users") == 0.25

    def test_no_match(self):
        """Test that an unrelated query scores zero."""
        assert self.strategy.score(make_entry("get_issues"), "calendar") == 0.0

    def test_empty_query(self):
        """Test that an empty query scores zero."""
        assert self.strategy.score(make_entry("get_issues"), "  ") == 0.0


class TestDescriptionSearchStrategy:
    """Tests for description coverage scoring."""

    strategy = DescriptionSearchStrategy()

    def test_full_coverage(self):
        """Test that a description with every query token scores one."""
        entry = make_entry("get_tasks", description="Get all tasks")
        assert self.strategy.score(entry, "tasks") == 1.0

    def test_partial_coverage(self):
        """Test that the score is the share of tokens found."""
        entry = make_entry("get_tasks", description="Get all tasks")
        assert self.strategy.score(entry, "tasks projects") == 0.5

    def test_counts_distinct_tokens(self):
        """Test that repeated query tokens count once."""
        entry = make_entry("get_tasks", description="Get all tasks")
        assert self.strategy.score(entry, "tasks tasks") == 1.0

    def test_case_insensitive_substring(self):
        """Test that description matching ignores case."""
        entry = make_entry("get_worklogs", description="Get WORKLOGS of an issue")
        assert self.strategy.score(entry, "Worklog") == 1.0

    def test_empty_description(self):
        """Test that an empty description scores zero."""
        assert self.strategy.score(make_entry("get_tasks"), "tasks") == 0.0

    def test_no_match(self):
        """Test that an unrelated query scores zero."""
        entry = make_entry("get_projects", description="Get all projects")
        assert self.strategy.score(entry, "tasks") == 0.0


class TestCategorySearchStrategy:
    """Tests for category and tag matching."""

    strategy = CategorySearchStrategy()

    def test_category_match(self):
        """Test that naming the category scores one."""
        entry = make_entry("add_worklog", category=ToolCategory.WORKLOG)
        assert self.strategy.score(entry, "Worklog") == 1.0

    def test_category_word_in_query(self):
        """Test that a category word inside the query matches."""
        entry = make_entry("add_worklog", category=ToolCategory.WORKLOG)
        assert self.strategy.score(entry, "log worklog time") == 1.0

    def test_hyphenated_category(self):
        """Test that hyphenated categories match as typed."""
        entry = make_entry("issue_get_url", category=ToolCategory.URL_GENERATION)
        assert self.strategy.score(entry, "url-generation") == 1.0

    @pytest.mark.parametrize("query", ["get-worklog", "worklog_tools"])
    def test_category_token_in_joined_query(self, query):
        """Test that a category joined by hyphens or underscores matches."""
        entry = make_entry("add_worklog", category=ToolCategory.WORKLOG)
        assert self.strategy.score(entry, query) == 1.0

    def test_tag_token_in_joined_query(self):
        """Test that a tag joined by a hyphen matches."""
        entry = make_entry(
            "issue_get_url", category=ToolCategory.URL_GENERATION, tags={"link"}
        )
        assert self.strategy.score(entry, "issue-link") == 0.6

    def test_tag_match(self):
        """Test that naming a tag scores the tag score."""
        entry = make_entry(
            "issue_get_url", category=ToolCategory.URL_GENERATION, tags={"url", "link"}
        )
        assert self.strategy.score(entry, "url") == 0.6

    def test_tag_match_case_insensitive(self):
        """Test that tag matching ignores case."""
        entry = make_entry("ping", category=ToolCategory.SYSTEM, tags={"Health"})
        assert self.strategy.score(entry, "HEALTH") == 0.6

    def test_category_beats_tag(self):
        """Test that a category match outranks a tag match."""
        entry = make_entry("search_tools", category=ToolCategory.SEARCH, tags={"search"})
        assert self.strategy.score(entry, "search") == 1.0

    def test_partial_word_does_not_match(self):
        """Test that partial words do not match categories or tags."""
        entry = make_entry("get_issues", category=ToolCategory.ISSUES, tags={"issue"})
        assert self.strategy.score(entry, "iss") == 0.0

    def test_empty_query(self):
        """Test that an empty query scores zero."""
        entry = make_entry("get_issues", category=ToolCategory.ISSUES)
        assert self.strategy.score(entry, "") == 0.0


class TestFuzzySearchStrategy:
    """Tests for typo-tolerant matching."""

    strategy = FuzzySearchStrategy()

    def test_exact_name(self):
        """Test that the exact name is fully similar."""
        assert self.strategy.score(make_entry("ping"), "ping") == 1.0

    def test_transposed_letters(self):
        """Test that a transposed query still scores."""
        assert self.strategy.score(make_entry("ping"), "pnig") == pytest.approx(0.5)

    def test_misspelled_name_token(self):
        """Test that a misspelled name token scores with the token weight."""
        # "isues" is one edit from the "issues" token
        score = self.strategy.score(make_entry("get_issues"), "isues")
        assert score == pytest.approx((1 - 1 / 6) * 0.7)

    def test_tag_match(self):
        """Test that naming a tag scores the tag score."""
        entry = make_entry("log_hours", tags={"worklog"})
        assert self.strategy.score(entry, "worklgo") == pytest.approx(1 - 2 / 7)

    def test_unrelated_entry_scores_zero(self):
        """Test that dissimilar names fall under the threshold."""
        entry = make_entry(
            "delete_project",
            description="Delete a project.",
            category=ToolCategory.PROJECTS,
            tags={"project", "delete", "write"},
        )
        assert self.strategy.score(entry, "pnig") == 0.0

    def test_multi_word_query_against_name(self):
        """Test that multi-word queries are compared as one name."""
        assert self.strategy.score(make_entry("get_tasks"), "get taks") == pytest.approx(
            1 - 1 / 9
        )

    def test_custom_threshold(self):
        """Test that min_similarity is configurable."""
        strict = FuzzySearchStrategy(min_similarity=0.9)
        assert strict.score(make_entry("ping"), "pnig") == 0.0

    def test_empty_query(self):
        """Test that an empty query scores zero."""
        assert self.strategy.score(make_entry("ping"), "") == 0.0


class TestScoreRanges:
    """All strategies stay within [0, 1]."""

    ENTRIES = [
        make_entry("ping", "Check the connection.", ToolCategory.SYSTEM, {"ping"}),
        make_entry("get_tasks", "Get all tasks", ToolCategory.TASKS, {"task"}),
        make_entry("issue_get_url", "", ToolCategory.URL_GENERATION, {"url", "link"}),
        make_entry("a", "a a a", ToolCategory.DEMO),
    ]
    QUERIES = ["ping", "pnig", "tasks", "get all tasks", "url-generation", "a", "x y z"]

    @pytest.mark.parametrize("strategy", default_strategies(), ids=lambda s: s.strategy_type.value)
    def test_scores_in_unit_interval(self, strategy):
        """Test that every strategy scores within zero and one."""
        for entry in self.ENTRIES:
            for query in self.QUERIES:
                assert 0.0 <= strategy.score(entry, query) <= 1.0

    def test_default_strategies_cover_every_type(self):
        """Test that the default strategies cover every strategy type."""
        types = {strategy.strategy_type for strategy in default_strategies()}
        assert types == set(StrategyType)
