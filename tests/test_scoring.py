"""Tests for relevance scoring and search filtering."""

import pytest

from docnav.corpus import Corpus
from docnav.retrieval.scoring import RelevanceScorer, SearchRequest, recency_bonus
from tests.factories import NOW, days_ago, make_document


@pytest.fixture
def scorer() -> RelevanceScorer:
    return RelevanceScorer()


def test_title_match_scores_higher_than_content_match(scorer: RelevanceScorer) -> None:
    titled = make_document("a.md", title="Deploy Guide", content="deploy steps")
    untitled = make_document("b.md", title="Release notes", content="deploy steps")
    request = SearchRequest(query="deploy")

    assert scorer.score(titled, request, NOW) == 105
    assert scorer.score(untitled, request, NOW) == 5


def test_exact_title_and_summary(scorer: RelevanceScorer) -> None:
    document = make_document(
        "a.md", title="Deploy", summary="How to deploy", content="Nothing relevant"
    )

    assert scorer.score(document, SearchRequest(query="DEPLOY"), NOW) == 200


def test_exact_title_bonus_needs_the_whole_query(scorer: RelevanceScorer) -> None:
    document = make_document("a.md", title="Deploy Tools", content="x")

    assert scorer.score(document, SearchRequest(query="deploy "), NOW) == 100
    assert scorer.score(document, SearchRequest(query="deploy tools "), NOW) == 0


def test_content_occurrences_do_not_overlap(scorer: RelevanceScorer) -> None:
    document = make_document("a.md", title="x", content="aaaa")

    assert scorer.score(document, SearchRequest(query="aa"), NOW) == 10


def test_guide_types_get_a_bonus(scorer: RelevanceScorer) -> None:
    request = SearchRequest(query="zzz")

    for document_type, expected in [("guide", 10), ("setup-guide", 10), ("testing", 0)]:
        document = make_document("a.md", title="x", document_type=document_type)
        assert scorer.score(document, request, NOW) == expected


def test_context_bonuses_stack(scorer: RelevanceScorer) -> None:
    document = make_document(
        "api/payments.md",
        title="Payments API",
        content="payments endpoint",
        document_type="api-docs",
    )

    with_context = scorer.score(
        document, SearchRequest(query="payments", context="API integration"), NOW
    )
    without_context = scorer.score(document, SearchRequest(query="payments"), NOW)

    assert without_context == 105
    assert with_context == 145


def test_context_bonus_rows(scorer: RelevanceScorer) -> None:
    setup = make_document("s.md", title="Getting Started", document_type="setup-guide")
    runbook = make_document("r.md", title="Runbook", content="How to debug a release")

    assert scorer.context_bonus(setup, "I am a new developer") == 45
    assert scorer.context_bonus(runbook, "debugging a failed deploy") == 40
    assert scorer.context_bonus(runbook, "unrelated") == 0


@pytest.mark.parametrize(
    "age, bonus", [(10, 20), (29, 20), (30, 10), (89, 10), (120, 5), (179, 5), (200, 0)]
)
def test_recency_bonus(age: int, bonus: int) -> None:
    assert recency_bonus(make_document("a.md", last_modified=days_ago(age)), NOW) == bonus


def test_missing_timestamp_gets_no_recency_bonus() -> None:
    assert recency_bonus(make_document("a.md"), NOW) == 0


def test_query_is_a_hard_filter(scorer: RelevanceScorer) -> None:
    documents = [
        make_document("a.md", title="Alpha", content="nothing"),
        make_document("b.md", title="Beta", content="kubernetes here"),
        make_document("c.md", title="Gamma", metadata={"tags": ["Kubernetes"]}),
    ]

    results = scorer.search(documents, SearchRequest(query="Kubernetes"), NOW)

    assert [result.document.identifier for result in results] == ["b.md", "c.md"]


def test_non_ascii_metadata_is_searchable(scorer: RelevanceScorer) -> None:
    document = make_document("a.md", title="Runbook", metadata={"team": "Café Ops"})

    results = scorer.search([document], SearchRequest(query="café"), NOW)

    assert [result.document.identifier for result in results] == ["a.md"]


def test_ties_keep_corpus_order(scorer: RelevanceScorer) -> None:
    documents = [make_document(f"{name}.md", title=name, content="match") for name in "cab"]

    results = scorer.search(documents, SearchRequest(query="match"), NOW)

    assert [result.document.identifier for result in results] == ["c.md", "a.md", "b.md"]
    assert {result.score for result in results} == {5}


def test_results_are_sorted_and_truncated(scorer: RelevanceScorer) -> None:
    documents = [
        make_document("one.md", title="one", content="term"),
        make_document("two.md", title="two term", content="term"),
        make_document("three.md", title="three", content="term term"),
    ]

    results = scorer.search(documents, SearchRequest(query="term", limit=2), NOW)

    assert [(result.document.identifier, result.score) for result in results] == [
        ("two.md", 105),
        ("three.md", 10),
    ]


def test_category_and_type_filters(scorer: RelevanceScorer) -> None:
    documents = [
        make_document("setup/a.md", title="a", content="term", document_type="guide"),
        make_document("setup/b.md", title="b", content="term", document_type="testing"),
        make_document("deploy/c.md", title="c", content="term", document_type="guide"),
    ]

    by_category = scorer.search(documents, SearchRequest(query="term", category="setup"), NOW)
    by_type = scorer.search(documents, SearchRequest(query="term", document_types=["guide"]), NOW)

    assert [r.document.identifier for r in by_category] == ["setup/a.md", "setup/b.md"]
    assert [r.document.identifier for r in by_type] == ["setup/a.md", "deploy/c.md"]


def test_exclude_outdated_removes_exactly_outdated_documents(scorer: RelevanceScorer) -> None:
    documents = [
        make_document(
            "old.md", title="old", content="term deprecated", last_modified=days_ago(400)
        ),
        make_document("marker.md", title="marker", content="term, legacy"),
        make_document("fresh.md", title="fresh", content="term", last_modified=days_ago(5)),
        make_document("undated.md", title="undated", content="term"),
    ]

    included = scorer.search(documents, SearchRequest(query="term"), NOW)
    excluded = scorer.search(documents, SearchRequest(query="term", exclude_outdated=True), NOW)

    assert {r.document.identifier for r in included} == {
        "old.md",
        "marker.md",
        "fresh.md",
        "undated.md",
    }
    assert [r.document.identifier for r in excluded] == ["fresh.md", "undated.md"]


def test_outdated_document_ranks_without_recency_bonus(scorer: RelevanceScorer) -> None:
    old = make_document(
        "old.md", title="old", content="term deprecated", last_modified=days_ago(400)
    )

    results = scorer.search([old], SearchRequest(query="term"), NOW)

    assert [(r.document.identifier, r.score) for r in results] == [("old.md", 5)]


def test_no_matches_is_an_empty_result(scorer: RelevanceScorer) -> None:
    assert scorer.search([make_document("a.md")], SearchRequest(query="missing"), NOW) == []


def test_search_request_validation() -> None:
    with pytest.raises(ValueError):
        SearchRequest(query="")
    with pytest.raises(ValueError):
        SearchRequest(query="x", limit=0)
    assert SearchRequest(query="x").limit == 10


def test_end_to_end_getting_started_ranking(setup_corpus: Corpus) -> None:
    results = setup_corpus.search(SearchRequest(query="Getting Started"), NOW)

    assert [result.document.identifier for result in results] == [
        "setup/README.md",
        "setup/guide.md",
    ]
