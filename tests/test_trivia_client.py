"""
트리비아/위키/사전 클라이언트의 요청 형식과 오류 분류.
"""

import httpx
import pytest

from conftest import CATEGORY_URL, DICTIONARY_URL, TRIVIA_URL, WIKI_URL
from quizapp.core.errors import NotFound, SourceDataError, SourceUnavailable
from quizapp.services.dictionary import DictionaryClient
from quizapp.services.trivia import TriviaClient
from quizapp.services.wiki import WikiClient


@pytest.fixture
def trivia(http_client):
    return TriviaClient(http_client, api_url=TRIVIA_URL, category_url=CATEGORY_URL)


def test_fetch_questions_sends_filters(trivia, upstream):
    questions = trivia.fetch_questions(9, "EASY", 3)
    assert [q.text for q in questions] == ["Question 1?", "Question 2?", "Question 3?"]
    params = upstream.trivia_requests()[0].url.params
    assert params["amount"] == "3"
    assert params["category"] == "9"
    assert params["difficulty"] == "easy"


def test_fetch_questions_without_filters(trivia, upstream):
    trivia.fetch_questions(0, None, 3)
    params = upstream.trivia_requests()[0].url.params
    assert "category" not in params
    assert "difficulty" not in params


def test_nonzero_response_code_is_unavailable(trivia, upstream):
    upstream.trivia_payload = {"response_code": 1, "results": []}
    with pytest.raises(SourceUnavailable):
        trivia.fetch_questions(9, "easy", 3)


def test_http_error_status_is_unavailable(trivia, upstream):
    upstream.trivia_status = 503
    with pytest.raises(SourceUnavailable) as exc_info:
        trivia.fetch_questions(9, "easy", 3)
    assert exc_info.value.status_code == 503


def test_empty_results_is_data_error(trivia, upstream):
    upstream.trivia_payload = {"response_code": 0, "results": []}
    with pytest.raises(SourceDataError):
        trivia.fetch_questions(9, "easy", 3)


def test_malformed_payload_is_data_error(trivia, upstream):
    upstream.trivia_payload = {"response_code": 0, "results": [{"question": "missing fields"}]}
    with pytest.raises(SourceDataError):
        trivia.fetch_questions(9, "easy", 1)


def test_invalid_json_is_data_error():
    client = httpx.Client(transport=httpx.MockTransport(lambda r: httpx.Response(200, text="<html>")))
    with pytest.raises(SourceDataError):
        TriviaClient(client, api_url=TRIVIA_URL).fetch_questions(9, "easy", 1)


def test_network_error_is_unavailable():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = httpx.Client(transport=httpx.MockTransport(handler))
    with pytest.raises(SourceUnavailable):
        TriviaClient(client, api_url=TRIVIA_URL).fetch_questions(9, "easy", 1)


def test_fetch_categories(trivia):
    categories = trivia.fetch_categories()
    assert [(c.id, c.name) for c in categories] == [(9, "General Knowledge"), (17, "Science & Nature")]


def test_wiki_summary_quotes_topic(http_client, upstream):
    wiki = WikiClient(http_client, api_url=WIKI_URL)
    assert wiki.fetch_summary("Entertainment: Books").extract == "About Entertainment: Books."
    assert "%3A" in str(upstream.requests[-1].url)


def test_wiki_non_200_is_unavailable(http_client, upstream):
    upstream.failing_topics.add("History")
    with pytest.raises(SourceUnavailable):
        WikiClient(http_client, api_url=WIKI_URL).fetch_summary("History")


def test_dictionary_lookup(http_client):
    dictionary = DictionaryClient(http_client, api_url=DICTIONARY_URL)
    entry = dictionary.fetch_definition("quiz")
    assert entry.word == "quiz"
    assert entry.meanings[0].definitions[0].definition == "A test of knowledge."
    with pytest.raises(NotFound):
        dictionary.fetch_definition("zzzz")
    with pytest.raises(ValueError):
        dictionary.fetch_definition("  ")
