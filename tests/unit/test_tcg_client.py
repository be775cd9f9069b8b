import re

import pytest
import httpx
from pokecollector.clients.tcg_client import TCGClient
from pokecollector.errors import APIClientError, ParseError, RateLimitError
from pokecollector.models import TCGSearchResult

CARDS_URL = re.compile(r"https://api\.pokemontcg\.io/v2/cards\?.*")

MOCK_CARDS = {
    "data": [
        {
            "id": "sv3pt5-4",
            "name": "Charmander",
            "set": {"id": "sv3pt5", "name": "151", "releaseDate": "2023/09/22", "total": 165},
            "images": {"small": "https://images.pokemontcg.io/sv3pt5/4.png"},
            "rarity": "Common",
        }
    ],
    "page": 1,
    "pageSize": 250,
    "count": 1,
    "totalCount": 1,
}

@pytest.fixture
def tcg_client():
    return TCGClient()

@pytest.mark.asyncio
async def test_search_cards_builds_prefix_query(httpx_mock, tcg_client):
    """The name is sent as a prefix query, newest sets first, with a trimmed field selection."""
    # ARRANGE
    httpx_mock.add_response(url=CARDS_URL, json=MOCK_CARDS)

    # ACT
    result = await tcg_client.search_cards("Charmander")

    # ASSERT
    assert isinstance(result, TCGSearchResult)
    assert result.count == 1
    assert result.data[0]["name"] == "Charmander"

    params = httpx_mock.get_request().url.params
    assert params["q"] == 'name:"Charmander*"'
    assert params["orderBy"] == "-set.releaseDate"
    assert params["pageSize"] == "250"
    assert params["select"] == "id,name,set,images,rarity"

@pytest.mark.asyncio
async def test_api_key_is_sent_when_configured(httpx_mock):
    httpx_mock.add_response(url=CARDS_URL, json=MOCK_CARDS)

    client = TCGClient(api_key="secret")
    await client.search_cards("Pikachu")

    assert httpx_mock.get_request().headers["X-Api-Key"] == "secret"

@pytest.mark.asyncio
async def test_rate_limit_raises_rate_limit_error(httpx_mock, tcg_client):
    """A 429 gets its own, user-actionable error."""
    httpx_mock.add_response(
        url=CARDS_URL,
        status_code=429,
        json={"error": {"code": 429, "message": "Too Many Requests"}}
    )

    with pytest.raises(RateLimitError) as excinfo:
        await tcg_client.search_cards("Pikachu")

    assert excinfo.value.status_code == 503
    assert "rate limit" in excinfo.value.detail.lower()
    assert "search again" in excinfo.value.detail

@pytest.mark.asyncio
async def test_server_error_raises_generic_503(httpx_mock, tcg_client):
    httpx_mock.add_response(url=CARDS_URL, status_code=500)

    with pytest.raises(APIClientError) as excinfo:
        await tcg_client.search_cards("Pikachu")

    assert not isinstance(excinfo.value, RateLimitError)
    assert excinfo.value.status_code == 503

@pytest.mark.asyncio
async def test_network_error_raises_503(httpx_mock, tcg_client):
    httpx_mock.add_exception(httpx.ConnectError("Connection timed out."), url=CARDS_URL)

    with pytest.raises(APIClientError) as excinfo:
        await tcg_client.search_cards("Pikachu")

    assert "network error" in excinfo.value.detail.lower()

@pytest.mark.asyncio
async def test_unexpected_payload_raises_parse_error(httpx_mock, tcg_client):
    httpx_mock.add_response(url=CARDS_URL, json={"count": "many", "data": "nope"})

    with pytest.raises(ParseError):
        await tcg_client.search_cards("Pikachu")
