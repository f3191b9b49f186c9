"""Tests for the Bitbucket Cloud client using respx."""

import base64

import httpx
import pytest
import respx

from repo_inventory.bitbucketcloud.client import BitbucketCloudClient
from repo_inventory.bitbucketcloud.models import PageToken
from repo_inventory.core.exceptions import BitbucketCloudAPIError

API_URL = "https://api.bitbucket.example.com"
NEXT_URL = f"{API_URL}/2.0/repositories?role=member&pagelen=2&page=2"


def repo_payload(slug: str, scm: str = "git") -> dict:
    return {
        "uuid": "{%s}" % slug,
        "slug": slug,
        "name": slug,
        "full_name": f"team/{slug}",
        "scm": scm,
        "links": {"clone": [{"name": "https", "href": f"https://bitbucket.example.com/team/{slug}.git"}]},
    }


@pytest.mark.unit
class TestBitbucketCloudClient:
    """Tests for BitbucketCloudClient."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_first_page(self) -> None:
        route = respx.get(f"{API_URL}/2.0/repositories").mock(
            return_value=httpx.Response(
                200,
                json={
                    "pagelen": 2,
                    "page": 1,
                    "size": 3,
                    "next": NEXT_URL,
                    "values": [repo_payload("a"), repo_payload("b")],
                },
            )
        )

        async with BitbucketCloudClient(API_URL, "alice", "s3cret") as client:
            repos, token = await client.first_page("", PageToken(pagelen=2))

        assert [repo.full_name for repo in repos] == ["team/a", "team/b"]
        assert token.has_more()
        assert token.next == NEXT_URL
        assert token.pagelen == 2

        request = route.calls.last.request
        assert request.url.params["role"] == "member"
        assert request.url.params["pagelen"] == "2"
        assert "q" not in request.url.params
        expected = base64.b64encode(b"alice:s3cret").decode()
        assert request.headers["Authorization"] == f"Basic {expected}"

    @pytest.mark.asyncio
    @respx.mock
    async def test_query_is_sent(self) -> None:
        route = respx.get(f"{API_URL}/2.0/repositories").mock(
            return_value=httpx.Response(200, json={"pagelen": 100, "values": []})
        )

        async with BitbucketCloudClient(API_URL, "alice", "s3cret") as client:
            repos, token = await client.first_page('project.key="ABC"', PageToken())

        assert repos == []
        assert not token.has_more()
        assert route.calls.last.request.url.params["q"] == 'project.key="ABC"'

    @pytest.mark.asyncio
    @respx.mock
    async def test_next_page_follows_link(self) -> None:
        route = respx.get(NEXT_URL).mock(
            return_value=httpx.Response(
                200, json={"pagelen": 2, "page": 2, "values": [repo_payload("c")]}
            )
        )

        async with BitbucketCloudClient(API_URL, "alice", "s3cret") as client:
            repos, token = await client.next_page(PageToken(pagelen=2, next=NEXT_URL))

        assert route.called
        assert [repo.slug for repo in repos] == ["c"]
        assert not token.has_more()

    @pytest.mark.asyncio
    async def test_next_page_without_link(self) -> None:
        async with BitbucketCloudClient(API_URL) as client:
            with pytest.raises(ValueError):
                await client.next_page(PageToken())

    @pytest.mark.asyncio
    @respx.mock
    async def test_http_error(self) -> None:
        respx.get(f"{API_URL}/2.0/repositories").mock(
            return_value=httpx.Response(401, json={"error": {"message": "Unauthorized"}})
        )

        async with BitbucketCloudClient(API_URL, "alice", "wrong") as client:
            with pytest.raises(BitbucketCloudAPIError) as exc_info:
                await client.first_page("", PageToken())

        assert exc_info.value.status_code == 401
        assert "Unauthorized" in exc_info.value.details["body"]

    @pytest.mark.asyncio
    @respx.mock
    async def test_invalid_json(self) -> None:
        respx.get(f"{API_URL}/2.0/repositories").mock(
            return_value=httpx.Response(200, text="<html>oops</html>")
        )

        async with BitbucketCloudClient(API_URL) as client:
            with pytest.raises(BitbucketCloudAPIError):
                await client.first_page("", PageToken())

    @pytest.mark.asyncio
    @respx.mock
    async def test_unexpected_payload(self) -> None:
        respx.get(f"{API_URL}/2.0/repositories").mock(
            return_value=httpx.Response(200, json={"values": [{"slug": "no-uuid"}]})
        )

        async with BitbucketCloudClient(API_URL) as client:
            with pytest.raises(BitbucketCloudAPIError):
                await client.first_page("", PageToken())

    @pytest.mark.asyncio
    @respx.mock
    async def test_transport_error_propagates(self) -> None:
        respx.get(f"{API_URL}/2.0/repositories").mock(side_effect=httpx.ConnectError("refused"))

        async with BitbucketCloudClient(API_URL) as client:
            with pytest.raises(httpx.ConnectError):
                await client.first_page("", PageToken())

    @pytest.mark.asyncio
    async def test_borrowed_http_client_is_not_closed(self) -> None:
        http = httpx.AsyncClient()
        client = BitbucketCloudClient(API_URL, http_client=http)
        await client.aclose()
        assert not http.is_closed
        await http.aclose()
