"""
Unit tests for the GitHub hosted-file backend
"""

import base64
import json

import httpx
import pytest

from schemas.site_content import encode_document
from services.backends.github import GitHubContentsAdapter
from services.content.store import ContentStore
from utils.exceptions import ConfigurationError, RemoteRejected, RemoteUnavailable, SerializationError
from utils.http_client import get_async_client

CONTENTS_URL = "https://api.github.com/repos/jaipurtv/site/contents/content/site-content.json"


def encoded(document) -> str:
    return base64.b64encode(json.dumps(document).encode("utf-8")).decode("ascii")


def make_adapter(handler) -> GitHubContentsAdapter:
    client = get_async_client(transport=httpx.MockTransport(handler))
    return GitHubContentsAdapter(token="ghp_test", repo="jaipurtv/site", branch="main", client=client)


class TestGitHubAdapterConfiguration:

    def test_missing_token_rejected(self):
        with pytest.raises(ConfigurationError):
            GitHubContentsAdapter(token="", repo="jaipurtv/site")

    @pytest.mark.parametrize("repo", ["", "jaipurtv", "jaipurtv/", "/site", "a/b/c"])
    def test_malformed_repo_rejected(self, repo):
        """
        Business Critical: The repo must be owner/repo or every commit would go nowhere
        """
        with pytest.raises(ConfigurationError):
            GitHubContentsAdapter(token="ghp_test", repo=repo)


class TestGitHubAdapterFetch:

    @pytest.mark.asyncio
    async def test_fetch_decodes_file_at_branch(self):
        document = {"hero": {"headline": "From GitHub"}}
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url).split("?")[0]
            seen["ref"] = request.url.params.get("ref")
            seen["auth"] = request.headers.get("authorization")
            return httpx.Response(200, json={"sha": "abc123", "encoding": "base64", "content": encoded(document)})

        adapter = make_adapter(handler)
        result = await adapter.fetch_document()

        assert result.found
        assert result.document == document
        assert result.version == "abc123"
        assert seen == {"url": CONTENTS_URL, "ref": "main", "auth": "Bearer ghp_test"}

    @pytest.mark.asyncio
    async def test_missing_file_is_not_found(self):
        adapter = make_adapter(lambda request: httpx.Response(404, json={"message": "Not Found"}))
        result = await adapter.fetch_document()
        assert not result.found

    @pytest.mark.asyncio
    async def test_directory_listing_is_unexpected(self):
        adapter = make_adapter(lambda request: httpx.Response(200, json=[{"name": "site-content.json"}]))
        with pytest.raises(SerializationError) as exc_info:
            await adapter.fetch_document()
        assert exc_info.value.message == "unexpected-github-response"

    @pytest.mark.asyncio
    async def test_non_json_success_body_is_serialization_error(self):
        adapter = make_adapter(lambda request: httpx.Response(200, text="<html>proxy</html>"))
        with pytest.raises(SerializationError):
            await adapter.fetch_document()

    @pytest.mark.asyncio
    async def test_store_serves_defaults_when_github_body_is_not_json(self, defaults):
        """
        Business Critical: A proxy page in front of GitHub must not stop the site from starting
        """
        store = ContentStore(make_adapter(lambda request: httpx.Response(200, text="<html>proxy</html>")))

        content = await store.initialize()

        assert store.ready
        assert isinstance(store.load_error, SerializationError)
        assert content == defaults

    @pytest.mark.asyncio
    async def test_server_error_is_remote_unavailable(self):
        adapter = make_adapter(lambda request: httpx.Response(502, text="bad gateway"))
        with pytest.raises(RemoteUnavailable):
            await adapter.fetch_document()

    @pytest.mark.asyncio
    async def test_bad_token_is_remote_rejected(self):
        adapter = make_adapter(lambda request: httpx.Response(401, json={"message": "Bad credentials"}))
        with pytest.raises(RemoteRejected) as exc_info:
            await adapter.fetch_document()
        assert exc_info.value.status_code == 401

    @pytest.mark.asyncio
    async def test_transport_failure_is_remote_unavailable(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        adapter = make_adapter(handler)
        with pytest.raises(RemoteUnavailable):
            await adapter.fetch_document()


class TestGitHubAdapterPersist:

    @pytest.mark.asyncio
    async def test_persist_sends_current_sha_and_attribution(self, defaults, editor_session):
        """
        Business Critical: Updates carry the file's current SHA and the editor as author
        """
        puts = []

        def handler(request: httpx.Request) -> httpx.Response:
            if request.method == "GET":
                return httpx.Response(200, json={"sha": "old-sha", "encoding": "base64", "content": encoded({})})
            puts.append(json.loads(request.content))
            return httpx.Response(200, json={
                "content": {"sha": "new-sha"},
                "commit": {"html_url": "https://github.com/jaipurtv/site/commit/123"}
            })

        adapter = make_adapter(handler)
        result = await adapter.persist_document(defaults, editor_session, "chore(content): update hero")

        body = puts[0]
        assert body["sha"] == "old-sha"
        assert body["branch"] == "main"
        assert body["message"] == "chore(content): update hero"
        assert body["committer"] == {"name": "JaipurTV Bot", "email": "bot@jaipurtv.in"}
        assert body["author"] == {"name": "JaipurTV Admin", "email": "admin@jaipurtv.in"}
        assert base64.b64decode(body["content"]).decode("utf-8") == encode_document(defaults)
        assert result.version == "new-sha"
        assert result.commit_url == "https://github.com/jaipurtv/site/commit/123"
        assert result.path == "content/site-content.json"

    @pytest.mark.asyncio
    async def test_persist_creates_missing_file(self, defaults, editor_session):
        puts = []

        def handler(request: httpx.Request) -> httpx.Response:
            if request.method == "GET":
                return httpx.Response(404, json={"message": "Not Found"})
            puts.append(json.loads(request.content))
            return httpx.Response(201, json={"content": {"sha": "first"}, "commit": {"html_url": "u"}})

        adapter = make_adapter(handler)
        result = await adapter.persist_document(defaults, editor_session)

        assert "sha" not in puts[0]
        assert puts[0]["message"] == "chore(content): update site content"
        assert result.version == "first"

    @pytest.mark.asyncio
    async def test_stale_sha_conflict_is_rejected(self, defaults, editor_session):
        """
        Business Critical: A conflicting write fails instead of silently overwriting
        """
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request.method)
            if request.method == "GET":
                return httpx.Response(200, json={"sha": "old", "encoding": "base64", "content": encoded({})})
            return httpx.Response(409, json={"message": "is at abc but expected old"})

        adapter = make_adapter(handler)
        with pytest.raises(RemoteRejected) as exc_info:
            await adapter.persist_document(defaults, editor_session)

        assert exc_info.value.status_code == 409
        assert calls == ["GET", "PUT"]

    @pytest.mark.asyncio
    async def test_bot_is_author_without_session(self, defaults):
        puts = []

        def handler(request):
            if request.method == "GET":
                return httpx.Response(404)
            puts.append(json.loads(request.content))
            return httpx.Response(201, json={"content": {"sha": "s"}, "commit": {"html_url": "u"}})

        await make_adapter(handler).persist_document(defaults, None)
        assert puts[0]["author"] == {"name": "JaipurTV Bot", "email": "bot@jaipurtv.in"}

    @pytest.mark.asyncio
    async def test_injected_client_left_open(self):
        client = get_async_client(transport=httpx.MockTransport(lambda r: httpx.Response(404)))
        adapter = GitHubContentsAdapter(token="t", repo="a/b", client=client)
        await adapter.aclose()
        assert not client.is_closed
        await client.aclose()

    @pytest.mark.asyncio
    async def test_non_json_commit_reply_is_serialization_error(self, defaults, editor_session):
        def handler(request: httpx.Request) -> httpx.Response:
            if request.method == "GET":
                return httpx.Response(404, json={"message": "Not Found"})
            return httpx.Response(201, text="<html>proxy</html>")

        with pytest.raises(SerializationError):
            await make_adapter(handler).persist_document(defaults, editor_session)
