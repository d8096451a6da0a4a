"""
Unit tests for ContextDispatcher.

Covers format selection per context, the error taxonomy, the fail-closed
InternalError path and the catalog/handler sync invariant.
"""

import json

import pytest

from context_server.schemas.contexts import ContextKind, ContextRequest
from context_server.services.catalog import CONTEXT_CATALOG
from context_server.services.dispatcher import (
    CONTEXT_HANDLERS,
    JSON_FORMAT,
    MARKDOWN_FORMAT,
    ContextDispatcher,
)
from context_server.utils.errors import ContextNotFound, MissingContextId, MissingParameter
from context_server.utils.transport import Transport, encode_json
from tests._helpers import FakeContentStore


EXPECTED_FORMATS = {
    "profile": JSON_FORMAT,
    "blog_posts_list": JSON_FORMAT,
    "blog_post_content": MARKDOWN_FORMAT,
}


@pytest.fixture
def fake_store():
    return FakeContentStore(
        profile={"name": "Fake Author", "bio": "日本語も大丈夫"},
        posts=[{"id": "p1", "title": "One"}],
        bodies={"p1": "# One\n", "empty": ""},
    )


@pytest.fixture
def dispatcher(fake_store):
    return ContextDispatcher(fake_store)


def test_handlers_cover_catalog_exactly():
    assert set(CONTEXT_HANDLERS) == set(ContextKind)
    assert [d.id.value for d in CONTEXT_CATALOG] == ["profile", "blog_posts_list", "blog_post_content"]


@pytest.mark.asyncio
@pytest.mark.parametrize("context_id", sorted(EXPECTED_FORMATS))
async def test_format_matches_context(dispatcher, context_id):
    params = {"post_id": "p1"} if context_id == "blog_post_content" else {}
    response = await dispatcher.resolve(ContextRequest(context_id=context_id, params=params))
    assert response.context.format == EXPECTED_FORMATS[context_id]


@pytest.mark.asyncio
async def test_profile_content_is_json_string(dispatcher, fake_store):
    response = await dispatcher.resolve(ContextRequest(context_id="profile"))
    assert response.context.content == encode_json(fake_store.profile)
    assert json.loads(response.context.content) == fake_store.profile


@pytest.mark.asyncio
async def test_blog_posts_list_content_is_json_string(dispatcher, fake_store):
    response = await dispatcher.resolve(ContextRequest(context_id="blog_posts_list"))
    assert json.loads(response.context.content) == fake_store.posts


@pytest.mark.asyncio
async def test_blog_post_content_returns_markdown(dispatcher, fake_store):
    response = await dispatcher.resolve(ContextRequest(context_id="blog_post_content", params={"post_id": "p1"}))
    assert response.context.content == "# One\n"
    assert fake_store.calls == ["read_post_body:p1"]


@pytest.mark.asyncio
async def test_missing_context_id_raises(dispatcher, fake_store):
    with pytest.raises(MissingContextId) as exc_info:
        await dispatcher.resolve(ContextRequest())
    assert exc_info.value.status_code == 400
    assert fake_store.calls == []


@pytest.mark.asyncio
@pytest.mark.parametrize("params", [{}, {"post_id": ""}, {"post_id": None}, {"post_id": 42}, {"other": "p1"}])
async def test_blog_post_content_requires_post_id(dispatcher, fake_store, params):
    with pytest.raises(MissingParameter) as exc_info:
        await dispatcher.resolve(ContextRequest(context_id="blog_post_content", params=params))
    assert exc_info.value.status_code == 400
    assert exc_info.value.payload == {
        "error": "Missing required parameter 'post_id' for context 'blog_post_content'"
    }
    assert fake_store.calls == []


@pytest.mark.asyncio
@pytest.mark.parametrize("post_id", ["missing-id", "empty"])
async def test_absent_post_is_not_found(dispatcher, post_id):
    with pytest.raises(ContextNotFound) as exc_info:
        await dispatcher.resolve(ContextRequest(context_id="blog_post_content", params={"post_id": post_id}))
    assert exc_info.value.status_code == 404
    assert exc_info.value.payload == {"error": f"Blog post with id '{post_id}' not found"}


@pytest.mark.asyncio
@pytest.mark.parametrize("context_id", ["unknown", "PROFILE", "blog_post", "profile "])
async def test_unknown_context_is_not_found(dispatcher, context_id):
    with pytest.raises(ContextNotFound) as exc_info:
        await dispatcher.resolve(ContextRequest(context_id=context_id))
    assert exc_info.value.status_code == 404
    assert exc_info.value.payload == {"error": f"Context with id '{context_id}' not found"}


@pytest.mark.asyncio
@pytest.mark.parametrize("transport", list(Transport))
async def test_dispatch_success_outcome(dispatcher, transport):
    outcome = await dispatcher.dispatch(ContextRequest(context_id="blog_post_content", params={"post_id": "p1"}), transport)
    assert outcome.status_code == 200
    assert outcome.transport is transport
    assert outcome.payload == {"context": {"content": "# One\n", "format": MARKDOWN_FORMAT}}


@pytest.mark.asyncio
@pytest.mark.parametrize("transport", list(Transport))
async def test_dispatch_missing_context_id_outcome(dispatcher, transport):
    outcome = await dispatcher.dispatch(ContextRequest(), transport)
    assert outcome.status_code == 400
    assert outcome.payload == {"error": "context_id is required"}


@pytest.mark.asyncio
async def test_dispatch_collaborator_failure_is_internal_error(caplog):
    store = FakeContentStore(fail=RuntimeError("disk on fire at /var/secret"))
    dispatcher = ContextDispatcher(store)

    with caplog.at_level("ERROR", logger="context_server.errors"):
        outcome = await dispatcher.dispatch(ContextRequest(context_id="profile", params={"x": 1}), Transport.JSON)

    assert outcome.status_code == 500
    assert outcome.payload == {"error": "Internal server error"}
    assert "disk on fire" in caplog.text
    assert "'profile'" in caplog.text


@pytest.mark.asyncio
async def test_dispatch_read_timeout_is_internal_error():
    store = FakeContentStore(delay=0.5)
    dispatcher = ContextDispatcher(store, read_timeout=0.01)

    outcome = await dispatcher.dispatch(ContextRequest(context_id="blog_posts_list"), Transport.SSE)

    assert outcome.status_code == 500
    assert outcome.payload == {"error": "Internal server error"}
