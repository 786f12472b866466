"""Unit tests for chat sessions."""
import asyncio

import pytest

from chotto.credentials import create_credential_store
from chotto.dispatcher import Dispatcher
from chotto.errors import ModelNotRegistered, SessionBusy
from chotto.llm import Attachment, AttachmentKind, ChatResponse, Role
from chotto.session import ChatSession


class BlockingDispatcher:
    """Dispatcher stand-in that holds each dispatch until released."""

    def __init__(self):
        self.requests = []
        self.release = asyncio.Event()

    async def dispatch(self, request):
        self.requests.append(request)
        await self.release.wait()
        return ChatResponse(content=f"echo: {request.last_turn.content}")


@pytest.fixture
def store():
    return create_credential_store("memory", secrets={"openai": "sk-test"})


@pytest.fixture
async def session(http_client, store):
    async with Dispatcher(credentials=store, http_client=http_client) as dispatcher:
        yield ChatSession(dispatcher)


class TestChatSession:
    """Tests for ChatSession."""

    async def test_defaults(self, session):
        assert session.model == "gpt-4o"
        assert session.messages == []
        assert not session.is_sending

    async def test_send_records_both_sides(self, session, vendor):
        vendor.respond(200, {"choices": [{"message": {"content": "hello"}}]})

        reply = await session.send("Hi")

        assert reply.role == Role.ASSISTANT
        assert reply.content == "hello"
        assert reply.model == "gpt-4o"
        assert not reply.is_error
        assert [(m.role, m.content) for m in session.messages] == [
            (Role.USER, "Hi"),
            (Role.ASSISTANT, "hello"),
        ]

    async def test_history_sent_in_order(self, session, vendor):
        vendor.respond(200, {"choices": [{"message": {"content": "first answer"}}]})
        await session.send("first")
        vendor.respond(200, {"choices": [{"message": {"content": "second answer"}}]})
        await session.send("second")

        assert vendor.payload()["messages"] == [
            {"role": "user", "content": "first"},
            {"role": "assistant", "content": "first answer"},
            {"role": "user", "content": "second"},
        ]

    async def test_failure_rendered_and_excluded_from_history(self, session, store, vendor):
        session.select_model("gemini-1.5-pro")

        reply = await session.send("Hi")

        assert reply.is_error
        assert reply.content.startswith("Error: No API key configured for provider 'google'")
        assert vendor.calls == []

        store.set("google", "g-key")
        vendor.respond(200, {"candidates": [{"content": {"parts": [{"text": "hi"}]}}]})
        await session.send("again")

        assert vendor.payload()["contents"] == [
            {"role": "user", "parts": [{"text": "Hi\n\nagain"}]},
        ]
        assert len(session.messages) == 4

    async def test_roles_alternate_after_failure(self, session, vendor):
        vendor.respond(200, {"choices": [{"message": {"content": "first answer"}}]})
        await session.send("first")
        vendor.respond(503, {})
        await session.send("second")
        vendor.respond(200, {"choices": [{"message": {"content": "ok"}}]})
        await session.send("third")

        assert vendor.payload(-1)["messages"] == [
            {"role": "user", "content": "first"},
            {"role": "assistant", "content": "first answer"},
            {"role": "user", "content": "second\n\nthird"},
        ]
        assert [m.content for m in session.messages if m.role == Role.USER] == ["first", "second", "third"]

    async def test_unreadable_credential_file_rendered_as_error(self, http_client, vendor, tmp_path):
        path = tmp_path / "credentials.json"
        path.write_bytes(b"\xff\xfe")
        store = create_credential_store("file", path=path)

        async with Dispatcher(credentials=store, http_client=http_client) as dispatcher:
            reply = await ChatSession(dispatcher).send("Hi")

        assert reply.is_error
        assert reply.content == "Error: No API key configured for provider 'openai'"
        assert vendor.calls == []

    async def test_provider_error_rendered(self, session, vendor):
        vendor.respond(401, {"error": {"message": "invalid_api_key"}})

        reply = await session.send("Hi")

        assert reply.is_error
        assert reply.content == "Error: invalid_api_key"

    async def test_image_reply(self, session, vendor):
        session.select_model("dall-e-3")
        vendor.respond(200, {"data": [{"url": "https://x/y.png"}]})

        reply = await session.send("a cat")

        assert reply.image_url == "https://x/y.png"
        assert reply.model == "dall-e-3"

    async def test_model_switch_between_turns(self, session, vendor):
        await session.send("one")
        session.select_model("gpt-5-thinking")
        await session.send("two")

        assert [m.model for m in session.messages] == ["gpt-4o", "gpt-4o", "gpt-5-thinking", "gpt-5-thinking"]
        assert vendor.payload()["reasoning_effort"] == "high"

    async def test_select_unknown_model(self, session):
        with pytest.raises(ModelNotRegistered):
            session.select_model("gpt-2")
        assert session.model == "gpt-4o"

    def test_unknown_initial_model(self):
        with pytest.raises(ModelNotRegistered):
            ChatSession(BlockingDispatcher(), model="gpt-2")  # type: ignore[arg-type]

    async def test_clear(self, session):
        await session.send("Hi")
        session.clear()
        assert session.messages == []

    async def test_attachments_kept_on_user_message(self):
        dispatcher = BlockingDispatcher()
        dispatcher.release.set()
        session = ChatSession(dispatcher)  # type: ignore[arg-type]
        attachment = Attachment(content=b"\x89PNG", kind=AttachmentKind.IMAGE, name="cat.png")

        await session.send("look", [attachment])

        assert session.messages[0].attachments == (attachment,)
        assert dispatcher.requests[0].attachments == (attachment,)

    async def test_concurrent_send_rejected(self):
        dispatcher = BlockingDispatcher()
        session = ChatSession(dispatcher)  # type: ignore[arg-type]

        first = asyncio.create_task(session.send("first"))
        await asyncio.sleep(0)
        assert session.is_sending

        with pytest.raises(SessionBusy):
            await session.send("second")

        dispatcher.release.set()
        reply = await first

        assert reply.content == "echo: first"
        assert not session.is_sending
        assert len(dispatcher.requests) == 1
        assert [m.content for m in session.messages] == ["first", "echo: first"]
