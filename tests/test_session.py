"""Unit tests for the chat session flow."""
import asyncio

from conftest import FakeRecommendationClient

from foodfinder.chat import BusyChanged, ConsentRequested, LogChangeKind, SubmitStatus
from foodfinder.chat import notices
from foodfinder.recommend import (
    ApiError,
    FetchResult,
    Recommendation,
    SafetyBlocked,
    TransportError,
    TransportErrorKind,
)


class SlowClient(FakeRecommendationClient):
    """Client that waits for a release signal before answering."""

    def __init__(self):
        super().__init__()
        self.release = asyncio.Event()

    async def fetch(self, prompt: str) -> FetchResult:
        self.prompts.append(prompt)
        await self.release.wait()
        return self.outcome


def contents(session) -> list[str]:
    return [m.content for m in session.log]


class TestChatSession:
    """Tests for the happy path."""

    def test_welcome_message(self, make_session):
        """Test that a new session greets the user."""
        session = make_session()

        assert contents(session) == [notices.WELCOME]

    async def test_topic_then_calories(self, make_session, fake_client):
        """Test the full pasta / 600 exchange."""
        session = make_session()
        await session.start()

        first = await session.submit_text("pasta")
        second = await session.submit_text("600")

        assert first.status is SubmitStatus.ASKED_CALORIES
        assert second.status is SubmitStatus.COMPLETED
        assert second.outcome == fake_client.outcome
        assert len(fake_client.prompts) == 1
        assert "approximately 600 calories" in fake_client.prompts[0]
        assert contents(session) == [
            notices.WELCOME,
            "pasta",
            notices.ASK_CALORIES,
            "600",
            notices.SEARCHING,
            fake_client.outcome.text,
        ]
        assert [m.is_user for m in session.log] == [False, True, False, True, False, False]

    async def test_blank_input_ignored(self, make_session, fake_client):
        """Test that whitespace-only input does nothing."""
        session = make_session()
        await session.start()

        result = await session.submit_text("   ")

        assert result.status is SubmitStatus.IGNORED
        assert contents(session) == [notices.WELCOME]
        assert session.can_send("   ") is False
        assert session.can_send("pasta") is True

    async def test_user_text_is_trimmed(self, make_session):
        """Test that the logged user entry is stripped."""
        session = make_session()
        await session.start()

        await session.submit_text("  pasta  ")

        assert contents(session)[1] == "pasta"


class TestLoadingPlaceholder:
    """Tests for the placeholder shown while a request is in flight."""

    async def test_placeholder_added_and_removed_once(self, make_session):
        """Test that the placeholder appears during the fetch and is removed exactly once."""
        client = FakeRecommendationClient(SafetyBlocked())
        session = make_session(client=client)
        await session.start()
        changes = []
        session.log.subscribe(changes.append)

        await session.submit_text("pasta")
        await session.submit_text("600")

        placeholder_changes = [
            c.kind for c in changes if c.message.content == notices.LOADING_PLACEHOLDER
        ]
        assert placeholder_changes == [LogChangeKind.APPENDED, LogChangeKind.REMOVED]
        assert notices.LOADING_PLACEHOLDER not in contents(session)
        assert contents(session)[-1] == SafetyBlocked().chat_text

    async def test_busy_while_in_flight(self, make_session):
        """Test that a second submission is refused while a request is pending."""
        client = SlowClient()
        session = make_session(client=client)
        await session.start()
        events = []
        session.subscribe(events.append)

        await session.submit_text("pasta")
        task = asyncio.create_task(session.submit_text("600"))
        while not session.busy:
            await asyncio.sleep(0)

        assert contents(session)[-1] == notices.LOADING_PLACEHOLDER
        assert session.can_send("more") is False
        busy_result = await session.submit_text("sushi")
        assert busy_result.status is SubmitStatus.BUSY

        client.release.set()
        result = await task

        assert result.status is SubmitStatus.COMPLETED
        assert session.busy is False
        assert [e for e in events if isinstance(e, BusyChanged)] == [
            BusyChanged(busy=True),
            BusyChanged(busy=False),
        ]
        assert "sushi" not in contents(session)


class TestFailures:
    """Tests for failed fetches."""

    async def test_failure_does_not_roll_back_state(self, make_session):
        """Test that after an error the next message is a new topic."""
        client = FakeRecommendationClient(ApiError(code=429, message="quota"))
        session = make_session(client=client)
        await session.start()

        await session.submit_text("pasta")
        result = await session.submit_text("600")

        assert result.outcome == ApiError(code=429, message="quota")
        assert contents(session)[-1] == "API Error (429): quota"
        assert session.conversation.awaiting_calorie_input is False

        client.outcome = Recommendation(text="Tacos!")
        follow_up = await session.submit_text("tacos")
        assert follow_up.status is SubmitStatus.ASKED_CALORIES

    async def test_transport_error_text(self, make_session):
        """Test that a timeout is reported in the chat."""
        client = FakeRecommendationClient(TransportError(error_kind=TransportErrorKind.TIMEOUT))
        session = make_session(client=client)
        await session.start()

        await session.submit_text("pasta")
        await session.submit_text("600")

        assert contents(session)[-1] == "The request timed out. Please try again."


class TestOffline:
    """Tests for sending while offline."""

    async def test_offline_blocks_send(self, make_session, monitor, fake_client):
        """Test that a send while disconnected is refused without touching the conversation."""
        session = make_session()
        await session.start()
        monitor.report(False)

        result = await session.submit_text("pasta")

        assert result.status is SubmitStatus.OFFLINE
        assert fake_client.prompts == []
        assert session.conversation.current_topic == ""
        # The offline notice is already the last entry, so nothing new is added
        assert contents(session) == [notices.WELCOME, notices.OFFLINE]
        assert session.can_send("pasta") is False

    async def test_offline_refusal_notice(self, make_session, monitor):
        """Test that the refusal notice is shown when the offline notice is not last."""
        session = make_session(welcome=False)
        await session.start()
        monitor.report(False)
        session.log.append_user("earlier")

        await session.submit_text("pasta")
        await session.submit_text("pasta again")

        assert contents(session) == [
            notices.OFFLINE,
            "earlier",
            notices.OFFLINE_SEND_REFUSED,
        ]

    async def test_send_after_restore(self, make_session, monitor):
        """Test that sending works again once connectivity returns."""
        session = make_session()
        await session.start()
        monitor.report(False)
        monitor.report(True)

        result = await session.submit_text("pasta")

        assert result.status is SubmitStatus.ASKED_CALORIES
        assert notices.RESTORED in contents(session)


class TestConsentFlow:
    """Tests for the first-send disclosure."""

    async def test_first_send_requests_consent(self, make_session, fake_client):
        """Test that nothing is logged or sent before consent."""
        session = make_session(acknowledged=False)
        await session.start()
        events = []
        session.subscribe(events.append)

        result = await session.submit_text("pasta")

        assert result.status is SubmitStatus.NEEDS_CONSENT
        assert events == [ConsentRequested(text="pasta")]
        assert contents(session) == [notices.WELCOME]
        assert session.conversation.current_topic == ""
        assert fake_client.prompts == []

    async def test_grant_then_flush_sends_held_text(self, make_session):
        """Test that the held message is dispatched after consent."""
        session = make_session(acknowledged=False)
        await session.start()

        await session.submit_text("pasta")
        await session.grant_consent()
        result = await session.flush_pending()

        assert result.status is SubmitStatus.ASKED_CALORIES
        assert contents(session) == [notices.WELCOME, "pasta", notices.ASK_CALORIES]
        assert await session.flush_pending() is None

        follow_up = await session.submit_text("600")
        assert follow_up.status is SubmitStatus.COMPLETED

    async def test_first_pending_text_wins(self, make_session):
        """Test that a second send while the disclosure is open is not queued."""
        session = make_session(acknowledged=False)
        await session.start()

        await session.submit_text("pasta")
        await session.submit_text("sushi")
        await session.grant_consent()
        await session.flush_pending()

        assert "sushi" not in contents(session)
        assert session.conversation.current_topic == "pasta"

    async def test_cancel_drops_message(self, make_session, fake_client):
        """Test that cancelling leaves the log and conversation untouched."""
        session = make_session(acknowledged=False)
        await session.start()

        await session.submit_text("pasta")
        session.cancel_pending()

        assert await session.flush_pending() is None
        assert contents(session) == [notices.WELCOME]
        assert session.gate.acknowledged is False

        again = await session.submit_text("pasta")
        assert again.status is SubmitStatus.NEEDS_CONSENT
        assert fake_client.prompts == []

    async def test_flush_while_offline(self, make_session, monitor):
        """Test that a held message is not sent if the network dropped meanwhile."""
        session = make_session(acknowledged=False)
        await session.start()

        await session.submit_text("pasta")
        await session.grant_consent()
        monitor.report(False)
        result = await session.flush_pending()

        assert result.status is SubmitStatus.OFFLINE
        assert "pasta" not in contents(session)
