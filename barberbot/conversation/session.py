"""
Dialogue session: one visitor's chat from opening the widget to teardown.

The session owns the transcript, the composing/ready flags, and the
single conversation-context slot. Each submitted message is routed by
the IntentRouter after a short typing pause; staged replies and the
navigation to the booking page run later as tracked tasks that are
cancelled when the session is torn down.

Usage:
    async with DialogueSession(JsonFileProvider(), navigator=go_to) as chat:
        await chat.submit("What are your hours?")
        for message in chat.messages:
            print(message.sender, message.text)
"""

import asyncio
import uuid
from typing import Callable, Optional

from barberbot.config import settings
from barberbot.conversation.router import IntentRouter
from barberbot.conversation.scheduler import PendingTasks
from barberbot.data.providers import DataProvider
from barberbot.data.store import ReferenceStore, load_reference_store
from barberbot.logging_context import get_session_logger, set_session_id
from barberbot.schemas.chat_schema import (
    ChatMessage,
    ChatTranscript,
    ContextTag,
    Sender,
)

logger = get_session_logger(__name__)


class DialogueSession:
    """Runs request/response cycles against the intent router."""

    def __init__(
        self,
        provider: DataProvider,
        navigator: Optional[Callable[[], None]] = None,
        notifier: Optional[Callable[[str, str], None]] = None,
        *,
        router: Optional[IntentRouter] = None,
        typing_delay: Optional[float] = None,
        follow_up_delay: Optional[float] = None,
        navigation_delay: Optional[float] = None,
        session_id: Optional[str] = None,
    ) -> None:
        timing = settings.timing
        self.session_id = session_id or f"CHAT-{uuid.uuid4().hex[:12]}"
        self._provider = provider
        self._navigator = navigator
        self._notifier = notifier
        self._router = router or IntentRouter()
        self._typing_delay = timing.typing_delay_sec if typing_delay is None else typing_delay
        self._follow_up_delay = (
            timing.follow_up_delay_sec if follow_up_delay is None else follow_up_delay
        )
        self._navigation_delay = (
            timing.navigation_delay_sec if navigation_delay is None else navigation_delay
        )

        self._store = ReferenceStore()
        self._messages: list[ChatMessage] = []
        self._context: Optional[ContextTag] = None
        self._pending = PendingTasks()

        self.input = ""
        self.is_open = False
        self.is_loading = True
        self.is_ready = False
        self._composing = False

    # ------------------------------------------------------------------ #
    # Lifecycle
    # ------------------------------------------------------------------ #

    async def start(self) -> None:
        """Load the reference store. Data failures never block the chat."""
        set_session_id(self.session_id)
        self.is_loading = True
        try:
            self._store = await load_reference_store(self._provider, self._report_error)
            self.is_ready = True
        finally:
            self.is_loading = False
        logger.info("Chat session %s ready", self.session_id)

    async def aclose(self) -> None:
        """Cancel pending replies and navigation, then release the provider.

        Safe to call repeatedly.
        """
        if self._pending.closed and not len(self._pending):
            return
        self._pending.cancel_all()
        await self._pending.wait()
        self._composing = False

        close_provider = getattr(self._provider, "aclose", None)
        if close_provider is not None:
            await close_provider()
        logger.info("Chat session %s closed", self.session_id)

    async def wait_pending(self) -> None:
        """Wait for scheduled follow-ups such as navigation to run."""
        await self._pending.wait()

    async def __aenter__(self) -> "DialogueSession":
        await self.start()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    # ------------------------------------------------------------------ #
    # State exposed to the presentation layer
    # ------------------------------------------------------------------ #

    @property
    def messages(self) -> tuple[ChatMessage, ...]:
        return tuple(self._messages)

    @property
    def is_composing(self) -> bool:
        return self._composing

    @property
    def context(self) -> Optional[ContextTag]:
        return self._context

    @property
    def store(self) -> ReferenceStore:
        return self._store

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def open(self) -> None:
        self.is_open = True

    def close(self) -> None:
        self.is_open = False

    def export_transcript(self) -> ChatTranscript:
        return ChatTranscript(
            session_id=self.session_id,
            context=self._context,
            is_composing=self._composing,
            is_ready=self.is_ready,
            messages=list(self._messages),
        )

    # ------------------------------------------------------------------ #
    # Conversation
    # ------------------------------------------------------------------ #

    async def submit(self, text: Optional[str] = None) -> list[ChatMessage]:
        """
        Send a user message and wait for the bot's replies.

        Args:
            text: Message to send. Defaults to the ``input`` buffer.

        Returns:
            The bot messages appended for this turn. Empty when the input
            was blank, the bot was still composing, the session was torn
            down, or the reply was cancelled.
        """
        cleaned = (self.input if text is None else text).strip()
        if not cleaned:
            return []
        if self._pending.closed:
            logger.warning("Ignoring input on closed session %s", self.session_id)
            return []
        if self._composing:
            logger.warning("Ignoring input while a reply is being composed")
            return []

        set_session_id(self.session_id)
        self._append(Sender.USER, cleaned)
        self.input = ""
        self._composing = True

        task = self._pending.spawn(self._respond(cleaned), name=f"{self.session_id}-reply")
        try:
            await asyncio.wait({task})
        except asyncio.CancelledError:
            task.cancel()
            raise
        if task.cancelled():
            return []
        return task.result()

    def navigate_to_booking(self) -> None:
        """Close the chat and hand control to the booking page."""
        self.close()
        logger.info("Navigating to %s", settings.business.booking_path)
        if self._navigator is not None:
            self._navigator()

    async def _respond(self, text: str) -> list[ChatMessage]:
        try:
            await asyncio.sleep(self._typing_delay)
            result = self._router.classify(text, self._context, self._store)
            self._context = result.context

            sent = []
            for reply in result.replies:
                if reply.staged:
                    await asyncio.sleep(self._follow_up_delay)
                sent.append(self._append(Sender.BOT, reply.text))

            if result.navigate_to_booking:
                self._pending.call_later(
                    self._navigation_delay,
                    self.navigate_to_booking,
                    name=f"{self.session_id}-navigate",
                )
            return sent
        finally:
            self._composing = False

    def _append(self, sender: Sender, text: str) -> ChatMessage:
        message = ChatMessage(sender=sender, text=text)
        self._messages.append(message)
        return message

    def _report_error(self, title: str, description: str) -> None:
        logger.warning("%s: %s", title, description)
        if self._notifier is not None:
            self._notifier(title, description)
