import logging
from collections.abc import Sequence

from ..dispatcher import Dispatcher
from ..errors import ChottoError, SessionBusy
from ..llm.models import Attachment, ChatRequest, ChatTurn, Role
from ..llm.registry import DEFAULT_MODEL_ID, resolve
from .models import ChatMessage

logger = logging.getLogger(__name__)

ERROR_PREFIX = "Error: "

# Joins consecutive turns of the same role
TURN_SEPARATOR = "\n\n"


class ChatSession:
    """One user's conversation, kept in memory.

    Each ``send`` issues exactly one dispatch with the whole visible history.
    Failures are rendered into the conversation as assistant messages and
    left out of the history sent on later turns.
    """

    def __init__(self, dispatcher: Dispatcher, model: str = DEFAULT_MODEL_ID):
        self._dispatcher = dispatcher
        self._model = resolve(model).id
        self._messages: list[ChatMessage] = []
        self._sending = False

    @property
    def model(self) -> str:
        return self._model

    @property
    def messages(self) -> list[ChatMessage]:
        return list(self._messages)

    @property
    def is_sending(self) -> bool:
        return self._sending

    def select_model(self, model_id: str) -> None:
        """Switch the model used for subsequent sends.

        Raises:
            ModelNotRegistered: If the id is unknown
        """
        self._model = resolve(model_id).id

    def clear(self) -> None:
        self._messages.clear()

    def _history(self) -> tuple[ChatTurn, ...]:
        """Turns to send: failures left out, then same-role neighbours merged.

        Dropping a failed reply leaves two user turns in a row; they are
        joined so roles keep alternating.
        """
        turns: list[ChatTurn] = []
        for message in self._messages:
            if message.is_error:
                continue
            if turns and turns[-1].role == message.role:
                merged = f"{turns[-1].content}{TURN_SEPARATOR}{message.content}"
                turns[-1] = ChatTurn(role=message.role, content=merged)
            else:
                turns.append(message.to_turn())
        return tuple(turns)

    async def send(self, text: str, attachments: Sequence[Attachment] | None = None) -> ChatMessage:
        """Send a user message and record the reply.

        Args:
            text: User message
            attachments: Files attached to this message

        Returns:
            The assistant message appended to the conversation (an error
            message if the dispatch failed)

        Raises:
            SessionBusy: If another send is still in flight
        """
        if self._sending:
            raise SessionBusy()
        self._sending = True

        try:
            model = self._model
            attached = tuple(attachments or ())
            self._messages.append(
                ChatMessage(role=Role.USER, content=text, attachments=attached, model=model)
            )
            request = ChatRequest(
                model=model,
                messages=self._history(),
                attachments=attached,
            )

            try:
                response = await self._dispatcher.dispatch(request)
            except ChottoError as e:
                logger.info("Send to %s failed: %s", model, type(e).__name__)
                reply = ChatMessage(
                    role=Role.ASSISTANT,
                    content=f"{ERROR_PREFIX}{e.message}",
                    model=model,
                    is_error=True,
                )
            else:
                reply = ChatMessage(
                    role=Role.ASSISTANT,
                    content=response.content,
                    image_url=response.image_url,
                    model=model,
                )

            self._messages.append(reply)
            return reply
        finally:
            self._sending = False
