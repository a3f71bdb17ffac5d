"""Two-slot conversation state machine.

Hides the dialogue policy: the first message names the kind of food, the
second is taken as the calorie target, and the pair is turned into the
prompt sent to the recommendation provider.
"""

import logging
from dataclasses import dataclass

from ..prompts import render_recommendation_prompt
from .models import ConversationState

logger = logging.getLogger(__name__)


class BlankInputError(ValueError):
    """Raised when empty or whitespace-only text is submitted."""


@dataclass(frozen=True)
class AskCalories:
    """The topic slot was filled; the caller should ask for calories."""

    topic: str


@dataclass(frozen=True)
class ComposePrompt:
    """Both slots were filled; ``prompt`` is ready to send."""

    topic: str
    calories: str
    prompt: str


ConversationStep = AskCalories | ComposePrompt


class ConversationStateMachine:
    """Alternates between collecting a topic and a calorie target.

    Text submitted while awaiting calories is always the calorie answer,
    never a new topic. The calorie text is free-form.
    """

    def __init__(self, state: ConversationState | None = None) -> None:
        self._state = state or ConversationState()

    @property
    def state(self) -> ConversationState:
        return self._state

    @property
    def awaiting_calorie_input(self) -> bool:
        return self._state.awaiting_calorie_input

    @property
    def current_topic(self) -> str:
        return self._state.current_topic

    def submit(self, text: str) -> ConversationStep:
        """Advance the dialogue with one user message.

        Args:
            text: User input (already trimmed by the caller or not)

        Returns:
            AskCalories after the topic, ComposePrompt after the calories

        Raises:
            BlankInputError: If text is empty or whitespace only
        """
        value = text.strip()
        if not value:
            raise BlankInputError("Cannot submit blank text")

        if not self._state.awaiting_calorie_input:
            self._state.current_topic = value
            self._state.awaiting_calorie_input = True
            logger.debug("Topic recorded: %r", value)
            return AskCalories(topic=value)

        topic = self._state.current_topic
        self._state.awaiting_calorie_input = False
        logger.debug("Calorie target recorded: %r (topic %r)", value, topic)
        return ComposePrompt(
            topic=topic,
            calories=value,
            prompt=render_recommendation_prompt(topic, value),
        )
