from barberbot.conversation.router import (
    IntentRouter,
    Reply,
    RouteResult,
    Rule,
    classify,
)
from barberbot.conversation.scheduler import PendingTasks, SessionClosedError
from barberbot.conversation.session import DialogueSession

__all__ = [
    "IntentRouter",
    "Reply",
    "RouteResult",
    "Rule",
    "classify",
    "PendingTasks",
    "SessionClosedError",
    "DialogueSession",
]
