"""
Barbershop chat entry point.

Loads the reference data once and either chats interactively in the
terminal or answers a single question and exits.

Usage:
    Interactive:     python main.py
    One question:    python main.py ask "What are your hours?"
    Check the data:  python main.py check
"""

import asyncio
import sys

from barberbot.config import settings
from barberbot.conversation.router import IntentRouter
from barberbot.data.providers import build_provider
from barberbot.data.store import COLLECTIONS, ReferenceStore, load_reference_store


async def _load_store() -> ReferenceStore:
    """Load one snapshot and release the provider's connections."""
    provider = build_provider(settings)
    try:
        return await load_reference_store(provider)
    finally:
        close_provider = getattr(provider, "aclose", None)
        if close_provider is not None:
            await close_provider()


async def _ask(question: str) -> int:
    """Route one question without the typing pause and print the replies."""
    store = await _load_store()
    result = IntentRouter().classify(question, None, store)
    for reply in result.replies:
        print(reply.text)
        print()
    return 0


async def _check() -> int:
    """Report how many records each collection holds. Exit 1 on failures."""
    store = await _load_store()
    for name in COLLECTIONS:
        status = "UNAVAILABLE" if name in store.unavailable else "ok"
        print(f"{name:<14} {len(getattr(store, name)):>4}  {status}")
    return 1 if store.unavailable else 0


def _run_console_mode() -> None:
    """Start the interactive terminal chat."""
    from console_demo import ConsoleSession

    session = ConsoleSession()
    asyncio.run(session.run())


if __name__ == "__main__":
    if len(sys.argv) > 2 and sys.argv[1] == "ask":
        sys.exit(asyncio.run(_ask(" ".join(sys.argv[2:]))))
    elif len(sys.argv) > 1 and sys.argv[1] == "check":
        sys.exit(asyncio.run(_check()))
    else:
        _run_console_mode()
