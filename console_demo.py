"""
Offline console demo: chat with the barbershop bot in a terminal.

Runs the real router and dialogue session against the bundled sample
data (or whatever DATA_SOURCE points at). No UI, no booking backend:
navigation to the booking page is printed instead.

Usage:
    python console_demo.py
    python console_demo.py --scenario booking
    python console_demo.py --scenario info --fast
"""

import argparse
import asyncio
from typing import Optional

from barberbot.config import settings
from barberbot.conversation.session import DialogueSession
from barberbot.data.providers import build_provider
from barberbot.schemas.chat_schema import ChatMessage

BLUE = "\033[94m"
GREEN = "\033[92m"
YELLOW = "\033[93m"
RED = "\033[91m"
DIM = "\033[2m"
RESET = "\033[0m"
BOLD = "\033[1m"


class ConsoleSession:
    """Drives a DialogueSession from the terminal."""

    # Pre-scripted scenarios for --scenario flag
    SCENARIOS: dict[str, list[str]] = {
        "booking": [
            "I'd like to book an appointment",
            "yes",
        ],
        "info": [
            "How much for a skin fade?",
            "Who are your barbers?",
            "Tell me about barber Marcus Reed",
            "Are you open today?",
            "Is there parking nearby?",
            "What's your address?",
            "Any deals right now?",
            "What's the weather like?",
        ],
        "hours": [
            "What are your hours?",
            "What time do you open today?",
        ],
    }

    MAX_INPUT_LENGTH = 500

    def __init__(self, fast: bool = False) -> None:
        delay: Optional[float] = 0.0 if fast else None
        self.chat = DialogueSession(
            build_provider(settings),
            navigator=self._navigate,
            notifier=self._notify,
            typing_delay=delay,
            follow_up_delay=delay,
            navigation_delay=delay,
        )

    def bot_say(self, message: ChatMessage) -> None:
        print(f"{GREEN}{BOLD}[{settings.business.name}]{RESET} {GREEN}{message.text}{RESET}")

    def system_log(self, text: str) -> None:
        print(f"{DIM}  >> {text}{RESET}")

    def _navigate(self) -> None:
        self.system_log(f"Navigating to {settings.business.booking_path}")

    def _notify(self, title: str, description: str) -> None:
        print(f"{RED}{BOLD}{title}{RESET} {RED}{description}{RESET}")

    def _banner(self, title: str) -> None:
        print()
        print(f"{BOLD}{'=' * 60}{RESET}")
        print(f"{BOLD}  BARBERSHOP CHAT - {title}{RESET}")
        print(f"{BOLD}  Business: {settings.business.name}{RESET}")
        print(f"{BOLD}{'=' * 60}{RESET}")
        print()

    async def _send(self, text: str) -> None:
        for message in await self.chat.submit(text):
            self.bot_say(message)
        self.system_log(
            f"Context: {self.chat.context.value if self.chat.context else None}"
        )

    async def run_scenario(self, scenario: str) -> None:
        """Auto-play a pre-scripted scenario for demo purposes."""
        steps = self.SCENARIOS.get(scenario)
        if not steps:
            print(f"{RED}Unknown scenario: {scenario}{RESET}")
            return

        self._banner(f"Scenario: {scenario}")
        async with self.chat:
            self.chat.open()
            for step in steps:
                print(f"\n{BLUE}[Visitor] {RESET}{step}")
                await self._send(step)
            await self.chat.wait_pending()

        print(f"\n{BOLD}{'=' * 60}{RESET}")
        print(f"{BOLD}  Scenario '{scenario}' complete.{RESET}")
        print(f"{DIM}  Messages: {len(self.chat.messages)}{RESET}")
        print(f"{BOLD}{'=' * 60}{RESET}")

    async def run(self) -> None:
        self._banner("Console Demo (type 'quit' to exit)")
        async with self.chat:
            self.chat.open()
            while self.chat.is_open:
                user_input = (await asyncio.to_thread(input, f"\n{BLUE}[Visitor] {RESET}")).strip()
                if not user_input:
                    continue
                if user_input.lower() in ("quit", "exit", "q"):
                    print(f"\n{DIM}Session ended.{RESET}")
                    return
                if len(user_input) > self.MAX_INPUT_LENGTH:
                    print(f"{YELLOW}That was quite long. Could you keep it brief?{RESET}")
                    continue
                await self._send(user_input)
                # A confirmed booking closes the chat once navigation runs
                await self.chat.wait_pending()

        print(f"\n{DIM}Chat closed.{RESET}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Offline console demo")
    parser.add_argument(
        "--scenario",
        choices=sorted(ConsoleSession.SCENARIOS),
        default=None,
        help="Auto-play a pre-scripted scenario instead of interactive mode",
    )
    parser.add_argument(
        "--fast", action="store_true", help="Skip the typing and navigation delays"
    )
    args = parser.parse_args()

    session = ConsoleSession(fast=args.fast)
    if args.scenario:
        asyncio.run(session.run_scenario(args.scenario))
    else:
        asyncio.run(session.run())


if __name__ == "__main__":
    main()
