"""Interactive CLI simulator — walk through the OTP login flow in a terminal."""

from __future__ import annotations

import asyncio
import logging
import threading
from collections.abc import Callable
from datetime import datetime

from otp_auth.config import settings
from otp_auth.models.auth_state import Authenticated, AuthSnapshot, Initial, OtpSent
from otp_auth.orchestrator.auth_orchestrator import AuthOrchestrator
from otp_auth.services.clock import SystemClock

BLUE = "\033[94m"
GREEN = "\033[92m"
YELLOW = "\033[93m"
RED = "\033[91m"
DIM = "\033[2m"
BOLD = "\033[1m"
RESET = "\033[0m"

# Countdown turns red at or below this many seconds
LOW_TIME_SECONDS = 10

logger = logging.getLogger(__name__)


def format_clock(seconds: int) -> str:
    """Render a duration as ``mm:ss``."""
    seconds = max(int(seconds), 0)
    return f"{seconds // 60:02d}:{seconds % 60:02d}"


def format_timestamp(epoch_seconds: float) -> str:
    """Render an epoch timestamp the way the session screen shows it."""
    return datetime.fromtimestamp(epoch_seconds).strftime("%b %d, %Y %I:%M:%S %p")


def render(snapshot: AuthSnapshot, now: float) -> str:
    """Build the text for the screen matching *snapshot*'s state."""
    state = snapshot.state
    lines: list[str] = []

    if isinstance(state, Initial):
        lines.append(f"{BOLD}Login{RESET}")
        lines.append(f"{DIM}Enter your email address to receive a one-time code.{RESET}")

    elif isinstance(state, OtpSent):
        view = snapshot.countdown
        lines.append(f"{BOLD}Verify OTP{RESET} for {state.identity}")
        # Delivery is simulated: show the code that would have been sent
        lines.append(f"{DIM}Code sent (demo): {state.code}{RESET}")
        if view.is_expired:
            lines.append(f"{RED}OTP Expired{RESET}")
        else:
            colour = RED if view.remaining_seconds <= LOW_TIME_SECONDS else ""
            lines.append(
                f"{colour}Time remaining: {format_clock(view.remaining_seconds)}{RESET}"
                f"    Attempts: {view.attempts_remaining}"
            )
        lines.append(f"{DIM}Type the code, 'resend', 'logout' or 'quit'.{RESET}")

    elif isinstance(state, Authenticated):
        elapsed = int(now - state.session_started_at)
        lines.append(f"{GREEN}{BOLD}Welcome!{RESET} Signed in as {state.identity}")
        lines.append(f"Session started: {format_timestamp(state.session_started_at)}")
        lines.append(f"Session duration: {format_clock(elapsed)}")
        lines.append(f"{DIM}Type 'logout' or 'quit'; press Enter to refresh.{RESET}")

    if snapshot.error:
        lines.append(f"{RED}{snapshot.error}{RESET}")

    return "\n".join(lines)


async def dispatch(orchestrator: AuthOrchestrator, user_input: str) -> None:
    """Forward one line of input to the orchestrator as the matching intent."""
    state = orchestrator.state
    command = user_input.lower()

    if command == "logout":
        await orchestrator.logout()
        return

    if isinstance(state, OtpSent):
        if command == "resend":
            await orchestrator.resend()
        else:
            await orchestrator.submit_code(state.identity, user_input)
        return

    if isinstance(state, Initial):
        await orchestrator.request_code(user_input)
        return

    # Authenticated: anything other than logout just re-renders
    orchestrator.clear_error()


class ExpiryNotice:
    """Observer that announces, once per code, when the countdown runs out.

    The main loop only re-renders after input, so without this the user
    would not learn about expiry until they typed something.
    """

    def __init__(self, write: Callable[[str], None] = print) -> None:
        self._write = write
        self._announced: OtpSent | None = None

    def __call__(self, snapshot: AuthSnapshot) -> None:
        state = snapshot.state
        if not isinstance(state, OtpSent) or not snapshot.countdown.is_expired:
            return
        if state == self._announced:
            return
        self._announced = state
        logger.debug("Countdown reached expiry for %s", state.identity)
        self._write(f"\n{RED}OTP Expired.{RESET} Type 'resend' for a new code.")


async def read_line(prompt: str) -> str:
    """Read one line of input without blocking the event loop.

    ``input()`` runs on a daemon thread, so an abandoned read (Ctrl+C,
    shutdown) never keeps the interpreter alive.
    """
    loop = asyncio.get_running_loop()
    future: asyncio.Future[str] = loop.create_future()

    def deliver(line: str | None, exc: BaseException | None) -> None:
        if future.done():
            return
        if exc is not None:
            future.set_exception(exc)
        else:
            future.set_result(line)

    def worker() -> None:
        try:
            line = input(prompt)
        except EOFError as exc:
            loop.call_soon_threadsafe(deliver, None, exc)
        else:
            loop.call_soon_threadsafe(deliver, line, None)

    threading.Thread(target=worker, name="simulator-input", daemon=True).start()
    return await future


async def main() -> None:
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.WARNING,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    )

    print(f"\n{BOLD}{'=' * 52}")
    print(f"  🔐  {settings.app_name} — Login Simulator")
    print(f"{'=' * 52}{RESET}\n")
    print(f"{DIM}Codes expire after {settings.otp_ttl_seconds}s and allow "
          f"{settings.otp_max_attempts} attempts. Type 'quit' to exit.{RESET}\n")

    clock = SystemClock()
    orchestrator = AuthOrchestrator(clock=clock)
    unsubscribe = orchestrator.subscribe(ExpiryNotice())

    try:
        while True:
            print(render(orchestrator.snapshot, clock.now()))
            try:
                user_input = (await read_line(f"{BLUE}{BOLD}>{RESET} ")).strip()
            except (KeyboardInterrupt, EOFError, asyncio.CancelledError):
                print(f"\n{DIM}Goodbye!{RESET}")
                break

            if user_input.lower() == "quit":
                print(f"{DIM}Goodbye!{RESET}")
                break

            if not user_input and not isinstance(orchestrator.state, Authenticated):
                continue

            await dispatch(orchestrator, user_input)
            print()
    finally:
        unsubscribe()
        orchestrator.close()


def run() -> None:
    """Console-script entry point."""
    asyncio.run(main())


if __name__ == "__main__":
    run()
