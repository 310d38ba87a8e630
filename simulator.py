"""Interactive CLI simulator — exercise the password-reset code flow without HTTP."""

import asyncio
import logging

from food_order.config import settings
from food_order.otp.manager import OtpManager, OtpOutcome

BLUE = "\033[94m"
GREEN = "\033[92m"
YELLOW = "\033[93m"
RED = "\033[91m"
DIM = "\033[2m"
BOLD = "\033[1m"
RESET = "\033[0m"


async def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    )

    print(f"\n{BOLD}{'=' * 52}")
    print(f"  🍔  {settings.app_name} — Reset Code Simulator")
    print(f"{'=' * 52}{RESET}\n")

    print(f"{DIM}Type 'quit' to exit, 'resend' for a new code, 'switch' to change email{RESET}")
    if not settings.smtp_host and settings.debug:
        print(f"{DIM}     SMTP_HOST is not set: codes are printed in the logs{RESET}")
    elif not settings.smtp_host:
        print(f"{DIM}     SMTP_HOST is not set: run with DEBUG=true to see codes in the logs{RESET}")
    print()

    manager = OtpManager()

    email = input(f"{YELLOW}Email address: {RESET}").strip() or "alice@example.com"
    if await manager.issue(email):
        print(f"{GREEN}{BOLD}Server:{RESET} Code sent to {email}\n")
    else:
        print(f"{RED}{BOLD}Server:{RESET} Could not send a code to {email}\n")

    while True:
        try:
            user_input = input(f"{BLUE}{BOLD}Code:{RESET} ").strip()
        except (KeyboardInterrupt, EOFError):
            print(f"\n{DIM}Goodbye!{RESET}")
            break

        if not user_input:
            continue

        command = user_input.lower()
        if command == "quit":
            print(f"{DIM}Goodbye!{RESET}")
            break

        if command == "switch":
            email = input(f"{YELLOW}New email address: {RESET}").strip()
            print(f"{DIM}Switched to {email}{RESET}\n")
            continue

        if command == "resend":
            sent = await manager.issue(email)
            colour = GREEN if sent else RED
            status = "Code sent" if sent else "Could not send a code"
            print(f"{colour}{BOLD}Server:{RESET} {status} to {email}\n")
            continue

        outcome = await manager.verify(email, user_input)
        colour = GREEN if outcome is OtpOutcome.VERIFIED else RED
        print(f"{colour}{BOLD}Server:{RESET} {outcome.message}\n")


if __name__ == "__main__":
    asyncio.run(main())
