"""
Sonos grouping - interactive menu

Run with: python -m sonos_group
"""

import argparse
import asyncio
import logging
import sys

import aiohttp

from sonos_group import __version__
from sonos_group.combinations import describe
from sonos_group.errors import InvalidSelection, SonosGroupError
from sonos_group.models import Speaker
from sonos_group.session import SessionController
from sonos_group.settings import load_settings

logger = logging.getLogger("sonos_group")

MENU = """
1: Create group
2: Preset group
3: Ungroup all
4: Play track
5: Exit
"""


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the application."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logging.getLogger("asyncio").setLevel(logging.WARNING)


def parse_args(argv=None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="sonos-group",
        description="Regroup Sonos speakers through node-sonos-http-api",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--base-url", help="Control surface URL (default: http://127.0.0.1:5005)")
    parser.add_argument("-c", "--config", help="TOML configuration file")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser.parse_args(argv)


async def ask(prompt: str) -> str:
    return (await asyncio.to_thread(input, prompt)).strip()


def parse_index(text: str) -> int:
    try:
        return int(text)
    except ValueError:
        raise InvalidSelection(f"Not a number: {text!r}") from None


async def choose_from(options) -> int:
    print("\nAvailable options:")
    for index, option in enumerate(options, start=1):
        label = option if not isinstance(option, tuple) else describe(option)
        print(f"{index}: {label}")
    return parse_index(await ask("\nEnter option number: "))


async def confirm_resume(desired) -> bool:
    answer = await ask(f"Resume playback on {desired.coordinator}? [y/N]: ")
    return answer.lower() in ("y", "yes")


async def play_track(controller: SessionController, default_uri) -> None:
    room = await ask("Speaker room name: ")
    if not room:
        raise InvalidSelection("No room given")
    uri = await ask(f"Track URI [{default_uri or ''}]: ") or default_uri
    if not uri:
        raise InvalidSelection("No track URI given")
    await controller.play(Speaker(room), uri)


async def run_menu(controller: SessionController, track_uri=None) -> None:
    """Loop over the menu until the operator exits."""
    while True:
        print(MENU)
        choice = await ask("Choose an action: ")
        try:
            if choice == "1":
                result = await controller.create_group(choose_from, confirm_resume)
            elif choice == "2":
                result = await controller.preset_group(choose_from, confirm_resume)
            elif choice == "3":
                await controller.ungroup_all()
                print("All speakers ungrouped")
                continue
            elif choice == "4":
                await play_track(controller, track_uri)
                continue
            elif choice == "5":
                return
            else:
                print(f"Unknown action: {choice}")
                continue
        except InvalidSelection as e:
            print(f"Invalid selection: {e}")
            continue
        except SonosGroupError as e:
            logger.error(str(e))
            print(f"Failed: {e}. Try again from the menu.")
            continue

        print(f"Group ready: {result.desired}")
        if result.resume_warning:
            print(str(result.resume_warning))


async def run(settings) -> None:
    timeout = aiohttp.ClientTimeout(total=settings.request_timeout)
    async with aiohttp.ClientSession(timeout=timeout) as session:
        controller = SessionController(session, settings)
        await run_menu(controller, settings.track_uri)


def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging(args.verbose)
    try:
        settings = load_settings(args.config)
    except (OSError, ValueError) as e:
        logger.error(f"Configuration error: {e}")
        return 1
    if args.base_url:
        settings.base_url = args.base_url

    try:
        asyncio.run(run(settings))
    except (KeyboardInterrupt, EOFError):
        print()
    return 0


if __name__ == "__main__":
    sys.exit(main())
