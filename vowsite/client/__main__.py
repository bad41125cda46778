"""
Run the vows display client.

    python -m vowsite.client --api-base http://localhost:3001 --output vows.html
    python -m vowsite.client --language pt --once

While running, SIGUSR1 switches between English and Portuguese.
"""
import argparse
import asyncio
import signal

from vowsite.core.config import settings
from vowsite.core.logging import configure_logging
from vowsite.client.api import VowsApiClient
from vowsite.client.poller import VowsPoller
from vowsite.client.storage import LocalStorage
from vowsite.client.view import FileSink, VowsView


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Poll the VowSite API and render the vows page.")
    parser.add_argument("--api-base", default=settings.client_api_base)
    parser.add_argument("--output", default=settings.client_output_path, help="HTML file to write")
    parser.add_argument("--storage", default=settings.client_storage_path, help="JSON file for local state")
    parser.add_argument("--interval", type=float, default=settings.poll_interval_seconds)
    parser.add_argument("--language", choices=["en", "pt"], help="Switch and remember the display language")
    parser.add_argument("--once", action="store_true", help="Poll once and exit")
    return parser.parse_args(argv)


def install_signal_handlers(loop: asyncio.AbstractEventLoop, poller: VowsPoller, stop: asyncio.Event) -> None:
    """SIGINT/SIGTERM stop the client; SIGUSR1 toggles the display language."""
    handlers = [(signal.SIGINT, stop.set), (signal.SIGTERM, stop.set)]
    toggle = getattr(signal, "SIGUSR1", None)
    if toggle is not None:
        handlers.append((toggle, poller.toggle_language))
    for sig, handler in handlers:
        try:
            loop.add_signal_handler(sig, handler)
        except NotImplementedError:
            pass


async def run(args: argparse.Namespace) -> None:
    async with VowsApiClient(args.api_base) as api:
        poller = VowsPoller(
            api,
            LocalStorage(args.storage),
            FileSink(args.output),
            view=VowsView(refresh_seconds=args.interval),
            interval=args.interval,
        )
        if args.language:
            poller.set_language(args.language)
        if args.once:
            await poller.tick()
            return

        stop = asyncio.Event()
        install_signal_handlers(asyncio.get_running_loop(), poller, stop)
        poller.start()
        try:
            await stop.wait()
        finally:
            await poller.stop()


def main(argv: list[str] | None = None) -> None:
    configure_logging()
    asyncio.run(run(parse_args(argv)))


if __name__ == "__main__":
    main()
