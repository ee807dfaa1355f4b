"""Storefront - console application entry point."""

from __future__ import annotations

import asyncio
import logging
import logging.handlers
import os
from pathlib import Path

from dotenv import load_dotenv
from rich.console import Console

from storefront.app.state import Store
from storefront.app.ui.commands import HELP, QUIT_COMMANDS, CommandError, parse_command
from storefront.app.ui.renderer import ScreenRenderer
from storefront.app.ui.view_model import project
from storefront.shared.core import events
from storefront.shared.core.configuration import StorefrontConfig, get_config
from storefront.shared.core.event_bus import EventBus, EventPayload

PROJECT_ROOT = Path(__file__).parent.parent.parent.resolve()
LOGS_DIR = PROJECT_ROOT / "data" / "logs"

logger = logging.getLogger(__name__)

LOG_STYLES = {
    "info": "dim",
    "success": "bold green",
    "warning": "yellow",
    "error": "bold red",
}


def configure_logging(logs_dir: Path = LOGS_DIR) -> Path:
    """Log everything at LOG_LEVEL to a rotating file; only warnings to the terminal."""
    logs_dir.mkdir(parents=True, exist_ok=True)
    log_file_path = logs_dir / "storefront.log"

    log_level_str = os.getenv("LOG_LEVEL", "DEBUG").upper()
    log_level_map = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }
    file_log_level = log_level_map.get(log_level_str, logging.DEBUG)

    root_logger = logging.getLogger()
    root_logger.setLevel(file_log_level)
    root_logger.handlers.clear()

    file_handler = logging.handlers.RotatingFileHandler(
        log_file_path,
        maxBytes=10 * 1024 * 1024,  # 10MB
        backupCount=5,
        encoding='utf-8'
    )
    file_handler.setLevel(file_log_level)
    file_handler.setFormatter(logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    ))
    root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(logging.Formatter(
        "%(asctime)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S"
    ))
    root_logger.addHandler(console_handler)

    # asyncio debug chatter drowns the state transitions
    logging.getLogger("asyncio").setLevel(logging.WARNING)

    logger.info(f"Logging configured: file={log_file_path}, console=WARNING+")
    return log_file_path


class ConsoleApp:
    """Redraws on every state change and feeds typed commands to the store."""

    def __init__(self, store: Store, config: StorefrontConfig, console: Console | None = None):
        self.store = store
        self.config = config
        self.console = console or Console()
        self.renderer = ScreenRenderer(config.ui)

    async def start(self) -> None:
        bus = self.store.machine.bus
        await bus.subscribe(events.TOPIC_STATE_CHANGED, self._handle_state_changed)
        await bus.subscribe(events.TOPIC_ACTION_REJECTED, self._handle_action_rejected)
        await bus.subscribe(events.TOPIC_LOGS_EVENT, self._handle_logs_event)
        await self.store.machine.initialize()

    def redraw(self) -> None:
        self.console.clear()
        self.console.print(self.renderer.render(project(self.store.machine.state)))

    async def run(self) -> None:
        """Read commands until quit. Timers are torn down however the loop ends."""
        try:
            await self.start()
            self.redraw()
            self.console.print(HELP, style="dim")
            await self._read_commands()
        finally:
            await self.store.machine.teardown()

    async def _read_commands(self) -> None:
        while True:
            line = await asyncio.to_thread(self.console.input, "> ")
            if line.strip().lower() in QUIT_COMMANDS:
                return
            if line.strip().lower() == "help":
                self.console.print(HELP, style="dim")
                continue
            try:
                action = parse_command(line, self.store.machine.state)
            except CommandError as exc:
                self.console.print(str(exc), style="yellow")
                continue
            if action is not None:
                await self.store.machine.bus.publish(
                    events.TOPIC_USER_ACTION, events.create_user_action_event(action)
                )

    async def _handle_state_changed(self, payload: EventPayload) -> None:
        self.redraw()

    async def _handle_action_rejected(self, payload: EventPayload) -> None:
        self.console.print(payload.get("reason", "Action rejected"), style="yellow")

    async def _handle_logs_event(self, payload: EventPayload) -> None:
        style = LOG_STYLES.get(payload.get("level"), "")
        self.console.print(payload.get("message", ""), style=style)


async def run_app() -> None:
    config = get_config()
    event_bus = EventBus()
    store = Store.initialize(event_bus, delays=config.delays)
    try:
        await ConsoleApp(store, config).run()
    finally:
        await event_bus.wait_until_idle(timeout=1.0)
        await event_bus.close()
        Store.reset()


def main() -> None:
    load_dotenv(dotenv_path=PROJECT_ROOT / ".env")
    configure_logging()
    logger.info("Starting storefront console")
    try:
        asyncio.run(run_app())
    except (KeyboardInterrupt, EOFError):
        logger.info("Storefront interrupted")


if __name__ == "__main__":
    main()
