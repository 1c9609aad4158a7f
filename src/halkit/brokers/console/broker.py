"""Console broker: events from a line-oriented text stream."""

from __future__ import annotations

import asyncio
import concurrent.futures
import contextlib
import logging
import sys
import threading
from collections.abc import Sequence
from datetime import UTC, datetime
from typing import TextIO

from halkit.brokers.base import Broker
from halkit.brokers.console.config import ConsoleConfig
from halkit.core.errors import BrokerIOError
from halkit.core.table import utf8_table
from halkit.models.event import Event, PlainTextPayload, ReactionPayload

logger = logging.getLogger("halkit.brokers.console")

REACTION_COMMAND = "reaction"


class ConsoleBroker(Broker):
    """Broker for local interactive sessions over stdin/stdout.

    Three pumps share two bounded queues:

    - :meth:`read_input` puts non-empty input lines on ``inbound``.
    - :meth:`stream` turns inbound lines into events for the plugin side.
    - :meth:`write_output` writes everything replies put on ``outbound``.

    A full queue blocks its producer; nothing is dropped. :meth:`run` starts
    all three.

    Example:
        broker = ConsoleBroker(ConsoleConfig(room="dev"))
        events: asyncio.Queue[Event] = asyncio.Queue()
        await broker.run(events)
    """

    def __init__(self, config: ConsoleConfig | None = None) -> None:
        self._config = config or ConsoleConfig()
        self.inbound: asyncio.Queue[str] = asyncio.Queue(maxsize=self._config.queue_size)
        self.outbound: asyncio.Queue[str] = asyncio.Queue(maxsize=self._config.queue_size)

    @property
    def name(self) -> str:
        return self._config.room

    @property
    def user(self) -> str:
        return self._config.user

    @property
    def room(self) -> str:
        return self._config.room

    # -------------------------------------------------------------------------
    # Outbound
    # -------------------------------------------------------------------------

    async def send(self, event: Event) -> None:
        await self.outbound.put(event.body)

    async def send_dm(self, event: Event) -> None:
        # one user, one terminal
        await self.outbound.put(event.body)

    async def send_table(
        self, event: Event, header: Sequence[str], rows: Sequence[Sequence[str]]
    ) -> None:
        await self.outbound.put(utf8_table(header, rows))

    # -------------------------------------------------------------------------
    # Pumps
    # -------------------------------------------------------------------------

    async def read_input(self, source: TextIO | None = None) -> None:
        """Read lines from *source* (default stdin) until EOF.

        Lines are read on a daemon thread, so a reader blocked on a silent
        terminal never keeps the process alive once the pumps have stopped.
        The thread waits on each ``inbound.put``, so a full queue blocks it.
        """
        source = source if source is not None else sys.stdin
        loop = asyncio.get_running_loop()
        finished: asyncio.Future[None] = loop.create_future()

        def _finish(exc: OSError | None) -> None:
            if finished.done():
                return
            if exc is None:
                finished.set_result(None)
            else:
                finished.set_exception(exc)

        def _reader() -> None:
            error: OSError | None = None
            try:
                for raw in iter(source.readline, ""):
                    line = raw.rstrip("\r\n")
                    if not line:
                        continue
                    asyncio.run_coroutine_threadsafe(self.inbound.put(line), loop).result()
            except OSError as exc:
                error = exc
            except (RuntimeError, concurrent.futures.CancelledError):
                # event loop closed or put cancelled: nobody left to read for
                return
            with contextlib.suppress(RuntimeError):
                loop.call_soon_threadsafe(_finish, error)

        threading.Thread(target=_reader, name="console-input", daemon=True).start()
        try:
            await finished
        except OSError as exc:
            logger.critical("Failed while reading input: %s", exc)
            raise BrokerIOError(f"failed while reading input: {exc}") from exc
        logger.debug("Console input closed")

    async def write_output(self, sink: TextIO | None = None) -> None:
        """Write queued outbound text to *sink* (default stdout), forever."""
        sink = sink if sink is not None else sys.stdout
        while True:
            text = await self.outbound.get()
            try:
                sink.write(text)
                sink.flush()
            except OSError as exc:
                logger.critical("Could not write output: %s", exc)
                raise BrokerIOError(f"could not write output: {exc}") from exc
            finally:
                self.outbound.task_done()

    async def stream(self, out: asyncio.Queue[Event]) -> None:
        """Turn inbound lines into events on *out*, one at a time, in order."""
        while True:
            line = await self.inbound.get()
            try:
                event = await self.process_line(line)
                if event is not None:
                    await out.put(event)
            finally:
                self.inbound.task_done()

    async def run(
        self,
        out: asyncio.Queue[Event],
        source: TextIO | None = None,
        sink: TextIO | None = None,
    ) -> None:
        """Run all three pumps until one of them fails.

        The first failure cancels the other pumps and propagates.
        """
        tasks = [
            asyncio.create_task(self.read_input(source), name="console-input"),
            asyncio.create_task(self.write_output(sink), name="console-output"),
            asyncio.create_task(self.stream(out), name="console-stream"),
        ]
        try:
            await asyncio.gather(*tasks)
        finally:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)

    # -------------------------------------------------------------------------
    # Events
    # -------------------------------------------------------------------------

    def make_event(self, line: str) -> Event:
        return Event(
            user=self.user,
            user_id=self.user,
            room=self.room,
            room_id=self.room,
            body=line,
            time=datetime.now(UTC),
            broker=self,
            original=PlainTextPayload(text=line),
        )

    async def process_line(self, line: str) -> Event | None:
        """Build the event for one input line, or ``None`` if it is consumed here.

        Lines starting with the command prefix are slash commands.
        ``/reaction <name>`` becomes a reaction event; any other slash
        command is not forwarded.
        """
        event = self.make_event(line)
        prefix = self._config.command_prefix
        if not line.startswith(prefix):
            return event

        args = event.body_as_argv()
        command = args[0][len(prefix) :] if args else ""
        if command == REACTION_COMMAND:
            if len(args) == 2:
                event.body = args[1]
                event.original = ReactionPayload(reaction=args[1])
                return event
            await event.reply(f"{prefix}{REACTION_COMMAND} requires exactly one argument!")
            return None

        logger.debug("Dropping unrecognized command %r", args[0] if args else line)
        return None

    # -------------------------------------------------------------------------
    # Identity translation (ids and names are the same on the console)
    # -------------------------------------------------------------------------

    def room_id_to_name(self, room_id: str) -> str:
        return room_id

    def room_name_to_id(self, name: str) -> str:
        return name

    def user_id_to_name(self, user_id: str) -> str:
        return user_id

    def user_name_to_id(self, name: str) -> str:
        return name
