"""Pixel sources: collaborators that turn a source reference into a PixelBuffer."""
import asyncio
from typing import Callable, Optional

from .loader import load_pixels
from .pixel_buffer import PixelBuffer
from ..errors import DecodeError
from ..utils.logger import get_logger

logger = get_logger(__name__)

CompleteCallback = Callable[[PixelBuffer], None]
ErrorCallback = Callable[[Exception], None]


class PixelSource:
    """
    Base collaborator.

    ``decode`` must call ``on_complete`` at most once with the decoded
    buffer, or ``on_error`` with a DecodeError if decoding fails.
    """

    def decode(
        self,
        source_ref: str,
        on_complete: CompleteCallback,
        on_error: ErrorCallback,
    ) -> None:
        raise NotImplementedError


class PillowPixelSource(PixelSource):
    """Decode synchronously with Pillow; completion fires before ``decode`` returns."""

    def __init__(self, config: dict = None):
        dec_cfg = (config or {}).get("decoding", {})
        self.timeout = dec_cfg.get("timeout")
        self.max_dimension = dec_cfg.get("max_dimension")

    def decode(self, source_ref, on_complete, on_error):
        try:
            buffer = load_pixels(source_ref, self.timeout, self.max_dimension)
        except DecodeError as e:
            on_error(e)
            return
        on_complete(buffer)


class AsyncPixelSource(PixelSource):
    """
    Decode in the running event loop's default executor.

    Completion and failure are delivered on the event loop thread, so the
    analyzer state is only ever touched from one thread.
    """

    def __init__(self, config: dict = None, loop: asyncio.AbstractEventLoop = None):
        dec_cfg = (config or {}).get("decoding", {})
        self.timeout = dec_cfg.get("timeout")
        self.max_dimension = dec_cfg.get("max_dimension")
        self._loop = loop
        self.task: Optional[asyncio.Task] = None

    def decode(self, source_ref, on_complete, on_error):
        loop = self._loop or asyncio.get_running_loop()
        self.task = loop.create_task(self._run(loop, source_ref, on_complete, on_error))

    async def _run(self, loop, source_ref, on_complete, on_error):
        work = loop.run_in_executor(
            None, load_pixels, source_ref, self.timeout, self.max_dimension
        )
        try:
            if self.timeout:
                buffer = await asyncio.wait_for(work, self.timeout)
            else:
                buffer = await work
        except asyncio.TimeoutError:
            logger.warning(f"Decode timed out after {self.timeout}s: {source_ref[:80]}")
            on_error(DecodeError(f"Decoding {source_ref} timed out after {self.timeout}s"))
            return
        except DecodeError as e:
            on_error(e)
            return
        except Exception as e:
            logger.error(f"Unexpected error decoding {source_ref[:80]}: {e}", exc_info=True)
            on_error(e)
            return
        on_complete(buffer)


class ManualPixelSource(PixelSource):
    """
    Source completed by its owner.

    Useful when the pixels come from somewhere else (another decoder, a
    rendering surface) or to control exactly when an analyzer becomes ready.
    """

    def __init__(self):
        self.source_ref: Optional[str] = None
        self._on_complete: Optional[CompleteCallback] = None
        self._on_error: Optional[ErrorCallback] = None

    @property
    def pending(self) -> bool:
        return self._on_complete is not None

    def decode(self, source_ref, on_complete, on_error):
        self.source_ref = source_ref
        self._on_complete = on_complete
        self._on_error = on_error

    def complete(self, buffer: PixelBuffer):
        """Deliver the decoded buffer. A second delivery raises RuntimeError."""
        on_complete, _ = self._take()
        on_complete(buffer)

    def fail(self, error: Exception):
        """Report that decoding failed."""
        _, on_error = self._take()
        if not isinstance(error, DecodeError):
            wrapped = DecodeError(str(error))
            wrapped.__cause__ = error
            error = wrapped
        on_error(error)

    def _take(self):
        if self._on_complete is None:
            raise RuntimeError("No decode is pending on this source")
        callbacks = (self._on_complete, self._on_error)
        self._on_complete = None
        self._on_error = None
        return callbacks
