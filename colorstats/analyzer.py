"""Top-level facade: average, most used and least used color of an image."""
import asyncio
import os
from enum import Enum
from typing import Callable, List, Optional

from .analysis.channel_averager import ChannelAverager
from .analysis.color_quantizer import ColorBucket, ColorQuantizer
from .analysis.request_queue import PendingRequest, RequestQueue
from .config import load_config
from .decoding.pixel_buffer import PixelBuffer
from .decoding.sources import ManualPixelSource, PillowPixelSource, PixelSource
from .errors import ColorStatsError, DecodeError, InvalidArgument
from .utils.color import format_rgb
from .utils.logger import get_logger

logger = get_logger(__name__)

ResultCallback = Callable[[str], None]


class AnalyzerState(Enum):
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


class ColorAnalyzer:
    """
    Representative colors of one image.

    Construction hands the source reference to a PixelSource. Until it
    delivers the pixels, statistic requests are queued; once it does, the
    queue is drained in submission order and later requests run
    immediately. Results are always delivered through the callback as an
    ``rgb(R, G, B)`` string.

    Example:
        analyzer = ColorAnalyzer("logo.png")
        analyzer.most_used(print)
    """

    def __init__(
        self,
        item,
        source: PixelSource = None,
        config: dict = None,
        config_path: str = None,
        preset: str = None,
        sample: int = None,
        on_error: Callable[[Exception], None] = None,
    ):
        """
        Args:
            item: Object with a ``src`` attribute, a string, or a path.
            source: Pixel source used to decode ``item``. Defaults to a
                synchronous Pillow decoder.
            config: Config overrides (see ``colorstats/config/defaults.yaml``).
            config_path: Path to a YAML config file.
            preset: Preset name ("fast", "balanced", "precise").
            sample: Sample stride; overrides the configured value.
            on_error: Called with a DecodeError if decoding fails, and with
                statistic errors raised while draining queued requests.
        """
        if on_error is not None and not callable(on_error):
            raise InvalidArgument("on_error must be callable")

        self.config = load_config(config, config_path, preset)
        self._source_ref = self._resolve_source(item)

        if sample is None:
            sample = self.config.get("analysis", {}).get("sample", 10)
        self.sample = sample

        self.width: Optional[int] = None
        self.height: Optional[int] = None
        self.size: Optional[int] = None

        self._buffer: Optional[PixelBuffer] = None
        self._ranking: Optional[List[ColorBucket]] = None
        self._error: Optional[DecodeError] = None
        self._state = AnalyzerState.LOADING
        self._queue = RequestQueue()
        self._waiters: List[asyncio.Future] = []
        self._on_error = on_error

        self._averager = ChannelAverager()
        self._quantizer = ColorQuantizer()

        self._pixel_source = source or PillowPixelSource(self.config)
        logger.info(f"Decoding image: {self._source_ref[:80]}")
        self._pixel_source.decode(self._source_ref, self._on_decoded, self._on_decode_failed)

    @classmethod
    def from_pixels(cls, data: bytes, width: int, height: int, **kwargs) -> "ColorAnalyzer":
        """Build a ready analyzer over RGBA bytes that are already decoded."""
        buffer = PixelBuffer(data, width, height)
        source = ManualPixelSource()
        analyzer = cls("<pixels>", source=source, **kwargs)
        source.complete(buffer)
        return analyzer

    @staticmethod
    def _resolve_source(item) -> str:
        """Normalize a descriptor with ``src``, a string, or a path to one reference."""
        src = getattr(item, "src", None)
        if isinstance(src, str) and src:
            return src
        if isinstance(item, str):
            return item
        if isinstance(item, os.PathLike):
            return os.fspath(item)
        raise InvalidArgument(f"Unsupported image source: {item!r}")

    # --- Configuration & state ---

    @property
    def sample(self) -> int:
        return self._sample

    @sample.setter
    def sample(self, value: int):
        if isinstance(value, bool) or not isinstance(value, int) or value < 1:
            raise InvalidArgument(f"sample must be an integer >= 1, got {value!r}")
        self._sample = value

    @property
    def state(self) -> AnalyzerState:
        return self._state

    @property
    def ready(self) -> bool:
        return self._state is AnalyzerState.READY

    @property
    def source_ref(self) -> str:
        return self._source_ref

    @property
    def color_ranking(self) -> Optional[List[ColorBucket]]:
        """Memoized bucket ranking, most frequent first. None while loading."""
        if self._state is AnalyzerState.FAILED:
            raise self._error
        if self._state is AnalyzerState.LOADING:
            return None
        self._ensure_ranking()
        return list(self._ranking)

    async def wait_ready(self):
        """
        Wait until the pixels are available.

        Only useful with a source that completes on the running event loop.

        Raises:
            DecodeError: If decoding failed.
        """
        if self._state is AnalyzerState.READY:
            return
        if self._state is AnalyzerState.FAILED:
            raise self._error

        waiter = asyncio.get_running_loop().create_future()
        self._waiters.append(waiter)
        await waiter

    # --- Decode events ---

    def _on_decoded(self, buffer: PixelBuffer):
        if self._state is not AnalyzerState.LOADING:
            logger.warning(f"Ignoring extra decode completion for {self._source_ref[:80]}")
            return

        self.width = buffer.width
        self.height = buffer.height
        self.size = buffer.size
        self._buffer = buffer
        self._state = AnalyzerState.READY

        pending = self._queue.take_all()
        if pending:
            logger.info(f"Image ready ({self.width}x{self.height}), running {len(pending)} queued request(s)")

        unhandled = []
        for request in pending:
            try:
                request.callback(request.operation())
            except ColorStatsError as e:
                logger.error(f"Queued {request.name} request failed: {e}")
                if self._on_error is None:
                    unhandled.append(e)
                    continue
                try:
                    self._on_error(e)
                except Exception as handler_error:
                    logger.error(f"on_error handler raised: {handler_error}", exc_info=True)
                    unhandled.append(handler_error)
            except Exception as e:
                logger.error(f"Callback for queued {request.name} request raised: {e}", exc_info=True)
                unhandled.append(e)

        self._wake_waiters()

        if unhandled:
            raise unhandled[0]

    def _on_decode_failed(self, error: Exception):
        if self._state is not AnalyzerState.LOADING:
            logger.warning(f"Ignoring decode failure after completion: {error}")
            return

        if not isinstance(error, DecodeError):
            wrapped = DecodeError(str(error))
            wrapped.__cause__ = error
            error = wrapped

        self._error = error
        self._state = AnalyzerState.FAILED
        dropped = self._queue.clear()
        logger.error(f"Decoding failed for {self._source_ref[:80]}: {error} ({dropped} queued request(s) dropped)")

        self._wake_waiters()

        if self._on_error is not None:
            self._on_error(error)

    def _wake_waiters(self):
        waiters, self._waiters = self._waiters, []
        for waiter in waiters:
            if waiter.done():
                continue
            if self._error is not None:
                waiter.set_exception(self._error)
            else:
                waiter.set_result(None)

    # --- Dispatch ---

    def _call(self, callback: ResultCallback, operation: Callable[[], object], name: str):
        if not callable(callback):
            raise InvalidArgument("Callback is not provided.")

        if self._state is AnalyzerState.FAILED:
            raise self._error

        if self._state is AnalyzerState.LOADING:
            self._queue.push(PendingRequest(callback, operation, name))
            logger.debug(f"Queued {name} request ({len(self._queue)} pending)")
            return

        callback(operation())

    # --- Statistics ---

    def _average(self) -> str:
        return format_rgb(self._averager.average(self._buffer, self.sample))

    def _ensure_ranking(self):
        if self._ranking is None:
            self._ranking = self._quantizer.rank(self._buffer, self.sample)

    def _most_used(self) -> str:
        self._ensure_ranking()
        return self._ranking[0].rgb

    def _least_used(self) -> str:
        self._ensure_ranking()
        return self._ranking[-1].rgb

    def _summary(self) -> dict:
        return {
            "average": self._average(),
            "most_used": self._most_used(),
            "least_used": self._least_used(),
        }

    # --- External API ---

    def average(self, callback: ResultCallback):
        """Deliver the mean color of the sampled opaque pixels."""
        self._call(callback, self._average, "average")

    def most_used(self, callback: ResultCallback):
        """Deliver the most frequent quantized color."""
        self._call(callback, self._most_used, "most_used")

    def least_used(self, callback: ResultCallback):
        """Deliver the least frequent quantized color."""
        self._call(callback, self._least_used, "least_used")

    def summary(self, callback: Callable[[dict], None]):
        """Deliver all three statistics as a dict keyed by statistic name."""
        self._call(callback, self._summary, "summary")
