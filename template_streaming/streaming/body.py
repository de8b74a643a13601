"""Pull-based response body fed by pushes from a running render."""

from collections.abc import Awaitable, Callable

import structlog

from template_streaming.core.errors import (
    StreamAlreadyConsumedError,
    StreamNotAttachedError,
)


logger = structlog.get_logger(__name__)

Consumer = Callable[[str], Awaitable[None]]
Producer = Callable[[], Awaitable[None]]

# Length of the comment delimiters "<!--" and "-->".
PADDING_OVERHEAD = 7


def padding(byte_count: int) -> str:
    """Return an HTML comment at least ``byte_count`` characters long."""
    return "<!--" + "-" * max(byte_count - PADDING_OVERHEAD, 0) + "-->"


class StreamingBody:
    """Response body whose chunks are pushed while the transport pulls it.

    The transport calls :meth:`each` with a consumer; that runs the producer,
    and every :meth:`push` made by the producer is handed straight to the
    consumer. The first chunk is padded up to ``threshold`` bytes so browsers
    that buffer small responses start rendering immediately.
    """

    def __init__(self, threshold: int, producer: Producer) -> None:
        self._producer = producer
        self._bytes_to_threshold = max(threshold, 0)
        self._consumer: Consumer | None = None
        self._consumed = False

    @property
    def bytes_to_threshold(self) -> int:
        return self._bytes_to_threshold

    @property
    def priming(self) -> bool:
        """True until the first chunk has been pushed."""
        return self._bytes_to_threshold > 0

    async def each(self, consumer: Consumer) -> None:
        """Run the producer, routing every push to ``consumer``."""
        if self._consumed:
            raise StreamAlreadyConsumedError()
        self._consumed = True
        self._consumer = consumer
        await self._producer()

    async def push(self, data: str) -> None:
        if self._consumer is None:
            raise StreamNotAttachedError()

        if self._bytes_to_threshold > 0:
            primer = padding(self._bytes_to_threshold)
            logger.debug(
                "streaming_primer_applied",
                threshold=self._bytes_to_threshold,
                padding_length=len(primer),
                category="streaming",
            )
            self._bytes_to_threshold = 0
            await self._consumer(data + primer)
        else:
            await self._consumer(data)
