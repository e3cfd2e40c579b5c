"""Object numbering and the cross-reference table.

Objects are written strictly in append order. Every id handed out by
``ObjectTable.allocate`` must later be opened exactly once with
``begin_object``, which records the byte offset of its ``N 0 obj`` header.
The offsets become the xref table.
"""

import logging
from typing import BinaryIO, List, Optional, Union

from ..errors import AllocationError, ObjectTableError

logger = logging.getLogger(__name__)

XREF_FREE_HEAD = "0000000000 65535 f \n"
MIN_GROWTH = 1000


class OutputSink:
    """Append-only byte sink that knows how much it has written.

    Offsets come from counting, not from ``tell()``, so pipes and stdout
    work the same as regular files.
    """

    def __init__(self, stream: BinaryIO, encoding: str = 'latin-1'):
        self.stream = stream
        self.encoding = encoding
        self.offset = 0

    def write(self, data: Union[str, bytes]) -> int:
        if isinstance(data, str):
            data = data.encode(self.encoding)
        self.stream.write(data)
        self.offset += len(data)
        return len(data)


class ObjectTable:
    """Allocator for object ids plus their recorded byte offsets.

    The offset table is a dense list indexed by id (slot 0 is the free-list
    head and never recorded). It grows by ``max(capacity // 5, 1000)`` slots
    whenever an id falls beyond the current capacity.
    """

    def __init__(self, sink: OutputSink):
        self.sink = sink
        self.next_id = 1
        self._offsets: List[Optional[int]] = []

    @property
    def capacity(self) -> int:
        return len(self._offsets)

    @property
    def count(self) -> int:
        """Entries in the xref table, object 0 included."""
        return self.next_id

    def allocate(self) -> int:
        obj_id = self.next_id
        self.next_id += 1
        return obj_id

    def _grow(self, obj_id: int) -> None:
        while obj_id >= len(self._offsets):
            delta = max(len(self._offsets) // 5, MIN_GROWTH)
            try:
                self._offsets.extend([None] * delta)
            except MemoryError:
                raise AllocationError(f"Unable to allocate array for object {obj_id}.") from None
            logger.debug("xref table grown to %d slots", len(self._offsets))

    def record_offset(self, obj_id: int, offset: int) -> None:
        if obj_id < 1 or obj_id >= self.next_id:
            raise ObjectTableError(f"Object {obj_id} was never allocated")
        self._grow(obj_id)
        if self._offsets[obj_id] is not None:
            raise ObjectTableError(f"Object {obj_id} written twice")
        self._offsets[obj_id] = offset

    def offset_of(self, obj_id: int) -> Optional[int]:
        if 0 < obj_id < len(self._offsets):
            return self._offsets[obj_id]
        return None

    def begin_object(self, obj_id: int) -> None:
        """Record the current position for ``obj_id`` and write its header."""
        self.record_offset(obj_id, self.sink.offset)
        self.sink.write(f"{obj_id} 0 obj\n")

    def write_object(self, obj_id: int, body: str) -> None:
        """Write a complete ``N 0 obj ... endobj`` object."""
        self.begin_object(obj_id)
        self.sink.write(f"{body}\nendobj\n")

    def write_xref(self) -> int:
        """Write the xref section and return the offset where it starts."""
        missing = [i for i in range(1, self.next_id) if self.offset_of(i) is None]
        if missing:
            raise ObjectTableError(
                f"Objects allocated but never written: {', '.join(map(str, missing))}"
            )
        start = self.sink.offset
        self.sink.write(f"xref\n0 {self.count}\n")
        self.sink.write(XREF_FREE_HEAD)
        for obj_id in range(1, self.next_id):
            self.sink.write(f"{self._offsets[obj_id]:010d} 00000 n \n")
        logger.debug("xref written: %d entries at offset %d", self.count, start)
        return start
