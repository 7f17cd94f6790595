# volume_indexer/utils/event_reader.py

from pathlib import Path
from typing import Iterator, Union

import msgspec

from ..core.logging import LoggingMixin
from ..types.model.events import ExchangeEvent


class ExchangeEventReader(LoggingMixin):
    """
    Streams ExchangeEvent values from a JSON-lines file.

    Lines that fail to decode are logged and skipped; `invalid_lines` counts
    them once iteration has finished. Large token amounts should be written as
    decimal or 0x-prefixed hex strings.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self.invalid_lines = 0
        self._decoder = msgspec.json.Decoder(ExchangeEvent)

    def __iter__(self) -> Iterator[ExchangeEvent]:
        self.invalid_lines = 0
        with open(self.path, 'rb') as f:
            for line_number, line in enumerate(f, start=1):
                line = line.strip()
                if not line:
                    continue
                try:
                    yield self._decoder.decode(line)
                except (msgspec.DecodeError, ValueError) as e:
                    self.invalid_lines += 1
                    self.log_error("Skipping undecodable exchange event",
                                   file=str(self.path), line=line_number, error=str(e))
