"""
Payload Tokenizer: splits the right-hand side of a `##TAG=` header line.

Example payloads:
    <ID=GT,Number=1,Type=String,Description="Genotype">
    <ID=Assay,Type=String,Number=.,Values=[WholeGenome, Exome]>
    20100501
    ftp://ftp-trace.ncbi.nih.gov/1000genomes/ftp/release/sv/breakpoint_assemblies.fasta

Bracketed payloads become an ordered `key -> value` mapping with the quotes or
square brackets around values removed. Escape sequences inside quoted values
are kept verbatim (`\\"` stays `\\"`). Payloads without any `=` are returned
as a single value under `OTHER_KEY`.
"""

import logging
from enum import Enum, auto

from ..errors import PayloadError

logger = logging.getLogger(__name__)

# Key under which a bare (non key=value) payload is stored
OTHER_KEY = "Value"

# Opening character -> closing character of enclosed values
ENCLOSING_CHARS = {'"': '"', "[": "]"}


class _State(Enum):
    KEY = auto()  # reading a key, up to `=`
    VALUE = auto()  # reading a bare value, up to `,` or end of input
    ENCLOSED_VALUE = auto()  # reading a quoted or bracketed value
    QUOTE_ENDED = auto()  # after a closing quote/bracket, expecting `,` or end


class PayloadTokenizer:
    """
    State machine over the characters of one payload.

    A tokenizer instance is single use: create one per payload.
    """

    def __init__(self, payload: str):
        self.payload = payload
        self.result: dict[str, str] = {}
        self._state = _State.KEY
        self._key_start = 0
        self._key = ""
        self._value_start = 0
        self._closing_char = ""
        self._escaped = False

    def tokenize(self) -> dict[str, str]:
        payload = self.payload
        for index, ch in enumerate(payload):
            if self._state is _State.KEY:
                if ch == "=":
                    self._key = payload[self._key_start : index]
                    if not self._key:
                        raise self._error("empty key")
                    self._value_start = index + 1
                    self._state = _State.VALUE

            elif self._state is _State.VALUE:
                if ch == ",":
                    self._store(payload[self._value_start : index])
                    self._key_start = index + 1
                    self._state = _State.KEY
                elif ch in ENCLOSING_CHARS:
                    # quotes and brackets may only open a value
                    if index != self._value_start:
                        raise self._error(f"invalid character `{ch}` found")
                    self._closing_char = ENCLOSING_CHARS[ch]
                    self._value_start = index + 1
                    self._escaped = False
                    self._state = _State.ENCLOSED_VALUE

            elif self._state is _State.ENCLOSED_VALUE:
                if ch == self._closing_char and not self._escaped:
                    self._store(payload[self._value_start : index])
                    self._state = _State.QUOTE_ENDED
                elif ch == "\\" and self._closing_char == '"':
                    # `\\` is an escaped backslash, so only an odd run escapes
                    self._escaped = not self._escaped
                else:
                    self._escaped = False

            else:
                if ch != ",":
                    raise self._error("non `,` character found after closing quote")
                self._key_start = index + 1
                self._state = _State.KEY

        return self._finish()

    def _finish(self) -> dict[str, str]:
        if self._state is _State.VALUE:
            # end of input terminates a bare value; an empty one is rejected
            self._store(self.payload[self._value_start :])
        elif self._state is _State.ENCLOSED_VALUE:
            raise self._error("unbalanced quote")
        elif self._state is _State.KEY and self._key_start < len(self.payload):
            raise self._error(f"key `{self.payload[self._key_start:]}` without value")
        return self.result

    def _store(self, value: str) -> None:
        if not value:
            raise self._error("empty value")
        if self._key in self.result:
            # last write wins; the key moves to the end
            logger.debug("Duplicate key `%s` in header payload, keeping last value", self._key)
            del self.result[self._key]
        self.result[self._key] = value

    def _error(self, reason: str) -> PayloadError:
        return PayloadError(f"invalid header payload `{self.payload}`, ({reason})")


def parse_header_payload(payload: str) -> dict[str, str]:
    """
    Parse a header payload into an ordered mapping.

    Args:
        payload: Everything after the first `=` of a header line.

    Returns:
        Mapping of key to raw value, in input order.

    Raises:
        PayloadError: On unbalanced angle brackets or quotes, empty keys or
            values, or stray characters around enclosed values.
    """
    if payload.startswith("<") or payload.endswith(">"):
        # either both exist or neither
        if len(payload) < 2 or not (payload.startswith("<") and payload.endswith(">")):
            raise PayloadError(
                f"invalid header payload `{payload}`, (unbalanced triangle brackets)"
            )
        payload = payload[1:-1]

    if not payload:
        raise PayloadError("invalid header payload, (empty)")

    if "=" not in payload:
        return {OTHER_KEY: payload}

    return PayloadTokenizer(payload).tokenize()
