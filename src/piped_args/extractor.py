"""Row extractor: turn piped input into records.

Piped input is a sequence of JSON values, plain whitespace-separated
words, or a mix of both. Each JSON object (or array, or exploded array
element) becomes one record holding its compact JSON text; each plain
word becomes one record holding the word.

Extraction runs as a small state machine over a ``PendingReader``:

    DECODING_JSON        decode the next JSON value from pending text
    TOKENIZING_FALLBACK  pending text is not JSON; cut it into words
    DONE                 input exhausted

Fallback tokenizing stops before the next word that opens a JSON object
or array, so JSON that follows plain text is decoded again.
"""

from __future__ import annotations

import json
from enum import Enum
from typing import IO, Any, AnyStr

from piped_args import engine_logger
from piped_args.errors import (
    InvalidPipedDataError,
    SerializationError,
    UnexpectedTypeError,
)
from piped_args.models import EngineConfig
from piped_args.reader import PendingReader
from piped_args.rendering import truncate_value

Record = list[str]

# Characters a JSON text can start with. Anything else fails immediately,
# so there is no point reading more input before falling back.
_JSON_START = frozenset('{["-0123456789tfn')
_CONTAINER_START = frozenset("{[")

_NOT_JSON = object()


class ExtractState(Enum):
    DECODING_JSON = "decoding_json"
    TOKENIZING_FALLBACK = "tokenizing_fallback"
    DONE = "done"


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


_DECODER = json.JSONDecoder(parse_constant=_reject_constant)


def _json_type_name(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    return type(value).__name__


def _serialize(value: Any) -> str:
    try:
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"))
    except (TypeError, ValueError) as e:
        raise SerializationError(f"Could not re-encode piped value: {e}") from e


def _decode_value(reader: PendingReader) -> Any:
    """Decode one JSON value at the reader position.

    Returns ``_NOT_JSON`` when the pending text cannot be decoded even
    after the whole stream has been read. A scalar glued to further text
    (``truthy``, ``123abc``) counts as not JSON.
    """
    while True:
        try:
            value, end = _DECODER.raw_decode(reader.buffer, reader.pos)
        except ValueError:
            if reader.peek() in _JSON_START and reader.fill():
                continue
            return _NOT_JSON

        if not isinstance(value, (dict, list)):
            # A literal or number cut at the buffer edge may continue.
            if reader.at_end_of_buffer(end) and reader.fill():
                continue
            if not reader.at_end_of_buffer(end) and not reader.buffer[end].isspace():
                return _NOT_JSON

        reader.advance_to(end)
        return value


def _records_from_value(
    value: Any, explode_arrays: bool, config: EngineConfig
) -> list[Record]:
    if isinstance(value, list):
        if not explode_arrays:
            return [[_serialize(value)]]
        records: list[Record] = []
        for element in value:
            if not isinstance(element, dict):
                raise InvalidPipedDataError(element)
            records.append([_serialize(element)])
        return records

    if isinstance(value, dict):
        return [[_serialize(value)]]

    raise UnexpectedTypeError(
        _json_type_name(value),
        truncate_value(value, config.truncation_length),
    )


def _tokenize_fallback(reader: PendingReader) -> list[Record]:
    """Cut pending plain text into one-word records.

    The first word is always consumed so decoding makes progress; after
    that, words are taken until one opens a JSON container.
    """
    tokens: list[str] = []
    word = reader.take_word()
    while word is not None:
        tokens.append(word)
        if not reader.skip_whitespace() or reader.peek() in _CONTAINER_START:
            break
        word = reader.take_word()

    engine_logger.log_fallback(tokens)
    return [[token] for token in tokens]


def extract(
    stream: IO[AnyStr],
    explode_arrays: bool = False,
    *,
    config: EngineConfig | None = None,
) -> list[Record]:
    """Read the whole stream and split it into records.

    Args:
        stream: Binary (or text) file-like object holding the piped data.
        explode_arrays: Treat each element of a top-level JSON array as
            its own record instead of one record for the whole array.
        config: Engine settings; defaults apply when omitted.

    Returns:
        Records in input order. Empty input yields an empty list.

    Raises:
        InvalidPipedDataError: An exploded array held a non-object.
        UnexpectedTypeError: A top-level JSON string, number, boolean or
            null was decoded.
        ScanError: The stream could not be read.
        SerializationError: A decoded value could not be re-encoded.
    """
    config = config or EngineConfig()
    reader = PendingReader(stream, chunk_size=config.chunk_size)
    records: list[Record] = []

    engine_logger.log_extract_start(explode_arrays)

    state = ExtractState.DECODING_JSON
    while state is not ExtractState.DONE:
        if state is ExtractState.TOKENIZING_FALLBACK:
            records.extend(_tokenize_fallback(reader))
            state = ExtractState.DECODING_JSON
            continue

        if not reader.skip_whitespace():
            state = ExtractState.DONE
            continue

        value = _decode_value(reader)
        if value is _NOT_JSON:
            state = ExtractState.TOKENIZING_FALLBACK
            continue

        records.extend(_records_from_value(value, explode_arrays, config))

    engine_logger.log_extract_complete(len(records))
    return records
