import struct

import pytest

from pngchunks.chunk import Chunk
from pngchunks.chunk_type import ChunkType
from pngchunks.exceptions import (
    CrcMismatch,
    InvalidTypeByte,
    LengthOverflow,
    Truncated,
)


MESSAGE = b'This is where your secret message will be!'
MESSAGE_CRC = 2882656334


def encode_fields(length, chunk_type, data, crc):
    return struct.pack('>I', length) + chunk_type + data + struct.pack('>I', crc)


@pytest.fixture
def chunk_raw():
    return encode_fields(42, b'RuSt', MESSAGE, MESSAGE_CRC)


def test_new_chunk():
    chunk = Chunk(ChunkType.from_str('RuSt'), MESSAGE)

    assert chunk.length == 42
    assert chunk.crc == MESSAGE_CRC
    assert chunk.size == 4 + 4 + 42 + 4


def test_chunk_from_bytes(chunk_raw):
    chunk = Chunk.parse(chunk_raw)

    assert chunk.length == 42
    assert str(chunk.chunk_type) == 'RuSt'
    assert chunk.data_as_string() == MESSAGE.decode()
    assert chunk.crc == MESSAGE_CRC
    assert chunk.pack() == chunk_raw
    assert chunk.raw == chunk_raw


def test_chunk_wrong_crc():
    with pytest.raises(CrcMismatch) as exc_info:
        Chunk.parse(encode_fields(42, b'RuSt', MESSAGE, MESSAGE_CRC - 1))

    assert exc_info.value.expected == MESSAGE_CRC - 1
    assert exc_info.value.calculated == MESSAGE_CRC
    assert exc_info.value.chain == ['crc']


@pytest.mark.parametrize('last', [_ for _ in range(0x100) if _ != MESSAGE_CRC & 0xff])
def test_chunk_trailing_crc_byte(chunk_raw, last):
    with pytest.raises(CrcMismatch):
        Chunk.parse(chunk_raw[:-1] + bytes([last]))


def test_chunk_round_trip():
    for name, data in [('IEND', b''), ('ruSt', b'\x00\xff' * 100), ('tEXt', 'kebab ü'.encode())]:
        chunk = Chunk(ChunkType.from_str(name), data)
        parsed = Chunk.parse(chunk.pack())

        assert parsed == chunk
        assert parsed.length == chunk.length
        assert parsed.chunk_type == chunk.chunk_type
        assert parsed.data == chunk.data
        assert parsed.crc == chunk.crc


def test_chunk_parse_ignores_trailing_bytes(chunk_raw):
    assert Chunk.parse(chunk_raw + b'\x00\x00\x00\x00IEND') == Chunk.parse(chunk_raw)


def test_calculate_crc_is_deterministic():
    chunk_type = ChunkType.from_str('RuSt')

    assert Chunk.calculate_crc(chunk_type, MESSAGE) == Chunk.calculate_crc(chunk_type, MESSAGE)
    assert Chunk.calculate_crc(chunk_type, MESSAGE) == MESSAGE_CRC


def test_calculate_crc_single_bit():
    chunk_type = ChunkType.from_str('RuSt')
    crcs = set()
    for idx in range(len(MESSAGE) * 8):
        data = bytearray(MESSAGE)
        data[idx // 8] ^= 1 << (idx % 8)
        crcs.add(Chunk.calculate_crc(chunk_type, bytes(data)))

    assert MESSAGE_CRC not in crcs
    assert len(crcs) == len(MESSAGE) * 8

    assert Chunk.calculate_crc(ChunkType.from_str('RUSt'), MESSAGE) != MESSAGE_CRC


def test_chunk_tampering(chunk_raw):
    # every bit of data and crc
    for idx in range(8 * 8, len(chunk_raw) * 8):
        tampered = bytearray(chunk_raw)
        tampered[idx // 8] ^= 1 << (idx % 8)

        with pytest.raises(CrcMismatch):
            Chunk.parse(bytes(tampered))


@pytest.mark.parametrize('length', [2 ** 31, 2 ** 31 + 1, 2 ** 32 - 1])
def test_chunk_length_overflow(length):
    with pytest.raises(LengthOverflow) as exc_info:
        Chunk.parse(struct.pack('>I', length))

    assert exc_info.value.chain == ['length']

    with pytest.raises(LengthOverflow):
        Chunk.parse(encode_fields(length, b'RuSt', MESSAGE, MESSAGE_CRC))


def test_chunk_truncated(chunk_raw):
    for size in range(len(chunk_raw)):
        with pytest.raises(Truncated):
            Chunk.parse(chunk_raw[:size])


def test_chunk_truncated_chain(chunk_raw):
    with pytest.raises(Truncated) as exc_info:
        Chunk.parse(chunk_raw[:20])

    assert exc_info.value.chain == ['data']


def test_chunk_invalid_type():
    with pytest.raises(InvalidTypeByte) as exc_info:
        Chunk.parse(encode_fields(42, b'Ru1t', MESSAGE, MESSAGE_CRC))

    assert exc_info.value.chain == ['type']


def test_data_as_string_hex_fallback():
    chunk = Chunk(ChunkType.from_str('ruSt'), b'\xde\xad\xbe\xef')

    assert chunk.data_as_string() == 'deadbeef'


def test_chunk_display(chunk_raw):
    chunk = Chunk.parse(chunk_raw)

    assert str(chunk) == 'Length: 42, Chunk type: RuSt, Data: %s, Crc: %d' % (MESSAGE.decode(), MESSAGE_CRC)
    assert repr(chunk) == '<Chunk(length=42,type=RuSt,crc=0x%08x)>' % MESSAGE_CRC


def test_chunk_is_immutable():
    chunk = Chunk(ChunkType.from_str('RuSt'), MESSAGE)

    with pytest.raises(AttributeError):
        chunk.crc = 0

    with pytest.raises(AttributeError):
        chunk.data = b''


@pytest.mark.parametrize('data', [5, 'kebab', None, [1, 2, 3]])
def test_chunk_data_must_be_bytes(data):
    with pytest.raises(TypeError):
        Chunk(ChunkType.from_str('RuSt'), data)


def test_chunk_type_must_be_chunk_type():
    with pytest.raises(TypeError):
        Chunk('RuSt', MESSAGE)


def test_chunk_accepts_bytes_like():
    chunk_type = ChunkType.from_str('RuSt')

    assert Chunk(chunk_type, bytearray(MESSAGE)) == Chunk(chunk_type, MESSAGE)
    assert Chunk(chunk_type, memoryview(MESSAGE)).crc == MESSAGE_CRC
