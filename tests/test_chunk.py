"""Tests for pngchunk.core.chunk — frame layout, parsing and CRC checks."""

import struct
import zlib

import pytest
from pngchunk.core.chunk import OVERHEAD, Chunk, crc32
from pngchunk.core.errors import ChecksumMismatch, EncodingError, LengthMismatch, TooShort
from pngchunk.core.type_code import TypeCode

MESSAGE = 'This is where your secret message will be!'
MESSAGE_CRC = 2882656334


def _frame(length: int, type_bytes: bytes, payload: bytes, crc: int) -> bytes:
    return struct.pack('>I', length) + type_bytes + payload + struct.pack('>I', crc)


@pytest.fixture
def message_chunk() -> Chunk:
    return Chunk(TypeCode.from_text('RuSt'), MESSAGE.encode('ascii'))


class TestConstruction:
    def test_length(self, message_chunk: Chunk) -> None:
        assert message_chunk.length == 42

    def test_type(self, message_chunk: Chunk) -> None:
        assert str(message_chunk.chunk_type) == 'RuSt'

    def test_crc(self, message_chunk: Chunk) -> None:
        assert message_chunk.crc == MESSAGE_CRC

    def test_crc_covers_type_and_payload(self) -> None:
        chunk = Chunk(TypeCode.from_text('IDAT'), b'\x00\x01\x02\xff')
        assert chunk.crc == zlib.crc32(b'IDAT\x00\x01\x02\xff')

    def test_crc_depends_on_type(self) -> None:
        a = Chunk(TypeCode.from_text('abCd'), b'same')
        b = Chunk(TypeCode.from_text('abCD'), b'same')
        assert a.crc != b.crc

    def test_empty_payload(self) -> None:
        chunk = Chunk(TypeCode.from_text('IEND'), b'')
        assert chunk.length == 0
        # Every PNG file ends with this exact CRC
        assert chunk.crc == 0xAE426082

    def test_payload_copied(self) -> None:
        payload = bytearray(b'mutable')
        chunk = Chunk(TypeCode.from_text('RuSt'), payload)
        payload[0] = 0
        assert chunk.data == b'mutable'

    def test_data_as_text(self, message_chunk: Chunk) -> None:
        assert message_chunk.data_as_text() == MESSAGE

    def test_binary_payload_as_text_fails(self) -> None:
        chunk = Chunk(TypeCode.from_text('RuSt'), b'\xff\xfe\x00')
        with pytest.raises(EncodingError):
            chunk.data_as_text()

    def test_crc32_helper_is_unsigned(self) -> None:
        assert crc32(b'\xff' * 8) == zlib.crc32(b'\xff' * 8) & 0xFFFFFFFF
        assert crc32(b'\xff' * 8) >= 0


class TestSerialize:
    def test_layout(self, message_chunk: Chunk) -> None:
        expected = _frame(42, b'RuSt', MESSAGE.encode('ascii'), MESSAGE_CRC)
        assert message_chunk.to_bytes() == expected

    def test_size(self, message_chunk: Chunk) -> None:
        assert len(message_chunk.to_bytes()) == OVERHEAD + 42 == 54

    def test_bytes_builtin(self, message_chunk: Chunk) -> None:
        assert bytes(message_chunk) == message_chunk.to_bytes()

    def test_empty_payload_layout(self) -> None:
        frame = Chunk(TypeCode.from_text('IEND'), b'').to_bytes()
        assert frame == bytes.fromhex('0000000049454e44ae426082')


class TestParse:
    def test_valid_frame(self) -> None:
        frame = _frame(42, b'RuSt', MESSAGE.encode('ascii'), MESSAGE_CRC)
        chunk = Chunk.from_bytes(frame)
        assert chunk.length == 42
        assert str(chunk.chunk_type) == 'RuSt'
        assert chunk.data_as_text() == MESSAGE
        assert chunk.crc == MESSAGE_CRC

    def test_parsed_equals_constructed(self, message_chunk: Chunk) -> None:
        frame = _frame(42, b'RuSt', MESSAGE.encode('ascii'), MESSAGE_CRC)
        assert Chunk.from_bytes(frame) == message_chunk

    def test_bad_crc(self) -> None:
        frame = _frame(42, b'RuSt', MESSAGE.encode('ascii'), MESSAGE_CRC - 1)
        with pytest.raises(ChecksumMismatch) as exc_info:
            Chunk.from_bytes(frame)
        assert exc_info.value.expected == MESSAGE_CRC - 1
        assert exc_info.value.actual == MESSAGE_CRC

    @pytest.mark.parametrize('size', [0, 1, 4, 8, 11])
    def test_too_short(self, size: int) -> None:
        with pytest.raises(TooShort):
            Chunk.from_bytes(bytes(size))

    def test_length_field_too_large(self, message_chunk: Chunk) -> None:
        frame = bytearray(message_chunk.to_bytes())
        frame[0:4] = struct.pack('>I', 43)
        with pytest.raises(LengthMismatch):
            Chunk.from_bytes(bytes(frame))

    def test_length_field_too_small(self, message_chunk: Chunk) -> None:
        frame = bytearray(message_chunk.to_bytes())
        frame[0:4] = struct.pack('>I', 41)
        with pytest.raises(LengthMismatch):
            Chunk.from_bytes(bytes(frame))

    def test_length_field_larger_than_buffer(self) -> None:
        with pytest.raises(LengthMismatch):
            Chunk.from_bytes(b'\xff\xff\xff\xff' + bytes(8))

    def test_trailing_bytes_rejected(self, message_chunk: Chunk) -> None:
        with pytest.raises(LengthMismatch):
            Chunk.from_bytes(message_chunk.to_bytes() + b'\x00')

    def test_truncated_frame_rejected(self, message_chunk: Chunk) -> None:
        with pytest.raises(LengthMismatch):
            Chunk.from_bytes(message_chunk.to_bytes()[:-1])

    def test_short_check_comes_first(self) -> None:
        # A length field of 0 would be consistent with 12 bytes, but 11 is too short
        with pytest.raises(TooShort):
            Chunk.from_bytes(bytes(11))

    def test_length_checked_before_crc(self) -> None:
        frame = _frame(5, b'RuSt', b'abc', 0)
        with pytest.raises(LengthMismatch):
            Chunk.from_bytes(frame)

    def test_empty_payload(self) -> None:
        chunk = Chunk.from_bytes(bytes.fromhex('0000000049454e44ae426082'))
        assert chunk.length == 0
        assert chunk.data == b''
        assert chunk.chunk_type == TypeCode.from_text('IEND')

    def test_non_letter_type_is_parsed(self) -> None:
        type_bytes = b'\x01\x02\x03\x04'
        frame = _frame(2, type_bytes, b'hi', zlib.crc32(type_bytes + b'hi'))
        chunk = Chunk.from_bytes(frame)
        assert chunk.chunk_type.bytes == type_bytes
        assert not chunk.chunk_type.is_valid()

    def test_accepts_memoryview(self, message_chunk: Chunk) -> None:
        assert Chunk.from_bytes(memoryview(message_chunk.to_bytes())) == message_chunk


class TestTamperDetection:
    def test_every_payload_and_crc_bit(self, message_chunk: Chunk) -> None:
        frame = message_chunk.to_bytes()
        for index in range(8, len(frame)):
            for bit in range(8):
                tampered = bytearray(frame)
                tampered[index] ^= 1 << bit
                with pytest.raises(ChecksumMismatch):
                    Chunk.from_bytes(bytes(tampered))

    def test_type_bits(self, message_chunk: Chunk) -> None:
        frame = message_chunk.to_bytes()
        for index in range(4, 8):
            tampered = bytearray(frame)
            tampered[index] ^= 0x20
            with pytest.raises(ChecksumMismatch):
                Chunk.from_bytes(bytes(tampered))


class TestRoundTrip:
    @pytest.mark.parametrize(
        'type_text,payload',
        [
            ('RuSt', b''),
            ('IDAT', bytes(range(256))),
            ('tEXt', 'Comment\x00héllo'.encode('utf-8')),
            ('zzZz', b'\x00' * 4096),
        ],
    )
    def test_round_trip(self, type_text: str, payload: bytes) -> None:
        chunk = Chunk(TypeCode.from_text(type_text), payload)
        parsed = Chunk.from_bytes(chunk.to_bytes())
        assert parsed == chunk
        assert parsed.length == len(payload)
        assert parsed.crc == zlib.crc32(type_text.encode('ascii') + payload)


class TestDisplay:
    def test_str(self, message_chunk: Chunk) -> None:
        assert str(message_chunk) == 'RuSt length=42 crc=0xabd1d84e'

    def test_str_non_text_type(self) -> None:
        chunk = Chunk(TypeCode.from_bytes(b'\xff\x00\xff\x00'), b'')
        assert str(chunk).startswith('ff00ff00 length=0')

    def test_repr(self, message_chunk: Chunk) -> None:
        assert repr(message_chunk) == f"Chunk(TypeCode(b'RuSt'), length=42, crc={MESSAGE_CRC})"

    def test_not_equal_to_other_types(self, message_chunk: Chunk) -> None:
        assert message_chunk != message_chunk.to_bytes()
