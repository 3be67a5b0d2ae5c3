"""4-byte chunk type codes and their case-encoded property bits.

Each of the four bytes carries one property in bit 5 (the ASCII case bit):

    byte 0  ancillary bit    clear = critical
    byte 1  private bit      clear = public
    byte 2  reserved bit     must be clear
    byte 3  safe-to-copy bit set   = safe to copy
"""

from __future__ import annotations

from dataclasses import dataclass

from pngchunk.core.errors import EncodingError, InvalidCharacter, InvalidLength

TYPE_CODE_SIZE = 4

# Bit 5 of each byte
PROPERTY_BIT = 0b0010_0000


def is_ascii_letter(byte: int) -> bool:
    """True for A-Z and a-z."""
    return 0x41 <= byte <= 0x5A or 0x61 <= byte <= 0x7A


@dataclass(frozen=True)
class TypeCode:
    """A 4-byte chunk type. Any 4 bytes are accepted; validity is a query."""

    raw: bytes

    def __post_init__(self) -> None:
        if not isinstance(self.raw, (bytes, bytearray, memoryview)):
            raise TypeError(f'type code must be bytes, not {type(self.raw).__name__}')
        raw = bytes(self.raw)
        if len(raw) != TYPE_CODE_SIZE:
            raise InvalidLength(f'type code must be {TYPE_CODE_SIZE} bytes, got {len(raw)}')
        object.__setattr__(self, 'raw', raw)

    @classmethod
    def from_bytes(cls, raw: bytes) -> TypeCode:
        """Wrap 4 raw bytes verbatim. Content is not checked."""
        return cls(raw)

    @classmethod
    def from_text(cls, text: str) -> TypeCode:
        """Build a type code from 4 ASCII letters, e.g. 'IHDR' or 'RuSt'."""
        raw = text.encode('utf-8')
        if len(raw) != TYPE_CODE_SIZE:
            raise InvalidLength(f'type code text must be {TYPE_CODE_SIZE} bytes, got {len(raw)}: {text!r}')
        for byte in raw:
            if not is_ascii_letter(byte):
                raise InvalidCharacter(f'type code text must be ASCII letters only: {text!r}')
        return cls(raw)

    @property
    def bytes(self) -> bytes:
        return self.raw

    def is_valid(self) -> bool:
        """All four bytes are ASCII letters and the reserved bit is clear."""
        return all(is_ascii_letter(b) for b in self.raw) and self.is_reserved_bit_valid()

    def is_critical(self) -> bool:
        return not self.raw[0] & PROPERTY_BIT

    def is_public(self) -> bool:
        return not self.raw[1] & PROPERTY_BIT

    def is_reserved_bit_valid(self) -> bool:
        return not self.raw[2] & PROPERTY_BIT

    def is_safe_to_copy(self) -> bool:
        return bool(self.raw[3] & PROPERTY_BIT)

    def flags(self) -> dict[str, bool]:
        """All property bits plus overall validity, keyed by name."""
        return {
            'critical': self.is_critical(),
            'public': self.is_public(),
            'reserved_bit_valid': self.is_reserved_bit_valid(),
            'safe_to_copy': self.is_safe_to_copy(),
            'valid': self.is_valid(),
        }

    def to_text(self) -> str:
        """Decode the 4 bytes as UTF-8. Raises EncodingError for non-text bytes."""
        try:
            return self.raw.decode('utf-8')
        except UnicodeDecodeError as e:
            raise EncodingError(f'type code {self.raw!r} is not valid UTF-8') from e

    def __str__(self) -> str:
        return self.to_text()

    def __repr__(self) -> str:
        return f'TypeCode({self.raw!r})'
