"""
N64 cartridge header reader - derives the secondary lookup key (CRC)
"""

import struct
from pathlib import Path

from .models import RomHeader

HEADER_SIZE = 0x40

# First word of the header in each dump format
_MAGIC = {
    b'\x80\x37\x12\x40': 'z64',  # big-endian, native
    b'\x37\x80\x40\x12': 'v64',  # byte-swapped
    b'\x40\x12\x37\x80': 'n64',  # little-endian words
}


def _swap_halfwords(data: bytes) -> bytes:
    out = bytearray(data)
    out[0::2], out[1::2] = data[1::2], data[0::2]
    return bytes(out)


def _swap_words(data: bytes) -> bytes:
    out = bytearray(len(data))
    for i in range(0, len(data), 4):
        out[i:i + 4] = data[i:i + 4][::-1]
    return bytes(out)


def normalize_byte_order(data: bytes):
    """
    Convert a header to big-endian (z64) order.

    Returns:
        Tuple of (normalized bytes, detected byte order)
    """
    byte_order = _MAGIC.get(data[:4], 'unknown')
    if byte_order == 'v64':
        data = _swap_halfwords(data)
    elif byte_order == 'n64':
        data = _swap_words(data)
    return data, byte_order


class RomHeaderReader:
    """Reads the 64-byte header at the start of an N64 image"""

    @staticmethod
    def from_bytes(data: bytes) -> RomHeader:
        if len(data) < HEADER_SIZE:
            raise ValueError(
                f"ROM header too short: {len(data)} bytes (need {HEADER_SIZE})")

        header, byte_order = normalize_byte_order(bytes(data[:HEADER_SIZE]))
        crc1, crc2 = struct.unpack('>II', header[0x10:0x18])
        name = header[0x20:0x34].decode('ascii', errors='ignore')
        name = name.replace('\x00', '').strip()

        return RomHeader(
            crc1=crc1,
            crc2=crc2,
            name=name,
            country_code=header[0x3E],
            byte_order=byte_order,
        )

    @staticmethod
    def from_file(filepath) -> RomHeader:
        with open(Path(filepath), 'rb') as f:
            data = f.read(HEADER_SIZE)
        return RomHeaderReader.from_bytes(data)


def read_crc(filepath) -> str:
    """Header CRC of a ROM file, formatted as a database CRC value"""
    return RomHeaderReader.from_file(filepath).crc
