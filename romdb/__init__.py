"""
romdb - N64 ROM metadata lookup

Resolves titles, save types, player counts and art/wiki URLs from the
mupen64plus.ini database, by MD5 or by cartridge header CRC.
"""

__version__ = '1.0.0'
__author__ = 'romdb'

from .models import RomDetail, LookupResult, RomHeader
from .ini_parser import IniParser
from .header import RomHeaderReader, read_crc
from .resolver import DetailResolver, extract_base_name, build_art_name
from .database import RomDatabase
from .scanner import RomScanner


__all__ = [
    'RomDetail',
    'LookupResult',
    'RomHeader',
    'IniParser',
    'RomHeaderReader',
    'read_crc',
    'DetailResolver',
    'extract_base_name',
    'build_art_name',
    'RomDatabase',
    'RomScanner',
]

