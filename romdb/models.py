"""
Data models for the ROM database
"""

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple


# Lookup provenance for LookupResult.source
SOURCE_MD5 = 'md5'
SOURCE_CRC = 'crc'
SOURCE_GUESS = 'guess'


@dataclass(frozen=True)
class RomDetail:
    """Presentation-ready metadata for one ROM"""
    crc: Optional[str]
    good_name: Optional[str]
    base_name: Optional[str]
    art_name: Optional[str]
    art_url: Optional[str]
    wiki_url: Optional[str]
    save_type: Optional[str]
    status: int = 0
    players: int = 0
    rumble: bool = False

    def to_dict(self) -> Dict:
        return {
            'crc': self.crc,
            'good_name': self.good_name,
            'base_name': self.base_name,
            'art_name': self.art_name,
            'art_url': self.art_url,
            'wiki_url': self.wiki_url,
            'save_type': self.save_type,
            'status': self.status,
            'players': self.players,
            'rumble': self.rumble,
        }


@dataclass(frozen=True)
class LookupResult:
    """Outcome of a fallback lookup, with where the detail came from"""
    detail: RomDetail
    source: str  # 'md5', 'crc', or 'guess'
    candidates: Tuple[RomDetail, ...] = field(default_factory=tuple)

    @property
    def is_guess(self) -> bool:
        return self.source == SOURCE_GUESS

    @property
    def is_ambiguous(self) -> bool:
        return len(self.candidates) > 1

    def to_dict(self) -> Dict:
        return {
            'source': self.source,
            'is_guess': self.is_guess,
            'is_ambiguous': self.is_ambiguous,
            'detail': self.detail.to_dict(),
            'candidates': [c.to_dict() for c in self.candidates],
        }


@dataclass(frozen=True)
class RomHeader:
    """Fields read from the 64-byte cartridge header"""
    crc1: int
    crc2: int
    name: str = ""
    country_code: int = 0
    byte_order: str = "z64"  # 'z64', 'v64', 'n64' or 'unknown'

    @property
    def crc(self) -> str:
        """Header checksum in the database's 'XXXXXXXX XXXXXXXX' form"""
        return f"{self.crc1:08X} {self.crc2:08X}"

    def to_dict(self) -> Dict:
        return {
            'crc': self.crc,
            'crc1': self.crc1,
            'crc2': self.crc2,
            'name': self.name,
            'country_code': self.country_code,
            'byte_order': self.byte_order,
        }
