"""
ROM database - MD5 and CRC indexes over mupen64plus.ini
"""

import logging
import os
from types import MappingProxyType
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from .header import read_crc
from .ini_parser import IniParser
from .models import LookupResult, RomDetail, SOURCE_CRC, SOURCE_GUESS, SOURCE_MD5
from .resolver import ART_URL_TEMPLATE, WIKI_URL_TEMPLATE, DetailResolver

log = logging.getLogger(__name__)


class RomDatabase:
    """
    Looks up ROM metadata by MD5, falling back to the header CRC.

    The MD5 index is the parsed document itself; the CRC index maps each
    CRC value to every section carrying it, in document order. Both are
    built once in the constructor and never change afterwards.
    """

    def __init__(self, document: Mapping[str, Mapping[str, str]],
                 art_template: str = ART_URL_TEMPLATE,
                 wiki_template: str = WIKI_URL_TEMPLATE):
        """
        Initialize the database from a parsed document.

        Args:
            document: Ordered mapping of MD5 -> field name -> value
            art_template: Cover art URL template with one %s
            wiki_template: Wiki page URL template with one %s
        """
        self.document = document
        self.resolver = DetailResolver(document, art_template, wiki_template)
        self._build_indexes()

    @classmethod
    def from_file(cls, filepath: str, **kwargs) -> 'RomDatabase':
        """Load mupen64plus.ini (plain, .gz or .zip) and index it."""
        return cls(IniParser.parse(filepath), **kwargs)

    @classmethod
    def from_settings(cls, settings: Dict[str, Any],
                      filepath: Optional[str] = None) -> 'RomDatabase':
        """Load the database named in settings (or filepath) with its URL templates."""
        from .settings import resolve_database_path

        path = resolve_database_path(settings, filepath)
        if not path:
            raise ValueError("No database path configured")
        urls = settings.get('urls', {})
        return cls.from_file(
            path,
            art_template=urls.get('art_template') or ART_URL_TEMPLATE,
            wiki_template=urls.get('wiki_template') or WIKI_URL_TEMPLATE,
        )

    def _build_indexes(self):
        """Build the CRC -> sections index"""
        by_crc: Dict[str, List[Mapping[str, str]]] = {}

        for section in self.document.values():
            if section is None:
                continue
            crc = section.get('CRC')
            if crc:
                by_crc.setdefault(crc, []).append(section)

        self._by_crc: Mapping[str, Tuple[Mapping[str, str], ...]] = MappingProxyType(
            {crc: tuple(sections) for crc, sections in by_crc.items()}
        )

    @property
    def by_crc(self) -> Mapping[str, Tuple[Mapping[str, str], ...]]:
        """Read-only view of the CRC index"""
        return self._by_crc

    def lookup_by_md5(self, md5: str) -> Optional[RomDetail]:
        """
        Exact lookup on the primary key.

        Returns:
            RomDetail or None if the MD5 is not in the database
        """
        section = self.document.get(md5)
        return None if section is None else self.resolver.materialize(section)

    def lookup_by_crc(self, crc: str) -> List[RomDetail]:
        """Every entry sharing a header CRC, in document order (may be empty)."""
        sections = self._by_crc.get(crc, ())
        return [self.resolver.materialize(s) for s in sections]

    def lookup_with_fallback(
        self,
        md5: str,
        rom_path: str,
        crc_reader: Callable[[str], str] = read_crc,
    ) -> LookupResult:
        """
        Resolve a ROM's metadata, never failing on a database miss.

        Matching priority:
        1. MD5 (exact)
        2. Header CRC, first entry if there are several
        3. Best guess built from the CRC and the file name

        Args:
            md5: Content hash of the ROM file
            rom_path: Path to the ROM, read only when the MD5 misses
            crc_reader: Callable returning the header CRC of rom_path

        Returns:
            LookupResult with the chosen detail, its source and all CRC candidates
        """
        detail = self.lookup_by_md5(md5)
        if detail is not None:
            log.debug("MD5 hit for %s", md5)
            return LookupResult(detail=detail, source=SOURCE_MD5, candidates=(detail,))

        # MD5 not in the database; lookup by CRC instead
        crc = crc_reader(rom_path)
        details = self.lookup_by_crc(crc)

        if not details:
            log.warning("No meta-info entry found for ROM %s", os.path.abspath(rom_path))
            log.info("Constructing a best guess for the meta-info")
            good_name = os.path.basename(rom_path).split('.')[0]
            guess = self.resolver.synthesize(crc, good_name)
            return LookupResult(detail=guess, source=SOURCE_GUESS)

        if len(details) > 1:
            log.warning("Multiple meta-info entries found for ROM %s",
                        os.path.abspath(rom_path))
            log.info("Defaulting to first entry")

        return LookupResult(detail=details[0], source=SOURCE_CRC, candidates=tuple(details))

    def get_stats(self) -> Dict:
        """Get statistics about the loaded database"""
        shared = {crc: len(s) for crc, s in self._by_crc.items() if len(s) > 1}
        return {
            'total_entries': len(self.document),
            'crc_values': len(self._by_crc),
            'indexed_by_crc': sum(len(s) for s in self._by_crc.values()),
            'shared_crc_values': len(shared),
            'references': sum(1 for s in self.document.values() if s and s.get('RefMD5')),
        }

    def __len__(self) -> int:
        return len(self.document)

    def __contains__(self, md5: str) -> bool:
        return md5 in self.document
