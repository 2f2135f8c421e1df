"""
Detail resolver - turns mupen64plus.ini sections into RomDetail records
"""

import logging
import re
from typing import Mapping, Optional

from .models import RomDetail

log = logging.getLogger(__name__)

ART_URL_TEMPLATE = "http://paulscode.com/downloads/Mupen64Plus-AE/CoverArt/%s"
WIKI_URL_TEMPLATE = "http://littleguy77.wikia.com/wiki/%s"

# Some unlicensed/homebrew images share this CRC and have no canonical name
EMPTY_CRC = "00000000 00000000"

# Used when the metadata is unknown; most titles support 4 players and rumble
DEFAULT_PLAYERS = 4
DEFAULT_RUMBLE = True

_ART_STRIP_RE = re.compile(r"['.]")
_NON_WORD_RE = re.compile(r"\W+", re.ASCII)


def extract_base_name(good_name: str) -> str:
    """
    Strip the parenthetical tags from a GoodName.

    'Super Game (USA) (Rev A)' -> 'Super Game'
    """
    return good_name.split(' (', 1)[0].strip()


def build_art_name(base_name: str) -> str:
    """Cover art file name for a base name, e.g. "Mario's Game" -> 'Marios_Game.png'"""
    return _NON_WORD_RE.sub('_', _ART_STRIP_RE.sub('', base_name)) + '.png'


def _is_empty(value: Optional[str]) -> bool:
    return value is None or value == ''


class DetailResolver:
    """
    Materializes RomDetail records from sections of the database document.

    The resolver holds the document by reference so RefMD5 redirects can be
    followed; it never modifies it.
    """

    def __init__(self, document: Mapping[str, Mapping[str, str]],
                 art_template: str = ART_URL_TEMPLATE,
                 wiki_template: str = WIKI_URL_TEMPLATE):
        self.document = document
        self.art_template = art_template
        self.wiki_template = wiki_template

    def materialize(self, section: Optional[Mapping[str, str]]) -> RomDetail:
        """
        Build the RomDetail for a matched section.

        Args:
            section: Field mapping of one database entry (never None)

        Returns:
            RomDetail derived from the section, following RefMD5 for the
            gameplay fields
        """
        if section is None:
            raise ValueError("section must not be None")

        crc = section.get('CRC')

        if crc == EMPTY_CRC:
            good_name = ''
        else:
            good_name = section.get('GoodName')

        if good_name is not None:
            base_name = extract_base_name(good_name)
            art_name = build_art_name(base_name)
            art_url = self.art_template % art_name
            wiki_url = self.wiki_template % base_name.replace(' ', '_')
            if '(Kiosk' in good_name:
                wiki_url += '_(Kiosk_Demo)'
        else:
            log.error("mupen64plus.ini appears to be corrupt. "
                      "GoodName field is not defined for CRC %s", crc)
            base_name = art_name = art_url = wiki_url = None

        # Regional and revision variants point at one shared entry
        ref_md5 = section.get('RefMD5')
        if not _is_empty(ref_md5):
            section = self.document.get(ref_md5)

        if section is None:
            log.error("mupen64plus.ini appears to be corrupt. "
                      "RefMD5 %s does not refer to a known ROM", ref_md5)
            return RomDetail(
                crc=crc,
                good_name=good_name,
                base_name=base_name,
                art_name=art_name,
                art_url=art_url,
                wiki_url=wiki_url,
                save_type=None,
                status=0,
                players=DEFAULT_PLAYERS,
                rumble=DEFAULT_RUMBLE,
            )

        return RomDetail(
            crc=crc,
            good_name=good_name,
            base_name=base_name,
            art_name=art_name,
            art_url=art_url,
            wiki_url=wiki_url,
            save_type=section.get('SaveType'),
            status=self._parse_int(section, 'Status', crc),
            players=self._parse_int(section, 'Players', crc),
            rumble=section.get('Rumble') == 'Yes',
        )

    def synthesize(self, assumed_crc: Optional[str],
                   assumed_good_name: Optional[str]) -> RomDetail:
        """Best-guess record for a ROM that has no database entry."""
        if assumed_crc is None:
            raise ValueError("assumed_crc must not be None")
        if assumed_good_name is None:
            raise ValueError("assumed_good_name must not be None")

        return RomDetail(
            crc=assumed_crc,
            good_name=assumed_good_name,
            base_name=extract_base_name(assumed_good_name),
            art_name=None,
            art_url=None,
            wiki_url=None,
            save_type=None,
            status=0,
            players=DEFAULT_PLAYERS,
            rumble=DEFAULT_RUMBLE,
        )

    @staticmethod
    def _parse_int(section: Mapping[str, str], key: str, crc: Optional[str]) -> int:
        value = section.get(key)
        if _is_empty(value):
            return 0
        try:
            return int(value)
        except ValueError:
            log.error("mupen64plus.ini appears to be corrupt. "
                      "%s=%r is not a number for CRC %s", key, value, crc)
            return 0
