"""
mupen64plus.ini parser
"""

import gzip
import re
import zipfile
from typing import Dict, Optional

_SECTION_RE = re.compile(r'^\[(.+)\]$')


class IniParser:
    """Parser for the mupen64plus.ini ROM database"""

    @staticmethod
    def parse(filepath: str) -> Dict[str, Dict[str, str]]:
        """
        Parse a database file into an ordered section -> fields mapping.

        Supports:
        - Plain .ini files
        - Gzipped files (.gz)
        - Zipped files (.zip) holding an .ini
        """
        content = IniParser._read_file(str(filepath))
        return IniParser.parse_string(content)

    @staticmethod
    def parse_string(content: str) -> Dict[str, Dict[str, str]]:
        content = IniParser._clean_content(content)

        sections: Dict[str, Dict[str, str]] = {}
        current: Optional[Dict[str, str]] = None

        for raw_line in content.splitlines():
            line = raw_line.strip()
            if not line or line[0] in ';#':
                continue

            m = _SECTION_RE.match(line)
            if m:
                name = m.group(1).strip()
                # A repeated header extends the first occurrence
                current = sections.setdefault(name, {})
                continue

            if current is None or '=' not in line:
                continue

            key, _, value = line.partition('=')
            current[key.strip()] = value.strip()

        return sections

    @staticmethod
    def _read_file(filepath: str) -> str:
        """Read file content, handling compression"""
        if filepath.endswith('.gz'):
            with gzip.open(filepath, 'rt', encoding='utf-8', errors='ignore') as f:
                return f.read()

        elif filepath.endswith('.zip') or zipfile.is_zipfile(filepath):
            try:
                with zipfile.ZipFile(filepath, 'r') as zf:
                    ini_files = [n for n in zf.namelist() if n.lower().endswith('.ini')]
                    if not ini_files:
                        raise ValueError("No .ini file found in ZIP archive")
                    with zf.open(ini_files[0]) as f:
                        return f.read().decode('utf-8', errors='ignore')
            except zipfile.BadZipFile as e:
                raise ValueError(f"Invalid ZIP archive: {e}") from e

        else:
            with open(filepath, 'r', encoding='utf-8', errors='ignore') as f:
                return f.read()

    @staticmethod
    def _clean_content(content: str) -> str:
        """Strip BOM and control characters"""
        content = content.lstrip('\ufeff')
        content = re.sub(r'[\x00-\x08\x0b\x0c\x0e-\x1f]', '', content)
        return content
