"""
ROM file scanner - computes the MD5 used as the database key
"""

import hashlib
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from .database import RomDatabase
from .models import LookupResult


class RomScanner:
    """Hashes ROM files and identifies them against a RomDatabase"""

    BUFFER_SIZE = 65536  # 64KB chunks for efficient hashing

    ROM_EXTENSIONS = {'.z64', '.v64', '.n64', '.rom', '.bin'}

    @staticmethod
    def md5_of(filepath: str) -> str:
        """MD5 of the whole file as uppercase hex, the form mupen64plus.ini uses"""
        md5_hash = hashlib.md5()
        with open(filepath, 'rb') as f:
            while True:
                data = f.read(RomScanner.BUFFER_SIZE)
                if not data:
                    break
                md5_hash.update(data)
        return md5_hash.hexdigest().upper()

    @staticmethod
    def identify(db: RomDatabase, filepath: str) -> LookupResult:
        """Hash a ROM and resolve it, falling back to its header CRC."""
        return db.lookup_with_fallback(RomScanner.md5_of(filepath), filepath)

    @staticmethod
    def collect_files(path: str, recursive: bool = True) -> List[str]:
        """ROM files under a folder (or the file itself), sorted by path"""
        p = Path(path)
        if p.is_file():
            return [str(p)]

        pattern = '**/*' if recursive else '*'
        return sorted(
            str(f) for f in p.glob(pattern)
            if f.is_file() and f.suffix.lower() in RomScanner.ROM_EXTENSIONS
        )

    @staticmethod
    def identify_all(
        db: RomDatabase,
        filepaths: List[str],
        progress_callback: Optional[Callable[[int, int], None]] = None,
    ) -> List[Tuple[str, LookupResult]]:
        results = []
        total = len(filepaths)
        for idx, filepath in enumerate(filepaths, start=1):
            results.append((filepath, RomScanner.identify(db, filepath)))
            if progress_callback:
                progress_callback(idx, total)
        return results
