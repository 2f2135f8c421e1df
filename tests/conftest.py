import logging
import struct

import pytest

from romdb.ini_parser import IniParser
from romdb.database import RomDatabase
from romdb.monitor import LOGGER_NAME


SAMPLE_INI = """\
; Sample of the mupen64plus.ini ROM database

[ABCD1234]
GoodName=Test Game (USA)
CRC=11111111 22222222

[BASE0001]
GoodName=Super Kart 64 (U) [!]
CRC=635A2BFF 8B022326
SaveType=Eeprom 4KB
Status=5
Players=4
Rumble=Yes

[REF00001]
GoodName=Super Kart 64 (E) (V1.1) [!]
CRC=AAAAAAAA BBBBBBBB
RefMD5=BASE0001

[DUPE0001]
GoodName=Homebrew Demo A (PD)
CRC=DEADBEEF 00000001
Players=1

[DUPE0002]
GoodName=Homebrew Demo B (PD)
CRC=DEADBEEF 00000001
Players=2

[ZERO0001]
GoodName=Something (PD)
CRC=00000000 00000000

[KIOSK001]
GoodName=Star Racer (U) (Kiosk Demo) [!]
CRC=12345678 9ABCDEF0

[NONAME01]
CRC=0BADF00D 0BADF00D
Players=2
Rumble=Yes

[DANGLING]
GoodName=Broken Ref (J)
CRC=CAFEBABE CAFEBABE
RefMD5=XYZ

[NOCRC001]
GoodName=Orphan (U)
Players=1

[BADNUM01]
GoodName=Bad Numbers (U)
CRC=0F0F0F0F 0F0F0F0F
Status=five
Players=two
"""


def make_header(crc1, crc2, name='TEST ROM', country=b'E', byte_order='z64', size=0x1000):
    """Build a ROM image whose header carries the given CRC words."""
    data = bytearray(size)
    data[0:4] = b'\x80\x37\x12\x40'
    data[0x10:0x18] = struct.pack('>II', crc1, crc2)
    data[0x20:0x34] = name.encode('ascii').ljust(20, b' ')
    data[0x3E:0x3F] = country
    if byte_order == 'v64':
        swapped = bytearray(data)
        swapped[0::2], swapped[1::2] = data[1::2], data[0::2]
        data = swapped
    elif byte_order == 'n64':
        data = bytearray(b''.join(data[i:i + 4][::-1] for i in range(0, size, 4)))
    return bytes(data)


@pytest.fixture
def document():
    return IniParser.parse_string(SAMPLE_INI)


@pytest.fixture
def db(document):
    return RomDatabase(document)


@pytest.fixture
def ini_file(tmp_path):
    path = tmp_path / 'mupen64plus.ini'
    path.write_text(SAMPLE_INI, encoding='utf-8')
    return path


@pytest.fixture(autouse=True)
def _reset_romdb_logger():
    """Let caplog see romdb records even after setup_monitoring() ran."""
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
