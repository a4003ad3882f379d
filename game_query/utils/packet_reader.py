# game_query/utils/packet_reader.py
import struct

from game_query.errors import MalformedResponse


class PacketReader:
    """
    Последовательное чтение полей из датаграммы.
    Любая попытка прочитать за концом данных - MalformedResponse.
    """

    def __init__(self, data: bytes, offset: int = 0):
        self.data = bytes(data)
        self.offset = offset

    @property
    def remaining(self) -> int:
        return len(self.data) - self.offset

    def read_bytes(self, count: int) -> bytes:
        if count > self.remaining:
            raise MalformedResponse(
                f"Ответ обрывается: нужно {count} байт на смещении {self.offset}, осталось {self.remaining}")
        chunk = self.data[self.offset:self.offset + count]
        self.offset += count
        return chunk

    def _unpack(self, fmt: str):
        return struct.unpack(fmt, self.read_bytes(struct.calcsize(fmt)))[0]

    def read_byte(self) -> int:
        return self._unpack('<B')

    def read_char(self) -> str:
        return chr(self.read_byte())

    def read_ushort(self) -> int:
        return self._unpack('<H')

    def read_long(self) -> int:
        return self._unpack('<i')

    def read_float(self) -> float:
        return self._unpack('<f')

    def read_long_long(self) -> int:
        return self._unpack('<Q')

    def read_string(self, encoding: str = 'utf-8') -> str:
        """Строка, завершающаяся нулевым байтом."""
        end = self.data.find(b'\x00', self.offset)
        if end == -1:
            raise MalformedResponse(f"Строка на смещении {self.offset} не завершена нулевым байтом")
        value = self.data[self.offset:end].decode(encoding, errors='replace')
        self.offset = end + 1
        return value
