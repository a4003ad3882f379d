# game_query/query_client/transport.py
import asyncio
import ipaddress

import asyncio_dgram
from game_query.errors import UnreachableHost
from game_query.logger import LoggerMixin

# Всё, чем может закончиться операция с UDP-сокетом
SOCKET_ERRORS = (OSError, asyncio_dgram.TransportClosed, asyncio.TimeoutError)


def same_endpoint(addr, endpoint):
    """
    Пришла ли датаграмма с адреса addr от сервера endpoint.
    Если endpoint задан именем хоста, сравнивается только порт.
    """
    if addr[1] != endpoint[1]:
        return False
    try:
        expected = ipaddress.ip_address(endpoint[0])
        actual = ipaddress.ip_address(addr[0])
    except ValueError:
        return True
    # IPv4 через сокет "::" приходит как ::ffff:a.b.c.d
    if actual.version == 6 and actual.ipv4_mapped:
        actual = actual.ipv4_mapped
    if expected.version == 6 and expected.ipv4_mapped:
        expected = expected.ipv4_mapped
    return actual == expected


class UdpTransport(LoggerMixin):
    """
    Один UDP-сокет для всех запросов клиента.
    Обмены последовательные: одновременные запросы через один транспорт
    могут перепутать ответы, блокировок здесь нет.
    """

    def __init__(self, bind_host="0.0.0.0", bind_port=0, timeout=None, logger=None):
        super().__init__(logger)
        self.bind_host = bind_host
        self.bind_port = bind_port
        self.timeout = timeout
        self.stream = None

    @classmethod
    def from_config(cls, config, logger=None):
        return cls(
            bind_host=config.get("QUERY.BIND_HOST", "0.0.0.0"),
            bind_port=config.get("QUERY.BIND_PORT", 0),
            timeout=config.get("QUERY.TIMEOUT"),
            logger=logger,
        )

    async def open(self):
        if self.stream:
            return
        try:
            self.stream = await asyncio_dgram.bind((self.bind_host, self.bind_port))
        except SOCKET_ERRORS as e:
            self.logger.warning(f"Не удалось открыть UDP-сокет на {self.bind_host}:{self.bind_port}: {e}")
            raise UnreachableHost(f"Не удалось открыть UDP-сокет: {e}") from e
        self.logger.debug(f"UDP-сокет открыт на {self.stream.sockname}")

    async def send(self, datagram: bytes, endpoint) -> int:
        """
        Отправляет датаграмму на endpoint (host, port).
        :return: количество переданных сокету байт.
        """
        await self.open()
        try:
            await self.stream.send(datagram, endpoint)
        except SOCKET_ERRORS as e:
            self.logger.warning(f"Ошибка отправки на {endpoint[0]}:{endpoint[1]}: {e!r}")
            raise UnreachableHost("An error occurred while attempting to send data.") from e
        self.logger.debug(f"Отправлено {len(datagram)} байт на {endpoint[0]}:{endpoint[1]} - {datagram}")
        return len(datagram)

    async def receive(self, endpoint=None):
        """
        Ждёт датаграмму от endpoint.
        Датаграммы от других адресов (например, запоздавший ответ сервера,
        опрос которого уже завершился по таймауту) отбрасываются;
        таймаут действует на каждое ожидание отдельно.
        :param endpoint: Адрес опрашиваемого сервера (host, port); None - принять любую.
        :return: (данные, адрес отправителя).
        """
        if not self.stream:
            raise UnreachableHost("An error occurred while attempting to receive data: socket is not open.")
        while True:
            try:
                if self.timeout:
                    data, addr = await asyncio.wait_for(self.stream.recv(), self.timeout)
                else:
                    data, addr = await self.stream.recv()
            except SOCKET_ERRORS as e:
                self.logger.warning(f"Ошибка приёма: {e!r}")
                raise UnreachableHost("An error occurred while attempting to receive data.") from e
            if endpoint is None or same_endpoint(addr, endpoint):
                break
            self.logger.warning(f"Отброшена датаграмма от {addr}: ожидался ответ от {endpoint[0]}:{endpoint[1]}")
        self.logger.debug(f"Получено {len(data)} байт от {addr}: {data}")
        return data, addr

    def close(self):
        if self.stream:
            self.stream.close()
            self.stream = None
            self.logger.debug("UDP-сокет закрыт.")

    async def __aenter__(self):
        await self.open()
        return self

    async def __aexit__(self, exc_type, exc, tb):
        self.close()
