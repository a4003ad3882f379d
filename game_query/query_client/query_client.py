# game_query/query_client/query_client.py
from enum import Enum
from typing import List

from game_query.errors import InvalidArgument
from game_query.logger import LoggerMixin
from game_query.query_client.query_request.info_query import source_info, minecraft_info
from game_query.query_client.query_request.player_query import source_players
from game_query.query_client.transport import UdpTransport
from game_query.query_client.types import QueryInfo, ServerQueryPlayer


class ServerType(Enum):
    SOURCE = "source"
    MINECRAFT = "minecraft"

    @classmethod
    def _missing_(cls, value):
        # "Source", "MINECRAFT" и т.п.
        if isinstance(value, str):
            return cls.__members__.get(value.upper())


class Queryable:
    """
    Стратегия опроса одного протокола.
    """
    server_type = None

    async def info(self, transport, endpoint) -> QueryInfo:
        raise NotImplementedError

    async def players(self, transport, endpoint) -> List[ServerQueryPlayer]:
        raise InvalidArgument(f"Протокол {self.server_type.value} не поддерживает запрос списка игроков")


class SourceQuery(Queryable):
    server_type = ServerType.SOURCE

    async def info(self, transport, endpoint):
        return await source_info(transport, endpoint)

    async def players(self, transport, endpoint):
        return await source_players(transport, endpoint)


class MinecraftQuery(Queryable):
    server_type = ServerType.MINECRAFT

    async def info(self, transport, endpoint):
        return await minecraft_info(transport, endpoint)


STRATEGIES = {
    ServerType.SOURCE: SourceQuery(),
    ServerType.MINECRAFT: MinecraftQuery(),
}


def make_endpoint(address, port=None):
    """
    Приводит (address, port) или готовый endpoint к кортежу (host, port).
    """
    if port is None:
        if isinstance(address, (str, bytes)):
            raise InvalidArgument(f"Не указан порт для адреса {address!r}")
        try:
            address, port = address[0], address[1]
        except (TypeError, IndexError, KeyError):
            raise InvalidArgument(f"Ожидался endpoint (host, port), получено {address!r}")
    try:
        port = int(port)
    except (TypeError, ValueError):
        raise InvalidArgument(f"Некорректный порт: {port!r}")
    if not 0 <= port <= 0xFFFF:
        raise InvalidArgument(f"Порт вне диапазона 0..65535: {port}")
    return str(address), port


def get_strategy(server_type) -> Queryable:
    try:
        return STRATEGIES[ServerType(server_type)]
    except (ValueError, TypeError, KeyError):
        raise InvalidArgument(f"Неподдерживаемый тип сервера: {server_type!r}")


class ServerQuery(LoggerMixin):
    """
    Опрос игровых серверов по Source Engine Query и Minecraft Query.
    Транспорт принадлежит вызывающему коду: один ServerQuery - один сокет.
    """

    def __init__(self, transport, logger=None):
        super().__init__(logger)
        self.transport = transport

    @classmethod
    def from_config(cls, config, logger=None):
        return cls(UdpTransport.from_config(config, logger=logger), logger=logger)

    async def info(self, address, port=None, server_type=ServerType.SOURCE) -> QueryInfo:
        """
        Информация о сервере.
        :param address: IP/хост сервера либо готовый endpoint (host, port).
        :param port: Порт запросов; None, если address - endpoint.
        :param server_type: ServerType или его строковое значение.
        :raises InvalidArgument: неподдерживаемый тип сервера, до любого I/O.
        :raises UnreachableHost: ошибка сети или некорректный ответ.
        """
        strategy = get_strategy(server_type)
        endpoint = make_endpoint(address, port)
        self.logger.info(f"Запрос информации {strategy.server_type.value} у {endpoint[0]}:{endpoint[1]}")
        return await strategy.info(self.transport, endpoint)

    async def players(self, address, port=None) -> List[ServerQueryPlayer]:
        """
        Список игроков сервера Source (challenge, затем A2S_PLAYER).
        """
        endpoint = make_endpoint(address, port)
        self.logger.info(f"Запрос списка игроков у {endpoint[0]}:{endpoint[1]}")
        players = await STRATEGIES[ServerType.SOURCE].players(self.transport, endpoint)
        self.logger.debug(f"{endpoint[0]}:{endpoint[1]}: получено игроков: {len(players)}")
        return players
