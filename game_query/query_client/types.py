# game_query/query_client/types.py
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from game_query.constants import (
    SOURCE_PREFIX, SOURCE_SPLIT_PREFIX, SOURCE_HEADER_LENGTH, S2A_INFO, S2A_PLAYER, S2C_CHALLENGE, THE_SHIP_APP_ID,
    EDF_PORT, EDF_STEAM_ID, EDF_SOURCE_TV, EDF_KEYWORDS, EDF_GAME_ID,
    SERVER_TYPES, ENVIRONMENTS,
    MINECRAFT_STAT, MINECRAFT_HEADER_LENGTH, MINECRAFT_KV_PADDING, MINECRAFT_PLAYERS_PADDING,
)
from game_query.errors import MalformedResponse
from game_query.utils.packet_reader import PacketReader


def _source_reader(data: bytes, expected_header: int, name: str) -> PacketReader:
    """Проверяет префикс и тип ответа Source, возвращает читатель, стоящий после заголовка."""
    if len(data) < SOURCE_HEADER_LENGTH:
        raise MalformedResponse(f"{name}: ответ короче заголовка ({len(data)} байт)")
    if data[:4] == SOURCE_SPLIT_PREFIX:
        raise MalformedResponse(f"{name}: split-пакеты не поддерживаются")
    if data[:4] != SOURCE_PREFIX:
        raise MalformedResponse(f"{name}: неподдерживаемый префикс {data[:4].hex()}")
    if data[4] == S2C_CHALLENGE and expected_header != S2C_CHALLENGE:
        raise MalformedResponse(f"{name}: сервер требует challenge number")
    if data[4] != expected_header:
        raise MalformedResponse(f"{name}: ожидался тип 0x{expected_header:02X}, получен 0x{data[4]:02X}")
    return PacketReader(data, SOURCE_HEADER_LENGTH)


class QueryInfo:
    """
    Общие поля статуса сервера для всех протоколов:
    name, map, num_players, max_players, version.
    """

    @classmethod
    def from_bytes(cls, data: bytes):
        raise NotImplementedError


@dataclass
class SourceQueryInfo(QueryInfo):
    """Ответ A2S_INFO."""
    protocol: int
    name: str
    map: str
    folder: str
    game: str
    app_id: int
    num_players: int
    max_players: int
    bots: int
    server_type: str
    environment: str
    visibility: bool  # True - сервер закрыт паролем
    vac: bool
    version: str
    # The Ship (app id 2400)
    ship_mode: Optional[int] = None
    ship_witnesses: Optional[int] = None
    ship_duration: Optional[int] = None
    # Extra Data Flag
    port: Optional[int] = None
    steam_id: Optional[int] = None
    spectator_port: Optional[int] = None
    spectator_name: Optional[str] = None
    keywords: Optional[str] = None
    game_id: Optional[int] = None

    @classmethod
    def from_bytes(cls, data: bytes) -> "SourceQueryInfo":
        reader = _source_reader(data, S2A_INFO, "A2S_INFO")
        protocol = reader.read_byte()
        name = reader.read_string()
        map_name = reader.read_string()
        folder = reader.read_string()
        game = reader.read_string()
        app_id = reader.read_ushort()
        num_players = reader.read_byte()
        max_players = reader.read_byte()
        bots = reader.read_byte()
        server_type = reader.read_char()
        environment = reader.read_char()
        visibility = reader.read_byte() == 1
        vac = reader.read_byte() == 1

        ship = {}
        if app_id == THE_SHIP_APP_ID:
            ship = {
                "ship_mode": reader.read_byte(),
                "ship_witnesses": reader.read_byte(),
                "ship_duration": reader.read_byte(),
            }

        version = reader.read_string()

        extra = {}
        if reader.remaining:
            edf = reader.read_byte()
            if edf & EDF_PORT:
                extra["port"] = reader.read_ushort()
            if edf & EDF_STEAM_ID:
                extra["steam_id"] = reader.read_long_long()
            if edf & EDF_SOURCE_TV:
                extra["spectator_port"] = reader.read_ushort()
                extra["spectator_name"] = reader.read_string()
            if edf & EDF_KEYWORDS:
                extra["keywords"] = reader.read_string()
            if edf & EDF_GAME_ID:
                extra["game_id"] = reader.read_long_long()

        return cls(
            protocol=protocol,
            name=name,
            map=map_name,
            folder=folder,
            game=game,
            app_id=app_id,
            num_players=num_players,
            max_players=max_players,
            bots=bots,
            server_type=SERVER_TYPES.get(server_type, server_type),
            environment=ENVIRONMENTS.get(environment, environment),
            visibility=visibility,
            vac=vac,
            version=version,
            **ship,
            **extra,
        )


@dataclass
class ServerQueryPlayer:
    """Один игрок из ответа A2S_PLAYER. duration - секунды на сервере."""
    index: int
    name: str
    score: int
    duration: float

    @classmethod
    def from_bytes(cls, data: bytes) -> List["ServerQueryPlayer"]:
        reader = _source_reader(data, S2A_PLAYER, "A2S_PLAYER")
        count = reader.read_byte()
        players = []
        for _ in range(count):
            players.append(cls(
                index=reader.read_byte(),
                name=reader.read_string(),
                score=reader.read_long(),
                duration=reader.read_float(),
            ))
        return players


@dataclass
class MinecraftQueryInfo(QueryInfo):
    """Ответ full stat протокола Minecraft Query."""
    name: str
    game_type: str
    game_id: str
    version: str
    plugins: str
    map: str
    num_players: int
    max_players: int
    host_port: int
    host_ip: str
    players: List[str] = field(default_factory=list)
    rules: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_bytes(cls, data: bytes) -> "MinecraftQueryInfo":
        min_length = MINECRAFT_HEADER_LENGTH + len(MINECRAFT_KV_PADDING)
        if len(data) < min_length:
            raise MalformedResponse(f"Minecraft stat: ответ короче заголовка ({len(data)} байт)")
        if data[0] != MINECRAFT_STAT:
            raise MalformedResponse(f"Minecraft stat: ожидался тип 0x00, получен 0x{data[0]:02X}")

        reader = PacketReader(data, min_length)
        rules = {}
        while True:
            key = reader.read_string()
            if not key:
                break
            rules[key] = reader.read_string()

        players = []
        # Список игроков может отсутствовать у урезанных реализаций сервера
        if reader.remaining >= len(MINECRAFT_PLAYERS_PADDING):
            reader.read_bytes(len(MINECRAFT_PLAYERS_PADDING))
            while reader.remaining:
                player = reader.read_string()
                if not player:
                    break
                players.append(player)

        try:
            num_players = int(rules.get("numplayers", 0))
            max_players = int(rules.get("maxplayers", 0))
            host_port = int(rules.get("hostport", 0))
        except ValueError as e:
            raise MalformedResponse(f"Minecraft stat: нечисловое значение счётчика: {e}") from e

        return cls(
            name=rules.get("hostname", ""),
            game_type=rules.get("gametype", ""),
            game_id=rules.get("game_id", ""),
            version=rules.get("version", ""),
            plugins=rules.get("plugins", ""),
            map=rules.get("map", ""),
            num_players=num_players,
            max_players=max_players,
            host_port=host_port,
            host_ip=rules.get("hostip", ""),
            players=players,
            rules=rules,
        )
