# game_query/query_client/query_request/info_query.py
from game_query.constants import (
    A2S_INFO_REQUEST, CHALLENGE_TOKEN_LENGTH,
    MINECRAFT_MAGIC, MINECRAFT_STAT, MINECRAFT_SESSION_ID, MINECRAFT_STAT_PADDING,
)
from game_query.errors import InvalidArgument
from game_query.query_client.query_request.challenge_query import minecraft_challenge
from game_query.query_client.types import SourceQueryInfo, MinecraftQueryInfo


def build_minecraft_stat_request(token: bytes) -> bytes:
    if len(token) != CHALLENGE_TOKEN_LENGTH:
        raise InvalidArgument(f"Challenge token должен быть {CHALLENGE_TOKEN_LENGTH} байта, получено {len(token)}")
    return (
            MINECRAFT_MAGIC +  # Магические байты
            bytes([MINECRAFT_STAT]) +  # Тип пакета (stat)
            MINECRAFT_SESSION_ID +  # Session ID
            bytes(token) +  # Challenge token (int32, big-endian)
            MINECRAFT_STAT_PADDING  # Дополнение: full stat
    )


async def source_info(transport, endpoint) -> SourceQueryInfo:
    """
    A2S_INFO: один запрос без challenge, один ответ.
    """
    await transport.send(A2S_INFO_REQUEST, endpoint)
    data, _ = await transport.receive(endpoint)
    return SourceQueryInfo.from_bytes(data)


async def minecraft_info(transport, endpoint) -> MinecraftQueryInfo:
    """
    Full stat Minecraft: handshake -> token, затем stat-запрос с токеном.
    """
    token = await minecraft_challenge(transport, endpoint)
    await transport.send(build_minecraft_stat_request(token), endpoint)
    data, _ = await transport.receive(endpoint)
    return MinecraftQueryInfo.from_bytes(data)
