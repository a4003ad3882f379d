# game_query/query_client/query_request/challenge_query.py
import struct

from game_query.constants import (
    A2S_CHALLENGE_REQUEST, SOURCE_CHALLENGE_OFFSET, CHALLENGE_TOKEN_LENGTH,
    MINECRAFT_HANDSHAKE_REQUEST, MINECRAFT_HEADER_LENGTH, MINECRAFT_CHALLENGE_PATTERN,
)
from game_query.errors import MalformedResponse


def parse_source_challenge(data: bytes) -> bytes:
    """
    Challenge number из ответа S2C_CHALLENGE: байты 5..8 как есть.
    """
    end = SOURCE_CHALLENGE_OFFSET + CHALLENGE_TOKEN_LENGTH
    if len(data) < end:
        raise MalformedResponse(f"Ответ на challenge-запрос Source слишком короткий: {len(data)} байт")
    return bytes(data[SOURCE_CHALLENGE_OFFSET:end])


def parse_minecraft_challenge(data: bytes) -> bytes:
    """
    Challenge token из ответа на handshake Minecraft.
    После 5 байт заголовка идёт целое число ASCII-строкой (обычно с нулевым байтом в конце),
    в запрос stat оно уходит как знаковое 32-битное big-endian.
    """
    if len(data) < MINECRAFT_HEADER_LENGTH:
        raise MalformedResponse(f"Ответ на handshake Minecraft слишком короткий: {len(data)} байт")
    digits = bytes(data[MINECRAFT_HEADER_LENGTH:]).split(b'\x00', 1)[0]
    if not MINECRAFT_CHALLENGE_PATTERN.fullmatch(digits):
        raise MalformedResponse(f"Некорректный challenge token Minecraft: {digits!r}")
    try:
        challenge = int(digits.decode('ascii'))
        return struct.pack('>i', challenge)
    except (UnicodeDecodeError, ValueError, struct.error) as e:
        raise MalformedResponse(f"Некорректный challenge token Minecraft: {digits!r}") from e


async def source_challenge(transport, endpoint) -> bytes:
    """
    Запрашивает challenge number Source (A2S_PLAYER с challenge -1).
    """
    await transport.send(A2S_CHALLENGE_REQUEST, endpoint)
    data, _ = await transport.receive(endpoint)
    return parse_source_challenge(data)


async def minecraft_challenge(transport, endpoint) -> bytes:
    """
    Handshake Minecraft Query: возвращает 4 байта токена для запроса stat.
    """
    await transport.send(MINECRAFT_HANDSHAKE_REQUEST, endpoint)
    data, _ = await transport.receive(endpoint)
    return parse_minecraft_challenge(data)
