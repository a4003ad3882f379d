# game_query/query_client/query_request/player_query.py
from typing import List

from game_query.constants import A2S_PLAYER_HEADER, CHALLENGE_TOKEN_LENGTH
from game_query.errors import InvalidArgument
from game_query.query_client.query_request.challenge_query import source_challenge
from game_query.query_client.types import ServerQueryPlayer


def build_player_request(token: bytes) -> bytes:
    """
    Запрос A2S_PLAYER с полученным challenge number (9 байт).
    """
    if len(token) != CHALLENGE_TOKEN_LENGTH:
        raise InvalidArgument(f"Challenge number должен быть {CHALLENGE_TOKEN_LENGTH} байта, получено {len(token)}")
    return A2S_PLAYER_HEADER + bytes(token)


async def source_players(transport, endpoint) -> List[ServerQueryPlayer]:
    """
    Обрабатывает запрос A2S_PLAYER.
    :param transport: Транспорт, через который идут оба обмена.
    :param endpoint: Адрес сервера (host, port).
    :return: Список игроков, возможно пустой.
    """
    token = await source_challenge(transport, endpoint)
    await transport.send(build_player_request(token), endpoint)
    data, _ = await transport.receive(endpoint)
    return ServerQueryPlayer.from_bytes(data)
