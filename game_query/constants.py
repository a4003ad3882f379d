# game_query/constants.py

import re

# --- Source Engine Query (A2S) ---
SOURCE_PREFIX = b'\xFF\xFF\xFF\xFF'
SOURCE_SPLIT_PREFIX = b'\xFF\xFF\xFF\xFE'

A2S_INFO_REQUEST = SOURCE_PREFIX + b'TSource Engine Query\x00'  # 25 байт
A2S_PLAYER_HEADER = SOURCE_PREFIX + b'\x55'
# Запрос A2S_PLAYER с challenge -1: сервер отвечает своим challenge number
A2S_CHALLENGE_REQUEST = A2S_PLAYER_HEADER + b'\xFF\xFF\xFF\xFF'  # 9 байт

S2A_INFO = 0x49  # 'I'
S2A_PLAYER = 0x44  # 'D'
S2C_CHALLENGE = 0x41  # 'A'

SOURCE_HEADER_LENGTH = 5  # префикс + тип ответа
SOURCE_CHALLENGE_OFFSET = 5
CHALLENGE_TOKEN_LENGTH = 4

THE_SHIP_APP_ID = 2400

# Extra Data Flags ответа A2S_INFO, в порядке следования полей
EDF_PORT = 0x80
EDF_STEAM_ID = 0x10
EDF_SOURCE_TV = 0x40
EDF_KEYWORDS = 0x20
EDF_GAME_ID = 0x01

SERVER_TYPES = {
    'd': 'dedicated',
    'l': 'non-dedicated',
    'p': 'proxy',
}

ENVIRONMENTS = {
    'l': 'linux',
    'w': 'windows',
    'm': 'mac',
    'o': 'mac',
}

# --- Minecraft Query (GameSpy4) ---
MINECRAFT_MAGIC = b'\xFE\xFD'
MINECRAFT_HANDSHAKE = 0x09
MINECRAFT_STAT = 0x00
MINECRAFT_SESSION_ID = b'\x01\x02\x03\x04'
MINECRAFT_STAT_PADDING = b'\x00\x00\x00\x00'  # дополнение выбирает full stat

MINECRAFT_HANDSHAKE_REQUEST = MINECRAFT_MAGIC + bytes([MINECRAFT_HANDSHAKE]) + MINECRAFT_SESSION_ID

MINECRAFT_HEADER_LENGTH = 5  # тип + session id
# Challenge token: десятичное целое со знаком, без пробелов, "+" и "_"
MINECRAFT_CHALLENGE_PATTERN = re.compile(rb"-?[0-9]+")
MINECRAFT_KV_PADDING = b'splitnum\x00\x80\x00'  # 11 байт перед парами ключ/значение
MINECRAFT_PLAYERS_PADDING = b'\x01player_\x00\x00'  # 10 байт перед списком игроков
