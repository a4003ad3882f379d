# main.py

import argparse
import asyncio
import sys

from game_query.config import Config
from game_query.errors import QueryError
from game_query.logger import Logger
from game_query.query_client import ServerQuery, ServerType, UdpTransport, SourceQueryInfo, MinecraftQueryInfo


def format_info(info):
    """Поля записи выводятся явно, по одному на строку."""
    lines = [
        f"Name: {info.name}",
        f"Map: {info.map}",
        f"Players: {info.num_players}/{info.max_players}",
        f"Version: {info.version}",
    ]
    if isinstance(info, SourceQueryInfo):
        lines += [
            f"Game: {info.game} ({info.folder}, app id {info.app_id})",
            f"Bots: {info.bots}",
            f"Server type: {info.server_type}, {info.environment}",
            f"Password: {'yes' if info.visibility else 'no'}, VAC: {'yes' if info.vac else 'no'}",
        ]
        if info.port is not None:
            lines.append(f"Game port: {info.port}")
        if info.keywords:
            lines.append(f"Keywords: {info.keywords}")
    elif isinstance(info, MinecraftQueryInfo):
        lines += [
            f"Game type: {info.game_type} ({info.game_id})",
            f"Plugins: {info.plugins or '-'}",
            f"Host: {info.host_ip}:{info.host_port}",
        ]
        if info.players:
            lines.append("Player list:")
            lines += [f"- {player}" for player in info.players]
    return "\n".join(lines)


def format_players(players):
    if not players:
        return "Player list: empty"
    lines = ["Player list:"]
    for player in players:
        minutes, seconds = divmod(int(player.duration), 60)
        lines.append(f"- {player.name} (score {player.score}, {minutes}m {seconds:02d}s)")
    return "\n".join(lines)


def build_targets(args, config):
    """Список (host, port, type, players) из аргументов или секции SERVERS конфига."""
    if args.host:
        return [(args.host, args.port, args.type, args.players)]
    targets = []
    for server_id, server in config.servers.items():
        targets.append((
            server.get("HOST", "127.0.0.1"),
            server.get("PORT", 27015),
            server.get("TYPE", ServerType.SOURCE.value),
            server.get("PLAYERS", False),
        ))
    return targets


async def run(args):
    config = Config(args.config)
    logger = Logger(config)
    targets = build_targets(args, config)
    if not targets:
        logger.error("Не найдено ни одного сервера для опроса. Выход.")
        return 1

    failed = 0
    async with UdpTransport.from_config(config) as transport:
        query = ServerQuery(transport)
        for host, port, server_type, with_players in targets:
            logger.info(f"Опрос {host}:{port} ({server_type})...")
            try:
                info = await query.info(host, port, server_type=server_type)
                print(f"--- {host}:{port} ---")
                print(format_info(info))
                if with_players and ServerType(server_type) is ServerType.SOURCE:
                    print(format_players(await query.players(host, port)))
            except QueryError as e:
                failed += 1
                logger.error(f"{host}:{port}: {e}")
    return 1 if failed else 0


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Опрос игровых серверов (Source Engine Query, Minecraft Query)")
    parser.add_argument("host", nargs="?", help="Адрес сервера; без него опрашиваются серверы из конфига")
    parser.add_argument("port", nargs="?", type=int, default=27015, help="Порт запросов")
    parser.add_argument("--type", default=ServerType.SOURCE.value,
                        choices=[server_type.value for server_type in ServerType], help="Протокол")
    parser.add_argument("--players", action="store_true", help="Запросить список игроков (только Source)")
    parser.add_argument("--config", default=None, help="Путь к config.json")
    return parser.parse_args(argv)


if __name__ == "__main__":
    try:
        sys.exit(asyncio.run(run(parse_args())))
    except KeyboardInterrupt:
        pass
