"""Tests for Config, logging formatter and the command-line demo helpers."""
import json
import logging

import pytest

from game_query import config as config_module
from game_query.config import Config
from game_query.logger import ColoredFormatter, Logger, LoggerMixin, COLORS, APP_LOGGER_NAME
from game_query.singleton import Singleton
from game_query.query_client.query_client import ServerQuery
from game_query.query_client.transport import UdpTransport
from game_query.query_client.types import SourceQueryInfo, MinecraftQueryInfo, ServerQueryPlayer
from main import build_targets, format_info, format_players, parse_args
from packet_samples import a2s_info_response, minecraft_stat_response


@pytest.fixture
def config(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({
        "QUERY": {"BIND_HOST": "127.0.0.1", "BIND_PORT": 0, "TIMEOUT": 2.5},
        "SERVERS": {
            "1": {"HOST": "10.0.0.1", "PORT": 27015, "TYPE": "source", "PLAYERS": True},
            "2": {"HOST": "10.0.0.2", "PORT": 25565, "TYPE": "minecraft"},
        },
    }), encoding="utf-8")
    return Config(str(path))


@pytest.fixture
def app_logger_reset():
    """Свежий синглтон Logger и логгер "app" без обработчиков на время теста."""
    app_logger = logging.getLogger(APP_LOGGER_NAME)
    saved_handlers = app_logger.handlers[:]
    saved_instance = Singleton._instances.pop(Logger, None)
    app_logger.handlers.clear()
    yield
    for handler in app_logger.handlers:
        handler.close()
    app_logger.handlers[:] = saved_handlers
    Singleton._instances.pop(Logger, None)
    if saved_instance is not None:
        Singleton._instances[Logger] = saved_instance


class TestConfig:
    def test_nested_keys(self, config):
        assert config.get("QUERY.TIMEOUT") == 2.5
        assert config.get("QUERY.MISSING", "default") == "default"
        assert config.get("QUERY.TIMEOUT.DEEPER", 1) == 1

    def test_get_server(self, config):
        assert config.get_server(2)["TYPE"] == "minecraft"
        assert config.get_server("9") is None

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            Config(str(tmp_path / "nope.json"))

    def test_bad_json(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ValueError):
            Config(str(path))

    def test_transport_from_config(self, config):
        transport = UdpTransport.from_config(config)
        assert (transport.bind_host, transport.bind_port, transport.timeout) == ("127.0.0.1", 0, 2.5)
        assert transport.stream is None

    def test_query_from_config(self, config):
        query = ServerQuery.from_config(config)
        assert isinstance(query.transport, UdpTransport)

    def test_default_path_prefers_working_directory(self, tmp_path, monkeypatch):
        (tmp_path / "config.json").write_text(json.dumps({"QUERY": {"TIMEOUT": 7}}), encoding="utf-8")
        monkeypatch.chdir(tmp_path)
        loaded = Config()
        assert loaded.path == str(tmp_path / "config.json")
        assert loaded.get("QUERY.TIMEOUT") == 7

    def test_default_path_falls_back_to_package(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr(config_module, "PACKAGE_CONFIG_PATH", str(tmp_path / "site" / "config.json"))
        with pytest.raises(FileNotFoundError, match="site"):
            Config()


class TestLogging:
    def test_colored_formatter(self):
        formatter = ColoredFormatter("%(levelname)s %(message)s")
        record = logging.LogRecord("app", logging.WARNING, __file__, 1, "hello", None, None)
        assert formatter.format(record) == f"{COLORS['WARNING']}WARNING hello{COLORS['RESET']}"
        assert formatter._style._fmt == "%(levelname)s %(message)s"

    def test_mixin_child_logger(self):
        assert ServerQuery(transport=None).logger.name == "app.ServerQuery"
        custom = logging.getLogger("custom")
        assert LoggerMixin(custom).logger is custom

    def test_logger_writes_file(self, tmp_path, app_logger_reset):
        log_file = tmp_path / "logs" / "app.log"
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"LOG": {"LOG_FILE": str(log_file), "LEVEL_CONSOLE_LOG": "CRITICAL"}}),
                        encoding="utf-8")
        logger = Logger(Config(str(path)))
        assert Logger() is logger
        logger.info("опрос 10.0.0.1:27015")
        logger.error("сервер не ответил")
        logging.getLogger(f"{APP_LOGGER_NAME}.UdpTransport").warning("отброшена датаграмма")
        for handler in logging.getLogger(APP_LOGGER_NAME).handlers:
            handler.flush()
        text = log_file.read_text(encoding="utf-8")
        assert "[INFO] app - опрос 10.0.0.1:27015" in text
        assert "[ERROR] app - сервер не ответил" in text
        assert "[WARNING] app.UdpTransport - отброшена датаграмма" in text


class TestCommandLine:
    def test_targets_from_config(self, config):
        targets = build_targets(parse_args([]), config)
        assert targets == [
            ("10.0.0.1", 27015, "source", True),
            ("10.0.0.2", 25565, "minecraft", False),
        ]

    def test_targets_from_arguments(self, config):
        args = parse_args(["mc.example.org", "25565", "--type", "minecraft"])
        assert build_targets(args, config) == [("mc.example.org", 25565, "minecraft", False)]

    def test_format_source_info(self):
        text = format_info(SourceQueryInfo.from_bytes(a2s_info_response()))
        assert "Name: My Test Server" in text
        assert "Players: 12/24" in text
        assert "VAC: yes" in text

    def test_format_minecraft_info(self):
        text = format_info(MinecraftQueryInfo.from_bytes(minecraft_stat_response()))
        assert "Game type: SMP (MINECRAFT)" in text
        assert "- Steve" in text

    def test_format_players(self):
        players = [ServerQueryPlayer(index=0, name="Alice", score=3, duration=125.0)]
        assert format_players(players) == "Player list:\n- Alice (score 3, 2m 05s)"
        assert format_players([]) == "Player list: empty"
