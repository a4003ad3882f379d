# game_query/config.py

import json
import os

CONFIG_FILE_NAME = "config.json"
# Рядом с пакетом: работает при запуске из клонированного репозитория
PACKAGE_CONFIG_PATH = os.path.join(os.path.dirname(os.path.dirname(__file__)), CONFIG_FILE_NAME)


def default_config_path():
    """
    Путь к конфигу, если он не передан явно:
    сначала config.json в текущей директории, затем рядом с пакетом.
    После pip install второй путь указывает в site-packages, поэтому
    установленному пакету конфиг нужен в рабочей директории или явным путём.
    """
    cwd_path = os.path.join(os.getcwd(), CONFIG_FILE_NAME)
    if os.path.isfile(cwd_path):
        return cwd_path
    return PACKAGE_CONFIG_PATH


class Config:

    def __init__(self, config_path=None):
        config_path = config_path or default_config_path()
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                self._config = json.load(f)
        except FileNotFoundError:
            raise FileNotFoundError(f"Конфигурационный файл не найден: {config_path}")
        except json.JSONDecodeError as e:
            raise ValueError(f"Ошибка парсинга JSON в конфиге: {e}")
        self.path = config_path

    def get(self, key, default=None):
        """
        Общий безопасный доступ к любому полю.
        Поддерживает вложенные ключи через точку (например, "QUERY.TIMEOUT").
        """
        keys = key.split('.')
        value = self._config
        for k in keys:
            if isinstance(value, dict):
                value = value.get(k)
            else:
                return default
        return value if value is not None else default

    def get_server(self, server_id):
        """Получить конфиг сервера по ID"""
        servers = self._config.get("SERVERS", {})
        return servers.get(str(server_id))

    @property
    def servers(self):
        """Свойство: все опрашиваемые серверы {id: настройки}"""
        return self._config.get("SERVERS", {})
