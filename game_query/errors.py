# game_query/errors.py


class QueryError(Exception):
    """Базовое исключение клиента опроса серверов."""


class UnreachableHost(QueryError):
    """
    Сервер недоступен: ошибка отправки или приёма датаграммы
    (сеть недоступна, хост недоступен, нет ответа).
    Исходное исключение доступно через __cause__.
    """


class MalformedResponse(UnreachableHost):
    """Ответ сервера короче заголовка протокола или не разбирается."""


class Authentication(QueryError):
    """Сервер отклонил аутентификацию (RCON и подобные протоколы)."""


class InvalidArgument(QueryError, ValueError):
    """Некорректный аргумент вызова (тип сервера, адрес, токен); выбрасывается до любого I/O."""
