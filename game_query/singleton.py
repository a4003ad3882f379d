# game_query/singleton.py


class Singleton:
    """
    Базовый класс для объектов, существующих в единственном экземпляре.
    Повторный вызов конструктора возвращает уже созданный объект.
    """
    _instances = {}

    def __new__(cls, *args, **kwargs):
        if cls not in cls._instances:
            cls._instances[cls] = super().__new__(cls)
        return cls._instances[cls]
