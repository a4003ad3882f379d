import struct

SERVER = ("127.0.0.1", 27015)


class FakeTransport:
    """
    Транспорт без сети: запоминает отправленные датаграммы
    и отдаёт заранее заданные ответы по очереди.
    """

    def __init__(self, responses=()):
        self.responses = list(responses)
        self.sent = []

    async def send(self, datagram, endpoint):
        self.sent.append((datagram, endpoint))
        return len(datagram)

    async def receive(self, endpoint=None):
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response, SERVER


def a2s_info_response(app_id=440, ship=b"", version=b"8622567\x00", edf=b""):
    return (
            b'\xFF\xFF\xFF\xFFI' +
            b'\x11' +  # протокол
            b'My Test Server\x00' +
            b'cp_badlands\x00' +
            b'tf\x00' +
            b'Team Fortress\x00' +
            struct.pack('<H', app_id) +
            b'\x0C' +  # игроки
            b'\x18' +  # максимум
            b'\x02' +  # боты
            b'd' +
            b'l' +
            b'\x00' +  # без пароля
            b'\x01' +  # VAC
            ship +
            version +
            edf
    )


def a2s_player_response():
    return (
            b'\xFF\xFF\xFF\xFFD' +
            b'\x02' +
            b'\x00' + b'Alice\x00' + struct.pack('<i', 10) + struct.pack('<f', 61.5) +
            b'\x01' + b'Bob\x00' + struct.pack('<i', -1) + struct.pack('<f', 3.0)
    )


def minecraft_stat_response(players=(b"Steve", b"Alex")):
    return (
            b'\x00' + b'\x01\x02\x03\x04' +
            b'splitnum\x00\x80\x00' +
            b'hostname\x00A Minecraft Server\x00'
            b'gametype\x00SMP\x00'
            b'game_id\x00MINECRAFT\x00'
            b'version\x001.20.4\x00'
            b'plugins\x00\x00'
            b'map\x00world\x00'
            b'numplayers\x002\x00'
            b'maxplayers\x0020\x00'
            b'hostport\x0025565\x00'
            b'hostip\x00127.0.0.1\x00'
            b'\x00' +
            b'\x01player_\x00\x00' +
            b''.join(name + b'\x00' for name in players) + b'\x00'
    )
