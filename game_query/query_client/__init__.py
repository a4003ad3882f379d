from game_query.query_client.query_client import (
    ServerQuery, ServerType, Queryable, SourceQuery, MinecraftQuery, make_endpoint,
)
from game_query.query_client.transport import UdpTransport
from game_query.query_client.types import QueryInfo, SourceQueryInfo, MinecraftQueryInfo, ServerQueryPlayer
