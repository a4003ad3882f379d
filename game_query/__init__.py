from game_query.errors import QueryError, UnreachableHost, MalformedResponse, Authentication, InvalidArgument
from game_query.query_client import (
    ServerQuery, ServerType, UdpTransport,
    QueryInfo, SourceQueryInfo, MinecraftQueryInfo, ServerQueryPlayer,
)

__version__ = "0.1.0"
