from . import protocol, parsing, client, connection

from .protocol import Error, TransportError, RoutingError, Command
from .parsing import Keepalive, ServerNotice, JoinConfirmed, ChatMessage
from .client import Bot
from .connection import Connection

__name__ = 'tmibot'
__version__ = '0.1.0'
__version_info__ = (0, 1, 0)
__license__ = 'BSD'
