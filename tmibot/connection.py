import asyncio
import logging

from . import protocol
from .protocol import TransportError

__all__ = ['Connection']


class Connection:
    """ A plain TCP connection to the chat server. """

    def __init__(self, hostname=protocol.HOST, port=protocol.PORT, source_address=None,
                 buffer_size=protocol.RECEIVE_BUFFER_SIZE, encoding=protocol.DEFAULT_ENCODING):
        self.hostname = hostname
        self.port = port
        self.source_address = source_address
        self.buffer_size = buffer_size
        self.encoding = encoding

        self.reader = None
        self.writer = None
        self.logger = logging.getLogger(__name__)

    async def connect(self):
        """ Connect to target. """
        try:
            (self.reader, self.writer) = await asyncio.open_connection(
                host=self.hostname,
                port=self.port,
                local_addr=self.source_address
            )
        except OSError as e:
            raise TransportError('Could not connect to {}:{}: {}'.format(self.hostname, self.port, e)) from e

    async def disconnect(self):
        """ Disconnect from target. """
        if not self.connected:
            return

        writer = self.writer
        self.reader = None
        self.writer = None
        writer.close()
        try:
            await writer.wait_closed()
        except OSError as e:
            # The peer may already be gone; the handle is closed either way.
            self.logger.debug('Error while closing connection: %s', e)

    @property
    def connected(self):
        """ Whether this connection is... connected to something. """
        return self.reader is not None and self.writer is not None

    async def send(self, data):
        """ Send a single line, terminating it if necessary. """
        if not self.connected:
            raise TransportError('Not connected.')

        if isinstance(data, str):
            data = data.encode(self.encoding)
        separator = protocol.LINE_SEPARATOR.encode(self.encoding)
        if not data.endswith(separator):
            data += separator

        try:
            self.writer.write(data)
            await self.writer.drain()
        except OSError as e:
            raise TransportError('Could not send data: {}'.format(e)) from e

    async def recv(self, *, timeout=None):
        """
        Receive whatever is available, up to the buffer size.
        Returns None when nothing arrived within the timeout, and b'' on end of stream.
        """
        if not self.connected:
            return b''

        reader = self.reader
        try:
            return await asyncio.wait_for(reader.read(self.buffer_size), timeout=timeout)
        except asyncio.TimeoutError:
            return None
        except OSError as e:
            self.logger.debug('Error while receiving: %s', e)
            return b''
