## client.py
# Twitch chat bot: handshake, receive loop and dispatch.
import asyncio
import inspect
import logging

from . import connection, parsing, protocol
from .protocol import Error, TransportError, RoutingError

__all__ = ['Error', 'TransportError', 'RoutingError', 'Bot']

IDLE = 'idle'
CONNECTING = 'connecting'
AUTHENTICATING = 'authenticating'
JOINING = 'joining'
RUNNING = 'running'
DISCONNECTED = 'disconnected'


class Bot:
    """
    A bot joined to a single Twitch channel.

    connect_to() performs the handshake and then handles incoming lines until the session ends,
    either through disconnect() (from a callback or any other task on the same event loop)
    or because the server went away.
    """
    HOST = protocol.HOST
    PORT = protocol.PORT
    ENCODING = protocol.DEFAULT_ENCODING
    READ_TIMEOUT = None

    def __init__(self, username, password, connection=None, eventloop=None):
        """ Create a bot. """
        self.username = username
        self._password = password
        self.eventloop = eventloop
        self._connection = connection

        self._on_message_callback = None
        self._on_join_callback = None
        self._on_connection_lost_callback = None

        self._reset_attributes()

    def _reset_attributes(self):
        """ Reset session attributes. """
        self.channel = None
        self.running = False
        self.state = IDLE
        self.connection = None

        # Low-level data stuff.
        self._receive_buffer = b''

        # Misc.
        self.logger = logging.getLogger(__name__)

    def __repr__(self):
        return '<{cls} {user} state={state} channel={chan}>'.format(
            cls=self.__class__.__name__, user=self.username, state=self.state, chan=self.channel)

    ## Callbacks.

    def bind_on_receive_message(self, fn):
        """ Set callback called as fn(sender, text) for every chat message. Replaces any previous one. """
        self._on_message_callback = fn

    def bind_on_join_channel_chat(self, fn):
        """ Set callback called as fn() whenever the server confirms our join. Replaces any previous one. """
        self._on_join_callback = fn

    def bind_on_connection_lost(self, fn):
        """ Set callback called as fn() when the server closed the connection on us. """
        self._on_connection_lost_callback = fn

    async def _invoke(self, callback, *args):
        if callback is None:
            return

        try:
            result = callback(*args)
            if inspect.isawaitable(result):
                await result
        except Exception:
            self.logger.exception('Failed to execute callback %r.', callback)

    ## Connection.

    @property
    def connected(self):
        """ Whether or not we are connected. """
        return bool(self.connection and self.connection.connected)

    def _create_connection(self):
        if self._connection is not None:
            return self._connection
        return connection.Connection(self.HOST, self.PORT, encoding=self.ENCODING)

    def run(self, channel):
        """ Connect to channel and handle it until the session ends. """
        eventloop = self.eventloop or asyncio.new_event_loop()
        try:
            eventloop.run_until_complete(self.connect_to(channel))
        finally:
            if not self.eventloop:
                eventloop.close()

    async def connect_to(self, channel):
        """
        Connect, authenticate and join channel, then handle incoming data.
        Returns when the session has ended. Raises TransportError when the handshake fails.
        """
        if self.running:
            await self.disconnect()
        self._reset_attributes()

        self.state = CONNECTING
        self.connection = self._create_connection()
        try:
            await self.connection.connect()

            self.state = AUTHENTICATING
            await self._send(protocol.build_pass(self._password))
            await self._send(protocol.build_nick(self.username))

            self.state = JOINING
            await self._send(protocol.build_join(channel))
        except TransportError as e:
            self.logger.error('Could not connect to #%s: %s', channel, e)
            await self.connection.disconnect()
            self.state = DISCONNECTED
            raise

        self.channel = channel
        self.running = True
        self.state = RUNNING
        self.logger = logging.getLogger(self.__class__.__name__ + ':' + self.username)
        self.logger.info('Connected to %s:%s, joining #%s.', self.connection.hostname, self.connection.port, channel)

        await self.handle_forever()

    async def disconnect(self):
        """ Stop handling data and close the connection. Safe to call more than once. """
        self.running = False
        self.state = DISCONNECTED
        if self.connection:
            await self.connection.disconnect()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        if self.running or self.connected:
            await self.disconnect()

    ## Chat API.

    async def message(self, text, channel=None):
        """ Send chat message to channel, or to the channel we joined if none given. """
        if channel is None:
            channel = self.channel
        if channel is None:
            raise RoutingError(text)
        await self._send(protocol.build_privmsg(channel, text))

    async def ping(self):
        """ Send a keepalive request to the server. """
        await self._send(protocol.build_ping())

    async def raw(self, line):
        """ Send raw line. """
        await self._send(line)

    ## Message dispatch.

    async def _send(self, message):
        line = str(message)
        self.logger.debug('>> %s', protocol.mask_secret(line).rstrip(protocol.LINE_SEPARATOR))
        if not self.connection:
            raise TransportError('Not connected.')
        await self.connection.send(line)

    def _has_message(self):
        """ Whether or not we have a complete line available for processing. """
        sep = protocol.MINIMAL_LINE_SEPARATOR.encode(self.ENCODING)
        return sep in self._receive_buffer

    def _parse_message(self):
        sep = protocol.MINIMAL_LINE_SEPARATOR.encode(self.ENCODING)
        line, _, data = self._receive_buffer.partition(sep)
        self._receive_buffer = data
        return parsing.parse(line + sep, encoding=self.ENCODING)

    async def handle_forever(self):
        """ Handle data until disconnected. """
        while self.running:
            data = await self.connection.recv(timeout=self.READ_TIMEOUT)
            if data is None:
                # Nothing arrived this time around.
                continue
            if not data:
                if self.running:
                    await self._connection_lost()
                break
            await self.on_data(data)

    async def _connection_lost(self):
        self.logger.error('Connection to server lost.')
        await self.disconnect()
        await self._invoke(self._on_connection_lost_callback)

    async def on_data(self, data):
        """ Handle received data. """
        self._receive_buffer += data

        while self.running and self._has_message():
            event = self._parse_message()
            await self.on_event(event)

    async def on_event(self, event):
        """ Handle a single classified line. """
        self.logger.debug('<< %s', event.raw)

        if isinstance(event, parsing.Keepalive):
            try:
                await self._send(protocol.build_pong())
            except TransportError as e:
                self.logger.error('Could not answer keepalive: %s', e)
                await self._connection_lost()
        elif isinstance(event, parsing.ServerNotice):
            # We don't handle any other server messages.
            pass
        elif isinstance(event, parsing.JoinConfirmed):
            self.logger.debug('Join to #%s confirmed.', self.channel)
            await self._invoke(self._on_join_callback)
        elif isinstance(event, parsing.ChatMessage):
            await self._invoke(self._on_message_callback, event.sender, event.text)
