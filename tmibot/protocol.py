## protocol.py
# Twitch chat protocol constants and outgoing message construction.
import enum

__all__ = ['Error', 'TransportError', 'RoutingError', 'Command', 'Message', 'build',
           'build_pass', 'build_nick', 'build_join', 'build_ping', 'build_pong', 'build_privmsg']

HOST = 'irc.chat.twitch.tv'
# Plain-text IRC. TLS would be 6697.
PORT = 6667

DEFAULT_ENCODING = 'utf-8'
FALLBACK_ENCODING = 'iso-8859-1'

RECEIVE_BUFFER_SIZE = 4096


## Message parsing.

SERVER_TAG = 'tmi.twitch.tv'
LINE_SEPARATOR = '\r\n'
MINIMAL_LINE_SEPARATOR = '\n'
CHANNEL_PREFIX = '#'
TRAILING_PREFIX = ':'


## Errors.

class Error(Exception):
    """ Base class for all tmibot errors. """
    pass


class TransportError(Error):
    """ The connection to the server could not be opened or written to. """
    pass


class RoutingError(Error):
    """ A message had no channel to go to. """
    def __init__(self, text):
        super().__init__('Not connected to any channel, cannot send: {!r}'.format(text))
        self.text = text


class Command(enum.Enum):
    """ Outgoing commands we know how to build. """
    AUTHENTICATE = 'PASS'
    SET_IDENTITY = 'NICK'
    JOIN = 'JOIN'
    KEEPALIVE_REQUEST = 'PING'
    KEEPALIVE_REPLY = 'PONG'
    CHAT_SEND = 'PRIVMSG'


class Message:
    """
    A single outgoing protocol line.
    Lines are not escaped: callers must not embed the line separator in parameters.
    """
    __slots__ = ('command', 'line')

    def __init__(self, command, line):
        self.command = command
        self.line = line

    def __str__(self):
        return self.line

    def __repr__(self):
        return '{cls}({cmd}, {line!r})'.format(cls=self.__class__.__name__, cmd=self.command, line=self.line)

    def __eq__(self, other):
        if not isinstance(other, Message):
            return NotImplemented
        return self.command == other.command and self.line == other.line

    def __hash__(self):
        return hash((self.command, self.line))


## Builders.

def build_pass(password):
    return Message(Command.AUTHENTICATE, 'PASS {}{}'.format(password, LINE_SEPARATOR))

def build_nick(nickname):
    return Message(Command.SET_IDENTITY, 'NICK {}{}'.format(nickname, LINE_SEPARATOR))

def build_join(channel):
    return Message(Command.JOIN, 'JOIN {}{}{}'.format(CHANNEL_PREFIX, channel, LINE_SEPARATOR))

def build_ping():
    # Keepalives are fixed literals without separator; the connection terminates them on send.
    return Message(Command.KEEPALIVE_REQUEST, 'PING {}{}'.format(TRAILING_PREFIX, SERVER_TAG))

def build_pong():
    return Message(Command.KEEPALIVE_REPLY, 'PONG {}{}'.format(TRAILING_PREFIX, SERVER_TAG))

def build_privmsg(channel, text):
    return Message(Command.CHAT_SEND, 'PRIVMSG {}{} {}{}{}'.format(
        CHANNEL_PREFIX, channel, TRAILING_PREFIX, text, LINE_SEPARATOR))


BUILDERS = {
    Command.AUTHENTICATE: build_pass,
    Command.SET_IDENTITY: build_nick,
    Command.JOIN: build_join,
    Command.KEEPALIVE_REQUEST: build_ping,
    Command.KEEPALIVE_REPLY: build_pong,
    Command.CHAT_SEND: build_privmsg,
}


def build(command, *params):
    """ Build message for given command from its parameters. """
    return BUILDERS[Command(command)](*params)


def mask_secret(line):
    """ Hide the password in a PASS line so it never reaches the logs. """
    if line.startswith(Command.AUTHENTICATE.value + ' '):
        return '{} ********'.format(Command.AUTHENTICATE.value)
    return line
