## parsing.py
# Inbound line classification.
import re

from . import protocol

__all__ = ['Event', 'Keepalive', 'ServerNotice', 'JoinConfirmed', 'ChatMessage', 'parse']

KEEPALIVE_MARKER = protocol.Command.KEEPALIVE_REQUEST.value
SERVER_NOTICE_MARKER = protocol.TRAILING_PREFIX + protocol.SERVER_TAG
JOIN_MARKER = '.{} {}'.format(protocol.SERVER_TAG, protocol.Command.JOIN.value)

SENDER_PATTERN = re.compile(r'\w+', re.ASCII)
CHAT_PREFIX_PATTERN = re.compile(r'^:\w+!\w+@\w+\.tmi\.twitch\.tv PRIVMSG #\w+ :', re.ASCII)


class Event:
    """ Base class for classified inbound lines. """
    __slots__ = ('raw',)

    def __init__(self, raw):
        self.raw = raw

    def _fields(self):
        return ()

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        return self._fields() == other._fields()

    def __hash__(self):
        return hash((type(self), self._fields()))

    def __repr__(self):
        return '{cls}({fields})'.format(cls=self.__class__.__name__,
                                        fields=', '.join(repr(f) for f in self._fields()))


class Keepalive(Event):
    __slots__ = ()


class ServerNotice(Event):
    """ Server housekeeping; we do not act on these. """
    __slots__ = ()


class JoinConfirmed(Event):
    __slots__ = ()


class ChatMessage(Event):
    __slots__ = ('sender', 'text')

    def __init__(self, sender, text, raw=None):
        super().__init__(raw)
        self.sender = sender
        self.text = text

    def _fields(self):
        return (self.sender, self.text)


def decode(line, encoding=protocol.DEFAULT_ENCODING):
    """ Decode raw line, using the fallback encoding if need be. """
    try:
        return line.decode(encoding)
    except UnicodeDecodeError:
        return line.decode(protocol.FALLBACK_ENCODING)


def strip_separator(line):
    if line.endswith(protocol.LINE_SEPARATOR):
        return line[:-len(protocol.LINE_SEPARATOR)]
    elif line.endswith(protocol.MINIMAL_LINE_SEPARATOR):
        return line[:-len(protocol.MINIMAL_LINE_SEPARATOR)]
    return line


def parse(line, encoding=protocol.DEFAULT_ENCODING):
    """
    Classify a single inbound line.

    This is a heuristic, not an IRC grammar: the first matching rule wins,
    and anything that is neither a keepalive, a server notice nor a join confirmation
    is treated as a chat message. Lines that do not look like a PRIVMSG keep
    their full contents as message text.
    """
    if isinstance(line, bytes):
        line = decode(line, encoding)
    line = strip_separator(line)

    if KEEPALIVE_MARKER in line:
        return Keepalive(line)
    if SERVER_NOTICE_MARKER in line:
        return ServerNotice(line)
    if JOIN_MARKER in line:
        return JoinConfirmed(line)

    match = SENDER_PATTERN.search(line)
    sender = match.group(0) if match else ''
    text = CHAT_PREFIX_PATTERN.sub('', line, count=1)
    return ChatMessage(sender, text, raw=line)
