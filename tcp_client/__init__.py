import socket
import logging
from collections import namedtuple
from tcp_client.utils import cast_bytes, cast_string, recv_with_retry, send_with_retry

__author__ = 'tcp_client developers'

__all__ = ['Config', 'Response', 'Session', 'ACTIONS', 'DEFAULT_HOST',
           'DEFAULT_PORT', 'DEFAULT_BUFFER_SIZE', 'encode_request', 'connect',
           'send_request', 'receive_response', 'request', 'Error',
           'ResolutionError', 'ConnectionError', 'SendError', 'ReceiveError']

log = logging.getLogger('tcp_client.client')

ACTIONS = ('uppercase', 'lowercase', 'reverse', 'shuffle', 'random')
DEFAULT_HOST = 'localhost'
DEFAULT_PORT = '8080'
DEFAULT_BUFFER_SIZE = 1024

Config = namedtuple('Config', 'host port action message')


class Response(namedtuple('Response', 'data closed')):
    """The bytes read back from the server.

    `closed` is True when the server closed the connection and False when
    reading stopped because the receive buffer was full.
    """
    __slots__ = ()

    @property
    def truncated(self):
        return not self.closed

    def __str__(self):
        return cast_string(self.data)


def encode_request(action, message):
    """Frame a request as "<action> <length> <message>".

    The length is the byte length of the message before framing. Spaces in
    the message are sent as is; the server splits on the first two only.
    """
    if action not in ACTIONS:
        raise Error('Invalid action: {0}'.format(action))
    message = cast_bytes(message)
    return cast_bytes(action) + b' ' + cast_bytes(len(message)) + b' ' + message


def connect(host, port, logger=None):
    logger = logger or log
    try:
        candidates = socket.getaddrinfo(host, port, socket.AF_UNSPEC, socket.SOCK_STREAM)
    except (socket.gaierror, UnicodeError) as e:
        raise ResolutionError('Could not resolve {0}:{1}: {2}'.format(host, port, e), e)

    last_error = None
    for family, socket_type, proto, canonname, address in candidates:
        try:
            sock = socket.socket(family, socket_type, proto)
        except socket.error as e:
            logger.debug('Could not open socket for %s: %s', address, e)
            last_error = e
            continue
        try:
            sock.connect(address)
        except socket.error as e:
            sock.close()
            logger.debug('Could not connect to %s: %s', address, e)
            last_error = e
            continue
        logger.info('Connected to %s', address)
        return sock

    raise ConnectionError('Failed to connect to {0}:{1}'.format(host, port), last_error)


def send_request(sock, payload, logger=None):
    logger = logger or log
    try:
        sent = send_with_retry(sock, payload)
    except socket.error as e:
        raise SendError('Send failed: {0}'.format(e), e)
    logger.debug('Sent %d bytes: %r', sent, payload)
    return sent


def receive_response(sock, buffer_size=DEFAULT_BUFFER_SIZE, logger=None):
    """Read until the server closes the connection or the buffer is full.

    One slot of `buffer_size` is reserved for the terminator, so at most
    `buffer_size - 1` bytes are kept. Anything the server sends past that
    is left unread.
    """
    logger = logger or log
    if buffer_size < 1:
        raise Error('Receive buffer size must be at least 1')
    capacity = buffer_size - 1
    data = b''
    closed = False
    while len(data) < capacity:
        try:
            new_data = recv_with_retry(sock, capacity - len(data))
        except socket.error as e:
            raise ReceiveError('Receive failed: {0}'.format(e), e)
        if not new_data:
            closed = True
            break
        data += new_data
    if not closed:
        logger.debug('Receive buffer full after %d bytes', len(data))
    logger.debug('Received %d bytes', len(data))
    return Response(data, closed)


class Session(object):
    INIT = 'init'
    RESOLVING = 'resolving'
    CONNECTED = 'connected'
    SENDING = 'sending'
    RECEIVING = 'receiving'
    CLOSED = 'closed'
    FAILED = 'failed'

    def __init__(self, config, buffer_size=DEFAULT_BUFFER_SIZE, logger=None):
        self.config = config
        self.buffer_size = buffer_size
        self.log = logger or log
        self.state = self.INIT
        self.sock = None
        self.response = None

    def __enter__(self):
        return self

    # noinspection PyUnusedLocal
    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def run(self):
        if self.state != self.INIT:
            raise Error('Session has already been used')
        config = self.config
        try:
            payload = encode_request(config.action, config.message)
            self._set_state(self.RESOLVING)
            self.sock = connect(config.host, config.port, self.log)
            self._set_state(self.CONNECTED)
            self._set_state(self.SENDING)
            send_request(self.sock, payload, self.log)
            self._set_state(self.RECEIVING)
            response = receive_response(self.sock, self.buffer_size, self.log)
        except Exception:
            self._set_state(self.FAILED)
            raise
        finally:
            self.close()
        self._set_state(self.CLOSED)
        self.response = response
        return response

    def _set_state(self, state):
        self.log.debug('Session %s -> %s', self.state, state)
        self.state = state

    def close(self):
        if self.sock:
            self.sock.close()
            self.sock = None


def request(config, buffer_size=DEFAULT_BUFFER_SIZE, logger=None):
    with Session(config, buffer_size, logger) as session:
        return session.run()


from tcp_client import utils
Error = utils.Error
ResolutionError = utils.ResolutionError
ConnectionError = utils.ConnectionError
SendError = utils.SendError
ReceiveError = utils.ReceiveError
