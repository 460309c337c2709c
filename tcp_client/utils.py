import errno
import socket
import select

__author__ = 'tcp_client developers'

# errors that mean "try again once the socket is ready", not failure
retry_errors = frozenset((errno.EAGAIN, errno.EWOULDBLOCK, errno.EINTR))


class Error(RuntimeError):
    phase = None

    def __init__(self, message, last_error=None):
        self.last_error = last_error
        super(Error, self).__init__(message)


class ResolutionError(Error):
    phase = 'resolve'


# noinspection PyShadowingBuiltins
class ConnectionError(Error):
    phase = 'connect'


class SendError(Error):
    phase = 'send'


class ReceiveError(Error):
    phase = 'receive'


def cast_bytes(s, encoding='utf8'):
    """cast unicode or bytes to bytes"""
    if isinstance(s, bytes):
        return s
    return str(s).encode(encoding)


def cast_string(s, encoding='utf8', errors='replace'):
    """cast bytes or unicode to unicode.
      errors options are strict, ignore or replace"""
    if isinstance(s, bytes):
        return s.decode(encoding, errors=errors)
    return str(s)


def recv_with_retry(sock, size=1024):
    while True:
        try:
            return sock.recv(size)
        except socket.error as e:
            if e.errno in retry_errors:
                select.select([sock], [], [])
            else:
                raise


def send_with_retry(sock, data):
    sent_total = 0
    while data:
        try:
            sent = sock.send(data)
            if sent:
                data = data[sent:]
                sent_total += sent
        except socket.error as e:
            if e.errno in retry_errors:
                select.select([], [sock], [])
            else:
                raise
    return sent_total
