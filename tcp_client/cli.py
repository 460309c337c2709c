import sys
import logging
from argparse import ArgumentParser, ArgumentTypeError
from tcp_client import (Config, Error, ACTIONS, DEFAULT_HOST, DEFAULT_PORT,
                        DEFAULT_BUFFER_SIZE, request)

__author__ = 'tcp_client developers'

log = logging.getLogger('tcp_client.cli')

failure_messages = {
    'resolve': 'Could not resolve host',
    'connect': 'Failed to connect',
    'send': 'Send failed',
    'receive': 'Receive failed',
}


def port_number(value):
    if not value or not value.isdigit():
        raise ArgumentTypeError("'{0}' is not a valid port".format(value))
    return value


def make_parser():
    parser = ArgumentParser('tcp_client', add_help=False,
                            description='Send a message to a text transform server and print the reply')
    parser.add_argument('--help', action='help', help='show this help message and exit')
    parser.add_argument('-v', '--verbose', action='store_true', help='log every step of the exchange')
    parser.add_argument('-h', '--host', default=DEFAULT_HOST,
                        help='server host name or address (default {0})'.format(DEFAULT_HOST))
    parser.add_argument('-p', '--port', default=DEFAULT_PORT, type=port_number,
                        help='server port (default {0})'.format(DEFAULT_PORT))
    parser.add_argument('action', choices=ACTIONS, metavar='ACTION',
                        help='one of {0}'.format(', '.join(ACTIONS)))
    parser.add_argument('message', metavar='MESSAGE', help='message to send, in "double quotes"')
    return parser


def parse_config(argv=None):
    args = make_parser().parse_args(argv)
    return Config(args.host, args.port, args.action, args.message), args.verbose


def main(argv=None):
    config, verbose = parse_config(argv)
    logging.basicConfig(level=logging.DEBUG if verbose else logging.ERROR)
    log.info('Host is %s, port is %s', config.host, config.port)

    try:
        response = request(config, DEFAULT_BUFFER_SIZE)
    except Error as e:
        log.error('%s: %s', failure_messages.get(e.phase, 'Request failed'), e)
        return 1

    sys.stdout.flush()
    sys.stdout.buffer.write(response.data + b'\n')
    sys.stdout.buffer.flush()
    return 0


def run():
    sys.exit(main())


if __name__ == '__main__':
    run()
