## _args.py
# Common argument parsing code.
import argparse
import logging
import tmibot


def bot_from_args(name, description, cls=tmibot.Bot, argv=None):
    # Parse some arguments.
    parser = argparse.ArgumentParser(name, description=description, add_help=False,
        epilog='This program is part of {package}.'.format(package=tmibot.__name__))

    meta = parser.add_argument_group('Meta')
    meta.add_argument('-h', '--help', action='help', help='What you are reading right now.')
    meta.add_argument('-v', '--version', action='version', version='{package}/%(prog)s {ver}'.format(package=tmibot.__name__, ver=tmibot.__version__), help='Dump version number.')
    meta.add_argument('-V', '--verbose', help='Be verbose in warnings and errors.', action='store_true', default=False)
    meta.add_argument('-d', '--debug', help='Show debug output.', action='store_true', default=False)

    init = parser.add_argument_group('Initialization')
    init.add_argument('username', help='Login name of the bot account.', metavar='USERNAME')
    # Chat tokens can be obtained from https://twitchapps.com/tmi/
    init.add_argument('password', help='Chat OAuth token, including the "oauth:" prefix.', metavar='PASSWORD')
    init.add_argument('channel', help='Channel to join, without the leading #.', metavar='CHANNEL')

    args = parser.parse_args(argv)

    # Set log level.
    if args.debug:
        log_level = logging.DEBUG
    elif args.verbose:
        log_level = logging.INFO
    else:
        log_level = logging.WARNING

    logging.basicConfig(level=log_level, format='%(asctime)s [%(name)s] %(levelname)s: %(message)s')

    bot = cls(args.username, args.password)
    return bot, args.channel
