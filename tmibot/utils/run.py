## run.py
# Run a greeting bot.
import asyncio
import logging
import sys

from .. import Error
from . import _args

GREETING = 'Hello everyone, I just joined the chat!'


def setup_greeter(bot):
    """ Echo chat to stdout, say hi to whoever talks and greet the channel on join. """
    async def on_message(sender, text):
        print('{}: {}'.format(sender, text))
        await bot.message('Hi @{}'.format(sender))

    async def on_join():
        await bot.message(GREETING)

    bot.bind_on_receive_message(on_message)
    bot.bind_on_join_channel_chat(on_join)
    return bot


def main(argv=None):
    bot, channel = _args.bot_from_args('tmibot', description='Greet everyone talking in a Twitch channel.', argv=argv)
    setup_greeter(bot)

    try:
        asyncio.run(bot.connect_to(channel))
    except Error as e:
        logging.getLogger(__name__).error('%s', e)
        return 1
    except KeyboardInterrupt:
        pass
    return 0


if __name__ == '__main__':
    sys.exit(main())
