import tmibot
from .mocks import MockServer, MockConnection


def with_bot(username='bot1', password='oauth:xyz', cls=tmibot.Bot, **options):
    def inner(f):
        async def run():
            server = MockServer()
            bot = cls(username, password, connection=MockConnection(server), **options)

            try:
                return await f(bot=bot, server=server)
            finally:
                await bot.disconnect()

        run.__name__ = f.__name__
        return run
    return inner
