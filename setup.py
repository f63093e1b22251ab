from setuptools import setup

setup(
    name='tmibot',
    version='0.1.0',
    packages=[
        'tmibot',
        'tmibot.utils'
    ],
    install_requires=[],
    extras_require={
        'docs': 'sphinx_rtd_theme',    # the Sphinx theme we use
        'tests': [
            'pytest',                  # collect and run tests
            'pytest-asyncio'           # run coroutine tests
        ],
        'coverage': 'pytest-cov'       # get test case coverage
    },
    entry_points={
        'console_scripts': [
            'tmibot = tmibot.utils.run:main'
        ]
    },

    keywords='irc twitch chat bot library python3 asyncio',
    description='A minimal Twitch chat bot client for Python 3.',
    license='BSD',

    zip_safe=True,
    test_suite='tests'
)
