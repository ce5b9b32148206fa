from setuptools import setup

from blockconf import (
    __title__,
    __description__,
    __url__,
    __version__,
    __author__,
    __license__,
    __copyright__,
)

with open('README.md') as f:
    readme = f.read()

with open('requirements.txt') as f:
    requirements = [
        line for line in f.read().splitlines()
        if line and not line.startswith('#')
    ]

kwargs = dict(

    name=__title__,
    version=__version__,
    description=__description__,
    long_description=readme,
    long_description_content_type='text/markdown',
    author=__author__,
    url=__url__,
    packages=[
        'blockconf'
    ],
    classifiers=[

        "Development Status :: 3 :: Alpha",
        "Environment :: Console",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Natural Language :: English",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
        "Topic :: Software Development :: Libraries :: Python Modules",
        "Topic :: Text Processing",
        "Topic :: Utilities",

    ],

    license=__license__,

    platforms="Platform Independent",

    install_requires=requirements,
    extras_require={
        'test': [
            'pytest>=7',
        ],
        'docs': [
            'sphinx',
            'sphinx_rtd_theme',
        ],
    },
    python_requires='>=3.12',

    entry_points={
        'console_scripts': [
            'blockconf = blockconf.__main__:main',
        ],
    },

    project_urls={
        'Source': __url__,
    }
)

setup(**kwargs)
