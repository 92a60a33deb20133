#!/usr/bin/env python
"""restdns setup.py.
"""

import setuptools


def _read_requires(filename):
    reqs = []
    with open(filename) as f:
        for line in f:
            req = line.split('#', 1)[0].strip()
            if req:
                reqs.append(req)
    return reqs


setuptools.setup(
    name='restdns',
    version='1.0',
    description='REST API for DNS records stored in a FreeIPA directory',
    packages=setuptools.find_packages(include=['restdns', 'restdns.*']),
    package_data={
        'restdns': ['etc/*.yml', 'etc/logging/*.yml'],
    },
    install_requires=_read_requires('requirements.txt'),
    extras_require={
        'test': ['pytest', 'mock'],
    },
    entry_points={
        'console_scripts': [
            'restdns = restdns.console:run',
        ],
    },
)
