#!/usr/bin/python
from setuptools import setup, find_packages
import sys, os

from cosched import __version__ as version

setup(
    name='cosched',
    version=version,
    description='''
        Cooperative multitasking with generators and a select/poll driven
        socket readiness task, on a single thread.
    ''',
    long_description=open('README.txt').read(),
    author='Maries Ionel Cristian',
    author_email='ionel.mc@gmail.com',
    packages=['cosched', 'cosched.core', 'cosched.core.pollers'],
    zip_safe=True,
    python_requires='>=3.6',
    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: MIT License',
        'Operating System :: Microsoft :: Windows',
        'Operating System :: POSIX :: Linux',
        'Operating System :: POSIX :: BSD',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
        'Topic :: System :: Networking',
    ],
    test_suite='tests'
)
