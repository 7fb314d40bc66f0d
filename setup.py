#!/usr/bin/env python

from pathlib    import Path
from setuptools import setup

with open(f'{Path(__file__).parent}/requirements.txt', 'r') as f:
   pip_dependencies = [l.strip() for l in f.readlines() if l.strip() != '']

setup(
   name='prime_frames',
   version='1.0.0',
   author='Adrian Roefer',
   author_email='aroefer@cs.uni-freiburg.de',
   packages=['prime_frames'],
   package_dir={'': 'src'},
   url='http://pypi.python.org/pypi/prime_frames/',
   license='LICENSE',
   description='State dependent reference frames with cached spatial queries.',
   install_requires=pip_dependencies,
   extras_require={'test': ['pytest']}
)
