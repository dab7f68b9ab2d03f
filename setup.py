#!/usr/bin/env python
from setuptools import setup

requires = ['func_prototypes', 'docopt', 'tabulate']
test_requires = ['pytest']

setup(
    name='xducers',
    version='0.1.0',
    author='Andrew Thomson',
    author_email='athomsonguy@gmail.com',
    packages=['xducers'],
    install_requires = requires,
    extras_require = {'test': test_requires},
    entry_points = {
      'console_scripts': [
        'xducers-bench = xducers.bench:main',
        ],
    },
    license='MIT',
    description='composable transducers with early termination, for single pass reductions.',
    long_description_content_type='text/markdown',
    long_description=open('README.md').read(),
    classifiers=[
        'Development Status :: 4 - Beta',
        'License :: OSI Approved :: MIT License',
        'Topic :: Software Development :: Libraries',
        'Programming Language :: Python :: 3',
    ],
)
