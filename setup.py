#!/usr/bin/env python3

from setuptools import setup

setup(
    name='duke',
    version='0.1.0',
    description='A personal task-tracking assistant for the terminal.',
    license='MIT',
    python_requires='>=3.8',
    packages=['duke'],
    install_requires=[
        'tzlocal>=2.1',
        'python-dateutil>=2.8',
        'pyyaml>=5.4',
        'rich>=10.2',
        'watchdog>=2.1'
    ],
    extras_require={
        'test': ['pytest>=7.0']
    },
    include_package_data=True,
    entry_points={
        'console_scripts': 'duke=duke.duke:main'
    },
    keywords='cli task todo deadline utility',
    classifiers=[
        'Development Status :: 3 - Alpha',
        'Environment :: Console',
        'Intended Audience :: End Users/Desktop',
        'Natural Language :: English',
        'Operating System :: POSIX',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3 :: Only',
        'Topic :: Office/Business',
        'Topic :: Utilities'
    ]
)
