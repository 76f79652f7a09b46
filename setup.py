# -*- coding: utf-8 -*-

from setuptools import setup, find_packages


setup(
    name="mod2mus",
    version="0.1.0",
    description="Convert ProTracker MOD files to the Psycho Pinball / Micro Machines 2 MUS music format",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tools"]),
    python_requires=">=3.8",
    install_requires=[
        "more-itertools",
    ],
    extras_require={
        "test": ["parameterized", "pytest"],
    },
    entry_points={"console_scripts": ["mod2mus = mod2mus.convert:main"]},
    scripts=["tools/musDump.py"],
    classifiers=[
        "Environment :: Console",
        "Intended Audience :: Developers",
        'License :: OSI Approved :: BSD License',
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: Implementation :: CPython",
    ],
)
