from setuptools import setup

from fs2csv.version import __version__

setup(
    name="fs2csv",
    version=__version__,
    author="Ceshine Lee",
    author_email="ceshine@ceshine.net",
    description="Export Firestore collections into CSV files",
    license="Apache License, Version 2.0",
    url="",
    packages=['fs2csv'],
    install_requires=[
        "google-cloud-firestore>=2.11,<3",
        "typer>=0.9",
        "polars>=0.20"
    ],
    extras_require={
        "test": ["pytest", "pytest-mock"]
    },
    entry_points={
        "console_scripts": ["fs2csv=fs2csv.cli:main"]
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "License :: OSI Approved :: Apache Software License",
        "Programming Language :: Python :: 3"
    ],
    keywords="firestore csv export"
)
