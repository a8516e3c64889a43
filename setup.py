# setup.py
from setuptools import setup, find_packages

setup(
    name="wisp",
    version="0.1.0",
    description="Value model and reader for the Wisp Lisp dialect",
    packages=find_packages(include=["wisp", "wisp.*"]),
    python_requires=">=3.9",
    install_requires=[
        "numpy",
    ],
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    entry_points={
        "console_scripts": ["wisp=wisp.cli:main"],
    },
    zip_safe=False,
)
