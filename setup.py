# setup.py
from setuptools import setup, find_packages

setup(
    name="nslisp",
    version="0.1.0",
    description="An embeddable S-expression interpreter with namespaces, scopes and loop/recur",
    packages=find_packages(include=["nslisp", "nslisp.*"]),
    python_requires=">=3.10",
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    zip_safe=False,
)
