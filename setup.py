# setup.py
from setuptools import setup, find_packages

setup(
    name="psi",
    version="0.1.0",
    description="A read-eval-print loop for a minimal S-expression language",
    packages=find_packages(include=["psi", "psi.*"]),
    python_requires=">=3.10",
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    entry_points={
        "console_scripts": ["psi = psi.__main__:main"],
    },
    zip_safe=False,
)
