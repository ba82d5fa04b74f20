# setup.py
from setuptools import setup, find_packages

setup(
    name="minipy",
    version="0.1.0",
    description="Tree-walking evaluator for a small Python-like language",
    packages=find_packages(include=["minipy", "minipy.*"]),
    python_requires=">=3.10",
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    zip_safe=False,
)
