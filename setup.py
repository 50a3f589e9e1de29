# setup.py
from setuptools import setup, find_packages

setup(
    name="sqlguard",
    version="0.1.0",
    description="Status-reporting query execution helpers over DB-API drivers",
    author="Swift Fox",
    packages=find_packages(
        exclude=(
            "tests",
            "tests.*",
            "docs",
            "dist",
            "build",
        )
    ),
    python_requires=">=3.10",
    extras_require={
        "postgres": ["psycopg2-binary>=2.9"],
        "test": ["pytest>=7"],
    },
)
