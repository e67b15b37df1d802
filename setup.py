# setup.py
from setuptools import setup, find_packages

setup(
    name="iot_registry",
    version="0.1.0",
    description="Deterministic content-addressed IoT asset registry over ordered key-value stores",
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
    install_requires=[
        "typing_extensions>=4.0",
    ],
    extras_require={
        "postgres": ["psycopg2-binary>=2.9"],
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "iot-registry=iot_registry.cli:main",
        ],
    },
)
