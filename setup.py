"""Setup script for the ecowatch package."""

from setuptools import find_packages, setup

setup(
    name="ecowatch",
    version="0.1.0",
    description="Environmental monitoring endpoint and forest health dashboards",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.9",
    install_requires=[
        "pyyaml",
        "python-dotenv",
        "aiohttp>=3.9",
        "rich",
    ],
    extras_require={
        "dev": [
            "pytest",
            "pytest-asyncio",
            "black",
            "isort",
            "mypy",
        ],
    },
    entry_points={
        "console_scripts": [
            "ecowatch-server=ecowatch.server:main",
            "ecowatch-live=ecowatch.display:live_main",
            "ecowatch-forest=ecowatch.display:forest_main",
        ],
    },
)
