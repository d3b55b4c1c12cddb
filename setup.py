# setup.py
from setuptools import setup, find_packages

setup(
    name="scope_crawler",
    version="0.1.0",
    description="Асинхронный краулер ScopeCrawler с ограничением глубины и области обхода",
    packages=find_packages(exclude=("tests", "tests.*")),
    install_requires=[
        "aiohttp>=3.9",
        "beautifulsoup4>=4.12",
        "lxml>=4.9",
        "yarl>=1.9",
        "pydantic>=2.0",
        "PyYAML>=6.0",
        "click>=8.1",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
            "pytest-asyncio>=0.23",
        ],
    },
    entry_points={
        "console_scripts": [
            "scope-crawler=scope_crawler.cli:cli",
        ],
    },
    python_requires=">=3.11",
)
