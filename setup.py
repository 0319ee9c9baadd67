from setuptools import setup, find_packages

setup(
    name="giteasy",
    version="1.0.0",
    description="Find beginner-friendly GitHub issues and watch repositories for new ones",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.10",
    install_requires=[
        "aiohttp>=3.9.0",
        "rich>=13.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "pytest-asyncio>=0.23",
        ],
    },
    entry_points={
        "console_scripts": [
            "giteasy=giteasy.main:main",
        ],
    },
)
