# setup.py
from setuptools import find_packages, setup

setup(
    name="city-explorer-api",
    version="0.1.0",
    packages=find_packages(include=["city_explorer", "city_explorer.*"]),
    python_requires=">=3.10",
    install_requires=[
        "fastapi>=0.110",
        "uvicorn[standard]>=0.27",
        "sqlalchemy[asyncio]>=2.0",
        "asyncpg>=0.29",
        "pydantic>=2.5",
        "pydantic-settings>=2.1",
        "httpx>=0.27",
        "structlog>=24.1",
        "sentry-sdk>=1.40",
        "limits>=3.7",
    ],
    extras_require={
        "test": [
            "pytest>=8.0",
            "pytest-asyncio>=0.23",
            "aiosqlite>=0.19",
            "python-dotenv>=1.0",
        ],
    },
    entry_points={
        "console_scripts": ["city-explorer=city_explorer.__main__:main"],
    },
)
