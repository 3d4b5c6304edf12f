"""
Setup script for report-renderer project.

Allows development installation with `pip install -e .`
"""

from setuptools import setup, find_packages

setup(
    name="report-renderer",
    version="0.1.0",
    packages=find_packages(include=["src", "src.*", "render_service", "render_service.*"]),
    py_modules=["version"],
    python_requires=">=3.11",
    install_requires=[
        "fastapi>=0.110",
        "pydantic>=2.5",
        "pydantic-settings>=2.1",
        "python-dotenv>=1.0",
        "pymongo>=4.6",
        "playwright>=1.40",
        "uvicorn>=0.27",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
            "pytest-asyncio>=0.23",
            "httpx>=0.26",
        ],
    },
)
