"""
Setup script for the pitch-prep project.

Allows development installation with `pip install -e .`
"""

from setuptools import setup, find_packages

setup(
    name="pitch-prep",
    version="0.1.0",
    packages=find_packages(include=["pitchprep", "pitchprep.*"]),
    python_requires=">=3.11",
    install_requires=[
        "pymongo>=4.6",
        "pydantic>=2.5",
        "python-dotenv>=1.0",
        "langchain-core>=0.3",
        "langchain-openai>=0.2",
        "openai>=1.40",
        "tenacity>=8.2",
        "json-repair>=0.25",
        "fastapi>=0.110",
        "uvicorn>=0.27",
    ],
    extras_require={
        "test": [
            "pytest>=8.0",
            "pytest-asyncio>=0.23",
            "httpx>=0.27",
        ],
    },
)
