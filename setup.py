"""Setup file for the chat relay package."""

from setuptools import setup, find_packages

setup(
    name="chat-relay",
    version="0.1.0",
    packages=find_packages(include=["chat_relay", "chat_relay.*"]),
    install_requires=[
        "boto3>=1.28",
        "botocore>=1.31",
        "pydantic>=2.5",
        "pydantic-settings>=2.1",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
            "pytest-asyncio>=0.23",
            "python-dotenv>=1.0",
        ],
    },
    python_requires=">=3.9",
)
