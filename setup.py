"""Setup configuration for Relay LLM SDK."""

from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="relay-llm-sdk",
    version="0.1.0",
    author="Relay Team",
    author_email="team@relay-llm.dev",
    description="Streaming normalization for LLM providers: one canonical event stream for every upstream",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/relay-llm/relay-llm-sdk",
    packages=find_packages(include=["relay_llm_sdk", "relay_llm_sdk.*"]),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    python_requires=">=3.9",
    install_requires=[
        "pydantic>=2.0.0",
        "openai>=1.0.0",
        "anthropic>=0.18.0",
        "google-genai>=1.0.0",
        "httpx>=0.24.0",
        "python-dotenv>=1.0.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-asyncio>=0.21.0",
            "pytest-cov>=4.0.0",
            "black>=23.0.0",
            "ruff>=0.1.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "relay-llm=relay_llm_sdk.cli:main",
        ],
    },
)
