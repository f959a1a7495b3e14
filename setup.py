"""
Article Query - Filter, sort and paginate article collections
Setup configuration for pip installation
"""

from setuptools import setup, find_packages
from pathlib import Path

# Read README for long description
readme_path = Path(__file__).parent / "README.md"
long_description = readme_path.read_text() if readme_path.exists() else ""

setup(
    name="article-query",
    version="1.0.0",
    description="Dynamic filter, sort and pagination engine for article collections",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["article_query", "article_query.*"]),
    python_requires=">=3.11",
    install_requires=[
        "fastapi>=0.104.1,<0.137",
        "uvicorn[standard]>=0.24.0",
        "pydantic>=2.5.0",
        "pydantic-settings>=2.1.0",
        "PyYAML>=6.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.4.3",
            "httpx>=0.25.1",
        ]
    },
    entry_points={
        "console_scripts": [
            "article-query=article_query.cli:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3.11",
        "License :: OSI Approved :: MIT License",
    ],
)
