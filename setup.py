# setup.py
from setuptools import setup, find_packages

setup(
    name="expense-ledger",
    version="0.1.0",
    description="A local SQLite expense ledger with weekly and monthly totals",
    author="Your Name",
    author_email="you@example.com",
    url="https://github.com/yourusername/expense-ledger",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.10",
    install_requires=[
        "click>=7.0",
        "pyyaml>=5.3",
        "python-dotenv>=0.19",
        "xlsxwriter>=3.0",
        "mcp>=1.0,<2",
        "anyio>=3.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "openpyxl>=3.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "ledger=expense_ledger.cli:main",
            "ledger-mcp=expense_ledger.mcp_server:main",
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
