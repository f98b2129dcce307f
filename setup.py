from setuptools import setup, find_namespace_packages

setup(
    name="booknest",
    version="0.1.0",
    packages=find_namespace_packages(include=['cli*', 'core*', 'api*']),
    include_package_data=True,
    python_requires=">=3.11",
    install_requires=[
        "Click",
        "SQLAlchemy>=2.0",
        "requests",
        "Pillow",
        "fastapi",
        "pydantic>=2",
        "uvicorn",
        "python-jose[cryptography]",
        "python-dotenv",
        "python-multipart",
    ],
    extras_require={
        "test": [
            "pytest",
            "httpx",
        ],
    },
    entry_points={
        "console_scripts": [
            "booknest=cli.main:main",
        ],
    },
)
