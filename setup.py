from setuptools import find_packages, setup

setup(
    name="shopdb",
    version="0.1.0",
    packages=find_packages(include=["shopdb", "shopdb.*"], exclude=["shopdb.tests"]),
    python_requires=">=3.9",
    install_requires=[
        "sqlalchemy>=2.0",
        "psycopg2-binary",
        "click",
        "python-dotenv"
    ],
    extras_require={"dev": ["pytest"]},
    entry_points={"console_scripts": ["shopdb=shopdb.cli.main:cli"]},
)
