from setuptools import find_packages, setup

setup(
    name="mesa_lite",
    packages=find_packages(include=["mesa_lite", "mesa_lite.*"]),
    version="0.1.0",
    description="A minimal agent-based modeling engine with Polars-backed data collection",
    license="MIT License",
    python_requires=">=3.11",
    install_requires=[
        "numpy",
        "polars",
        "beartype",
    ],
    extras_require={
        "examples": ["typer"],
        "test": [
            "pytest",
            "pytest-cov",
            "typer",
        ],
    },
)
