from setuptools import setup, find_packages

setup(
    name="timestats",
    version="0.1.0",
    description="Hierarchical wall-clock timing statistics with colored reports",
    packages=find_packages(exclude=["tests", "tests.*"]),
    py_modules=["run_profile"],
    python_requires=">=3.10",
    install_requires=[
        "numpy>=1.24.0",
        "pandas>=2.0.0",
        "pyyaml>=6.0",
        "python-dotenv>=1.0.0",
        "rich>=13.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "pytest-mock>=3.10",
        ],
    },
)
