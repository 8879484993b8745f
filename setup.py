# setup.py
from setuptools import setup, find_packages

setup(
    name="sable",
    version="0.3.0",
    description="A small Scheme: reader, tree-walking evaluator and self-hosted macros",
    packages=find_packages(include=["sable", "sable.*"]),
    package_data={"sable": ["prelude/*.scm"]},
    python_requires=">=3.10",
    extras_require={"test": ["pytest", "hypothesis"]},
    entry_points={"console_scripts": ["sable = sable.__main__:main"]},
    zip_safe=False,
)
