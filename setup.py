from setuptools import setup, find_packages


with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="runsummary",
    version="0.1.0",
    description="Execution-result aggregation and summary reports for test plans.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    packages=find_packages(exclude=("tests", "tests.*")),
    package_data={"runsummary.schemas": ["*.json"]},
    python_requires=">=3.10",
    install_requires=["networkx", "PyYAML", "jsonschema"],
    extras_require={"dev": ["pytest"]},
    entry_points={"console_scripts": ["runsummary=runsummary.cli:main"]},
)
