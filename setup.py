from setuptools import setup, find_packages


with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="seedreport",
    version="0.3.0",
    description="Function-mapping and subsystem-role reports for CoreSEED data directories.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Topic :: Scientific/Engineering :: Bio-Informatics",
    ],
    packages=find_packages(exclude=("tests", "tests.*")),
    python_requires=">=3.10",
    install_requires=["PyYAML", "pandas"],
    extras_require={"test": ["pytest"]},
    tests_require=["pytest"],
    entry_points={"console_scripts": ["seedreport=seedreport.cli:main"]},
)
