from setuptools import setup, find_packages

setup(
    name="sleepstages",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={"sleepstages.catalog": ["config_stage_catalog.yaml"]},
    install_requires=[
        "loguru",
        "pandas",
        "PyYAML",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "sleepstages-catalog=sleepstages.catalog.create_catalog:main",
        ],
    },
    description="Sleep stage image catalog for the stage identification quiz.",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.8",
)
