from setuptools import setup, find_packages

setup(
    name="scan-result-cache",
    version="0.1.0",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        "pytz",
        "requests",
        "semver",
        "tenacity",
        "typer",
    ],
    extras_require={
        "dev": [
            "pytest",
            "pytest-cov",
            "pytest-mock",
            "mypy",
            "black",
            "types-pytz",
            "types-requests",
        ],
    },
    entry_points={
        "console_scripts": [
            "scan-result-cache=scan_result_cache.cli.main_cli:app",
        ],
    },
    author="Damian Vicino",
    author_email="damian.vicino@datadoghq.com",
    description="A provenance-aware cache for license and copyright scan results",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    url="https://github.com/DataDog/scan-result-cache",
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.10",
)
