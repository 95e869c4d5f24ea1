from setuptools import setup, find_packages

setup(
    name="codemap",
    version="1.0.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.9",
    install_requires=[
        "pyyaml",
        # Dependency graph snapshot
        "networkx>=3.0",
        # Area globs and ignore rules
        "pathspec>=0.10",
        "tqdm>=4.60",
    ],
    extras_require={
        "tests": [
            "pytest",
        ],
    },
    entry_points={
        "console_scripts": [
            "codemap=codemap.cli:main",
        ],
    },
    author="Uday Kanth",
    description="Project map, feature areas and fuzzy file lookup for JavaScript/TypeScript projects.",
)
