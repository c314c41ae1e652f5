from setuptools import setup, find_packages
import pathlib


here = pathlib.Path(__file__).parent
try:
    long_description = (here / "README.md").read_text(encoding="utf-8")
except Exception:
    long_description = "FenwickViz — interactive simulator of a Fenwick tree (binary indexed tree)."

setup(
    name="fenwickviz",
    version="0.1.0",
    description="Interactive simulator of a Fenwick tree showing the cells touched by each query and update",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=("docs", "examples", "tests")),
    python_requires='>=3.10',
    install_requires=[
        "numpy",
        "pandas",
        "tqdm",
        "matplotlib",
    ],
    extras_require={
        "test": [
            "pytest",
        ]
    },
    entry_points={
        "console_scripts": [
            "fenwickviz=FenwickViz.__main__:main",
        ]
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3 :: Only",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    zip_safe=False,
)
