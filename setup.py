from setuptools import find_packages, setup

setup(
    name="arrayproto",
    version="0.1.0",
    description="JavaScript array iteration semantics (map, forEach, filter, reduce) for Python",
    packages=find_packages(include=["arrayproto", "arrayproto.*"]),
    python_requires=">=3.10",
    entry_points={
        "console_scripts": [
            "arrayproto=arrayproto.cli:main",
        ],
    },
)
