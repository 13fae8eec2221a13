import re

from setuptools import find_packages, setup


with open("sota/__init__.py", "rb") as fh:
    init_text = fh.read().decode()
    VERSION = re.search(r"__version__ = \"(.*?)\"", init_text).group(1)

setup(
    name="sota",
    version=VERSION,
    packages=find_packages(
        exclude=["tests", "tests.*", "examples", "examples.*"]
    ),
    python_requires=">=3.6.0",
    install_requires=[],
    extras_require={
        "test": ["pytest"],
    },
    license="MIT",
    description="A tiny terminal text editor, drawing with vt100 escape sequences in raw mode.",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    zip_safe=True,
    entry_points={
        "console_scripts": [
            "sota = sota:cli",
        ],
    },
)
