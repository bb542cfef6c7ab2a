"""setuptools setup for chronokit.

Install for development:
    pip install -e ".[test]"
"""

from setuptools import setup

setup(
    name="chronokit",
    version="0.1.0",
    description="Stopwatch and cancellable countdown primitives on the Qt event loop",
    packages=["chronokit", "chronokit.timer"],
    python_requires=">=3.10",
    install_requires=["PyQt6"],
    extras_require={"test": ["pytest"]},
    entry_points={"console_scripts": ["chronokit-demo = chronokit.__main__:main"]},
)
