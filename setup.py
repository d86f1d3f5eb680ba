"""
Setup script for BitAnomalyFinder, with optional Cython compilation of hot paths.

The pure-Python centre expansion used by the palindrome detector (and the
unique-palindrome boundary suggestion) is the main interpreter-bound loop.
Compiling it in place gives the same module name, so nothing else changes:

Usage:
    pip install -e .
    python setup.py build_ext --inplace

If Cython is not available, the package runs as plain Python.
"""

from setuptools import setup, find_packages, Extension
from setuptools.command.build_ext import build_ext
import sys

# Try to import Cython
try:
    from Cython.Build import cythonize
    USE_CYTHON = True
except ImportError:
    USE_CYTHON = False


class BuildExtWithFallback(build_ext):
    """Custom build_ext that gracefully handles Cython compilation failures."""

    def run(self):
        try:
            super().run()
        except Exception as e:
            print(f"Warning: Cython compilation failed: {e}")
            print("Continuing with the pure Python modules")

    def build_extension(self, ext):
        try:
            super().build_extension(ext)
        except Exception as e:
            print(f"Warning: Failed to build extension {ext.name}: {e}")


def get_extensions():
    """Get list of extensions to compile with Cython."""
    if not USE_CYTHON:
        return []
    return [
        Extension(
            "Detectors.palindrome.detector",
            ["Detectors/palindrome/detector.py"],
            language="c",
        ),
    ]


# Only run Cython compilation if requested
if USE_CYTHON and 'build_ext' in sys.argv[1:]:
    extensions = cythonize(
        get_extensions(),
        compiler_directives={
            'language_level': "3",
            'embedsignature': True,
            'boundscheck': False,
            'wraparound': False,
        }
    )
else:
    extensions = []

setup(
    name='BitAnomalyFinder',
    version='2026.1',
    description='Pattern anomaly and ideality detection for bit-string payloads',
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires='>=3.8',
    install_requires=[
        'numpy>=1.21',
        'pandas>=1.3',
    ],
    extras_require={
        'test': ['pytest>=7.0'],
        'cython': ['cython>=0.29'],
    },
    entry_points={
        'console_scripts': [
            'bitscanner=Utilities.bitscanner:main',
        ],
    },
    ext_modules=extensions,
    cmdclass={'build_ext': BuildExtWithFallback},
    zip_safe=False,
)
