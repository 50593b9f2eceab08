from setuptools import setup, Extension
from Cython.Build import cythonize

# The hot path is plain Python; compiling it is an optional speed-up.
extensions = [
    Extension(
        "kmer_counter.utils",
        ["src/kmer_counter/utils.py"],
        include_dirs=[],
        language="c",
    )
]

ext_modules = cythonize(
    extensions,
    compiler_directives={
        'language_level': 3,
        'boundscheck': True,  # Enable bounds checking for safety
        'wraparound': False,
        'cdivision': True,
        'nonecheck': False,
    }
)
for extension in ext_modules:
    extension.optional = True

setup(
    ext_modules=ext_modules,
    zip_safe=False,
)
