import codecs
import os
import re

from setuptools import setup, find_packages

here = os.path.abspath(os.path.dirname(__file__))


def read(*parts):
    return codecs.open(os.path.join(here, *parts), 'r').read()


def read_requirements(file_name):
    return [line.strip() for line in read(file_name).splitlines() if line.strip() and not line.startswith("#")]


def find_version(*file_paths):
    version_file = read(*file_paths)
    version_match = re.search(r"^__profiler_version__ = ['\"]([^'\"]*)['\"]", version_file, re.M)
    if version_match:
        return version_match.group(1)
    raise RuntimeError("Unable to find version string.")


setup(
    name="jstack_profiler",
    version=find_version("jstack_profiler", "__init__.py"),
    packages=find_packages(exclude=("test", "test.*", "benchmarking")),
    include_package_data=True,
    description="Finds the most sampled chain of calls in a jstack thread dump",
    long_description=read("README.md"),
    long_description_content_type="text/markdown",
    classifiers=[
        "Programming Language :: Python :: 3",
        "Development Status :: 4 - Beta",
        "Topic :: Utilities",
        "License :: OSI Approved :: Apache Software License"
    ],

    python_requires='>=3.6',
    install_requires=read_requirements("requirements.txt"),
    extras_require={
        "test": read_requirements("requirements-test.txt"),
        "benchmark": ["pyperf", "Pympler"]
    },
    entry_points={
        "console_scripts": ["jstack-profiler=jstack_profiler.__main__:main"]
    }
)
