# This should be only one line. If it must be multi-line, indent the second
# line onwards to keep the PKG-INFO file format intact.
"""A file-backed encrypted secret store with per-service access tokens.
"""

from setuptools import find_packages, setup

version = open("src/strongbox/version.txt").read().strip()

setup(
    name="strongbox",
    version=version,
    install_requires=[
        "ConfigUpdater",
        "cryptography",
        "py", ],
    extras_require={
        "test": [
            "mock",
            "pytest",
            "pytest-cov",
            "pytest-instafail",
            "pytest-timeout", ]},
    entry_points="""
        [console_scripts]
            strongbox = strongbox.main:main
    """,
    license="BSD (2-clause)",
    keywords="secrets encryption",
    classifiers="""\
License :: OSI Approved :: BSD License
Programming Language :: Python
Programming Language :: Python :: 3
Programming Language :: Python :: 3.9
Programming Language :: Python :: 3.10
Programming Language :: Python :: 3.11
Programming Language :: Python :: 3.12
Programming Language :: Python :: 3 :: Only
"""[:-1].split("\n"),
    description=__doc__.strip(),
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    packages=find_packages("src"),
    package_dir={"": "src"},
    include_package_data=True,
    zip_safe=False,
    python_requires=">=3.9")
