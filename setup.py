# -*- coding: utf-8 -*-
import os
import re


from setuptools import setup, find_packages


DISTNAME = "scikit-polystats"

PACKAGE_NAME = "polystats"

DESCRIPTION = "A Python package for computing population genetics summary statistics from sequence alignments."

MAINTAINER = "polystats developers"

MAINTAINER_EMAIL = "polystats@googlegroups.com"

URL = "https://github.com/polystats/scikit-polystats"

DOWNLOAD_URL = "http://pypi.python.org/pypi/scikit-polystats"

LICENSE = "MIT"

INSTALL_REQUIRES = ["numpy", "biopython"]

EXTRAS_REQUIRE = {
    "test": [
        "pytest",
    ]
}

CLASSIFIERS = [
    "Development Status :: 4 - Beta",
    "License :: OSI Approved :: MIT License",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python",
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Topic :: Scientific/Engineering :: Bio-Informatics",
    "Operating System :: Microsoft :: Windows",
    "Operating System :: POSIX",
    "Operating System :: Unix",
    "Operating System :: MacOS",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3.9",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
]


def read_version():
    path = os.path.join(os.path.dirname(__file__), PACKAGE_NAME, "version.py")
    with open(path) as f:
        match = re.search(r"^version = '([^']+)'", f.read(), re.M)
    return match.group(1)


def setup_package():
    metadata = dict(
        name=DISTNAME,
        version=read_version(),
        maintainer=MAINTAINER,
        maintainer_email=MAINTAINER_EMAIL,
        description=DESCRIPTION,
        license=LICENSE,
        url=URL,
        download_url=DOWNLOAD_URL,
        package_dir={"": "."},
        packages=find_packages(include=[PACKAGE_NAME, PACKAGE_NAME + ".*"]),
        classifiers=CLASSIFIERS,
        install_requires=INSTALL_REQUIRES,
        extras_require=EXTRAS_REQUIRE,
        zip_safe=False,
    )
    setup(**metadata)


if __name__ == "__main__":
    setup_package()
