#!/usr/bin/python

import os
from setuptools import setup, find_packages

package = "netconf_transport"
setup_dir = os.path.dirname(os.path.abspath(__file__))
version_file = os.path.join(setup_dir, package, "VERSION")

with open(version_file) as version_file:
    version = version_file.read().strip()

requirements = open(os.path.join(setup_dir, "requirements.txt")).read().splitlines()
required = [line for line in requirements if line and not line.startswith("-")]

with open(os.path.join(setup_dir, "README.md"), "r") as fh:
    long_description = fh.read()

setup(
    name=package,
    version=version,
    description="NETCONF message framing over duplex byte streams",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["test"]),
    install_requires=required,
    extras_require={"test": ["pytest", "mock"]},
    include_package_data=True,
    package_data={package: ["VERSION"]},
    python_requires=">=3.7",
    keywords="netconf",
    classifiers=[
        "Development Status :: 5 - Production/Stable",
        "Operating System :: OS Independent",
        "Intended Audience :: Telecommunications Industry",
        "License :: OSI Approved :: Apache Software License",
        "Programming Language :: Python :: 3",
    ],
)
