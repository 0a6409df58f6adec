#!/usr/bin/env python

import setuptools

with open("README.md", "r") as fh:
    long_description = fh.read()

setuptools.setup(name='divisible',
      version='0.1.0',
      description='Derived divide capabilities for Python records',
      long_description=long_description,
      long_description_content_type="text/markdown",
      packages=setuptools.find_packages(exclude=["tests", "tests.*"]),
      install_requires=[
          "numpy",
          "pandas",
          ],
      extras_require={
          "test": ["pytest"],
          },
      classifiers=[
          "Programming Language :: Python :: 3",
          "License :: OSI Approved :: BSD License",
          "Operating System :: OS Independent",
          ],
      python_requires='>=3.8',
      )
