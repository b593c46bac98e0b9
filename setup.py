#!/usr/bin/env python

from setuptools import setup

setup(name="pktview",
	version="1.0",
	description="pktview: decode raw packet bytes into per-layer views and encode them back",
	license="GPLv2",
	packages=[
		"pktview",
		"pktview.layer12",
		"pktview.layer3",
		"pktview.layer4"
	],
	classifiers=[
		"Development Status :: 5 - Production/Stable",
		"Intended Audience :: Developers",
		"License :: OSI Approved :: GNU General Public License v2 (GPLv2)",
		"Natural Language :: English",
		"Programming Language :: Python :: 3",
		"Programming Language :: Python :: Implementation :: CPython",
		"Programming Language :: Python :: Implementation :: PyPy"
	],
	python_requires=">=3.6"
)
