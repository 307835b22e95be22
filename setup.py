import re

import setuptools

# Read the version without importing the package (its dependencies may not be installed yet)
with open("openwrtstats/__init__.py", "r") as fh:
    version_tuple = re.search(r"version_tuple = \((\d+), (\d+), (\d+)\)", fh.read()).groups()
__version__ = ".".join(version_tuple)

with open("README.md", "r") as fh:
    long_description = fh.read()

setuptools.setup(
    name="openwrtstats",
    version=__version__,
    author="openwrtstats",
    description="Aggregate uptime, wireless client and DHCP lease status from OpenWrt routers",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=setuptools.find_packages(exclude=["openwrtstats.tests", "openwrtstats.tests.*"]),
    package_data={"openwrtstats": ["static/*"]},
    include_package_data=True,
    install_requires=[
        'requests',
        'bs4',
        'fastapi',
        'uvicorn',
        'pydantic>=2',
        'pydantic-settings',
    ],
    extras_require={
        'test': [
            'pytest',
            'pytest-asyncio',
            'httpx',
        ],
    },
    entry_points={
        'console_scripts': ['openwrtstats=openwrtstats.__main__:main'],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
)
