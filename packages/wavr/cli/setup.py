from setuptools import find_namespace_packages, setup

# Physical structure matches import path (wavr is a namespace package)
packages = find_namespace_packages(where="../..", include=["wavr.cli", "wavr.cli.*"])

setup(
    name="wavr-cli",
    packages=packages,
    package_dir={"": "../.."},
    install_requires=["wavr-core", "rich>=13.0"],
    entry_points={"console_scripts": ["wavr=wavr.cli.main:main"]},
)
