from setuptools import find_namespace_packages, setup

# Physical structure matches import path (wavr is a namespace package)
packages = find_namespace_packages(where="../..", include=["wavr.core", "wavr.core.*"])

setup(
    name="wavr-core",
    packages=packages,
    package_dir={"": "../.."},
    install_requires=[
        "numpy>=1.26",
        "pillow>=10.0",
        "pydantic>=2.5",
        "PyYAML>=6.0",
        "soundfile>=0.12",
        "librosa>=0.10",
    ],
)
