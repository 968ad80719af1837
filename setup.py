from setuptools import setup, find_packages

setup(
    name = "usbtree",
    version = "0.1",
    description = "USB device tree profiler and class descriptor decoder for libusb-1",
    author = "Nicolas Pouillon",
    author_email = "nipo@ssji.net",
    license = "BSD",
    classifiers = [
        "Development Status :: 4 - Beta",
        "Programming Language :: Python",
    ],
    packages = find_packages(exclude = ["tests"]),
    python_requires = ">=3.10",
    install_requires = ["libusb1"],
    extras_require = {
        "test": ["pytest"],
    },
)
